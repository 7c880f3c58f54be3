"""Tests for the event emitter."""

from bjtrainer.game import EventEmitter, EventType


class TestEventEmitter:
    """Tests for subscribing to and emitting events."""

    def test_emit_to_typed_handler(self):
        emitter = EventEmitter()
        received = []
        emitter.subscribe(received.append, EventType.PLAYER_HIT)

        emitter.emit(EventType.PLAYER_HIT, hand_index=0)
        emitter.emit(EventType.PLAYER_STAND, hand_index=0)

        assert len(received) == 1
        assert received[0].event_type == EventType.PLAYER_HIT
        assert received[0].data == {"hand_index": 0}

    def test_catch_all_handler(self):
        emitter = EventEmitter()
        received = []
        emitter.subscribe(received.append)

        emitter.emit(EventType.PLAYER_HIT)
        emitter.emit(EventType.DEALER_BUSTS, hand_value=24)

        assert [event.event_type for event in received] == [
            EventType.PLAYER_HIT,
            EventType.DEALER_BUSTS,
        ]

    def test_typed_handlers_run_first(self):
        emitter = EventEmitter()
        order = []
        emitter.subscribe(lambda event: order.append("all"))
        emitter.subscribe(lambda event: order.append("typed"), EventType.ROUND_STARTED)

        emitter.emit(EventType.ROUND_STARTED)
        assert order == ["typed", "all"]

    def test_unsubscribe(self):
        emitter = EventEmitter()
        received = []
        unsubscribe = emitter.subscribe(received.append, EventType.CARD_DEALT)
        unsubscribe()
        unsubscribe()

        emitter.emit(EventType.CARD_DEALT, card="A♠")
        assert received == []

    def test_history_is_bounded(self):
        emitter = EventEmitter(history_size=3)
        for index in range(5):
            emitter.emit(EventType.CARD_DEALT, index=index)

        history = emitter.history
        assert [event.data["index"] for event in history] == [2, 3, 4]

        emitter.clear_history()
        assert emitter.history == []

    def test_event_str(self):
        event = EventEmitter().emit(EventType.BET_CHANGED, amount=25)
        assert str(event) == "BET_CHANGED: {'amount': 25}"
