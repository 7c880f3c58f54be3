"""Blackjack trainer round engine with a state machine."""

import dataclasses
import logging
from dataclasses import dataclass
from random import Random
from typing import Any, Callable

from transitions import Machine

from bjtrainer.cards import Card, Shoe, ShoeExhaustedError
from bjtrainer.counting import (
    BetRecommendation,
    CountLevel,
    betting_recommendation,
    count_level,
    get_counting_system,
    running_count,
    true_count,
)
from bjtrainer.game.events import EventEmitter, EventType, GameEvent
from bjtrainer.game.state import Phase
from bjtrainer.hand import Hand, add_card, empty_hand, evaluate_hand, should_dealer_hit
from bjtrainer.persistence import SettingsRecord, TrainerRepository, open_store
from bjtrainer.settlement import (
    HandResult,
    RoundSettlement,
    settle_naturals,
    settle_round,
)
from bjtrainer.statistics import Bankroll, GameStats, recommended_bet
from bjtrainer.strategy import (
    GameRules,
    PlayerAction,
    StrategyDecision,
    basic_strategy_decision,
)
from config import AppConfig, config

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class DecisionRecord:
    """A graded player decision."""

    player_hand: Hand
    dealer_card: Card
    action: PlayerAction
    correct_action: PlayerAction

    @property
    def was_correct(self) -> bool:
        return self.action == self.correct_action


@dataclass(frozen=True)
class RoundSnapshot:
    """Read-only view of the table for the presentation layer."""

    phase: Phase
    dealer_hand: Hand
    player_hands: tuple[Hand, ...]
    hand_wagers: tuple[int, ...]
    current_hand_index: int
    result: HandResult | None
    per_hand_results: tuple[HandResult, ...]
    running_count: int
    true_count: float
    remaining_decks: float
    count_level: CountLevel
    bet_recommendation: BetRecommendation
    recommended_bet: int
    current_strategy_hint: StrategyDecision | None
    bankroll: int
    current_bet: int
    stats: GameStats
    settings: SettingsRecord
    rules: GameRules
    decisions: tuple[DecisionRecord, ...]
    strategy_accuracy: float

    @property
    def dealer_up_card(self) -> Card | None:
        return self.dealer_hand.cards[0] if self.dealer_hand.cards else None


class TrainerGame:
    """
    Single-player blackjack round engine.

    Every command runs synchronously to completion and is a silent no-op
    when it is not legal in the current phase or for the current hand.
    The instance owns all round and session state; the presentation
    layer reads it back through snapshot().
    """

    # State machine states
    STATES = [phase.name.lower() for phase in Phase]

    # State machine transitions
    TRANSITIONS = [
        {"trigger": "deal_round", "source": ["betting", "result"], "dest": "dealing"},
        {"trigger": "open_player_turn", "source": "dealing", "dest": "player_turn"},
        {"trigger": "resolve_naturals", "source": "player_turn", "dest": "result"},
        {"trigger": "close_player_turn", "source": "player_turn", "dest": "dealer_turn"},
        {"trigger": "finish_dealer_turn", "source": "dealer_turn", "dest": "result"},
        {"trigger": "clear_table", "source": "*", "dest": "betting"},
    ]

    def __init__(
        self,
        rules: GameRules | None = None,
        repository: TrainerRepository | None = None,
        rng: Random | None = None,
        app_config: AppConfig = config,
    ) -> None:
        """
        Load persisted session state and initialize the table.

        Args:
            rules: Table rules (uses defaults if not provided)
            repository: Persistence for settings, stats and bankroll
            rng: Random number generator for reproducible shuffles
            app_config: Application configuration
        """
        self._config = app_config.game
        self._rng = rng or Random()
        self.repository = repository or TrainerRepository(
            open_store(app_config.storage), app_config.storage.key_prefix
        )

        self.settings = self.repository.load_settings()
        self.stats = self.repository.load_stats()
        self.bankroll = Bankroll(
            self.repository.load_bankroll(self._config.starting_bankroll),
            starting_balance=self._config.starting_bankroll,
        )
        self.current_bet = self._config.default_bet
        self.decisions: list[DecisionRecord] = []
        self.events = EventEmitter()

        self.rules = rules or GameRules()
        self.shoe: Shoe | None = None
        self._reset_table()

        self.machine = Machine(
            model=self,
            states=self.STATES,
            transitions=self.TRANSITIONS,
            initial="betting",
            auto_transitions=False,
            model_attribute="_machine_state",
        )

        self.initialize_game(self.rules)

    @property
    def phase(self) -> Phase:
        """Get current round phase as enum."""
        return Phase[self._machine_state.upper()]  # type: ignore[attr-defined]

    @property
    def current_hand(self) -> Hand | None:
        if 0 <= self.current_hand_index < len(self.player_hands):
            return self.player_hands[self.current_hand_index]
        return None

    def subscribe(
        self,
        handler: Callable[[GameEvent], None],
        event_type: EventType | None = None,
    ) -> Callable[[], None]:
        """Subscribe to game events."""
        return self.events.subscribe(handler, event_type)

    # Session commands

    def initialize_game(self, rules: GameRules) -> None:
        """Build a fresh shoe for the rules and clear the table."""
        self.rules = rules
        self.shoe = Shoe(rules.num_decks, rules.penetration, rng=self._rng)
        self._reset_table()
        self._recount()
        self.clear_table()
        logger.info("Initialized %d-deck game", rules.num_decks)
        self.events.emit(EventType.GAME_RESET, num_decks=rules.num_decks)

    def reset_game(self) -> None:
        """Re-initialize with the current rules."""
        self.initialize_game(self.rules)

    def update_rules(self, **changes: Any) -> None:
        """
        Change table rules.

        Any round in progress is discarded and a fresh shoe is built.

        Raises:
            TypeError: For an unknown rule name
            ValueError: For an invalid rule value (the old rules stay active)
        """
        new_rules = dataclasses.replace(self.rules, **changes)
        logger.info("Rules changed: %s", changes)
        self.initialize_game(new_rules)
        self.events.emit(EventType.RULES_CHANGED, changes=changes)

    def update_settings(self, **changes: Any) -> None:
        """
        Change display settings and persist them.

        Switching counting system recounts every card dealt since the
        last shuffle under the new system.
        """
        unknown = set(changes) - set(SettingsRecord.model_fields)
        if unknown:
            raise TypeError(f"Unknown settings: {', '.join(sorted(unknown))}")

        self.settings = SettingsRecord.model_validate(
            {**self.settings.model_dump(), **changes}
        )
        self.repository.save_settings(self.settings)
        self._recount()
        self._refresh_hint()
        self.events.emit(EventType.SETTINGS_CHANGED, changes=changes)

    def reset_stats(self) -> None:
        self.stats.reset()
        self.repository.save_stats(self.stats)

    def reset_bankroll(self) -> None:
        self.bankroll.reset()
        self.repository.save_bankroll(self.bankroll.balance)

    def set_bet(self, amount: int) -> None:
        """Set the bet for the next round, clamped to [min bet, bankroll]."""
        if self.phase not in (Phase.BETTING, Phase.RESULT):
            logger.debug("Ignoring bet change during %s", self.phase)
            return
        self.current_bet = max(self._config.min_bet, min(amount, self.bankroll.balance))
        self.events.emit(EventType.BET_CHANGED, amount=self.current_bet)

    # Round commands

    def start_new_round(self) -> None:
        """Deal a new round: player, dealer, player, dealer."""
        if self.shoe is None or self.phase not in (Phase.BETTING, Phase.RESULT):
            logger.debug("Cannot start a round during %s", self.phase)
            return
        if not self.bankroll.covers(self.current_bet):
            logger.debug("Bankroll %d cannot cover bet %d", self.bankroll.balance, self.current_bet)
            return

        if self.shoe.needs_reshuffle:
            self.shoe.shuffle()
            self.events.emit(EventType.SHOE_SHUFFLED, num_decks=self.shoe.num_decks)

        try:
            player_first = self._deal()
            dealer_up = self._deal()
            player_second = self._deal()
            dealer_hole = self._deal()
        except ShoeExhaustedError:
            logger.error("Shoe exhausted while dealing a new round")
            return

        self.deal_round()
        self.player_hands = [evaluate_hand([player_first, player_second], self.rules)]
        self.hand_wagers = [self.current_bet]
        self.current_hand_index = 0
        self.dealer_hand = evaluate_hand([dealer_up, dealer_hole], self.rules)
        self.result = None
        self.per_hand_results = ()
        self._recount()
        self.open_player_turn()
        self._refresh_hint()

        logger.info("Round started with bet %d", self.current_bet)
        self.events.emit(EventType.ROUND_STARTED, bet=self.current_bet)
        for card, seat, face_up in (
            (player_first, "player", True),
            (dealer_up, "dealer", True),
            (player_second, "player", True),
            (dealer_hole, "dealer", False),
        ):
            self.events.emit(
                EventType.CARD_DEALT,
                card=str(card) if face_up else "??",
                hand=seat,
            )

        natural = settle_naturals(
            self.player_hands[0],
            self.dealer_hand,
            self.current_bet,
            self.rules.blackjack_payout,
        )
        if natural is not None:
            self._apply_settlement(natural)
            self.resolve_naturals()

    def hit(self) -> None:
        """Deal one card to the current hand; a bust ends the hand."""
        if not self.can_hit:
            return
        index = self.current_hand_index
        hand = self.player_hands[index]

        try:
            card = self._deal()
        except ShoeExhaustedError:
            logger.error("Shoe exhausted on hit")
            return

        self._grade(PlayerAction.HIT, hand)
        new_hand = add_card(hand, card, self.rules)
        self.player_hands[index] = new_hand
        self._recount()
        self.events.emit(EventType.CARD_DEALT, card=str(card), hand="player", hand_index=index)
        self.events.emit(EventType.PLAYER_HIT, hand_index=index, hand_value=new_hand.value)

        if new_hand.is_busted:
            self.events.emit(EventType.PLAYER_BUSTS, hand_index=index)
            self._advance()
        else:
            self._refresh_hint()

    def stand(self) -> None:
        """Finish the current hand."""
        if not self.can_stand:
            return
        hand = self.player_hands[self.current_hand_index]
        self._grade(PlayerAction.STAND, hand)
        self.events.emit(
            EventType.PLAYER_STAND,
            hand_index=self.current_hand_index,
            hand_value=hand.value,
        )
        self._advance()

    def double_down(self) -> None:
        """
        Double the wager, take exactly one card and stand.

        The card and the forced stand happen in a single transition, so no
        other command can act on the hand in between.
        """
        if not self.can_double:
            return
        index = self.current_hand_index
        hand = self.player_hands[index]

        try:
            card = self._deal()
        except ShoeExhaustedError:
            logger.error("Shoe exhausted on double down")
            return

        self._grade(PlayerAction.DOUBLE, hand)
        self.hand_wagers[index] *= 2
        new_hand = add_card(hand, card, self.rules)
        self.player_hands[index] = new_hand
        self._recount()
        self.events.emit(EventType.CARD_DEALT, card=str(card), hand="player", hand_index=index)
        self.events.emit(
            EventType.PLAYER_DOUBLE,
            hand_index=index,
            hand_value=new_hand.value,
            wager=self.hand_wagers[index],
        )
        if new_hand.is_busted:
            self.events.emit(EventType.PLAYER_BUSTS, hand_index=index)
        self._advance()

    def split(self) -> None:
        """Split the current pair into two hands and deal one card to each."""
        if not self.can_split:
            return
        index = self.current_hand_index
        hand = self.player_hands[index]

        try:
            first_draw = self._deal()
            second_draw = self._deal()
        except ShoeExhaustedError:
            logger.error("Shoe exhausted on split")
            return

        self._grade(PlayerAction.SPLIT, hand)
        first_card, second_card = hand.cards
        self.player_hands[index] = evaluate_hand(
            [first_card, first_draw], self.rules, split_hand=True
        )
        self.player_hands.insert(
            index + 1,
            evaluate_hand([second_card, second_draw], self.rules, split_hand=True),
        )
        self.hand_wagers.insert(index + 1, self.hand_wagers[index])
        self._recount()
        self._refresh_hint()

        self.events.emit(
            EventType.PLAYER_SPLIT,
            hand_index=index,
            hand1_value=self.player_hands[index].value,
            hand2_value=self.player_hands[index + 1].value,
        )

    # Eligibility

    @property
    def can_hit(self) -> bool:
        if self.phase != Phase.PLAYER_TURN:
            return False
        hand = self.current_hand
        return hand is not None and not hand.is_busted

    @property
    def can_stand(self) -> bool:
        return self.phase == Phase.PLAYER_TURN and self.current_hand is not None

    @property
    def can_double(self) -> bool:
        """Check if doubling is allowed and the bankroll covers the extra wager."""
        if not self.can_hit:
            return False
        if not self.player_hands[self.current_hand_index].can_double:
            return False
        exposure = sum(self.hand_wagers) + self.hand_wagers[self.current_hand_index]
        return self.bankroll.covers(exposure)

    @property
    def can_split(self) -> bool:
        """Check if splitting is allowed, the hand limit and bankroll permitting."""
        if not self.can_hit:
            return False
        if not self.player_hands[self.current_hand_index].can_split:
            return False
        if len(self.player_hands) >= self.rules.max_split_hands:
            return False
        exposure = sum(self.hand_wagers) + self.hand_wagers[self.current_hand_index]
        return self.bankroll.covers(exposure)

    # Internals

    def _reset_table(self) -> None:
        self.dealer_hand = empty_hand()
        self.player_hands: list[Hand] = [empty_hand()]
        self.hand_wagers: list[int] = [0]
        self.current_hand_index = 0
        self.result: HandResult | None = None
        self.per_hand_results: tuple[HandResult, ...] = ()
        self.current_strategy_hint: StrategyDecision | None = None
        self.running_count = 0
        self.true_count = 0.0
        self.remaining_decks = 0.0

    def _deal(self) -> Card:
        if self.shoe is None:
            raise ShoeExhaustedError("No shoe in play")
        return self.shoe.deal_card()

    def _advance(self) -> None:
        """Move to the next split hand, or hand over to the dealer."""
        if self.current_hand_index < len(self.player_hands) - 1:
            self.current_hand_index += 1
            self._refresh_hint()
            return
        self.current_strategy_hint = None
        self.close_player_turn()
        self._dealer_play()

    def _dealer_play(self) -> None:
        """Dealer draws to the house rule, then every hand is settled."""
        if all(hand.is_busted for hand in self.player_hands):
            logger.debug("All player hands busted, dealer does not draw")
        else:
            dealer = self.dealer_hand
            while should_dealer_hit(dealer, self.rules.dealer_hits_soft_17):
                try:
                    card = self._deal()
                except ShoeExhaustedError:
                    logger.error("Shoe exhausted during dealer play, dealer stands on %d", dealer.value)
                    break
                dealer = add_card(dealer, card, self.rules)
                self.events.emit(EventType.DEALER_HITS, card=str(card), hand_value=dealer.value)
            self.dealer_hand = dealer
            self._recount()
            if dealer.is_busted:
                self.events.emit(EventType.DEALER_BUSTS, hand_value=dealer.value)

        settlement = settle_round(
            self.player_hands,
            self.hand_wagers,
            self.dealer_hand,
            self.rules.blackjack_payout,
        )
        self._apply_settlement(settlement)
        self.finish_dealer_turn()

    def _apply_settlement(self, settlement: RoundSettlement) -> None:
        """Apply a fully computed round settlement as one update and persist it."""
        self.result = settlement.headline
        self.per_hand_results = settlement.results
        self.current_strategy_hint = None

        self.bankroll.apply(settlement.net)
        self.stats.record(settlement)
        self.repository.save_stats(self.stats)
        self.repository.save_bankroll(self.bankroll.balance)

        logger.info(
            "Round settled: %s, net %+d, bankroll %d",
            ", ".join(str(r) for r in settlement.results),
            settlement.net,
            self.bankroll.balance,
        )
        self.events.emit(
            EventType.ROUND_SETTLED,
            results=[str(r) for r in settlement.results],
            net=settlement.net,
            bankroll=self.bankroll.balance,
        )

    def _recount(self) -> None:
        """Recompute the running and true count from the dealt-card log."""
        if self.shoe is None:
            return
        system = get_counting_system(self.settings.counting_system)
        self.running_count = running_count(self.shoe.dealt_cards(), system)
        self.remaining_decks = self.shoe.decks_remaining
        self.true_count = true_count(self.running_count, self.remaining_decks)

    def _playable(self, hand: Hand) -> Hand:
        """The hand as the strategy tables should see it at this table."""
        if hand.can_split and len(self.player_hands) >= self.rules.max_split_hands:
            return dataclasses.replace(hand, can_split=False)
        return hand

    def _refresh_hint(self) -> None:
        hand = self.current_hand
        if (
            self.phase != Phase.PLAYER_TURN
            or not self.settings.show_strategy_hints
            or hand is None
            or hand.is_busted
            or not self.dealer_hand.cards
        ):
            self.current_strategy_hint = None
            return
        self.current_strategy_hint = basic_strategy_decision(
            self._playable(hand), self.dealer_hand.cards[0], self.rules
        )

    def _grade(self, action: PlayerAction, hand: Hand) -> None:
        """Record the action against the basic strategy play for the hand."""
        dealer_card = self.dealer_hand.cards[0]
        decision = basic_strategy_decision(self._playable(hand), dealer_card, self.rules)
        self.decisions.append(
            DecisionRecord(
                player_hand=hand,
                dealer_card=dealer_card,
                action=action,
                correct_action=decision.action,
            )
        )
        logger.debug("Player %s, basic strategy says %s", action, decision.action)

    @property
    def strategy_accuracy(self) -> float:
        """Percentage of graded decisions that matched basic strategy."""
        if not self.decisions:
            return 0.0
        correct = sum(1 for record in self.decisions if record.was_correct)
        return correct / len(self.decisions) * 100

    def snapshot(self) -> RoundSnapshot:
        """Return an immutable view of the current table and session."""
        return RoundSnapshot(
            phase=self.phase,
            dealer_hand=self.dealer_hand,
            player_hands=tuple(self.player_hands),
            hand_wagers=tuple(self.hand_wagers),
            current_hand_index=self.current_hand_index,
            result=self.result,
            per_hand_results=self.per_hand_results,
            running_count=self.running_count,
            true_count=self.true_count,
            remaining_decks=self.remaining_decks,
            count_level=count_level(self.true_count),
            bet_recommendation=betting_recommendation(self.true_count),
            recommended_bet=recommended_bet(
                self.true_count, self.bankroll.balance, self._config.base_betting_unit
            ),
            current_strategy_hint=self.current_strategy_hint,
            bankroll=self.bankroll.balance,
            current_bet=self.current_bet,
            stats=dataclasses.replace(self.stats),
            settings=self.settings,
            rules=self.rules,
            decisions=tuple(self.decisions),
            strategy_accuracy=self.strategy_accuracy,
        )
