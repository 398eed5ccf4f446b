"""
Move executor

Applies a classified move to the game state. The executor trusts the
rule engine's classification and never re-derives legality; it is the
only writer of deck, market, hands, token banks and the discard pile.
"""
from dataclasses import dataclass, field
from typing import Callable, Dict, List, Optional, Tuple
import logging

from .actions import MoveType, MoveValidity, Selection, SelectionPartition
from .cards import CAMEL, Card, GoodType
from .rules import RuleEngine
from .state import BonusTier, GameState

logger = logging.getLogger(__name__)


@dataclass
class MoveOutcome:
    """
    Result of an executed move

    Attributes:
        move_type: executed move
        player: index of the acting player
        cards_taken: cards that entered the acting hand
        cards_given: cards that left the acting hand
        tokens_won: (good, value) goods tokens granted
        bonus_won: (tier, value) bonus token granted, if any
        is_game_over: game state terminal flag after the move
    """
    move_type: MoveType
    player: int
    cards_taken: List[Card] = field(default_factory=list)
    cards_given: List[Card] = field(default_factory=list)
    tokens_won: List[Tuple[GoodType, int]] = field(default_factory=list)
    bonus_won: Optional[Tuple[BonusTier, int]] = None
    is_game_over: bool = False

    @property
    def points(self) -> int:
        total = sum(v for _, v in self.tokens_won)
        if self.bonus_won is not None:
            total += self.bonus_won[1]
        return total


Handler = Callable[[GameState, SelectionPartition, MoveOutcome], None]


class MoveExecutor:
    """
    Move executor

    One handler per MoveType
    """

    @staticmethod
    def execute(state: GameState, selection: Selection, validity: MoveValidity) -> MoveOutcome:
        """
        Apply a validated move

        Args:
            state: game state (mutated in place)
            selection: the selection the rule engine just classified
            validity: that classification

        Returns:
            MoveOutcome

        Raises:
            ValueError: validity is Invalid, the game is over, or the
                selection does not fit the move
        """
        if not validity.is_valid:
            raise ValueError("Cannot execute an invalid move")
        if state.is_game_over:
            raise ValueError("Game is already over")

        move_type = validity.move_type
        partition = selection.partition(state.market, state.active_hand)
        outcome = MoveOutcome(move_type=move_type, player=state.active_player)

        _HANDLERS[move_type](state, partition, outcome)

        outcome.is_game_over = state.is_game_over
        state.move_log.append(outcome)

        logger.info(
            f"{state.active.name} played {move_type.name}: "
            f"took {[str(c) for c in outcome.cards_taken]}, "
            f"gave {[str(c) for c in outcome.cards_given]}, "
            f"points {outcome.points}"
        )
        if state.is_game_over:
            logger.info(f"Game over, scores {state.scores()}")

        return outcome

    @staticmethod
    def take_single_good(state: GameState, partition: SelectionPartition, outcome: MoveOutcome) -> None:
        """Move one market good into the hand and refill its slot"""
        if len(partition.market_goods) != 1:
            raise ValueError("Take single good needs exactly one market good")

        slot, _ = partition.market_goods[0]
        card = state.market.take(slot)
        state.active_hand.goods.append(card.good_type)
        outcome.cards_taken.append(card)

        if not state.market.refill(slot, state.deck):
            state.is_game_over = True

    @staticmethod
    def take_all_camels(state: GameState, partition: SelectionPartition, outcome: MoveOutcome) -> None:
        """Move every selected market camel into the hand, refilling each slot"""
        if not partition.market_camels:
            raise ValueError("Take all camels needs market camels")

        for slot in partition.market_camels:
            card = state.market.take(slot)
            if not card.is_camel:
                raise ValueError(f"Market slot {slot} does not hold a camel")
            state.active_hand.camels += 1
            outcome.cards_taken.append(card)

            if not state.market.refill(slot, state.deck):
                state.is_game_over = True

    @staticmethod
    def exchange_goods(state: GameState, partition: SelectionPartition, outcome: MoveOutcome) -> None:
        """
        Swap hand goods and camels with market goods in place

        Pairing is positional: selected hand goods first, then camels fill
        the remaining market goods. No card leaves the game, so the market
        is never refilled from the deck.
        """
        hand = state.active_hand
        market_goods = list(partition.market_goods)
        if len(market_goods) != len(partition.hand_goods) + len(partition.hand_camels):
            raise ValueError("Exchange needs one hand card per market good")

        num_goods_pairs = min(len(partition.hand_goods), len(market_goods))

        # Hand good <-> market good, both keep their position
        for (hand_idx, hand_good), (slot, _) in zip(partition.hand_goods, market_goods[:num_goods_pairs]):
            taken = state.market.take(slot)
            state.market.put(slot, Card.of(hand_good))
            hand.goods[hand_idx] = taken.good_type
            outcome.cards_taken.append(taken)
            outcome.cards_given.append(Card.of(hand_good))

        # Camel <-> market good, the good joins the end of the hand
        for _, (slot, _) in zip(partition.hand_camels, market_goods[num_goods_pairs:]):
            taken = state.market.take(slot)
            state.market.put(slot, CAMEL)
            hand.camels -= 1
            hand.goods.append(taken.good_type)
            outcome.cards_taken.append(taken)
            outcome.cards_given.append(CAMEL)

    @staticmethod
    def sell_goods(state: GameState, partition: SelectionPartition, outcome: MoveOutcome) -> None:
        """
        Sell the selected hand goods

        Each card sold pops one goods token if any remain; a sale of 3, 4
        or 5+ cards pops one bonus token of that tier if any remain.
        """
        hand = state.active_hand
        player_tokens = state.active.tokens

        # Descending index order keeps the remaining indices valid
        for hand_idx, _ in sorted(partition.hand_goods, key=lambda x: x[0], reverse=True):
            good = hand.goods.pop(hand_idx)
            card = Card.of(good)
            state.discard.push(card)
            outcome.cards_given.append(card)

            value = state.tokens.pop_goods(good)
            if value is not None:
                player_tokens.goods[good].append(value)
                outcome.tokens_won.append((good, value))

        tier = BonusTier.for_sale_size(len(partition.hand_goods))
        if tier is not None:
            value = state.tokens.pop_bonus(tier)
            if value is not None:
                player_tokens.bonus[tier].append(value)
                outcome.bonus_won = (tier, value)

        if RuleEngine.is_exhausted(state.tokens, state.config.exhausted_goods_limit):
            state.is_game_over = True


_HANDLERS: Dict[MoveType, Handler] = {
    MoveType.TAKE_SINGLE_GOOD: MoveExecutor.take_single_good,
    MoveType.TAKE_ALL_CAMELS: MoveExecutor.take_all_camels,
    MoveType.EXCHANGE_FOR_GOODS_FROM_MARKET: MoveExecutor.exchange_goods,
    MoveType.SELL_GOODS: MoveExecutor.sell_goods,
}
