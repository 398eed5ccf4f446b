"""
Rule engine - move classification and terminal checks

All methods are pure functions with no state
"""
from typing import Optional

from .actions import MoveType, MoveValidity, Selection, SelectionPartition, TurnPhase
from .state import GameState, Hand, Market, TokenBank


class RuleEngine:
    """
    Jaipur rule engine

    Classifies a card selection into a legal move (or Invalid).
    All methods are static and stateless.
    """

    @staticmethod
    def classify(
        partition: SelectionPartition,
        phase: TurnPhase,
        market: Market,
        hand: Hand,
        hand_limit: int = 7,
    ) -> MoveValidity:
        """
        Classify a selection

        Args:
            partition: selection split by origin and kind
            phase: current decision phase
            market: full market composition
            hand: acting player's full hand
            hand_limit: max goods in hand

        Returns:
            MoveValidity
        """
        if phase == TurnPhase.TAKE:
            return RuleEngine.classify_take(partition, market, hand, hand_limit)
        if phase == TurnPhase.SELL:
            return RuleEngine.classify_sell(partition)
        return MoveValidity.INVALID

    @staticmethod
    def classify_take(
        partition: SelectionPartition,
        market: Market,
        hand: Hand,
        hand_limit: int = 7,
    ) -> MoveValidity:
        """
        Take-phase rules, first match wins:
        take single good, take all camels, exchange
        """
        num_market_goods = len(partition.market_goods)
        num_market_camels = len(partition.market_camels)
        num_hand_goods = len(partition.hand_goods)
        num_hand_camels = len(partition.hand_camels)
        num_goods_in_hand = hand.num_goods

        # Take a single good from the market
        if (
            num_market_goods == 1
            and partition.total == 1
            and num_goods_in_hand < hand_limit
        ):
            return MoveValidity.valid(MoveType.TAKE_SINGLE_GOOD)

        # Take every camel in the market (all or nothing)
        if (
            num_market_camels > 0
            and num_market_goods == 0
            and num_market_camels == market.num_camels
            and num_hand_goods == 0
        ):
            return MoveValidity.valid(MoveType.TAKE_ALL_CAMELS)

        # Exchange at least two market goods for hand goods and/or camels
        market_types = {g for _, g in partition.market_goods}
        hand_types = {g for _, g in partition.hand_goods}

        if (
            num_market_camels == 0
            and num_market_goods >= 2
            and not (market_types & hand_types)
            and num_market_goods == num_hand_camels + num_hand_goods
            and num_goods_in_hand - num_hand_goods + num_market_goods <= hand_limit
        ):
            return MoveValidity.valid(MoveType.EXCHANGE_FOR_GOODS_FROM_MARKET)

        return MoveValidity.INVALID

    @staticmethod
    def classify_sell(partition: SelectionPartition) -> MoveValidity:
        """
        Sell-phase rule: one or more hand goods of the same type,
        at least two if that type is high value
        """
        if partition.num_market > 0 or partition.hand_camels or not partition.hand_goods:
            return MoveValidity.INVALID

        goods = {g for _, g in partition.hand_goods}
        if len(goods) != 1:
            return MoveValidity.INVALID

        good = next(iter(goods))
        if good.is_high_value and len(partition.hand_goods) < 2:
            return MoveValidity.INVALID

        return MoveValidity.valid(MoveType.SELL_GOODS)

    @staticmethod
    def validate(selection: Selection, phase: TurnPhase, state: GameState) -> MoveValidity:
        """
        Classify a selection against the active player's view of a state

        Args:
            selection: selected cards
            phase: current decision phase
            state: game state

        Returns:
            MoveValidity
        """
        partition = selection.partition(state.market, state.active_hand)
        return RuleEngine.classify(
            partition, phase, state.market, state.active_hand, state.config.hand_limit
        )

    @staticmethod
    def count_exhausted_goods(bank: TokenBank) -> int:
        """Number of good types whose token stack is empty"""
        return bank.num_exhausted_goods()

    @staticmethod
    def is_exhausted(bank: TokenBank, limit: int = 3) -> bool:
        """Whether enough goods stacks are empty to end the game"""
        return RuleEngine.count_exhausted_goods(bank) >= limit

    @staticmethod
    def get_winner(state: GameState) -> Optional[int]:
        """
        Index of the player with the most tokens once the game is over

        Returns:
            player index, None while the game runs or on a tie
        """
        if not state.is_game_over:
            return None
        scores = state.scores()
        if scores[0] == scores[1]:
            return None
        return 0 if scores[0] > scores[1] else 1
