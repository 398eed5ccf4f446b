"""
Move types, move validity and card selection

Jaipur has 4 move types. A move is described by the set of cards the
active decision-maker selected; the rule engine classifies that set.
"""
from enum import Enum
from dataclasses import dataclass, field
from typing import List, Tuple, Optional, Iterator, Iterable, TYPE_CHECKING

from .cards import GoodType

if TYPE_CHECKING:
    from .state import Market, Hand


class TurnPhase(Enum):
    """Decision phase of the active player"""
    NONE = "none"
    TAKE = "take"
    SELL = "sell"


class MoveType(Enum):
    """
    Move types

    Declaration order is the scorer evaluation order used by pickers.
    """
    TAKE_SINGLE_GOOD = "take_single_good"
    TAKE_ALL_CAMELS = "take_all_camels"
    EXCHANGE_FOR_GOODS_FROM_MARKET = "exchange_for_goods_from_market"
    SELL_GOODS = "sell_goods"

    @property
    def phase(self) -> TurnPhase:
        """Phase in which this move can be played"""
        if self is MoveType.SELL_GOODS:
            return TurnPhase.SELL
        return TurnPhase.TAKE


@dataclass(frozen=True, slots=True)
class MoveValidity:
    """
    Invalid | Valid(MoveType)

    Attributes:
        move_type: classified move, None when invalid
    """
    move_type: Optional[MoveType] = None

    @classmethod
    def valid(cls, move_type: MoveType) -> 'MoveValidity':
        return cls(move_type=move_type)

    @property
    def is_valid(self) -> bool:
        return self.move_type is not None

    def __repr__(self) -> str:
        if self.move_type is None:
            return "Invalid"
        return f"Valid({self.move_type.name})"


MoveValidity.INVALID = MoveValidity()


class Zone(Enum):
    """Where a selectable card lives"""
    MARKET = "market"
    HAND_GOODS = "hand_goods"
    HAND_CAMELS = "hand_camels"


@dataclass(frozen=True, slots=True)
class CardRef:
    """
    Lightweight card identity

    Attributes:
        zone: market slot, hand good or hand camel
        index: market slot / index in hand goods / camel ordinal
    """
    zone: Zone
    index: int

    @staticmethod
    def market(slot: int) -> 'CardRef':
        return CardRef(Zone.MARKET, slot)

    @staticmethod
    def hand_good(index: int) -> 'CardRef':
        return CardRef(Zone.HAND_GOODS, index)

    @staticmethod
    def hand_camel(index: int) -> 'CardRef':
        return CardRef(Zone.HAND_CAMELS, index)


@dataclass(frozen=True)
class SelectionPartition:
    """
    A selection split by origin and kind

    Attributes:
        market_goods: ((slot, good), ...) in selection order
        market_camels: (slot, ...) in selection order
        hand_goods: ((index, good), ...) in selection order
        hand_camels: (ordinal, ...) in selection order
    """
    market_goods: Tuple[Tuple[int, GoodType], ...] = ()
    market_camels: Tuple[int, ...] = ()
    hand_goods: Tuple[Tuple[int, GoodType], ...] = ()
    hand_camels: Tuple[int, ...] = ()

    @property
    def num_market(self) -> int:
        return len(self.market_goods) + len(self.market_camels)

    @property
    def num_hand(self) -> int:
        return len(self.hand_goods) + len(self.hand_camels)

    @property
    def total(self) -> int:
        return self.num_market + self.num_hand


class Selection:
    """
    Ordered set of selected cards (SelectionSet)

    Insertion order is kept: the exchange executor pairs hand cards with
    market goods positionally.
    """

    def __init__(self, refs: Iterable[CardRef] = ()):
        self._refs: List[CardRef] = []
        for ref in refs:
            self.add(ref)

    def add(self, ref: CardRef) -> None:
        if ref not in self._refs:
            self._refs.append(ref)

    def remove(self, ref: CardRef) -> None:
        if ref in self._refs:
            self._refs.remove(ref)

    def toggle(self, ref: CardRef) -> bool:
        """Select or deselect a card. Returns True if it is now selected."""
        if ref in self._refs:
            self._refs.remove(ref)
            return False
        self._refs.append(ref)
        return True

    def clear(self) -> None:
        self._refs.clear()

    def copy(self) -> 'Selection':
        return Selection(self._refs)

    @property
    def refs(self) -> Tuple[CardRef, ...]:
        return tuple(self._refs)

    def in_zone(self, zone: Zone) -> List[CardRef]:
        return [r for r in self._refs if r.zone == zone]

    def partition(self, market: 'Market', hand: 'Hand') -> SelectionPartition:
        """
        Split the selection against a market and the acting hand

        Args:
            market: current market
            hand: acting player's hand

        Returns:
            SelectionPartition

        Raises:
            ValueError: a ref points at an empty slot or outside its zone
        """
        market_goods: List[Tuple[int, GoodType]] = []
        market_camels: List[int] = []
        hand_goods: List[Tuple[int, GoodType]] = []
        hand_camels: List[int] = []

        for ref in self._refs:
            if ref.zone == Zone.MARKET:
                card = market.card_at(ref.index)
                if card is None:
                    raise ValueError(f"Market slot {ref.index} is empty")
                if card.is_camel:
                    market_camels.append(ref.index)
                else:
                    market_goods.append((ref.index, card.good_type))
            elif ref.zone == Zone.HAND_GOODS:
                if not 0 <= ref.index < len(hand.goods):
                    raise ValueError(f"No good at hand index {ref.index}")
                hand_goods.append((ref.index, hand.goods[ref.index]))
            else:
                if not 0 <= ref.index < hand.camels:
                    raise ValueError(f"No camel at hand index {ref.index}")
                hand_camels.append(ref.index)

        return SelectionPartition(
            market_goods=tuple(market_goods),
            market_camels=tuple(market_camels),
            hand_goods=tuple(hand_goods),
            hand_camels=tuple(hand_camels),
        )

    def __contains__(self, ref: object) -> bool:
        return ref in self._refs

    def __iter__(self) -> Iterator[CardRef]:
        return iter(list(self._refs))

    def __len__(self) -> int:
        return len(self._refs)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Selection):
            return NotImplemented
        return self._refs == other._refs

    def __repr__(self) -> str:
        return f"Selection({self._refs!r})"
