"""
Card definitions

Jaipur uses 55 cards:
- 11 camels
- 44 goods across 6 types (3 of them high value)
"""
from enum import Enum
from dataclasses import dataclass
from typing import List, Tuple, Dict, Iterable, Optional
from collections import Counter


class GoodType(Enum):
    """Tradeable good types"""
    DIAMOND = "diamond"
    GOLD = "gold"
    SILVER = "silver"
    CLOTH = "cloth"
    SPICE = "spice"
    LEATHER = "leather"

    @property
    def is_high_value(self) -> bool:
        """High value goods cannot be sold alone"""
        return self in HIGH_VALUE_GOODS


HIGH_VALUE_GOODS = frozenset({GoodType.DIAMOND, GoodType.GOLD, GoodType.SILVER})


@dataclass(frozen=True, slots=True)
class Card:
    """
    Immutable card: either a camel or a good

    Attributes:
        good: good type, None for a camel
    """
    good: Optional[GoodType] = None

    @classmethod
    def camel(cls) -> 'Card':
        return cls(good=None)

    @classmethod
    def of(cls, good: GoodType) -> 'Card':
        return cls(good=good)

    @property
    def is_camel(self) -> bool:
        return self.good is None

    @property
    def is_good(self) -> bool:
        return self.good is not None

    @property
    def good_type(self) -> GoodType:
        """The card's good type. Asking a camel for it is a programming error."""
        if self.good is None:
            raise ValueError("Camel card has no good type")
        return self.good

    def __str__(self) -> str:
        return "camel" if self.good is None else self.good.value


CAMEL = Card.camel()

# Deck composition (card, count)
DECK_COMPOSITION: Tuple[Tuple[Card, int], ...] = (
    (CAMEL, 11),
    (Card.of(GoodType.DIAMOND), 6),
    (Card.of(GoodType.GOLD), 6),
    (Card.of(GoodType.SILVER), 6),
    (Card.of(GoodType.CLOTH), 8),
    (Card.of(GoodType.SPICE), 8),
    (Card.of(GoodType.LEATHER), 10),
)

# Full deck (55 cards), unshuffled
FULL_DECK: Tuple[Card, ...] = tuple(
    card for card, count in DECK_COMPOSITION for _ in range(count)
)


def build_deck(composition: Dict[str, int]) -> List[Card]:
    """
    Build an unshuffled deck from a name -> count mapping

    Args:
        composition: {"camel": 11, "diamond": 6, ...}

    Returns:
        list of cards
    """
    cards: List[Card] = []
    for name, count in composition.items():
        card = CAMEL if name == "camel" else Card.of(GoodType(name))
        cards.extend([card] * count)
    return cards


def count_goods(goods: Iterable[GoodType]) -> Dict[GoodType, int]:
    """Count goods by type (types with zero count are omitted)"""
    return dict(Counter(goods))


def cards_to_str(cards: Iterable[Optional[Card]]) -> str:
    """
    Readable representation of a card row

    Args:
        cards: cards, None for an empty slot

    Returns:
        e.g. "[camel, gold, -, leather]"
    """
    return "[" + ", ".join("-" if c is None else str(c) for c in cards) + "]"
