"""
Game configuration

Table sizes, deck composition and token values
"""
from dataclasses import dataclass, field
from typing import Dict, List, Any

from .cards import DECK_COMPOSITION


def _default_deck() -> Dict[str, int]:
    return {str(card): count for card, count in DECK_COMPOSITION}


def _default_goods_tokens() -> Dict[str, List[int]]:
    # Ascending: the last entry is the top of the stack
    return {
        "diamond": [5, 5, 5, 7, 7],
        "gold": [5, 5, 5, 6, 6],
        "silver": [5, 5, 5, 5, 5],
        "cloth": [1, 1, 2, 2, 3, 3, 5],
        "spice": [1, 1, 2, 2, 3, 3, 5],
        "leather": [1, 1, 1, 1, 1, 1, 2, 3, 4],
    }


def _default_bonus_tokens() -> Dict[str, List[int]]:
    # Shuffled at game start
    return {
        "three": [3, 3, 2, 2, 2, 1, 1],
        "four": [6, 6, 5, 5, 4, 4],
        "five": [10, 10, 9, 8, 8],
    }


@dataclass
class GameConfig:
    """
    Game configuration

    Attributes:
        hand_limit: max goods in a hand after any move
        market_size: number of market slots
        initial_market_camels: camels placed in the market before dealing
        starting_hand_size: cards dealt to each player
        exhausted_goods_limit: empty goods stacks that end the game
        deck_composition: card name -> count
        goods_tokens: good name -> token values (top of stack last)
        bonus_tokens: tier name -> token values
    """
    hand_limit: int = 7
    market_size: int = 5
    initial_market_camels: int = 3
    starting_hand_size: int = 5
    exhausted_goods_limit: int = 3

    deck_composition: Dict[str, int] = field(default_factory=_default_deck)
    goods_tokens: Dict[str, List[int]] = field(default_factory=_default_goods_tokens)
    bonus_tokens: Dict[str, List[int]] = field(default_factory=_default_bonus_tokens)

    def __post_init__(self):
        if self.initial_market_camels > self.market_size:
            raise ValueError("initial_market_camels cannot exceed market_size")
        if self.initial_market_camels > self.deck_composition.get("camel", 0):
            raise ValueError("Not enough camels in the deck for the initial market")

    @classmethod
    def from_dict(cls, d: Dict[str, Any]) -> 'GameConfig':
        """Create a config from a dict, ignoring unknown keys"""
        valid_keys = cls.__dataclass_fields__.keys()
        filtered = {k: v for k, v in d.items() if k in valid_keys}
        return cls(**filtered)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "hand_limit": self.hand_limit,
            "market_size": self.market_size,
            "initial_market_camels": self.initial_market_camels,
            "starting_hand_size": self.starting_hand_size,
            "exhausted_goods_limit": self.exhausted_goods_limit,
            "deck_composition": dict(self.deck_composition),
            "goods_tokens": {k: list(v) for k, v in self.goods_tokens.items()},
            "bonus_tokens": {k: list(v) for k, v in self.bonus_tokens.items()},
        }
