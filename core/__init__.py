"""
Core Layer - pure game logic (no AI dependencies)

Modules:
    cards: card and good type definitions
    actions: move types, validity and card selection
    config: game configuration
    rules: rule engine
    state: game state and resources
    executor: move executor
"""
from .cards import (
    GoodType,
    Card,
    CAMEL,
    HIGH_VALUE_GOODS,
    DECK_COMPOSITION,
    FULL_DECK,
    build_deck,
    count_goods,
    cards_to_str,
)

from .actions import (
    TurnPhase,
    MoveType,
    MoveValidity,
    Zone,
    CardRef,
    Selection,
    SelectionPartition,
)

from .config import GameConfig

from .state import (
    BonusTier,
    Deck,
    Market,
    Hand,
    TokenBank,
    PlayerState,
    DiscardPile,
    GameState,
    NUM_PLAYERS,
)

from .rules import RuleEngine

from .executor import MoveExecutor, MoveOutcome

__all__ = [
    # cards
    "GoodType",
    "Card",
    "CAMEL",
    "HIGH_VALUE_GOODS",
    "DECK_COMPOSITION",
    "FULL_DECK",
    "build_deck",
    "count_goods",
    "cards_to_str",
    # actions
    "TurnPhase",
    "MoveType",
    "MoveValidity",
    "Zone",
    "CardRef",
    "Selection",
    "SelectionPartition",
    # config
    "GameConfig",
    # state
    "BonusTier",
    "Deck",
    "Market",
    "Hand",
    "TokenBank",
    "PlayerState",
    "DiscardPile",
    "GameState",
    "NUM_PLAYERS",
    # rules
    "RuleEngine",
    # executor
    "MoveExecutor",
    "MoveOutcome",
]
