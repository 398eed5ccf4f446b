"""
Environment Layer - turn coordination

Modules:
    jaipur_env: environment class and its notifications
"""
from .jaipur_env import (
    JaipurEnv,
    SelectionChanged,
    ValidityChanged,
    TurnConfirmed,
    Event,
    Listener,
)

__all__ = [
    "JaipurEnv",
    "SelectionChanged",
    "ValidityChanged",
    "TurnConfirmed",
    "Event",
    "Listener",
]
