"""
AI Layer - utility scoring and move selection

Modules:
    config: AI configuration
    scorers: per-move utility scorers
    pickers: arbitration between scored moves
    agents: agents that play through the environment
"""
from .config import AIConfig

from .scorers import (
    ScoredMove,
    clamp,
    camels_score,
    score_take_single_good,
    score_take_all_camels,
    score_exchange_goods,
    score_sell_goods,
    score_all,
    SCORERS,
)

from .pickers import (
    Picker,
    highest_score_picker,
    weighted_picker,
    create_picker,
)

from .agents import (
    DecisionStatus,
    Decision,
    Agent,
    UtilityAgent,
    RandomAgent,
    AGENT_KINDS,
    create_agent,
)

__all__ = [
    # config
    "AIConfig",
    # scorers
    "ScoredMove",
    "clamp",
    "camels_score",
    "score_take_single_good",
    "score_take_all_camels",
    "score_exchange_goods",
    "score_sell_goods",
    "score_all",
    "SCORERS",
    # pickers
    "Picker",
    "highest_score_picker",
    "weighted_picker",
    "create_picker",
    # agents
    "DecisionStatus",
    "Decision",
    "Agent",
    "UtilityAgent",
    "RandomAgent",
    "AGENT_KINDS",
    "create_agent",
]
