"""
Agents

An agent scores the moves open to the active player, picks one, and plays
it through the environment the same way a human would: phase, selection,
validation, confirmation.
"""
from dataclasses import dataclass, field
from enum import Enum
from typing import TYPE_CHECKING, List, Optional
import logging

import numpy as np

from core.actions import MoveType, MoveValidity, TurnPhase
from core.state import GameState

from .config import AIConfig
from .pickers import Picker, create_picker
from .scorers import ScoredMove, score_all

if TYPE_CHECKING:
    from env.jaipur_env import JaipurEnv, TurnConfirmed

logger = logging.getLogger(__name__)


class DecisionStatus(Enum):
    """Decision result"""
    CHOSEN = "chosen"
    NO_MOVE_CHOSEN = "no_move_chosen"  # picker declined every candidate
    NO_CANDIDATES = "no_candidates"  # no move applicable at all


@dataclass
class Decision:
    """
    An agent's decision for one turn

    Attributes:
        status: decision result
        move: chosen candidate, None unless CHOSEN
        candidates: every scored move considered
    """
    status: DecisionStatus
    move: Optional[ScoredMove] = None
    candidates: List[ScoredMove] = field(default_factory=list)

    @property
    def is_chosen(self) -> bool:
        return self.status == DecisionStatus.CHOSEN

    @property
    def move_type(self) -> Optional[MoveType]:
        return self.move.move_type if self.move is not None else None


class Agent:
    """Agent base class"""

    def __init__(self, name: str = "agent"):
        self.name = name

    def act(self, state: GameState) -> Decision:
        """Decide a move for the active player"""
        raise NotImplementedError

    def reset(self):
        """Reset internal state"""
        pass

    def take_turn(self, env: 'JaipurEnv') -> Optional['TurnConfirmed']:
        """
        Decide and play one move through the environment

        Args:
            env: environment holding the game

        Returns:
            TurnConfirmed, or None when no move was chosen

        Raises:
            RuntimeError: the rule engine rejects the agent's selection
        """
        decision = self.act(env.state)
        if not decision.is_chosen:
            logger.info(f"{self.name}: {decision.status.value}")
            return None

        move = decision.move
        env.clear_selection()
        env.set_phase(move.move_type.phase)
        env.set_selection(move.selection)

        expected = MoveValidity.valid(move.move_type)
        validity = env.validity
        if validity != expected:
            env.clear_selection()
            env.set_phase(TurnPhase.NONE)
            raise RuntimeError(
                f"{self.name} selected {move.selection!r} for {move.move_type.name}, "
                f"rule engine says {validity!r}"
            )

        return env.confirm()


class UtilityAgent(Agent):
    """
    Utility agent

    Scores every move type and lets a picker arbitrate between the
    applicable ones.
    """

    def __init__(
        self,
        config: Optional[AIConfig] = None,
        name: str = "utility",
        picker: Optional[Picker] = None,
    ):
        super().__init__(name)
        self.config = config or AIConfig()
        self.rng = np.random.default_rng(self.config.seed)
        self._custom_picker = picker
        self.picker = picker or create_picker(self.config, self.rng)

    def act(self, state: GameState) -> Decision:
        candidates = score_all(state, self.config, self.rng)
        applicable = [c for c in candidates if c.is_applicable]
        if not applicable:
            return Decision(DecisionStatus.NO_CANDIDATES, candidates=candidates)

        chosen = self.picker([(c.move_type, c.score) for c in applicable])
        if chosen is None:
            return Decision(DecisionStatus.NO_MOVE_CHOSEN, candidates=candidates)

        move = next(c for c in applicable if c.move_type == chosen)
        logger.debug(f"{self.name} chose {chosen.name} ({move.score:.3f})")
        return Decision(DecisionStatus.CHOSEN, move=move, candidates=candidates)

    def reset(self):
        self.rng = np.random.default_rng(self.config.seed)
        self.picker = self._custom_picker or create_picker(self.config, self.rng)


class RandomAgent(Agent):
    """Random agent: uniform among applicable moves"""

    def __init__(self, name: str = "random", seed: Optional[int] = None):
        super().__init__(name)
        self.seed = seed
        self.rng = np.random.default_rng(seed)

    def act(self, state: GameState) -> Decision:
        candidates = score_all(state)
        applicable = [c for c in candidates if c.is_applicable]
        if not applicable:
            return Decision(DecisionStatus.NO_CANDIDATES, candidates=candidates)

        idx = self.rng.integers(len(applicable))
        return Decision(DecisionStatus.CHOSEN, move=applicable[int(idx)], candidates=candidates)

    def reset(self):
        self.rng = np.random.default_rng(self.seed)


AGENT_KINDS = ("utility", "weighted", "random")


def create_agent(kind: str, config: Optional[AIConfig] = None, name: Optional[str] = None) -> Agent:
    """
    Agent factory

    Args:
        kind: "utility" (highest score), "weighted" or "random"
        config: AI configuration, picker overridden by kind
        name: agent name, defaults to kind

    Returns:
        Agent
    """
    config = config or AIConfig()
    name = name or kind

    if kind == "utility":
        return UtilityAgent(AIConfig.from_dict({**config.to_dict(), "picker": "highest"}), name)
    if kind == "weighted":
        return UtilityAgent(AIConfig.from_dict({**config.to_dict(), "picker": "weighted"}), name)
    if kind == "random":
        return RandomAgent(name, config.seed)
    raise ValueError(f"Unknown agent kind: {kind}")
