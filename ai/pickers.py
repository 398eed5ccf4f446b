"""
Pickers - arbitration between scored candidates

A picker maps (move type, score) candidates, in MoveType declaration
order, to the chosen move type or None.
"""
from typing import Callable, Optional, Sequence, Tuple
import logging

import numpy as np

from core.actions import MoveType

from .config import AIConfig

logger = logging.getLogger(__name__)

Candidate = Tuple[MoveType, float]
Picker = Callable[[Sequence[Candidate]], Optional[MoveType]]


def highest_score_picker(threshold: float = 0.1) -> Picker:
    """
    Pick the highest score strictly above the threshold

    Ties keep the earliest candidate.
    """
    def pick(candidates: Sequence[Candidate]) -> Optional[MoveType]:
        chosen = None
        max_score = float("-inf")
        for move_type, score in candidates:
            if score > max_score and score > threshold:
                max_score = score
                chosen = move_type
        return chosen

    return pick


def weighted_picker(rng: Optional[np.random.Generator] = None) -> Picker:
    """
    Pick at random with probability proportional to score

    Returns None when no candidate has a positive score.
    """
    rng = rng if rng is not None else np.random.default_rng()

    def pick(candidates: Sequence[Candidate]) -> Optional[MoveType]:
        if not candidates:
            return None

        weights = np.array([max(score, 0.0) for _, score in candidates], dtype=np.float64)
        total = weights.sum()
        if total <= 0:
            logger.debug("weighted picker: every score is zero")
            return None

        idx = rng.choice(len(candidates), p=weights / total)
        return candidates[int(idx)][0]

    return pick


def create_picker(config: AIConfig, rng: Optional[np.random.Generator] = None) -> Picker:
    """
    Picker factory

    Args:
        config: AI configuration
        rng: generator for the weighted picker

    Returns:
        Picker
    """
    if config.picker == "highest":
        return highest_score_picker(config.threshold)
    if config.picker == "weighted":
        return weighted_picker(rng)
    raise ValueError(f"Unknown picker: {config.picker}")
