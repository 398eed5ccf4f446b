"""
AI configuration
"""
from dataclasses import dataclass
from typing import Literal, Optional, Dict, Any


PICKERS = ("highest", "weighted")
SCORING_MODES = ("heuristic", "random")


@dataclass
class AIConfig:
    """
    Decision system configuration

    Attributes:
        picker: arbitration policy ("highest" or "weighted")
        threshold: minimum score for the highest-score picker
        scoring: "heuristic" scorers, or "random" scores for the take
            single good / take all camels moves (randomized difficulty)
        seed: RNG seed for weighted picking and random scoring
    """
    picker: Literal["highest", "weighted"] = "highest"
    threshold: float = 0.1
    scoring: Literal["heuristic", "random"] = "heuristic"
    seed: Optional[int] = None

    def __post_init__(self):
        if self.picker not in PICKERS:
            raise ValueError(f"Unknown picker: {self.picker}")
        if self.scoring not in SCORING_MODES:
            raise ValueError(f"Unknown scoring mode: {self.scoring}")

    @classmethod
    def from_dict(cls, d: Dict[str, Any]) -> 'AIConfig':
        valid_keys = cls.__dataclass_fields__.keys()
        filtered = {k: v for k, v in d.items() if k in valid_keys}
        return cls(**filtered)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "picker": self.picker,
            "threshold": self.threshold,
            "scoring": self.scoring,
            "seed": self.seed,
        }
