"""Weighted-average utility scoring with behavior-tree and goal state machine helpers."""

from utility_engine.exceptions import InvalidInputError, UtilityEngineError
from utility_engine.scoring.calculator import UtilityResult, calculate_utility, evaluate_utility

__all__ = [
    "InvalidInputError",
    "UtilityEngineError",
    "UtilityResult",
    "calculate_utility",
    "evaluate_utility",
]
