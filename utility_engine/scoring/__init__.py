"""Utility scoring primitives."""

from utility_engine.scoring.calculator import UtilityResult, calculate_utility, evaluate_utility

__all__ = ["UtilityResult", "calculate_utility", "evaluate_utility"]
