"""Utility action schema."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Tuple

from utility_engine.exceptions import ConfigValidationError, InvalidInputError
from utility_engine.scoring.calculator import calculate_utility


def _as_float(value) -> float:
    if isinstance(value, (str, bytes)):
        raise TypeError(f"expected a number, got {type(value).__name__}")
    return float(value)


@dataclass(slots=True)
class UtilityAction:
    """Named factor/weight definition scored with :func:`calculate_utility`."""

    name: str
    factors: Tuple[float, ...]
    weights: Tuple[float, ...]

    def __post_init__(self) -> None:
        if not self.name:
            raise ConfigValidationError("utility action name required")
        if self.factors is None or self.weights is None:
            raise ConfigValidationError(f"{self.name}: factors and weights are required")
        try:
            self.factors = tuple(_as_float(v) for v in self.factors)
            self.weights = tuple(_as_float(v) for v in self.weights)
        except (OverflowError, TypeError, ValueError) as exc:
            raise ConfigValidationError(f"{self.name}: factors and weights must be numeric") from exc
        try:
            calculate_utility(self.factors, self.weights)
        except InvalidInputError as exc:
            raise ConfigValidationError(f"{self.name}: {exc}") from exc

    def score(self) -> float:
        return calculate_utility(self.factors, self.weights)

    @classmethod
    def from_dict(cls, data: dict) -> "UtilityAction":
        missing = {"name", "factors", "weights"} - set(data)
        if missing:
            raise ConfigValidationError(f"utility action missing fields: {sorted(missing)}")
        return cls(name=data["name"], factors=data["factors"], weights=data["weights"])

    def to_dict(self) -> dict:
        return {
            "name": self.name,
            "factors": list(self.factors),
            "weights": list(self.weights),
        }
