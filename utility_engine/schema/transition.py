"""Goal state machine transition schema."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Callable, Optional

from utility_engine.exceptions import ConfigValidationError

Evaluator = Callable[[], float]


def _zero() -> float:
    return 0.0


@dataclass(slots=True)
class Transition:
    """Scored edge between two states; higher evaluator output wins."""

    from_state: Enum
    to_state: Enum
    priority: int = 0
    evaluator: Optional[Evaluator] = None

    def __post_init__(self) -> None:
        if not isinstance(self.from_state, Enum) or not isinstance(self.to_state, Enum):
            raise ConfigValidationError("transition states must be Enum members")
        if self.evaluator is None:
            self.evaluator = _zero
        elif not callable(self.evaluator):
            raise ConfigValidationError(
                f"evaluator for {self.from_state.name}->{self.to_state.name} must be callable"
            )

    def score(self) -> float:
        return float(self.evaluator())

    def to_dict(self) -> dict:
        return {
            "from_state": self.from_state.name,
            "to_state": self.to_state.name,
            "priority": self.priority,
        }
