"""Weighted-average utility scoring."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Literal, Sequence

import numpy as np

from utility_engine.exceptions import InvalidInputError
from utility_engine.utils.logging import get_logger

log = get_logger(__name__, component="scoring")

ResultStatus = Literal["ok", "invalid_input"]


@dataclass(slots=True, frozen=True)
class UtilityResult:
    """Outcome of a non-raising utility evaluation."""

    status: ResultStatus
    score: float = 0.0
    error: str | None = None

    @property
    def ok(self) -> bool:
        return self.status == "ok"


def _as_vector(values, label: str) -> np.ndarray:
    if values is None:
        raise InvalidInputError(f"{label} must not be None")
    try:
        raw = np.asarray(values)
    except (TypeError, ValueError) as exc:
        raise InvalidInputError(f"{label} must contain only numbers: {exc}") from exc
    # Strings would otherwise be parsed by numpy; huge ints land in object dtype.
    if raw.dtype.kind not in "biuf":
        raise InvalidInputError(f"{label} must contain only numbers, got dtype {raw.dtype}")
    try:
        arr = raw.astype(np.float64)
    except (OverflowError, TypeError, ValueError) as exc:
        raise InvalidInputError(f"{label} must contain only numbers: {exc}") from exc
    if arr.ndim != 1:
        raise InvalidInputError(f"{label} must be one-dimensional, got shape {arr.shape}")
    if arr.size == 0:
        raise InvalidInputError(f"{label} must have a positive length")
    return arr


def calculate_utility(factors: Sequence[float], weights: Sequence[float]) -> float:
    """Return the weight-normalized average of ``factors``.

    Both sequences must be one-dimensional, non-empty and of equal length;
    otherwise :class:`InvalidInputError` is raised before any arithmetic.
    A weight total of exactly zero yields ``0.0`` (minimum utility).

    Sums are accumulated left to right so results are bit-reproducible.

    Example:
        >>> calculate_utility([1.0, 2.0, 3.0], [1.0, 1.0, 1.0])
        2.0
    """
    f = _as_vector(factors, "factors")
    w = _as_vector(weights, "weights")
    if f.size != w.size:
        raise InvalidInputError(
            f"factors and weights must have equal length (got {f.size} and {w.size})"
        )

    # cumsum accumulates sequentially; np.sum uses pairwise reduction.
    weighted_sum = float(np.cumsum(f * w)[-1])
    weight_total = float(np.cumsum(w)[-1])

    if weight_total == 0.0:
        return 0.0
    return weighted_sum / weight_total


def evaluate_utility(factors: Sequence[float], weights: Sequence[float]) -> UtilityResult:
    """Status-returning form of :func:`calculate_utility` for callers that must not raise."""

    try:
        score = calculate_utility(factors, weights)
    except InvalidInputError as exc:
        log.warning("Rejected utility input", extra={"error": str(exc)})
        return UtilityResult(status="invalid_input", error=str(exc))
    return UtilityResult(status="ok", score=score)


__all__ = ["UtilityResult", "calculate_utility", "evaluate_utility"]
