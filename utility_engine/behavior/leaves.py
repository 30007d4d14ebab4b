"""Leaf nodes: actions, conditions, timers and utility choice."""

from __future__ import annotations

import time
from typing import Callable, Optional, Tuple

from utility_engine.behavior.base import Status, Tickable
from utility_engine.utils.logging import get_logger

log = get_logger(__name__, component="behavior")

Clock = Callable[[], float]
Scorer = Callable[[], float]
UtilityOption = Tuple[Scorer, Callable[[], None]]


class ActionNode(Tickable):
    """Delegate to a callable returning a Status (may return RUNNING)."""

    def __init__(self, fn: Callable[[], Status]) -> None:
        self.fn = fn

    def tick(self) -> Status:
        return self.fn()

    def reset(self) -> None:
        pass


class ConditionNode(Tickable):
    def __init__(self, predicate: Callable[[], bool]) -> None:
        self.predicate = predicate

    def tick(self) -> Status:
        return Status.SUCCESS if self.predicate() else Status.FAILURE

    def reset(self) -> None:
        pass


class WaitNode(Tickable):
    """RUNNING until ``seconds`` have passed since the first tick, then SUCCESS."""

    def __init__(self, seconds: float, clock: Clock = time.monotonic) -> None:
        self.seconds = seconds
        self.clock = clock
        self._started_at: Optional[float] = None

    def tick(self) -> Status:
        now = self.clock()
        if self._started_at is None:
            self._started_at = now
        if now - self._started_at >= self.seconds:
            return Status.SUCCESS
        return Status.RUNNING

    def reset(self) -> None:
        self._started_at = None


class UtilitySelector(Tickable):
    """Invoke the action of the highest-scoring option; always SUCCESS.

    Ties go to the option listed first.
    """

    def __init__(self, *options: UtilityOption) -> None:
        self.options = list(options)

    def tick(self) -> Status:
        best_score = float("-inf")
        best_action = None
        for scorer, action in self.options:
            score = scorer()
            if score > best_score:
                best_score = score
                best_action = action
        if best_action is not None:
            log.debug("Utility option selected", extra={"node": "utility_selector", "score": best_score})
            best_action()
        return Status.SUCCESS

    def reset(self) -> None:
        pass


__all__ = ["ActionNode", "ConditionNode", "UtilityOption", "UtilitySelector", "WaitNode"]
