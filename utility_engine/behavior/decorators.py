"""Decorator nodes wrapping a single child."""

from __future__ import annotations

import time
from typing import Optional

from utility_engine.behavior.base import Status, Tickable
from utility_engine.behavior.leaves import Clock


class Inverter(Tickable):
    def __init__(self, child: Tickable) -> None:
        self.child = child

    def tick(self) -> Status:
        status = self.child.tick()
        if status is Status.SUCCESS:
            return Status.FAILURE
        if status is Status.FAILURE:
            return Status.SUCCESS
        return Status.RUNNING

    def reset(self) -> None:
        self.child.reset()


class Repeater(Tickable):
    """Repeat the child forever; never finishes on its own."""

    def __init__(self, child: Tickable) -> None:
        self.child = child

    def tick(self) -> Status:
        if self.child.tick() is not Status.RUNNING:
            self.child.reset()
        return Status.RUNNING

    def reset(self) -> None:
        self.child.reset()


class RepeatUntil(Tickable):
    """Repeat the child until it returns SUCCESS (or FAILURE when ``until_success`` is False)."""

    def __init__(self, child: Tickable, until_success: bool = True) -> None:
        self.child = child
        self.until_success = until_success

    def tick(self) -> Status:
        status = self.child.tick()
        if status is Status.RUNNING:
            return Status.RUNNING

        target = Status.SUCCESS if self.until_success else Status.FAILURE
        self.child.reset()
        return Status.SUCCESS if status is target else Status.RUNNING

    def reset(self) -> None:
        self.child.reset()


class Cooldown(Tickable):
    """Hold the child off for ``seconds`` after each success, reporting RUNNING meanwhile."""

    def __init__(self, child: Tickable, seconds: float, clock: Clock = time.monotonic) -> None:
        self.child = child
        self.seconds = seconds
        self.clock = clock
        self._last_success: Optional[float] = None

    def tick(self) -> Status:
        if self._last_success is not None and self.clock() - self._last_success < self.seconds:
            return Status.RUNNING

        status = self.child.tick()
        if status is Status.SUCCESS:
            self._last_success = self.clock()
        return status

    def reset(self) -> None:
        self.child.reset()


class Limiter(Tickable):
    """Allow the child to succeed at most ``limit`` times, then fail until reset."""

    def __init__(self, child: Tickable, limit: int) -> None:
        self.child = child
        self.limit = limit
        self._count = 0

    def tick(self) -> Status:
        if self._count >= self.limit:
            return Status.FAILURE

        status = self.child.tick()
        if status is Status.SUCCESS:
            self._count += 1
        return status

    def reset(self) -> None:
        self._count = 0
        self.child.reset()


__all__ = ["Cooldown", "Inverter", "Limiter", "RepeatUntil", "Repeater"]
