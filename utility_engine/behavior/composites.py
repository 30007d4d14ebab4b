"""Composite nodes: children ticked under a shared policy."""

from __future__ import annotations

from utility_engine.behavior.base import Status, Tickable


class Sequence(Tickable):
    """Run children in order; fail on the first failure, succeed when all succeed.

    Progress is remembered across ticks, so a RUNNING child is resumed
    rather than re-running the children before it.
    """

    def __init__(self, *children: Tickable) -> None:
        self.children = children
        self._index = 0

    def tick(self) -> Status:
        while self._index < len(self.children):
            child = self.children[self._index]
            status = child.tick()
            if status is Status.RUNNING:
                return Status.RUNNING
            if status is Status.FAILURE:
                self.reset()
                return Status.FAILURE
            child.reset()
            self._index += 1

        self.reset()
        return Status.SUCCESS

    def reset(self) -> None:
        self._index = 0


class Selector(Tickable):
    """Try children in order until one succeeds."""

    def __init__(self, *children: Tickable) -> None:
        self.children = children
        self._index = 0

    def tick(self) -> Status:
        while self._index < len(self.children):
            child = self.children[self._index]
            status = child.tick()
            if status is Status.RUNNING:
                return Status.RUNNING
            if status is Status.SUCCESS:
                self.reset()
                return Status.SUCCESS
            child.reset()
            self._index += 1

        self.reset()
        return Status.FAILURE

    def reset(self) -> None:
        self._index = 0


class PrioritySelector(Tickable):
    """Selector that re-checks children from the highest priority every tick.

    A higher-priority child becoming RUNNING or SUCCESS preempts (and resets)
    a lower-priority child that was running on a previous tick.
    """

    def __init__(self, *children: Tickable) -> None:
        self.children = children
        self._running: int | None = None

    def _preempt(self, index: int) -> None:
        if self._running is not None and self._running != index:
            self.children[self._running].reset()

    def tick(self) -> Status:
        for i, child in enumerate(self.children):
            status = child.tick()
            if status is Status.RUNNING:
                self._preempt(i)
                self._running = i
                return Status.RUNNING
            if status is Status.SUCCESS:
                self._preempt(i)
                self.reset()
                return Status.SUCCESS
            child.reset()

        if self._running is not None:
            self.children[self._running].reset()
            self._running = None
        return Status.FAILURE

    def reset(self) -> None:
        for child in self.children:
            child.reset()
        self._running = None


class Parallel(Tickable):
    """Tick every child each step.

    With ``succeed_on_first`` the node succeeds as soon as any child does;
    otherwise it needs all children to succeed and fails on the first failure.
    """

    def __init__(self, *children: Tickable, succeed_on_first: bool = False) -> None:
        self.children = children
        self.succeed_on_first = succeed_on_first

    def tick(self) -> Status:
        any_running = False
        all_success = True

        for child in self.children:
            status = child.tick()
            if status is Status.RUNNING:
                any_running = True
            elif status is Status.FAILURE and not self.succeed_on_first:
                self.reset()
                return Status.FAILURE
            elif status is Status.SUCCESS and self.succeed_on_first:
                self.reset()
                return Status.SUCCESS
            if status is not Status.SUCCESS:
                all_success = False

        if not self.succeed_on_first and all_success:
            self.reset()
            return Status.SUCCESS
        return Status.RUNNING if any_running else Status.FAILURE

    def reset(self) -> None:
        for child in self.children:
            child.reset()


__all__ = ["Parallel", "PrioritySelector", "Selector", "Sequence"]
