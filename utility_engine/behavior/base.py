"""Behavior tree node interface."""

from __future__ import annotations

from abc import ABC, abstractmethod
from enum import Enum


class Status(Enum):
    RUNNING = "running"
    SUCCESS = "success"
    FAILURE = "failure"


class Tickable(ABC):
    """Base interface for every node that can be ticked."""

    @abstractmethod
    def tick(self) -> Status:
        """Advance the node by one step and report its status."""

    @abstractmethod
    def reset(self) -> None:
        """Return the node to its initial state."""


__all__ = ["Status", "Tickable"]
