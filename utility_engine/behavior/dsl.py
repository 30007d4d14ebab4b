"""Short factory functions for assembling behavior trees inline.

Example:
    >>> tree = priority_sel(
    ...     seq(cond(lambda: enemy_visible), act(attack)),
    ...     util(
    ...         utility_option("patrol", [0.4, 0.9], [1.0, 0.5], patrol),
    ...         utility_option("rest", [0.8, 0.2], [2.0, 1.0], rest),
    ...     ),
    ... )
"""

from __future__ import annotations

from typing import Callable, Sequence

from utility_engine.behavior.base import Status, Tickable
from utility_engine.behavior.composites import Parallel, PrioritySelector, Selector
from utility_engine.behavior.composites import Sequence as SequenceNode
from utility_engine.behavior.decorators import Cooldown, Inverter, Limiter, RepeatUntil, Repeater
from utility_engine.behavior.leaves import ActionNode, ConditionNode, UtilityOption, UtilitySelector, WaitNode
from utility_engine.scoring.calculator import calculate_utility
from utility_engine.utils.logging import get_logger

log = get_logger(__name__, component="behavior")


# Composites
def seq(*nodes: Tickable) -> Tickable:
    return SequenceNode(*nodes)


def sel(*nodes: Tickable) -> Tickable:
    return Selector(*nodes)


def priority_sel(*nodes: Tickable) -> Tickable:
    return PrioritySelector(*nodes)


def par(*nodes: Tickable, succeed_on_first: bool = False) -> Tickable:
    return Parallel(*nodes, succeed_on_first=succeed_on_first)


# Leaves
def act(fn: Callable[[], Status]) -> Tickable:
    return ActionNode(fn)


def cond(predicate: Callable[[], bool]) -> Tickable:
    return ConditionNode(predicate)


def wait(seconds: float) -> Tickable:
    return WaitNode(seconds)


def util(*options: UtilityOption) -> Tickable:
    return UtilitySelector(*options)


# Decorators
def invert(node: Tickable) -> Tickable:
    return Inverter(node)


def repeat(node: Tickable) -> Tickable:
    return Repeater(node)


def until_success(node: Tickable) -> Tickable:
    return RepeatUntil(node, until_success=True)


def until_fail(node: Tickable) -> Tickable:
    return RepeatUntil(node, until_success=False)


def cooldown(node: Tickable, seconds: float) -> Tickable:
    return Cooldown(node, seconds)


def limit(node: Tickable, times: int) -> Tickable:
    return Limiter(node, times)


def utility_option(
    name: str,
    factors: Sequence[float],
    weights: Sequence[float],
    action: Callable[[], None],
) -> UtilityOption:
    """Build a ``(scorer, action)`` pair for :func:`util`.

    The scorer re-reads ``factors`` on every call, so mutating the list between
    ticks changes the score. Invalid factor/weight input raises
    ``InvalidInputError`` when the selector ticks.
    """

    def _score() -> float:
        return calculate_utility(factors, weights)

    def _run() -> None:
        log.info("Utility action chosen", extra={"action": name})
        action()

    return _score, _run


__all__ = [
    "act",
    "cond",
    "cooldown",
    "invert",
    "limit",
    "par",
    "priority_sel",
    "repeat",
    "sel",
    "seq",
    "until_fail",
    "until_success",
    "util",
    "utility_option",
    "wait",
]
