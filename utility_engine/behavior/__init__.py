"""Tick-based behavior tree nodes."""

from utility_engine.behavior.base import Status, Tickable
from utility_engine.behavior.composites import Parallel, PrioritySelector, Selector, Sequence
from utility_engine.behavior.decorators import Cooldown, Inverter, Limiter, RepeatUntil, Repeater
from utility_engine.behavior.leaves import ActionNode, ConditionNode, UtilitySelector, WaitNode

__all__ = [
    "ActionNode",
    "ConditionNode",
    "Cooldown",
    "Inverter",
    "Limiter",
    "Parallel",
    "PrioritySelector",
    "RepeatUntil",
    "Repeater",
    "Selector",
    "Sequence",
    "Status",
    "Tickable",
    "UtilitySelector",
    "WaitNode",
]
