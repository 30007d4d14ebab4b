"""State machines whose state selection is driven by utility scores."""

from utility_engine.agents.goals import GoalBuilder, GoalStateMachine, UtilityAgent
from utility_engine.agents.state_machine import MethodKind, StateMachine

__all__ = ["GoalBuilder", "GoalStateMachine", "MethodKind", "StateMachine", "UtilityAgent"]
