"""Goal-driven state selection on top of :class:`StateMachine`.

Each update the highest-scoring goal becomes the primary state. Scored
transitions are then followed from the primary state (descending into
sub-transition blocks) and the states reached are queued, one switch per
update, onto the hosted state machine.
"""

from __future__ import annotations

from enum import Enum
from typing import Callable, Dict, Generic, List, Optional, TypeVar

from utility_engine.agents.state_machine import MethodSwitchCallback, StateMachine
from utility_engine.exceptions import ConfigValidationError, StateMachineError
from utility_engine.schema.transition import Evaluator, Transition
from utility_engine.utils.logging import get_logger

log = get_logger(__name__, component="agents.goals")

S = TypeVar("S", bound=Enum)


class GoalStateMachine(Generic[S]):
    def __init__(
        self,
        initial_state: S,
        state_machine: Optional[StateMachine] = None,
        on_method_change: Optional[MethodSwitchCallback] = None,
    ) -> None:
        self.state_machine = state_machine if state_machine is not None else StateMachine()
        if on_method_change is not None:
            self.state_machine.add_method_switch_callback(on_method_change)

        self.initial_goal: S = initial_state
        self.goal_evaluators: Dict[S, Evaluator] = {}
        self._primary: S = initial_state
        self._active: S = initial_state
        self._transitions: Dict[S, List[Transition]] = {}
        self._sub_blocks: Dict[S, GoalStateMachine[S]] = {}
        self._queue: List[S] = []
        self._built = False

    # ------------------------------------------------------------------ #
    # Definition
    # ------------------------------------------------------------------ #
    def add_transition(self, transition: Transition) -> bool:
        existing = self._transitions.setdefault(transition.from_state, [])
        if any(t.to_state == transition.to_state for t in existing):
            log.error(
                "Duplicate transition ignored",
                extra={"state": transition.from_state.name, "to_state": transition.to_state.name},
            )
            return False
        existing.append(transition)
        log.debug("Transition added", extra=transition.to_dict())
        return True

    def add_sub_transitions(self, parent: S, block: "GoalStateMachine[S]") -> bool:
        if parent in self._sub_blocks:
            log.error("Sub-transition block already defined", extra={"state": parent.name})
            return False
        self._sub_blocks[parent] = block
        return True

    def register_goal(self, state: S, evaluator: Evaluator) -> None:
        if not callable(evaluator):
            raise ConfigValidationError(f"goal evaluator for {state.name} must be callable")
        self.goal_evaluators[state] = evaluator

    def set_initial_state(self, state: S) -> None:
        if self._built:
            raise StateMachineError("initial state cannot change after build()")
        self.initial_goal = state
        self._primary = state
        self._active = state

    def goals(self) -> "GoalBuilder[S]":
        """Start a fluent goal/transition definition block."""
        return GoalBuilder(self)

    def build(self) -> None:
        if not self._transitions and not self.goal_evaluators:
            raise StateMachineError("no goals or transitions defined")

        for transitions in self._transitions.values():
            transitions.sort(key=lambda t: t.priority)

        self.state_machine.switch_state(self._active.value)
        self._built = True

    # ------------------------------------------------------------------ #
    # Runtime
    # ------------------------------------------------------------------ #
    @property
    def active_state(self) -> S:
        return self._active

    @property
    def primary_state(self) -> S:
        return self._primary

    def transitions_from(self, state: S) -> List[Transition]:
        return list(self._transitions.get(state, []))

    def has_transitions(self, state: S) -> bool:
        return bool(self._transitions.get(state))

    def evaluate(self, from_state: S, queue: List[S], active: Optional[S] = None) -> S:
        """Follow the best transition out of ``from_state`` and return the state reached.

        Targets that differ from the active state are appended to ``queue``.
        """

        if active is None:
            active = self._active

        block = self._sub_blocks.get(from_state)
        if block is not None:
            reached = block.evaluate(from_state, queue, active)
            while reached in block._sub_blocks:
                block = block._sub_blocks[reached]
                reached = block.evaluate(reached, queue, active)
            return reached

        best = _best_transition(self._transitions.get(from_state, []))
        if best is None:
            return from_state
        if best.to_state != active:
            queue.append(best.to_state)
        return best.to_state

    def fire_state(self, state: S) -> None:
        if state == self._primary or state == self._active:
            return
        self._queue.clear()
        self._active = state
        self._primary = state
        self._queue.append(state)
        log.info("Goal fired", extra={"state": state.name})

    def update(self) -> None:
        if not self._built:
            self.build()

        goal = _best_goal(self.goal_evaluators)
        if goal is not None and not self.state_machine.is_in_transition():
            self.fire_state(goal)

        if self._queue and not self.state_machine.is_in_transition():
            state = self._queue.pop(0)
            self._active = state
            if not self.state_machine.has_state(state.value):
                log.error("State is not defined on the state machine", extra={"state": state.name})
                return
            log.info("State switched", extra={"state": state.name})
            self.state_machine.switch_state(state.value)

        self.state_machine.update()

        self._queue.clear()
        prev = self._primary
        visited = {prev}
        nxt = self.evaluate(prev, self._queue)
        while nxt != prev:
            if nxt in visited:
                log.warning("Transition cycle detected; stopping evaluation", extra={"state": nxt.name})
                break
            visited.add(nxt)
            prev = nxt
            nxt = self.evaluate(prev, self._queue)


def _best_transition(transitions: List[Transition]) -> Optional[Transition]:
    best: Optional[Transition] = None
    best_score = float("-inf")
    for transition in transitions:
        score = transition.score()
        if score > best_score:
            best_score = score
            best = transition
    return best


def _best_goal(evaluators: Dict[S, Evaluator]) -> Optional[S]:
    best: Optional[S] = None
    best_score = float("-inf")
    for state, evaluator in evaluators.items():
        score = float(evaluator())
        if score > best_score:
            best_score = score
            best = state
    return best


class GoalBuilder(Generic[S]):
    """Fluent definition of goals, transitions and nested sub-goals.

    Example:
        >>> (machine.goals()
        ...     .from_state(Mode.COMBAT, threat_level)
        ...         .to(Mode.ATTACK, evaluator=attack_score)
        ...             .sub_goals()
        ...                 .to(Mode.MELEE, evaluator=melee_score)
        ...                 .to(Mode.RANGED, evaluator=ranged_score)
        ...             .up()
        ...         .to(Mode.RETREAT, evaluator=retreat_score)
        ...     .end_goal()
        ...     .done())
    """

    def __init__(self, machine: GoalStateMachine[S], parent: Optional["GoalBuilder[S]"] = None) -> None:
        self._machine = machine
        self._parent = parent
        self._from: Optional[S] = None
        self._last_to: Optional[S] = None

    def from_state(self, state: S, evaluator: Optional[Evaluator] = None) -> "GoalBuilder[S]":
        if self._parent is not None:
            raise ConfigValidationError("from_state() is only valid at the top level")
        if evaluator is not None:
            self._machine.register_goal(state, evaluator)
        self._from = state
        self._last_to = None
        return self

    def to(self, state: S, priority: int = 0, evaluator: Optional[Evaluator] = None) -> "GoalBuilder[S]":
        if self._from is None:
            raise ConfigValidationError("to() requires from_state() first")
        self._machine.add_transition(Transition(self._from, state, priority, evaluator))
        self._last_to = state
        return self

    def sub_goals(self) -> "GoalBuilder[S]":
        if self._last_to is None:
            raise ConfigValidationError("sub_goals() requires a preceding to()")
        parent_state = self._last_to
        block = self._machine._sub_blocks.get(parent_state)
        if block is None:
            block = GoalStateMachine(parent_state, state_machine=self._machine.state_machine)
            self._machine.add_sub_transitions(parent_state, block)
        child = GoalBuilder(block, parent=self)
        child._from = parent_state
        return child

    def up(self) -> "GoalBuilder[S]":
        return self._parent if self._parent is not None else self

    def end_goal(self) -> "GoalBuilder[S]":
        root = self
        while root._parent is not None:
            root = root._parent
        root._from = None
        root._last_to = None
        return root

    def done(self) -> GoalStateMachine[S]:
        root = self
        while root._parent is not None:
            root = root._parent
        return root._machine


class UtilityAgent(Generic[S]):
    """Base class for agents driven by a :class:`GoalStateMachine`."""

    def __init__(self, initial_state: S) -> None:
        self.goal_machine: GoalStateMachine[S] = GoalStateMachine(
            initial_state,
            on_method_change=self.on_method_change,
        )

    def define_state(
        self,
        state: S,
        update: Optional[Callable[[], None]] = None,
        enter: Optional[Callable[[], bool]] = None,
        exit: Optional[Callable[[], bool]] = None,
    ) -> None:
        self.goal_machine.state_machine.add_state(state.name, state.value, update, enter, exit)

    def update(self) -> None:
        self.goal_machine.update()

    def on_method_change(self, state_id, method) -> None:
        pass


__all__ = ["GoalBuilder", "GoalStateMachine", "UtilityAgent"]
