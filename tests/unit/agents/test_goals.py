"""Unit tests for goal-driven state selection and the agent base class."""

from __future__ import annotations

from enum import Enum

import pytest

from utility_engine.agents import GoalStateMachine, MethodKind, UtilityAgent
from utility_engine.exceptions import ConfigValidationError, StateMachineError
from utility_engine.schema import Transition
from utility_engine.scoring import calculate_utility


class Mode(Enum):
    IDLE = 0
    COMBAT = 1
    ATTACK = 2
    RETREAT = 3
    MELEE = 4
    RANGED = 5


def _machine_with_states(*states: Mode) -> tuple[GoalStateMachine, list]:
    log = []
    machine = GoalStateMachine(Mode.IDLE)
    for state in states:
        machine.state_machine.add_state(
            state.name,
            state.value,
            update=lambda s=state: log.append(s),
        )
    return machine, log


def test_goal_fires_and_transitions_follow_one_per_update():
    threat = {"level": 0.0}
    machine, updates = _machine_with_states(Mode.IDLE, Mode.COMBAT, Mode.ATTACK)
    machine.register_goal(Mode.IDLE, lambda: 1.0)
    machine.register_goal(Mode.COMBAT, lambda: threat["level"])
    machine.add_transition(Transition(Mode.COMBAT, Mode.ATTACK, evaluator=lambda: 1.0))

    machine.update()
    assert updates == [Mode.IDLE]

    threat["level"] = 2.0
    machine.update()
    assert machine.primary_state is Mode.COMBAT
    assert updates[-1] is Mode.COMBAT

    machine.update()
    assert machine.active_state is Mode.ATTACK
    assert updates[-1] is Mode.ATTACK

    machine.update()
    assert updates[-1] is Mode.ATTACK


def test_best_transition_wins_and_priority_breaks_ties():
    machine = GoalStateMachine(Mode.COMBAT)
    machine.add_transition(Transition(Mode.COMBAT, Mode.RETREAT, priority=5, evaluator=lambda: 0.5))
    machine.add_transition(Transition(Mode.COMBAT, Mode.ATTACK, priority=1, evaluator=lambda: 0.5))
    machine.state_machine.add_state("COMBAT", Mode.COMBAT.value)
    machine.build()

    queue: list = []
    assert machine.evaluate(Mode.COMBAT, queue) is Mode.ATTACK
    assert queue == [Mode.ATTACK]


def test_transitions_scored_by_weighted_utility():
    machine = GoalStateMachine(Mode.COMBAT)
    machine.add_transition(
        Transition(Mode.COMBAT, Mode.ATTACK, evaluator=lambda: calculate_utility([0.9, 0.2], [1.0, 1.0]))
    )
    machine.add_transition(
        Transition(Mode.COMBAT, Mode.RETREAT, evaluator=lambda: calculate_utility([0.1, 0.9], [3.0, 1.0]))
    )

    queue: list = []
    assert machine.evaluate(Mode.COMBAT, queue) is Mode.ATTACK


def test_duplicate_transition_ignored(caplog):
    machine = GoalStateMachine(Mode.IDLE)
    assert machine.add_transition(Transition(Mode.IDLE, Mode.COMBAT))
    with caplog.at_level("ERROR"):
        assert not machine.add_transition(Transition(Mode.IDLE, Mode.COMBAT, priority=3))
    assert len(machine.transitions_from(Mode.IDLE)) == 1
    assert any("Duplicate transition" in r.message for r in caplog.records)


def test_builder_defines_goals_and_sub_goals():
    machine = (
        GoalStateMachine(Mode.IDLE)
        .goals()
        .from_state(Mode.COMBAT, lambda: 1.0)
        .to(Mode.ATTACK, evaluator=lambda: 0.8)
        .sub_goals()
        .to(Mode.MELEE, evaluator=lambda: 0.2)
        .to(Mode.RANGED, evaluator=lambda: 0.7)
        .up()
        .to(Mode.RETREAT, evaluator=lambda: 0.1)
        .end_goal()
        .done()
    )

    assert Mode.COMBAT in machine.goal_evaluators
    assert [t.to_state for t in machine.transitions_from(Mode.COMBAT)] == [Mode.ATTACK, Mode.RETREAT]

    queue: list = []
    reached = machine.evaluate(Mode.COMBAT, queue, active=Mode.COMBAT)
    assert reached is Mode.ATTACK
    assert machine.evaluate(Mode.ATTACK, queue, active=Mode.COMBAT) is Mode.RANGED
    assert queue == [Mode.ATTACK, Mode.RANGED]


def test_builder_requires_from_state():
    with pytest.raises(ConfigValidationError):
        GoalStateMachine(Mode.IDLE).goals().to(Mode.COMBAT)


def test_cycle_guard_stops_evaluation(caplog):
    machine, _ = _machine_with_states(Mode.IDLE, Mode.COMBAT, Mode.RETREAT)
    machine.add_transition(Transition(Mode.IDLE, Mode.COMBAT, evaluator=lambda: 1.0))
    machine.add_transition(Transition(Mode.COMBAT, Mode.RETREAT, evaluator=lambda: 1.0))
    machine.add_transition(Transition(Mode.RETREAT, Mode.IDLE, evaluator=lambda: 1.0))

    with caplog.at_level("WARNING"):
        machine.update()
    assert any("cycle" in r.message for r in caplog.records)


def test_build_without_definitions_raises():
    with pytest.raises(StateMachineError):
        GoalStateMachine(Mode.IDLE).build()


def test_set_initial_state_locked_after_build():
    machine, _ = _machine_with_states(Mode.IDLE)
    machine.register_goal(Mode.IDLE, lambda: 0.0)
    machine.build()
    with pytest.raises(StateMachineError):
        machine.set_initial_state(Mode.COMBAT)


class Guard(UtilityAgent):
    def __init__(self) -> None:
        super().__init__(Mode.IDLE)
        self.noise = 0.0
        self.trace: list = []
        self.define_state(Mode.IDLE, update=lambda: self.trace.append("idle"))
        self.define_state(Mode.COMBAT, update=lambda: self.trace.append("combat"))
        self.goal_machine.register_goal(Mode.IDLE, lambda: 0.4)
        self.goal_machine.register_goal(
            Mode.COMBAT, lambda: calculate_utility([self.noise, 1.0], [2.0, 1.0]) - 0.5
        )

    def on_method_change(self, state_id, method) -> None:
        self.trace.append((state_id, method))


def test_agent_switches_goal_and_reports_method_changes():
    guard = Guard()
    guard.update()
    assert guard.goal_machine.active_state is Mode.IDLE

    guard.noise = 1.0
    guard.update()

    assert guard.goal_machine.active_state is Mode.COMBAT
    assert guard.trace[-1] == "combat"
    assert (Mode.IDLE.value, MethodKind.EXIT) in guard.trace
    assert (Mode.COMBAT.value, MethodKind.ENTER) in guard.trace
