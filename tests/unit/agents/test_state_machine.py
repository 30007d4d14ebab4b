"""Unit tests for the callback-driven state machine."""

from __future__ import annotations

import pytest

from utility_engine.agents import MethodKind, StateMachine
from utility_engine.exceptions import ConfigValidationError, StateMachineError


def test_switch_runs_exit_enter_then_update():
    calls = []
    sm = StateMachine()
    sm.add_state("idle", 1, update=lambda: calls.append("idle.update"), exit=lambda: calls.append("idle.exit") or True)
    sm.add_state("walk", 2, update=lambda: calls.append("walk.update"), enter=lambda: calls.append("walk.enter") or True)

    sm.switch_state(1)
    sm.update()
    sm.switch_state(2)
    assert sm.is_in_transition()
    sm.update()

    assert calls == ["idle.update", "idle.exit", "walk.enter", "walk.update"]
    assert sm.current_state == 2
    assert not sm.is_in_transition()


def test_unfinished_enter_spans_updates():
    progress = {"steps": 0}

    def enter() -> bool:
        progress["steps"] += 1
        return progress["steps"] >= 3

    sm = StateMachine()
    sm.add_state("charge", "charge", enter=enter)
    sm.switch_state("charge")

    sm.update()
    sm.update()
    assert sm.is_in_transition()
    sm.update()
    assert not sm.is_in_transition()
    assert sm.current_state == "charge"


def test_method_switch_callback_reports_changes_once():
    seen = []
    sm = StateMachine()
    sm.add_method_switch_callback(lambda state_id, method: seen.append((state_id, method)))
    sm.add_state("a", 1)
    sm.add_state("b", 2)

    sm.switch_state(1)
    sm.update()
    sm.update()
    sm.switch_state(2)
    sm.update()

    assert seen == [
        (1, MethodKind.ENTER),
        (1, MethodKind.UPDATE),
        (1, MethodKind.EXIT),
        (2, MethodKind.ENTER),
        (2, MethodKind.UPDATE),
    ]


def test_switch_to_current_state_is_noop():
    exits = []
    sm = StateMachine()
    sm.add_state("a", 1, exit=lambda: exits.append(1) or True)
    sm.switch_state(1)
    sm.update()
    sm.switch_state(1)
    assert not sm.is_in_transition()
    sm.update()
    assert exits == []


def test_unknown_state_raises():
    sm = StateMachine()
    with pytest.raises(StateMachineError):
        sm.switch_state(99)


def test_duplicate_state_id_rejected():
    sm = StateMachine()
    sm.add_state("a", 1)
    with pytest.raises(ConfigValidationError):
        sm.add_state("b", 1)
