"""Callback-driven state machine with multi-step enter/exit transitions."""

from __future__ import annotations

from dataclasses import dataclass
from enum import IntEnum
from typing import Callable, Dict, Hashable, List, Optional

from utility_engine.exceptions import ConfigValidationError, StateMachineError
from utility_engine.utils.logging import get_logger

log = get_logger(__name__, component="agents.state_machine")

StepFn = Callable[[], None]
PhaseFn = Callable[[], bool]


class MethodKind(IntEnum):
    ENTER = 0
    UPDATE = 1
    EXIT = 2


MethodSwitchCallback = Callable[[Hashable, MethodKind], None]


@dataclass(slots=True)
class StateDef:
    name: str
    state_id: Hashable
    update: Optional[StepFn] = None
    enter: Optional[PhaseFn] = None
    exit: Optional[PhaseFn] = None


class StateMachine:
    """Host for named states.

    ``enter`` and ``exit`` callbacks return True once finished; returning
    False keeps the machine in transition and the same callback is called
    again on the next :meth:`update`. Missing callbacks count as finished.
    """

    def __init__(self) -> None:
        self._states: Dict[Hashable, StateDef] = {}
        self._current: Optional[Hashable] = None
        self._pending: Optional[Hashable] = None
        self._phase: Optional[MethodKind] = None
        self._callbacks: List[MethodSwitchCallback] = []
        self._last_method: Optional[tuple] = None

    def add_state(
        self,
        name: str,
        state_id: Hashable,
        update: Optional[StepFn] = None,
        enter: Optional[PhaseFn] = None,
        exit: Optional[PhaseFn] = None,
    ) -> None:
        if state_id in self._states:
            raise ConfigValidationError(f"state id {state_id!r} already registered")
        self._states[state_id] = StateDef(name=name, state_id=state_id, update=update, enter=enter, exit=exit)

    def has_state(self, state_id: Hashable) -> bool:
        return state_id in self._states

    @property
    def current_state(self) -> Optional[Hashable]:
        return self._current

    def add_method_switch_callback(self, callback: MethodSwitchCallback) -> None:
        self._callbacks.append(callback)

    def is_in_transition(self) -> bool:
        return self._pending is not None

    def switch_state(self, state_id: Hashable) -> None:
        """Begin moving to ``state_id``; the move completes during :meth:`update`."""

        if state_id not in self._states:
            raise StateMachineError(f"unknown state id {state_id!r}")
        if state_id == self._pending or (state_id == self._current and self._pending is None):
            return
        if self._pending is not None and self._phase is MethodKind.ENTER:
            # Target was already being entered; it must exit before the retarget.
            self._current = self._pending
        self._pending = state_id
        self._phase = MethodKind.EXIT if self._current is not None else MethodKind.ENTER
        log.debug(
            "State switch requested",
            extra={"state": self._states[state_id].name},
        )

    def update(self) -> None:
        """Advance a pending transition, then run the current state's update."""

        while self._pending is not None:
            if self._phase is MethodKind.EXIT:
                state = self._states[self._current]
                self._notify(state.state_id, MethodKind.EXIT)
                if state.exit is not None and not state.exit():
                    return
                self._phase = MethodKind.ENTER
            else:
                state = self._states[self._pending]
                self._notify(state.state_id, MethodKind.ENTER)
                if state.enter is not None and not state.enter():
                    return
                self._current = self._pending
                self._pending = None
                self._phase = None

        if self._current is None:
            return
        state = self._states[self._current]
        self._notify(state.state_id, MethodKind.UPDATE)
        if state.update is not None:
            state.update()

    def _notify(self, state_id: Hashable, method: MethodKind) -> None:
        key = (state_id, method)
        if key == self._last_method:
            return
        self._last_method = key
        for callback in self._callbacks:
            callback(state_id, method)


__all__ = ["MethodKind", "StateDef", "StateMachine"]
