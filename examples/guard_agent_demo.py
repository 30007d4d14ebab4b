"""Demonstration of utility-driven decisions.

This script demonstrates:
1. Scoring alternatives with calculate_utility
2. A behavior tree whose utility selector picks the best-scoring action
3. A goal-driven agent switching states as its surroundings change
"""

from __future__ import annotations

import logging
from enum import Enum

from utility_engine import calculate_utility
from utility_engine.agents import UtilityAgent
from utility_engine.behavior import Status, dsl
from utility_engine.utils.logging import configure_logging


class Mode(Enum):
    PATROL = 0
    ALERT = 1
    INVESTIGATE = 2


class Guard(UtilityAgent):
    def __init__(self) -> None:
        super().__init__(Mode.PATROL)
        self.noise = 0.0
        self.fatigue = 0.2

        self.define_state(Mode.PATROL, update=lambda: print("  patrolling"))
        self.define_state(Mode.ALERT, update=lambda: print("  on alert"))
        self.define_state(Mode.INVESTIGATE, update=lambda: print("  investigating"))

        (
            self.goal_machine.goals()
            .from_state(Mode.PATROL, lambda: calculate_utility([1.0 - self.noise, self.fatigue], [2.0, 1.0]))
            .end_goal()
            .from_state(Mode.ALERT, lambda: calculate_utility([self.noise, 1.0 - self.fatigue], [3.0, 1.0]))
            .to(Mode.INVESTIGATE, evaluator=lambda: self.noise)
            .end_goal()
        )


def run_demo():
    configure_logging(agent="guard-1", component="demo", level=logging.WARNING)

    print("Weighted utility of [0.2, 0.9] with weights [1, 3]:", calculate_utility([0.2, 0.9], [1.0, 3.0]))
    print()

    hunger = [0.3]
    tree = dsl.priority_sel(
        dsl.seq(dsl.cond(lambda: hunger[0] > 0.9), dsl.act(lambda: print("  eating") or Status.SUCCESS)),
        dsl.util(
            dsl.utility_option("wander", [0.5, 0.4], [1.0, 1.0], lambda: print("  wandering")),
            dsl.utility_option("forage", hunger, [1.0], lambda: print("  foraging")),
        ),
    )
    print("Behavior tree:")
    for level in (0.3, 0.7, 0.95):
        hunger[0] = level
        print(f" hunger={level}")
        tree.tick()
    print()

    print("Guard agent:")
    guard = Guard()
    for noise in (0.0, 0.0, 0.9, 0.9, 0.9, 0.1):
        guard.noise = noise
        print(f" noise={noise} active={guard.goal_machine.active_state.name}")
        guard.update()


if __name__ == "__main__":
    run_demo()
