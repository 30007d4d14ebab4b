"""Validated definitions consumed by scoring and agent components."""

from utility_engine.schema.transition import Transition
from utility_engine.schema.utility import UtilityAction

__all__ = ["Transition", "UtilityAction"]
