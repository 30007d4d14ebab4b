"""Project-wide exception types."""

class UtilityEngineError(Exception):
    """Base exception for all engine errors."""


class InvalidInputError(UtilityEngineError, ValueError):
    """Raised when factor or weight sequences are absent, empty, or misaligned."""


class ConfigValidationError(UtilityEngineError):
    """Raised when validation fails for a supplied definition."""


class StateMachineError(UtilityEngineError):
    """Raised when a state machine is driven into an invalid state."""
