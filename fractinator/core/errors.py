from __future__ import annotations


class FractinatorError(Exception):
    """Base class for everything the animation core raises on purpose."""


class SurfaceUnavailable(FractinatorError):
    """The host surface was torn down; the render loop stops."""


class InterruptedWait(FractinatorError):
    """The inter-frame sleep was cut short."""


class InvariantViolation(FractinatorError):
    """A collection invariant broke. This is a programming defect."""


class EmptyGenerationError(InvariantViolation):
    pass


class EmptySequenceError(InvariantViolation):
    pass


class UnknownCommand(FractinatorError, ValueError):
    pass


class ConfigError(FractinatorError, ValueError):
    pass
