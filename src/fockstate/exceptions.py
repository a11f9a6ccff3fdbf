"""
The `fockstate.exceptions` module includes the errors raised when a Fock state cannot be parsed or operated on.
"""


class FockStateError(Exception):
    """Base class of every error raised by `fockstate`."""


class FockStateParseError(FockStateError, ValueError):
    """Malformed textual notation of a Fock state."""


class UndefinedStateError(FockStateError, ValueError):
    """Operation attempted on a state without an encoding."""

    def __init__(self, message: str = "cannot make operation on undefined state") -> None:
        super().__init__(message)


class InvalidArgumentError(FockStateError, ValueError):
    """Argument inconsistent with the shape of the state."""


class ModeIndexError(FockStateError, IndexError):
    """Mode index outside of $[0, m)$."""
