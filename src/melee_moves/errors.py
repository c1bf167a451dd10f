"""Exceptions raised by melee_moves."""


class MeleeMovesError(Exception):
    """Base class for all melee_moves errors."""


class RecordError(MeleeMovesError):
    """A stored game record could not be read or is malformed."""

    def __init__(self, message: str, source: str | None = None):
        self.source = source
        if source:
            message = f"{source}: {message}"
        super().__init__(message)


class ReplayDecodeError(MeleeMovesError):
    """A replay file could not be decoded."""


class UnsupportedFormatError(MeleeMovesError, ValueError):
    """An output format selector is not one of the known formats."""
