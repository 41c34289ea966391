"""Custom exceptions for gacs-pack."""

from typing import Iterable


class GacsPackError(Exception):
    """Base exception for gacs-pack errors."""
    pass


class CollaboratorNotConfigured(GacsPackError):
    """Raised when a required collaborator is missing at build time."""

    def __init__(self, missing: Iterable[str]):
        self.missing = tuple(missing)
        super().__init__(
            f"Required collaborator(s) not configured: {', '.join(self.missing)}"
        )


class EventSinkFailure(GacsPackError):
    """Raised by event sinks that could not deliver an event.

    The engine logs and discards it; it never reaches the caller.
    """
    pass
