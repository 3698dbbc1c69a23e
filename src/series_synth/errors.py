from __future__ import annotations


class SeriesSynthError(Exception):
    """Base class for errors raised by series_synth."""


class ValidationError(SeriesSynthError, ValueError):
    """Raised when a generation config violates one or more documented bounds.

    `errors` holds every violation, not just the first one found, so callers
    can show the complete list to end users verbatim.
    """

    def __init__(self, errors: list[str]):
        self.errors = list(errors)
        super().__init__("Invalid options:\n- " + "\n- ".join(self.errors))


class ComputationError(SeriesSynthError, ValueError):
    """Raised when records are malformed or a computation cannot proceed."""
