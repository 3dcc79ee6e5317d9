"""
Engine error taxonomy.

Only blank input and caller-side validation failures are raised.
Noisy free text degrades to defaults instead of raising.
"""


class InplayError(Exception):
    """Base class for every error raised by the in-play engine."""


class ExtractionError(InplayError):
    """The match report could not be turned into a live-stats record."""


class EmptyInputError(ExtractionError):
    """The match report is empty or whitespace-only."""

    def __init__(self, message: str = "Input text is empty."):
        super().__init__(message)


class InvalidInputError(InplayError):
    """Session-level validation failed before invoking a model.

    The pure models never validate (zero odds or negative averages are
    caller bugs). ``MatchSession`` checks its inputs first and raises this.
    """

    def __init__(self, field: str, message: str):
        super().__init__(message)
        self.field = field
        self.message = message

    def to_dict(self) -> dict:
        return {"field": self.field, "message": self.message}
