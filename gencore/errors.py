from __future__ import annotations


class GenerationDataError(ValueError):
    """Base class for rejected generation input."""


class InvalidFormat(GenerationDataError):
    """
    Raised when a date string is malformed or not a real calendar date
    """

    def __init__(self, raw: object, expected: str = "DD-MM-YYYY or YYYY-MM-DD") -> None:
        self.raw = raw
        super().__init__(f"invalid date {raw!r} (expected {expected})")


class InvalidValue(GenerationDataError):
    """
    Raised when a generation value is negative, non-finite or not a number
    """

    def __init__(self, raw: object) -> None:
        self.raw = raw
        super().__init__(f"invalid generation {raw!r} (expected non-negative number)")


class NoData(GenerationDataError):
    """Raised when there is nothing to aggregate."""

    def __init__(self, msg: str = "No observations to aggregate.") -> None:
        super().__init__(msg)
