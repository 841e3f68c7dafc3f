from __future__ import annotations


class DomainError(Exception):
    """Base exception for business rule violations."""

    def __init__(self, message: str = ""):
        self.message = message or self.__class__.__name__
        super().__init__(self.message)

    @property
    def kind(self) -> str:
        return self.__class__.__name__


class ValidationError(DomainError):
    """Raised when input data is invalid or violates domain rules."""


class InvalidParameter(ValidationError):
    """Session parameters (radius, time limit, coordinates) out of bounds."""


class InvalidGradeInput(ValidationError):
    """Grade input outside its declared numeric domain."""


class NotFound(DomainError):
    """Referenced session, cadet, term or grade row does not exist."""


class SessionNotActive(DomainError):
    """Check-in against a completed, expired or not yet opened session."""


class OutOfRange(DomainError):
    """Check-in location outside the session radius."""

    def __init__(self, message: str = "", *, distance_meters: float | None = None, radius_meters: float | None = None):
        super().__init__(message)
        self.distance_meters = distance_meters
        self.radius_meters = radius_meters


class DuplicateCheckIn(DomainError):
    """A record already exists for this (session, cadet) pair."""
