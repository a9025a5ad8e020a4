# peertutor/errors.py


class SchedulingError(Exception):
    """Base class for every error raised by the scheduling core."""


class ValidationError(SchedulingError):
    """Bad input shape or an eligibility violation. Never retried."""


class ParseError(ValidationError):
    """Malformed time or weekday string."""


class NotFoundError(SchedulingError):
    """Missing tutor, slot or subject."""


class ConflictError(SchedulingError):
    """The slot cannot be taken: already booked, expired, or the race was lost."""


class VersionConflict(SchedulingError):
    """A compare-and-swap write found the record changed since it was read."""

    def __init__(self, tutor_id: str, expected_version: int):
        super().__init__(f"Tutor {tutor_id!r} changed since version {expected_version}")
        self.tutor_id = tutor_id
        self.expected_version = expected_version
