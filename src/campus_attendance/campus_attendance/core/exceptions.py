class DomainError(Exception):
    """Base exception for business rule violations."""


class ValidationError(DomainError):
    """Raised when input data is invalid or violates domain rules."""


class InvalidCoordinate(ValidationError):
    """Raised when a latitude/longitude lies outside the valid range."""


class AttendanceRejected(DomainError):
    """A check-in attempt that did not take effect.

    ``retryable`` tells the caller whether fixing the input and trying again
    can succeed, or whether the attempt is permanently void for this session.
    """

    code = "REJECTED"
    retryable = True

    def __init__(self, message: str | None = None):
        super().__init__(message or self.__doc__.strip())


class SessionExpired(AttendanceRejected):
    """Session is not active or the attendance window has closed."""

    code = "SESSION_EXPIRED"
    retryable = False


class OutOfBounds(AttendanceRejected):
    """Location is outside the campus geofence."""

    code = "OUT_OF_BOUNDS"


class OpticalMismatch(AttendanceRejected):
    """Scanned QR code does not match the active session."""

    code = "OPTICAL_MISMATCH"


class InvalidToken(AttendanceRejected):
    """Invalid session OTP."""

    code = "INVALID_TOKEN"


class OutsideOperatingWindow(AttendanceRejected):
    """Check-in is closed at this time of day."""

    code = "OUTSIDE_OPERATING_WINDOW"


class DuplicateSubmission(AttendanceRejected):
    """Attendance already marked for this session."""

    code = "DUPLICATE_SUBMISSION"
    retryable = False


class PersistenceFailure(DomainError):
    """The store rejected or could not complete an operation; nothing took effect."""

    code = "PERSISTENCE_FAILURE"
    retryable = True


class RemoteUnavailable(PersistenceFailure):
    """The remote database could not be reached."""

    code = "REMOTE_UNAVAILABLE"


class UniqueViolation(PersistenceFailure):
    """An insert collided with an existing row on a unique key."""

    code = "UNIQUE_VIOLATION"
    retryable = False


class SessionConflict(DomainError):
    """Two sessions tried to become active at the same time."""

    code = "SESSION_CONFLICT"
    retryable = True
