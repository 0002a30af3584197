class DomainError(Exception):
    """Base exception for business rule violations."""


class ValidationError(DomainError):
    """Raised when input data is invalid or violates domain rules."""


class AuthenticationError(DomainError):
    """Raised when login credentials are invalid."""


class AuthorizationError(DomainError):
    """Raised when a user lacks permission for an action."""


class ConfigurationError(DomainError):
    """Raised when a required setting is missing."""


# -------- QR payload --------
class ScanRejectedError(DomainError):
    """Base for every reason a scan does not produce a record."""


class QrDecodeError(ScanRejectedError):
    """No QR code could be read from the submitted image."""


class MalformedPayloadError(ScanRejectedError):
    """Payload is not JSON or misses required fields."""


class SignatureMismatchError(ScanRejectedError):
    """Payload signature does not match its fields."""


class StalePayloadError(ScanRejectedError):
    """Payload timestamp is outside the freshness window."""


# -------- Attendance writer --------
class OnLeaveError(ScanRejectedError):
    """Employee has an approved leave for the scanned date."""


class DuplicateScanError(ScanRejectedError):
    """A record for (employee, date, scan type) already exists."""


class ScanNotAllowedError(ScanRejectedError):
    """No scan type applies to the employee's day at this time."""


# -------- Backend --------
class BackendError(DomainError):
    """The backend failed; the message is the driver's, unmodified."""


class BackendNotConfiguredError(BackendError):
    """Backend endpoint or key missing from the environment."""
