"""
Shared exceptions for service layer operations.

Every failure a request can end in is one of these. The API layer translates
them into `{"success": false, "message": ...}` responses in one place
(see api.main), so services never build HTTP responses themselves.
"""


class AccountLayerError(Exception):
    """Base class for all expected service failures."""

    status_code: int = 500

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)


class ValidationError(AccountLayerError):
    """Raised when input is missing or malformed."""

    status_code = 400

    def __init__(self, message: str, field: str | None = None) -> None:
        self.field = field
        super().__init__(message)


class UnauthorizedError(AccountLayerError):
    """Raised when the session token is missing, expired, or invalid."""

    status_code = 401


class ForbiddenError(AccountLayerError):
    """Raised when an authenticated caller does not own the target resource."""

    status_code = 403


class NotFoundError(AccountLayerError):
    """Raised when a referenced account, profile, or checkpoint does not exist."""

    status_code = 404


class InvalidCredentialsError(NotFoundError):
    """
    Raised when login fails.

    Unknown email and wrong password are indistinguishable, and both answer 404
    to match the status code existing clients expect.
    """

    def __init__(self) -> None:
        super().__init__("Invalid credentials")


class QuotaExceededError(AccountLayerError):
    """Raised when creating a resource would exceed an account limit."""

    status_code = 400

    def __init__(self, resource: str, limit: int) -> None:
        self.resource = resource
        self.limit = limit
        super().__init__(f"User cannot have more than {limit} {resource}.")


class UpstreamFailureError(AccountLayerError):
    """Raised when the movie catalog API fails or is unreachable."""

    status_code = 502
