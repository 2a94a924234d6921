class DomainError(Exception):
    """Base class for errors the API reports with their own message."""


class ValidationError(DomainError):
    """Bad input; surfaces as HTTP 400."""


class AuthenticationError(DomainError):
    """Unknown account or wrong password; HTTP 401."""


class AuthorizationError(DomainError):
    """Caller may not touch the resource (e.g. someone else's task); HTTP 403."""
