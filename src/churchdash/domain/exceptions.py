class ChurchDashError(Exception):
    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)


class NotFoundError(ChurchDashError):
    """Requested resource does not exist."""


class ConflictError(ChurchDashError):
    """Operation conflicts with existing state (e.g. attendance already recorded)."""


class ValidationError(ChurchDashError):
    """Request is well-formed but cannot be acted on."""


class ForbiddenError(ChurchDashError):
    """Caller lacks the admin role."""


class NetworkError(ChurchDashError):
    """Upstream fetch failed or returned a non-success status."""
