class TenantSessionError(RuntimeError):
    pass


class NotAuthenticated(TenantSessionError):
    """No restaurant credential in either storage scope."""

    def __init__(self, message: str = "Restaurant information not found. Please login again."):
        super().__init__(message)


class MalformedCredential(TenantSessionError):
    """Stored record is not valid JSON or is missing required fields."""


class TransportFailure(TenantSessionError):
    """Live session check failed on the network or timed out."""
