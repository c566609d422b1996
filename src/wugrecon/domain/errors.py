"""Error taxonomy for reconciliation against the WhatsUp Gold API.

Every error carries enough detail (the raw response body or a structured
description) to be shown to an operator as-is. Nothing here is retried by the
library itself.
"""

from __future__ import annotations


class WugError(RuntimeError):
    """Base class for all reconciliation errors."""


class AuthError(WugError):
    """Raised when exchanging credentials for a bearer token fails."""

    def __init__(self, message: str, *, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code


class MalformedTokenResponse(AuthError):
    """Raised when the token endpoint answers 200 without a usable token."""


class RemoteAPIError(WugError):
    """Raised for any non-success response (or transport failure) from the API."""

    def __init__(self, detail: str, *, status_code: int | None = None) -> None:
        super().__init__(detail)
        self.detail = detail
        self.status_code = status_code


class ResourceNotFound(WugError):
    """Raised when the remote API reports no object for an identifier."""


class AmbiguousResult(WugError):
    """Raised when an identifier resolves to more than one remote object."""

    def __init__(self, identifier: str, count: int) -> None:
        super().__init__(f"Found invalid object count for {identifier}: {count}")
        self.identifier = identifier
        self.count = count


class MappingError(WugError):
    """Raised when a wire payload does not have the expected shape."""


class CreateFailed(WugError):
    """Raised when a create call succeeds but yields no identifier."""

    def __init__(self, detail: str) -> None:
        super().__init__(detail)
        self.detail = detail


__all__ = [
    "AmbiguousResult",
    "AuthError",
    "CreateFailed",
    "MalformedTokenResponse",
    "MappingError",
    "RemoteAPIError",
    "ResourceNotFound",
    "WugError",
]
