# site_api/core/exceptions.py
from __future__ import annotations

from typing import Any, Dict, Optional


class BaseAPIException(Exception):
    """Base exception for all API errors.

    ``message`` is safe to show to end users. ``details`` carries diagnostics
    for the logs and is never rendered in a response.
    """

    def __init__(
        self,
        message: str,
        status_code: int = 500,
        code: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None,
        headers: Optional[Dict[str, str]] = None,
    ):
        self.message = message
        self.status_code = status_code
        self.code = code or self.__class__.__name__
        self.details = details or {}
        self.headers = headers
        super().__init__(self.message)

    def to_response(self) -> Dict[str, Any]:
        return {"error": self.message, "code": self.code}


class NotFoundError(BaseAPIException):
    """Resource not found."""
    def __init__(self, message: str = "Resource not found", **kwargs):
        kwargs.setdefault("code", "not_found")
        super().__init__(message, status_code=404, **kwargs)


class DatabaseError(BaseAPIException):
    """Database error."""
    def __init__(self, message: str = "Database error", **kwargs):
        kwargs.setdefault("code", "database_error")
        super().__init__(message, status_code=500, **kwargs)


class InvalidInputError(BaseAPIException):
    """The client supplied an unusable request."""
    def __init__(self, message: str = "Business description is required", **kwargs):
        kwargs.setdefault("code", "invalid_input")
        super().__init__(message, status_code=400, **kwargs)


class NotConfiguredError(BaseAPIException):
    """A required server-side credential is missing."""
    def __init__(self, message: str = "AI service not configured", **kwargs):
        kwargs.setdefault("code", "not_configured")
        super().__init__(message, status_code=500, **kwargs)


class CatalogUnavailableError(BaseAPIException):
    """The industry catalog could not produce a usable answer."""
    def __init__(self, message: str = "Industries are temporarily unavailable", **kwargs):
        kwargs.setdefault("code", "catalog_unavailable")
        super().__init__(message, status_code=503, **kwargs)


class ProviderContractViolationError(BaseAPIException):
    """The classification provider answered, but not in the agreed format."""
    def __init__(self, message: str = "We couldn't match your business right now. Please try again.", **kwargs):
        kwargs.setdefault("code", "provider_contract_violation")
        super().__init__(message, status_code=502, **kwargs)


class ProviderUnavailableError(BaseAPIException):
    """The classification provider could not be reached or refused the call."""
    def __init__(self, message: str = "Our matching service is busy. Please try again shortly.", **kwargs):
        kwargs.setdefault("code", "provider_unavailable")
        super().__init__(message, status_code=503, **kwargs)
