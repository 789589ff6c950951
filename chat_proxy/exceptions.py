"""Custom exceptions shared across the proxy."""

from dataclasses import dataclass


@dataclass(eq=False)
class ServiceError(Exception):
    """Base exception for failures that are reported back to the caller."""

    message: str
    details: str | None = None
    status_code: int | None = None

    http_status = 500

    def __str__(self) -> str:  # pragma: no cover - trivial
        return self.message


class MessageRequiredError(ServiceError):
    """Raised when the inbound request carries no usable message."""

    http_status = 400


class UpstreamCallError(ServiceError):
    """Raised when the inference API cannot be reached or answers with an error."""


class UpstreamShapeError(ServiceError):
    """Raised when the inference API answers 2xx with an unusable body."""


class ConfigurationError(Exception):
    """Raised at startup when required configuration is missing or invalid."""
