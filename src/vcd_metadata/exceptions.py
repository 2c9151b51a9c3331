"""vCloud Director SDK exceptions."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from vcd_metadata.models import TaskRecord


class VCDError(Exception):
    """Base exception for all vCloud Director SDK errors."""


class VCDAPIError(VCDError):
    """API request failed."""

    def __init__(
        self,
        message: str,
        status_code: int | None = None,
        response_text: str | None = None,
        *,
        major_error_code: int | None = None,
        minor_error_code: str | None = None,
    ):
        super().__init__(message)
        self.status_code = status_code
        self.response_text = response_text
        self.major_error_code = major_error_code
        self.minor_error_code = minor_error_code


class VCDAuthenticationError(VCDAPIError):
    """Authentication or authorization failed (401, 403)."""


class VCDNotFoundError(VCDAPIError):
    """Resource not found (404)."""


class VCDValidationError(VCDAPIError):
    """Request validation failed (400, 422) or invalid domain/visibility pairing."""

    def __init__(self, message: str, *args, original: Exception | None = None, **kwargs):
        super().__init__(message, *args, **kwargs)
        self.original = original


class VCDConnectionError(VCDError):
    """Failed to connect to the vCloud Director API."""


class VCDTaskError(VCDError):
    """A task was accepted by the server but did not succeed."""

    def __init__(self, message: str, task: TaskRecord | None = None):
        super().__init__(message)
        self.task = task


class VCDTaskTimeoutError(VCDTaskError):
    """A task did not reach a terminal state before the deadline."""
