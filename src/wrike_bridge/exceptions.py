"""
Wrike Bridge Exceptions.

All errors raised by the bridge derive from WrikeError so the bridge
controller can catch them in one place. Token validation failures are
not exceptions: they are returned as ValidationResult values.

Hierarchy:
    WrikeError
    ├── StorageFailure        host secret storage fault
    ├── RemoteApiError        non-2xx HTTP response
    ├── TransportFailure      network-level failure, no HTTP status
    ├── EnvelopeError         2xx body is not a {kind, data} envelope
    ├── EmptyResponseError    singleton accessor got an empty data list
    ├── BulkUpdateError       a sequential bulk update stopped early
    └── ConfigurationError    missing or invalid local configuration
"""

from __future__ import annotations

from typing import Sequence


class WrikeError(Exception):
    """Base exception for all Wrike bridge errors."""

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)


class StorageFailure(WrikeError):
    """The host secret storage could not be read or written."""


class RemoteApiError(WrikeError):
    """
    A non-2xx response from the Wrike API.

    The rendered message embeds the numeric status and the status text
    verbatim; the bridge classifies authentication failures by matching
    on that text.
    """

    def __init__(self, status: int, status_text: str, body_text: str = "") -> None:
        self.status = status
        self.status_text = status_text
        self.body_text = body_text
        super().__init__(f"Wrike API Error: {status} {status_text} - {body_text}")


class TransportFailure(WrikeError):
    """DNS, TLS, connection or timeout failure reported by the transport."""


class EnvelopeError(WrikeError):
    """A successful response did not carry a {kind, data: [...]} envelope."""


class EmptyResponseError(WrikeError):
    """A singleton accessor received an empty data list."""

    def __init__(self, operation: str) -> None:
        self.operation = operation
        super().__init__(f"Wrike API returned no data for {operation}")


class BulkUpdateError(WrikeError):
    """
    A bulk update stopped at the first failing task.

    Updates applied before the failure are not rolled back.
    """

    def __init__(
        self,
        failed_id: str,
        applied_ids: Sequence[str],
        total: int,
        cause: Exception,
    ) -> None:
        self.failed_id = failed_id
        self.applied_ids = list(applied_ids)
        self.total = total
        self.cause = cause
        super().__init__(
            f"Bulk update stopped at task {failed_id} after {len(self.applied_ids)} of "
            f"{total} updates were applied (applied updates are kept): {cause}"
        )


class ConfigurationError(WrikeError):
    """Local configuration is missing or invalid."""
