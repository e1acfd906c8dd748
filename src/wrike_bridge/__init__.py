"""
Wrike Bridge - Wrike board client behind a message-based UI bridge.

This package connects a sandboxed rendering surface, which has no network
or credential access of its own, to the Wrike v4 REST API.

Architecture:
    Rendering Surface
         │  {command, payload}
         ▼
    Bridge Controller (dispatch & error boundary)
         │
         ▼
    Wrike Client (auth headers, envelope, typed errors)
         │
         ▼
    Wrike API v4

The access token lives in host secret storage and is checked by the
token validator before it is stored.
"""

__version__ = "0.1.0"
__author__ = "Wrike Bridge Contributors"

from wrike_bridge.exceptions import (
    WrikeError,
    StorageFailure,
    RemoteApiError,
    TransportFailure,
    EnvelopeError,
    EmptyResponseError,
    BulkUpdateError,
    ConfigurationError,
)

__all__ = [
    "__version__",
    "WrikeError",
    "StorageFailure",
    "RemoteApiError",
    "TransportFailure",
    "EnvelopeError",
    "EmptyResponseError",
    "BulkUpdateError",
    "ConfigurationError",
]
