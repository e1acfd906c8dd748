"""Access token storage and validation."""

from wrike_bridge.auth.store import CredentialStore, FileSecretStorage
from wrike_bridge.auth.validator import TokenValidator, ValidationResult

__all__ = [
    "CredentialStore",
    "FileSecretStorage",
    "TokenValidator",
    "ValidationResult",
]
