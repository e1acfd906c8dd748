"""
Token Validation.

A candidate token is checked with one authenticated call to the
"current identity" endpoint. The outcome is always returned as a
ValidationResult so callers can show the reason without handling
exceptions.
"""

from __future__ import annotations

import logging
from typing import Optional

import httpx
from pydantic import BaseModel

from wrike_bridge.api.client import WrikeClient
from wrike_bridge.constants import API_BASE_URL
from wrike_bridge.exceptions import RemoteApiError
from wrike_bridge.models import User

logger = logging.getLogger(__name__)


class ValidationResult(BaseModel):
    """Outcome of validating a token: an identity, or a reason it failed."""

    valid: bool
    identity: Optional[User] = None
    reason: Optional[str] = None

    @classmethod
    def ok(cls, identity: User) -> ValidationResult:
        return cls(valid=True, identity=identity)

    @classmethod
    def failed(cls, reason: str) -> ValidationResult:
        return cls(valid=False, reason=reason)


class TokenValidator:
    """Validates Wrike access tokens against the contacts endpoint."""

    def __init__(
        self,
        base_url: str = API_BASE_URL,
        http_client: httpx.AsyncClient | None = None,
    ) -> None:
        self._base_url = base_url
        self._http_client = http_client

    async def validate(self, token: str) -> ValidationResult:
        """
        Check a token and return who it belongs to.

        Only the first returned contact is taken as the token's owner.
        Never raises.
        """
        try:
            async with WrikeClient(token, base_url=self._base_url, http_client=self._http_client) as client:
                data = await client.request("GET", "/contacts", params={"me": "true"})
            if not data:
                return ValidationResult.failed("No user data returned")
            identity = User.model_validate(data[0])
        except RemoteApiError as e:
            logger.info("Token rejected: %s %s", e.status, e.status_text)
            return ValidationResult.failed(f"Authentication failed ({e.status}): {e.status_text}")
        except Exception as e:
            logger.warning("Token validation error: %s", e)
            return ValidationResult.failed(str(e) or "Unknown error occurred")

        logger.info("Token validated for user %s", identity.id)
        return ValidationResult.ok(identity)
