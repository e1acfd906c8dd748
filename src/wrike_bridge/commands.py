"""
User-facing Wrike commands.

These are the entries a host exposes in its command palette:

    - Set Token:   prompt for a token, validate it, store it on success
    - Clear Token: forget the stored token and close the board
    - Open Board:  open (or reveal) the board panel
"""

from __future__ import annotations

import logging
from typing import Optional

from wrike_bridge.auth.store import CredentialStore
from wrike_bridge.auth.validator import TokenValidator, ValidationResult
from wrike_bridge.bridge.panel import BoardPanel, PanelSlot
from wrike_bridge.exceptions import StorageFailure
from wrike_bridge.host import SurfaceFactory, Window

logger = logging.getLogger(__name__)

TOKEN_PROMPT = "Enter your Wrike Permanent Access Token"


class WrikeCommands:
    """Host command handlers sharing one credential store and panel slot."""

    def __init__(
        self,
        window: Window,
        host: SurfaceFactory,
        credentials: CredentialStore,
        validator: TokenValidator,
        slot: PanelSlot,
    ) -> None:
        self._window = window
        self._host = host
        self._credentials = credentials
        self._validator = validator
        self._slot = slot

    async def set_token(self) -> Optional[ValidationResult]:
        """
        Prompt for a token and store it if Wrike accepts it.

        Returns the validation result, or None if the prompt was cancelled
        or the token could not be stored.
        """
        token = await self._window.show_input_box(TOKEN_PROMPT, password=True)
        if token is None or not token.strip():
            return None
        token = token.strip()

        result = await self._validator.validate(token)
        if not result.valid:
            await self._window.show_error_message(f"Invalid Wrike token: {result.reason}")
            return result

        try:
            await self._credentials.set(token)
        except StorageFailure as e:
            logger.error("Failed to store token: %s", e)
            await self._window.show_error_message(f"Wrike Error: {e}")
            return None

        await self._window.show_information_message(
            f"Wrike token saved. Authenticated as {result.identity.display_name}."
        )
        return result

    async def clear_token(self) -> bool:
        """Delete the stored token and close any open board."""
        try:
            await self._credentials.delete()
        except StorageFailure as e:
            logger.error("Failed to delete token: %s", e)
            await self._window.show_error_message(f"Wrike Error: {e}")
            return False

        await self._slot.close()
        await self._window.show_information_message("Wrike token cleared.")
        return True

    async def open_board(self) -> Optional[BoardPanel]:
        """Open the board, or reveal it if it is already open."""
        try:
            return await self._slot.open(
                self._host,
                self._window,
                self._credentials,
                on_reauthenticate=self.set_token,
            )
        except StorageFailure as e:
            logger.error("Failed to open board: %s", e)
            await self._window.show_error_message(f"Wrike Error: {e}")
            return None
