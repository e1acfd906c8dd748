"""
Board Panel and the single-panel slot.

At most one board panel, and so one bridge controller and one Wrike
client, is active at a time. PanelSlot holds it: opening while a panel
exists reveals the existing one instead of creating another.
"""

from __future__ import annotations

import asyncio
import logging
from typing import Any, Awaitable, Callable, Mapping, Optional

from wrike_bridge.api.client import WrikeClient
from wrike_bridge.auth.store import CredentialStore
from wrike_bridge.bridge.controller import BridgeController
from wrike_bridge.constants import API_BASE_URL, BOARD_TITLE, BOARD_VIEW_TYPE
from wrike_bridge.host import Surface, SurfaceFactory, Window

logger = logging.getLogger(__name__)

MISSING_TOKEN_MESSAGE = 'Wrike PAT not found. Please run "Wrike: Set Token" first.'

ClientFactory = Callable[[str], WrikeClient]


class BoardPanel:
    """An open board: one surface wired to one bridge controller."""

    def __init__(self, slot: PanelSlot, surface: Surface, controller: BridgeController) -> None:
        self._slot = slot
        self._surface = surface
        self._controller = controller
        self._disposed = False

    @property
    def controller(self) -> BridgeController:
        return self._controller

    @property
    def surface(self) -> Surface:
        return self._surface

    @property
    def disposed(self) -> bool:
        return self._disposed

    async def receive(self, message: Mapping[str, Any]) -> None:
        """Deliver a message from the surface to the bridge."""
        await self._controller.handle(message)

    def reveal(self) -> None:
        self._surface.reveal()

    async def dispose(self) -> None:
        """Close the client, tear down the surface and free the slot."""
        if self._disposed:
            return
        self._disposed = True
        self._slot.release(self)
        self._surface.dispose()
        await self._controller.client.close()
        logger.info("Board panel disposed")


class PanelSlot:
    """Explicit owner of the one active board panel. Opens are serialized."""

    def __init__(self, base_url: str = API_BASE_URL, client_factory: Optional[ClientFactory] = None) -> None:
        self._base_url = base_url
        self._client_factory = client_factory
        self._current: Optional[BoardPanel] = None
        self._lock = asyncio.Lock()

    @property
    def current(self) -> Optional[BoardPanel]:
        return self._current

    def release(self, panel: BoardPanel) -> None:
        if self._current is panel:
            self._current = None

    async def open(
        self,
        host: SurfaceFactory,
        window: Window,
        credentials: CredentialStore,
        *,
        on_reauthenticate: Optional[Callable[[], Awaitable[Any]]] = None,
    ) -> Optional[BoardPanel]:
        """
        Reveal the open panel, or create one bound to the stored token.

        Returns None, after telling the user, when no token is stored.

        Raises:
            StorageFailure: If the token cannot be read
        """
        async with self._lock:
            if self._current is not None:
                self._current.reveal()
                return self._current

            token = await credentials.get()
            if not token:
                await window.show_error_message(MISSING_TOKEN_MESSAGE)
                return None

            if self._client_factory is None:
                client = WrikeClient(token, base_url=self._base_url)
            else:
                client = self._client_factory(token)
            surface = host.create_surface(BOARD_VIEW_TYPE, BOARD_TITLE)
            controller = BridgeController(client, surface, window, on_reauthenticate=on_reauthenticate)
            self._current = BoardPanel(self, surface, controller)
            logger.info("Board panel opened")
            return self._current

    async def close(self) -> None:
        if self._current is not None:
            await self._current.dispose()
