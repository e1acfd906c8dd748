"""
Host Collaborator Interfaces.

The bridge runs inside a host application that owns secret storage,
user notifications and the sandboxed rendering surface. These protocols
describe what the bridge needs from it; the MCP server provides one
implementation.
"""

from __future__ import annotations

from typing import Any, Optional, Protocol


class SecretStorage(Protocol):
    """Host secret store, keyed by string. Encryption at rest is the host's job."""

    async def get(self, key: str) -> Optional[str]: ...

    async def store(self, key: str, value: str) -> None: ...

    async def delete(self, key: str) -> None: ...


class Window(Protocol):
    """User-facing notifications and prompts."""

    async def show_information_message(self, message: str, *actions: str) -> Optional[str]: ...

    async def show_error_message(self, message: str, *actions: str) -> Optional[str]:
        """Show an error; returns the chosen action, or None if dismissed."""
        ...

    async def show_input_box(self, prompt: str, *, password: bool = False) -> Optional[str]: ...


class Surface(Protocol):
    """A sandboxed rendering surface exchanging {command, payload} messages."""

    async def post_message(self, message: dict[str, Any]) -> None: ...

    def reveal(self) -> None: ...

    def dispose(self) -> None: ...


class SurfaceFactory(Protocol):
    def create_surface(self, view_type: str, title: str) -> Surface: ...
