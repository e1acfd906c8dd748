#!/usr/bin/env python3
"""
Wrike Bridge MCP Server.

This server hosts the Wrike board bridge and exposes it as MCP tools. The
tools play the part of the host command palette (set/clear token, open
and close the board) and of the board's rendering surface (send a
command message and receive the messages the bridge posts back).

Tools:
    - wrike_set_token:    validate and store a personal access token
    - wrike_clear_token:  forget the stored token
    - wrike_open_board:   open the board bound to the stored token
    - wrike_send_command: send {command, payload} to the board
    - wrike_close_board:  close the board

Environment Variables (optional):
    WRIKE_API_BASE_URL
    WRIKE_SECRETS_PATH
    WRIKE_LOG_LEVEL
"""

from __future__ import annotations

import json
import logging
from contextlib import asynccontextmanager
from dataclasses import dataclass
from typing import Any, AsyncIterator, Optional

from mcp.server.fastmcp import FastMCP, Context

from wrike_bridge.auth import CredentialStore, FileSecretStorage, TokenValidator
from wrike_bridge.bridge import PanelSlot
from wrike_bridge.commands import WrikeCommands
from wrike_bridge.settings import Settings, get_settings
from wrike_bridge.tools.inputs import SendCommandInput, SetTokenInput

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)


# =============================================================================
# MCP Host
# =============================================================================


class McpSurface:
    """Rendering surface whose posted messages are collected for the tool caller."""

    def __init__(self, view_type: str, title: str) -> None:
        self.view_type = view_type
        self.title = title
        self.revealed = 0
        self.disposed = False
        self._outbox: list[dict[str, Any]] = []

    async def post_message(self, message: dict[str, Any]) -> None:
        self._outbox.append(message)

    def reveal(self) -> None:
        self.revealed += 1

    def dispose(self) -> None:
        self.disposed = True

    def drain(self) -> list[dict[str, Any]]:
        messages, self._outbox = self._outbox, []
        return messages


class McpHost:
    """
    Host window for the MCP server.

    Notifications are collected and returned with the next tool result.
    Notification actions are never chosen, and the input box answers with
    the value supplied by the tool call.
    """

    def __init__(self) -> None:
        self._notifications: list[dict[str, str]] = []
        self._pending_input: Optional[str] = None

    def provide_input(self, value: str) -> None:
        self._pending_input = value

    async def show_input_box(self, prompt: str, *, password: bool = False) -> Optional[str]:
        value, self._pending_input = self._pending_input, None
        return value

    async def show_information_message(self, message: str, *actions: str) -> Optional[str]:
        self._notifications.append({"level": "info", "message": message})
        return None

    async def show_error_message(self, message: str, *actions: str) -> Optional[str]:
        self._notifications.append({"level": "error", "message": message})
        return None

    def create_surface(self, view_type: str, title: str) -> McpSurface:
        return McpSurface(view_type, title)

    def drain_notifications(self) -> list[dict[str, str]]:
        notifications, self._notifications = self._notifications, []
        return notifications


@dataclass
class BridgeApp:
    """Everything the tools share for the lifetime of the server."""

    host: McpHost
    slot: PanelSlot
    commands: WrikeCommands

    @classmethod
    def from_settings(cls, settings: Settings) -> BridgeApp:
        host = McpHost()
        slot = PanelSlot(base_url=settings.api_base_url)
        commands = WrikeCommands(
            window=host,
            host=host,
            credentials=CredentialStore(FileSecretStorage(settings.secrets_path)),
            validator=TokenValidator(base_url=settings.api_base_url),
            slot=slot,
        )
        return cls(host=host, slot=slot, commands=commands)


# =============================================================================
# Lifespan Management
# =============================================================================


@asynccontextmanager
async def lifespan(mcp: FastMCP) -> AsyncIterator[dict[str, Any]]:
    """
    Manage the bridge lifecycle.

    Builds the host and commands on startup and closes any open board on
    shutdown.
    """
    logger.info("Initializing Wrike Bridge MCP Server...")
    app = BridgeApp.from_settings(get_settings())
    try:
        yield {"app": app}
    finally:
        await app.slot.close()
        logger.info("Wrike Bridge MCP Server stopped")


# Initialize FastMCP server
mcp = FastMCP(
    "wrike_bridge",
    lifespan=lifespan,
)


def get_app(ctx: Context) -> BridgeApp:
    """Get the bridge app from context."""
    return ctx.request_context.lifespan_context["app"]


# =============================================================================
# Result Formatting
# =============================================================================


def format_result(app: BridgeApp, **fields: Any) -> str:
    """Serialize a tool result together with pending host notifications."""
    fields["notifications"] = app.host.drain_notifications()
    return json.dumps(fields, indent=2)


def handle_error(e: Exception, operation: str) -> str:
    """Handle exceptions and return a JSON error result."""
    logger.exception("Error in %s: %s", operation, e)
    return json.dumps({"success": False, "error": f"Unexpected error: {e}"}, indent=2)


# =============================================================================
# Token Tools
# =============================================================================


@mcp.tool(
    name="wrike_set_token",
    annotations={
        "title": "Set Wrike Token",
        "readOnlyHint": False,
        "destructiveHint": False,
        "idempotentHint": True,
        "openWorldHint": True,
    },
)
async def wrike_set_token(params: SetTokenInput, ctx: Context) -> str:
    """
    Validate a Wrike personal access token and store it.

    The token is checked against the Wrike contacts endpoint first; it is
    stored only if Wrike accepts it.

    Args:
        params: Token input:
            - token (str): Wrike permanent access token (required)

    Returns:
        JSON with 'valid', the authenticated user or a failure reason, and
        any notifications shown.
    """
    try:
        app = get_app(ctx)
        app.host.provide_input(params.token)
        result = await app.commands.set_token()

        if result is None:
            return format_result(app, success=False, valid=False)
        return format_result(
            app,
            success=result.valid,
            valid=result.valid,
            user=result.identity.to_wire() if result.identity else None,
            reason=result.reason,
        )

    except Exception as e:
        return handle_error(e, "set_token")


@mcp.tool(
    name="wrike_clear_token",
    annotations={
        "title": "Clear Wrike Token",
        "readOnlyHint": False,
        "destructiveHint": True,
        "idempotentHint": True,
        "openWorldHint": False,
    },
)
async def wrike_clear_token(ctx: Context) -> str:
    """
    Delete the stored Wrike token and close the board if it is open.

    Returns:
        JSON with 'success' and any notifications shown.
    """
    try:
        app = get_app(ctx)
        cleared = await app.commands.clear_token()
        return format_result(app, success=cleared)

    except Exception as e:
        return handle_error(e, "clear_token")


# =============================================================================
# Board Tools
# =============================================================================


@mcp.tool(
    name="wrike_open_board",
    annotations={
        "title": "Open Wrike Board",
        "readOnlyHint": True,
        "destructiveHint": False,
        "idempotentHint": True,
        "openWorldHint": False,
    },
)
async def wrike_open_board(ctx: Context) -> str:
    """
    Open the Wrike board bound to the stored token.

    If the board is already open it is reused. Requires a token set with
    wrike_set_token.

    Returns:
        JSON with 'success' and the list of commands the board accepts.
    """
    try:
        app = get_app(ctx)
        panel = await app.commands.open_board()
        if panel is None:
            return format_result(app, success=False)
        return format_result(app, success=True, commands=panel.controller.commands)

    except Exception as e:
        return handle_error(e, "open_board")


@mcp.tool(
    name="wrike_send_command",
    annotations={
        "title": "Send Board Command",
        "readOnlyHint": False,
        "destructiveHint": False,
        "idempotentHint": False,
        "openWorldHint": True,
    },
)
async def wrike_send_command(params: SendCommandInput, ctx: Context) -> str:
    """
    Send a command message to the Wrike board.

    Opens the board first if needed. Failures are returned as an 'error'
    message with 'isAuthError' set for authentication problems.

    Args:
        params: Command message:
            - command (str): e.g. 'getSpaces', 'getFolders', 'getTasks',
              'getTask', 'updateTask', 'bulkUpdateTasks', 'createTask',
              'getContacts', 'getWorkflows', 'getCustomFields',
              'getAttachments', 'uploadAttachment'
            - payload (dict): e.g. {'spaceId': '...'}, {'folderId': '...'},
              {'taskId': '...', 'updates': {'importance': 'High'}}

    Returns:
        JSON with the messages posted back by the board.

    Examples:
        - List spaces: command="getSpaces"
        - List tasks: command="getTasks", payload={"folderId": "IEAAAAAAI4AAAAAA"}
        - Complete tasks: command="bulkUpdateTasks",
          payload={"taskIds": ["A", "B"], "updates": {"status": "Completed"}}
    """
    try:
        app = get_app(ctx)
        panel = app.slot.current or await app.commands.open_board()
        if panel is None:
            return format_result(app, success=False, messages=[])

        await panel.receive({"command": params.command, "payload": params.payload})
        messages = panel.surface.drain()
        return format_result(app, success=True, messages=messages)

    except Exception as e:
        return handle_error(e, "send_command")


@mcp.tool(
    name="wrike_close_board",
    annotations={
        "title": "Close Wrike Board",
        "readOnlyHint": False,
        "destructiveHint": False,
        "idempotentHint": True,
        "openWorldHint": False,
    },
)
async def wrike_close_board(ctx: Context) -> str:
    """Close the Wrike board and release its connection."""
    try:
        app = get_app(ctx)
        was_open = app.slot.current is not None
        await app.slot.close()
        return format_result(app, success=True, closed=was_open)

    except Exception as e:
        return handle_error(e, "close_board")


# =============================================================================
# Main Entry Point
# =============================================================================


def main():
    """Main entry point for the Wrike Bridge MCP server."""
    logging.getLogger().setLevel(get_settings().log_level)
    mcp.run()


if __name__ == "__main__":
    main()
