"""
Bridge Controller.

Receives command messages from the rendering surface, calls the matching
WrikeClient operation and posts one response message back. All failures
are caught at a single boundary, classified as authentication or generic
errors, shown to the user through the host window and mirrored to the
surface as an ``error`` message.

Messages carry no correlation id: the surface matches responses by
command name and, for single-item responses, by the returned entity id.
"""

from __future__ import annotations

import logging
from typing import Any, Awaitable, Callable, Mapping, Optional, Sequence, Union

from wrike_bridge.api.client import WrikeClient
from wrike_bridge.bridge.messages import InboundMessage, OutboundMessage
from wrike_bridge.constants import Command, Response
from wrike_bridge.exceptions import BulkUpdateError
from wrike_bridge.host import Surface, Window
from wrike_bridge.models import WrikeModel
from wrike_bridge.tools.inputs import (
    BulkUpdateInput,
    CreateTaskInput,
    FolderInput,
    SpaceInput,
    TaskInput,
    UpdateTaskInput,
    UploadAttachmentInput,
)

logger = logging.getLogger(__name__)

AUTH_ERROR_MARKERS = ("401", "Authentication")
AUTH_FAILED_MESSAGE = "Authentication failed. Please re-authenticate."
AUTH_NOTIFICATION = (
    "Wrike authentication failed. Your token may have expired. "
    'Please run "Wrike: Set Token" to re-authenticate.'
)
SET_TOKEN_ACTION = "Set Token"

Handler = Callable[[Mapping[str, Any]], Awaitable[OutboundMessage]]


def is_auth_error(message: str) -> bool:
    """Classify an error by its rendered text."""
    return any(marker in message for marker in AUTH_ERROR_MARKERS)


def _wire(data: Union[WrikeModel, Sequence[WrikeModel]]) -> Any:
    if isinstance(data, WrikeModel):
        return data.to_wire()
    return [item.to_wire() for item in data]


class BridgeController:
    """
    Dispatches surface commands to one WrikeClient.

    Commands are independent: a new command may be handled while an
    earlier one is still waiting on the network.
    """

    def __init__(
        self,
        client: WrikeClient,
        surface: Surface,
        window: Window,
        *,
        on_reauthenticate: Optional[Callable[[], Awaitable[Any]]] = None,
    ) -> None:
        self._client = client
        self._surface = surface
        self._window = window
        self._on_reauthenticate = on_reauthenticate
        self._handlers: dict[str, Handler] = {
            Command.GET_TASKS.value: self._get_tasks,
            Command.GET_FOLDERS.value: self._get_folders,
            Command.GET_SPACES.value: self._get_spaces,
            Command.GET_TASK.value: self._get_task,
            Command.UPDATE_TASK.value: self._update_task,
            Command.GET_CONTACTS.value: self._get_contacts,
            Command.GET_WORKFLOWS.value: self._get_workflows,
            Command.GET_CUSTOM_FIELDS.value: self._get_custom_fields,
            Command.GET_ATTACHMENTS.value: self._get_attachments,
            Command.UPLOAD_ATTACHMENT.value: self._upload_attachment,
            Command.BULK_UPDATE_TASKS.value: self._bulk_update_tasks,
            Command.CREATE_TASK.value: self._create_task,
        }

    @property
    def client(self) -> WrikeClient:
        return self._client

    @property
    def commands(self) -> list[str]:
        return list(self._handlers)

    # =========================================================================
    # Dispatch
    # =========================================================================

    async def handle(self, message: Union[InboundMessage, Mapping[str, Any]]) -> None:
        """
        Handle one inbound message, posting a response or an error.

        On failure the error message is posted to the surface first. The
        call then waits on the host notification and, if the user picks
        "Set Token", on the re-authentication prompt, so it can stay
        pending until the user acts.
        """
        command = "<malformed>"
        try:
            inbound = (
                message if isinstance(message, InboundMessage)
                else InboundMessage.model_validate(message)
            )
            command = inbound.command
            handler = self._handlers.get(command)
            if handler is None:
                logger.warning("Ignoring unknown bridge command %r", command)
                return
            response = await handler(inbound.payload)
        except Exception as e:
            logger.exception("Wrike API Error in %s", command)
            await self._report_failure(e)
            return

        await self._surface.post_message(response.to_wire())

    async def _report_failure(self, error: Exception) -> None:
        text = str(error) or type(error).__name__
        # Bulk errors prefix task ids and counts; classify the failing call only.
        classified = error.cause if isinstance(error, BulkUpdateError) else error

        if is_auth_error(str(classified)):
            await self._surface.post_message(OutboundMessage.error(AUTH_FAILED_MESSAGE, True).to_wire())
            selection = await self._window.show_error_message(AUTH_NOTIFICATION, SET_TOKEN_ACTION)
            if selection == SET_TOKEN_ACTION and self._on_reauthenticate is not None:
                await self._on_reauthenticate()
            return

        await self._surface.post_message(OutboundMessage.error(text, False).to_wire())
        await self._window.show_error_message(f"Wrike Error: {text}")

    # =========================================================================
    # Read Commands
    # =========================================================================

    async def _get_tasks(self, payload: Mapping[str, Any]) -> OutboundMessage:
        params = FolderInput.model_validate(payload)
        tasks = await self._client.get_tasks(params.folder_id)
        return OutboundMessage(command=Response.TASKS.value, payload=_wire(tasks))

    async def _get_folders(self, payload: Mapping[str, Any]) -> OutboundMessage:
        params = SpaceInput.model_validate(payload)
        folders = await self._client.get_folders(params.space_id)
        return OutboundMessage(command=Response.FOLDERS.value, payload=_wire(folders))

    async def _get_spaces(self, payload: Mapping[str, Any]) -> OutboundMessage:
        spaces = await self._client.get_spaces()
        return OutboundMessage(command=Response.SPACES.value, payload=_wire(spaces))

    async def _get_task(self, payload: Mapping[str, Any]) -> OutboundMessage:
        params = TaskInput.model_validate(payload)
        task = await self._client.get_task(params.task_id)
        return OutboundMessage(command=Response.TASK.value, payload=_wire(task))

    async def _get_contacts(self, payload: Mapping[str, Any]) -> OutboundMessage:
        contacts = await self._client.get_contacts()
        return OutboundMessage(command=Response.CONTACTS.value, payload=_wire(contacts))

    async def _get_workflows(self, payload: Mapping[str, Any]) -> OutboundMessage:
        workflows = await self._client.get_workflows()
        return OutboundMessage(command=Response.WORKFLOWS.value, payload=_wire(workflows))

    async def _get_custom_fields(self, payload: Mapping[str, Any]) -> OutboundMessage:
        fields = await self._client.get_custom_fields()
        return OutboundMessage(command=Response.CUSTOM_FIELDS.value, payload=_wire(fields))

    async def _get_attachments(self, payload: Mapping[str, Any]) -> OutboundMessage:
        params = TaskInput.model_validate(payload)
        attachments = await self._client.get_attachments(params.task_id)
        return OutboundMessage(command=Response.ATTACHMENTS.value, payload=_wire(attachments))

    # =========================================================================
    # Write Commands
    # =========================================================================

    async def _update_task(self, payload: Mapping[str, Any]) -> OutboundMessage:
        params = UpdateTaskInput.model_validate(payload)
        task = await self._client.update_task(params.task_id, params.updates)
        return OutboundMessage(command=Response.TASK_UPDATED.value, payload=_wire(task))

    async def _create_task(self, payload: Mapping[str, Any]) -> OutboundMessage:
        params = CreateTaskInput.model_validate(payload)
        task = await self._client.create_task(params.folder_id, params.task_data)
        return OutboundMessage(command=Response.TASK_CREATED.value, payload=_wire(task))

    async def _upload_attachment(self, payload: Mapping[str, Any]) -> OutboundMessage:
        params = UploadAttachmentInput.model_validate(payload)
        await self._client.upload_attachment(params.task_id, params.file_name, params.content)
        return OutboundMessage(
            command=Response.ATTACHMENT_UPLOADED.value,
            payload={"taskId": params.task_id},
        )

    async def _bulk_update_tasks(self, payload: Mapping[str, Any]) -> OutboundMessage:
        """
        Update tasks one after another.

        The first failure stops the batch. Updates already applied stay
        applied; the error says how many went through.
        """
        params = BulkUpdateInput.model_validate(payload)
        applied: list[str] = []
        for task_id in params.task_ids:
            try:
                await self._client.update_task(task_id, params.updates)
            except Exception as e:
                raise BulkUpdateError(task_id, applied, len(params.task_ids), e) from e
            applied.append(task_id)

        logger.info("Bulk update applied to %d tasks", len(applied))
        return OutboundMessage(command=Response.TASKS_UPDATED.value, payload={"taskIds": applied})
