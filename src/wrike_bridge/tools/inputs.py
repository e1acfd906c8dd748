"""
Pydantic Input Models for Bridge Commands and MCP Tools.

Command payload models validate what the rendering surface sends with
each inbound command. Keys are camelCase on the wire (``folderId``,
``taskIds``...). MCP tool input models validate the arguments of the
server's tools.
"""

from __future__ import annotations

import base64
import binascii
from typing import Any, Dict, List

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

from wrike_bridge.models import CreateTaskPayload, UpdateTaskPayload


class BaseCommandInput(BaseModel):
    """Base model for command payloads."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        str_strip_whitespace=True,
        extra="ignore",
    )


# =============================================================================
# Command Payloads
# =============================================================================


class FolderInput(BaseCommandInput):
    """Payload of getTasks."""

    folder_id: str = Field(..., min_length=1, description="Folder identifier")


class SpaceInput(BaseCommandInput):
    """Payload of getFolders."""

    space_id: str = Field(..., min_length=1, description="Space identifier")


class TaskInput(BaseCommandInput):
    """Payload of getTask and getAttachments."""

    task_id: str = Field(..., min_length=1, description="Task identifier")


class UpdateTaskInput(BaseCommandInput):
    """Payload of updateTask."""

    task_id: str = Field(..., min_length=1)
    updates: UpdateTaskPayload = Field(..., description="Fields to change; others are left alone")


class BulkUpdateInput(BaseCommandInput):
    """Payload of bulkUpdateTasks. The same updates are applied to every task."""

    task_ids: List[str] = Field(..., description="Tasks to update, in order")
    updates: UpdateTaskPayload


class CreateTaskInput(BaseCommandInput):
    """Payload of createTask."""

    folder_id: str = Field(..., min_length=1)
    task_data: CreateTaskPayload


class UploadAttachmentInput(BaseCommandInput):
    """Payload of uploadAttachment. File content arrives base64-encoded."""

    task_id: str = Field(..., min_length=1)
    file_name: str = Field(..., min_length=1, max_length=255)
    content: bytes = Field(
        ...,
        validation_alias=AliasChoices("fileData", "base64Data", "content"),
        description="Base64-encoded file content",
    )

    @field_validator("content", mode="before")
    @classmethod
    def decode_base64(cls, v: Any) -> bytes:
        if isinstance(v, bytes):
            return v
        if not isinstance(v, str):
            raise ValueError("file data must be a base64 string")
        try:
            return base64.b64decode(v, validate=True)
        except binascii.Error as e:
            raise ValueError(f"file data is not valid base64: {e}") from e


# =============================================================================
# MCP Tool Inputs
# =============================================================================


class SetTokenInput(BaseModel):
    """Input for storing a Wrike access token."""

    model_config = ConfigDict(str_strip_whitespace=True, extra="forbid")

    token: str = Field(
        ...,
        description="Wrike permanent access token",
        min_length=1,
    )


class SendCommandInput(BaseModel):
    """Input for sending a command message to the open board."""

    model_config = ConfigDict(str_strip_whitespace=True, extra="forbid")

    command: str = Field(
        ...,
        description="Bridge command, e.g. 'getSpaces', 'getTasks', 'updateTask'",
        min_length=1,
    )
    payload: Dict[str, Any] = Field(
        default_factory=dict,
        description="Command payload, e.g. {'folderId': 'IEAAAAAA'}",
    )
