"""
Wrike Bridge Input Models.

Inputs are organized into two groups:
    - Command payloads sent by the rendering surface
    - MCP tool inputs accepted by the server
"""

from wrike_bridge.tools.inputs import (
    BulkUpdateInput,
    CreateTaskInput,
    FolderInput,
    SendCommandInput,
    SetTokenInput,
    SpaceInput,
    TaskInput,
    UpdateTaskInput,
    UploadAttachmentInput,
)

__all__ = [
    "BulkUpdateInput",
    "CreateTaskInput",
    "FolderInput",
    "SendCommandInput",
    "SetTokenInput",
    "SpaceInput",
    "TaskInput",
    "UpdateTaskInput",
    "UploadAttachmentInput",
]
