"""
Wrike Data Models.

Pydantic models mirroring Wrike API v4 objects. They are transient:
nothing here is cached or persisted beyond one request/response cycle.

Models:
    - User: Contact (person or group), also the validated identity
    - Space: Top-level workspace
    - Folder: Folder or project holding tasks
    - Task: Work item
    - Workflow: Workflow with its custom statuses
    - CustomFieldDefinition: Account-level custom field definition
    - Attachment: File attached to a task
"""

from wrike_bridge.models.base import WrikeModel
from wrike_bridge.models.user import User, UserProfile
from wrike_bridge.models.space import Space, Folder, FolderProject
from wrike_bridge.models.custom_field import (
    CustomFieldDefinition,
    CustomFieldOption,
    CustomFieldSettings,
)
from wrike_bridge.models.task import (
    Task,
    TaskDates,
    CustomFieldValue,
    Attachment,
    CreateTaskPayload,
    UpdateTaskPayload,
)
from wrike_bridge.models.workflow import CustomStatus, Workflow, resolve_workflow

__all__ = [
    "WrikeModel",
    "User",
    "UserProfile",
    "Space",
    "Folder",
    "FolderProject",
    "CustomFieldDefinition",
    "CustomFieldOption",
    "CustomFieldSettings",
    "Task",
    "TaskDates",
    "CustomFieldValue",
    "Attachment",
    "CreateTaskPayload",
    "UpdateTaskPayload",
    "CustomStatus",
    "Workflow",
    "resolve_workflow",
]
