"""Wrike API constants, enumerations and bridge command names."""

from __future__ import annotations

from enum import Enum

API_BASE_URL = "https://www.wrike.com/api/v4"

# Single key under which the personal access token is kept.
SECRET_KEY = "wrike.pat"

JSON_CONTENT_TYPE = "application/json"
OCTET_STREAM_CONTENT_TYPE = "application/octet-stream"

# Extra task fields requested when listing a folder's tasks.
TASK_FIELDS: tuple[str, ...] = (
    "description",
    "responsibleIds",
    "customFields",
    "briefDescription",
    "attachmentCount",
    "subTaskIds",
    "superTaskIds",
    "metadata",
    "hasAttachments",
)

BOARD_VIEW_TYPE = "wrikeBoard"
BOARD_TITLE = "Wrike Board"


class Importance(str, Enum):
    HIGH = "High"
    NORMAL = "Normal"
    LOW = "Low"


class StatusGroup(str, Enum):
    ACTIVE = "Active"
    COMPLETED = "Completed"
    DEFERRED = "Deferred"
    CANCELLED = "Cancelled"


class CustomFieldType(str, Enum):
    TEXT = "Text"
    NUMERIC = "Numeric"
    CURRENCY = "Currency"
    DATE = "Date"
    DROPDOWN = "DropDown"
    MULTIPLE = "Multiple"


class DateType(str, Enum):
    PLANNED = "Planned"
    MILESTONE = "Milestone"
    BACKLOG = "Backlog"


class Command(str, Enum):
    """Inbound commands accepted from the rendering surface."""

    GET_TASKS = "getTasks"
    GET_FOLDERS = "getFolders"
    GET_SPACES = "getSpaces"
    GET_TASK = "getTask"
    UPDATE_TASK = "updateTask"
    GET_CONTACTS = "getContacts"
    GET_WORKFLOWS = "getWorkflows"
    GET_CUSTOM_FIELDS = "getCustomFields"
    GET_ATTACHMENTS = "getAttachments"
    UPLOAD_ATTACHMENT = "uploadAttachment"
    BULK_UPDATE_TASKS = "bulkUpdateTasks"
    CREATE_TASK = "createTask"


class Response(str, Enum):
    """Outbound message names posted back to the rendering surface."""

    TASKS = "getTasksResponse"
    FOLDERS = "getFoldersResponse"
    SPACES = "getSpacesResponse"
    TASK = "getTaskResponse"
    TASK_UPDATED = "taskUpdated"
    CONTACTS = "getContactsResponse"
    WORKFLOWS = "getWorkflowsResponse"
    CUSTOM_FIELDS = "getCustomFieldsResponse"
    ATTACHMENTS = "getAttachmentsResponse"
    ATTACHMENT_UPLOADED = "attachmentUploaded"
    TASKS_UPDATED = "tasksUpdated"
    TASK_CREATED = "taskCreated"
    ERROR = "error"
