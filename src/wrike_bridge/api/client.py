"""
Wrike API v4 Client.

This module provides WrikeClient, an async HTTP client bound to a single
personal access token. Every accessor goes through one request primitive,
so all operations share the same error shaping and envelope unwrapping:

    - Non-2xx responses raise RemoteApiError with status and status text
      in the message.
    - Network failures raise TransportFailure.
    - 2xx responses are decoded from the {kind, data: [...]} envelope and
      the data list is returned.

The client never retries and imposes no timeout of its own; httpx
defaults apply.
"""

from __future__ import annotations

import json
import logging
from types import TracebackType
from typing import Any, Mapping, TypeVar

import httpx

from wrike_bridge.constants import (
    API_BASE_URL,
    JSON_CONTENT_TYPE,
    OCTET_STREAM_CONTENT_TYPE,
    TASK_FIELDS,
)
from wrike_bridge.exceptions import (
    ConfigurationError,
    EmptyResponseError,
    EnvelopeError,
    RemoteApiError,
    TransportFailure,
)
from wrike_bridge.models import (
    Attachment,
    CreateTaskPayload,
    CustomFieldDefinition,
    Folder,
    Space,
    Task,
    UpdateTaskPayload,
    User,
    Workflow,
)

logger = logging.getLogger(__name__)

T = TypeVar("T", bound="WrikeClient")


def _first(data: list[Any], operation: str) -> Any:
    if not data:
        raise EmptyResponseError(operation)
    return data[0]


class WrikeClient:
    """
    Async Wrike API client for one access token.

    Usage:
        async with WrikeClient(token) as client:
            spaces = await client.get_spaces()
            folders = await client.get_folders(spaces[0].id)
    """

    def __init__(
        self,
        token: str,
        *,
        base_url: str = API_BASE_URL,
        http_client: httpx.AsyncClient | None = None,
    ) -> None:
        if not token:
            raise ConfigurationError("A Wrike access token is required")
        self._token = token
        self._base_url = base_url.rstrip("/")
        self._owns_http_client = http_client is None
        self._http = http_client or httpx.AsyncClient()

    # =========================================================================
    # Lifecycle
    # =========================================================================

    async def close(self) -> None:
        """Close the underlying HTTP client if this instance created it."""
        if self._owns_http_client:
            await self._http.aclose()

    async def __aenter__(self: T) -> T:
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: TracebackType | None,
    ) -> None:
        await self.close()

    @property
    def base_url(self) -> str:
        return self._base_url

    # =========================================================================
    # Request Primitive
    # =========================================================================

    def _headers(self, overrides: Mapping[str, str] | None = None) -> httpx.Headers:
        headers = httpx.Headers({
            "Authorization": f"Bearer {self._token}",
            "Content-Type": JSON_CONTENT_TYPE,
        })
        if overrides:
            headers.update(overrides)
        return headers

    async def request(
        self,
        method: str,
        path: str,
        *,
        body: Any = None,
        params: Mapping[str, str] | None = None,
        headers: Mapping[str, str] | None = None,
    ) -> list[Any]:
        """
        Issue an authenticated request and return the envelope's data list.

        Args:
            method: HTTP method
            path: Path below the API root, starting with '/'
            body: JSON-serializable body, or raw bytes for octet-stream uploads
            params: Query parameters
            headers: Header overrides

        Returns:
            The ``data`` list of the response envelope

        Raises:
            RemoteApiError: On a non-2xx response
            TransportFailure: On a network-level failure
            EnvelopeError: If a 2xx body is not a Wrike envelope
        """
        request_headers = self._headers(headers)
        content: bytes | None = None
        if body is not None:
            if request_headers.get("content-type") == OCTET_STREAM_CONTENT_TYPE:
                content = body
            else:
                content = json.dumps(body).encode("utf-8")

        logger.debug("%s %s", method, path)
        try:
            response = await self._http.request(
                method,
                f"{self._base_url}{path}",
                params=params,
                headers=request_headers,
                content=content,
            )
        except httpx.RequestError as e:
            raise TransportFailure(str(e) or type(e).__name__) from e

        if not response.is_success:
            raise RemoteApiError(response.status_code, response.reason_phrase, response.text)

        try:
            envelope = response.json()
        except ValueError as e:
            raise EnvelopeError(f"Invalid JSON in response to {method} {path}: {e}") from e

        if not isinstance(envelope, dict) or not isinstance(envelope.get("data"), list):
            raise EnvelopeError(f"Unexpected response shape for {method} {path}")
        return envelope["data"]

    # =========================================================================
    # Contacts
    # =========================================================================

    async def get_current_user(self) -> User:
        data = await self.request("GET", "/contacts", params={"me": "true"})
        return User.model_validate(_first(data, "get_current_user"))

    async def get_contacts(self) -> list[User]:
        data = await self.request("GET", "/contacts")
        return [User.model_validate(item) for item in data]

    # =========================================================================
    # Spaces & Folders
    # =========================================================================

    async def get_spaces(self) -> list[Space]:
        data = await self.request("GET", "/spaces")
        return [Space.model_validate(item) for item in data]

    async def get_folders(self, space_id: str) -> list[Folder]:
        data = await self.request("GET", f"/spaces/{space_id}/folders")
        return [Folder.model_validate(item) for item in data]

    async def get_folder(self, folder_id: str) -> Folder:
        data = await self.request("GET", f"/folders/{folder_id}")
        return Folder.model_validate(_first(data, "get_folder"))

    # =========================================================================
    # Tasks
    # =========================================================================

    async def get_tasks(self, folder_id: str) -> list[Task]:
        """List tasks in a folder, including tasks of nested folders."""
        params = {
            "fields": json.dumps(list(TASK_FIELDS), separators=(",", ":")),
            "descendants": "true",
        }
        data = await self.request("GET", f"/folders/{folder_id}/tasks", params=params)
        return [Task.model_validate(item) for item in data]

    async def get_task(self, task_id: str) -> Task:
        data = await self.request("GET", f"/tasks/{task_id}")
        return Task.model_validate(_first(data, "get_task"))

    async def create_task(self, folder_id: str, payload: CreateTaskPayload) -> Task:
        data = await self.request("POST", f"/folders/{folder_id}/tasks", body=payload.to_payload())
        return Task.model_validate(_first(data, "create_task"))

    async def update_task(self, task_id: str, updates: UpdateTaskPayload) -> Task:
        """Apply a partial update; fields not set on ``updates`` are left alone."""
        data = await self.request("PUT", f"/tasks/{task_id}", body=updates.to_payload())
        return Task.model_validate(_first(data, "update_task"))

    # =========================================================================
    # Account Metadata
    # =========================================================================

    async def get_custom_fields(self) -> list[CustomFieldDefinition]:
        data = await self.request("GET", "/customfields")
        return [CustomFieldDefinition.model_validate(item) for item in data]

    async def get_workflows(self) -> list[Workflow]:
        data = await self.request("GET", "/workflows")
        return [Workflow.model_validate(item) for item in data]

    # =========================================================================
    # Attachments
    # =========================================================================

    async def get_attachments(self, task_id: str) -> list[Attachment]:
        data = await self.request("GET", f"/tasks/{task_id}/attachments")
        return [Attachment.model_validate(item) for item in data]

    async def upload_attachment(self, task_id: str, file_name: str, content: bytes) -> list[Attachment]:
        """Upload raw bytes as a new attachment on a task."""
        data = await self.request(
            "POST",
            f"/tasks/{task_id}/attachments",
            body=content,
            headers={
                "X-File-Name": file_name,
                "Content-Type": OCTET_STREAM_CONTENT_TYPE,
            },
        )
        return [Attachment.model_validate(item) for item in data]
