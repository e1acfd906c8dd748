"""
Pytest Configuration and Fixtures for Wrike Bridge Tests.

This module provides fixtures, mock factories, and shared utilities for
testing the Wrike client, token handling and the bridge.

Architecture:
    - MockWrikeAPI: In-memory Wrike API served through httpx.MockTransport
    - FakeSecretStorage / FakeHost / FakeSurface: host collaborators
    - Factories: Generate test data (tasks, folders, workflows, etc.)
    - Fixtures: Provide configured clients, controllers and mock data
"""

from __future__ import annotations

import json
import re
from typing import Any, AsyncIterator, Optional

import httpx
import pytest

from wrike_bridge.api.client import WrikeClient
from wrike_bridge.auth.store import CredentialStore
from wrike_bridge.bridge.controller import BridgeController
from wrike_bridge.constants import API_BASE_URL, Importance, StatusGroup
from wrike_bridge.models import (
    Attachment,
    CustomFieldDefinition,
    CustomStatus,
    Folder,
    Space,
    Task,
    User,
    Workflow,
)

TEST_TOKEN = "test-token"


# =============================================================================
# Pytest Configuration
# =============================================================================


def pytest_configure(config):
    """Register custom markers."""
    config.addinivalue_line("markers", "unit: Unit tests (fast, isolated)")
    config.addinivalue_line("markers", "client: Wrike HTTP client tests")
    config.addinivalue_line("markers", "auth: Token storage and validation tests")
    config.addinivalue_line("markers", "bridge: Bridge controller tests")
    config.addinivalue_line("markers", "panel: Panel slot and command tests")
    config.addinivalue_line("markers", "models: Data model tests")
    config.addinivalue_line("markers", "server: MCP server tests")
    config.addinivalue_line("markers", "errors: Error handling tests")


# =============================================================================
# ID Generators
# =============================================================================


class IDGenerator:
    """Sequential Wrike-style ID generator for test objects."""

    _counter: int = 0

    @classmethod
    def reset(cls) -> None:
        cls._counter = 0

    @classmethod
    def next_id(cls, prefix: str = "IEAA") -> str:
        cls._counter += 1
        return f"{prefix}{cls._counter:08X}"

    @classmethod
    def task_id(cls) -> str:
        return cls.next_id("IEAAT")

    @classmethod
    def folder_id(cls) -> str:
        return cls.next_id("IEAAF")

    @classmethod
    def user_id(cls) -> str:
        return cls.next_id("KUAA")


# =============================================================================
# Test Data Factories
# =============================================================================


class UserFactory:
    """Factory for creating User test objects."""

    @staticmethod
    def create(
        id: str | None = None,
        first_name: str = "Ada",
        last_name: str = "Lovelace",
        type: str = "Person",
        **kwargs,
    ) -> User:
        return User(
            id=id or IDGenerator.user_id(),
            first_name=first_name,
            last_name=last_name,
            type=type,
            **kwargs,
        )


class SpaceFactory:
    """Factory for creating Space test objects."""

    @staticmethod
    def create(id: str | None = None, title: str = "Engineering", access_type: str = "Public") -> Space:
        return Space(id=id or IDGenerator.next_id("IEAAS"), title=title, access_type=access_type)


class FolderFactory:
    """Factory for creating Folder test objects."""

    @staticmethod
    def create(id: str | None = None, title: str = "Backlog", **kwargs) -> Folder:
        return Folder(id=id or IDGenerator.folder_id(), title=title, scope="WsFolder", **kwargs)


class TaskFactory:
    """Factory for creating Task test objects."""

    @staticmethod
    def create(
        id: str | None = None,
        title: str = "Test Task",
        status: str = "Active",
        importance: Importance = Importance.NORMAL,
        **kwargs,
    ) -> Task:
        return Task(
            id=id or IDGenerator.task_id(),
            title=title,
            status=status,
            importance=importance,
            **kwargs,
        )

    @staticmethod
    def create_batch(count: int, **kwargs) -> list[Task]:
        return [TaskFactory.create(title=f"Task {i+1}", **kwargs) for i in range(count)]


class WorkflowFactory:
    """Factory for creating Workflow test objects."""

    @staticmethod
    def create(
        id: str | None = None,
        name: str = "Default Workflow",
        standard: bool = False,
        status_ids: list[str] | None = None,
    ) -> Workflow:
        statuses = [
            CustomStatus(id=status_id, name=status_id, color="Blue", group=StatusGroup.ACTIVE)
            for status_id in (status_ids or [IDGenerator.next_id("IEAAST")])
        ]
        return Workflow(
            id=id or IDGenerator.next_id("IEAAW"),
            name=name,
            standard=standard,
            custom_statuses=statuses,
        )


class CustomFieldFactory:
    """Factory for creating CustomFieldDefinition test objects."""

    @staticmethod
    def create(id: str | None = None, title: str = "Estimate", type: str = "Numeric") -> CustomFieldDefinition:
        return CustomFieldDefinition(id=id or IDGenerator.next_id("IEAAC"), title=title, type=type)


# =============================================================================
# Mock Wrike API
# =============================================================================


class MockWrikeAPI:
    """
    In-memory Wrike API v4.

    Requests arrive through httpx.MockTransport. Every request is recorded
    for verification, and individual routes can be made to fail.
    """

    def __init__(self, token: str = TEST_TOKEN):
        self.token = token
        self.me: User = UserFactory.create(id="KUAAME01", first_name="Test", last_name="User")
        self.contacts: list[User] = [self.me]
        self.spaces: list[Space] = []
        self.folders: dict[str, Folder] = {}
        self.space_folders: dict[str, list[str]] = {}
        self.tasks: dict[str, dict[str, Any]] = {}
        self.folder_tasks: dict[str, list[str]] = {}
        self.workflows: list[Workflow] = []
        self.custom_fields: list[CustomFieldDefinition] = []
        self.attachments: dict[str, list[dict[str, Any]]] = {}

        self.requests: list[httpx.Request] = []
        self.failures: dict[tuple[str, str], tuple[int, str]] = {}
        self.raise_transport_error: Optional[Exception] = None

    # -------------------------------------------------------------------------
    # Configuration
    # -------------------------------------------------------------------------

    @property
    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self.handle)

    def fail(self, method: str, path: str, status: int, body: str = "") -> None:
        """Make ``method path`` answer with ``status``."""
        self.failures[(method, path)] = (status, body)

    def add_task(self, task: Task, folder_id: str = "IEAAFOLDER") -> Task:
        self.tasks[task.id] = task.to_wire()
        self.folder_tasks.setdefault(folder_id, []).append(task.id)
        return task

    def add_folder(self, folder: Folder, space_id: str) -> Folder:
        self.folders[folder.id] = folder
        self.space_folders.setdefault(space_id, []).append(folder.id)
        return folder

    def seed_data(self, tasks: int = 3) -> None:
        space = SpaceFactory.create(id="IEAASPACE")
        self.spaces.append(space)
        folder = self.add_folder(FolderFactory.create(id="IEAAFOLDER"), space.id)
        for task in TaskFactory.create_batch(tasks):
            self.add_task(task, folder.id)
        self.workflows = [
            WorkflowFactory.create(id="IEAAWSTD", name="Default", standard=True, status_ids=["IEAAST01"]),
        ]
        self.custom_fields = [CustomFieldFactory.create(id="IEAACF01")]

    # -------------------------------------------------------------------------
    # Verification
    # -------------------------------------------------------------------------

    def calls(self, method: str, path: str | None = None) -> list[httpx.Request]:
        return [
            r for r in self.requests
            if r.method == method and (path is None or self._path(r) == path)
        ]

    def assert_called(self, method: str, path: str, times: int | None = None) -> None:
        calls = self.calls(method, path)
        assert calls, f"Expected {method} {path} to be called"
        if times is not None:
            assert len(calls) == times, f"Expected {times} calls to {method} {path}, got {len(calls)}"

    def assert_not_called(self, method: str, path: str) -> None:
        assert not self.calls(method, path), f"Expected {method} {path} not to be called"

    # -------------------------------------------------------------------------
    # Request Handling
    # -------------------------------------------------------------------------

    @staticmethod
    def _path(request: httpx.Request) -> str:
        prefix = httpx.URL(API_BASE_URL).path
        path = request.url.path
        return path[len(prefix):] if path.startswith(prefix) else path

    @staticmethod
    def _envelope(items: list[Any], kind: str = "response") -> httpx.Response:
        return httpx.Response(200, json={"kind": kind, "data": items})

    @staticmethod
    def _not_found(what: str) -> httpx.Response:
        return httpx.Response(
            404,
            json={"errorDescription": f"{what} not found", "error": "resource_not_found"},
        )

    def handle(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if self.raise_transport_error is not None:
            raise self.raise_transport_error

        method, path = request.method, self._path(request)
        if (method, path) in self.failures:
            status, body = self.failures[(method, path)]
            return httpx.Response(status, text=body)

        if request.headers.get("Authorization") != f"Bearer {self.token}":
            return httpx.Response(
                401,
                json={"errorDescription": "Access token is unknown or invalid", "error": "not_authorized"},
            )

        if path == "/contacts":
            if request.url.params.get("me") == "true":
                return self._envelope([self.me.to_wire()] if self.me else [], kind="contacts")
            return self._envelope([c.to_wire() for c in self.contacts], kind="contacts")
        if path == "/spaces":
            return self._envelope([s.to_wire() for s in self.spaces], kind="spaces")
        if path == "/customfields":
            return self._envelope([f.to_wire() for f in self.custom_fields], kind="customfields")
        if path == "/workflows":
            return self._envelope([w.to_wire() for w in self.workflows], kind="workflows")

        if match := re.fullmatch(r"/spaces/([^/]+)/folders", path):
            ids = self.space_folders.get(match.group(1), [])
            return self._envelope([self.folders[i].to_wire() for i in ids], kind="folderTree")

        if match := re.fullmatch(r"/folders/([^/]+)/tasks", path):
            folder_id = match.group(1)
            if method == "POST":
                return self._create_task(folder_id, json.loads(request.content))
            ids = self.folder_tasks.get(folder_id, [])
            return self._envelope([self.tasks[i] for i in ids], kind="tasks")

        if match := re.fullmatch(r"/folders/([^/]+)", path):
            folder = self.folders.get(match.group(1))
            return self._envelope([folder.to_wire()], kind="folders") if folder else self._not_found("Folder")

        if match := re.fullmatch(r"/tasks/([^/]+)/attachments", path):
            task_id = match.group(1)
            if task_id not in self.tasks:
                return self._not_found("Task")
            if method == "POST":
                return self._upload(task_id, request)
            return self._envelope(self.attachments.get(task_id, []), kind="attachments")

        if match := re.fullmatch(r"/tasks/([^/]+)", path):
            task_id = match.group(1)
            if task_id not in self.tasks:
                return self._not_found("Task")
            if method == "PUT":
                return self._update_task(task_id, json.loads(request.content))
            return self._envelope([self.tasks[task_id]], kind="tasks")

        return self._not_found("Route")

    def _create_task(self, folder_id: str, body: dict[str, Any]) -> httpx.Response:
        task = {"id": IDGenerator.task_id(), "status": "Active", "importance": "Normal"}
        task.update({k: v for k, v in body.items() if k != "responsibles"})
        task["responsibleIds"] = body.get("responsibles", [])
        self.tasks[task["id"]] = task
        self.folder_tasks.setdefault(folder_id, []).append(task["id"])
        return self._envelope([task], kind="tasks")

    def _update_task(self, task_id: str, body: dict[str, Any]) -> httpx.Response:
        task = self.tasks[task_id]
        for key in ("title", "description", "status", "customStatusId", "importance", "dates"):
            if key in body:
                task[key] = body[key]
        responsibles = [r for r in task.get("responsibleIds", []) if r not in body.get("removeResponsibles", [])]
        responsibles += [r for r in body.get("addResponsibles", []) if r not in responsibles]
        task["responsibleIds"] = responsibles
        if "customFields" in body:
            fields = {f["id"]: f for f in task.get("customFields", [])}
            fields.update({f["id"]: f for f in body["customFields"]})
            task["customFields"] = list(fields.values())
        return self._envelope([task], kind="tasks")

    def _upload(self, task_id: str, request: httpx.Request) -> httpx.Response:
        attachment = Attachment(
            id=IDGenerator.next_id("IEAAA"),
            name=request.headers["X-File-Name"],
            size=len(request.content),
            content_type=request.headers["Content-Type"],
            type="Wrike",
            task_id=task_id,
        ).to_wire()
        self.attachments.setdefault(task_id, []).append(attachment)
        return self._envelope([attachment], kind="attachments")


# =============================================================================
# Host Fakes
# =============================================================================


class FakeSecretStorage:
    """Dict-backed secret storage that can be told to fail."""

    def __init__(self):
        self.data: dict[str, str] = {}
        self.should_fail: Optional[Exception] = None

    def _check_failure(self) -> None:
        if self.should_fail is not None:
            raise self.should_fail

    async def get(self, key: str) -> Optional[str]:
        self._check_failure()
        return self.data.get(key)

    async def store(self, key: str, value: str) -> None:
        self._check_failure()
        self.data[key] = value

    async def delete(self, key: str) -> None:
        self._check_failure()
        self.data.pop(key, None)


class FakeSurface:
    """Rendering surface recording every message posted to it."""

    def __init__(self, view_type: str = "wrikeBoard", title: str = "Wrike Board"):
        self.view_type = view_type
        self.title = title
        self.messages: list[dict[str, Any]] = []
        self.reveal_count = 0
        self.disposed = False

    async def post_message(self, message: dict[str, Any]) -> None:
        self.messages.append(message)

    def reveal(self) -> None:
        self.reveal_count += 1

    def dispose(self) -> None:
        self.disposed = True

    @property
    def commands(self) -> list[str]:
        return [m["command"] for m in self.messages]

    @property
    def last(self) -> dict[str, Any]:
        return self.messages[-1]


class FakeHost:
    """Host window and surface factory recording notifications."""

    def __init__(self):
        self.info: list[str] = []
        self.errors: list[tuple[str, tuple[str, ...]]] = []
        self.inputs: list[Optional[str]] = []
        self.prompts: list[tuple[str, bool]] = []
        self.error_selection: Optional[str] = None
        self.surfaces: list[FakeSurface] = []

    async def show_information_message(self, message: str, *actions: str) -> Optional[str]:
        self.info.append(message)
        return None

    async def show_error_message(self, message: str, *actions: str) -> Optional[str]:
        self.errors.append((message, actions))
        return self.error_selection if actions else None

    async def show_input_box(self, prompt: str, *, password: bool = False) -> Optional[str]:
        self.prompts.append((prompt, password))
        return self.inputs.pop(0) if self.inputs else None

    def create_surface(self, view_type: str, title: str) -> FakeSurface:
        surface = FakeSurface(view_type, title)
        self.surfaces.append(surface)
        return surface

    @property
    def error_messages(self) -> list[str]:
        return [message for message, _ in self.errors]


# =============================================================================
# Fixtures
# =============================================================================


@pytest.fixture(autouse=True)
def id_generator():
    """Reset and provide ID generator."""
    IDGenerator.reset()
    return IDGenerator


@pytest.fixture
def mock_api() -> MockWrikeAPI:
    """Create a fresh mock API instance."""
    return MockWrikeAPI()


@pytest.fixture
def seeded_mock_api(mock_api: MockWrikeAPI) -> MockWrikeAPI:
    """Mock API with one space, one folder, three tasks and a workflow."""
    mock_api.seed_data(tasks=3)
    return mock_api


@pytest.fixture
async def http_client(mock_api: MockWrikeAPI) -> AsyncIterator[httpx.AsyncClient]:
    """httpx client routed to the mock API."""
    async with httpx.AsyncClient(transport=mock_api.transport) as http:
        yield http


@pytest.fixture
async def client(http_client: httpx.AsyncClient) -> AsyncIterator[WrikeClient]:
    """WrikeClient bound to the test token."""
    async with WrikeClient(TEST_TOKEN, http_client=http_client) as wrike:
        yield wrike


@pytest.fixture
def secrets() -> FakeSecretStorage:
    return FakeSecretStorage()


@pytest.fixture
def credentials(secrets: FakeSecretStorage) -> CredentialStore:
    return CredentialStore(secrets)


@pytest.fixture
def host() -> FakeHost:
    return FakeHost()


@pytest.fixture
def surface() -> FakeSurface:
    return FakeSurface()


@pytest.fixture
def controller(client: WrikeClient, surface: FakeSurface, host: FakeHost) -> BridgeController:
    """Bridge controller wired to the mock API and fake host."""
    return BridgeController(client, surface, host)


# =============================================================================
# Factory Fixtures
# =============================================================================


@pytest.fixture
def task_factory() -> type[TaskFactory]:
    return TaskFactory


@pytest.fixture
def workflow_factory() -> type[WorkflowFactory]:
    return WorkflowFactory
