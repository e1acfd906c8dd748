"""
Task, attachment and task payload models.

Tasks have no client-side version: the last update sent wins.
"""

from __future__ import annotations

from typing import Any, Iterable, List, Optional

from pydantic import Field, field_validator

from wrike_bridge.constants import DateType, Importance
from wrike_bridge.models.base import WrikeModel
from wrike_bridge.models.custom_field import CustomFieldDefinition


def _unique(ids: Optional[Iterable[str]]) -> Optional[list[str]]:
    """Drop repeated ids, keeping the first occurrence of each."""
    if ids is None:
        return None
    return list(dict.fromkeys(ids))


class TaskDates(WrikeModel):
    type: DateType
    start: Optional[str] = Field(default=None, description="YYYY-MM-DD")
    due: Optional[str] = Field(default=None, description="YYYY-MM-DD")
    duration: Optional[int] = None


class CustomFieldValue(WrikeModel):
    """Value of a custom field on a task, keyed by the definition id."""

    id: str
    value: Optional[str] = None


class Task(WrikeModel):
    """A Wrike task."""

    id: str
    title: str
    description: Optional[str] = None
    status: Optional[str] = None
    custom_status_id: Optional[str] = None
    importance: Optional[Importance] = None
    dates: Optional[TaskDates] = None
    custom_fields: List[CustomFieldValue] = Field(default_factory=list)
    responsible_ids: List[str] = Field(default_factory=list)
    permalink: Optional[str] = None

    @field_validator("responsible_ids")
    @classmethod
    def dedupe_responsibles(cls, v: List[str]) -> List[str]:
        return _unique(v)

    def renderable_custom_fields(
        self,
        definitions: Iterable[CustomFieldDefinition],
    ) -> list[tuple[CustomFieldDefinition, CustomFieldValue]]:
        """
        Pair each custom field value with its definition.

        Values without a definition are skipped here but stay in
        ``custom_fields``.
        """
        by_id = {definition.id: definition for definition in definitions}
        return [
            (by_id[field.id], field)
            for field in self.custom_fields
            if field.id in by_id
        ]

    def custom_field_value(self, field_id: str) -> Optional[str]:
        for field in self.custom_fields:
            if field.id == field_id:
                return field.value
        return None


class Attachment(WrikeModel):
    """File attached to a task."""

    id: str
    name: str
    size: Optional[int] = None
    content_type: Optional[str] = None
    type: Optional[str] = None
    author_id: Optional[str] = None
    created_date: Optional[str] = None
    version: Optional[int] = None
    task_id: Optional[str] = None
    url: Optional[str] = None


class TaskPayload(WrikeModel):
    """Base for request bodies. Only fields the caller set are sent."""

    def to_payload(self) -> dict[str, Any]:
        return self.model_dump(mode="json", by_alias=True, exclude_unset=True)


class CreateTaskPayload(TaskPayload):
    title: str = Field(..., min_length=1)
    description: Optional[str] = None
    status: Optional[str] = None
    importance: Optional[Importance] = None
    dates: Optional[TaskDates] = None
    responsibles: Optional[List[str]] = None

    @field_validator("responsibles")
    @classmethod
    def dedupe_responsibles(cls, v: Optional[List[str]]) -> Optional[List[str]]:
        return _unique(v)


class UpdateTaskPayload(TaskPayload):
    """Partial update: fields left unset are not changed on the server."""

    title: Optional[str] = None
    description: Optional[str] = None
    status: Optional[str] = None
    custom_status_id: Optional[str] = None
    importance: Optional[Importance] = None
    dates: Optional[TaskDates] = None
    add_responsibles: Optional[List[str]] = None
    remove_responsibles: Optional[List[str]] = None
    custom_fields: Optional[List[CustomFieldValue]] = None

    @field_validator("add_responsibles", "remove_responsibles")
    @classmethod
    def dedupe_responsibles(cls, v: Optional[List[str]]) -> Optional[List[str]]:
        return _unique(v)
