"""Workflow models and status resolution."""

from __future__ import annotations

from typing import List, Optional, Sequence

from pydantic import Field

from wrike_bridge.constants import StatusGroup
from wrike_bridge.models.base import WrikeModel
from wrike_bridge.models.task import Task


class CustomStatus(WrikeModel):
    id: str
    name: Optional[str] = None
    standard_name: Optional[bool] = None
    color: Optional[str] = None
    group: Optional[StatusGroup] = None


class Workflow(WrikeModel):
    """A workflow and its custom statuses. One per account is standard."""

    id: str
    name: Optional[str] = None
    standard: bool = False
    custom_statuses: List[CustomStatus] = Field(default_factory=list)

    def status(self, status_id: str) -> Optional[CustomStatus]:
        for status in self.custom_statuses:
            if status.id == status_id:
                return status
        return None

    def has_status(self, status_id: str) -> bool:
        return self.status(status_id) is not None


def resolve_workflow(task: Task, workflows: Sequence[Workflow]) -> Optional[Workflow]:
    """
    Find the workflow whose statuses apply to a task.

    Order: the workflow containing the task's custom status, then the
    standard workflow (covers orphaned status ids), then the first one.
    """
    if task.custom_status_id:
        for workflow in workflows:
            if workflow.has_status(task.custom_status_id):
                return workflow

    for workflow in workflows:
        if workflow.standard:
            return workflow

    return workflows[0] if workflows else None
