"""Space and folder models."""

from __future__ import annotations

from typing import List, Optional

from pydantic import Field

from wrike_bridge.models.base import WrikeModel


class Space(WrikeModel):
    """Top-level workspace. Read-only from the bridge's point of view."""

    id: str
    title: str
    access_type: Optional[str] = Field(default=None, description="'Personal', 'Public' or 'Private'")
    avatar_url: Optional[str] = None


class FolderProject(WrikeModel):
    """Project status block carried by folders that are projects."""

    author_id: Optional[str] = None
    owner_ids: List[str] = Field(default_factory=list)
    status: Optional[str] = None
    start_date: Optional[str] = None
    end_date: Optional[str] = None


class Folder(WrikeModel):
    """A folder (or project) that holds tasks."""

    id: str
    title: str
    child_ids: List[str] = Field(default_factory=list)
    scope: Optional[str] = None
    project: Optional[FolderProject] = None

    @property
    def is_project(self) -> bool:
        return self.project is not None
