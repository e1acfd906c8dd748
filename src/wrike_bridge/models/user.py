"""Contact (user or group) models."""

from __future__ import annotations

from typing import List, Optional

from pydantic import Field

from wrike_bridge.models.base import WrikeModel


class UserProfile(WrikeModel):
    """Per-account profile of a contact."""

    account_id: str
    email: Optional[str] = None
    role: Optional[str] = None


class User(WrikeModel):
    """A Wrike contact. Returned by token validation and the contacts list."""

    id: str
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    type: Optional[str] = Field(default=None, description="'Person' or 'Group'")
    profiles: List[UserProfile] = Field(default_factory=list)

    @property
    def display_name(self) -> str:
        name = " ".join(part for part in (self.first_name, self.last_name) if part)
        return name or self.id
