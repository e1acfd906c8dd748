"""Custom field definitions."""

from __future__ import annotations

from typing import List, Optional

from pydantic import Field

from wrike_bridge.constants import CustomFieldType
from wrike_bridge.models.base import WrikeModel


class CustomFieldOption(WrikeModel):
    id: Optional[str] = None
    value: str
    color: Optional[str] = None


class CustomFieldSettings(WrikeModel):
    decimal_places: Optional[int] = None
    currency_symbol: Optional[str] = None
    options: Optional[List[CustomFieldOption]] = None


class CustomFieldDefinition(WrikeModel):
    """
    Account-level definition of a custom field.

    Task custom field values are associated with a definition by id.
    """

    id: str
    title: str
    type: CustomFieldType
    settings: Optional[CustomFieldSettings] = None

    @property
    def option_values(self) -> list[str]:
        if self.settings is None or not self.settings.options:
            return []
        return [option.value for option in self.settings.options]
