"""Shared configuration for Wrike DTOs."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class WrikeModel(BaseModel):
    """
    Base model for Wrike API objects.

    Fields are snake_case in Python and camelCase on the wire. Unknown
    fields are kept so that nothing the API sends is lost when an object
    is handed on to the rendering surface.
    """

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="allow",
    )

    def to_wire(self) -> dict[str, Any]:
        """Dump to the camelCase JSON shape used by the API and the bridge."""
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)
