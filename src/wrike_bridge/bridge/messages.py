"""Message envelopes exchanged with the rendering surface."""

from __future__ import annotations

from typing import Any, Dict

from pydantic import BaseModel, ConfigDict, Field

from wrike_bridge.constants import Response


class InboundMessage(BaseModel):
    """Command sent by the rendering surface."""

    model_config = ConfigDict(extra="ignore")

    command: str
    payload: Dict[str, Any] = Field(default_factory=dict)


class OutboundMessage(BaseModel):
    """Response or error posted back to the rendering surface."""

    command: str
    payload: Any = None

    @classmethod
    def error(cls, message: str, is_auth_error: bool) -> OutboundMessage:
        return cls(
            command=Response.ERROR.value,
            payload={"message": message, "isAuthError": is_auth_error},
        )

    def to_wire(self) -> dict[str, Any]:
        return {"command": self.command, "payload": self.payload}
