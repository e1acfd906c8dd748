"""Message bridge between the rendering surface and the Wrike client."""

from wrike_bridge.bridge.controller import BridgeController, is_auth_error
from wrike_bridge.bridge.messages import InboundMessage, OutboundMessage
from wrike_bridge.bridge.panel import BoardPanel, PanelSlot

__all__ = [
    "BridgeController",
    "is_auth_error",
    "InboundMessage",
    "OutboundMessage",
    "BoardPanel",
    "PanelSlot",
]
