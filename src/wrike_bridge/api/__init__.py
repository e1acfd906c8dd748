"""Wrike API v4 HTTP client."""

from wrike_bridge.api.client import WrikeClient

__all__ = ["WrikeClient"]
