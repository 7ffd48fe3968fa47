"""Error taxonomy for the dashboard, re-exported from the packages that raise them."""

from __future__ import annotations

from statsboard_chat.errors import ChannelNotFoundError, ChatError, MessageNotFoundError, PublishError
from statsboard_renderer.errors import RenderError
from statsboard_telemetry.errors import CollectionError


class ConfigError(Exception):
    """Configuration is missing or unreadable at process start."""


__all__ = [
    "ChannelNotFoundError",
    "ChatError",
    "CollectionError",
    "ConfigError",
    "MessageNotFoundError",
    "PublishError",
    "RenderError",
]
