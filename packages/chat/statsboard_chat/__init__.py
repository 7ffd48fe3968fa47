"""Chat platform adapter for publishing the dashboard."""

from .client import ChatClient
from .errors import ChannelNotFoundError, ChatError, MessageNotFoundError, PublishError
from .models import ChatMessage, InboundMessage, SentMessage

try:  # pragma: no cover - optional at import time for minimal test environments
    from .discord_client import DiscordChatClient
except Exception:  # pragma: no cover
    DiscordChatClient = None  # type: ignore[assignment]

__all__ = [
    "ChannelNotFoundError",
    "ChatClient",
    "ChatError",
    "ChatMessage",
    "InboundMessage",
    "MessageNotFoundError",
    "PublishError",
    "SentMessage",
]

if DiscordChatClient is not None:
    __all__.append("DiscordChatClient")
