"""Chat platform error types."""

from __future__ import annotations


class ChatError(Exception):
    """Base class for chat platform failures."""


class ChannelNotFoundError(ChatError):
    def __init__(self, channel_id: str) -> None:
        super().__init__(f"channel {channel_id} not found or not a text channel")
        self.channel_id = channel_id


class PublishError(ChatError):
    """Sending or editing the dashboard message failed."""


class MessageNotFoundError(PublishError):
    def __init__(self, message_id: str) -> None:
        super().__init__(f"message {message_id} no longer exists")
        self.message_id = message_id
