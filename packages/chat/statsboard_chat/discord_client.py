"""discord.py implementation of the dashboard chat client."""

from __future__ import annotations

import logging
from io import BytesIO
from typing import Awaitable, Callable

import discord

from statsboard_renderer.models import DashboardImage

from .errors import ChannelNotFoundError, ChatError, MessageNotFoundError, PublishError
from .models import ChatMessage, InboundMessage, SentMessage


logger = logging.getLogger("statsboard.chat")

ReadyCallback = Callable[[], Awaitable[None]]
MessageCallback = Callable[[InboundMessage], Awaitable[None]]


def _file(image: DashboardImage) -> discord.File:
    return discord.File(BytesIO(image.data), filename=image.name)


class DiscordChatClient(discord.Client):
    """Bound to one text channel; forwards gateway events to plain callbacks."""

    def __init__(
        self,
        channel_id: str,
        on_ready_callback: ReadyCallback | None = None,
        on_message_callback: MessageCallback | None = None,
    ) -> None:
        intents = discord.Intents.default()
        intents.message_content = True
        super().__init__(intents=intents)

        self.channel_id = channel_id
        self._on_ready_callback = on_ready_callback
        self._on_message_callback = on_message_callback
        self._channel: discord.abc.Messageable | None = None

    @property
    def user_id(self) -> str:
        if self.user is None:
            raise ChatError("client is not logged in")
        return str(self.user.id)

    async def on_ready(self) -> None:
        logger.info("logged in as %s", self.user, extra={"event": "chat_ready"})
        self._channel = await self._resolve_channel()
        if self._on_ready_callback is not None:
            await self._on_ready_callback()

    async def on_message(self, message: discord.Message) -> None:
        if self._on_message_callback is None:
            return
        await self._on_message_callback(
            InboundMessage(
                content=message.content,
                author_id=str(message.author.id),
                channel_id=str(message.channel.id),
                author_is_bot=bool(message.author.bot),
            )
        )

    async def _resolve_channel(self) -> discord.abc.Messageable | None:
        try:
            channel_id = int(self.channel_id)
        except ValueError:
            return None

        channel = self.get_channel(channel_id)
        if channel is None:
            try:
                channel = await self.fetch_channel(channel_id)
            except discord.DiscordException as exc:
                logger.warning("channel lookup failed: %s", exc, extra={"event": "channel_lookup_failed"})
                return None
        if not isinstance(channel, (discord.TextChannel, discord.Thread, discord.DMChannel)):
            return None
        return channel

    def _require_channel(self) -> discord.abc.Messageable:
        if self._channel is None:
            raise ChannelNotFoundError(self.channel_id)
        return self._channel

    async def fetch_recent_messages(self, limit: int) -> list[ChatMessage]:
        channel = self._require_channel()
        try:
            return [
                ChatMessage(id=str(m.id), author_id=str(m.author.id))
                async for m in channel.history(limit=limit)
            ]
        except discord.HTTPException as exc:
            raise ChatError(f"history fetch failed: {exc}") from exc

    async def send(self, content: str, image: DashboardImage) -> SentMessage:
        channel = self._require_channel()
        try:
            message = await channel.send(content=content, file=_file(image))
        except discord.HTTPException as exc:
            raise PublishError(f"send failed: {exc}") from exc
        return SentMessage(id=str(message.id))

    async def edit(self, message_id: str, content: str, image: DashboardImage) -> None:
        channel = self._require_channel()
        partial = channel.get_partial_message(int(message_id))  # type: ignore[attr-defined]
        try:
            await partial.edit(content=content, attachments=[_file(image)])
        except discord.NotFound as exc:
            raise MessageNotFoundError(message_id) from exc
        except discord.HTTPException as exc:
            raise PublishError(f"edit of message {message_id} failed: {exc}") from exc
