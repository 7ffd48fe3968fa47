"""Chat client interface the dashboard core depends on."""

from __future__ import annotations

from typing import Protocol

from statsboard_renderer.models import DashboardImage

from .models import ChatMessage, SentMessage


class ChatClient(Protocol):
    @property
    def user_id(self) -> str: ...

    async def fetch_recent_messages(self, limit: int) -> list[ChatMessage]: ...

    async def send(self, content: str, image: DashboardImage) -> SentMessage: ...

    async def edit(self, message_id: str, content: str, image: DashboardImage) -> None: ...
