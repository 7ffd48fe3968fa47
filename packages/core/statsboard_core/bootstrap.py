"""Startup recovery of a dashboard message left by a previous run."""

from __future__ import annotations


from statsboard_chat.client import ChatClient

from .logging_setup import get_logger
from .publisher import DashboardPublisher


logger = get_logger("bootstrap")


class BootstrapResolver:
    def __init__(self, client: ChatClient, limit: int = 100) -> None:
        self._client = client
        self.limit = limit

    async def find_dashboard_message(self) -> str | None:
        """Return the id of the newest message in history authored by this bot."""
        own_id = self._client.user_id
        for message in await self._client.fetch_recent_messages(self.limit):
            if message.author_id == own_id:
                return message.id
        return None

    async def resolve(self, publisher: DashboardPublisher) -> str | None:
        """Adopt a recovered id into ``publisher``; chat errors propagate to the caller."""
        message_id = await self.find_dashboard_message()
        if message_id is None:
            logger.info("no previous dashboard message found", extra={"event": "bootstrap_empty"})
            return None

        publisher.adopt(message_id)
        logger.info(
            "resuming dashboard message %s",
            message_id,
            extra={"event": "bootstrap_recovered", "message_id": message_id},
        )
        return message_id
