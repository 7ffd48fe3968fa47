"""Keeps a single dashboard message per channel pointed at the latest image."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Literal

from statsboard_chat.client import ChatClient
from statsboard_chat.errors import MessageNotFoundError, PublishError
from statsboard_renderer.models import DashboardImage

from .logging_setup import get_logger


logger = get_logger("publisher")


@dataclass
class DashboardState:
    channel_id: str
    message_id: str | None = None


@dataclass(frozen=True)
class PublishResult:
    kind: Literal["created", "updated"]
    message_id: str


class DashboardPublisher:
    """Edits the remembered message, or sends a new one and adopts its id.

    The caller must not overlap ``publish`` calls for the same state; the
    controller's one-cycle-at-a-time rule provides that.

    With ``recreate_missing`` set, an edit that fails because the message was
    deleted clears the remembered id so the next publish creates a fresh
    message. The failing publish still raises.
    """

    def __init__(
        self,
        client: ChatClient,
        state: DashboardState,
        content: str = "Here are the latest server stats:",
        recreate_missing: bool = False,
    ) -> None:
        self._client = client
        self._state = state
        self.content = content
        self.recreate_missing = recreate_missing

    @property
    def state(self) -> DashboardState:
        return self._state

    def adopt(self, message_id: str | None) -> None:
        self._state.message_id = message_id

    async def publish(self, image: DashboardImage) -> PublishResult:
        message_id = self._state.message_id
        if message_id is not None:
            try:
                await self._client.edit(message_id, self.content, image)
            except MessageNotFoundError:
                if self.recreate_missing:
                    logger.warning(
                        "dashboard message %s is gone; next cycle creates a new one",
                        message_id,
                        extra={"event": "message_forgotten", "message_id": message_id},
                    )
                    self._state.message_id = None
                raise
            except PublishError:
                raise
            except Exception as exc:
                raise PublishError(f"edit of message {message_id} failed: {exc}") from exc
            return PublishResult(kind="updated", message_id=message_id)

        try:
            sent = await self._client.send(self.content, image)
        except PublishError:
            raise
        except Exception as exc:
            raise PublishError(f"send failed: {exc}") from exc

        self._state.message_id = sent.id
        logger.info(
            "dashboard message created",
            extra={"event": "message_created", "message_id": sent.id},
        )
        return PublishResult(kind="created", message_id=sent.id)
