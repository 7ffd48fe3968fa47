"""Wires bootstrap, publisher and controller around a chat client."""

from __future__ import annotations

from enum import Enum

from statsboard_chat.client import ChatClient
from statsboard_chat.errors import ChannelNotFoundError, ChatError
from statsboard_chat.models import InboundMessage

from .bootstrap import BootstrapResolver
from .config import AppConfig
from .controller import Collector, CycleResult, DashboardController, Renderer
from .logging_setup import get_logger
from .publisher import DashboardPublisher, DashboardState


logger = get_logger("service")


class ServiceState(str, Enum):
    WAITING = "Waiting"
    ACTIVE = "Active"
    INACTIVE = "Inactive"


class DashboardService:
    """Runs the startup scan once, then hands control to the timer.

    A missing channel leaves the service ``INACTIVE`` for the rest of the
    process: no timer, and commands are ignored.
    """

    def __init__(
        self,
        client: ChatClient,
        collector: Collector,
        renderer: Renderer,
        channel_id: str,
        interval_s: float = 9.0,
        command: str = "!stats",
        content: str = "Here are the latest server stats:",
        history_limit: int = 100,
        recreate_missing: bool = False,
    ) -> None:
        self.state = ServiceState.WAITING
        self.publisher = DashboardPublisher(
            client,
            DashboardState(channel_id=channel_id),
            content=content,
            recreate_missing=recreate_missing,
        )
        self.resolver = BootstrapResolver(client, limit=history_limit)
        self.controller = DashboardController(
            collector,
            renderer,
            self.publisher,
            interval_s=interval_s,
            command=command,
            channel_id=channel_id,
        )

    @classmethod
    def from_config(
        cls,
        cfg: AppConfig,
        client: ChatClient,
        collector: Collector,
        renderer: Renderer,
    ) -> "DashboardService":
        return cls(
            client,
            collector,
            renderer,
            channel_id=cfg.channel_id,
            interval_s=cfg.dashboard.interval_s,
            command=cfg.dashboard.command,
            content=cfg.dashboard.content,
            history_limit=cfg.dashboard.history_limit,
            recreate_missing=cfg.dashboard.recreate_missing,
        )

    async def on_ready(self) -> None:
        # The gateway fires ready again after reconnects; bootstrap happens once.
        if self.state is not ServiceState.WAITING:
            return

        try:
            await self.resolver.resolve(self.publisher)
        except ChannelNotFoundError as exc:
            self.state = ServiceState.INACTIVE
            logger.error("%s; dashboard disabled until restart", exc, extra={"event": "channel_not_found"})
            return
        except ChatError as exc:
            logger.warning(
                "history scan failed, a new dashboard message will be created: %s",
                exc,
                extra={"event": "bootstrap_failed"},
            )

        self.state = ServiceState.ACTIVE
        self.controller.start()

    async def on_message(self, message: InboundMessage) -> CycleResult | None:
        if self.state is not ServiceState.ACTIVE:
            return None
        return await self.controller.handle_message(message)

    async def close(self) -> None:
        await self.controller.stop()
