"""Bot runtime: builds the dashboard service and runs the Discord client."""

from __future__ import annotations

import asyncio

import discord

from statsboard_chat import DiscordChatClient
from statsboard_chat.models import InboundMessage
from statsboard_core import AppConfig, DashboardService
from statsboard_core.logging_setup import get_logger, install_crash_hooks, install_loop_exception_handler
from statsboard_renderer import DashboardRenderer
from statsboard_telemetry import MetricsCollector, TelemetryProvider


logger = get_logger("app")


def build_renderer(cfg: AppConfig) -> DashboardRenderer:
    return DashboardRenderer(theme_name=cfg.dashboard.theme, image_name=cfg.dashboard.image_name)


def build_collector() -> MetricsCollector:
    return MetricsCollector(TelemetryProvider())


async def _run(cfg: AppConfig) -> None:
    install_loop_exception_handler(asyncio.get_running_loop())

    async def _on_ready() -> None:
        await service.on_ready()

    async def _on_message(message: InboundMessage) -> None:
        await service.on_message(message)

    client = DiscordChatClient(cfg.channel_id, on_ready_callback=_on_ready, on_message_callback=_on_message)
    service = DashboardService.from_config(cfg, client, build_collector(), build_renderer(cfg))

    try:
        async with client:
            await client.start(cfg.token)
    finally:
        await service.close()


def run_bot(cfg: AppConfig) -> int:
    install_crash_hooks()
    logger.info("starting dashboard for channel %s", cfg.channel_id, extra={"event": "bot_start"})
    try:
        asyncio.run(_run(cfg))
    except KeyboardInterrupt:
        logger.info("interrupted, shutting down", extra={"event": "bot_stop"})
    except discord.LoginFailure as exc:
        logger.error("login failed: %s", exc, extra={"event": "login_failed"})
        return 1
    return 0
