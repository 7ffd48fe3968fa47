"""Refresh cycle scheduling with one-cycle-at-a-time and per-cycle failure isolation."""

from __future__ import annotations

import asyncio
import time
from dataclasses import dataclass
from datetime import datetime, timezone
from enum import Enum
from typing import Any, Protocol

from statsboard_chat.errors import ChatError
from statsboard_chat.models import InboundMessage
from statsboard_renderer.errors import RenderError
from statsboard_renderer.models import DashboardImage
from statsboard_telemetry.errors import CollectionError
from statsboard_telemetry.models import MetricsSnapshot

from .logging_setup import get_logger
from .publisher import DashboardPublisher, PublishResult


logger = get_logger("controller")

_EXPECTED_ERRORS = (CollectionError, RenderError, ChatError)


class CyclePhase(str, Enum):
    IDLE = "Idle"
    COLLECTING = "Collecting"
    RENDERING = "Rendering"
    PUBLISHING = "Publishing"


class Collector(Protocol):
    async def collect(self) -> MetricsSnapshot: ...


class Renderer(Protocol):
    def render(self, snapshot: MetricsSnapshot) -> DashboardImage: ...


@dataclass
class ControllerStatus:
    phase: CyclePhase = CyclePhase.IDLE
    timer_running: bool = False
    cycles_ok: int = 0
    cycles_failed: int = 0
    cycles_skipped: int = 0
    last_error: str | None = None
    last_result: PublishResult | None = None


@dataclass(frozen=True)
class CycleResult:
    source: str
    stage: CyclePhase
    publish: PublishResult | None = None
    error: str | None = None
    duration_s: float = 0.0

    @property
    def ok(self) -> bool:
        return self.error is None


class DashboardController:
    def __init__(
        self,
        collector: Collector,
        renderer: Renderer,
        publisher: DashboardPublisher,
        interval_s: float = 9.0,
        command: str = "!stats",
        channel_id: str | None = None,
    ) -> None:
        self.interval_s = interval_s
        self.command = command
        self.channel_id = channel_id

        self._collector = collector
        self._renderer = renderer
        self._publisher = publisher
        self._status = ControllerStatus()
        self._busy = False
        self._timer_task: asyncio.Task[None] | None = None
        self._cycle_tasks: set[asyncio.Task[Any]] = set()
        self._events: list[dict[str, Any]] = []

    @property
    def status(self) -> ControllerStatus:
        return self._status

    @property
    def busy(self) -> bool:
        return self._busy

    def recent_events(self, limit: int = 200) -> list[dict[str, Any]]:
        return self._events[-limit:]

    def _log_event(self, event: str, **fields: Any) -> None:
        row = {
            "ts_utc": datetime.now(timezone.utc).isoformat(),
            "event": event,
            "phase": self._status.phase.value,
        }
        row.update(fields)
        self._events.append(row)
        if len(self._events) > 1000:
            self._events = self._events[-1000:]

    async def trigger(self, source: str = "manual") -> CycleResult | None:
        """Run one cycle now, or return ``None`` if one is already in progress."""
        # Check-and-set with no await in between; the event loop makes it atomic.
        if self._busy:
            self._status.cycles_skipped += 1
            self._log_event("cycle_skipped", source=source)
            logger.debug("cycle already running; %s trigger skipped", source, extra={"event": "cycle_skipped", "source": source})
            return None

        self._busy = True
        try:
            return await self._run_cycle(source)
        finally:
            self._status.phase = CyclePhase.IDLE
            self._busy = False

    async def _run_cycle(self, source: str) -> CycleResult:
        start = time.perf_counter()
        self._log_event("cycle_start", source=source)
        stage = CyclePhase.COLLECTING
        try:
            self._status.phase = stage
            snapshot = await self._collector.collect()

            stage = CyclePhase.RENDERING
            self._status.phase = stage
            image = await asyncio.to_thread(self._renderer.render, snapshot)

            stage = CyclePhase.PUBLISHING
            self._status.phase = stage
            result = await self._publisher.publish(image)
        except Exception as exc:
            elapsed = time.perf_counter() - start
            error = f"{type(exc).__name__}: {exc}"
            self._status.cycles_failed += 1
            self._status.last_error = error
            self._log_event("cycle_error", source=source, stage=stage.value, error=error)
            logger.error(
                "%s cycle failed while %s: %s",
                source,
                stage.value.lower(),
                error,
                exc_info=not isinstance(exc, _EXPECTED_ERRORS),
                extra={"event": "cycle_error", "stage": stage.value, "source": source},
            )
            return CycleResult(source=source, stage=stage, error=error, duration_s=elapsed)

        elapsed = time.perf_counter() - start
        self._status.cycles_ok += 1
        self._status.last_error = None
        self._status.last_result = result
        self._log_event("cycle_ok", source=source, kind=result.kind, message_id=result.message_id, duration_s=elapsed)
        logger.info(
            "%s cycle %s message %s in %.2fs",
            source,
            result.kind,
            result.message_id,
            elapsed,
            extra={"event": "cycle_ok", "source": source, "message_id": result.message_id},
        )
        return CycleResult(source=source, stage=stage, publish=result, duration_s=elapsed)

    def is_command(self, message: InboundMessage) -> bool:
        if message.author_is_bot or message.content != self.command:
            return False
        return self.channel_id is None or message.channel_id == self.channel_id

    async def handle_message(self, message: InboundMessage) -> CycleResult | None:
        if not self.is_command(message):
            return None
        return await self.trigger("command")

    def start(self) -> None:
        if self._timer_task is not None and not self._timer_task.done():
            return
        self._timer_task = asyncio.get_running_loop().create_task(self._timer_loop())
        self._status.timer_running = True
        self._log_event("timer_start", interval_s=self.interval_s)
        logger.info("dashboard timer started every %.1fs", self.interval_s, extra={"event": "timer_start"})

    async def stop(self) -> None:
        task, self._timer_task = self._timer_task, None
        self._status.timer_running = False
        pending = list(self._cycle_tasks)
        if task is not None:
            pending.append(task)
        for t in pending:
            t.cancel()
        if pending:
            await asyncio.gather(*pending, return_exceptions=True)
        self._log_event("timer_stop")

    async def _timer_loop(self) -> None:
        loop = asyncio.get_running_loop()
        next_tick = loop.time() + self.interval_s
        while True:
            await asyncio.sleep(max(next_tick - loop.time(), 0.0))
            next_tick += self.interval_s
            # Ticks never wait on a running cycle; trigger() drops them instead.
            self._spawn(self.trigger("timer"))

    def _spawn(self, coro) -> None:
        task = asyncio.get_running_loop().create_task(coro)
        self._cycle_tasks.add(task)
        task.add_done_callback(self._cycle_tasks.discard)
