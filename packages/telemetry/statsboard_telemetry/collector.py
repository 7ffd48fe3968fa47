"""Map raw provider output onto a typed :class:`MetricsSnapshot`."""

from __future__ import annotations

import logging
from typing import Any, Protocol

from .errors import CollectionError
from .models import CpuMetrics, DiskMetrics, MemoryMetrics, MetricsSnapshot, NetworkMetrics


logger = logging.getLogger("statsboard.telemetry")


class MetricsProvider(Protocol):
    async def cpu(self) -> dict[str, Any]: ...

    async def current_load(self) -> dict[str, Any]: ...

    async def mem(self) -> dict[str, Any]: ...

    async def mem_layout(self) -> list[dict[str, Any]]: ...

    async def fs_size(self) -> list[dict[str, Any]]: ...

    async def network_stats(self) -> list[dict[str, Any]]: ...

    async def time(self) -> dict[str, Any]: ...


def _field(raw: Any, query: str, key: str) -> Any:
    if not isinstance(raw, dict):
        raise CollectionError(query, f"expected mapping, got {type(raw).__name__}")
    if key not in raw:
        raise CollectionError(query, f"missing field {key!r}")
    return raw[key]


def _number(raw: Any, query: str, key: str, optional: bool = False) -> float | None:
    value = _field(raw, query, key)
    if value is None and optional:
        return None
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise CollectionError(query, f"field {key!r} is not numeric: {value!r}")
    if value != value:  # NaN
        if optional:
            return None
        raise CollectionError(query, f"field {key!r} is NaN")
    return float(value)


def _count(raw: Any, query: str, key: str) -> int:
    value = _number(raw, query, key) or 0.0
    if value < 0:
        raise CollectionError(query, f"field {key!r} is negative: {value!r}")
    return int(value)


def _rate(raw: Any, query: str, key: str) -> float:
    return max(_number(raw, query, key) or 0.0, 0.0)


def _text(raw: Any, query: str, key: str) -> str:
    value = _field(raw, query, key)
    if value is None:
        # Hosts often leave vendor/brand unset; the renderer shows "Unknown CPU".
        return ""
    if not isinstance(value, str):
        raise CollectionError(query, f"field {key!r} is not text: {value!r}")
    return value


def _list(raw: Any, query: str) -> list[Any]:
    if not isinstance(raw, list):
        raise CollectionError(query, f"expected list, got {type(raw).__name__}")
    return raw


class MetricsCollector:
    """Collects one complete snapshot per call or raises :class:`CollectionError`."""

    def __init__(self, provider: MetricsProvider) -> None:
        self._provider = provider

    async def collect(self) -> MetricsSnapshot:
        cpu_raw = await self._query("cpu")
        load_raw = await self._query("current_load")
        mem_raw = await self._query("mem")
        layout_raw = await self._query("mem_layout")
        fs_raw = await self._query("fs_size")
        net_raw = await self._query("network_stats")
        time_raw = await self._query("time")

        load = _number(load_raw, "current_load", "current_load", optional=True)
        cpu = CpuMetrics(
            vendor=_text(cpu_raw, "cpu", "manufacturer"),
            model=_text(cpu_raw, "cpu", "brand"),
            clock_ghz=_number(cpu_raw, "cpu", "speed_ghz", optional=True),
            cores_physical=_count(cpu_raw, "cpu", "physical_cores"),
            cores_total=_count(cpu_raw, "cpu", "cores"),
            load_percent=(None if load is None else max(0.0, min(100.0, load))),
        )

        memory = MemoryMetrics(
            active_bytes=_count(mem_raw, "mem", "active"),
            total_bytes=_count(mem_raw, "mem", "total"),
            used_bytes=_count(mem_raw, "mem", "used"),
            available_bytes=_count(mem_raw, "mem", "available"),
            device_count=len(_list(layout_raw, "mem_layout")),
        )

        # Used space is summed, but the total is whatever the last volume reports.
        disk_used = 0
        disk_total = 0
        for volume in _list(fs_raw, "fs_size"):
            disk_used += _count(volume, "fs_size", "used")
            disk_total = _count(volume, "fs_size", "size")

        interfaces = _list(net_raw, "network_stats")
        if not interfaces:
            raise CollectionError("network_stats", "no network interface reported")
        first = interfaces[0]
        network = NetworkMetrics(
            tx_bytes_per_sec=_rate(first, "network_stats", "tx_sec"),
            rx_bytes_per_sec=_rate(first, "network_stats", "rx_sec"),
            tx_bytes_total=_count(first, "network_stats", "tx_bytes"),
            rx_bytes_total=_count(first, "network_stats", "rx_bytes"),
        )

        snapshot = MetricsSnapshot(
            cpu=cpu,
            memory=memory,
            disk=DiskMetrics(used_bytes=disk_used, total_bytes=disk_total),
            network=network,
            uptime_seconds=_count(time_raw, "time", "uptime"),
        )
        logger.debug("metrics collected", extra={"event": "metrics_collected"})
        return snapshot

    async def _query(self, name: str) -> Any:
        try:
            return await getattr(self._provider, name)()
        except CollectionError:
            raise
        except Exception as exc:
            raise CollectionError(name, str(exc) or type(exc).__name__) from exc
