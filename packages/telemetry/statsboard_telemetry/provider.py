"""psutil-backed host metrics provider.

Each query returns plain dicts/lists, one call per concern, so the collector can
map the raw shape onto :class:`MetricsSnapshot` field by field. Blocking psutil
calls run in a worker thread.
"""

from __future__ import annotations

import asyncio
import platform
import re
import subprocess
import threading
import time
from dataclasses import dataclass
from pathlib import Path
from typing import Any

import psutil


_VENDORS = {
    "GenuineIntel": "Intel",
    "AuthenticAMD": "AMD",
    "Apple": "Apple",
}

_DMI_ENTRIES = Path("/sys/firmware/dmi/entries")


def _cpu_identity() -> tuple[str, str]:
    system = platform.system()
    brand = ""
    vendor = ""
    if system == "Linux":
        try:
            text = Path("/proc/cpuinfo").read_text(encoding="utf-8", errors="replace")
        except OSError:
            text = ""
        for line in text.splitlines():
            key, _, value = line.partition(":")
            key = key.strip()
            if key == "vendor_id" and not vendor:
                vendor = value.strip()
            elif key in ("model name", "Model") and not brand:
                brand = value.strip()
    elif system == "Darwin":
        try:
            brand = subprocess.run(
                ["sysctl", "-n", "machdep.cpu.brand_string"],
                capture_output=True,
                text=True,
                timeout=2,
                check=False,
            ).stdout.strip()
        except (OSError, subprocess.SubprocessError):
            brand = ""

    if not brand:
        brand = platform.processor() or platform.machine()

    manufacturer = _VENDORS.get(vendor, vendor)
    if not manufacturer:
        for name in ("Intel", "AMD", "Apple"):
            if brand.startswith(name):
                manufacturer = name
                break

    if manufacturer:
        brand = re.sub(rf"^{re.escape(manufacturer)}(\(R\))?\s*", "", brand)
    return manufacturer, brand.strip()


def _memory_devices() -> list[dict[str, Any]]:
    # SMBIOS type 17 entries are the installed memory devices.
    if not _DMI_ENTRIES.is_dir():
        return []
    return [{"entry": p.name} for p in sorted(_DMI_ENTRIES.glob("17-*"))]


def _is_loopback(name: str) -> bool:
    return name == "lo" or name.startswith("lo0") or "loopback" in name.lower()


@dataclass
class _CounterSnapshot:
    ts: float
    sent: int
    recv: int


class TelemetryProvider:
    """Raw host queries with rate bookkeeping for network counters."""

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._prev: dict[str, _CounterSnapshot] = {}
        now = time.monotonic()
        for name, counters in psutil.net_io_counters(pernic=True).items():
            self._prev[name] = _CounterSnapshot(ts=now, sent=counters.bytes_sent, recv=counters.bytes_recv)
        # First cpu_percent(None) call only primes the counters.
        psutil.cpu_percent(interval=None)
        self._identity: tuple[str, str] | None = None

    async def cpu(self) -> dict[str, Any]:
        return await asyncio.to_thread(self._read_cpu)

    async def current_load(self) -> dict[str, Any]:
        return {"current_load": float(psutil.cpu_percent(interval=None))}

    async def mem(self) -> dict[str, Any]:
        return await asyncio.to_thread(self._read_mem)

    async def mem_layout(self) -> list[dict[str, Any]]:
        return await asyncio.to_thread(_memory_devices)

    async def fs_size(self) -> list[dict[str, Any]]:
        return await asyncio.to_thread(self._read_fs)

    async def network_stats(self) -> list[dict[str, Any]]:
        return await asyncio.to_thread(self._read_network)

    async def time(self) -> dict[str, Any]:
        now = time.time()
        return {"current": now, "uptime": max(now - psutil.boot_time(), 0.0)}

    def _read_cpu(self) -> dict[str, Any]:
        if self._identity is None:
            self._identity = _cpu_identity()
        manufacturer, brand = self._identity

        try:
            freq = psutil.cpu_freq()
        except (OSError, NotImplementedError):
            freq = None
        logical = psutil.cpu_count(logical=True)
        physical = psutil.cpu_count(logical=False) or logical
        return {
            "manufacturer": manufacturer,
            "brand": brand,
            "speed_ghz": (round(freq.current / 1000.0, 2) if freq and freq.current else None),
            "physical_cores": physical,
            "cores": logical,
        }

    @staticmethod
    def _read_mem() -> dict[str, Any]:
        vm = psutil.virtual_memory()
        return {
            "total": vm.total,
            "used": vm.used,
            # Windows reports no "active" figure.
            "active": getattr(vm, "active", vm.used),
            "available": vm.available,
        }

    @staticmethod
    def _read_fs() -> list[dict[str, Any]]:
        volumes: list[dict[str, Any]] = []
        for part in psutil.disk_partitions(all=False):
            try:
                usage = psutil.disk_usage(part.mountpoint)
            except OSError:
                # Empty optical drives and restricted mounts cannot be sized.
                continue
            volumes.append({"fs": part.device, "mount": part.mountpoint, "size": usage.total, "used": usage.used})
        return volumes

    def _read_network(self) -> list[dict[str, Any]]:
        counters = psutil.net_io_counters(pernic=True)
        try:
            stats = psutil.net_if_stats()
        except OSError:
            stats = {}

        names = [n for n in counters if not _is_loopback(n)]
        names.sort(key=lambda n: 0 if (n in stats and stats[n].isup) else 1)

        now = time.monotonic()
        rows: list[dict[str, Any]] = []
        with self._lock:
            for name in names:
                cur = counters[name]
                prev = self._prev.get(name)
                if prev is None:
                    tx_sec = rx_sec = 0.0
                else:
                    elapsed = max(now - prev.ts, 1e-6)
                    tx_sec = max(cur.bytes_sent - prev.sent, 0) / elapsed
                    rx_sec = max(cur.bytes_recv - prev.recv, 0) / elapsed
                self._prev[name] = _CounterSnapshot(ts=now, sent=cur.bytes_sent, recv=cur.bytes_recv)
                rows.append(
                    {
                        "iface": name,
                        "tx_sec": tx_sec,
                        "rx_sec": rx_sec,
                        "tx_bytes": cur.bytes_sent,
                        "rx_bytes": cur.bytes_recv,
                    }
                )
        return rows
