"""Typed telemetry models."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class CpuMetrics:
    vendor: str
    model: str
    clock_ghz: float | None
    cores_physical: int
    cores_total: int
    load_percent: float | None


@dataclass(frozen=True)
class MemoryMetrics:
    active_bytes: int
    total_bytes: int
    used_bytes: int
    available_bytes: int
    device_count: int


@dataclass(frozen=True)
class DiskMetrics:
    used_bytes: int
    total_bytes: int


@dataclass(frozen=True)
class NetworkMetrics:
    tx_bytes_per_sec: float
    rx_bytes_per_sec: float
    tx_bytes_total: int
    rx_bytes_total: int


@dataclass(frozen=True)
class MetricsSnapshot:
    cpu: CpuMetrics
    memory: MemoryMetrics
    disk: DiskMetrics
    network: NetworkMetrics
    uptime_seconds: int
