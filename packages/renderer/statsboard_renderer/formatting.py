"""Human-readable units for dashboard text."""

from __future__ import annotations

from statsboard_telemetry.models import MetricsSnapshot


BYTE_UNITS = ("Bytes", "KB", "MB", "GB", "TB", "PB", "EB", "ZB", "YB")


def format_bytes(value: float, decimals: int = 2) -> str:
    """Scale by 1024 and print at most ``decimals`` places, trailing zeros dropped.

    >>> format_bytes(1536)
    '1.5 KB'
    """
    if value == 0:
        return "0 Bytes"

    scaled = float(value)
    idx = 0
    while abs(scaled) >= 1024 and idx < len(BYTE_UNITS) - 1:
        scaled /= 1024
        idx += 1

    text = f"{scaled:.{max(decimals, 0)}f}"
    if "." in text:
        text = text.rstrip("0").rstrip(".")
    if text in ("-0", ""):
        text = "0"
    return f"{text} {BYTE_UNITS[idx]}"


def _plural(count: int, unit: str) -> str:
    return f"{count} {unit}" if count == 1 else f"{count} {unit}s"


def format_uptime(seconds: float) -> str:
    total = int(seconds)
    days, rem = divmod(total, 86400)
    hours, rem = divmod(rem, 3600)
    minutes, secs = divmod(rem, 60)

    parts = [
        _plural(count, unit)
        for count, unit in ((days, "day"), (hours, "hour"), (minutes, "minute"), (secs, "second"))
        if count > 0
    ]
    return ", ".join(parts)


def _fmt_clock(value: float | None) -> str:
    if value is None:
        return "N/A"
    return f"{value:g}"


def _fmt_load(value: float | None) -> str:
    if value is None:
        return "N/A"
    return f"{value:.2f}%"


def build_stats_text(s: MetricsSnapshot) -> str:
    """Dashboard body, one metric per line with blank lines between groups."""
    cpu_name = " ".join(p for p in (s.cpu.vendor, s.cpu.model) if p) or "Unknown CPU"
    lines = [
        f"CPU: {cpu_name} ({_fmt_clock(s.cpu.clock_ghz)} GHz)",
        f"CPU Usage: {_fmt_load(s.cpu.load_percent)}",
        f"Cores (Physical): {s.cpu.cores_physical}",
        f"Cores (Total): {s.cpu.cores_total}",
        "",
        f"Total Devices: {s.memory.device_count}",
        # Active usage drops its unit when it is GB, so "3.1/15.5 GB" reads as one figure.
        f"Current Usage: {format_bytes(s.memory.active_bytes).replace(' GB', '')}/{format_bytes(s.memory.total_bytes)}",
        "",
        f"Memory Usage (w/ buffers): {format_bytes(s.memory.used_bytes)}",
        f"Available: {format_bytes(s.memory.available_bytes)}",
        "",
        f"Disk Usage: {format_bytes(s.disk.used_bytes)}/{format_bytes(s.disk.total_bytes)}",
        "",
        "Network Stats:",
        f"Current Transfer: {format_bytes(s.network.tx_bytes_per_sec)}/s",
        f"Current Received: {format_bytes(s.network.rx_bytes_per_sec)}/s",
        f"Total Transferred: {format_bytes(s.network.tx_bytes_total)}",
        f"Total Received: {format_bytes(s.network.rx_bytes_total)}",
        "",
        f"Uptime: {format_uptime(s.uptime_seconds)}",
    ]
    return "\n".join(lines)
