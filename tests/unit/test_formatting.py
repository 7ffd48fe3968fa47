import sys
import unittest
from pathlib import Path

ROOT = Path(__file__).resolve().parents[2]
sys.path.insert(0, str(ROOT / "packages" / "telemetry"))
sys.path.insert(0, str(ROOT / "packages" / "renderer"))
sys.path.insert(0, str(ROOT / "tests"))

from fakes import sample_snapshot
from statsboard_renderer.formatting import build_stats_text, format_bytes, format_uptime


class FormatBytesTests(unittest.TestCase):
    def test_zero(self):
        self.assertEqual(format_bytes(0), "0 Bytes")

    def test_binary_scaling(self):
        self.assertEqual(format_bytes(1024), "1 KB")
        self.assertEqual(format_bytes(1536), "1.5 KB")
        self.assertEqual(format_bytes(1099511627776), "1 TB")
        self.assertEqual(format_bytes(1023), "1023 Bytes")

    def test_two_decimals_trailing_zeros_dropped(self):
        self.assertEqual(format_bytes(1024 * 1.25), "1.25 KB")
        self.assertEqual(format_bytes(1024 * 1024 * 3.14159), "3.14 MB")
        self.assertEqual(format_bytes(1024 * 1.1), "1.1 KB")

    def test_fractional_rate_stays_in_bytes(self):
        self.assertEqual(format_bytes(0.5), "0.5 Bytes")

    def test_caps_at_yottabytes(self):
        self.assertEqual(format_bytes(1024**9), "1024 YB")


class FormatUptimeTests(unittest.TestCase):
    def test_zero_is_empty(self):
        self.assertEqual(format_uptime(0), "")

    def test_minutes_and_seconds(self):
        self.assertEqual(format_uptime(65), "1 minute, 5 seconds")

    def test_all_singular(self):
        self.assertEqual(format_uptime(90061), "1 day, 1 hour, 1 minute, 1 second")

    def test_zero_components_omitted(self):
        self.assertEqual(format_uptime(2 * 86400 + 3), "2 days, 3 seconds")
        self.assertEqual(format_uptime(7200), "2 hours")
        self.assertEqual(format_uptime(60), "1 minute")

    def test_fractional_seconds_truncated(self):
        self.assertEqual(format_uptime(59.9), "59 seconds")


class StatsTextTests(unittest.TestCase):
    def test_lines(self):
        text = build_stats_text(sample_snapshot())
        lines = text.splitlines()
        self.assertEqual(lines[0], "CPU: AMD Ryzen 7 5800X (3.8 GHz)")
        self.assertIn("CPU Usage: 7.50%", lines)
        self.assertIn("Cores (Physical): 8", lines)
        self.assertIn("Cores (Total): 16", lines)
        self.assertIn("Total Devices: 2", lines)
        self.assertIn("Current Usage: 3/16 GB", lines)
        self.assertIn("Memory Usage (w/ buffers): 5 GB", lines)
        self.assertIn("Available: 11 GB", lines)
        self.assertIn("Disk Usage: 15 Bytes/50 Bytes", lines)
        self.assertIn("Current Transfer: 1.5 KB/s", lines)
        self.assertIn("Current Received: 0 Bytes/s", lines)
        self.assertIn("Total Transferred: 1 KB", lines)
        self.assertIn("Total Received: 0 Bytes", lines)
        self.assertEqual(lines[-1], "Uptime: 1 minute, 5 seconds")

    def test_unknown_load_and_clock(self):
        from dataclasses import replace

        snap = sample_snapshot()
        snap = replace(snap, cpu=replace(snap.cpu, load_percent=None, clock_ghz=None))
        text = build_stats_text(snap)
        self.assertIn("CPU Usage: N/A", text)
        self.assertIn("(N/A GHz)", text)


if __name__ == "__main__":
    unittest.main()
