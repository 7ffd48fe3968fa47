import asyncio
import sys
import unittest
from pathlib import Path

try:
    from PIL import Image
except Exception:  # pragma: no cover
    Image = None

ROOT = Path(__file__).resolve().parents[2]
sys.path.insert(0, str(ROOT / "packages" / "telemetry"))
sys.path.insert(0, str(ROOT / "packages" / "renderer"))
sys.path.insert(0, str(ROOT / "packages" / "chat"))
sys.path.insert(0, str(ROOT / "packages" / "core"))
sys.path.insert(0, str(ROOT / "tests"))

from fakes import FakeChatClient, FakeProvider
from statsboard_chat.models import ChatMessage, InboundMessage
from statsboard_core.service import DashboardService
from statsboard_telemetry.collector import MetricsCollector


class DashboardCycleIntegrationTests(unittest.IsolatedAsyncioTestCase):
    async def test_restart_resumes_and_survives_bad_cycle(self):
        if Image is None:
            self.skipTest("Pillow not installed")
        from statsboard_renderer.dashboard import DashboardRenderer

        provider = FakeProvider()
        client = FakeChatClient(history=[ChatMessage(id="55", author_id="bot")])
        service = DashboardService(
            client,
            MetricsCollector(provider),
            DashboardRenderer(),
            channel_id="42",
            interval_s=3600,
        )
        await service.on_ready()
        command = InboundMessage(content="!stats", author_id="u", channel_id="42", author_is_bot=False)
        try:
            first = await service.on_message(command)

            provider.failures["fs_size"] = OSError("stale NFS handle")
            broken = await service.on_message(command)

            del provider.failures["fs_size"]
            third = await service.on_message(command)
        finally:
            await service.close()

        self.assertEqual(first.publish.kind, "updated")
        self.assertEqual(first.publish.message_id, "55")
        self.assertFalse(broken.ok)
        self.assertEqual(third.publish.message_id, "55")
        self.assertEqual(client.sent, [])
        self.assertEqual(len(client.edits), 2)
        self.assertTrue(client.edits[0][2].data.startswith(b"\x89PNG"))


if __name__ == "__main__":
    unittest.main()
