import asyncio
import sys
import unittest
from pathlib import Path

ROOT = Path(__file__).resolve().parents[2]
sys.path.insert(0, str(ROOT / "packages" / "telemetry"))
sys.path.insert(0, str(ROOT / "packages" / "renderer"))
sys.path.insert(0, str(ROOT / "packages" / "chat"))
sys.path.insert(0, str(ROOT / "packages" / "core"))
sys.path.insert(0, str(ROOT / "tests"))

from fakes import FakeChatClient, FakeCollector, FakeRenderer
from statsboard_chat.errors import ChannelNotFoundError, ChatError
from statsboard_chat.models import ChatMessage, InboundMessage
from statsboard_core.bootstrap import BootstrapResolver
from statsboard_core.publisher import DashboardPublisher, DashboardState
from statsboard_core.service import DashboardService, ServiceState


HISTORY = [
    ChatMessage(id="9", author_id="someone"),
    ChatMessage(id="7", author_id="bot"),
    ChatMessage(id="5", author_id="bot"),
]


class BootstrapResolverTests(unittest.IsolatedAsyncioTestCase):
    async def test_first_own_message_wins(self):
        client = FakeChatClient(history=HISTORY)
        self.assertEqual(await BootstrapResolver(client).find_dashboard_message(), "7")

    async def test_history_limit_applies(self):
        client = FakeChatClient(history=HISTORY)
        self.assertIsNone(await BootstrapResolver(client, limit=1).find_dashboard_message())

    async def test_resolve_adopts_into_publisher(self):
        client = FakeChatClient(history=HISTORY)
        publisher = DashboardPublisher(client, DashboardState(channel_id="42"))
        self.assertEqual(await BootstrapResolver(client).resolve(publisher), "7")
        self.assertEqual(publisher.state.message_id, "7")

    async def test_no_own_messages(self):
        client = FakeChatClient(history=[ChatMessage(id="9", author_id="someone")])
        publisher = DashboardPublisher(client, DashboardState(channel_id="42"))
        self.assertIsNone(await BootstrapResolver(client).resolve(publisher))
        self.assertIsNone(publisher.state.message_id)

    async def test_missing_channel_propagates(self):
        client = FakeChatClient()
        client.channel_missing = True
        publisher = DashboardPublisher(client, DashboardState(channel_id="42"))
        with self.assertRaises(ChannelNotFoundError):
            await BootstrapResolver(client).resolve(publisher)


class DashboardServiceTests(unittest.IsolatedAsyncioTestCase):
    def _service(self, client):
        self.collector = FakeCollector()
        return DashboardService(client, self.collector, FakeRenderer(), channel_id="42", interval_s=0.02)

    async def _wait_for_cycle(self, service):
        for _ in range(200):
            if service.controller.status.cycles_ok + service.controller.status.cycles_failed:
                return
            await asyncio.sleep(0.01)
        self.fail("no timer cycle ran")

    async def test_recovered_message_is_edited_by_first_timer_cycle(self):
        client = FakeChatClient(history=HISTORY)
        service = self._service(client)
        await service.on_ready()
        try:
            self.assertIs(service.state, ServiceState.ACTIVE)
            self.assertEqual(service.publisher.state.message_id, "7")
            await self._wait_for_cycle(service)
        finally:
            await service.close()

        self.assertEqual(client.sent, [])
        self.assertEqual(client.edits[0][0], "7")

    async def test_empty_history_creates_on_first_cycle(self):
        client = FakeChatClient()
        service = self._service(client)
        await service.on_ready()
        try:
            await self._wait_for_cycle(service)
        finally:
            await service.close()
        self.assertEqual(len(client.sent), 1)

    async def test_channel_not_found_leaves_dashboard_inactive(self):
        client = FakeChatClient()
        client.channel_missing = True
        service = self._service(client)
        await service.on_ready()

        self.assertIs(service.state, ServiceState.INACTIVE)
        self.assertFalse(service.controller.status.timer_running)
        command = InboundMessage(content="!stats", author_id="u", channel_id="42", author_is_bot=False)
        self.assertIsNone(await service.on_message(command))
        await asyncio.sleep(0.05)
        self.assertEqual(self.collector.calls, 0)

    async def test_history_failure_still_starts_timer(self):
        client = FakeChatClient(history=HISTORY)
        client.history_error = ChatError("missing Read Message History")
        service = self._service(client)
        await service.on_ready()
        try:
            self.assertIs(service.state, ServiceState.ACTIVE)
            self.assertIsNone(service.publisher.state.message_id)
        finally:
            await service.close()

    async def test_ready_again_does_not_rescan(self):
        client = FakeChatClient(history=HISTORY)
        service = self._service(client)
        await service.on_ready()
        client.history = []
        service.publisher.adopt("1234")
        await service.on_ready()
        await service.close()
        self.assertEqual(service.publisher.state.message_id, "1234")

    async def test_command_runs_cycle_when_active(self):
        client = FakeChatClient()
        service = DashboardService(client, FakeCollector(), FakeRenderer(), channel_id="42", interval_s=60)
        await service.on_ready()
        try:
            result = await service.on_message(
                InboundMessage(content="!stats", author_id="u", channel_id="42", author_is_bot=False)
            )
        finally:
            await service.close()
        self.assertEqual(result.publish.kind, "created")


if __name__ == "__main__":
    unittest.main()
