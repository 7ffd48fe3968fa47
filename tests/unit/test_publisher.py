import sys
import unittest
from pathlib import Path

ROOT = Path(__file__).resolve().parents[2]
sys.path.insert(0, str(ROOT / "packages" / "telemetry"))
sys.path.insert(0, str(ROOT / "packages" / "renderer"))
sys.path.insert(0, str(ROOT / "packages" / "chat"))
sys.path.insert(0, str(ROOT / "packages" / "core"))
sys.path.insert(0, str(ROOT / "tests"))

from fakes import FakeChatClient
from statsboard_chat.errors import MessageNotFoundError, PublishError
from statsboard_core.publisher import DashboardPublisher, DashboardState
from statsboard_renderer.models import DashboardImage


IMAGE = DashboardImage(name="stats.png", data=b"\x89PNG")


class PublisherTests(unittest.IsolatedAsyncioTestCase):
    async def test_first_publish_creates_and_adopts(self):
        client = FakeChatClient()
        state = DashboardState(channel_id="42")
        result = await DashboardPublisher(client, state).publish(IMAGE)

        self.assertEqual(result.kind, "created")
        self.assertEqual(state.message_id, result.message_id)
        self.assertEqual(len(client.sent), 1)
        self.assertEqual(client.sent[0][0], "Here are the latest server stats:")

    async def test_later_publishes_edit_same_message(self):
        client = FakeChatClient()
        state = DashboardState(channel_id="42")
        publisher = DashboardPublisher(client, state, content="stats")
        first = await publisher.publish(IMAGE)
        second = await publisher.publish(IMAGE)

        self.assertEqual(second.kind, "updated")
        self.assertEqual(second.message_id, first.message_id)
        self.assertEqual(client.edits, [(first.message_id, "stats", IMAGE)])

    async def test_send_failure_leaves_state_absent(self):
        client = FakeChatClient()
        client.fail_send.append(PublishError("missing permissions"))
        state = DashboardState(channel_id="42")
        with self.assertRaises(PublishError):
            await DashboardPublisher(client, state).publish(IMAGE)
        self.assertIsNone(state.message_id)

    async def test_unexpected_send_error_is_wrapped(self):
        client = FakeChatClient()
        client.fail_send.append(ConnectionResetError("reset"))
        with self.assertRaises(PublishError):
            await DashboardPublisher(client, DashboardState(channel_id="42")).publish(IMAGE)

    async def test_edit_failure_keeps_identity(self):
        client = FakeChatClient()
        client.fail_edit.append(MessageNotFoundError("7"))
        state = DashboardState(channel_id="42", message_id="7")
        with self.assertRaises(MessageNotFoundError):
            await DashboardPublisher(client, state).publish(IMAGE)
        self.assertEqual(state.message_id, "7")
        self.assertEqual(client.sent, [])

    async def test_recreate_missing_forgets_deleted_message(self):
        client = FakeChatClient()
        client.fail_edit.append(MessageNotFoundError("7"))
        state = DashboardState(channel_id="42", message_id="7")
        publisher = DashboardPublisher(client, state, recreate_missing=True)

        with self.assertRaises(MessageNotFoundError):
            await publisher.publish(IMAGE)
        self.assertIsNone(state.message_id)

        result = await publisher.publish(IMAGE)
        self.assertEqual(result.kind, "created")
        self.assertEqual(state.message_id, result.message_id)

    async def test_recreate_missing_ignores_other_edit_errors(self):
        client = FakeChatClient()
        client.fail_edit.append(PublishError("forbidden"))
        state = DashboardState(channel_id="42", message_id="7")
        with self.assertRaises(PublishError):
            await DashboardPublisher(client, state, recreate_missing=True).publish(IMAGE)
        self.assertEqual(state.message_id, "7")


if __name__ == "__main__":
    unittest.main()
