from datetime import timedelta
from io import StringIO
from unittest.mock import patch

from django.core.management import call_command
from django.core.management.base import CommandError
from django.test import TestCase
from django.utils import timezone

from presence.models import OnlineStatus, RoomPresence
from rooms.models import Room
from users.models import User


class PrunePresenceCommandTest(TestCase):
    def setUp(self):
        self.room = Room.objects.create(name="general")
        now = timezone.now()
        for user_id, age in [("fresh", 10), ("old", 7200)]:
            user = User.objects.create(user_id=user_id, username=user_id)
            RoomPresence.objects.create(room=self.room, user=user, last_seen=now - timedelta(seconds=age))
            OnlineStatus.objects.create(user=user, online=True, last_active=now - timedelta(seconds=age))

    def test_prunes_rows_older_than_window(self):
        out = StringIO()

        call_command("prune_presence", "--older-than", "3600", stdout=out)

        self.assertEqual(list(RoomPresence.objects.values_list("user_id", flat=True)), ["fresh"])
        self.assertFalse(OnlineStatus.objects.get(user_id="old").online)
        self.assertTrue(OnlineStatus.objects.get(user_id="fresh").online)
        self.assertIn("deleted: 1", out.getvalue())

    def test_dry_run_changes_nothing(self):
        out = StringIO()

        call_command("prune_presence", "--older-than", "3600", "--dry-run", stdout=out)

        self.assertEqual(RoomPresence.objects.count(), 2)
        self.assertTrue(OnlineStatus.objects.get(user_id="old").online)
        self.assertIn("would be deleted: 1", out.getvalue())

    def test_default_window_keeps_recent_rows(self):
        call_command("prune_presence", stdout=StringIO())

        self.assertEqual(RoomPresence.objects.count(), 2)

    def test_window_shorter_than_threshold_is_rejected(self):
        with self.assertRaises(CommandError):
            call_command("prune_presence", "--older-than", "5", stdout=StringIO())


class PollChatroomCommandTest(TestCase):
    @patch("presence.management.commands.poll_chatroom.ChatroomClient")
    def test_runs_each_poller(self, client_class):
        client = client_class.return_value
        out = StringIO()

        call_command(
            "poll_chatroom", "--user-id", "ada", "--room-id", "1", "--with", "bob",
            "--cycles", "1", "--token", "abc", "--base-url", "http://chat.test/", stdout=out,
        )

        client_class.assert_called_once_with(base_url="http://chat.test/", token="abc")
        client.heartbeat.assert_called_once_with(1, "ada")
        client.private_thread.assert_called_once_with("ada", "bob")
        client.private_conversations.assert_called_once_with("ada")
        for name in ("heartbeat", "messages", "conversations"):
            self.assertIn(f"{name}: missed cycles 0, stale False", out.getvalue())

    @patch("presence.management.commands.poll_chatroom.ChatroomClient")
    def test_without_open_thread_skips_messages(self, client_class):
        client = client_class.return_value
        out = StringIO()

        call_command("poll_chatroom", "--user-id", "ada", "--room-id", "1", "--cycles", "1", stdout=out)

        client.private_thread.assert_not_called()
        self.assertNotIn("messages:", out.getvalue())

    def test_requires_user_and_room(self):
        with self.assertRaises(CommandError):
            call_command("poll_chatroom", "--room-id", "1")
