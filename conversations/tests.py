from datetime import timedelta

from django.test import TestCase
from django.urls import reverse
from django.utils import timezone
from rest_framework import status
from rest_framework.test import APIClient

from conversations.services import get_private_conversations
from dmessages.models import PrivateMessage
from interactions.models import Block
from users.models import User


class ConversationListingTestCase(TestCase):
    def setUp(self):
        """Set up three users and a clock to stamp messages with"""
        self.client = APIClient()
        self.now = timezone.now()
        self.me = User.objects.create(user_id="me", username="me")
        self.bob = User.objects.create(
            user_id="bob", username="bob", first_name="Bob", last_name="Builder",
            avatar_url="https://cdn.example.com/bob.png",
        )
        self.carol = User.objects.create(user_id="carol", username="carol")
        self.dave = User.objects.create(user_id="dave", username="dave")

    def _message(self, sender, receiver, content, minutes_ago, is_read=False):
        return PrivateMessage.objects.create(
            sender=sender,
            receiver=receiver,
            content=content,
            created_at=self.now - timedelta(minutes=minutes_ago),
            is_read=is_read,
        )

    def test_both_directions_collapse_into_one_row(self):
        self._message(self.me, self.bob, "hi bob", 10)
        self._message(self.bob, self.me, "hi me", 5)

        rows = list(get_private_conversations("me"))

        self.assertEqual(len(rows), 1)
        self.assertEqual(rows[0].user_id, "bob")
        self.assertEqual(rows[0].last_message, "hi me")
        self.assertEqual(rows[0].last_message_at, self.now - timedelta(minutes=5))

    def test_outgoing_only_conversation_is_listed(self):
        self._message(self.me, self.carol, "anyone there?", 1)

        rows = list(get_private_conversations("me"))

        self.assertEqual([row.user_id for row in rows], ["carol"])
        self.assertEqual(rows[0].unread_count, 0)

    def test_ordered_by_most_recent_message(self):
        self._message(self.me, self.bob, "old", 30)
        self._message(self.carol, self.me, "newer", 20)
        self._message(self.me, self.bob, "newest", 1)

        rows = list(get_private_conversations("me"))

        self.assertEqual([row.user_id for row in rows], ["bob", "carol"])

    def test_unread_counts_only_incoming_unread(self):
        for minutes_ago in (3, 2, 1):
            self._message(self.bob, self.me, "ping", minutes_ago)
        self._message(self.bob, self.me, "seen", 10, is_read=True)
        self._message(self.me, self.bob, "outgoing unread", 4)

        rows = list(get_private_conversations("me"))

        self.assertEqual(rows[0].unread_count, 3)

    def test_mark_as_read_clears_unread_count(self):
        for minutes_ago in (3, 2, 1):
            self._message(self.bob, self.me, "ping", minutes_ago)

        response = self.client.put(
            reverse("private-messages-mark-as-read"),
            {"senderId": "bob", "receiverId": "me"},
            format="json",
        )

        self.assertEqual(response.data["marked_read"], 3)
        self.assertEqual(get_private_conversations("me").get(pk="bob").unread_count, 0)

    def test_conversations_between_other_users_are_ignored(self):
        self._message(self.carol, self.dave, "not for me", 1)

        self.assertEqual(list(get_private_conversations("me")), [])

    def test_user_without_messages_has_no_conversations(self):
        self.assertEqual(list(get_private_conversations("nobody")), [])

    def test_blocks_do_not_hide_conversations(self):
        self._message(self.bob, self.me, "before the block", 1)
        Block.objects.create(blocker=self.me, blocked=self.bob)

        self.assertEqual([row.user_id for row in get_private_conversations("me")], ["bob"])

    def test_endpoint_shape(self):
        self._message(self.bob, self.me, "hello", 2)
        self._message(self.me, self.bob, "hey", 1)

        response = self.client.get(reverse("private-conversations", kwargs={"user_id": "me"}))

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(len(response.data), 1)
        row = response.data[0]
        self.assertEqual(row["id"], "bob")
        self.assertEqual(row["user_id"], "bob")
        self.assertEqual(row["last_message"], "hey")
        self.assertEqual(row["unread_count"], 1)
        self.assertEqual(
            row["profile"],
            {
                "id": "bob",
                "username": "bob",
                "first_name": "Bob",
                "last_name": "Builder",
                "avatar_url": "https://cdn.example.com/bob.png",
            },
        )
        self.assertIsNotNone(row["last_message_at"])
