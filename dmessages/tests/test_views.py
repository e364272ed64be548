from django.urls import reverse
from rest_framework import status
from rest_framework.test import APITestCase

from chatroom.jwt_utils import generate_test_token
from interactions.models import Block
from users.models import User
from dmessages.models import PrivateMessage


class PrivateMessageEndpointsTest(APITestCase):
    def setUp(self):
        self.alice = User.objects.create(user_id="alice", username="alice")
        self.bob = User.objects.create(user_id="bob", username="bob")
        self.create_url = reverse("private-message-create")
        self.mark_url = reverse("private-messages-mark-as-read")

    def test_send_message(self):
        payload = {"sender_id": "alice", "receiver_id": "bob", "content": "hello"}

        response = self.client.post(self.create_url, payload, format="json")

        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        self.assertEqual(response.data["sender_id"], "alice")
        self.assertEqual(response.data["receiver_id"], "bob")
        self.assertFalse(response.data["is_read"])

    def test_send_uses_token_subject_as_sender(self):
        token = generate_test_token("bob")

        response = self.client.post(
            self.create_url,
            {"receiver_id": "alice", "content": "hi"},
            format="json",
            HTTP_AUTHORIZATION=f"Bearer {token}",
        )

        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        self.assertEqual(PrivateMessage.objects.get().sender_id, "bob")

    def test_send_to_blocker_is_forbidden(self):
        Block.objects.create(blocker=self.bob, blocked=self.alice)
        payload = {"sender_id": "alice", "receiver_id": "bob", "content": "hello"}

        response = self.client.post(self.create_url, payload, format="json")

        self.assertEqual(response.status_code, status.HTTP_403_FORBIDDEN)
        self.assertFalse(PrivateMessage.objects.exists())

    def test_send_without_receiver(self):
        response = self.client.post(self.create_url, {"sender_id": "alice", "content": "x"}, format="json")

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)

    def test_thread(self):
        PrivateMessage.objects.create(sender=self.alice, receiver=self.bob, content="one")
        PrivateMessage.objects.create(sender=self.bob, receiver=self.alice, content="two")

        response = self.client.get(reverse("private-thread", kwargs={"user_id": "alice", "other_user_id": "bob"}))

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual([row["content"] for row in response.data], ["one", "two"])

    def test_mark_as_read(self):
        for _ in range(2):
            PrivateMessage.objects.create(sender=self.bob, receiver=self.alice, content="hi")

        first = self.client.put(self.mark_url, {"senderId": "bob", "receiverId": "alice"}, format="json")
        second = self.client.put(self.mark_url, {"senderId": "bob", "receiverId": "alice"}, format="json")

        self.assertEqual(first.status_code, status.HTTP_200_OK)
        self.assertEqual(first.data["marked_read"], 2)
        self.assertEqual(second.data["marked_read"], 0)
        self.assertIn("message", first.data)

    def test_mark_as_read_missing_field(self):
        response = self.client.put(self.mark_url, {"senderId": "bob"}, format="json")

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertIn("receiverId", response.data)
