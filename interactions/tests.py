from unittest.mock import patch

from django.db import IntegrityError
from django.urls import reverse
from rest_framework import status
from rest_framework.test import APITestCase

from chatroom.jwt_utils import generate_test_token
from interactions.models import Block
from interactions.utils import block_flags, is_blocked_between
from users.models import User


class InteractionTestCase(APITestCase):
    def setUp(self):
        self.my_id = "acde070d-8c4c-4f0d-9d8a-162843c10333"
        self.other_id = "550e8400-e29b-41d4-a716-446655440000"

        self.me = User.objects.create(user_id=self.my_id, username="me")
        self.other_user = User.objects.create(user_id=self.other_id, username="other")

    def test_block_user_success(self):
        """Tests that a user can block another user."""
        payload = {"blocker_id": self.my_id, "blocked_id": self.other_id}

        response = self.client.post(reverse("block-user"), payload, format="json")

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data["message"], "User blocked successfully.")
        self.assertTrue(Block.objects.filter(blocker=self.me, blocked=self.other_user).exists())

    def test_block_user_uses_token_subject_when_blocker_missing(self):
        token = generate_test_token(self.my_id)
        response = self.client.post(
            reverse("block-user"),
            {"blocked_id": self.other_id},
            format="json",
            HTTP_AUTHORIZATION=f"Bearer {token}",
        )

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertTrue(Block.objects.filter(blocker=self.me, blocked=self.other_user).exists())

    def test_cannot_block_self(self):
        """Ensures a user cannot create a block record for themselves."""
        payload = {"blocker_id": self.my_id, "blocked_id": self.my_id}

        response = self.client.post(reverse("block-user"), payload, format="json")

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertIn("error", response.data)
        self.assertFalse(Block.objects.exists())

    def test_block_requires_blocked_id(self):
        response = self.client.post(reverse("block-user"), {"blocker_id": self.my_id}, format="json")

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)

    def test_block_unknown_user_returns_404(self):
        payload = {"blocker_id": self.my_id, "blocked_id": "ghost"}

        response = self.client.post(reverse("block-user"), payload, format="json")

        self.assertEqual(response.status_code, status.HTTP_404_NOT_FOUND)
        self.assertFalse(Block.objects.exists())

    def test_duplicate_block_prevention(self):
        """Ensures that a user cannot block the same user twice."""
        Block.objects.create(blocker=self.me, blocked=self.other_user)
        payload = {"blocker_id": self.my_id, "blocked_id": self.other_id}

        response = self.client.post(reverse("block-user"), payload, format="json")

        self.assertEqual(response.status_code, status.HTTP_409_CONFLICT)
        self.assertEqual(Block.objects.count(), 1)

    def test_concurrent_duplicate_block_is_a_conflict(self):
        """A duplicate inserted between the existence check and the insert still yields 409."""
        payload = {"blocker_id": self.my_id, "blocked_id": self.other_id}

        with patch("interactions.services.Block.objects.create", side_effect=IntegrityError("duplicate key")):
            response = self.client.post(reverse("block-user"), payload, format="json")

        self.assertEqual(response.status_code, status.HTTP_409_CONFLICT)

    def test_unblock_user(self):
        """Tests unblocking a user."""
        Block.objects.create(blocker=self.me, blocked=self.other_user)
        payload = {"blocker_id": self.my_id, "blocked_id": self.other_id}

        response = self.client.post(reverse("unblock-user"), payload, format="json")

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertFalse(Block.objects.exists())

    def test_unblock_without_block_returns_404(self):
        payload = {"blocker_id": self.my_id, "blocked_id": self.other_id}

        response = self.client.post(reverse("unblock-user"), payload, format="json")

        self.assertEqual(response.status_code, status.HTTP_404_NOT_FOUND)

    def test_unblock_only_removes_own_direction(self):
        Block.objects.create(blocker=self.other_user, blocked=self.me)
        payload = {"blocker_id": self.my_id, "blocked_id": self.other_id}

        response = self.client.post(reverse("unblock-user"), payload, format="json")

        self.assertEqual(response.status_code, status.HTTP_404_NOT_FOUND)
        self.assertTrue(Block.objects.filter(blocker=self.other_user, blocked=self.me).exists())

    def test_block_list(self):
        third = User.objects.create(user_id="third", username="third")
        Block.objects.create(blocker=self.me, blocked=self.other_user)
        Block.objects.create(blocker=self.me, blocked=third)
        Block.objects.create(blocker=third, blocked=self.me)

        response = self.client.get(reverse("block-list", kwargs={"user_id": self.my_id}))

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        blocked_ids = {row["blocked"]["id"] for row in response.data}
        self.assertEqual(blocked_ids, {self.other_id, "third"})


class BlockHelpersTestCase(APITestCase):
    def setUp(self):
        self.alice = User.objects.create(user_id="alice", username="alice")
        self.bob = User.objects.create(user_id="bob", username="bob")

    def test_is_blocked_between_checks_both_directions(self):
        self.assertFalse(is_blocked_between("alice", "bob"))

        Block.objects.create(blocker=self.bob, blocked=self.alice)

        self.assertTrue(is_blocked_between("alice", "bob"))
        self.assertTrue(is_blocked_between("bob", "alice"))

    def test_block_flags(self):
        Block.objects.create(blocker=self.alice, blocked=self.bob)

        self.assertEqual(block_flags("alice", "bob"), (True, False))
        self.assertEqual(block_flags("bob", "alice"), (False, True))
        self.assertEqual(block_flags(None, "bob"), (False, False))
