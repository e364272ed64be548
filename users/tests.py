from django.urls import reverse
from rest_framework import status
from rest_framework.test import APITestCase

from interactions.models import Block
from .models import User


class UserEndpointsTestCase(APITestCase):
    def setUp(self):
        """
        Create a handful of users to search over and resolve the endpoint URLs.
        """
        self.user = User.objects.create(
            user_id="john-1",
            username="john_doe",
            first_name="John",
            last_name="Doe",
            email="john@example.com",
            avatar_url="https://cdn.example.com/john.png",
        )
        self.jane = User.objects.create(user_id="jane-1", username="jane", first_name="Jane", last_name="Johnson")
        self.zed = User.objects.create(user_id="zed-1", username="zed", first_name="Zed", last_name="Zulu")

        self.search_url = reverse("local_user_search")

    def test_local_user_search_matches_any_name_field(self):
        response = self.client.get(self.search_url, {"term": "joh"})

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        usernames = [row["username"] for row in response.data]
        self.assertEqual(usernames, ["jane", "john_doe"])

    def test_local_user_search_is_case_insensitive(self):
        response = self.client.get(self.search_url, {"term": "ZULU"})

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data[0]["id"], "zed-1")

    def test_local_user_search_excludes_caller(self):
        response = self.client.get(self.search_url, {"term": "joh", "excludeUserId": "jane-1"})

        self.assertEqual([row["id"] for row in response.data], ["john-1"])

    def test_local_user_search_requires_term(self):
        response = self.client.get(self.search_url)

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertIn("error", response.data)

    def test_local_user_search_is_capped(self):
        for i in range(25):
            User.objects.create(user_id=f"bulk-{i}", username=f"bulk_{i:02d}")

        response = self.client.get(self.search_url, {"term": "bulk"})

        self.assertEqual(len(response.data), 20)

    def test_profile_detail(self):
        response = self.client.get(reverse("profile-detail", kwargs={"user_id": "john-1"}))

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data["username"], "john_doe")
        self.assertEqual(response.data["avatar_url"], "https://cdn.example.com/john.png")
        self.assertFalse(response.data["isBlockedByCurrentUser"])
        self.assertFalse(response.data["hasBlockedCurrentUser"])

    def test_profile_detail_reports_block_state(self):
        Block.objects.create(blocker=self.jane, blocked=self.user)

        as_jane = self.client.get(
            reverse("profile-detail", kwargs={"user_id": "john-1"}), {"current_user_id": "jane-1"}
        )
        as_john = self.client.get(
            reverse("profile-detail", kwargs={"user_id": "jane-1"}), {"current_user_id": "john-1"}
        )

        self.assertTrue(as_jane.data["isBlockedByCurrentUser"])
        self.assertFalse(as_jane.data["hasBlockedCurrentUser"])
        self.assertFalse(as_john.data["isBlockedByCurrentUser"])
        self.assertTrue(as_john.data["hasBlockedCurrentUser"])

    def test_profile_detail_unknown_user(self):
        response = self.client.get(reverse("profile-detail", kwargs={"user_id": "nobody"}))

        self.assertEqual(response.status_code, status.HTTP_404_NOT_FOUND)
