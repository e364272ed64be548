from datetime import timedelta

from django.test import TestCase
from django.urls import reverse
from django.utils import timezone
from rest_framework import status
from rest_framework.test import APIClient

from presence.services import record_room_presence
from users.models import User
from .models import Room, RoomParticipant
from .services import enroll_participant


class RoomEndpointsTest(TestCase):
    def setUp(self):
        """Set up a room with one member and one outsider."""
        self.client = APIClient()
        self.room = Room.objects.create(name="general", description="Everyone")
        self.member = User.objects.create(user_id="member-1", username="bea")
        self.outsider = User.objects.create(user_id="outsider-1", username="al")
        RoomParticipant.objects.create(room=self.room, user=self.member)

    def test_participants_lists_all_members(self):
        RoomParticipant.objects.create(room=self.room, user=self.outsider)

        response = self.client.get(reverse("room-participants", kwargs={"room_id": self.room.id}))

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual([row["user"]["username"] for row in response.data], ["al", "bea"])

    def test_participants_of_unknown_room_is_empty(self):
        response = self.client.get(reverse("room-participants", kwargs={"room_id": 9999}))

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data, [])

    def test_membership_check(self):
        member_url = reverse("room-membership", kwargs={"room_id": self.room.id, "user_id": "member-1"})
        outsider_url = reverse("room-membership", kwargs={"room_id": self.room.id, "user_id": "outsider-1"})

        self.assertEqual(self.client.get(member_url).data, {"isMember": True})
        self.assertEqual(self.client.get(outsider_url).data, {"isMember": False})

    def test_join_creates_membership_once(self):
        url = reverse("room-join", kwargs={"room_id": self.room.id})

        first = self.client.post(url, {"userId": "outsider-1"}, format="json")
        second = self.client.post(url, {"userId": "outsider-1"}, format="json")

        self.assertEqual(first.status_code, status.HTTP_201_CREATED)
        self.assertEqual(second.status_code, status.HTTP_200_OK)
        self.assertEqual(RoomParticipant.objects.filter(room=self.room, user=self.outsider).count(), 1)

    def test_join_unknown_room_returns_404(self):
        response = self.client.post(
            reverse("room-join", kwargs={"room_id": 9999}), {"userId": "outsider-1"}, format="json"
        )

        self.assertEqual(response.status_code, status.HTTP_404_NOT_FOUND)

    def test_join_unknown_user_returns_404(self):
        response = self.client.post(
            reverse("room-join", kwargs={"room_id": self.room.id}), {"userId": "ghost"}, format="json"
        )

        self.assertEqual(response.status_code, status.HTTP_404_NOT_FOUND)
        self.assertFalse(RoomParticipant.objects.filter(user_id="ghost").exists())

    def test_join_without_user_returns_400(self):
        response = self.client.post(reverse("room-join", kwargs={"room_id": self.room.id}), {}, format="json")

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertIn("userId", response.data)

    def test_user_rooms_lists_memberships_newest_first(self):
        lounge = Room.objects.create(name="lounge", type="private")
        RoomParticipant.objects.create(room=lounge, user=self.member)
        RoomParticipant.objects.filter(room=self.room, user=self.member).update(
            joined_at=timezone.now() - timedelta(days=1)
        )

        response = self.client.get(reverse("user-rooms", kwargs={"user_id": "member-1"}))

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertTrue(response.data["success"])
        self.assertEqual([row["name"] for row in response.data["rooms"]], ["lounge", "general"])
        self.assertEqual(response.data["rooms"][0]["type"], "private")
        self.assertIn("joined_at", response.data["rooms"][0])

    def test_user_rooms_include_rooms_joined_by_heartbeat(self):
        record_room_presence(self.room.id, "outsider-1")

        response = self.client.get(reverse("user-rooms", kwargs={"user_id": "outsider-1"}))

        self.assertEqual([row["id"] for row in response.data["rooms"]], [self.room.id])

    def test_user_rooms_for_unknown_user_is_empty(self):
        response = self.client.get(reverse("user-rooms", kwargs={"user_id": "ghost"}))

        self.assertEqual(response.data, {"success": True, "rooms": []})


class EnrollParticipantTest(TestCase):
    def test_enroll_is_insert_if_absent(self):
        room = Room.objects.create(name="lobby")
        User.objects.create(user_id="u1", username="u1")

        enroll_participant(room.id, "u1")
        enroll_participant(room.id, "u1")

        self.assertEqual(RoomParticipant.objects.filter(room=room, user_id="u1").count(), 1)
