from datetime import timedelta

from django.test import TestCase, override_settings
from django.utils import timezone
from rest_framework.exceptions import ValidationError

from chatroom.exceptions import NotFoundError
from rooms.models import Room, RoomParticipant
from users.models import User
from presence.models import OnlineStatus, RoomPresence
from presence.services import (
    leave_room,
    mark_globally_offline,
    online_room_participants,
    online_users,
    record_global_presence,
    record_room_presence,
)
from presence.utils import get_online_threshold, is_online, online_cutoff


class RecordRoomPresenceTest(TestCase):
    def setUp(self):
        self.room = Room.objects.create(name="general")
        self.user = User.objects.create(user_id="u1", username="ada")
        self.now = timezone.now()

    def test_repeated_heartbeats_keep_one_row_with_latest_timestamp(self):
        later = self.now + timedelta(seconds=5)

        record_room_presence(self.room.id, "u1", now=self.now)
        returned = record_room_presence(self.room.id, "u1", now=later)

        rows = RoomPresence.objects.filter(room=self.room, user=self.user)
        self.assertEqual(rows.count(), 1)
        self.assertEqual(rows.get().last_seen, later)
        self.assertEqual(returned, later)

    def test_out_of_order_heartbeat_does_not_move_last_seen_back(self):
        record_room_presence(self.room.id, "u1", now=self.now)
        record_room_presence(self.room.id, "u1", now=self.now - timedelta(seconds=5))

        row = RoomPresence.objects.get(room=self.room, user=self.user)
        self.assertEqual(row.last_seen, self.now)
        self.assertEqual(RoomPresence.objects.count(), 1)

    def test_heartbeat_enrolls_participant_once(self):
        record_room_presence(self.room.id, "u1")
        record_room_presence(self.room.id, "u1")

        self.assertEqual(RoomParticipant.objects.filter(room=self.room, user=self.user).count(), 1)

    def test_heartbeat_keeps_existing_membership(self):
        membership = RoomParticipant.objects.create(room=self.room, user=self.user)

        record_room_presence(self.room.id, "u1")

        self.assertEqual(RoomParticipant.objects.get(room=self.room, user=self.user).pk, membership.pk)

    def test_unknown_room_is_rejected(self):
        with self.assertRaises(NotFoundError):
            record_room_presence(9999, "u1")
        self.assertFalse(RoomPresence.objects.exists())

    def test_unknown_user_is_rejected(self):
        with self.assertRaises(NotFoundError):
            record_room_presence(self.room.id, "ghost")
        self.assertFalse(RoomParticipant.objects.exists())

    def test_missing_user_is_a_validation_error(self):
        with self.assertRaises(ValidationError):
            record_room_presence(self.room.id, None)
        with self.assertRaises(ValidationError):
            record_room_presence(self.room.id, "   ")


class OnlineRoomParticipantsTest(TestCase):
    def setUp(self):
        self.room = Room.objects.create(name="general")
        self.other_room = Room.objects.create(name="random")
        self.now = timezone.now()
        for user_id, username in [("u1", "cleo"), ("u2", "ada"), ("u3", "bob")]:
            User.objects.create(user_id=user_id, username=username)

    def _age(self, user_id, seconds, room=None):
        RoomPresence.objects.filter(room=room or self.room, user_id=user_id).update(
            last_seen=self.now - timedelta(seconds=seconds)
        )

    def test_threshold_is_inclusive(self):
        for user_id in ("u1", "u2", "u3"):
            record_room_presence(self.room.id, user_id, now=self.now)
        self._age("u1", 29)
        self._age("u2", 30)
        self._age("u3", 31)

        online = [user.user_id for user in online_room_participants(self.room.id, now=self.now)]

        self.assertEqual(sorted(online), ["u1", "u2"])

    def test_ordered_by_username(self):
        for user_id in ("u1", "u2", "u3"):
            record_room_presence(self.room.id, user_id, now=self.now)

        usernames = [user.username for user in online_room_participants(self.room.id, now=self.now)]

        self.assertEqual(usernames, ["ada", "bob", "cleo"])

    def test_presence_in_another_room_does_not_count(self):
        record_room_presence(self.other_room.id, "u1", now=self.now)

        self.assertEqual(list(online_room_participants(self.room.id, now=self.now)), [])

    def test_leave_removes_user_immediately(self):
        record_room_presence(self.room.id, "u1", now=self.now)

        self.assertEqual(leave_room(self.room.id, "u1"), 1)
        self.assertEqual(list(online_room_participants(self.room.id, now=self.now)), [])
        self.assertEqual(leave_room(self.room.id, "u1"), 0)

    def test_leave_keeps_membership(self):
        record_room_presence(self.room.id, "u1", now=self.now)
        leave_room(self.room.id, "u1")

        self.assertTrue(RoomParticipant.objects.filter(room=self.room, user_id="u1").exists())

    def test_unknown_room_reads_empty(self):
        self.assertEqual(list(online_room_participants(9999)), [])

    def test_reads_do_not_mutate_presence(self):
        record_room_presence(self.room.id, "u1", now=self.now)
        self._age("u1", 120)
        before = list(RoomPresence.objects.values_list("user_id", "last_seen"))

        list(online_room_participants(self.room.id))

        self.assertEqual(list(RoomPresence.objects.values_list("user_id", "last_seen")), before)


class OnlineUsersTest(TestCase):
    def setUp(self):
        self.now = timezone.now()
        self.caller = User.objects.create(user_id="caller", username="caller")

    def _online(self, user_id, seconds_ago=0, online=True):
        User.objects.get_or_create(user_id=user_id, defaults={"username": user_id})
        OnlineStatus.objects.update_or_create(
            user_id=user_id,
            defaults={"online": online, "last_active": self.now - timedelta(seconds=seconds_ago)},
        )

    def test_excludes_caller(self):
        self._online("caller")
        self._online("other")

        ids = [user.user_id for user in online_users("caller", now=self.now)]

        self.assertEqual(ids, ["other"])

    def test_most_recently_active_first(self):
        self._online("older", seconds_ago=20)
        self._online("newest", seconds_ago=1)
        self._online("middle", seconds_ago=10)

        ids = [user.user_id for user in online_users("caller", now=self.now)]

        self.assertEqual(ids, ["newest", "middle", "older"])

    def test_limited_to_ten_by_default(self):
        for i in range(12):
            self._online(f"user-{i:02d}", seconds_ago=i)

        ids = [user.user_id for user in online_users("caller", now=self.now)]

        self.assertEqual(len(ids), 10)
        self.assertEqual(ids[0], "user-00")
        self.assertNotIn("user-11", ids)

    def test_explicit_limit(self):
        for i in range(3):
            self._online(f"user-{i}", seconds_ago=i)

        self.assertEqual(len(online_users("caller", limit=2, now=self.now)), 2)

    def test_requires_flag_and_fresh_timestamp(self):
        self._online("flag-off", online=False)
        self._online("stale", seconds_ago=31)
        self._online("boundary", seconds_ago=30)

        ids = [user.user_id for user in online_users("caller", now=self.now)]

        self.assertEqual(ids, ["boundary"])

    def test_record_global_presence_upserts(self):
        first = record_global_presence("caller", now=self.now - timedelta(seconds=5))
        second = record_global_presence("caller", now=self.now)

        status = OnlineStatus.objects.get(user_id="caller")
        self.assertTrue(status.online)
        self.assertEqual(status.last_active, second)
        self.assertLess(first, second)
        self.assertEqual(OnlineStatus.objects.count(), 1)

    def test_out_of_order_global_heartbeat_does_not_move_last_active_back(self):
        record_global_presence("caller", now=self.now)
        record_global_presence("caller", now=self.now - timedelta(seconds=5))

        status = OnlineStatus.objects.get(user_id="caller")
        self.assertEqual(status.last_active, self.now)
        self.assertTrue(status.online)

    def test_record_global_presence_unknown_user(self):
        with self.assertRaises(NotFoundError):
            record_global_presence("ghost")

    def test_mark_globally_offline(self):
        record_global_presence("caller", now=self.now)
        User.objects.create(user_id="viewer", username="viewer")

        self.assertEqual(mark_globally_offline("caller"), 1)
        self.assertEqual(list(online_users("viewer", now=self.now)), [])
        self.assertEqual(mark_globally_offline("caller"), 0)

    def test_heartbeat_after_offline_brings_user_back(self):
        User.objects.create(user_id="viewer", username="viewer")
        record_global_presence("caller", now=self.now)
        mark_globally_offline("caller")
        record_global_presence("caller", now=self.now)

        self.assertEqual([user.user_id for user in online_users("viewer", now=self.now)], ["caller"])


class PresenceUtilsTest(TestCase):
    def test_default_threshold(self):
        self.assertEqual(get_online_threshold(), timedelta(seconds=30))

    @override_settings(PRESENCE_ONLINE_THRESHOLD_SECONDS=60)
    def test_threshold_is_configurable(self):
        now = timezone.now()

        self.assertEqual(online_cutoff(now), now - timedelta(seconds=60))
        self.assertTrue(is_online(now - timedelta(seconds=45), now=now))

    def test_is_online(self):
        now = timezone.now()

        self.assertTrue(is_online(now - timedelta(seconds=30), now=now))
        self.assertFalse(is_online(now - timedelta(seconds=31), now=now))
        self.assertFalse(is_online(None))

    def test_online_status_property(self):
        user = User.objects.create(user_id="u1", username="ada")
        status = OnlineStatus.objects.create(user=user, online=True, last_active=timezone.now())

        self.assertTrue(status.is_online)

        status.online = False
        self.assertFalse(status.is_online)
