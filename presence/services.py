"""
Presence writes and online-set reads.

Writers only ever refresh timestamps (or delete on leave); nothing expires rows.
Readers decide "online" at query time against a single threshold, so room and
global scope can never disagree about how fresh a heartbeat must be.
"""

import logging

from django.conf import settings
from django.db.models import F, Value
from django.db.models.functions import Greatest
from django.utils import timezone

from chatroom.exceptions import NotFoundError
from chatroom.validators import require_identifiers
from rooms.services import enroll_participant, ensure_room_and_user
from users.models import User
from .models import OnlineStatus, RoomPresence
from .utils import online_cutoff

logger = logging.getLogger(__name__)


def record_room_presence(room_id, user_id, now=None):
    """
    Record a heartbeat of ``user_id`` in ``room_id`` and return its timestamp.

    Membership and the presence row are inserted if absent, then last_seen is
    raised to ``now`` in one UPDATE that keeps the larger of the stored and the
    new value. Heartbeats that commit out of order never move it backwards.
    """
    require_identifiers(roomId=room_id, userId=user_id)
    ensure_room_and_user(room_id, user_id)

    now = now or timezone.now()
    enroll_participant(room_id, user_id)
    RoomPresence.objects.bulk_create(
        [RoomPresence(room_id=room_id, user_id=user_id, last_seen=now)],
        ignore_conflicts=True,
    )
    RoomPresence.objects.filter(room_id=room_id, user_id=user_id).update(
        last_seen=Greatest(F("last_seen"), Value(now))
    )
    logger.info(f"Presence recorded for user {user_id} in room {room_id}")
    return now


def record_global_presence(user_id, now=None):
    require_identifiers(userId=user_id)
    if not User.objects.filter(pk=user_id).exists():
        raise NotFoundError(f"User {user_id} does not exist")

    now = now or timezone.now()
    OnlineStatus.objects.bulk_create(
        [OnlineStatus(user_id=user_id, online=True, last_active=now)],
        ignore_conflicts=True,
    )
    OnlineStatus.objects.filter(user_id=user_id).update(
        online=True,
        last_active=Greatest(F("last_active"), Value(now)),
    )
    logger.info(f"Global presence recorded for user {user_id}")
    return now


def leave_room(room_id, user_id):
    """Drop the presence row at once; returns how many rows went (0 or 1)."""
    require_identifiers(roomId=room_id, userId=user_id)

    deleted, _ = RoomPresence.objects.filter(room_id=room_id, user_id=user_id).delete()
    logger.info(f"User {user_id} left room {room_id} ({deleted} presence rows removed)")
    return deleted


def mark_globally_offline(user_id):
    require_identifiers(userId=user_id)

    updated = OnlineStatus.objects.filter(user_id=user_id, online=True).update(online=False)
    logger.info(f"User {user_id} marked offline")
    return updated


def online_room_participants(room_id, now=None):
    """Users whose room heartbeat is within the threshold, ordered by username."""
    return User.objects.filter(
        room_presences__room_id=room_id,
        room_presences__last_seen__gte=online_cutoff(now),
    ).order_by("username")


def online_users(exclude_user_id, limit=None, now=None):
    """
    Globally online users other than ``exclude_user_id``, most recently active first.

    A user counts when the online flag is set and last_active is within the same
    threshold the room scope uses.
    """
    if limit is None:
        limit = getattr(settings, "ONLINE_USERS_LIMIT", 10)

    return (
        User.objects.filter(
            online_status__online=True,
            online_status__last_active__gte=online_cutoff(now),
        )
        .exclude(user_id=exclude_user_id)
        .order_by("-online_status__last_active", "username")[:limit]
    )
