import logging

from chatroom.exceptions import NotFoundError
from chatroom.validators import require_identifiers
from users.models import User
from .models import Room, RoomParticipant

logger = logging.getLogger(__name__)


def ensure_room_and_user(room_id, user_id):
    """Reject orphan references before any write touches room-scoped tables."""
    if not Room.objects.filter(pk=room_id).exists():
        raise NotFoundError(f"Room {room_id} does not exist")
    if not User.objects.filter(pk=user_id).exists():
        raise NotFoundError(f"User {user_id} does not exist")


def enroll_participant(room_id, user_id):
    """Insert the membership row if it is absent, as a single statement."""
    RoomParticipant.objects.bulk_create(
        [RoomParticipant(room_id=room_id, user_id=user_id)],
        ignore_conflicts=True,
    )


def join_room(room_id, user_id):
    require_identifiers(roomId=room_id, userId=user_id)
    ensure_room_and_user(room_id, user_id)

    membership, created = RoomParticipant.objects.get_or_create(room_id=room_id, user_id=user_id)
    if created:
        logger.info(f"User {user_id} joined room {room_id}")
    return membership, created
