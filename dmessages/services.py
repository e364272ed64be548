import logging

import bleach
from django.db.models import Q
from rest_framework.exceptions import PermissionDenied, ValidationError

from chatroom.exceptions import NotFoundError
from chatroom.validators import require_identifiers
from interactions.utils import block_flags, is_blocked_between
from users.models import User
from .models import PrivateMessage

logger = logging.getLogger(__name__)


def sanitize_message(content):
    """Strip every HTML tag from message content"""
    return bleach.clean(content, tags=[], attributes={}, strip=True).strip()


def send_private_message(sender_id, receiver_id, content):
    require_identifiers(sender_id=sender_id, receiver_id=receiver_id)
    sender_id, receiver_id = str(sender_id), str(receiver_id)
    if sender_id == receiver_id:
        raise ValidationError({"error": "You cannot send a private message to yourself."})

    content = sanitize_message(content or "")
    if not content:
        raise ValidationError({"content": ["Message content cannot be empty."]})

    found = set(User.objects.filter(user_id__in=[sender_id, receiver_id]).values_list("user_id", flat=True))
    missing = {sender_id, receiver_id} - found
    if missing:
        raise NotFoundError(f"User {sorted(missing)[0]} does not exist")

    if is_blocked_between(sender_id, receiver_id):
        logger.warning(f"Rejected private message from {sender_id} to {receiver_id}: blocked")
        sender_blocked_receiver, _ = block_flags(sender_id, receiver_id)
        if sender_blocked_receiver:
            raise PermissionDenied("You have blocked this user.")
        raise PermissionDenied("This user has blocked you.")

    message = PrivateMessage.objects.create(sender_id=sender_id, receiver_id=receiver_id, content=content)
    logger.info(f"Private message {message.id} sent from {sender_id} to {receiver_id}")
    return message


def get_private_thread(user_id, other_user_id):
    """All messages exchanged between the two users, oldest first"""
    return PrivateMessage.objects.filter(
        Q(sender_id=user_id, receiver_id=other_user_id) |
        Q(sender_id=other_user_id, receiver_id=user_id)
    ).order_by("created_at", "id")


def mark_as_read(sender_id, receiver_id):
    """
    Flag every unread message from ``sender_id`` to ``receiver_id`` as read.

    One UPDATE statement; returns the number of rows it changed, so a repeat
    call returns 0.
    """
    require_identifiers(senderId=sender_id, receiverId=receiver_id)

    updated = PrivateMessage.objects.filter(
        sender_id=sender_id, receiver_id=receiver_id, is_read=False
    ).update(is_read=True)
    logger.info(f"Marked {updated} messages from {sender_id} to {receiver_id} as read")
    return updated
