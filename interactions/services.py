import logging

from django.core.exceptions import ValidationError as DjangoValidationError
from django.db import IntegrityError, transaction
from rest_framework.exceptions import ValidationError

from chatroom.exceptions import Conflict, NotFoundError
from users.models import User
from .models import Block

logger = logging.getLogger(__name__)


def _require_pair(blocker_id, blocked_id):
    if blocker_id in (None, '') or blocked_id in (None, ''):
        raise ValidationError({"error": "blocker_id and blocked_id are required."})
    blocker_id, blocked_id = str(blocker_id), str(blocked_id)
    if blocker_id == blocked_id:
        raise ValidationError({"error": "You cannot block or unblock yourself."})
    return blocker_id, blocked_id


def block_user(blocker_id, blocked_id):
    blocker_id, blocked_id = _require_pair(blocker_id, blocked_id)

    found = set(User.objects.filter(user_id__in=[blocker_id, blocked_id]).values_list('user_id', flat=True))
    missing = {blocker_id, blocked_id} - found
    if missing:
        raise NotFoundError(f"User {sorted(missing)[0]} does not exist")

    if Block.objects.filter(blocker_id=blocker_id, blocked_id=blocked_id).exists():
        raise Conflict("This user is already blocked.")

    try:
        with transaction.atomic():
            block = Block.objects.create(blocker_id=blocker_id, blocked_id=blocked_id)
    except IntegrityError:
        # a concurrent request inserted the same pair after the check above
        raise Conflict("This user is already blocked.")
    except DjangoValidationError as e:
        if Block.objects.filter(blocker_id=blocker_id, blocked_id=blocked_id).exists():
            raise Conflict("This user is already blocked.")
        raise ValidationError({"error": e.messages})

    logger.info(f"User {blocker_id} blocked {blocked_id}")
    return block


def unblock_user(blocker_id, blocked_id):
    blocker_id, blocked_id = _require_pair(blocker_id, blocked_id)

    deleted, _ = Block.objects.filter(blocker_id=blocker_id, blocked_id=blocked_id).delete()
    if not deleted:
        raise NotFoundError("No block exists between these users.")

    logger.info(f"User {blocker_id} unblocked {blocked_id}")
    return deleted
