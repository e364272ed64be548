from django.db.models import Q

from .models import Block


def is_blocked_between(user_a_id, user_b_id):
    """True when a block row exists in either direction between the two users."""
    return Block.objects.filter(
        Q(blocker_id=user_a_id, blocked_id=user_b_id) |
        Q(blocker_id=user_b_id, blocked_id=user_a_id)
    ).exists()


def block_flags(viewer_id, other_id):
    """
    Returns (viewer blocked other, other blocked viewer) in one query.
    """
    directions = set(
        Block.objects.filter(
            Q(blocker_id=viewer_id, blocked_id=other_id) |
            Q(blocker_id=other_id, blocked_id=viewer_id)
        ).values_list('blocker_id', flat=True)
    )
    return str(viewer_id) in directions, str(other_id) in directions
