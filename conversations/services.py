"""
Conversation list derived from private messages.

Nothing here is stored: every call rebuilds the list with one query over the
users table, using correlated subqueries against private_messages for the
latest message and the unread count of each counterpart.
"""

from django.db.models import Count, F, IntegerField, OuterRef, Q, Subquery, Value
from django.db.models.functions import Coalesce

from dmessages.models import PrivateMessage
from users.models import User


def get_private_conversations(user_id):
    """
    One row per user that ``user_id`` has exchanged at least one message with.

    Each returned User carries ``last_message``, ``last_message_at`` and
    ``unread_count`` annotations and is ordered most recent conversation first.
    """
    thread = PrivateMessage.objects.filter(
        Q(sender_id=user_id, receiver=OuterRef("pk")) |
        Q(sender=OuterRef("pk"), receiver_id=user_id)
    ).order_by("-created_at", "-pk")

    unread = (
        PrivateMessage.objects.filter(sender=OuterRef("pk"), receiver_id=user_id, is_read=False)
        .order_by()
        .values("sender")
        .annotate(total=Count("pk"))
        .values("total")
    )

    counterparts = Q(pk__in=PrivateMessage.objects.filter(sender_id=user_id).values("receiver")) | Q(
        pk__in=PrivateMessage.objects.filter(receiver_id=user_id).values("sender")
    )

    return (
        User.objects.filter(counterparts)
        .exclude(pk=user_id)
        .annotate(
            last_message=Subquery(thread.values("content")[:1]),
            last_message_at=Subquery(thread.values("created_at")[:1]),
            unread_count=Coalesce(Subquery(unread, output_field=IntegerField()), Value(0)),
        )
        .order_by(F("last_message_at").desc(nulls_last=True), "pk")
    )
