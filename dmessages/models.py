from django.db import models
from django.utils import timezone

from users.models import User


class PrivateMessage(models.Model):
    """
    A one-to-one message. Immutable once written apart from ``is_read``.

    ``content`` holds either text or a media URL.
    """
    sender = models.ForeignKey(User, on_delete=models.CASCADE, related_name="sent_private_messages")
    receiver = models.ForeignKey(User, on_delete=models.CASCADE, related_name="received_private_messages")
    content = models.TextField()
    created_at = models.DateTimeField(default=timezone.now, db_index=True)
    is_read = models.BooleanField(default=False)

    class Meta:
        db_table = "private_messages"
        ordering = ["created_at", "id"]
        indexes = [
            models.Index(fields=["sender", "receiver", "created_at"], name="pm_pair_created_idx"),
            models.Index(fields=["receiver", "is_read"], name="pm_receiver_unread_idx"),
        ]

    def __str__(self):
        return f"{self.sender_id} to {self.receiver_id}: {self.content[:50]}..."
