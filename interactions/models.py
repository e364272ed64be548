from django.core.exceptions import ValidationError
from django.db import models

from users.models import User


class Block(models.Model):
    """Directional block: ``blocker`` refuses private messages with ``blocked``."""

    blocker = models.ForeignKey(User, related_name='blocking_relations', on_delete=models.CASCADE)
    blocked = models.ForeignKey(User, related_name='blocked_by_relations', on_delete=models.CASCADE)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        db_table = 'blocked_users'
        constraints = [
            models.UniqueConstraint(fields=['blocker', 'blocked'], name='unique_block_pair'),
        ]

    def clean(self):
        if self.blocker_id == self.blocked_id:
            raise ValidationError("You cannot block yourself.")

    def save(self, *args, **kwargs):
        self.full_clean()
        super().save(*args, **kwargs)

    def __str__(self):
        return f"{self.blocker_id} blocks {self.blocked_id}"
