from django.db import models
from django.utils import timezone

from rooms.models import Room
from users.models import User
from .utils import is_online


class RoomPresence(models.Model):
    """
    Last heartbeat of a user in a room.

    One row per (room, user). A row whose last_seen is older than the online
    threshold is stale but left in place; readers classify lazily.
    """
    room = models.ForeignKey(Room, on_delete=models.CASCADE, related_name="presences")
    user = models.ForeignKey(User, on_delete=models.CASCADE, related_name="room_presences")
    last_seen = models.DateTimeField(default=timezone.now)

    class Meta:
        db_table = "room_presence"
        constraints = [
            models.UniqueConstraint(fields=["room", "user"], name="unique_room_presence"),
        ]
        indexes = [
            models.Index(fields=["room", "last_seen"], name="room_presence_seen_idx"),
        ]

    def __str__(self):
        return f"{self.user_id} in {self.room_id} at {self.last_seen}"


class OnlineStatus(models.Model):
    user = models.OneToOneField(
        User, on_delete=models.CASCADE, primary_key=True, related_name="online_status"
    )
    online = models.BooleanField(default=False)
    last_active = models.DateTimeField(default=timezone.now)

    class Meta:
        db_table = "online_status"
        verbose_name_plural = "online statuses"
        indexes = [
            models.Index(fields=["last_active"], name="online_status_active_idx"),
        ]

    def __str__(self):
        return f"{self.user_id} online={self.online}"

    @property
    def is_online(self):
        return self.online and is_online(self.last_active)
