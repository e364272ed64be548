from django.db import models

from users.models import User


class Room(models.Model):
    ROOM_TYPE_CHOICES = [
        ("public", "Public"),
        ("private", "Private"),
    ]
    name = models.CharField(max_length=255, unique=True)
    description = models.TextField(blank=True)
    type = models.CharField(max_length=20, choices=ROOM_TYPE_CHOICES, default="public")
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        db_table = "rooms"
        ordering = ["-created_at"]

    def __str__(self):
        return self.name


class RoomParticipant(models.Model):
    room = models.ForeignKey(
        Room, on_delete=models.CASCADE, related_name="participants"
    )
    user = models.ForeignKey(
        User, on_delete=models.CASCADE, related_name="room_memberships"
    )
    joined_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        db_table = "room_participants"
        constraints = [
            models.UniqueConstraint(fields=["room", "user"], name="unique_room_participant"),
        ]
        indexes = [
            models.Index(fields=["user", "joined_at"], name="room_part_user_joined_idx"),
        ]

    def __str__(self):
        return f"{self.user_id} in {self.room_id}"
