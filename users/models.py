from django.db import models


class User(models.Model):
    user_id = models.CharField(max_length=100, unique=True, primary_key=True)
    username = models.CharField(max_length=100, unique=True)
    first_name = models.CharField(max_length=100, blank=True)
    last_name = models.CharField(max_length=100, blank=True)
    email = models.EmailField(max_length=255, null=True, blank=True)
    avatar_url = models.CharField(max_length=500, blank=True, default="")
    bio = models.TextField(blank=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = 'users'
        indexes = [
            models.Index(fields=['first_name'], name='users_first_name_idx'),
            models.Index(fields=['last_name'], name='users_last_name_idx'),
        ]

    def __str__(self):
        return f"{self.username} ({self.user_id})"
