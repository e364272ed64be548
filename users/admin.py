from django.contrib import admin
from .models import User


@admin.register(User)
class UserAdmin(admin.ModelAdmin):
    list_display = (
        "username",
        "user_id",
        "first_name",
        "last_name",
        "created_at",
    )
    search_fields = ("username", "first_name", "last_name", "email")
