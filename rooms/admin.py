from django.contrib import admin
from .models import Room, RoomParticipant


@admin.register(Room)
class RoomAdmin(admin.ModelAdmin):
    list_display = ['id', 'name', 'type', 'created_at']
    list_filter = ['type']
    search_fields = ['name', 'description']


@admin.register(RoomParticipant)
class RoomParticipantAdmin(admin.ModelAdmin):
    list_display = ['room', 'user', 'joined_at']
    search_fields = ['room__name', 'user__username']
    readonly_fields = ['joined_at']
