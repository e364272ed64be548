from django.contrib import admin
from .models import OnlineStatus, RoomPresence


@admin.register(RoomPresence)
class RoomPresenceAdmin(admin.ModelAdmin):
    list_display = ['room', 'user', 'last_seen']
    list_filter = ['room']
    search_fields = ['user__username', 'room__name']


@admin.register(OnlineStatus)
class OnlineStatusAdmin(admin.ModelAdmin):
    list_display = ['user', 'online', 'last_active', 'is_online']
    list_filter = ['online']
    search_fields = ['user__username']

    @admin.display(boolean=True)
    def is_online(self, obj):
        return obj.is_online
