from django.urls import path
from .views import OnlineParticipantsView, OnlineStatusView, OnlineUsersView, RoomPresenceView

urlpatterns = [
    path("rooms/<int:room_id>/presence", RoomPresenceView.as_view(), name="room-presence"),
    path(
        "rooms/<int:room_id>/online-participants",
        OnlineParticipantsView.as_view(),
        name="online-participants",
    ),
    path("online-users", OnlineUsersView.as_view(), name="online-users"),
    path("online-status", OnlineStatusView.as_view(), name="online-status"),
]
