from django.urls import path
from .views import RoomJoinView, RoomMembershipView, RoomParticipantsView, UserRoomsView

urlpatterns = [
    path("rooms/<int:room_id>/participants", RoomParticipantsView.as_view(), name="room-participants"),
    path(
        "rooms/<int:room_id>/membership/<str:user_id>",
        RoomMembershipView.as_view(),
        name="room-membership",
    ),
    path("users/<str:user_id>/rooms", UserRoomsView.as_view(), name="user-rooms"),
    path("rooms/<int:room_id>/join", RoomJoinView.as_view(), name="room-join"),
]
