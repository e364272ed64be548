from rest_framework import status
from rest_framework.generics import ListAPIView
from rest_framework.response import Response
from rest_framework.views import APIView

from chatroom.middleware import get_acting_user_id
from .models import RoomParticipant
from .serializers import JoinRoomSerializer, RoomParticipantSerializer, UserRoomSerializer
from .services import join_room


class RoomParticipantsView(ListAPIView):
    """Every member of a room, online or not"""

    serializer_class = RoomParticipantSerializer

    def get_queryset(self):
        return (
            RoomParticipant.objects.filter(room_id=self.kwargs["room_id"])
            .select_related("user")
            .order_by("user__username")
        )


class RoomMembershipView(APIView):
    def get(self, request, room_id, user_id):
        is_member = RoomParticipant.objects.filter(room_id=room_id, user_id=user_id).exists()
        return Response({"isMember": is_member})


class UserRoomsView(ListAPIView):
    """Rooms a user belongs to, most recently joined first"""

    serializer_class = UserRoomSerializer

    def get_queryset(self):
        return (
            RoomParticipant.objects.filter(user_id=self.kwargs["user_id"])
            .select_related("room")
            .order_by("-joined_at", "-id")
        )

    def list(self, request, *args, **kwargs):
        serializer = self.get_serializer(self.get_queryset(), many=True)
        return Response({"success": True, "rooms": serializer.data})


class RoomJoinView(APIView):
    def post(self, request, room_id):
        serializer = JoinRoomSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        user_id = get_acting_user_id(request, serializer.validated_data.get("userId"))

        membership, created = join_room(room_id, user_id)
        return Response(
            {
                "message": "Joined room." if created else "Already a member of this room.",
                "joined_at": membership.joined_at,
            },
            status=status.HTTP_201_CREATED if created else status.HTTP_200_OK,
        )
