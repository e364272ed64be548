from rest_framework import status
from rest_framework.generics import ListAPIView
from rest_framework.response import Response
from rest_framework.views import APIView

from chatroom.middleware import get_acting_user_id
from users.serializers import UserSummarySerializer
from .serializers import OnlineParticipantSerializer, PresenceRequestSerializer
from .services import (
    leave_room,
    mark_globally_offline,
    online_room_participants,
    online_users,
    record_global_presence,
    record_room_presence,
)
from .throttles import PresenceRateThrottle


class PresenceBaseView(APIView):
    throttle_classes = [PresenceRateThrottle]

    def get_user_id(self, request):
        serializer = PresenceRequestSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        supplied = serializer.validated_data.get("userId") or request.query_params.get("userId")
        return get_acting_user_id(request, supplied)


class RoomPresenceView(PresenceBaseView):
    """Heartbeat (POST) and leave (DELETE) for one room"""

    def post(self, request, room_id):
        last_seen = record_room_presence(room_id, self.get_user_id(request))
        return Response({"message": "Presence updated.", "last_seen": last_seen})

    def delete(self, request, room_id):
        removed = leave_room(room_id, self.get_user_id(request))
        return Response({"message": "Left room.", "removed": removed}, status=status.HTTP_200_OK)


class OnlineStatusView(PresenceBaseView):
    """Global heartbeat (POST) and explicit logout (DELETE)"""

    def post(self, request):
        last_active = record_global_presence(self.get_user_id(request))
        return Response({"message": "Online status updated.", "last_active": last_active})

    def delete(self, request):
        updated = mark_globally_offline(self.get_user_id(request))
        return Response({"message": "Marked offline.", "updated": updated})


class OnlineParticipantsView(ListAPIView):
    serializer_class = OnlineParticipantSerializer

    def get_queryset(self):
        return online_room_participants(self.kwargs["room_id"])


class OnlineUsersView(ListAPIView):
    """Up to ONLINE_USERS_LIMIT online users, the caller excluded"""

    serializer_class = UserSummarySerializer

    def list(self, request, *args, **kwargs):
        self.exclude_user_id = get_acting_user_id(request, request.query_params.get("exclude"))
        if not self.exclude_user_id:
            return Response(
                {"error": "The exclude query parameter is required.", "example": "GET /online-users?exclude=<userId>"},
                status=status.HTTP_400_BAD_REQUEST,
            )
        return super().list(request, *args, **kwargs)

    def get_queryset(self):
        return online_users(self.exclude_user_id)
