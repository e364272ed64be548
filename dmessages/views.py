from rest_framework import status
from rest_framework.generics import ListAPIView
from rest_framework.response import Response
from rest_framework.views import APIView

from chatroom.middleware import get_acting_user_id
from .serializers import MarkAsReadSerializer, PrivateMessageSerializer, SendPrivateMessageSerializer
from .services import get_private_thread, mark_as_read, send_private_message


class PrivateMessageCreateView(APIView):
    def post(self, request):
        serializer = SendPrivateMessageSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        data = serializer.validated_data

        message = send_private_message(
            get_acting_user_id(request, data.get("sender_id")),
            data["receiver_id"],
            data["content"],
        )
        return Response(PrivateMessageSerializer(message).data, status=status.HTTP_201_CREATED)


class PrivateThreadView(ListAPIView):
    """Conversation history between two users, oldest first"""

    serializer_class = PrivateMessageSerializer

    def get_queryset(self):
        return get_private_thread(self.kwargs["user_id"], self.kwargs["other_user_id"])


class MarkAsReadView(APIView):
    def put(self, request):
        serializer = MarkAsReadSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        updated = mark_as_read(
            serializer.validated_data["senderId"],
            get_acting_user_id(request, serializer.validated_data.get("receiverId")),
        )
        return Response({"message": "Messages marked as read.", "marked_read": updated})
