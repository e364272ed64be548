from rest_framework.generics import ListAPIView

from .serializers import PrivateConversationSerializer
from .services import get_private_conversations


class PrivateConversationListView(ListAPIView):
    """List the private conversations of a user, most recent first"""

    serializer_class = PrivateConversationSerializer

    def get_queryset(self):
        return get_private_conversations(self.kwargs["user_id"])
