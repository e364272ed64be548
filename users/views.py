from django.db.models import Q
from rest_framework import status
from rest_framework.generics import ListAPIView, QuerySet, RetrieveAPIView
from rest_framework.response import Response

from interactions.utils import block_flags
from .models import User
from .serializers import UserSerializer, UserSummarySerializer

SEARCH_RESULT_LIMIT = 20


class ProfileRetrieveView(RetrieveAPIView):
    """Retrieves a profile, annotated with the block state towards the viewer"""

    lookup_field = "user_id"
    lookup_url_kwarg = "user_id"
    serializer_class = UserSerializer
    queryset = User.objects.all()

    def retrieve(self, request, *args, **kwargs):
        profile = self.get_object()
        data = self.get_serializer(profile).data

        current_user_id = request.GET.get("current_user_id") or getattr(request, "user_id", None)
        blocked_by_me, blocked_me = False, False
        if current_user_id:
            blocked_by_me, blocked_me = block_flags(current_user_id, profile.user_id)

        data["isBlockedByCurrentUser"] = blocked_by_me
        data["hasBlockedCurrentUser"] = blocked_me
        return Response(data)


class LocalUserSearchView(ListAPIView):
    serializer_class = UserSummarySerializer

    def list(self, request, *args, **kwargs):
        if not request.GET.get("term", "").strip():
            return Response(
                {"error": "A search term is required.", "example": "GET /users/search?term=ali"},
                status=status.HTTP_400_BAD_REQUEST,
            )
        return super().list(request, *args, **kwargs)

    def get_queryset(self) -> QuerySet[User]:
        """
        Return users whose username, first name or last name contains the "term" parameter.

        The caller passed as "excludeUserId" is left out. Results are ordered by
        username and capped at SEARCH_RESULT_LIMIT.
        """
        term = self.request.GET.get("term", "").strip()
        exclude_user_id = self.request.GET.get("excludeUserId")

        queryset = User._default_manager.filter(
            Q(username__icontains=term) | Q(first_name__icontains=term) | Q(last_name__icontains=term)
        )
        if exclude_user_id:
            queryset = queryset.exclude(user_id=exclude_user_id)

        return queryset.order_by("username")[:SEARCH_RESULT_LIMIT]
