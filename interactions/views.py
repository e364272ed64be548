from rest_framework import status
from rest_framework.generics import ListAPIView
from rest_framework.response import Response
from rest_framework.views import APIView

from chatroom.middleware import get_acting_user_id
from .models import Block
from .serializers import BlockRequestSerializer, BlockSerializer
from .services import block_user, unblock_user


class InteractionsBaseView(APIView):
    def get_pair_from_request(self, request):
        serializer = BlockRequestSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        blocker_id = get_acting_user_id(request, serializer.validated_data.get('blocker_id'))
        return blocker_id, serializer.validated_data['blocked_id']


class BlockUserView(InteractionsBaseView):
    """Block a user; blocks suppress private messages in both directions"""

    def post(self, request):
        blocker_id, blocked_id = self.get_pair_from_request(request)
        block_user(blocker_id, blocked_id)
        return Response({'message': 'User blocked successfully.'}, status=status.HTTP_200_OK)


class UnblockUserView(InteractionsBaseView):
    def post(self, request):
        blocker_id, blocked_id = self.get_pair_from_request(request)
        unblock_user(blocker_id, blocked_id)
        return Response({'message': 'User unblocked successfully.'}, status=status.HTTP_200_OK)


class BlockListView(ListAPIView):
    """Users blocked by the given user, newest first"""
    serializer_class = BlockSerializer

    def get_queryset(self):
        return Block.objects.filter(
            blocker_id=self.kwargs['user_id']
        ).select_related('blocked').order_by('-created_at', '-id')
