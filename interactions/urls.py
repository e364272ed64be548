from django.urls import path
from .views import BlockListView, BlockUserView, UnblockUserView

urlpatterns = [
    path('block-user', BlockUserView.as_view(), name='block-user'),
    path('unblock-user', UnblockUserView.as_view(), name='unblock-user'),
    path('blocks/<str:user_id>', BlockListView.as_view(), name='block-list'),
]
