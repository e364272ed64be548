from django.urls import path
from .views import MarkAsReadView, PrivateMessageCreateView, PrivateThreadView

urlpatterns = [
    path("private-messages", PrivateMessageCreateView.as_view(), name="private-message-create"),
    path("private-messages/mark-as-read", MarkAsReadView.as_view(), name="private-messages-mark-as-read"),
    path(
        "private-messages/<str:user_id>/<str:other_user_id>",
        PrivateThreadView.as_view(),
        name="private-thread",
    ),
]
