from django.urls import path
from .views import PrivateConversationListView

urlpatterns = [
    path(
        "private-conversations/<str:user_id>",
        PrivateConversationListView.as_view(),
        name="private-conversations",
    ),
]
