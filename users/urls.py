from django.urls import path
from .views import LocalUserSearchView, ProfileRetrieveView


urlpatterns = [
    path("users/search", LocalUserSearchView.as_view(), name="local_user_search"),
    path("profile/<str:user_id>", ProfileRetrieveView.as_view(), name="profile-detail"),
]
