"""
URL configuration for the chatroom project.

Every app mounts its routes at the root; paths carry no trailing slash so the
polling clients can call them exactly as documented.
"""
from django.contrib import admin
from django.urls import include, path

from . import views

urlpatterns = [
    path('admin/', admin.site.urls),
    path('ping/', views.PingView.as_view(), name='ping'),
    path('', include('users.urls')),
    path('', include('rooms.urls')),
    path('', include('presence.urls')),
    path('', include('dmessages.urls')),
    path('', include('conversations.urls')),
    path('', include('interactions.urls')),
]
