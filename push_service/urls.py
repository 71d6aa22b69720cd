"""URL configuration for the push relay service."""

from django.urls import include, path

urlpatterns = [
    path("api/v1/push/", include("relay.urls")),
]
