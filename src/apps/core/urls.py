"""Core app URL configuration."""

from django.urls import path, re_path

from . import views

app_name = "core"

urlpatterns = [
    path("api/health", views.HealthView.as_view(), name="health"),
    # Must stay last: catches every /api/ path no other app matched
    re_path(r"^api/(?P<path>.*)$", views.api_not_found, name="api_not_found"),
]
