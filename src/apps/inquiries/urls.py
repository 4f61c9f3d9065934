"""Inquiries API URL configuration."""

from django.urls import path

from . import views

app_name = "inquiries"

urlpatterns = [
    # Public
    path("api/inquiries", views.InquiryCreateView.as_view(), name="create"),
    path("api/inquiries/lookups/age-groups", views.AgeGroupLookupView.as_view(), name="age_groups"),
    path("api/inquiries/lookups/org-types", views.OrganizationTypeLookupView.as_view(), name="org_types"),
    # Admin (X-Admin-Token)
    path("api/admin/inquiries", views.AdminInquiryListView.as_view(), name="admin_list"),
    path("api/admin/inquiries/admin", views.AdminInquiryListView.as_view(), name="admin_list_alias"),
    path("api/inquiries/admin", views.AdminInquiryListView.as_view(), name="admin_list_legacy"),
    path("api/admin/inquiries/<str:inquiry_id>", views.AdminInquiryDetailView.as_view(), name="admin_detail"),
    path(
        "api/admin/inquiries/<str:inquiry_id>/status",
        views.AdminInquiryStatusView.as_view(),
        name="admin_status",
    ),
    path(
        "api/admin/inquiries/admin/<str:inquiry_id>/status",
        views.AdminInquiryStatusView.as_view(),
        name="admin_status_alias",
    ),
    path(
        "api/inquiries/admin/<str:inquiry_id>/status",
        views.AdminInquiryStatusView.as_view(),
        name="admin_status_legacy",
    ),
]
