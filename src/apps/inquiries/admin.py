"""Inquiries admin configuration."""

from typing import ClassVar

from django.contrib import admin

from .models import (
    AgeGroup,
    Inquiry,
    InquiryAgeGroup,
    InquiryParent,
    InquiryPartner,
    NewsletterSubscription,
    OrganizationType,
)


class InquiryParentInline(admin.StackedInline):
    model = InquiryParent
    can_delete = False
    extra = 0


class InquiryAgeGroupInline(admin.TabularInline):
    model = InquiryAgeGroup
    extra = 0


class InquiryPartnerInline(admin.StackedInline):
    model = InquiryPartner
    can_delete = False
    extra = 0


@admin.register(Inquiry)
class InquiryAdmin(admin.ModelAdmin):
    """Admin interface for website inquiries."""

    list_display = ("full_name", "email", "kind", "status", "source", "created_at")
    list_filter = ("kind", "status", "newsletter_opt_in", "created_at")
    search_fields = ("full_name", "email", "phone", "message")
    readonly_fields = ("id", "kind", "consent", "consent_at", "created_at", "updated_at")
    inlines: ClassVar[list] = [InquiryParentInline, InquiryAgeGroupInline, InquiryPartnerInline]
    ordering = ("-created_at",)


@admin.register(AgeGroup)
class AgeGroupAdmin(admin.ModelAdmin):
    """Age-group codes offered on the parent form."""

    list_display = ("code", "label", "active", "sort_order")
    list_editable = ("active", "sort_order")
    ordering = ("sort_order", "code")


@admin.register(OrganizationType)
class OrganizationTypeAdmin(admin.ModelAdmin):
    """Organization types offered on the partner form."""

    list_display = ("code", "label", "active", "sort_order")
    list_editable = ("active", "sort_order")
    ordering = ("sort_order", "code")


@admin.register(NewsletterSubscription)
class NewsletterSubscriptionAdmin(admin.ModelAdmin):
    """Newsletter subscribers."""

    list_display = ("email", "first_name", "last_name", "status", "source", "subscribed_at")
    list_filter = ("status", "source")
    search_fields = ("email", "first_name", "last_name")
    readonly_fields = ("subscribed_at", "updated_at")
    ordering = ("-subscribed_at",)
