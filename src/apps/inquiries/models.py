"""Inquiry intake models."""

import uuid
from typing import ClassVar

from django.db import models


class Inquiry(models.Model):
    """One parent or partner submission from the website."""

    class Kind(models.TextChoices):
        """Inquiry kind discriminator."""

        PARENT = "parent", "Parent"
        PARTNER = "partner", "Partner"

    class Status(models.TextChoices):
        """Admin triage status."""

        NEW = "new", "New"
        READ = "read", "Read"
        ARCHIVED = "archived", "Archived"

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    kind = models.CharField("kind", max_length=16, choices=Kind.choices, editable=False)

    # Contact
    first_name = models.CharField("first name", max_length=100)
    last_name = models.CharField("last name", max_length=100)
    full_name = models.CharField("full name", max_length=201)
    email = models.EmailField("email", max_length=320)
    phone = models.CharField("phone", max_length=50, blank=True, default="")
    message = models.TextField("message", blank=True, default="")

    # Consent
    newsletter_opt_in = models.BooleanField("newsletter opt-in", default=False)
    consent = models.BooleanField("consent", default=False)
    consent_at = models.DateTimeField("consent given at", null=True, blank=True)

    # Attribution
    source = models.CharField("source", max_length=120)
    page_path = models.CharField("page path", max_length=512, blank=True, default="")

    # Triage
    status = models.CharField("status", max_length=16, choices=Status.choices, default=Status.NEW)
    spam_flag = models.BooleanField("spam", default=False)

    # Timestamps
    created_at = models.DateTimeField("created", auto_now_add=True)
    updated_at = models.DateTimeField("updated", auto_now=True)

    class Meta:
        db_table = "inquiries"
        ordering: ClassVar[list[str]] = ["-created_at"]
        indexes: ClassVar[list[models.Index]] = [
            models.Index(fields=["created_at"], name="inquiries_created_idx"),
            models.Index(fields=["status"], name="inquiries_status_idx"),
        ]
        verbose_name = "inquiry"
        verbose_name_plural = "inquiries"

    def __str__(self) -> str:
        return f"{self.full_name} <{self.email}> ({self.kind})"


class AgeGroup(models.Model):
    """Reference table of age-group codes offered on the parent form."""

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    code = models.CharField("code", max_length=16, unique=True)
    label = models.CharField("label", max_length=100)
    active = models.BooleanField("active", default=True)
    sort_order = models.PositiveIntegerField("sort order", default=0)

    class Meta:
        db_table = "age_groups"
        ordering: ClassVar[list[str]] = ["sort_order", "code"]
        verbose_name = "age group"
        verbose_name_plural = "age groups"

    def __str__(self) -> str:
        return self.label


class OrganizationType(models.Model):
    """Reference table of organization types offered on the partner form."""

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    code = models.CharField("code", max_length=32, unique=True)
    label = models.CharField("label", max_length=100)
    active = models.BooleanField("active", default=True)
    sort_order = models.PositiveIntegerField("sort order", default=0)

    class Meta:
        db_table = "organization_types"
        ordering: ClassVar[list[str]] = ["sort_order", "code"]
        verbose_name = "organization type"
        verbose_name_plural = "organization types"

    def __str__(self) -> str:
        return self.label


class InquiryParent(models.Model):
    """Parent-specific detail for an inquiry."""

    inquiry = models.OneToOneField(
        Inquiry,
        on_delete=models.CASCADE,
        primary_key=True,
        related_name="parent_detail",
    )
    number_of_kids = models.PositiveSmallIntegerField("number of kids", default=1)
    primary_age_group = models.ForeignKey(
        AgeGroup,
        on_delete=models.PROTECT,
        related_name="+",
        help_text="Lowest sort-order age group among those selected.",
    )

    class Meta:
        db_table = "inquiry_parent"
        verbose_name = "parent detail"
        verbose_name_plural = "parent details"

    def __str__(self) -> str:
        return f"{self.inquiry_id}: {self.number_of_kids} kid(s)"


class InquiryAgeGroup(models.Model):
    """Age group selected on a parent inquiry."""

    inquiry = models.ForeignKey(Inquiry, on_delete=models.CASCADE, related_name="age_group_links")
    age_group = models.ForeignKey(AgeGroup, on_delete=models.PROTECT, related_name="+")

    class Meta:
        db_table = "inquiry_age_groups"
        constraints: ClassVar[list] = [
            models.UniqueConstraint(fields=["inquiry", "age_group"], name="inquiry_age_group_unique"),
        ]
        verbose_name = "inquiry age group"
        verbose_name_plural = "inquiry age groups"

    def __str__(self) -> str:
        return f"{self.inquiry_id} -> {self.age_group_id}"


class InquiryPartner(models.Model):
    """Partner-specific detail for an inquiry."""

    inquiry = models.OneToOneField(
        Inquiry,
        on_delete=models.CASCADE,
        primary_key=True,
        related_name="partner_detail",
    )
    org_type = models.ForeignKey(OrganizationType, on_delete=models.PROTECT, related_name="+")
    org_type_other = models.CharField(
        "other organization type",
        max_length=200,
        null=True,
        blank=True,
        help_text="Only stored when the organization type is 'other'.",
    )
    org_name = models.CharField("organization name", max_length=200)

    class Meta:
        db_table = "inquiry_partner"
        verbose_name = "partner detail"
        verbose_name_plural = "partner details"

    def __str__(self) -> str:
        return self.org_name


class NewsletterSubscription(models.Model):
    """Newsletter subscriber, keyed by email."""

    email = models.EmailField("email", max_length=320, unique=True)
    first_name = models.CharField("first name", max_length=100, blank=True, default="")
    last_name = models.CharField("last name", max_length=100, blank=True, default="")
    status = models.CharField("status", max_length=32, default="subscribed")
    double_opt_in = models.BooleanField("double opt-in", default=False)
    source = models.CharField("source", max_length=120, blank=True, default="")
    subscribed_at = models.DateTimeField("subscribed")
    updated_at = models.DateTimeField("updated")

    class Meta:
        db_table = "newsletter_subscriptions"
        ordering: ClassVar[list[str]] = ["-subscribed_at"]
        verbose_name = "newsletter subscription"
        verbose_name_plural = "newsletter subscriptions"

    def __str__(self) -> str:
        return self.email
