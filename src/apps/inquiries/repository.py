"""Storage interface for the inquiry writer, and its Django ORM implementation."""

import uuid
from contextlib import AbstractContextManager
from dataclasses import dataclass
from datetime import datetime
from typing import Protocol

from django.db import transaction

from .exceptions import LookupFailure
from .forms import ParentSubmission, Submission
from .models import (
    AgeGroup,
    Inquiry,
    InquiryAgeGroup,
    InquiryParent,
    InquiryPartner,
    NewsletterSubscription,
    OrganizationType,
)


@dataclass(frozen=True)
class ResolvedLookup:
    """An active reference row matched by code."""

    id: uuid.UUID
    code: str


class InquiryRepository(Protocol):
    """Operations the writer needs from the backing store."""

    def atomic(self) -> AbstractContextManager: ...

    def insert_inquiry(self, submission: Submission, *, consent_at: datetime) -> uuid.UUID: ...

    def insert_parent_detail(
        self, inquiry_id: uuid.UUID, *, number_of_kids: int, primary_age_group_id: uuid.UUID
    ) -> None: ...

    def insert_age_group_links(self, inquiry_id: uuid.UUID, age_group_ids: list[uuid.UUID]) -> None: ...

    def upsert_newsletter(self, submission: ParentSubmission, *, now: datetime) -> None: ...

    def insert_partner_detail(
        self,
        inquiry_id: uuid.UUID,
        *,
        org_type_id: uuid.UUID,
        org_type_other: str | None,
        org_name: str,
    ) -> None: ...

    def resolve_age_groups_by_code(self, codes: list[str]) -> list[ResolvedLookup]: ...

    def resolve_org_type_by_code(self, code: str) -> ResolvedLookup: ...


class DjangoInquiryRepository:
    """InquiryRepository backed by the Django ORM."""

    def atomic(self) -> AbstractContextManager:
        return transaction.atomic()

    def insert_inquiry(self, submission: Submission, *, consent_at: datetime) -> uuid.UUID:
        inquiry = Inquiry.objects.create(
            kind=submission.kind,
            first_name=submission.first_name,
            last_name=submission.last_name,
            full_name=submission.full_name,
            email=submission.email,
            phone=submission.phone,
            message=submission.message,
            newsletter_opt_in=submission.newsletter_opt_in,
            consent=True,
            consent_at=consent_at,
            source=submission.source,
            page_path=submission.page_path,
            status=Inquiry.Status.NEW,
            spam_flag=False,
        )
        return inquiry.pk

    def insert_parent_detail(
        self, inquiry_id: uuid.UUID, *, number_of_kids: int, primary_age_group_id: uuid.UUID
    ) -> None:
        InquiryParent.objects.create(
            inquiry_id=inquiry_id,
            number_of_kids=number_of_kids,
            primary_age_group_id=primary_age_group_id,
        )

    def insert_age_group_links(self, inquiry_id: uuid.UUID, age_group_ids: list[uuid.UUID]) -> None:
        InquiryAgeGroup.objects.bulk_create(
            [InquiryAgeGroup(inquiry_id=inquiry_id, age_group_id=age_group_id) for age_group_id in age_group_ids],
            ignore_conflicts=True,
        )

    def upsert_newsletter(self, submission: ParentSubmission, *, now: datetime) -> None:
        NewsletterSubscription.objects.bulk_create(
            [
                NewsletterSubscription(
                    email=submission.email,
                    first_name=submission.first_name,
                    last_name=submission.last_name,
                    status="subscribed",
                    double_opt_in=False,
                    source=submission.source,
                    subscribed_at=now,
                    updated_at=now,
                )
            ],
            update_conflicts=True,
            unique_fields=["email"],
            update_fields=["first_name", "last_name", "status", "updated_at"],
        )

    def insert_partner_detail(
        self,
        inquiry_id: uuid.UUID,
        *,
        org_type_id: uuid.UUID,
        org_type_other: str | None,
        org_name: str,
    ) -> None:
        InquiryPartner.objects.create(
            inquiry_id=inquiry_id,
            org_type_id=org_type_id,
            org_type_other=org_type_other,
            org_name=org_name,
        )

    def resolve_age_groups_by_code(self, codes: list[str]) -> list[ResolvedLookup]:
        rows = AgeGroup.objects.filter(code__in=codes, active=True).order_by("sort_order", "code")
        resolved = [ResolvedLookup(id=row.id, code=row.code) for row in rows]
        if not resolved:
            raise LookupFailure(f"Invalid age group codes: {', '.join(codes)}")
        return resolved

    def resolve_org_type_by_code(self, code: str) -> ResolvedLookup:
        row = OrganizationType.objects.filter(code=code, active=True).first()
        if row is None:
            raise LookupFailure(f"Invalid organization type: {code}")
        return ResolvedLookup(id=row.id, code=row.code)


async def active_age_groups() -> list[dict]:
    """Active age groups as ``{code, label}`` in display order."""
    return [
        row
        async for row in AgeGroup.objects.filter(active=True).order_by("sort_order", "code").values("code", "label")
    ]


async def active_org_types() -> list[dict]:
    """Active organization types as ``{code, label}`` in display order."""
    return [
        row
        async for row in OrganizationType.objects.filter(active=True)
        .order_by("sort_order", "code")
        .values("code", "label")
    ]
