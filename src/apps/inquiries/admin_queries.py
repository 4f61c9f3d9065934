"""Read and triage operations behind the admin API.

Callers are expected to have checked the admin token already.
"""

import logging
import uuid

from django.db import models
from django.utils import timezone

from .config import ADMIN_PAGE_SIZE
from .exceptions import InquiryNotFound, InvalidStatus
from .models import Inquiry, InquiryAgeGroup, InquiryParent, InquiryPartner

logger = logging.getLogger(__name__)

INQUIRY_FIELDS = (
    "id",
    "kind",
    "first_name",
    "last_name",
    "full_name",
    "email",
    "phone",
    "message",
    "newsletter_opt_in",
    "consent",
    "consent_at",
    "source",
    "page_path",
    "status",
    "spam_flag",
    "created_at",
    "updated_at",
)


def serialize_inquiry(inquiry: Inquiry) -> dict:
    data = {name: getattr(inquiry, name) for name in INQUIRY_FIELDS}
    data["id"] = str(inquiry.id)
    for name in ("consent_at", "created_at", "updated_at"):
        data[name] = data[name].isoformat() if data[name] else None
    return data


def _parse_id(inquiry_id) -> uuid.UUID:
    try:
        return uuid.UUID(str(inquiry_id))
    except ValueError as exc:
        raise InquiryNotFound(str(inquiry_id)) from exc


class InquiryAdminQueries:
    """Filtered listing, detail and status changes for stored inquiries."""

    def __init__(self, page_size: int = ADMIN_PAGE_SIZE) -> None:
        self.page_size = page_size

    async def list(self, status: str | None = None, q: str | None = None) -> list[dict]:
        """Newest first, capped at ``page_size``. Filters combine with AND."""
        qs = Inquiry.objects.all()
        if status:
            qs = qs.filter(status=status)
        if q:
            qs = qs.filter(models.Q(full_name__icontains=q) | models.Q(email__icontains=q))
        qs = qs.order_by("-created_at")[: self.page_size]
        return [serialize_inquiry(inquiry) async for inquiry in qs]

    async def get(self, inquiry_id) -> dict:
        """One inquiry with its parent or partner detail."""
        pk = _parse_id(inquiry_id)
        try:
            inquiry = await Inquiry.objects.aget(pk=pk)
        except Inquiry.DoesNotExist as exc:
            raise InquiryNotFound(str(pk)) from exc

        data = serialize_inquiry(inquiry)
        if inquiry.kind == Inquiry.Kind.PARENT:
            data["parent"] = await self._parent_detail(inquiry)
        else:
            data["partner"] = await self._partner_detail(inquiry)
        return data

    async def set_status(self, inquiry_id, status: str) -> None:
        if status not in Inquiry.Status.values:
            raise InvalidStatus(status)
        pk = _parse_id(inquiry_id)
        updated = await Inquiry.objects.filter(pk=pk).aupdate(status=status, updated_at=timezone.now())
        if not updated:
            raise InquiryNotFound(str(pk))
        logger.info("Inquiry %s marked %s", pk, status)

    @staticmethod
    async def _parent_detail(inquiry: Inquiry) -> dict | None:
        detail = await InquiryParent.objects.select_related("primary_age_group").filter(inquiry=inquiry).afirst()
        if detail is None:
            return None
        codes = [
            link.age_group.code
            async for link in InquiryAgeGroup.objects.select_related("age_group")
            .filter(inquiry=inquiry)
            .order_by("age_group__sort_order", "age_group__code")
        ]
        return {
            "number_of_kids": detail.number_of_kids,
            "primary_age_group": detail.primary_age_group.code,
            "age_groups": codes,
        }

    @staticmethod
    async def _partner_detail(inquiry: Inquiry) -> dict | None:
        detail = await InquiryPartner.objects.select_related("org_type").filter(inquiry=inquiry).afirst()
        if detail is None:
            return None
        return {
            "org_type": detail.org_type.code,
            "org_type_other": detail.org_type_other,
            "org_name": detail.org_name,
        }
