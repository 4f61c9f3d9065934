"""JSON API views for inquiry intake, lookups and admin triage."""

import json
import logging

from asgiref.sync import sync_to_async
from django.apps import apps
from django.http import HttpRequest, JsonResponse
from django.utils.decorators import method_decorator
from django.views import View
from django.views.decorators.csrf import csrf_exempt

from . import forms, repository
from .api_auth import AdminTokenMixin
from .exceptions import InquiryNotFound, InvalidStatus, ValidationFailure

logger = logging.getLogger(__name__)


def _intake():
    return apps.get_app_config("inquiries")


def _not_found() -> JsonResponse:
    return JsonResponse({"ok": False, "error": "not_found"}, status=404)


@method_decorator(csrf_exempt, name="dispatch")
class InquiryCreateView(View):
    """Accept a parent or partner inquiry."""

    async def post(self, request: HttpRequest) -> JsonResponse:
        try:
            payload = json.loads(request.body)
        except (json.JSONDecodeError, UnicodeDecodeError):
            return JsonResponse({"ok": False, "errors": ["Invalid JSON body"]}, status=400)

        try:
            submission = forms.validate(payload)
        except ValidationFailure as exc:
            return JsonResponse({"ok": False, "errors": exc.errors}, status=400)

        intake = _intake()
        try:
            inquiry_id = await sync_to_async(intake.writer.write)(submission)
        except Exception:
            logger.exception("Failed to store %s inquiry", submission.kind)
            return JsonResponse({"ok": False, "error": "server_error"}, status=500)

        intake.dispatcher.dispatch(submission)

        return JsonResponse({"ok": True, "id": str(inquiry_id)}, status=201)


class AgeGroupLookupView(View):
    """Active age groups for the parent form."""

    async def get(self, request: HttpRequest) -> JsonResponse:
        return JsonResponse({"ok": True, "data": await repository.active_age_groups()})


class OrganizationTypeLookupView(View):
    """Active organization types for the partner form."""

    async def get(self, request: HttpRequest) -> JsonResponse:
        return JsonResponse({"ok": True, "data": await repository.active_org_types()})


@method_decorator(csrf_exempt, name="dispatch")
class AdminInquiryListView(AdminTokenMixin, View):
    """Admin: newest inquiries, filtered by ``status`` and ``q``."""

    async def get(self, request: HttpRequest) -> JsonResponse:
        rows = await _intake().admin_queries.list(
            status=request.GET.get("status") or None,
            q=request.GET.get("q") or None,
        )
        return JsonResponse({"ok": True, "data": rows})


@method_decorator(csrf_exempt, name="dispatch")
class AdminInquiryDetailView(AdminTokenMixin, View):
    """Admin: one inquiry with its kind-specific detail."""

    async def get(self, request: HttpRequest, inquiry_id: str) -> JsonResponse:
        try:
            data = await _intake().admin_queries.get(inquiry_id)
        except InquiryNotFound:
            return _not_found()
        return JsonResponse({"ok": True, "data": data})


@method_decorator(csrf_exempt, name="dispatch")
class AdminInquiryStatusView(AdminTokenMixin, View):
    """Admin: set an inquiry's status to new, read or archived."""

    async def patch(self, request: HttpRequest, inquiry_id: str) -> JsonResponse:
        try:
            data = json.loads(request.body) if request.body else {}
        except (json.JSONDecodeError, UnicodeDecodeError):
            data = {}
        status = data.get("status") if isinstance(data, dict) else None

        try:
            await _intake().admin_queries.set_status(inquiry_id, status if isinstance(status, str) else "")
        except InvalidStatus:
            return JsonResponse({"ok": False, "error": "invalid_status"}, status=400)
        except InquiryNotFound:
            return _not_found()
        return JsonResponse({"ok": True})
