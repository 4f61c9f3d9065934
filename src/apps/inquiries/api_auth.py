"""Shared-secret authentication for the admin inquiry API."""

import hmac
import logging

from django.apps import apps
from django.http import JsonResponse

from apps.core.middleware import get_client_ip

from .exceptions import UnauthorizedAccess

logger = logging.getLogger(__name__)

ADMIN_TOKEN_HEADER = "X-Admin-Token"


def check_admin_token(request, expected: str) -> None:
    """Raise UnauthorizedAccess unless the request carries the configured token.

    An unset token rejects every request.
    """
    supplied = request.headers.get(ADMIN_TOKEN_HEADER, "")
    if not expected or not supplied or not hmac.compare_digest(supplied.encode(), expected.encode()):
        raise UnauthorizedAccess


class AdminTokenMixin:
    """Mixin for class-based views that require the admin shared secret."""

    async def dispatch(self, request, *args, **kwargs):
        """Check the admin token before dispatching to the handler."""
        try:
            check_admin_token(request, apps.get_app_config("inquiries").intake.admin_token)
        except UnauthorizedAccess:
            logger.warning("Unauthorized admin API request from %s", get_client_ip(request))
            return JsonResponse({"ok": False, "error": "unauthorized"}, status=401)

        return await super().dispatch(request, *args, **kwargs)
