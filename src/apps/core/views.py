"""Core app views."""

from django.http import HttpRequest, JsonResponse
from django.views import View

SERVICE_NAME = "tra-api"


class HealthView(View):
    """Liveness probe."""

    async def get(self, request: HttpRequest) -> JsonResponse:
        return JsonResponse({"ok": True, "service": SERVICE_NAME})


def api_not_found(request: HttpRequest, path: str = "") -> JsonResponse:
    """JSON 404 for any unmatched /api/ path."""
    return JsonResponse({"ok": False, "error": "not_found"}, status=404)
