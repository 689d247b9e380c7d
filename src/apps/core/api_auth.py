"""Optional bearer-key protection for the submission listing endpoint."""

import hmac
import logging

from django.conf import settings
from django.http import JsonResponse

from .middleware import get_client_ip

logger = logging.getLogger(__name__)


def get_list_api_key() -> str:
    """Return the configured listing key; empty means the endpoint is open."""
    return getattr(settings, "CONTACT_LIST_API_KEY", "")


class ListAPIKeyMixin:
    """
    Mixin for class-based views that may require an API key.

    When ``CONTACT_LIST_API_KEY`` is unset the view stays public.
    """

    async def dispatch(self, request, *args, **kwargs):
        """Validate the API key before dispatching to the handler."""
        expected = get_list_api_key()
        if expected:
            auth_header = request.headers.get("Authorization", "")
            if not auth_header.startswith("Bearer "):
                return JsonResponse(
                    {
                        "success": False,
                        "message": "Missing or invalid Authorization header. Use: Bearer <api_key>",
                    },
                    status=401,
                )

            api_key = auth_header[7:]  # Strip "Bearer "
            if not hmac.compare_digest(api_key.encode(), expected.encode()):
                logger.warning("Invalid listing API key attempt from %s", get_client_ip(request) or "unknown")
                return JsonResponse({"success": False, "message": "Invalid API key"}, status=401)

        return await super().dispatch(request, *args, **kwargs)
