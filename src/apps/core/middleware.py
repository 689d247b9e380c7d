"""
Edge middleware for the contact API.

  1. ``CorsOriginMiddleware`` rejects cross-origin requests from origins
     outside ``CORS_ALLOWED_ORIGINS``. The allowed origins get their CORS
     headers (and preflight answers) from ``corsheaders``.
  2. ``StoreConnectionMiddleware`` lazily establishes the submission store
     connection on incoming requests.
"""

import ipaddress
import logging

from django.conf import settings
from django.core.exceptions import DisallowedHost
from django.http import JsonResponse

from .store import connection_manager

logger = logging.getLogger(__name__)


def get_client_ip(request) -> str | None:
    """Extract client IP, respecting X-Forwarded-For behind a proxy.

    Returns None when the address is missing or not a valid IP.
    """
    forwarded = request.META.get("HTTP_X_FORWARDED_FOR")
    candidate = forwarded.split(",")[0].strip() if forwarded else request.META.get("REMOTE_ADDR", "")
    try:
        return str(ipaddress.ip_address(candidate))
    except ValueError:
        return None


def get_allowed_origins() -> list[str]:
    return list(getattr(settings, "CORS_ALLOWED_ORIGINS", []))


def is_same_origin(request, origin: str) -> bool:
    """True when ``origin`` is this backend's own scheme and host."""
    try:
        return origin == f"{request.scheme}://{request.get_host()}"
    except DisallowedHost:
        return False


class CorsOriginMiddleware:
    """
    Turn away cross-origin requests from unknown origins.

    Requests without an ``Origin`` header (curl, server-to-server) and
    same-origin requests such as the admin login form pass through untouched.
    """

    def __init__(self, get_response):
        self.get_response = get_response

    def __call__(self, request):
        origin = request.headers.get("Origin")
        if not origin or is_same_origin(request, origin):
            return self.get_response(request)

        allowed = get_allowed_origins()
        if origin not in allowed:
            logger.warning("CORS blocked: %s %s from origin %s", request.method, request.path, origin)
            return JsonResponse(
                {
                    "error": "CORS policy violation",
                    "allowedOrigins": allowed,
                    "yourOrigin": origin,
                },
                status=403,
            )

        return self.get_response(request)


class StoreConnectionMiddleware:
    """Connect to the submission store on first use; retry while it is down."""

    def __init__(self, get_response):
        self.get_response = get_response

    def __call__(self, request):
        if not connection_manager.is_connected:
            connection_manager.ensure_connected()
        return self.get_response(request)
