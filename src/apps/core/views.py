"""Core app views: the JSON contact API."""

import json

from django.conf import settings
from django.http import HttpRequest, HttpResponse, JsonResponse
from django.utils import timezone
from django.utils.decorators import method_decorator
from django.views import View
from django.views.decorators.csrf import csrf_exempt

from . import services
from .api_auth import ListAPIKeyMixin
from .exceptions import ContactError, NotFoundError, ValidationError
from .middleware import get_client_ip
from .store import connection_manager

API_NAME = "Tagad Platforms"
API_VERSION = "1.0"

SUBMIT_SUCCESS_MESSAGE = "Contact form submitted successfully! We will get back to you soon."

AVAILABLE_ENDPOINTS = [
    "GET /",
    "GET /api",
    "GET /api/health",
    "POST /api/contact/submit",
    "GET /api/contact",
]


def _error_body(error: ContactError) -> dict:
    """Failure payload; the raw detail is only echoed when configured."""
    body = {"success": False, "message": error.message}
    if isinstance(error, ValidationError):
        body["errors"] = error.errors
    if error.detail and getattr(settings, "EXPOSE_ERROR_DETAIL", False):
        body["error"] = error.detail
    return body


def not_found_response(request: HttpRequest) -> JsonResponse:
    error = NotFoundError()
    return JsonResponse(
        {
            "success": False,
            "message": error.message,
            "requestedPath": request.get_full_path(),
            "availableEndpoints": AVAILABLE_ENDPOINTS,
        },
        status=error.status_code,
    )


def not_found(request: HttpRequest, exception: Exception | None = None) -> JsonResponse:
    """Catch-all for unmatched routes."""
    return not_found_response(request)


def server_error(request: HttpRequest) -> JsonResponse:
    """JSON replacement for Django's HTML 500 page."""
    return JsonResponse({"success": False, "message": ContactError.default_message}, status=500)


class JsonAPIView(View):
    """Base view whose unsupported methods fall through to the JSON 404."""

    def http_method_not_allowed(self, request: HttpRequest, *args, **kwargs) -> HttpResponse:
        response = not_found_response(request)
        if self.view_is_async:

            async def func():
                return response

            return func()
        return response


class RootView(JsonAPIView):
    """Liveness banner."""

    def get(self, request: HttpRequest) -> JsonResponse:
        return JsonResponse(
            {
                "message": f"{API_NAME} Backend API is running!",
                "status": "healthy",
                "timestamp": timezone.now().isoformat(),
            }
        )


class APIIndexView(JsonAPIView):
    """API version and endpoint listing."""

    def get(self, request: HttpRequest) -> JsonResponse:
        return JsonResponse(
            {
                "message": f"{API_NAME} API v{API_VERSION}",
                "endpoints": ["/api/contact/submit", "/api/contact"],
                "status": "operational",
            }
        )


class HealthView(JsonAPIView):
    """Report process liveness and the store connection state.

    The process reports itself healthy even when the store is unreachable.
    """

    def get(self, request: HttpRequest) -> JsonResponse:
        return JsonResponse(
            {
                "status": "healthy",
                "database": str(connection_manager.state),
                "timestamp": timezone.now().isoformat(),
            }
        )


@method_decorator(csrf_exempt, name="dispatch")
class ContactSubmitView(JsonAPIView):
    """API: Accept a contact form submission."""

    async def post(self, request: HttpRequest) -> JsonResponse:
        """Validate and store the submission, then queue its notification."""
        if request.content_type == "application/json":
            try:
                payload = json.loads(request.body or b"{}")
            except (json.JSONDecodeError, UnicodeDecodeError):
                return JsonResponse({"success": False, "message": "Invalid JSON body"}, status=400)
        else:
            payload = request.POST.dict()

        try:
            submission = await services.submit_contact(
                payload,
                ip_address=get_client_ip(request),
                user_agent=request.headers.get("User-Agent"),
            )
        except ContactError as error:
            return JsonResponse(_error_body(error), status=error.status_code)

        return JsonResponse(
            {
                "success": True,
                "message": SUBMIT_SUCCESS_MESSAGE,
                "submissionId": submission.pk,
            },
            status=201,
        )


class ContactListView(ListAPIKeyMixin, JsonAPIView):
    """API: Most recent contact submissions, newest first."""

    async def get(self, request: HttpRequest) -> JsonResponse:
        try:
            submissions = await services.list_recent_submissions()
        except ContactError as error:
            return JsonResponse(_error_body(error), status=error.status_code)

        return JsonResponse({"success": True, "data": [submission.to_dict() for submission in submissions]})
