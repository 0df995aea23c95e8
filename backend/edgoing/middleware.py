"""
Request middleware for the storefront and back-office clients.

CORS origins come from settings.CORS_ALLOWED_ORIGINS ("*" allows any origin).
The requested content language is put on the request once so views and
services never parse it again.
"""
from django.conf import settings
from django.utils.deprecation import MiddlewareMixin

from content.services.localization import normalize_language

ALLOW_METHODS = "GET, POST, PUT, PATCH, DELETE, OPTIONS"
ALLOW_HEADERS = "Content-Type, X-User-Id, X-Content-Language"


def _append_vary_header(response, value):
    existing = [part.strip() for part in response.get("Vary", "").split(",") if part.strip()]
    if value not in existing:
        response["Vary"] = ", ".join(existing + [value])


class SimpleCORSMiddleware(MiddlewareMixin):
    def process_response(self, request, response):
        origin = request.headers.get("Origin")
        allowed = settings.CORS_ALLOWED_ORIGINS
        if origin and ("*" in allowed or origin in allowed):
            response["Access-Control-Allow-Origin"] = origin
            response["Access-Control-Allow-Credentials"] = "true"
            _append_vary_header(response, "Origin")

        response["Access-Control-Allow-Methods"] = ALLOW_METHODS
        response["Access-Control-Allow-Headers"] = ALLOW_HEADERS
        if request.method == "OPTIONS":
            response.status_code = 200
        return response


class ContentLanguageMiddleware(MiddlewareMixin):
    """
    Sets request.content_language from ?language=, ?lang= or the
    X-Content-Language header, in that order. Blank or malformed values
    become the canonical language.
    """

    def process_request(self, request):
        raw = (
            request.GET.get("language")
            or request.GET.get("lang")
            or request.headers.get("X-Content-Language")
        )
        request.content_language = normalize_language(
            raw, settings.CONTENT_CANONICAL_LANGUAGE
        )

    def process_response(self, request, response):
        language = getattr(request, "content_language", None)
        if language:
            response["Content-Language"] = language
            _append_vary_header(response, "X-Content-Language")
        return response
