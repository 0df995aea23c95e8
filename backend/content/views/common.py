import json
import logging

from django.conf import settings
from django.http import JsonResponse

from ..services.errors import PayloadValidationError
from ..services.localization import normalize_language

logger = logging.getLogger(__name__)

DEFAULT_PAGE_SIZE = 10
MAX_PAGE_SIZE = 100


def _json_error(message: str, code: str, status: int = 400) -> JsonResponse:
    return JsonResponse({"error": message, "code": code}, status=status)


def _content_error(exc) -> JsonResponse:
    return JsonResponse(exc.to_payload(), status=exc.http_status)


def _internal_error(message: str, *args) -> JsonResponse:
    logger.exception(message, *args)
    return _json_error("Internal server error", "INTERNAL_ERROR", status=500)


def _auth_error(error: dict) -> JsonResponse:
    return _json_error(error["error"], error["code"], status=error["status"])


def _parse_json_body(request) -> dict:
    try:
        payload = json.loads(request.body.decode() or "{}")
    except (json.JSONDecodeError, UnicodeDecodeError):
        raise PayloadValidationError("Invalid JSON body", code="INVALID_JSON")
    if not isinstance(payload, dict):
        raise PayloadValidationError("JSON body must be an object", code="INVALID_JSON")
    return payload


def _parse_positive_int(value, name: str, default: int, maximum: int = None) -> int:
    if value in (None, ""):
        return default
    try:
        number = int(value)
    except (TypeError, ValueError):
        raise PayloadValidationError(f"{name} must be an integer", code="INVALID_PARAM")
    if number < 1:
        raise PayloadValidationError(f"{name} must be at least 1", code="INVALID_PARAM")
    if maximum is not None:
        number = min(number, maximum)
    return number


def _pagination_params(request):
    page = _parse_positive_int(request.GET.get("page"), "page", 1)
    limit = _parse_positive_int(request.GET.get("limit"), "limit", DEFAULT_PAGE_SIZE, MAX_PAGE_SIZE)
    return page, limit


def _request_language(request) -> str:
    # Set by ContentLanguageMiddleware; recomputed for requests built without it.
    language = getattr(request, "content_language", None)
    if language:
        return language
    raw = (
        request.GET.get("language")
        or request.GET.get("lang")
        or request.headers.get("X-Content-Language")
    )
    return normalize_language(raw, settings.CONTENT_CANONICAL_LANGUAGE)
