"""Public read endpoints. Only PUBLISHED rows are visible here."""
import logging

from django.http import JsonResponse
from django.views.decorators.http import require_http_methods

from ..registry import PROGRAM, get_entity_type
from ..services.content import get_public_entity, homepage_showcase, list_public_entities
from ..services.errors import ContentError
from ..services.shared_fields import list_shared_fields
from .common import (
    _content_error,
    _internal_error,
    _pagination_params,
    _parse_positive_int,
    _request_language,
)

logger = logging.getLogger(__name__)


@require_http_methods(["GET"])
def list_entities(request, entity_type: str) -> JsonResponse:
    """
    GET /api/<plural>/?language=en&page=1&limit=10&search=...

    Programs also accept city, country, type and grade_level filters; hero
    pages accept page_type.
    """
    entity = get_entity_type(entity_type)
    try:
        page, limit = _pagination_params(request)
        filters = {name: request.GET.get(name) for name in entity.filters}
        payload = list_public_entities(
            entity,
            _request_language(request),
            page=page,
            limit=limit,
            search=(request.GET.get("search") or "").strip() or None,
            filters=filters,
        )
        return JsonResponse(payload)
    except ContentError as e:
        return _content_error(e)
    except Exception as e:
        return _internal_error("Error listing %s: %s", entity.plural, e)


@require_http_methods(["GET"])
def get_entity(request, entity_type: str, ref: str) -> JsonResponse:
    """GET /api/<plural>/<slug or id>/?language=en"""
    entity = get_entity_type(entity_type)
    try:
        return JsonResponse(get_public_entity(entity, ref, _request_language(request)))
    except ContentError as e:
        return _content_error(e)
    except Exception as e:
        return _internal_error("Error loading %s %s: %s", entity.name, ref, e)


@require_http_methods(["GET"])
def showcase(request) -> JsonResponse:
    """GET /api/homepage-showcase/ - featured programs in showcase order."""
    try:
        limit = _parse_positive_int(request.GET.get("limit"), "limit", 6, 24)
        return JsonResponse(homepage_showcase(PROGRAM, _request_language(request), limit=limit))
    except ContentError as e:
        return _content_error(e)
    except Exception as e:
        return _internal_error("Error loading homepage showcase: %s", e)


@require_http_methods(["GET"])
def shared_fields(request) -> JsonResponse:
    try:
        return JsonResponse(list_shared_fields(_request_language(request)))
    except ContentError as e:
        return _content_error(e)
    except Exception as e:
        return _internal_error("Error loading shared fields: %s", e)
