"""
Admin views for content editing.

Entity and shared-field endpoints need an editor or admin (X-User-Id header).
Clearing the query cache is admin only.
"""
import logging

from django.http import JsonResponse
from django.views.decorators.csrf import csrf_exempt
from django.views.decorators.http import require_http_methods

from ..registry import get_entity_type
from ..services.auth import require_admin, require_editor
from ..services.cache import get_query_cache
from ..services.content import (
    create_entity,
    delete_entity,
    get_entity,
    list_entities,
    serialize_for_admin,
    update_entity,
)
from ..services.errors import ContentError
from ..services.shared_fields import (
    create_lookup,
    delete_lookup,
    get_lookup_kind,
    list_lookups,
    serialize_lookup,
    update_lookup,
)
from ..services.submissions import delete_submissions, get_submission_kind, list_submissions
from .common import (
    _auth_error,
    _content_error,
    _internal_error,
    _pagination_params,
    _parse_json_body,
)

logger = logging.getLogger(__name__)


@csrf_exempt
@require_http_methods(["GET", "POST"])
def admin_entities(request, entity_type: str) -> JsonResponse:
    """
    GET  /api/admin/<plural>/?status=DRAFT&search=...&page=1&limit=10
    POST /api/admin/<plural>/

    Request body (POST), canonical fields plus optional translations:
    {
        "title": "北京项目",
        "status": "DRAFT",
        "translations": {"en": {"title": "Beijing Program"}},
        "titleEn": "Beijing Program"    // flat form, same effect
    }
    """
    user, auth_error = require_editor(request)
    if auth_error:
        return _auth_error(auth_error)

    entity = get_entity_type(entity_type)
    try:
        if request.method == "GET":
            page, limit = _pagination_params(request)
            payload = list_entities(
                entity,
                status=request.GET.get("status") or None,
                search=(request.GET.get("search") or "").strip() or None,
                page=page,
                limit=limit,
            )
            return JsonResponse(payload)

        created = create_entity(entity, _parse_json_body(request), user=user)
        return JsonResponse(serialize_for_admin(entity, created), status=201)
    except ContentError as e:
        return _content_error(e)
    except Exception as e:
        return _internal_error("Error in admin %s (%s): %s", entity.plural, request.method, e)


@csrf_exempt
@require_http_methods(["GET", "PUT", "PATCH", "DELETE"])
def admin_entity_detail(request, entity_type: str, entity_id: str) -> JsonResponse:
    """
    GET/PUT/PATCH/DELETE /api/admin/<plural>/<id>/

    PUT and PATCH both apply only the keys present in the body. Blank
    alternate-language fields delete that translation.
    """
    _, auth_error = require_editor(request)
    if auth_error:
        return _auth_error(auth_error)

    entity = get_entity_type(entity_type)
    try:
        if request.method == "GET":
            return JsonResponse(serialize_for_admin(entity, get_entity(entity, entity_id)))
        if request.method == "DELETE":
            deleted_id = delete_entity(entity, entity_id)
            return JsonResponse({"id": deleted_id, "deleted": True})

        updated = update_entity(entity, entity_id, _parse_json_body(request))
        return JsonResponse(serialize_for_admin(entity, updated))
    except ContentError as e:
        return _content_error(e)
    except Exception as e:
        return _internal_error(
            "Error in admin %s %s (%s): %s", entity.name, entity_id, request.method, e
        )


@csrf_exempt
@require_http_methods(["GET", "POST"])
def admin_lookups(request, kind: str) -> JsonResponse:
    """GET/POST /api/admin/shared-fields/<countries|cities|grade-levels|program-types>/"""
    _, auth_error = require_editor(request)
    if auth_error:
        return _auth_error(auth_error)

    try:
        lookup_kind = get_lookup_kind(kind)
        if request.method == "GET":
            return JsonResponse({"items": list_lookups(lookup_kind)})
        row = create_lookup(lookup_kind, _parse_json_body(request))
        return JsonResponse(serialize_lookup(row), status=201)
    except ContentError as e:
        return _content_error(e)
    except Exception as e:
        return _internal_error("Error in admin shared field %s: %s", kind, e)


@csrf_exempt
@require_http_methods(["PUT", "PATCH", "DELETE"])
def admin_lookup_detail(request, kind: str, row_id: str) -> JsonResponse:
    _, auth_error = require_editor(request)
    if auth_error:
        return _auth_error(auth_error)

    try:
        lookup_kind = get_lookup_kind(kind)
        if request.method == "DELETE":
            return JsonResponse({"id": delete_lookup(lookup_kind, row_id), "deleted": True})
        row = update_lookup(lookup_kind, row_id, _parse_json_body(request))
        return JsonResponse(serialize_lookup(row))
    except ContentError as e:
        return _content_error(e)
    except Exception as e:
        return _internal_error("Error in admin shared field %s %s: %s", kind, row_id, e)


@csrf_exempt
@require_http_methods(["POST"])
def admin_clear_cache(request) -> JsonResponse:
    """POST /api/admin/cache/clear/"""
    admin_user, auth_error = require_admin(request)
    if auth_error:
        return _auth_error(auth_error)

    query_cache = get_query_cache()
    before = query_cache.stats()
    cleared = query_cache.clear()
    logger.info("Query cache cleared by %s", admin_user.id)
    return JsonResponse({"cleared": cleared, "before": before, "after": query_cache.stats()})


@require_http_methods(["GET"])
def admin_cache_stats(request) -> JsonResponse:
    """GET /api/admin/cache/stats/"""
    _, auth_error = require_editor(request)
    if auth_error:
        return _auth_error(auth_error)
    return JsonResponse(get_query_cache().stats())


@csrf_exempt
@require_http_methods(["GET", "DELETE"])
def admin_submissions(request, kind: str) -> JsonResponse:
    """
    GET    /api/admin/<contact-submissions|applications|newsletters>/?page=1&limit=10
    DELETE /api/admin/<kind>/   body: {"ids": [1, 2]}

    Newsletters also accept ?active=true|false.
    """
    _, auth_error = require_editor(request)
    if auth_error:
        return _auth_error(auth_error)

    try:
        submission_kind = get_submission_kind(kind)
        if request.method == "GET":
            page, limit = _pagination_params(request)
            return JsonResponse(
                list_submissions(submission_kind, page=page, limit=limit, params=request.GET)
            )
        deleted = delete_submissions(submission_kind, _parse_json_body(request).get("ids"))
        return JsonResponse({"deleted": deleted})
    except ContentError as e:
        return _content_error(e)
    except Exception as e:
        return _internal_error("Error in admin %s (%s): %s", kind, request.method, e)
