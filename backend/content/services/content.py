"""
Read and write paths for content entities.

Every function takes an EntityType from content.registry, so every content
type shares one implementation. Public reads go through the query cache;
every write invalidates the buckets it touches.
"""
import json
import logging
import math
import time
import uuid
from typing import Dict, Mapping, Optional

from django.db import IntegrityError, transaction
from django.db.models import Q
from django.utils import timezone
from django.utils.text import slugify

from ..models import ContentStatus
from .cache import (
    BUCKET_SHOWCASE,
    QueryCache,
    _get_ttl,
    get_query_cache,
    invalidate_on_content_change,
)
from .errors import ConflictError, NotFoundError, PayloadValidationError
from .localization import get_canonical_language
from .parsing import encode, parse_iso_datetime
from .serializers import load_label_indexes, serialize_entity
from .translation import apply_translations, extract_translations, payload_language

logger = logging.getLogger(__name__)

SLUG_MAX_LENGTH = 200
MAX_SLUG_ATTEMPTS = 50


def _is_uuid(value) -> bool:
    try:
        uuid.UUID(str(value))
    except ValueError:
        return False
    return True


def _lookup_match(prefix: str, value: str) -> Q:
    match = Q(**{f"{prefix}__name": value}) | Q(**{f"{prefix}__name_en": value})
    if _is_uuid(value):
        match |= Q(**{f"{prefix}__id": value})
    return match


def _label_match(entity_type, field: str, value: str) -> Q:
    # Stored arrays may use either spelling of a lookup value.
    model = dict(entity_type.label_fields)[field]
    spellings = {value}
    for row in model.objects.filter(Q(name=value) | Q(name_en=value)):
        spellings.update(s for s in (row.name, row.name_en) if s)
    match = Q()
    for spelling in sorted(spellings):
        match |= Q(**{f"{field}__contains": json.dumps(spelling, ensure_ascii=False)})
    return match


FILTERS = {
    "city": lambda entity_type, value: _lookup_match("city", value),
    "country": lambda entity_type, value: (
        _lookup_match("city__country", value) | Q(city__country__code__iexact=value)
    ),
    "type": lambda entity_type, value: _label_match(entity_type, "type", value),
    "grade_level": lambda entity_type, value: _label_match(entity_type, "grade_level", value),
    "page_type": lambda entity_type, value: Q(page_type=value.upper()),
}


def _base_queryset(entity_type):
    qs = entity_type.model.objects.prefetch_related("translations")
    if entity_type.select_related:
        qs = qs.select_related(*entity_type.select_related)
    return qs


def _search(entity_type, qs, search: Optional[str]):
    if not search or not entity_type.search_fields:
        return qs
    match = Q()
    for name in entity_type.search_fields:
        match |= Q(**{f"{name}__icontains": search})
        match |= Q(**{f"translations__{name}__icontains": search})
    return qs.filter(match).distinct()


def _paginate(qs, page: int, limit: int):
    total = qs.count()
    offset = (page - 1) * limit
    rows = list(qs[offset : offset + limit])
    pagination = {
        "page": page,
        "limit": limit,
        "total": total,
        "pages": math.ceil(total / limit) if total else 0,
    }
    return rows, pagination


def _cache(query_cache: Optional[QueryCache]) -> QueryCache:
    return query_cache if query_cache is not None else get_query_cache()


# ---------------------------------------------------------------------------
# Public reads
# ---------------------------------------------------------------------------


def list_public_entities(
    entity_type,
    language: str,
    *,
    page: int = 1,
    limit: int = 10,
    search: Optional[str] = None,
    filters: Optional[Mapping[str, str]] = None,
    query_cache: Optional[QueryCache] = None,
) -> Dict:
    cache = _cache(query_cache)
    filters = {
        name: value for name, value in (filters or {}).items() if value and name in entity_type.filters
    }
    key = cache.make_key(
        entity_type.cache_bucket,
        view="list",
        language=language,
        page=page,
        limit=limit,
        search=search or "",
        filters=filters,
    )
    cached = cache.get(key)
    if cached is not None:
        return cached

    qs = _base_queryset(entity_type).filter(status=ContentStatus.PUBLISHED)
    for name, value in filters.items():
        qs = qs.filter(FILTERS[name](entity_type, value))
    qs = _search(entity_type, qs, search).order_by(*entity_type.ordering)

    rows, pagination = _paginate(qs, page, limit)
    label_indexes = load_label_indexes(entity_type)
    payload = {
        "items": [
            serialize_entity(entity_type, row, language, label_indexes=label_indexes)
            for row in rows
        ],
        "pagination": pagination,
    }
    cache.put(key, payload, ttl=_get_ttl("content_list", 300))
    return payload


def get_public_entity(
    entity_type,
    ref: str,
    language: str,
    *,
    query_cache: Optional[QueryCache] = None,
) -> Dict:
    """Published entity by slug or id; anything else is NotFound."""
    cache = _cache(query_cache)
    key = cache.make_key(entity_type.cache_bucket, view="detail", ref=ref, language=language)
    cached = cache.get(key)
    if cached is not None:
        return cached

    if entity_type.lookup_field == "id" and not _is_uuid(ref):
        raise NotFoundError(f"{entity_type.name.capitalize()} not found")
    try:
        entity = _base_queryset(entity_type).get(
            **{entity_type.lookup_field: ref, "status": ContentStatus.PUBLISHED}
        )
    except entity_type.model.DoesNotExist:
        raise NotFoundError(f"{entity_type.name.capitalize()} not found")

    payload = {
        "entity": serialize_entity(
            entity_type,
            entity,
            language,
            label_indexes=load_label_indexes(entity_type),
        )
    }
    cache.put(key, payload, ttl=_get_ttl("content_detail", 300))
    return payload


def homepage_showcase(
    program_type,
    language: str,
    *,
    limit: int = 6,
    query_cache: Optional[QueryCache] = None,
) -> Dict:
    cache = _cache(query_cache)
    key = cache.make_key(BUCKET_SHOWCASE, language=language, limit=limit)
    cached = cache.get(key)
    if cached is not None:
        return cached

    qs = (
        _base_queryset(program_type)
        .filter(status=ContentStatus.PUBLISHED, is_featured=True)
        .order_by("showcase_order", "-created_at")
    )
    label_indexes = load_label_indexes(program_type)
    payload = {
        "items": [
            serialize_entity(program_type, row, language, label_indexes=label_indexes)
            for row in qs[:limit]
        ]
    }
    cache.put(key, payload, ttl=_get_ttl("showcase", 600))
    return payload


# ---------------------------------------------------------------------------
# Admin reads
# ---------------------------------------------------------------------------


def list_entities(
    entity_type,
    *,
    status: Optional[str] = None,
    search: Optional[str] = None,
    page: int = 1,
    limit: int = 10,
) -> Dict:
    qs = _base_queryset(entity_type)
    if status:
        if status not in ContentStatus.ALL:
            raise PayloadValidationError(f"Invalid status: {status}", code="INVALID_STATUS")
        qs = qs.filter(status=status)
    qs = _search(entity_type, qs, search).order_by(*entity_type.ordering)
    rows, pagination = _paginate(qs, page, limit)
    canonical = get_canonical_language()
    label_indexes = load_label_indexes(entity_type)
    return {
        "items": [
            serialize_entity(
                entity_type,
                row,
                canonical,
                label_indexes=label_indexes,
                include_translations=True,
            )
            for row in rows
        ],
        "pagination": pagination,
    }


def get_entity(entity_type, entity_id):
    if not _is_uuid(entity_id):
        raise NotFoundError(f"{entity_type.name.capitalize()} not found")
    try:
        return _base_queryset(entity_type).get(pk=entity_id)
    except entity_type.model.DoesNotExist:
        raise NotFoundError(f"{entity_type.name.capitalize()} not found")


def serialize_for_admin(entity_type, entity) -> Dict:
    return serialize_entity(
        entity_type,
        entity,
        get_canonical_language(),
        label_indexes=load_label_indexes(entity_type),
        include_translations=True,
    )


# ---------------------------------------------------------------------------
# Writes
# ---------------------------------------------------------------------------


def _parse_bool(name: str, value) -> bool:
    if isinstance(value, bool):
        return value
    if isinstance(value, str) and value.strip().lower() in {"1", "true", "yes", "on"}:
        return True
    if isinstance(value, str) and value.strip().lower() in {"0", "false", "no", "off", ""}:
        return False
    if isinstance(value, int):
        return bool(value)
    raise PayloadValidationError(f"{name} must be a boolean", code="INVALID_FIELD")


def _parse_int(name: str, value) -> int:
    if isinstance(value, bool):
        raise PayloadValidationError(f"{name} must be an integer", code="INVALID_FIELD")
    try:
        return int(value)
    except (TypeError, ValueError):
        raise PayloadValidationError(f"{name} must be an integer", code="INVALID_FIELD")


def _coerce(entity_type, name: str, value):
    if name in entity_type.json_fields:
        return encode(value, field=name)
    if name in entity_type.datetime_fields:
        if value is None or value == "":
            return None
        if not isinstance(value, str):
            raise PayloadValidationError(f"{name} must be an ISO datetime", code="INVALID_DATETIME")
        return parse_iso_datetime(value)

    field = entity_type.model._meta.get_field(name)
    internal_type = field.get_internal_type()
    if internal_type == "BooleanField":
        return _parse_bool(name, value)
    if internal_type == "IntegerField":
        return _parse_int(name, value)
    if value is None:
        return None if field.null else ""
    value = str(value)
    if field.choices and value not in {choice for choice, _ in field.choices}:
        raise PayloadValidationError(f"Invalid {name}: {value}", code="INVALID_FIELD")
    return value


def _resolve_relation(name: str, model, value):
    if value in (None, ""):
        return None
    if not _is_uuid(value):
        raise PayloadValidationError(f"Invalid {name} id", code=f"INVALID_{name.upper()}")
    try:
        return model.objects.get(pk=value)
    except model.DoesNotExist:
        raise PayloadValidationError(
            f"{name.capitalize()} {value} does not exist", code=f"INVALID_{name.upper()}"
        )


def _canonical_values(entity_type, payload: Mapping) -> Dict:
    """Column updates for the canonical row found in `payload`."""
    values = {}
    if payload_language(payload) == get_canonical_language():
        for name in entity_type.localizable.names:
            if name in payload:
                values[name] = _coerce(entity_type, name, payload[name])
    for name in entity_type.editable_fields:
        if name in payload:
            values[name] = _coerce(entity_type, name, payload[name])
    for name, model in entity_type.relation_fields:
        for key in (f"{name}_id", name):
            if key in payload:
                values[name] = _resolve_relation(name, model, payload[key])
                break
    if "status" in payload:
        status = payload["status"]
        if status not in ContentStatus.ALL:
            raise PayloadValidationError(f"Invalid status: {status}", code="INVALID_STATUS")
        values["status"] = status
    return values


def _check_required(entity_type, entity):
    missing = [
        name for name in entity_type.required_fields if not getattr(entity, name, None)
    ]
    if missing:
        raise PayloadValidationError(
            f"{', '.join(missing)} required", code="MISSING_FIELDS"
        )


def _slug_taken(entity_type, slug: str, exclude_pk=None) -> bool:
    qs = entity_type.model.objects.filter(slug=slug)
    if exclude_pk is not None:
        qs = qs.exclude(pk=exclude_pk)
    return qs.exists()


def generate_slug(entity_type, *texts, exclude_pk=None) -> str:
    """
    Slug from the first of `texts` that slugifies to something usable. Text
    with no ASCII letters (e.g. Chinese titles) is skipped; if nothing is
    left the slug is timestamped. Collisions get a numeric suffix.
    """
    base = ""
    for text in texts:
        base = slugify(text or "")[:SLUG_MAX_LENGTH].strip("-")
        if len(base) >= 2:
            break
    if len(base) < 2:
        base = f"{entity_type.name}-{int(time.time() * 1000)}"
    slug = base
    for attempt in range(2, MAX_SLUG_ATTEMPTS + 2):
        if not _slug_taken(entity_type, slug, exclude_pk):
            return slug
        suffix = f"-{attempt}"
        slug = f"{base[: SLUG_MAX_LENGTH - len(suffix)]}{suffix}"
    raise ConflictError(f"Could not generate a unique slug from {base!r}", code="SLUG_CONFLICT")


def _assign_slug(entity_type, entity, payload: Mapping, translations: Mapping, *, creating: bool):
    if not entity_type.has_slug:
        return
    requested = payload.get("slug")
    if requested:
        slug = slugify(str(requested))[:SLUG_MAX_LENGTH]
        if not slug:
            raise PayloadValidationError("Invalid slug", code="INVALID_SLUG")
        if _slug_taken(entity_type, slug, exclude_pk=None if creating else entity.pk):
            raise ConflictError(f"Slug '{slug}' is already in use", code="SLUG_CONFLICT")
        entity.slug = slug
    elif creating or not entity.slug:
        sources = [getattr(entity, entity_type.slug_source, "")] + [
            values.get(entity_type.slug_source) for values in translations.values()
        ]
        entity.slug = generate_slug(
            entity_type, *sources, exclude_pk=None if creating else entity.pk
        )


def _stamp_published(entity, previous_status: Optional[str]):
    if (
        entity.status == ContentStatus.PUBLISHED
        and previous_status != ContentStatus.PUBLISHED
        and hasattr(entity, "published_at")
        and entity.published_at is None
    ):
        entity.published_at = timezone.now()


def _save(entity_type, entity, payload: Mapping, *, creating: bool, previous_status=None):
    translations = extract_translations(entity_type, payload)
    _check_required(entity_type, entity)
    if entity_type.validate is not None:
        entity_type.validate(entity, translations)
    _assign_slug(entity_type, entity, payload, translations, creating=creating)
    _stamp_published(entity, previous_status)
    try:
        with transaction.atomic():
            entity.save()
            apply_translations(entity_type, entity, translations)
    except IntegrityError as exc:
        logger.warning("Integrity error saving %s %s: %s", entity_type.name, entity.pk, exc)
        raise ConflictError(
            f"{entity_type.name.capitalize()} conflicts with an existing row",
            code="SLUG_CONFLICT" if entity_type.has_slug else "CONFLICT",
        )


def create_entity(
    entity_type,
    payload: Mapping,
    *,
    user=None,
    query_cache: Optional[QueryCache] = None,
):
    values = _canonical_values(entity_type, payload)
    values.setdefault("status", ContentStatus.DRAFT)
    entity = entity_type.model(
        language=get_canonical_language(),
        created_by=user,
        **values,
    )
    _save(entity_type, entity, payload, creating=True)
    invalidate_on_content_change(_cache(query_cache), entity_type.cache_bucket, str(entity.pk))
    logger.info("Created %s %s", entity_type.name, entity.pk)
    return get_entity(entity_type, entity.pk)


def update_entity(
    entity_type,
    entity_id,
    payload: Mapping,
    *,
    query_cache: Optional[QueryCache] = None,
):
    entity = get_entity(entity_type, entity_id)
    previous_status = entity.status
    for name, value in _canonical_values(entity_type, payload).items():
        setattr(entity, name, value)
    _save(entity_type, entity, payload, creating=False, previous_status=previous_status)
    invalidate_on_content_change(_cache(query_cache), entity_type.cache_bucket, str(entity.pk))
    logger.info("Updated %s %s", entity_type.name, entity.pk)
    return get_entity(entity_type, entity.pk)


def delete_entity(entity_type, entity_id, *, query_cache: Optional[QueryCache] = None) -> str:
    """Delete an entity; its translation rows go with it."""
    entity = get_entity(entity_type, entity_id)
    entity_pk = str(entity.pk)
    with transaction.atomic():
        entity.delete()
    invalidate_on_content_change(_cache(query_cache), entity_type.cache_bucket, entity_pk)
    logger.info("Deleted %s %s", entity_type.name, entity_pk)
    return entity_pk
