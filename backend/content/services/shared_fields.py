"""
Shared lookup tables: the public listing used by filters and forms, and the
admin CRUD that keeps the country/city reference rules.
"""
import logging
from dataclasses import dataclass
from typing import Dict, Mapping, Optional

from django.core.exceptions import ValidationError
from django.db import IntegrityError, transaction
from django.db.models import ProtectedError

from ..models import City, Country, GradeLevel, ProgramType
from .cache import (
    BUCKET_SHARED_FIELDS,
    QueryCache,
    _get_ttl,
    get_query_cache,
    invalidate_on_lookup_change,
)
from .errors import ConflictError, NotFoundError, PayloadValidationError
from .lookups import display_name

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class LookupKind:
    name: str
    model: type
    label: str


LOOKUP_KINDS: Dict[str, LookupKind] = {
    kind.name: kind
    for kind in (
        LookupKind("countries", Country, "Country"),
        LookupKind("cities", City, "City"),
        LookupKind("grade-levels", GradeLevel, "Grade level"),
        LookupKind("program-types", ProgramType, "Program type"),
    )
}


def get_lookup_kind(name: str) -> LookupKind:
    try:
        return LOOKUP_KINDS[name]
    except KeyError:
        raise NotFoundError(f"Unknown shared field: {name}")


def serialize_lookup(row, language: Optional[str] = None) -> Dict:
    data = {
        "id": str(row.id),
        "name": row.name,
        "name_en": row.name_en,
        "is_active": row.is_active,
        "order": row.order,
    }
    if language is not None:
        data["label"] = display_name(row, language)
    if isinstance(row, Country):
        data["code"] = row.code
    if isinstance(row, City):
        data["country_id"] = str(row.country_id)
    return data


def list_shared_fields(language: str, *, query_cache: Optional[QueryCache] = None) -> Dict:
    """Active lookup rows of every kind, labelled for `language`."""
    cache = query_cache if query_cache is not None else get_query_cache()
    key = cache.make_key(BUCKET_SHARED_FIELDS, language=language)
    cached = cache.get(key)
    if cached is not None:
        return cached

    payload = {
        kind.name.replace("-", "_"): [
            serialize_lookup(row, language) for row in kind.model.objects.filter(is_active=True)
        ]
        for kind in LOOKUP_KINDS.values()
    }
    cache.put(key, payload, ttl=_get_ttl("content_list", 300))
    return payload


def list_lookups(kind: LookupKind):
    return [serialize_lookup(row) for row in kind.model.objects.all()]


def _get_row(kind: LookupKind, row_id):
    try:
        return kind.model.objects.get(pk=row_id)
    except (kind.model.DoesNotExist, ValidationError, ValueError):
        raise NotFoundError(f"{kind.label} not found")


def _apply_payload(kind: LookupKind, row, payload: Mapping, *, creating: bool):
    if creating or "name" in payload:
        name = (payload.get("name") or "").strip()
        if not name:
            raise PayloadValidationError("name is required", code="MISSING_FIELDS")
        row.name = name
    if "name_en" in payload or "nameEn" in payload:
        name_en = payload.get("name_en", payload.get("nameEn"))
        row.name_en = (name_en or "").strip() or None
    if "is_active" in payload:
        row.is_active = bool(payload["is_active"])
    if "order" in payload:
        try:
            row.order = int(payload["order"])
        except (TypeError, ValueError):
            raise PayloadValidationError("order must be an integer", code="INVALID_FIELD")
    if kind.model is Country and "code" in payload:
        row.code = payload["code"] or None
    if kind.model is City and (creating or "country_id" in payload):
        country_id = payload.get("country_id")
        if not country_id:
            raise PayloadValidationError("country_id is required", code="INVALID_COUNTRY")
        try:
            row.country = Country.objects.get(pk=country_id)
        except (Country.DoesNotExist, ValidationError, ValueError):
            raise PayloadValidationError(
                f"Country {country_id} does not exist", code="INVALID_COUNTRY"
            )


def _save_row(kind: LookupKind, row):
    try:
        with transaction.atomic():
            row.save()
    except IntegrityError:
        raise ConflictError(
            f"{kind.label} '{row.name}' already exists", code="NAME_CONFLICT"
        )


def create_lookup(kind: LookupKind, payload: Mapping, *, query_cache: Optional[QueryCache] = None):
    row = kind.model()
    _apply_payload(kind, row, payload, creating=True)
    _save_row(kind, row)
    invalidate_on_lookup_change(query_cache if query_cache is not None else get_query_cache())
    logger.info("Created %s %s", kind.name, row.pk)
    return row


def update_lookup(
    kind: LookupKind, row_id, payload: Mapping, *, query_cache: Optional[QueryCache] = None
):
    row = _get_row(kind, row_id)
    _apply_payload(kind, row, payload, creating=False)
    _save_row(kind, row)
    invalidate_on_lookup_change(query_cache if query_cache is not None else get_query_cache())
    return row


def delete_lookup(kind: LookupKind, row_id, *, query_cache: Optional[QueryCache] = None) -> str:
    row = _get_row(kind, row_id)
    row_pk = str(row.pk)
    try:
        with transaction.atomic():
            row.delete()
    except ProtectedError:
        raise ConflictError(
            f"{kind.label} '{row.name}' is still referenced", code="IN_USE"
        )
    invalidate_on_lookup_change(query_cache if query_cache is not None else get_query_cache())
    logger.info("Deleted %s %s", kind.name, row_pk)
    return row_pk
