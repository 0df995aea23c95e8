import logging
import uuid
from datetime import date, datetime
from typing import Dict, Optional

from .errors import StructuredFieldError
from .localization import ResolvedEntity, resolve
from .lookups import LabelIndex, display_name, translate_labels
from .parsing import decode

logger = logging.getLogger(__name__)

# Columns never exposed by the API.
INTERNAL_FIELDS = {"created_by_id"}


def _plain(value):
    if isinstance(value, uuid.UUID):
        return str(value)
    if isinstance(value, (datetime, date)):
        return value.isoformat()
    return value


def serialize_city(city, language: str) -> Optional[Dict]:
    if city is None:
        return None
    country = getattr(city, "country", None)
    return {
        "id": str(city.id),
        "name": display_name(city, language),
        "name_en": city.name_en,
        "country": {
            "id": str(country.id),
            "name": display_name(country, language),
            "name_en": country.name_en,
            "code": country.code,
        }
        if country is not None
        else None,
    }


RELATION_SERIALIZERS = {"city": serialize_city}


def load_label_indexes(entity_type) -> Dict[str, LabelIndex]:
    """Build label indexes for every lookup-backed field of `entity_type`."""
    return {
        field: LabelIndex(model.objects.all())
        for field, model in entity_type.label_fields
    }


def _decode_field(entity_type, fields: Dict, name: str):
    try:
        return decode(fields.get(name), field=name)
    except StructuredFieldError:
        logger.error(
            "Corrupt JSON in %s.%s id=%s",
            entity_type.name,
            name,
            fields.get("id"),
        )
        raise


def format_resolved(
    entity_type,
    resolved: ResolvedEntity,
    *,
    label_indexes: Optional[Dict[str, LabelIndex]] = None,
    relations: Optional[Dict] = None,
) -> Dict:
    """
    Shape a resolved entity for the API: JSON columns decoded, lookup labels
    translated, FK ids replaced by nested objects, internal columns dropped.
    """
    label_indexes = label_indexes or {}
    relations = relations or {}
    language = resolved.requested_language
    payload = {}

    for name, value in resolved.fields.items():
        if name in INTERNAL_FIELDS:
            continue
        if name.endswith("_id") and name[:-3] in relations:
            payload[name[:-3]] = relations[name[:-3]]
            continue
        if name in entity_type.json_fields:
            value = _decode_field(entity_type, resolved.fields, name)
            if name in label_indexes and isinstance(value, list):
                value = translate_labels(value, label_indexes[name], language)
            payload[name] = value
            continue
        payload[name] = _plain(value)

    payload["content_language"] = resolved.content_language
    payload["translation_status"] = resolved.status
    payload["fallback_fields"] = list(resolved.fallback_fields)
    if resolved.anomalies:
        payload["anomalies"] = list(resolved.anomalies)
    return payload


def _translations_of(entity):
    prefetched = getattr(entity, "_prefetched_objects_cache", {}).get("translations")
    if prefetched is not None:
        return list(prefetched)
    return list(entity.translations.all())


def serialize_translation(entity_type, translation) -> Dict:
    data = {"id": translation.id, "language": translation.language}
    for name in entity_type.localizable.names:
        value = getattr(translation, name)
        if name in entity_type.json_fields:
            try:
                value = decode(value, field=name)
            except StructuredFieldError:
                logger.error(
                    "Corrupt JSON in %s translation %s.%s",
                    entity_type.name,
                    translation.id,
                    name,
                )
                raise
        data[name] = value
    data["updated_at"] = _plain(translation.updated_at)
    return data


def serialize_entity(
    entity_type,
    entity,
    language: str,
    *,
    label_indexes: Optional[Dict[str, LabelIndex]] = None,
    include_translations: bool = False,
) -> Dict:
    translations = _translations_of(entity)
    resolved = resolve(entity, translations, language, entity_type.localizable)

    relations = {
        field: RELATION_SERIALIZERS[field](getattr(entity, field), resolved.requested_language)
        for field, _ in entity_type.relation_fields
    }

    payload = format_resolved(
        entity_type,
        resolved,
        label_indexes=label_indexes,
        relations=relations,
    )
    if include_translations:
        payload["translations"] = {
            t.language: serialize_translation(entity_type, t) for t in translations
        }
    return payload
