"""
Writes translation rows from editor payloads.

Alternate-language content arrives in one of three shapes:

    {"translations": {"en": {"title": "...", "description": "..."}}}
    {"title_en": "...", "titleEn": "..."}
    {"language": "en", "title": "..."}          # editing the en version

All of them collapse to {language: {field: value}} before being written.
A translation whose localizable fields are all blank is deleted.
"""
import logging
from typing import Dict, Mapping

from .localization import (
    get_alternate_languages,
    get_canonical_language,
    normalize_language,
    select_translation,
)
from .parsing import encode

logger = logging.getLogger(__name__)


def _camel(name: str) -> str:
    head, *rest = name.split("_")
    return head + "".join(part.capitalize() for part in rest)


def flat_translation_keys(name: str, language: str):
    """Payload keys that carry `name` in `language`: title_en, titleEn."""
    suffix = language.replace("-", "_")
    camel_suffix = "".join(part.capitalize() for part in language.split("-"))
    return (f"{name}_{suffix}", f"{_camel(name)}{camel_suffix}")


def payload_language(payload: Mapping) -> str:
    """Language the top-level localizable fields of `payload` are written in."""
    return normalize_language(payload.get("language"), get_canonical_language())


def extract_translations(entity_type, payload: Mapping) -> Dict[str, Dict]:
    canonical = get_canonical_language()
    names = entity_type.localizable.names
    result: Dict[str, Dict] = {}

    nested = payload.get("translations")
    if isinstance(nested, Mapping):
        for raw_language, fields in nested.items():
            language = normalize_language(raw_language, canonical)
            if language == canonical or not isinstance(fields, Mapping):
                continue
            values = {name: fields[name] for name in names if name in fields}
            result.setdefault(language, {}).update(values)

    for language in get_alternate_languages():
        for name in names:
            for key in flat_translation_keys(name, language):
                if key in payload:
                    result.setdefault(language, {})[name] = payload[key]

    language = payload_language(payload)
    if language != canonical:
        values = {name: payload[name] for name in names if name in payload}
        result.setdefault(language, {}).update(values)

    return result


def _storage_value(entity_type, name: str, value):
    if name in entity_type.localizable.structured:
        return encode(value, field=name)
    if value is None:
        return ""
    return str(value)


def _is_blank(value) -> bool:
    return value is None or value == ""


def apply_translation(entity_type, entity, language: str, values: Mapping):
    """
    Upsert or delete the `language` translation of `entity`.

    `values` may hold a subset of the localizable fields; missing ones keep
    their stored value. Returns the saved row, or None if it was deleted.
    """
    localizable = entity_type.localizable
    stored = {
        name: _storage_value(entity_type, name, values[name])
        for name in localizable.names
        if name in values
    }

    manager = entity_type.translation_model.objects
    rows = list(manager.filter(**{entity_type.parent_field: entity, "language": language}))
    translation, _ = select_translation(
        rows, language, entity_ref=f"{entity_type.name}:{entity.pk}"
    )

    merged = {
        name: stored[name] if name in stored else getattr(translation, name, None)
        for name in localizable.names
    }
    if all(_is_blank(value) for value in merged.values()):
        if rows:
            manager.filter(pk__in=[row.pk for row in rows]).delete()
            logger.info(
                "Deleted %s translation for %s:%s",
                language,
                entity_type.name,
                entity.pk,
            )
        return None

    if translation is None:
        translation = entity_type.translation_model(
            **{entity_type.parent_field: entity, "language": language}
        )
    for name, value in stored.items():
        setattr(translation, name, value)
    translation.save()
    return translation


def apply_translations(entity_type, entity, translations: Mapping[str, Mapping]) -> Dict:
    return {
        language: apply_translation(entity_type, entity, language, values)
        for language, values in translations.items()
    }
