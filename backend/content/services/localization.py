"""
Content resolution: merge a canonical row with its translation rows.

Every content entity is authored in the canonical locale and may carry one
translation row per alternate locale. resolve() produces the view of an entity
for one requested locale:

- canonical locale requested: canonical fields verbatim;
- translation row found: localizable fields come from the row, everything
  else from the canonical row. A blank translated field falls back to the
  canonical value when partial fallback is on;
- region-tagged locale (zh-CN, en-US) with no row of its own: resolved as
  its primary subtag;
- no translation row: localizable fields are emptied rather than showing
  canonical-language prose.

The function is pure: it reads model instances or plain mappings and never
touches the database.
"""
import logging
import re
from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, Mapping, Optional, Tuple

from django.conf import settings

logger = logging.getLogger(__name__)

LANGUAGE_PATTERN = re.compile(r"^[a-z]{2,3}(-[a-z0-9]{2,8})*$")

STATUS_CANONICAL = "canonical"
STATUS_TRANSLATED = "translated"
STATUS_PARTIAL = "partial"
STATUS_MISSING = "missing"

ANOMALY_DUPLICATE_TRANSLATION = "duplicate_translation"


@dataclass(frozen=True)
class LocalizableFields:
    """Which columns of an entity carry language-specific content."""

    text: Tuple[str, ...]
    structured: Tuple[str, ...] = ()

    @property
    def names(self) -> Tuple[str, ...]:
        return self.text + self.structured

    def empty_value(self, name: str):
        # Structured columns store JSON text; "no content" is a NULL column.
        return None if name in self.structured else ""


@dataclass
class ResolvedEntity:
    fields: Dict[str, Any]
    requested_language: str
    content_language: str
    canonical_language: str
    status: str
    fallback_fields: Tuple[str, ...] = ()
    anomalies: Tuple[str, ...] = field(default_factory=tuple)

    @property
    def is_fallback(self) -> bool:
        return self.status in (STATUS_PARTIAL, STATUS_MISSING)

    def __getitem__(self, name: str):
        return self.fields[name]

    def get(self, name: str, default=None):
        return self.fields.get(name, default)


def get_canonical_language() -> str:
    return getattr(settings, "CONTENT_CANONICAL_LANGUAGE", "zh")


def get_supported_languages() -> Tuple[str, ...]:
    canonical = get_canonical_language()
    configured = getattr(settings, "CONTENT_LANGUAGES", None) or [canonical]
    languages = [canonical] + [lang for lang in configured if lang != canonical]
    return tuple(languages)


def get_alternate_languages() -> Tuple[str, ...]:
    return get_supported_languages()[1:]


def normalize_language(value, canonical: Optional[str] = None) -> str:
    """
    Lower-case and trim a requested language code. Blank or malformed codes
    become the canonical language; well-formed codes pass through even when
    no translation exists for them.
    """
    canonical = canonical or get_canonical_language()
    if not isinstance(value, str):
        return canonical
    candidate = value.strip().lower().replace("_", "-")
    if not candidate or not LANGUAGE_PATTERN.match(candidate):
        return canonical
    return candidate


def primary_subtag(language: str) -> str:
    return language.split("-", 1)[0]


def snapshot(entity) -> Dict[str, Any]:
    """Plain dict of a canonical row's stored values."""
    if isinstance(entity, Mapping):
        return dict(entity)
    meta = getattr(entity, "_meta", None)
    if meta is not None:
        return {f.attname: getattr(entity, f.attname) for f in meta.concrete_fields}
    return dict(vars(entity))


def _row_value(row, name: str):
    if isinstance(row, Mapping):
        return row.get(name)
    return getattr(row, name, None)


def _is_blank(value) -> bool:
    return value is None or value == ""


def select_translation(
    translations: Optional[Iterable],
    language: str,
    *,
    entity_ref: str = "",
) -> Tuple[Optional[Any], Tuple[str, ...]]:
    """
    Pick the translation row for `language`. More than one row for the same
    language breaks the uniqueness invariant; the earliest created row wins and
    the anomaly is reported.
    """
    matches = [
        (index, row)
        for index, row in enumerate(translations or ())
        if (_row_value(row, "language") or "").strip().lower() == language
    ]
    if not matches:
        return None, ()
    if len(matches) == 1:
        return matches[0][1], ()

    def creation_order(item):
        index, row = item
        created_at = _row_value(row, "created_at")
        return (created_at is None, created_at, index)

    matches.sort(key=creation_order)
    logger.warning(
        "Found %d translation rows for %s language=%s; using the earliest",
        len(matches),
        entity_ref or "entity",
        language,
    )
    return matches[0][1], (ANOMALY_DUPLICATE_TRANSLATION,)


def resolve(
    entity,
    translations: Optional[Iterable],
    requested_language,
    localizable: LocalizableFields,
    *,
    canonical_language: Optional[str] = None,
    partial_fallback: Optional[bool] = None,
) -> ResolvedEntity:
    canonical = canonical_language or get_canonical_language()
    if partial_fallback is None:
        partial_fallback = getattr(settings, "CONTENT_PARTIAL_FALLBACK", True)

    language = normalize_language(requested_language, canonical)
    fields = snapshot(entity)
    canonical_result = ResolvedEntity(
        fields=fields,
        requested_language=language,
        content_language=canonical,
        canonical_language=canonical,
        status=STATUS_CANONICAL,
    )

    if language == canonical:
        return canonical_result

    entity_ref = f"{type(entity).__name__}:{fields.get('id')}"
    translations = list(translations or ())
    translation, anomalies = select_translation(translations, language, entity_ref=entity_ref)

    # zh-CN, en-US: an exact row wins, then the primary subtag.
    language_served = language
    primary = primary_subtag(language)
    if translation is None and primary != language:
        if primary == canonical:
            return canonical_result
        translation, anomalies = select_translation(translations, primary, entity_ref=entity_ref)
        if translation is not None:
            language_served = primary

    if translation is None:
        for name in localizable.names:
            fields[name] = localizable.empty_value(name)
        return ResolvedEntity(
            fields=fields,
            requested_language=language,
            content_language=language,
            canonical_language=canonical,
            status=STATUS_MISSING,
            anomalies=anomalies,
        )

    fallback = []
    for name in localizable.names:
        value = _row_value(translation, name)
        if _is_blank(value):
            if partial_fallback and not _is_blank(fields.get(name)):
                fallback.append(name)
                continue
            value = localizable.empty_value(name)
        fields[name] = value

    return ResolvedEntity(
        fields=fields,
        requested_language=language,
        content_language=language_served,
        canonical_language=canonical,
        status=STATUS_PARTIAL if fallback else STATUS_TRANSLATED,
        fallback_fields=tuple(fallback),
        anomalies=anomalies,
    )
