import json

from django.utils import timezone
from django.utils.dateparse import parse_datetime

from .errors import PayloadValidationError, StructuredFieldError


def parse_iso_datetime(value: str):
    if not value:
        return None
    dt = parse_datetime(value)
    if dt is None:
        raise PayloadValidationError(f"Invalid datetime: {value}", code="INVALID_DATETIME")
    if timezone.is_naive(dt):
        dt = timezone.make_aware(dt)
    return dt


def decode(text, *, field: str = None):
    """
    Decode a stored JSON column. NULL or empty storage means "no items" and
    yields []. Anything that does not parse raises StructuredFieldError.
    """
    if text is None or text == "":
        return []
    if not isinstance(text, str):
        raise StructuredFieldError(
            f"Stored value for {field or 'field'} is not text", field=field
        )
    try:
        return json.loads(text)
    except json.JSONDecodeError as exc:
        raise StructuredFieldError(
            f"Stored value for {field or 'field'} is not valid JSON: {exc.msg}",
            field=field,
        ) from exc


def encode(value, *, field: str = None):
    """
    Encode a list/dict for storage. None stays NULL. Strings are taken as
    already-encoded JSON and validated.
    """
    if value is None:
        return None
    if isinstance(value, str):
        if value == "":
            return None
        try:
            decoded = json.loads(value)
        except json.JSONDecodeError:
            decoded = None
        if not isinstance(decoded, (list, dict)):
            raise PayloadValidationError(
                f"{field or 'field'} must be a JSON array or object", code="INVALID_JSON_FIELD"
            )
        return value
    if not isinstance(value, (list, dict)):
        raise PayloadValidationError(
            f"{field or 'field'} must be a list", code="INVALID_JSON_FIELD"
        )
    return json.dumps(value, ensure_ascii=False)
