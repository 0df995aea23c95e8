"""
Form submissions: newsletter sign-up and the editor listings of contact
messages, program applications and newsletter subscribers.
"""
import logging
import math
from dataclasses import dataclass
from typing import Callable, Dict, Iterable, Mapping, Optional, Tuple

from django.db import IntegrityError, transaction
from django.utils import timezone

from ..models import ContactSubmission, NewsletterSubscription, ProgramApplication
from .errors import ConflictError, NotFoundError, PayloadValidationError
from .localization import get_canonical_language, primary_subtag

logger = logging.getLogger(__name__)

SUBSCRIBED_MESSAGES = {"zh": "感谢您的订阅", "en": "Successfully subscribed!"}
ALREADY_SUBSCRIBED_MESSAGES = {"zh": "该邮箱已订阅", "en": "Email is already subscribed"}


def _timestamp(value) -> Optional[str]:
    return value.isoformat() if value else None


def serialize_contact_submission(row) -> Dict:
    return {
        "id": row.id,
        "name": row.name,
        "email": row.email,
        "phone": row.phone,
        "message": row.message,
        "language": row.language,
        "created_at": _timestamp(row.created_at),
    }


def serialize_application(row) -> Dict:
    program = row.program
    return {
        "id": row.id,
        "program": {"id": str(program.id), "title": program.title, "slug": program.slug},
        "student_name": row.student_name,
        "email": row.email,
        "phone": row.phone,
        "grade": row.grade,
        "message": row.message,
        "created_at": _timestamp(row.created_at),
    }


def serialize_subscription(row) -> Dict:
    return {
        "id": row.id,
        "email": row.email,
        "name": row.name,
        "language": row.language,
        "is_active": row.is_active,
        "subscribed_at": _timestamp(row.subscribed_at),
        "unsubscribed_at": _timestamp(row.unsubscribed_at),
    }


def _active_filter(qs, value: str):
    if value.lower() in ("true", "1", "yes"):
        return qs.filter(is_active=True)
    if value.lower() in ("false", "0", "no"):
        return qs.filter(is_active=False)
    raise PayloadValidationError(f"Invalid active filter: {value}", code="INVALID_PARAM")


@dataclass(frozen=True)
class SubmissionKind:
    name: str
    model: type
    serialize: Callable[[object], Dict]
    ordering: Tuple[str, ...]
    select_related: Tuple[str, ...] = ()
    # query parameter -> function(queryset, value) -> queryset
    filters: Tuple[Tuple[str, Callable], ...] = ()


SUBMISSION_KINDS = {
    kind.name: kind
    for kind in (
        SubmissionKind(
            "contact-submissions",
            ContactSubmission,
            serialize_contact_submission,
            ("-created_at", "-id"),
        ),
        SubmissionKind(
            "applications",
            ProgramApplication,
            serialize_application,
            ("-created_at", "-id"),
            select_related=("program",),
        ),
        SubmissionKind(
            "newsletters",
            NewsletterSubscription,
            serialize_subscription,
            ("-subscribed_at", "-id"),
            filters=(("active", _active_filter),),
        ),
    )
}


def get_submission_kind(name: str) -> SubmissionKind:
    try:
        return SUBMISSION_KINDS[name]
    except KeyError:
        raise NotFoundError(f"Unknown submission kind: {name}")


def list_submissions(
    kind: SubmissionKind,
    *,
    page: int = 1,
    limit: int = 10,
    params: Optional[Mapping[str, str]] = None,
) -> Dict:
    qs = kind.model.objects.all()
    if kind.select_related:
        qs = qs.select_related(*kind.select_related)
    for name, apply_filter in kind.filters:
        value = (params or {}).get(name)
        if value:
            qs = apply_filter(qs, value)
    qs = qs.order_by(*kind.ordering)

    total = qs.count()
    offset = (page - 1) * limit
    return {
        "items": [kind.serialize(row) for row in qs[offset : offset + limit]],
        "pagination": {
            "page": page,
            "limit": limit,
            "total": total,
            "pages": math.ceil(total / limit) if total else 0,
        },
    }


def delete_submissions(kind: SubmissionKind, ids: Iterable) -> int:
    if not isinstance(ids, list) or not ids:
        raise PayloadValidationError("ids must be a non-empty list", code="MISSING_IDS")
    try:
        normalized = [int(value) for value in ids]
    except (TypeError, ValueError):
        raise PayloadValidationError("ids must be integers", code="INVALID_IDS")
    with transaction.atomic():
        deleted, _ = kind.model.objects.filter(pk__in=normalized).delete()
    logger.info("Deleted %d %s", deleted, kind.name)
    return deleted


def localized_message(messages: Mapping[str, str], language: str) -> str:
    return messages.get(primary_subtag(language)) or messages[get_canonical_language()]


def subscribe(email: str, *, name: str = "", language: str = ""):
    """
    Create a subscription, or reactivate a cancelled one.

    Returns (subscription, created). An address that is already active is a
    ConflictError.
    """
    with transaction.atomic():
        existing = (
            NewsletterSubscription.objects.select_for_update().filter(email__iexact=email).first()
        )
        if existing is not None:
            if existing.is_active:
                raise ConflictError(
                    localized_message(ALREADY_SUBSCRIBED_MESSAGES, language),
                    code="ALREADY_SUBSCRIBED",
                )
            existing.is_active = True
            existing.name = name or existing.name
            existing.language = language
            existing.subscribed_at = timezone.now()
            existing.unsubscribed_at = None
            existing.save()
            logger.info("Reactivated newsletter subscription %s", existing.id)
            return existing, False
        try:
            subscription = NewsletterSubscription.objects.create(
                email=email, name=name, language=language
            )
        except IntegrityError:
            raise ConflictError(
                localized_message(ALREADY_SUBSCRIBED_MESSAGES, language),
                code="ALREADY_SUBSCRIBED",
            )
    logger.info("New newsletter subscription %s", subscription.id)
    return subscription, True
