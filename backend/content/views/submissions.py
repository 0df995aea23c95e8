import logging

from django.core.exceptions import ValidationError
from django.core.validators import validate_email
from django.http import JsonResponse
from django.views.decorators.csrf import csrf_exempt
from django.views.decorators.http import require_http_methods

from ..models import ContactSubmission, ContentStatus, Program, ProgramApplication
from ..services.errors import ContentError, NotFoundError, PayloadValidationError
from ..services.localization import normalize_language
from ..services.notifications import (
    notify_contact_submission,
    notify_newsletter_subscription,
    notify_program_application,
)
from ..services.submissions import (
    SUBSCRIBED_MESSAGES,
    localized_message,
    serialize_subscription,
    subscribe,
)
from .common import _content_error, _internal_error, _parse_json_body, _request_language

logger = logging.getLogger(__name__)


def _required_text(payload, *names):
    values = {name: str(payload.get(name) or "").strip() for name in names}
    missing = [name for name, value in values.items() if not value]
    if missing:
        raise PayloadValidationError(f"{', '.join(missing)} required", code="MISSING_FIELDS")
    return values


def _checked_email(value: str) -> str:
    try:
        validate_email(value)
    except ValidationError:
        raise PayloadValidationError("Invalid email address", code="INVALID_EMAIL")
    return value


@csrf_exempt
@require_http_methods(["POST"])
def contact(request) -> JsonResponse:
    """
    POST /api/contact/

    {"name": "...", "email": "...", "phone": "...", "message": "..."}
    """
    try:
        payload = _parse_json_body(request)
        values = _required_text(payload, "name", "email", "message")
        submission = ContactSubmission.objects.create(
            name=values["name"],
            email=_checked_email(values["email"]),
            phone=str(payload.get("phone") or "").strip(),
            message=values["message"],
            language=_request_language(request),
        )
    except ContentError as e:
        return _content_error(e)
    except Exception as e:
        return _internal_error("Error saving contact submission: %s", e)

    notify_contact_submission(submission)
    return JsonResponse({"id": submission.id, "received": True}, status=201)


@csrf_exempt
@require_http_methods(["POST"])
def apply(request, slug: str) -> JsonResponse:
    """POST /api/programs/<slug>/apply/"""
    try:
        try:
            program = Program.objects.get(slug=slug, status=ContentStatus.PUBLISHED)
        except Program.DoesNotExist:
            raise NotFoundError("Program not found")
        payload = _parse_json_body(request)
        values = _required_text(payload, "student_name", "email")
        application = ProgramApplication.objects.create(
            program=program,
            student_name=values["student_name"],
            email=_checked_email(values["email"]),
            phone=str(payload.get("phone") or "").strip(),
            grade=str(payload.get("grade") or "").strip(),
            message=str(payload.get("message") or "").strip(),
        )
    except ContentError as e:
        return _content_error(e)
    except Exception as e:
        return _internal_error("Error saving application for %s: %s", slug, e)

    notify_program_application(application)
    return JsonResponse({"id": application.id, "received": True}, status=201)


@csrf_exempt
@require_http_methods(["POST"])
def newsletter_subscribe(request) -> JsonResponse:
    """
    POST /api/newsletter/subscribe/

    {"email": "...", "name": "...", "language": "en"}

    201 for a new subscriber, 200 when a cancelled subscription is
    reactivated, 409 ALREADY_SUBSCRIBED when the address is already active.
    """
    try:
        payload = _parse_json_body(request)
        values = _required_text(payload, "email")
        language = normalize_language(payload.get("language") or _request_language(request))
        subscription, created = subscribe(
            _checked_email(values["email"]),
            name=str(payload.get("name") or "").strip(),
            language=language,
        )
    except ContentError as e:
        return _content_error(e)
    except Exception as e:
        return _internal_error("Error saving newsletter subscription: %s", e)

    notify_newsletter_subscription(subscription)
    return JsonResponse(
        {
            "message": localized_message(SUBSCRIBED_MESSAGES, language),
            "subscription": serialize_subscription(subscription),
        },
        status=201 if created else 200,
    )
