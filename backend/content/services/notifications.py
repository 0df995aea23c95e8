"""
Fire-and-forget email notifications for the public forms.

Sending happens on a daemon thread after the row is saved, so a slow or
failing mail server never affects the request that triggered it.
"""
import logging
import threading
from typing import Iterable, Optional

from django.conf import settings
from django.core.mail import send_mail

from .errors import UpstreamError

logger = logging.getLogger(__name__)


def _deliver(subject: str, body: str, recipients) -> None:
    try:
        send_mail(subject, body, settings.DEFAULT_FROM_EMAIL, list(recipients))
    except Exception as exc:
        error = UpstreamError(f"Notification email failed: {exc}")
        logger.exception("%s (subject=%r)", error, subject)


def send_notification(
    subject: str,
    body: str,
    recipients: Optional[Iterable[str]] = None,
    *,
    background: bool = True,
) -> Optional[threading.Thread]:
    recipients = list(recipients or getattr(settings, "CONTENT_NOTIFICATION_RECIPIENTS", []))
    if not recipients:
        logger.debug("No notification recipients configured; skipping %r", subject)
        return None
    if not background:
        _deliver(subject, body, recipients)
        return None
    thread = threading.Thread(
        target=_deliver,
        args=(subject, body, recipients),
        name="notification-mail",
        daemon=True,
    )
    thread.start()
    return thread


def notify_contact_submission(submission) -> Optional[threading.Thread]:
    body = (
        f"Name: {submission.name}\n"
        f"Email: {submission.email}\n"
        f"Phone: {submission.phone or '-'}\n"
        f"Language: {submission.language or '-'}\n\n"
        f"{submission.message}"
    )
    return send_notification(f"New contact message from {submission.name}", body)


def notify_program_application(application) -> Optional[threading.Thread]:
    program = application.program
    body = (
        f"Program: {program.title} ({program.slug})\n"
        f"Student: {application.student_name}\n"
        f"Email: {application.email}\n"
        f"Phone: {application.phone or '-'}\n"
        f"Grade: {application.grade or '-'}\n\n"
        f"{application.message}"
    )
    return send_notification(f"New application: {program.title}", body)


def notify_newsletter_subscription(subscription) -> Optional[threading.Thread]:
    body = (
        f"Email: {subscription.email}\n"
        f"Name: {subscription.name or '-'}\n"
        f"Language: {subscription.language or '-'}\n"
        f"Subscribed at: {subscription.subscribed_at.isoformat()}"
    )
    return send_notification(f"New newsletter subscriber: {subscription.email}", body)
