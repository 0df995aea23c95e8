# content/tests/test_submissions.py
"""
Tests for contact and application forms, notifications and health.

Coverage:
- contact form validation and storage
- program application for published programs only
- newsletter sign-up, reactivation and duplicates
- editor listings and bulk deletes of submissions
- notifications send mail, and mail failures are logged not raised
"""

import json
import logging

import pytest
from django.core import mail

from content.models import (
    ContactSubmission,
    ContentStatus,
    NewsletterSubscription,
    Program,
    ProgramApplication,
)
from content.services import notifications

from .conftest import auth_headers

pytestmark = pytest.mark.django_db


@pytest.fixture
def sent(monkeypatch):
    calls = []
    monkeypatch.setattr(
        "content.views.submissions.notify_contact_submission", lambda obj: calls.append(obj)
    )
    monkeypatch.setattr(
        "content.views.submissions.notify_program_application", lambda obj: calls.append(obj)
    )
    monkeypatch.setattr(
        "content.views.submissions.notify_newsletter_subscription", lambda obj: calls.append(obj)
    )
    return calls


def _post(client, url, payload, **headers):
    return client.post(url, data=json.dumps(payload), content_type="application/json", **headers)


class TestContact:
    def test_submission_is_stored_and_notified(self, client, sent):
        response = _post(
            client,
            "/api/contact/?language=en",
            {"name": "Ada", "email": "ada@example.com", "message": "Hello"},
        )
        assert response.status_code == 201
        submission = ContactSubmission.objects.get()
        assert submission.language == "en"
        assert sent == [submission]

    def test_missing_fields(self, client, sent):
        response = _post(client, "/api/contact/", {"name": "Ada"})
        assert response.status_code == 400
        assert response.json()["code"] == "MISSING_FIELDS"
        assert sent == []

    def test_invalid_email(self, client, sent):
        response = _post(client, "/api/contact/", {"name": "Ada", "email": "nope", "message": "Hi"})
        assert response.json()["code"] == "INVALID_EMAIL"


class TestApply:
    def test_apply_to_published_program(self, client, program, sent):
        response = _post(
            client,
            "/api/programs/beijing-program/apply/",
            {"student_name": "小明", "email": "parent@example.com", "grade": "G8"},
        )
        assert response.status_code == 201
        application = ProgramApplication.objects.get()
        assert application.program_id == program.id
        assert sent == [application]

    def test_draft_program_is_not_found(self, client, program, sent):
        Program.objects.filter(pk=program.pk).update(status=ContentStatus.DRAFT)
        response = _post(
            client,
            "/api/programs/beijing-program/apply/",
            {"student_name": "小明", "email": "parent@example.com"},
        )
        assert response.status_code == 404


class TestNewsletter:
    def test_new_subscription(self, client, sent):
        response = _post(
            client,
            "/api/newsletter/subscribe/",
            {"email": "ada@example.com", "name": "Ada", "language": "en"},
        )
        assert response.status_code == 201
        data = response.json()
        assert data["message"] == "Successfully subscribed!"
        assert data["subscription"]["email"] == "ada@example.com"
        assert data["subscription"]["is_active"] is True
        subscription = NewsletterSubscription.objects.get()
        assert subscription.language == "en"
        assert sent == [subscription]

    def test_message_follows_request_language(self, client, sent):
        response = _post(client, "/api/newsletter/subscribe/?language=zh-CN", {"email": "li@example.com"})
        assert response.json()["message"] == "感谢您的订阅"
        assert NewsletterSubscription.objects.get().language == "zh-cn"

    def test_active_address_is_a_conflict(self, client, sent):
        NewsletterSubscription.objects.create(email="ada@example.com")
        response = _post(
            client, "/api/newsletter/subscribe/", {"email": "ada@example.com", "language": "en"}
        )
        assert response.status_code == 409
        assert response.json()["code"] == "ALREADY_SUBSCRIBED"
        assert response.json()["error"] == "Email is already subscribed"
        assert sent == []

    def test_cancelled_subscription_is_reactivated(self, client, sent):
        cancelled = NewsletterSubscription.objects.create(
            email="ada@example.com", name="Ada", is_active=False, unsubscribed_at="2024-01-01T00:00:00Z"
        )
        response = _post(client, "/api/newsletter/subscribe/", {"email": "ada@example.com"})
        assert response.status_code == 200
        cancelled.refresh_from_db()
        assert cancelled.is_active is True
        assert cancelled.unsubscribed_at is None
        assert cancelled.name == "Ada"
        assert NewsletterSubscription.objects.count() == 1
        assert sent == [cancelled]

    def test_email_is_required_and_validated(self, client, sent):
        assert _post(client, "/api/newsletter/subscribe/", {}).json()["code"] == "MISSING_FIELDS"
        response = _post(client, "/api/newsletter/subscribe/", {"email": "nope"})
        assert response.json()["code"] == "INVALID_EMAIL"


class TestSubmissionListings:
    def test_editor_only(self, client, plain_user):
        assert client.get("/api/admin/contact-submissions/").status_code == 401
        response = client.get("/api/admin/contact-submissions/", **auth_headers(plain_user))
        assert response.status_code == 403

    def test_contact_submissions_newest_first(self, client, editor):
        for name in ("Ada", "Grace", "Linus"):
            ContactSubmission.objects.create(name=name, email=f"{name}@example.com", message="Hi")
        data = client.get("/api/admin/contact-submissions/?limit=2", **auth_headers(editor)).json()
        assert [item["name"] for item in data["items"]] == ["Linus", "Grace"]
        assert data["pagination"] == {"page": 1, "limit": 2, "total": 3, "pages": 2}

    def test_applications_include_program(self, client, editor, program):
        ProgramApplication.objects.create(program=program, student_name="小明", email="p@example.com")
        item = client.get("/api/admin/applications/", **auth_headers(editor)).json()["items"][0]
        assert item["student_name"] == "小明"
        assert item["program"] == {"id": str(program.id), "title": "北京项目", "slug": "beijing-program"}

    def test_newsletter_active_filter(self, client, editor):
        NewsletterSubscription.objects.create(email="a@example.com")
        NewsletterSubscription.objects.create(email="b@example.com", is_active=False)
        headers = auth_headers(editor)
        active = client.get("/api/admin/newsletters/?active=true", **headers).json()
        assert [item["email"] for item in active["items"]] == ["a@example.com"]
        assert client.get("/api/admin/newsletters/", **headers).json()["pagination"]["total"] == 2
        assert client.get("/api/admin/newsletters/?active=maybe", **headers).status_code == 400

    def test_bulk_delete(self, client, editor):
        rows = [
            ContactSubmission.objects.create(name=name, email=f"{name}@example.com", message="Hi")
            for name in ("Ada", "Grace")
        ]
        response = client.delete(
            "/api/admin/contact-submissions/",
            data=json.dumps({"ids": [rows[0].id]}),
            content_type="application/json",
            **auth_headers(editor),
        )
        assert response.json() == {"deleted": 1}
        assert list(ContactSubmission.objects.values_list("name", flat=True)) == ["Grace"]

    def test_bulk_delete_needs_ids(self, client, editor):
        response = client.delete(
            "/api/admin/applications/",
            data=json.dumps({"ids": []}),
            content_type="application/json",
            **auth_headers(editor),
        )
        assert response.status_code == 400
        assert response.json()["code"] == "MISSING_IDS"


class TestNotifications:
    def test_foreground_send(self, settings):
        settings.CONTENT_NOTIFICATION_RECIPIENTS = ["office@edgoing.test"]
        notifications.send_notification("Subject", "Body", background=False)
        assert len(mail.outbox) == 1
        assert mail.outbox[0].to == ["office@edgoing.test"]

    def test_background_send(self, settings):
        settings.CONTENT_NOTIFICATION_RECIPIENTS = ["office@edgoing.test"]
        thread = notifications.send_notification("Subject", "Body")
        thread.join(timeout=5)
        assert len(mail.outbox) == 1

    def test_newsletter_notification(self, settings):
        settings.CONTENT_NOTIFICATION_RECIPIENTS = ["office@edgoing.test"]
        subscription = NewsletterSubscription.objects.create(email="ada@example.com", language="en")
        notifications.notify_newsletter_subscription(subscription).join(timeout=5)
        assert mail.outbox[0].subject == "New newsletter subscriber: ada@example.com"
        assert "Language: en" in mail.outbox[0].body

    def test_no_recipients_skips(self, settings):
        settings.CONTENT_NOTIFICATION_RECIPIENTS = []
        assert notifications.send_notification("Subject", "Body") is None
        assert mail.outbox == []

    def test_mail_failure_is_logged(self, settings, monkeypatch, caplog):
        def broken(*args, **kwargs):
            raise ConnectionRefusedError("smtp down")

        monkeypatch.setattr(notifications, "send_mail", broken)
        with caplog.at_level(logging.ERROR, logger="content.services.notifications"):
            notifications.send_notification("Subject", "Body", ["office@edgoing.test"], background=False)
        assert "Notification email failed" in caplog.text


class TestHealth:
    def test_health(self, client):
        data = client.get("/api/health/").json()
        assert data["status"] == "ok"
        assert data["uptime_seconds"] >= 0
        assert data["max_rss_bytes"] > 0
