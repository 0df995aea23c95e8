# content/tests/test_commands.py
"""
Tests for the report_translations management command.
"""

from io import StringIO

import pytest
from django.core.management import CommandError, call_command

from content.models import FAQ, ContentStatus, Program

pytestmark = pytest.mark.django_db


def _report(*args):
    out = StringIO()
    call_command("report_translations", *args, stdout=out)
    return out.getvalue()


class TestReportTranslations:
    def test_counts_missing_translations(self, program):
        untranslated = Program.objects.create(title="上海项目", slug="shanghai")
        output = _report("--entity", "program", "--verbose")
        assert "programs [en]: 1/2 translated, 1 missing" in output
        assert f"missing: {untranslated.pk}" in output
        assert "1 missing translations, 0 duplicated" in output

    def test_status_filter(self, program):
        Program.objects.create(title="上海项目", slug="shanghai", status=ContentStatus.DRAFT)
        output = _report("--entity", "program", "--status", "PUBLISHED")
        assert "programs [en]: 1/1 translated, 0 missing" in output

    def test_all_entity_types(self, db):
        FAQ.objects.create(question="问题", answer="答案")
        output = _report()
        for plural in (
            "programs",
            "blogs",
            "testimonials",
            "faqs",
            "videos",
            "hero-pages",
            "partner-logos",
        ):
            assert f"{plural} [en]" in output
        assert "faqs [en]: 0/1 translated, 1 missing" in output

    def test_unsupported_language(self, db):
        with pytest.raises(CommandError):
            _report("--language", "fr")
