# content/tests/test_public_views.py
"""
Tests for the public read endpoints.

Coverage:
- program list/detail in the canonical, alternate and unsupported languages
- lookup labels and nested city in responses
- drafts and unknown refs are 404
- list filters, search and pagination
- homepage showcase and shared fields
- corrupt JSON columns surface as DECODE_ERROR
- responses are cached and refreshed after writes
"""

import json
import uuid

import pytest

from content.models import FAQ, ContentStatus, FAQTranslation, Program, ProgramType

from .conftest import auth_headers

pytestmark = pytest.mark.django_db


@pytest.fixture
def culture(db):
    return ProgramType.objects.create(name="文化", name_en="Culture")


# ---------- program detail tests ----------
class TestProgramDetail:
    def test_english_translation(self, client, program, culture):
        response = client.get("/api/programs/beijing-program/?language=en")
        assert response.status_code == 200
        entity = response.json()["entity"]
        assert entity["title"] == "Beijing Program"
        assert entity["highlights"] == ["Temples", "Great Wall"]
        assert entity["type"] == ["Culture"]
        assert entity["city"]["name"] == "Beijing"
        assert entity["city"]["country"]["name"] == "China"
        assert entity["content_language"] == "en"
        assert entity["translation_status"] == "translated"
        assert entity["fallback_fields"] == []
        assert response["Content-Language"] == "en"

    def test_blank_translated_field_falls_back(self, client, program):
        program.translations.update(description="")
        entity = client.get("/api/programs/beijing-program/?language=en").json()["entity"]
        assert entity["description"] == "北京游学"
        assert entity["translation_status"] == "partial"
        assert entity["fallback_fields"] == ["description"]

    def test_canonical_language(self, client, program, culture):
        entity = client.get("/api/programs/beijing-program/?language=zh").json()["entity"]
        assert entity["title"] == "北京项目"
        assert entity["highlights"] == ["寺庙", "长城"]
        assert entity["type"] == ["文化"]
        assert entity["city"]["name"] == "北京"
        assert entity["translation_status"] == "canonical"

    def test_default_language_is_canonical(self, client, program):
        entity = client.get("/api/programs/beijing-program/").json()["entity"]
        assert entity["title"] == "北京项目"

    def test_header_selects_language(self, client, program):
        response = client.get("/api/programs/beijing-program/", HTTP_X_CONTENT_LANGUAGE="en")
        assert response.json()["entity"]["title"] == "Beijing Program"

    def test_region_tagged_canonical_language(self, client, program, culture):
        entity = client.get("/api/programs/beijing-program/?language=zh-CN").json()["entity"]
        assert entity["title"] == "北京项目"
        assert entity["highlights"] == ["寺庙", "长城"]
        assert entity["type"] == ["文化"]
        assert entity["translation_status"] == "canonical"
        assert entity["content_language"] == "zh"

    def test_region_tagged_alternate_language(self, client, program, culture):
        response = client.get("/api/programs/beijing-program/", HTTP_X_CONTENT_LANGUAGE="en-US")
        entity = response.json()["entity"]
        assert entity["title"] == "Beijing Program"
        assert entity["type"] == ["Culture"]
        assert entity["city"]["name"] == "Beijing"
        assert entity["content_language"] == "en"

    def test_unsupported_language_has_empty_localizable_fields(self, client, program):
        entity = client.get("/api/programs/beijing-program/?language=fr").json()["entity"]
        assert entity["title"] == ""
        assert entity["description"] == ""
        assert entity["highlights"] == []
        assert entity["featured_image"] == "https://cdn.edgoing.test/beijing.jpg"
        assert entity["slug"] == "beijing-program"
        assert entity["translation_status"] == "missing"
        assert entity["content_language"] == "fr"

    def test_internal_fields_are_hidden(self, client, program):
        entity = client.get("/api/programs/beijing-program/").json()["entity"]
        assert "created_by_id" not in entity
        assert "city_id" not in entity

    def test_draft_is_not_found(self, client, program):
        Program.objects.filter(pk=program.pk).update(status=ContentStatus.DRAFT)
        response = client.get("/api/programs/beijing-program/?language=en")
        assert response.status_code == 404
        assert response.json()["code"] == "NOT_FOUND"

    def test_unknown_slug_is_not_found(self, client, db):
        assert client.get("/api/programs/nowhere/").status_code == 404

    def test_corrupt_json_is_a_decode_error(self, client, program):
        Program.objects.filter(pk=program.pk).update(highlights='["broken')
        response = client.get("/api/programs/beijing-program/?language=zh")
        assert response.status_code == 500
        assert response.json()["code"] == "DECODE_ERROR"


# ---------- list tests ----------
class TestProgramList:
    def test_list_shape(self, client, program):
        response = client.get("/api/programs/?language=en")
        assert response.status_code == 200
        data = response.json()
        assert [item["title"] for item in data["items"]] == ["Beijing Program"]
        assert data["pagination"] == {"page": 1, "limit": 10, "total": 1, "pages": 1}

    def test_drafts_are_excluded(self, client, program):
        Program.objects.create(title="草稿", slug="draft", status=ContentStatus.DRAFT)
        assert client.get("/api/programs/").json()["pagination"]["total"] == 1

    def test_pagination(self, client, db):
        for index in range(5):
            Program.objects.create(
                title=f"项目{index}", slug=f"program-{index}", status=ContentStatus.PUBLISHED
            )
        data = client.get("/api/programs/?page=2&limit=2").json()
        assert len(data["items"]) == 2
        assert data["pagination"] == {"page": 2, "limit": 2, "total": 5, "pages": 3}

    def test_invalid_pagination(self, client, db):
        response = client.get("/api/programs/?limit=0")
        assert response.status_code == 400
        assert response.json()["code"] == "INVALID_PARAM"
        assert client.get("/api/programs/?page=abc").status_code == 400

    def test_limit_is_capped(self, client, db):
        assert client.get("/api/programs/?limit=500").json()["pagination"]["limit"] == 100

    def test_city_and_country_filters(self, client, program):
        Program.objects.create(title="上海项目", slug="shanghai", status=ContentStatus.PUBLISHED)
        assert client.get("/api/programs/?city=Beijing").json()["pagination"]["total"] == 1
        assert client.get("/api/programs/?city=北京").json()["pagination"]["total"] == 1
        assert client.get("/api/programs/?country=CN").json()["pagination"]["total"] == 1
        assert client.get("/api/programs/").json()["pagination"]["total"] == 2

    def test_type_filter_matches_either_spelling(self, client, program, culture):
        assert client.get("/api/programs/?type=Culture").json()["pagination"]["total"] == 1
        assert client.get("/api/programs/?type=文化").json()["pagination"]["total"] == 1
        assert client.get("/api/programs/?type=STEM").json()["pagination"]["total"] == 0

    def test_search_covers_translations(self, client, program):
        assert client.get("/api/programs/?search=Beijing").json()["pagination"]["total"] == 1
        assert client.get("/api/programs/?search=北京").json()["pagination"]["total"] == 1
        assert client.get("/api/programs/?search=Tokyo").json()["pagination"]["total"] == 0


# ---------- other entity tests ----------
class TestFaqs:
    def test_faq_detail_by_id(self, client, db):
        faq = FAQ.objects.create(question="如何报名？", answer="在线申请", status=ContentStatus.PUBLISHED)
        FAQTranslation.objects.create(faq=faq, language="en", question="How do I apply?", answer="Online")
        entity = client.get(f"/api/faqs/{faq.id}/?lang=en").json()["entity"]
        assert entity["question"] == "How do I apply?"
        assert entity["id"] == str(faq.id)

    def test_malformed_id_is_not_found(self, client, db):
        assert client.get("/api/faqs/not-a-uuid/").status_code == 404

    def test_faq_without_translation(self, client, db):
        FAQ.objects.create(question="如何报名？", answer="在线申请", status=ContentStatus.PUBLISHED)
        item = client.get("/api/faqs/?language=en").json()["items"][0]
        assert item["question"] == ""
        assert item["answer"] == ""
        assert item["translation_status"] == "missing"


class TestShowcaseAndSharedFields:
    def test_showcase_lists_featured_programs(self, client, program):
        Program.objects.create(title="草稿", slug="draft", is_featured=True)
        Program.objects.filter(pk=program.pk).update(is_featured=True)
        items = client.get("/api/homepage-showcase/?language=en").json()["items"]
        assert [item["title"] for item in items] == ["Beijing Program"]

    def test_shared_fields_labels(self, client, program, culture):
        data = client.get("/api/shared-fields/?language=en").json()
        assert data["countries"][0]["label"] == "China"
        assert data["cities"][0]["label"] == "Beijing"
        assert data["program_types"][0]["label"] == "Culture"
        assert data["grade_levels"] == []


# ---------- caching tests ----------
class TestResponseCaching:
    def test_repeat_reads_hit_the_cache(self, client, program, query_cache):
        client.get("/api/programs/?language=en")
        client.get("/api/programs/?language=en")
        stats = query_cache.stats()
        assert stats["hits"] == 1
        assert stats["buckets"] == {"program": 1}

    def test_admin_update_refreshes_cached_list(self, client, program, editor):
        first = client.get("/api/programs/?language=en").json()
        assert first["items"][0]["title"] == "Beijing Program"

        response = client.put(
            f"/api/admin/programs/{program.id}/",
            data=json.dumps({"title_en": "Beijing Explorer"}),
            content_type="application/json",
            **auth_headers(editor),
        )
        assert response.status_code == 200

        second = client.get("/api/programs/?language=en").json()
        assert second["items"][0]["title"] == "Beijing Explorer"

    def test_program_change_refreshes_showcase(self, client, program, editor):
        assert client.get("/api/homepage-showcase/").json()["items"] == []
        client.put(
            f"/api/admin/programs/{program.id}/",
            data=json.dumps({"is_featured": True}),
            content_type="application/json",
            **auth_headers(editor),
        )
        assert len(client.get("/api/homepage-showcase/").json()["items"]) == 1

    def test_lookup_change_refreshes_program_labels(self, client, program, culture, editor):
        assert client.get("/api/programs/?language=en").json()["items"][0]["type"] == ["Culture"]
        client.patch(
            f"/api/admin/shared-fields/program-types/{culture.id}/",
            data=json.dumps({"name_en": "Cultural Studies"}),
            content_type="application/json",
            **auth_headers(editor),
        )
        items = client.get("/api/programs/?language=en").json()["items"]
        assert items[0]["type"] == ["Cultural Studies"]

    def test_unknown_program_id_in_admin(self, client, editor):
        response = client.get(f"/api/admin/programs/{uuid.uuid4()}/", **auth_headers(editor))
        assert response.status_code == 404
