# content/tests/test_translation.py
"""
Tests for translation payload handling and slug generation.

Coverage:
- nested, snake_case and camelCase payload shapes
- {"language": ...} payloads
- unknown fields and canonical-language entries are ignored
- generate_slug fallbacks
"""

import pytest

from content.registry import BLOG, PROGRAM
from content.services.content import generate_slug
from content.services.translation import extract_translations, flat_translation_keys


class TestFlatKeys:
    def test_snake_and_camel(self):
        assert flat_translation_keys("title", "en") == ("title_en", "titleEn")
        assert flat_translation_keys("grade_level", "en") == ("grade_level_en", "gradeLevelEn")

    def test_region_codes(self):
        assert flat_translation_keys("title", "zh-tw") == ("title_zh_tw", "titleZhTw")


class TestExtractTranslations:
    def test_nested(self):
        payload = {"translations": {"en": {"title": "Beijing", "featured_image": "x.jpg"}}}
        assert extract_translations(PROGRAM, payload) == {"en": {"title": "Beijing"}}

    def test_flat_keys(self):
        payload = {"title": "北京", "title_en": "Beijing", "highlightsEn": ["Temples"]}
        assert extract_translations(PROGRAM, payload) == {
            "en": {"title": "Beijing", "highlights": ["Temples"]}
        }

    def test_flat_keys_override_nested(self):
        payload = {"translations": {"en": {"title": "Old"}}, "titleEn": "New"}
        assert extract_translations(PROGRAM, payload)["en"]["title"] == "New"

    def test_language_payload(self):
        payload = {"language": "en", "title": "Summer Camp", "content": "Text", "image_url": "a.png"}
        assert extract_translations(BLOG, payload) == {
            "en": {"title": "Summer Camp", "content": "Text"}
        }

    def test_canonical_entries_are_ignored(self):
        payload = {"language": "zh", "title": "北京", "translations": {"zh": {"title": "北京"}}}
        assert extract_translations(PROGRAM, payload) == {}

    def test_cleared_values_are_kept(self):
        assert extract_translations(PROGRAM, {"title_en": ""}) == {"en": {"title": ""}}


@pytest.mark.django_db
class TestGenerateSlug:
    def test_ascii_title(self):
        assert generate_slug(PROGRAM, "Beijing Summer Camp 2024") == "beijing-summer-camp-2024"

    def test_first_usable_text_wins(self):
        assert generate_slug(PROGRAM, "北京项目", None, "Beijing Program") == "beijing-program"

    def test_timestamp_fallback(self):
        slug = generate_slug(BLOG, "夏令营")
        assert slug.startswith("blog-")
        assert slug.split("-", 1)[1].isdigit()
