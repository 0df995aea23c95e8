"""
One descriptor per content entity. Public and admin endpoints, the serializer
and the translation writer are all driven by these, so adding a content type
means adding a model pair and an entry here.
"""
from dataclasses import dataclass
from typing import Callable, Dict, Mapping, Optional, Tuple

from django.utils.text import slugify

from .models import (
    FAQ,
    Blog,
    BlogTranslation,
    City,
    FAQTranslation,
    GradeLevel,
    HeroPage,
    HeroPageTranslation,
    HeroPageType,
    PartnerLogo,
    PartnerLogoTranslation,
    Program,
    ProgramTranslation,
    ProgramType,
    Testimonial,
    TestimonialTranslation,
    Video,
    VideoTranslation,
)
from .services.errors import PayloadValidationError
from .services.localization import LocalizableFields


@dataclass(frozen=True)
class EntityType:
    name: str
    plural: str
    model: type
    translation_model: type
    # FK from the translation model to the entity
    parent_field: str
    localizable: LocalizableFields
    required_fields: Tuple[str, ...]
    # Non-localizable columns an editor may write directly.
    editable_fields: Tuple[str, ...] = ()
    json_fields: Tuple[str, ...] = ()
    datetime_fields: Tuple[str, ...] = ()
    # (field, lookup model) pairs whose JSON arrays hold lookup names.
    label_fields: Tuple[Tuple[str, type], ...] = ()
    # (field, model) foreign keys writable by id, e.g. ("city", City).
    relation_fields: Tuple[Tuple[str, type], ...] = ()
    # select_related paths for the relation_fields serializers.
    select_related: Tuple[str, ...] = ()
    # Public list query parameters, see content.services.content.FILTERS.
    filters: Tuple[str, ...] = ()
    lookup_field: str = "id"
    slug_source: str = ""
    ordering: Tuple[str, ...] = ("-created_at",)
    search_fields: Tuple[str, ...] = ()
    # Called as validate(entity, translations) before a write is saved.
    validate: Optional[Callable[[object, Mapping], None]] = None

    @property
    def cache_bucket(self) -> str:
        return self.name

    @property
    def has_slug(self) -> bool:
        return bool(self.slug_source)


PROGRAM = EntityType(
    name="program",
    plural="programs",
    model=Program,
    translation_model=ProgramTranslation,
    parent_field="program",
    localizable=LocalizableFields(
        text=("title", "description", "duration"),
        structured=("highlights", "academics", "itinerary", "requirements", "sessions"),
    ),
    required_fields=("title",),
    editable_fields=(
        "deadline",
        "featured_image",
        "gallery",
        "type",
        "grade_level",
        "is_featured",
        "showcase_order",
    ),
    json_fields=(
        "highlights",
        "academics",
        "itinerary",
        "requirements",
        "sessions",
        "gallery",
        "type",
        "grade_level",
    ),
    datetime_fields=("deadline",),
    label_fields=(("type", ProgramType), ("grade_level", GradeLevel)),
    relation_fields=(("city", City),),
    select_related=("city__country",),
    filters=("city", "country", "type", "grade_level"),
    lookup_field="slug",
    slug_source="title",
    ordering=("-created_at",),
    search_fields=("title",),
)

BLOG = EntityType(
    name="blog",
    plural="blogs",
    model=Blog,
    translation_model=BlogTranslation,
    parent_field="blog",
    localizable=LocalizableFields(text=("title", "content", "author", "program", "grade")),
    required_fields=("title", "content"),
    editable_fields=("image_url", "order", "published_at"),
    datetime_fields=("published_at",),
    lookup_field="slug",
    slug_source="title",
    ordering=("order", "-published_at", "-created_at"),
    search_fields=("title",),
)

TESTIMONIAL = EntityType(
    name="testimonial",
    plural="testimonials",
    model=Testimonial,
    translation_model=TestimonialTranslation,
    parent_field="testimonial",
    localizable=LocalizableFields(text=("content", "author", "role", "program")),
    required_fields=("content", "author"),
    editable_fields=("image_url", "order"),
    ordering=("order", "-created_at"),
    search_fields=("author",),
)

FAQ_ENTITY = EntityType(
    name="faq",
    plural="faqs",
    model=FAQ,
    translation_model=FAQTranslation,
    parent_field="faq",
    localizable=LocalizableFields(text=("question", "answer")),
    required_fields=("question", "answer"),
    editable_fields=("order",),
    ordering=("order", "-created_at"),
    search_fields=("question", "answer"),
)

VIDEO = EntityType(
    name="video",
    plural="videos",
    model=Video,
    translation_model=VideoTranslation,
    parent_field="video",
    localizable=LocalizableFields(text=("title", "description", "category")),
    required_fields=("title",),
    editable_fields=("thumbnail_url", "video_url", "order"),
    lookup_field="slug",
    slug_source="title",
    ordering=("order", "-created_at"),
    search_fields=("title",),
)


def _validate_hero_page(entity, translations: Mapping) -> None:
    if entity.page_name != slugify(entity.page_name):
        raise PayloadValidationError(
            "page_name may only contain letters, digits and hyphens", code="INVALID_FIELD"
        )
    if entity.page_type == HeroPageType.PRIMARY and entity.slides in (None, "", "[]"):
        raise PayloadValidationError("PRIMARY hero pages need slides", code="MISSING_FIELDS")
    if entity.page_type == HeroPageType.SECONDARY and not entity.title:
        # A title in any language will do.
        translated = any((values.get("title") or "") for values in translations.values())
        if not translated and not entity._state.adding:
            translated = entity.translations.exclude(title="").exists()
        if not translated:
            raise PayloadValidationError("SECONDARY hero pages need a title", code="MISSING_FIELDS")


HERO_PAGE = EntityType(
    name="hero_page",
    plural="hero-pages",
    model=HeroPage,
    translation_model=HeroPageTranslation,
    parent_field="hero_page",
    localizable=LocalizableFields(text=("title", "subtitle"), structured=("slides",)),
    required_fields=("page_name",),
    editable_fields=("page_name", "page_type", "image_url", "order"),
    json_fields=("slides",),
    filters=("page_type",),
    lookup_field="page_name",
    ordering=("page_type", "order", "page_name"),
    search_fields=("title",),
    validate=_validate_hero_page,
)

PARTNER_LOGO = EntityType(
    name="partner_logo",
    plural="partner-logos",
    model=PartnerLogo,
    translation_model=PartnerLogoTranslation,
    parent_field="partner_logo",
    localizable=LocalizableFields(text=("company_name",)),
    required_fields=("company_name", "logo_url"),
    editable_fields=("logo_url", "website_url", "order"),
    ordering=("order", "-created_at"),
    search_fields=("company_name",),
)


ENTITY_TYPES: Dict[str, EntityType] = {
    entity.name: entity
    for entity in (PROGRAM, BLOG, TESTIMONIAL, FAQ_ENTITY, VIDEO, HERO_PAGE, PARTNER_LOGO)
}


def get_entity_type(name: str) -> EntityType:
    return ENTITY_TYPES[name]
