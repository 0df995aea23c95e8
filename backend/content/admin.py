from django.contrib import admin

from .models import (
    FAQ,
    Blog,
    BlogTranslation,
    City,
    ContactSubmission,
    Country,
    FAQTranslation,
    GradeLevel,
    HeroPage,
    HeroPageTranslation,
    NewsletterSubscription,
    PartnerLogo,
    PartnerLogoTranslation,
    Program,
    ProgramApplication,
    ProgramTranslation,
    ProgramType,
    Testimonial,
    TestimonialTranslation,
    User,
    Video,
    VideoTranslation,
)
from .services.cache import get_query_cache, invalidate_on_content_change, invalidate_on_lookup_change


class ContentInvalidationMixin:
    """Edits made through the Django admin invalidate the query cache too."""

    cache_bucket = None

    def _invalidate(self, obj):
        if self.cache_bucket is None:
            invalidate_on_lookup_change(get_query_cache())
        else:
            invalidate_on_content_change(get_query_cache(), self.cache_bucket, str(obj.pk))

    def save_model(self, request, obj, form, change):
        super().save_model(request, obj, form, change)
        self._invalidate(obj)

    def save_related(self, request, form, formsets, change):
        super().save_related(request, form, formsets, change)
        self._invalidate(form.instance)

    def delete_model(self, request, obj):
        super().delete_model(request, obj)
        self._invalidate(obj)


@admin.register(User)
class UserAdmin(admin.ModelAdmin):
    list_display = ("id", "display_name", "email", "role", "is_active", "created_at")
    list_filter = ("role", "is_active")
    search_fields = ("display_name", "email", "username")
    readonly_fields = ("id", "created_at", "updated_at")


class ProgramTranslationInline(admin.StackedInline):
    model = ProgramTranslation
    extra = 0


@admin.register(Program)
class ProgramAdmin(ContentInvalidationMixin, admin.ModelAdmin):
    cache_bucket = "program"
    list_display = ("id", "title", "slug", "status", "city", "is_featured", "created_at")
    list_filter = ("status", "is_featured")
    search_fields = ("title", "slug")
    readonly_fields = ("id", "created_at", "updated_at")
    raw_id_fields = ("city", "created_by")
    inlines = [ProgramTranslationInline]


class BlogTranslationInline(admin.StackedInline):
    model = BlogTranslation
    extra = 0


@admin.register(Blog)
class BlogAdmin(ContentInvalidationMixin, admin.ModelAdmin):
    cache_bucket = "blog"
    list_display = ("id", "title", "slug", "status", "published_at")
    list_filter = ("status",)
    search_fields = ("title", "slug", "author")
    readonly_fields = ("id", "created_at", "updated_at")
    date_hierarchy = "created_at"
    inlines = [BlogTranslationInline]


class TestimonialTranslationInline(admin.TabularInline):
    model = TestimonialTranslation
    extra = 0


@admin.register(Testimonial)
class TestimonialAdmin(ContentInvalidationMixin, admin.ModelAdmin):
    cache_bucket = "testimonial"
    list_display = ("id", "author", "program", "status", "order")
    list_filter = ("status",)
    search_fields = ("author", "content")
    inlines = [TestimonialTranslationInline]


class FAQTranslationInline(admin.TabularInline):
    model = FAQTranslation
    extra = 0


@admin.register(FAQ)
class FAQAdmin(ContentInvalidationMixin, admin.ModelAdmin):
    cache_bucket = "faq"
    list_display = ("id", "question", "status", "order")
    list_filter = ("status",)
    search_fields = ("question", "answer")
    inlines = [FAQTranslationInline]


class VideoTranslationInline(admin.TabularInline):
    model = VideoTranslation
    extra = 0


@admin.register(Video)
class VideoAdmin(ContentInvalidationMixin, admin.ModelAdmin):
    cache_bucket = "video"
    list_display = ("id", "title", "slug", "category", "status", "order")
    list_filter = ("status",)
    search_fields = ("title", "slug")
    inlines = [VideoTranslationInline]


class HeroPageTranslationInline(admin.TabularInline):
    model = HeroPageTranslation
    extra = 0


@admin.register(HeroPage)
class HeroPageAdmin(ContentInvalidationMixin, admin.ModelAdmin):
    cache_bucket = "hero_page"
    list_display = ("id", "page_name", "page_type", "title", "status", "order")
    list_filter = ("status", "page_type")
    search_fields = ("page_name", "title")
    inlines = [HeroPageTranslationInline]


class PartnerLogoTranslationInline(admin.TabularInline):
    model = PartnerLogoTranslation
    extra = 0


@admin.register(PartnerLogo)
class PartnerLogoAdmin(ContentInvalidationMixin, admin.ModelAdmin):
    cache_bucket = "partner_logo"
    list_display = ("id", "company_name", "status", "order")
    list_filter = ("status",)
    search_fields = ("company_name",)
    inlines = [PartnerLogoTranslationInline]


@admin.register(Country, GradeLevel, ProgramType)
class LookupAdmin(ContentInvalidationMixin, admin.ModelAdmin):
    list_display = ("id", "name", "name_en", "is_active", "order")
    list_filter = ("is_active",)
    search_fields = ("name", "name_en")


@admin.register(City)
class CityAdmin(ContentInvalidationMixin, admin.ModelAdmin):
    list_display = ("id", "name", "name_en", "country", "is_active", "order")
    list_filter = ("is_active", "country")
    search_fields = ("name", "name_en")


@admin.register(ContactSubmission)
class ContactSubmissionAdmin(admin.ModelAdmin):
    list_display = ("id", "name", "email", "language", "created_at")
    search_fields = ("name", "email")
    readonly_fields = ("created_at",)


@admin.register(ProgramApplication)
class ProgramApplicationAdmin(admin.ModelAdmin):
    list_display = ("id", "program", "student_name", "email", "grade", "created_at")
    search_fields = ("student_name", "email")
    raw_id_fields = ("program",)


@admin.register(NewsletterSubscription)
class NewsletterSubscriptionAdmin(admin.ModelAdmin):
    list_display = ("id", "email", "name", "language", "is_active", "subscribed_at")
    list_filter = ("is_active", "language")
    search_fields = ("email", "name")
