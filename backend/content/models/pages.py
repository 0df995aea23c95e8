from django.db import models

from .base import LocalizedContent, TranslationBase


class HeroPageType:
    # PRIMARY pages rotate through slides, SECONDARY pages show one banner.
    PRIMARY = "PRIMARY"
    SECONDARY = "SECONDARY"

    CHOICES = [(PRIMARY, "Primary"), (SECONDARY, "Secondary")]


class HeroPage(LocalizedContent):
    page_name = models.SlugField(max_length=100, unique=True)
    page_type = models.CharField(
        max_length=16, choices=HeroPageType.CHOICES, default=HeroPageType.SECONDARY
    )
    title = models.TextField(default="", blank=True)
    subtitle = models.TextField(default="", blank=True)
    slides = models.TextField(null=True, blank=True)
    image_url = models.TextField(null=True, blank=True)
    order = models.IntegerField(default=0)

    class Meta:
        db_table = "hero_pages"

    def __str__(self) -> str:
        return self.page_name


class HeroPageTranslation(TranslationBase):
    hero_page = models.ForeignKey(HeroPage, on_delete=models.CASCADE, related_name="translations")
    title = models.TextField(default="", blank=True)
    subtitle = models.TextField(null=True, blank=True)
    slides = models.TextField(null=True, blank=True)

    class Meta:
        db_table = "hero_page_translations"
        unique_together = [["hero_page", "language"]]

    def __str__(self) -> str:
        return f"{self.hero_page_id}:{self.language}"


class PartnerLogo(LocalizedContent):
    company_name = models.TextField()
    logo_url = models.TextField()
    website_url = models.TextField(null=True, blank=True)
    order = models.IntegerField(default=0)

    class Meta:
        db_table = "partner_logos"

    def __str__(self) -> str:
        return self.company_name


class PartnerLogoTranslation(TranslationBase):
    partner_logo = models.ForeignKey(
        PartnerLogo, on_delete=models.CASCADE, related_name="translations"
    )
    company_name = models.TextField(default="", blank=True)

    class Meta:
        db_table = "partner_logo_translations"
        unique_together = [["partner_logo", "language"]]

    def __str__(self) -> str:
        return f"{self.partner_logo_id}:{self.language}"
