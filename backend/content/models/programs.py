from django.db import models

from .base import LocalizedContent, TranslationBase


class Program(LocalizedContent):
    title = models.TextField()
    slug = models.SlugField(max_length=200, unique=True)
    description = models.TextField(default="", blank=True)
    duration = models.TextField(default="", blank=True)
    # JSON-encoded arrays
    highlights = models.TextField(null=True, blank=True)
    academics = models.TextField(null=True, blank=True)
    itinerary = models.TextField(null=True, blank=True)
    requirements = models.TextField(null=True, blank=True)
    sessions = models.TextField(null=True, blank=True)
    gallery = models.TextField(null=True, blank=True)
    type = models.TextField(null=True, blank=True)
    grade_level = models.TextField(null=True, blank=True)

    city = models.ForeignKey(
        "content.City",
        null=True,
        blank=True,
        on_delete=models.SET_NULL,
        related_name="programs",
    )
    deadline = models.DateTimeField(null=True, blank=True)
    featured_image = models.TextField(null=True, blank=True)
    is_featured = models.BooleanField(default=False)
    showcase_order = models.IntegerField(default=0)
    published_at = models.DateTimeField(null=True, blank=True)

    class Meta:
        db_table = "programs"

    def __str__(self) -> str:
        return self.title


class ProgramTranslation(TranslationBase):
    program = models.ForeignKey(
        Program,
        on_delete=models.CASCADE,
        related_name="translations",
    )
    title = models.TextField(default="", blank=True)
    description = models.TextField(null=True, blank=True)
    duration = models.TextField(null=True, blank=True)
    highlights = models.TextField(null=True, blank=True)
    academics = models.TextField(null=True, blank=True)
    itinerary = models.TextField(null=True, blank=True)
    requirements = models.TextField(null=True, blank=True)
    sessions = models.TextField(null=True, blank=True)

    class Meta:
        db_table = "program_translations"
        unique_together = [["program", "language"]]

    def __str__(self) -> str:
        return f"{self.program_id}:{self.language}"
