from django.db import models

from .base import LocalizedContent, TranslationBase


class Testimonial(LocalizedContent):
    content = models.TextField()
    author = models.TextField()
    role = models.TextField(default="", blank=True)
    program = models.TextField(default="", blank=True)
    image_url = models.TextField(null=True, blank=True)
    order = models.IntegerField(default=0)

    class Meta:
        db_table = "testimonials"

    def __str__(self) -> str:
        return self.author


class TestimonialTranslation(TranslationBase):
    testimonial = models.ForeignKey(
        Testimonial, on_delete=models.CASCADE, related_name="translations"
    )
    content = models.TextField(default="", blank=True)
    author = models.TextField(null=True, blank=True)
    role = models.TextField(null=True, blank=True)
    program = models.TextField(null=True, blank=True)

    class Meta:
        db_table = "testimonial_translations"
        unique_together = [["testimonial", "language"]]

    def __str__(self) -> str:
        return f"{self.testimonial_id}:{self.language}"
