from django.db import models

from .base import LocalizedContent, TranslationBase


class FAQ(LocalizedContent):
    question = models.TextField()
    answer = models.TextField(default="", blank=True)
    order = models.IntegerField(default=0)

    class Meta:
        db_table = "faqs"
        verbose_name = "FAQ"

    def __str__(self) -> str:
        return self.question


class FAQTranslation(TranslationBase):
    faq = models.ForeignKey(FAQ, on_delete=models.CASCADE, related_name="translations")
    question = models.TextField(default="", blank=True)
    answer = models.TextField(null=True, blank=True)

    class Meta:
        db_table = "faq_translations"
        unique_together = [["faq", "language"]]

    def __str__(self) -> str:
        return f"{self.faq_id}:{self.language}"
