from django.db import models

from .base import LocalizedContent, TranslationBase


class Blog(LocalizedContent):
    title = models.TextField()
    slug = models.SlugField(max_length=200, unique=True)
    content = models.TextField(default="", blank=True)
    author = models.TextField(default="", blank=True)
    program = models.TextField(default="", blank=True)
    grade = models.TextField(default="", blank=True)
    image_url = models.TextField(null=True, blank=True)
    order = models.IntegerField(default=0)
    published_at = models.DateTimeField(null=True, blank=True)

    class Meta:
        db_table = "blogs"

    def __str__(self) -> str:
        return self.title


class BlogTranslation(TranslationBase):
    blog = models.ForeignKey(Blog, on_delete=models.CASCADE, related_name="translations")
    title = models.TextField(default="", blank=True)
    content = models.TextField(null=True, blank=True)
    author = models.TextField(null=True, blank=True)
    program = models.TextField(null=True, blank=True)
    grade = models.TextField(null=True, blank=True)

    class Meta:
        db_table = "blog_translations"
        unique_together = [["blog", "language"]]

    def __str__(self) -> str:
        return f"{self.blog_id}:{self.language}"
