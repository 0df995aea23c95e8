from django.db import models

from .base import LocalizedContent, TranslationBase


class Video(LocalizedContent):
    title = models.TextField()
    slug = models.SlugField(max_length=200, unique=True)
    description = models.TextField(default="", blank=True)
    category = models.TextField(default="", blank=True)
    thumbnail_url = models.TextField(null=True, blank=True)
    video_url = models.TextField(null=True, blank=True)
    order = models.IntegerField(default=0)

    class Meta:
        db_table = "videos"

    def __str__(self) -> str:
        return self.title


class VideoTranslation(TranslationBase):
    video = models.ForeignKey(Video, on_delete=models.CASCADE, related_name="translations")
    title = models.TextField(default="", blank=True)
    description = models.TextField(null=True, blank=True)
    category = models.TextField(null=True, blank=True)

    class Meta:
        db_table = "video_translations"
        unique_together = [["video", "language"]]

    def __str__(self) -> str:
        return f"{self.video_id}:{self.language}"
