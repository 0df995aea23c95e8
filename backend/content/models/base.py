import uuid

from django.conf import settings
from django.db import models


class ContentStatus:
    DRAFT = "DRAFT"
    PUBLISHED = "PUBLISHED"
    ARCHIVED = "ARCHIVED"

    ALL = (DRAFT, PUBLISHED, ARCHIVED)


def canonical_language() -> str:
    return settings.CONTENT_CANONICAL_LANGUAGE


class LocalizedContent(models.Model):
    """
    Canonical row of a content entity. Localizable columns on concrete
    subclasses hold canonical-language text; other languages live in the
    subclass's translation model under related_name="translations".
    """

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    status = models.CharField(max_length=16, default=ContentStatus.DRAFT, db_index=True)
    language = models.CharField(max_length=10, default=canonical_language)
    created_by = models.ForeignKey(
        "content.User",
        null=True,
        blank=True,
        on_delete=models.SET_NULL,
        related_name="+",
    )
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        abstract = True


class TranslationBase(models.Model):
    language = models.CharField(max_length=10)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        abstract = True
