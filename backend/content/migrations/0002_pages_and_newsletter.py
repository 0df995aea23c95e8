import uuid

import django.db.models.deletion
import django.utils.timezone
from django.db import migrations, models

import content.models.base


def _content_fields():
    return [
        ("id", models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
        ("status", models.CharField(db_index=True, default="DRAFT", max_length=16)),
        ("language", models.CharField(default=content.models.base.canonical_language, max_length=10)),
        ("created_at", models.DateTimeField(auto_now_add=True)),
        ("updated_at", models.DateTimeField(auto_now=True)),
        (
            "created_by",
            models.ForeignKey(
                blank=True,
                null=True,
                on_delete=django.db.models.deletion.SET_NULL,
                related_name="+",
                to="content.user",
            ),
        ),
    ]


def _translation_fields():
    return [
        ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
        ("language", models.CharField(max_length=10)),
        ("created_at", models.DateTimeField(auto_now_add=True)),
        ("updated_at", models.DateTimeField(auto_now=True)),
    ]


class Migration(migrations.Migration):

    dependencies = [
        ("content", "0001_initial"),
    ]

    operations = [
        migrations.CreateModel(
            name="HeroPage",
            fields=_content_fields()
            + [
                ("page_name", models.SlugField(max_length=100, unique=True)),
                (
                    "page_type",
                    models.CharField(
                        choices=[("PRIMARY", "Primary"), ("SECONDARY", "Secondary")],
                        default="SECONDARY",
                        max_length=16,
                    ),
                ),
                ("title", models.TextField(blank=True, default="")),
                ("subtitle", models.TextField(blank=True, default="")),
                ("slides", models.TextField(blank=True, null=True)),
                ("image_url", models.TextField(blank=True, null=True)),
                ("order", models.IntegerField(default=0)),
            ],
            options={"db_table": "hero_pages"},
        ),
        migrations.CreateModel(
            name="HeroPageTranslation",
            fields=_translation_fields()
            + [
                ("title", models.TextField(blank=True, default="")),
                ("subtitle", models.TextField(blank=True, null=True)),
                ("slides", models.TextField(blank=True, null=True)),
                (
                    "hero_page",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="translations",
                        to="content.heropage",
                    ),
                ),
            ],
            options={
                "db_table": "hero_page_translations",
                "unique_together": {("hero_page", "language")},
            },
        ),
        migrations.CreateModel(
            name="PartnerLogo",
            fields=_content_fields()
            + [
                ("company_name", models.TextField()),
                ("logo_url", models.TextField()),
                ("website_url", models.TextField(blank=True, null=True)),
                ("order", models.IntegerField(default=0)),
            ],
            options={"db_table": "partner_logos"},
        ),
        migrations.CreateModel(
            name="PartnerLogoTranslation",
            fields=_translation_fields()
            + [
                ("company_name", models.TextField(blank=True, default="")),
                (
                    "partner_logo",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="translations",
                        to="content.partnerlogo",
                    ),
                ),
            ],
            options={
                "db_table": "partner_logo_translations",
                "unique_together": {("partner_logo", "language")},
            },
        ),
        migrations.CreateModel(
            name="NewsletterSubscription",
            fields=[
                ("id", models.BigAutoField(primary_key=True, serialize=False)),
                ("email", models.EmailField(max_length=254, unique=True)),
                ("name", models.TextField(blank=True, default="")),
                ("language", models.CharField(blank=True, default="", max_length=10)),
                ("is_active", models.BooleanField(default=True)),
                ("subscribed_at", models.DateTimeField(default=django.utils.timezone.now)),
                ("unsubscribed_at", models.DateTimeField(blank=True, null=True)),
            ],
            options={"db_table": "newsletter_subscriptions"},
        ),
    ]
