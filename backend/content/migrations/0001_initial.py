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
    ]


def _created_by():
    return models.ForeignKey(
        blank=True,
        null=True,
        on_delete=django.db.models.deletion.SET_NULL,
        related_name="+",
        to="content.user",
    )


def _translation_fields():
    return [
        ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
        ("language", models.CharField(max_length=10)),
        ("created_at", models.DateTimeField(auto_now_add=True)),
        ("updated_at", models.DateTimeField(auto_now=True)),
    ]


def _lookup_fields():
    return [
        ("id", models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
        ("name_en", models.CharField(blank=True, max_length=100, null=True)),
        ("is_active", models.BooleanField(default=True)),
        ("order", models.IntegerField(default=0)),
        ("created_at", models.DateTimeField(auto_now_add=True)),
        ("updated_at", models.DateTimeField(auto_now=True)),
    ]


class Migration(migrations.Migration):

    initial = True

    dependencies = []

    operations = [
        migrations.CreateModel(
            name="User",
            fields=[
                ("id", models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ("email", models.EmailField(max_length=254, unique=True)),
                ("username", models.CharField(blank=True, default="", max_length=150)),
                ("display_name", models.CharField(blank=True, default="", max_length=150)),
                ("role", models.CharField(default="user", max_length=16)),
                ("is_active", models.BooleanField(default=True)),
                ("created_at", models.DateTimeField(default=django.utils.timezone.now)),
                ("updated_at", models.DateTimeField(auto_now=True)),
            ],
            options={"db_table": "users"},
        ),
        migrations.CreateModel(
            name="Country",
            fields=_lookup_fields()
            + [
                ("name", models.CharField(max_length=100, unique=True)),
                ("code", models.CharField(blank=True, max_length=8, null=True)),
            ],
            options={
                "db_table": "countries",
                "verbose_name_plural": "countries",
                "ordering": ("order", "name"),
                "abstract": False,
            },
        ),
        migrations.CreateModel(
            name="City",
            fields=_lookup_fields()
            + [
                ("name", models.CharField(max_length=100)),
                (
                    "country",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.PROTECT,
                        related_name="cities",
                        to="content.country",
                    ),
                ),
            ],
            options={
                "db_table": "cities",
                "verbose_name_plural": "cities",
                "ordering": ("order", "name"),
                "abstract": False,
                "unique_together": {("country", "name")},
            },
        ),
        migrations.CreateModel(
            name="GradeLevel",
            fields=_lookup_fields() + [("name", models.CharField(max_length=100, unique=True))],
            options={"db_table": "grade_levels", "ordering": ("order", "name"), "abstract": False},
        ),
        migrations.CreateModel(
            name="ProgramType",
            fields=_lookup_fields() + [("name", models.CharField(max_length=100, unique=True))],
            options={"db_table": "program_types", "ordering": ("order", "name"), "abstract": False},
        ),
        migrations.CreateModel(
            name="Program",
            fields=_content_fields()
            + [
                ("title", models.TextField()),
                ("slug", models.SlugField(max_length=200, unique=True)),
                ("description", models.TextField(blank=True, default="")),
                ("duration", models.TextField(blank=True, default="")),
                ("highlights", models.TextField(blank=True, null=True)),
                ("academics", models.TextField(blank=True, null=True)),
                ("itinerary", models.TextField(blank=True, null=True)),
                ("requirements", models.TextField(blank=True, null=True)),
                ("sessions", models.TextField(blank=True, null=True)),
                ("gallery", models.TextField(blank=True, null=True)),
                ("type", models.TextField(blank=True, null=True)),
                ("grade_level", models.TextField(blank=True, null=True)),
                ("deadline", models.DateTimeField(blank=True, null=True)),
                ("featured_image", models.TextField(blank=True, null=True)),
                ("is_featured", models.BooleanField(default=False)),
                ("showcase_order", models.IntegerField(default=0)),
                ("published_at", models.DateTimeField(blank=True, null=True)),
                (
                    "city",
                    models.ForeignKey(
                        blank=True,
                        null=True,
                        on_delete=django.db.models.deletion.SET_NULL,
                        related_name="programs",
                        to="content.city",
                    ),
                ),
                ("created_by", _created_by()),
            ],
            options={"db_table": "programs"},
        ),
        migrations.CreateModel(
            name="ProgramTranslation",
            fields=_translation_fields()
            + [
                ("title", models.TextField(blank=True, default="")),
                ("description", models.TextField(blank=True, null=True)),
                ("duration", models.TextField(blank=True, null=True)),
                ("highlights", models.TextField(blank=True, null=True)),
                ("academics", models.TextField(blank=True, null=True)),
                ("itinerary", models.TextField(blank=True, null=True)),
                ("requirements", models.TextField(blank=True, null=True)),
                ("sessions", models.TextField(blank=True, null=True)),
                (
                    "program",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="translations",
                        to="content.program",
                    ),
                ),
            ],
            options={
                "db_table": "program_translations",
                "unique_together": {("program", "language")},
            },
        ),
        migrations.CreateModel(
            name="Blog",
            fields=_content_fields()
            + [
                ("title", models.TextField()),
                ("slug", models.SlugField(max_length=200, unique=True)),
                ("content", models.TextField(blank=True, default="")),
                ("author", models.TextField(blank=True, default="")),
                ("program", models.TextField(blank=True, default="")),
                ("grade", models.TextField(blank=True, default="")),
                ("image_url", models.TextField(blank=True, null=True)),
                ("order", models.IntegerField(default=0)),
                ("published_at", models.DateTimeField(blank=True, null=True)),
                ("created_by", _created_by()),
            ],
            options={"db_table": "blogs"},
        ),
        migrations.CreateModel(
            name="BlogTranslation",
            fields=_translation_fields()
            + [
                ("title", models.TextField(blank=True, default="")),
                ("content", models.TextField(blank=True, null=True)),
                ("author", models.TextField(blank=True, null=True)),
                ("program", models.TextField(blank=True, null=True)),
                ("grade", models.TextField(blank=True, null=True)),
                (
                    "blog",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="translations",
                        to="content.blog",
                    ),
                ),
            ],
            options={
                "db_table": "blog_translations",
                "unique_together": {("blog", "language")},
            },
        ),
        migrations.CreateModel(
            name="Testimonial",
            fields=_content_fields()
            + [
                ("content", models.TextField()),
                ("author", models.TextField()),
                ("role", models.TextField(blank=True, default="")),
                ("program", models.TextField(blank=True, default="")),
                ("image_url", models.TextField(blank=True, null=True)),
                ("order", models.IntegerField(default=0)),
                ("created_by", _created_by()),
            ],
            options={"db_table": "testimonials"},
        ),
        migrations.CreateModel(
            name="TestimonialTranslation",
            fields=_translation_fields()
            + [
                ("content", models.TextField(blank=True, default="")),
                ("author", models.TextField(blank=True, null=True)),
                ("role", models.TextField(blank=True, null=True)),
                ("program", models.TextField(blank=True, null=True)),
                (
                    "testimonial",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="translations",
                        to="content.testimonial",
                    ),
                ),
            ],
            options={
                "db_table": "testimonial_translations",
                "unique_together": {("testimonial", "language")},
            },
        ),
        migrations.CreateModel(
            name="FAQ",
            fields=_content_fields()
            + [
                ("question", models.TextField()),
                ("answer", models.TextField(blank=True, default="")),
                ("order", models.IntegerField(default=0)),
                ("created_by", _created_by()),
            ],
            options={"db_table": "faqs", "verbose_name": "FAQ"},
        ),
        migrations.CreateModel(
            name="FAQTranslation",
            fields=_translation_fields()
            + [
                ("question", models.TextField(blank=True, default="")),
                ("answer", models.TextField(blank=True, null=True)),
                (
                    "faq",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="translations",
                        to="content.faq",
                    ),
                ),
            ],
            options={
                "db_table": "faq_translations",
                "unique_together": {("faq", "language")},
            },
        ),
        migrations.CreateModel(
            name="Video",
            fields=_content_fields()
            + [
                ("title", models.TextField()),
                ("slug", models.SlugField(max_length=200, unique=True)),
                ("description", models.TextField(blank=True, default="")),
                ("category", models.TextField(blank=True, default="")),
                ("thumbnail_url", models.TextField(blank=True, null=True)),
                ("video_url", models.TextField(blank=True, null=True)),
                ("order", models.IntegerField(default=0)),
                ("created_by", _created_by()),
            ],
            options={"db_table": "videos"},
        ),
        migrations.CreateModel(
            name="VideoTranslation",
            fields=_translation_fields()
            + [
                ("title", models.TextField(blank=True, default="")),
                ("description", models.TextField(blank=True, null=True)),
                ("category", models.TextField(blank=True, null=True)),
                (
                    "video",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="translations",
                        to="content.video",
                    ),
                ),
            ],
            options={
                "db_table": "video_translations",
                "unique_together": {("video", "language")},
            },
        ),
        migrations.CreateModel(
            name="ContactSubmission",
            fields=[
                ("id", models.BigAutoField(primary_key=True, serialize=False)),
                ("name", models.TextField()),
                ("email", models.EmailField(max_length=254)),
                ("phone", models.TextField(blank=True, default="")),
                ("message", models.TextField()),
                ("language", models.CharField(blank=True, default="", max_length=10)),
                ("created_at", models.DateTimeField(default=django.utils.timezone.now)),
            ],
            options={"db_table": "contact_submissions"},
        ),
        migrations.CreateModel(
            name="ProgramApplication",
            fields=[
                ("id", models.BigAutoField(primary_key=True, serialize=False)),
                ("student_name", models.TextField()),
                ("email", models.EmailField(max_length=254)),
                ("phone", models.TextField(blank=True, default="")),
                ("grade", models.TextField(blank=True, default="")),
                ("message", models.TextField(blank=True, default="")),
                ("created_at", models.DateTimeField(default=django.utils.timezone.now)),
                (
                    "program",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="applications",
                        to="content.program",
                    ),
                ),
            ],
            options={"db_table": "program_applications"},
        ),
    ]
