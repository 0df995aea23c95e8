from django.db import models
from django.utils import timezone


class ContactSubmission(models.Model):
    id = models.BigAutoField(primary_key=True)
    name = models.TextField()
    email = models.EmailField()
    phone = models.TextField(default="", blank=True)
    message = models.TextField()
    language = models.CharField(max_length=10, default="", blank=True)
    created_at = models.DateTimeField(default=timezone.now)

    class Meta:
        db_table = "contact_submissions"

    def __str__(self) -> str:
        return f"{self.name} <{self.email}>"


class ProgramApplication(models.Model):
    id = models.BigAutoField(primary_key=True)
    program = models.ForeignKey(
        "content.Program",
        on_delete=models.CASCADE,
        related_name="applications",
    )
    student_name = models.TextField()
    email = models.EmailField()
    phone = models.TextField(default="", blank=True)
    grade = models.TextField(default="", blank=True)
    message = models.TextField(default="", blank=True)
    created_at = models.DateTimeField(default=timezone.now)

    class Meta:
        db_table = "program_applications"

    def __str__(self) -> str:
        return f"{self.program_id}:{self.student_name}"


class NewsletterSubscription(models.Model):
    id = models.BigAutoField(primary_key=True)
    email = models.EmailField(unique=True)
    name = models.TextField(default="", blank=True)
    language = models.CharField(max_length=10, default="", blank=True)
    is_active = models.BooleanField(default=True)
    subscribed_at = models.DateTimeField(default=timezone.now)
    unsubscribed_at = models.DateTimeField(null=True, blank=True)

    class Meta:
        db_table = "newsletter_subscriptions"

    def __str__(self) -> str:
        return self.email
