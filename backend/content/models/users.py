import uuid

from django.db import models
from django.utils import timezone


class UserRole:
    USER = "user"
    EDITOR = "editor"
    ADMIN = "admin"

    ADMIN_ROLES = (ADMIN,)
    EDITOR_ROLES = (EDITOR, ADMIN)
    ALL_ROLES = (USER, EDITOR, ADMIN)


class User(models.Model):
    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    email = models.EmailField(unique=True)
    username = models.CharField(max_length=150, blank=True, default="")
    display_name = models.CharField(max_length=150, blank=True, default="")
    role = models.CharField(max_length=16, default=UserRole.USER)
    is_active = models.BooleanField(default=True)
    created_at = models.DateTimeField(default=timezone.now)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = "users"

    def __str__(self) -> str:
        return self.display_name or self.username or self.email
