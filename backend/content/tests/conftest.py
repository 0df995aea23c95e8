import uuid

import pytest
from django.apps import apps

from content.models import City, ContentStatus, Country, Program, ProgramTranslation, User, UserRole
from content.services.cache import QueryCache


@pytest.fixture(autouse=True)
def query_cache(monkeypatch):
    """A fresh query cache per test, installed where views look it up."""
    cache = QueryCache()
    monkeypatch.setattr(apps.get_app_config("content"), "query_cache", cache, raising=False)
    return cache


def _user(role):
    return User.objects.create(
        email=f"{role}-{uuid.uuid4().hex[:8]}@edgoing.test",
        username=role,
        role=role,
    )


@pytest.fixture
def editor(db):
    return _user(UserRole.EDITOR)


@pytest.fixture
def admin_user(db):
    return _user(UserRole.ADMIN)


@pytest.fixture
def plain_user(db):
    return _user(UserRole.USER)


@pytest.fixture
def beijing(db):
    china = Country.objects.create(name="中国", name_en="China", code="CN")
    return City.objects.create(country=china, name="北京", name_en="Beijing")


@pytest.fixture
def program(db, beijing):
    """Published program with an English translation."""
    program = Program.objects.create(
        title="北京项目",
        slug="beijing-program",
        description="北京游学",
        highlights='["寺庙","长城"]',
        type='["文化"]',
        featured_image="https://cdn.edgoing.test/beijing.jpg",
        city=beijing,
        status=ContentStatus.PUBLISHED,
    )
    ProgramTranslation.objects.create(
        program=program,
        language="en",
        title="Beijing Program",
        description="Study tour in Beijing",
        highlights='["Temples","Great Wall"]',
    )
    return program


def auth_headers(user):
    return {"HTTP_X_USER_ID": str(user.id)}
