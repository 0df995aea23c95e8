from django.urls import path

from .registry import ENTITY_TYPES
from .services.submissions import SUBMISSION_KINDS
from .views import admin, content, health, submissions

urlpatterns = [
    path("api/health/", health.health, name="health"),
    path("api/homepage-showcase/", content.showcase, name="homepage-showcase"),
    path("api/shared-fields/", content.shared_fields, name="shared-fields"),
    path("api/contact/", submissions.contact, name="contact"),
    path("api/programs/<slug:slug>/apply/", submissions.apply, name="program-apply"),
    path(
        "api/newsletter/subscribe/",
        submissions.newsletter_subscribe,
        name="newsletter-subscribe",
    ),

    # Cache admin
    path("api/admin/cache/clear/", admin.admin_clear_cache, name="admin-cache-clear"),
    path("api/admin/cache/stats/", admin.admin_cache_stats, name="admin-cache-stats"),

    # Shared fields admin
    path(
        "api/admin/shared-fields/<str:kind>/",
        admin.admin_lookups,
        name="admin-lookup-list",
    ),
    path(
        "api/admin/shared-fields/<str:kind>/<str:row_id>/",
        admin.admin_lookup_detail,
        name="admin-lookup-detail",
    ),
]

# Form submissions admin
for kind in SUBMISSION_KINDS:
    urlpatterns.append(
        path(f"api/admin/{kind}/", admin.admin_submissions, {"kind": kind}, name=f"admin-{kind}")
    )

# One public and one admin route pair per content entity.
for entity in ENTITY_TYPES.values():
    kwargs = {"entity_type": entity.name}
    urlpatterns += [
        path(f"api/{entity.plural}/", content.list_entities, kwargs, name=f"{entity.name}-list"),
        path(
            f"api/{entity.plural}/<str:ref>/",
            content.get_entity,
            kwargs,
            name=f"{entity.name}-detail",
        ),
        path(
            f"api/admin/{entity.plural}/",
            admin.admin_entities,
            kwargs,
            name=f"admin-{entity.name}-list",
        ),
        path(
            f"api/admin/{entity.plural}/<str:entity_id>/",
            admin.admin_entity_detail,
            kwargs,
            name=f"admin-{entity.name}-detail",
        ),
    ]
