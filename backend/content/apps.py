from django.apps import AppConfig


class ContentConfig(AppConfig):
    name = "content"
    verbose_name = "EdGoing content"
    default_auto_field = "django.db.models.BigAutoField"

    def ready(self):
        from .services.cache import QueryCache

        # One query cache per process; views reach it through get_query_cache().
        self.query_cache = QueryCache.from_settings()
