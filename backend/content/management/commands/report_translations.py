"""
Management command to report translation coverage.

Lists, per entity type and alternate language, the entities with no
translation row, and flags (entity, language) pairs with more than one row.

Usage:
    python manage.py report_translations
    python manage.py report_translations --entity program --language en --verbose
"""

from django.core.management.base import BaseCommand, CommandError
from django.db.models import Count

from content.registry import ENTITY_TYPES
from content.services.localization import get_alternate_languages


class Command(BaseCommand):
    help = 'Report missing and duplicated translation rows'

    def add_arguments(self, parser):
        parser.add_argument(
            '--entity',
            choices=sorted(ENTITY_TYPES),
            help='Only report this entity type',
        )
        parser.add_argument(
            '--language',
            help='Only report this alternate language (default: all configured)',
        )
        parser.add_argument(
            '--status',
            help='Only consider entities in this status, e.g. PUBLISHED',
        )
        parser.add_argument(
            '--verbose',
            action='store_true',
            help='List the ids of entities missing a translation',
        )

    def handle(self, *args, **options):
        languages = get_alternate_languages()
        if options['language']:
            if options['language'] not in languages:
                raise CommandError(
                    f"Unsupported language '{options['language']}' (configured: {', '.join(languages)})"
                )
            languages = (options['language'],)

        entity_types = (
            [ENTITY_TYPES[options['entity']]] if options['entity'] else list(ENTITY_TYPES.values())
        )

        total_missing = 0
        total_duplicates = 0
        for entity_type in entity_types:
            entities = entity_type.model.objects.all()
            if options['status']:
                entities = entities.filter(status=options['status'])
            total = entities.count()

            for language in languages:
                missing = entities.exclude(translations__language=language)
                missing_count = missing.count()
                total_missing += missing_count
                style = self.style.WARNING if missing_count else self.style.SUCCESS
                self.stdout.write(
                    style(
                        f'{entity_type.plural} [{language}]: '
                        f'{total - missing_count}/{total} translated, {missing_count} missing'
                    )
                )
                if options['verbose']:
                    for entity_id in missing.values_list('pk', flat=True):
                        self.stdout.write(f'  missing: {entity_id}')

            duplicates = (
                entity_type.translation_model.objects.values(entity_type.parent_field, 'language')
                .annotate(rows=Count('id'))
                .filter(rows__gt=1)
            )
            for row in duplicates:
                total_duplicates += 1
                self.stdout.write(
                    self.style.ERROR(
                        f"{entity_type.plural}: {row['rows']} '{row['language']}' rows "
                        f"for {row[entity_type.parent_field]}"
                    )
                )

        summary = f'{total_missing} missing translations, {total_duplicates} duplicated'
        if total_duplicates:
            self.stdout.write(self.style.ERROR(summary))
        else:
            self.stdout.write(self.style.SUCCESS(summary))
