from django.core.management.base import BaseCommand
from django.db import transaction

from catalog.defaults import DEFAULT_LOCATIONS, DEFAULT_TOUR_TYPES
from catalog.models import Location, TourType


class Command(BaseCommand):
    help = "Load the built-in tour types and locations into the database."

    def add_arguments(self, parser):
        parser.add_argument(
            "--overwrite",
            action="store_true",
            help="Replace fields of records that already exist instead of leaving them untouched.",
        )

    def handle(self, *args, **options):
        overwrite = options["overwrite"]
        with transaction.atomic():
            self.stdout.write(self.style.MIGRATE_HEADING("Seeding tour types"))
            for record in DEFAULT_TOUR_TYPES:
                self._upsert(TourType, record, overwrite)

            self.stdout.write(self.style.MIGRATE_HEADING("Seeding locations"))
            for record in DEFAULT_LOCATIONS:
                self._upsert(Location, record, overwrite)

        self.stdout.write(self.style.SUCCESS("Catalog seeded."))

    def _upsert(self, model, record, overwrite):
        defaults = {key: value for key, value in record.items() if key != "id"}
        if overwrite:
            _, created = model.objects.update_or_create(id=record["id"], defaults=defaults)
        else:
            _, created = model.objects.get_or_create(id=record["id"], defaults=defaults)
        action = "created" if created else ("updated" if overwrite else "kept")
        self.stdout.write(f"  {model.__name__} {record['id']}: {action}")
