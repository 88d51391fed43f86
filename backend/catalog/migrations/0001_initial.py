import catalog.models
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = []

    operations = [
        migrations.CreateModel(
            name="TourType",
            fields=[
                (
                    "id",
                    models.CharField(
                        default=catalog.models.generate_document_id,
                        max_length=64,
                        primary_key=True,
                        serialize=False,
                    ),
                ),
                ("label_th", models.CharField(blank=True, max_length=200)),
                ("label_en", models.CharField(blank=True, max_length=200)),
                ("description_th", models.TextField(blank=True)),
                ("description_en", models.TextField(blank=True)),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
            ],
            options={
                "ordering": ["label_en", "id"],
            },
        ),
        migrations.CreateModel(
            name="Location",
            fields=[
                (
                    "id",
                    models.CharField(
                        default=catalog.models.generate_document_id,
                        max_length=64,
                        primary_key=True,
                        serialize=False,
                    ),
                ),
                ("name_th", models.CharField(blank=True, max_length=200)),
                ("name_en", models.CharField(blank=True, max_length=200)),
                ("area_th", models.CharField(blank=True, max_length=200)),
                ("area_en", models.CharField(blank=True, max_length=200)),
                ("description_th", models.TextField(blank=True)),
                ("description_en", models.TextField(blank=True)),
                ("image_path", models.CharField(blank=True, max_length=500)),
                ("highlights", models.JSONField(blank=True, default=list)),
                ("tour_type_ids", models.JSONField(blank=True, default=list)),
                ("available_durations", models.JSONField(blank=True, default=list)),
                ("price_per_person", models.JSONField(blank=True, null=True)),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
            ],
            options={
                "ordering": ["name_en", "id"],
            },
        ),
    ]
