import django.core.validators
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = []

    operations = [
        migrations.CreateModel(
            name="Booking",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("date", models.DateField()),
                ("time", models.TimeField()),
                (
                    "party_size",
                    models.PositiveIntegerField(
                        default=2,
                        validators=[
                            django.core.validators.MinValueValidator(1),
                            django.core.validators.MaxValueValidator(20),
                        ],
                    ),
                ),
                (
                    "duration",
                    models.CharField(
                        choices=[("full", "Full day"), ("half", "Half day")],
                        default="full",
                        max_length=8,
                    ),
                ),
                ("tour_type", models.CharField(max_length=64)),
                ("location_id", models.CharField(max_length=64)),
                ("addons", models.JSONField(blank=True, default=dict)),
                ("price", models.JSONField(blank=True, default=dict)),
                ("contact_name", models.CharField(max_length=200)),
                ("contact_email", models.EmailField(max_length=254)),
                ("notes", models.TextField(blank=True)),
                (
                    "locale",
                    models.CharField(
                        choices=[("th", "Thai"), ("en", "English")],
                        default="en",
                        max_length=2,
                    ),
                ),
                ("created_at", models.DateTimeField(auto_now_add=True)),
            ],
            options={
                "ordering": ["-created_at", "-id"],
            },
        ),
    ]
