import django.db.models.deletion
from django.db import migrations
from django.db import models


class Migration(migrations.Migration):
    initial = True

    dependencies = []

    operations = [
        migrations.CreateModel(
            name="Neighborhood",
            fields=[
                (
                    "id",
                    models.BigAutoField(
                        auto_created=True,
                        primary_key=True,
                        serialize=False,
                        verbose_name="ID",
                    ),
                ),
                ("name", models.CharField(max_length=100, verbose_name="Name")),
                (
                    "description",
                    models.TextField(
                        blank=True,
                        max_length=1000,
                        verbose_name="Description",
                    ),
                ),
                ("boundaries", models.JSONField(blank=True, default=list)),
                ("require_verification", models.BooleanField(default=True)),
                ("allow_business_listings", models.BooleanField(default=True)),
                ("moderate_all_posts", models.BooleanField(default=False)),
                ("max_posts_per_day", models.PositiveIntegerField(default=10)),
                ("total_members", models.PositiveIntegerField(default=0)),
                ("total_posts", models.PositiveIntegerField(default=0)),
                ("total_listings", models.PositiveIntegerField(default=0)),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
            ],
            options={
                "ordering": ["name"],
            },
        ),
        migrations.CreateModel(
            name="NeighborhoodZipCode",
            fields=[
                (
                    "id",
                    models.BigAutoField(
                        auto_created=True,
                        primary_key=True,
                        serialize=False,
                        verbose_name="ID",
                    ),
                ),
                (
                    "code",
                    models.CharField(
                        max_length=10,
                        unique=True,
                        verbose_name="Zip code",
                    ),
                ),
                (
                    "neighborhood",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="zip_codes",
                        to="neighborhoods.neighborhood",
                    ),
                ),
            ],
            options={
                "ordering": ["code"],
            },
        ),
    ]
