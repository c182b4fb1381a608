from django.db import migrations, models

import roadmap_ai.ai_core.models


class Migration(migrations.Migration):

    initial = True

    dependencies = []

    operations = [
        migrations.CreateModel(
            name="RoadmapDocument",
            fields=[
                (
                    "roadmap_id",
                    models.CharField(
                        default=roadmap_ai.ai_core.models.generate_roadmap_id,
                        editable=False,
                        max_length=50,
                        primary_key=True,
                        serialize=False,
                    ),
                ),
                ("owner_uid", models.CharField(help_text="Firebase uid of the owner", max_length=128)),
                ("title", models.CharField(max_length=255)),
                ("description", models.TextField(blank=True, default="")),
                ("nodes", models.JSONField(default=roadmap_ai.ai_core.models.empty_list, help_text="Ordered steps")),
                ("edges", models.JSONField(default=roadmap_ai.ai_core.models.empty_list, help_text="Ordered links")),
                ("estimated_total_duration", models.CharField(blank=True, default="", max_length=255)),
                ("difficulty", models.CharField(default="beginner", max_length=50)),
                ("category", models.CharField(default="general", max_length=100)),
                ("is_public", models.BooleanField(default=False)),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
            ],
            options={
                "db_table": "roadmap_document",
                "ordering": ["-updated_at"],
                "indexes": [models.Index(fields=["owner_uid", "-updated_at"], name="roadmap_owner_updated_idx")],
            },
        ),
        migrations.CreateModel(
            name="UserProfile",
            fields=[
                ("uid", models.CharField(max_length=128, primary_key=True, serialize=False)),
                ("email", models.EmailField(blank=True, default="", max_length=255)),
                ("display_name", models.CharField(blank=True, default="", max_length=255)),
                ("photo_url", models.URLField(blank=True, default="", max_length=500)),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
            ],
            options={
                "db_table": "user_profile",
            },
        ),
    ]
