from django.db import models
import uuid


def generate_roadmap_id():
    return f"rm_{uuid.uuid4().hex[:12]}"


def empty_list():
    return []


class RoadmapDocument(models.Model):
    """User-owned roadmap document."""

    roadmap_id = models.CharField(
        max_length=50,
        primary_key=True,
        default=generate_roadmap_id,
        editable=False
    )
    owner_uid = models.CharField(max_length=128, help_text="Firebase uid of the owner")
    title = models.CharField(max_length=255)
    description = models.TextField(blank=True, default="")
    nodes = models.JSONField(default=empty_list, help_text="Ordered steps")
    edges = models.JSONField(default=empty_list, help_text="Ordered links")
    estimated_total_duration = models.CharField(max_length=255, blank=True, default="")
    difficulty = models.CharField(max_length=50, default="beginner")
    category = models.CharField(max_length=100, default="general")
    is_public = models.BooleanField(default=False)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = "roadmap_document"
        ordering = ["-updated_at"]
        indexes = [
            models.Index(fields=["owner_uid", "-updated_at"], name="roadmap_owner_updated_idx"),
        ]

    def __str__(self):
        return f"{self.title} ({self.roadmap_id})"


class UserProfile(models.Model):
    """Profile mirrored from the identity provider at login."""

    uid = models.CharField(max_length=128, primary_key=True)
    email = models.EmailField(max_length=255, blank=True, default="")
    display_name = models.CharField(max_length=255, blank=True, default="")
    photo_url = models.URLField(max_length=500, blank=True, default="")
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = "user_profile"

    def __str__(self):
        return f"{self.email or self.uid}"
