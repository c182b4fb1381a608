from __future__ import annotations

import logging

from roadmap_ai.ai_core.domain.auth_context import AuthContext
from roadmap_ai.ai_core.models import UserProfile

logger = logging.getLogger(__name__)


class ProfileService:
    """Keeps UserProfile rows in step with the identity provider."""

    def sync(self, auth: AuthContext) -> UserProfile:
        """
        Create or refresh the caller's profile.
        """
        profile, created = UserProfile.objects.update_or_create(
            uid=auth.uid,
            defaults={
                "email": auth.email,
                "display_name": auth.display_name,
                "photo_url": auth.photo_url,
            },
        )
        if created:
            logger.info("User profile created", extra={"uid": auth.uid})
        return profile
