from __future__ import annotations

from rest_framework import serializers

from roadmap_ai.ai_core.domain.roadmap_step import StepType

# =============================================================================
# Roadmap (response)
# =============================================================================


class RoadmapStepSerializer(serializers.Serializer):
    id = serializers.CharField()
    title = serializers.CharField(allow_blank=True)
    description = serializers.CharField(allow_blank=True)
    duration = serializers.CharField(allow_blank=True)
    type = serializers.ChoiceField(choices=[step_type.value for step_type in StepType])
    resources = serializers.ListField(child=serializers.CharField(allow_blank=True))


class RoadmapLinkSerializer(serializers.Serializer):
    source = serializers.CharField()
    target = serializers.CharField()
    label = serializers.CharField()


class RoadmapSerializer(serializers.Serializer):
    id = serializers.CharField(required=False)
    title = serializers.CharField()
    description = serializers.CharField(allow_blank=True)
    nodes = RoadmapStepSerializer(many=True)
    edges = RoadmapLinkSerializer(many=True)
    estimatedTotalDuration = serializers.CharField(allow_blank=True)
    difficulty = serializers.CharField()
    category = serializers.CharField()
    isPublic = serializers.BooleanField(required=False)
    createdAt = serializers.CharField(required=False)
    updatedAt = serializers.CharField(required=False)


class RoadmapListSerializer(serializers.Serializer):
    roadmaps = RoadmapSerializer(many=True)


# =============================================================================
# AI endpoints
# =============================================================================


class GenerationSettingsSerializer(serializers.Serializer):
    maxSteps = serializers.IntegerField(required=False, help_text="Upper bound on steps (clamped)")


class GenerateRoadmapRequestSerializer(serializers.Serializer):
    goal = serializers.CharField(allow_blank=True)
    settings = GenerationSettingsSerializer(required=False)
    save = serializers.BooleanField(required=False, default=False, help_text="Store the result in the library")


class GenerateRoadmapResponseSerializer(serializers.Serializer):
    success = serializers.BooleanField()
    roadmap = RoadmapSerializer()
    message = serializers.CharField()


class RefineRoadmapRequestSerializer(serializers.Serializer):
    originalRoadmap = serializers.DictField(required=False)
    feedback = serializers.CharField(required=False, allow_blank=True)


class RefineRoadmapResponseSerializer(serializers.Serializer):
    success = serializers.BooleanField()
    roadmap = RoadmapSerializer()
    changes = serializers.CharField(allow_blank=True)


class SuggestRoadmapRequestSerializer(serializers.Serializer):
    roadmap = serializers.DictField(required=False)


class RoadmapSuggestionSerializer(serializers.Serializer):
    type = serializers.CharField()
    title = serializers.CharField(allow_blank=True)
    description = serializers.CharField(allow_blank=True)
    priority = serializers.CharField()
    reasoning = serializers.CharField(allow_blank=True)


class SuggestRoadmapResponseSerializer(serializers.Serializer):
    success = serializers.BooleanField()
    suggestions = RoadmapSuggestionSerializer(many=True)
    assessment = serializers.CharField(allow_blank=True)
    strengths = serializers.ListField(child=serializers.CharField(allow_blank=True))
    improvements = serializers.ListField(child=serializers.CharField(allow_blank=True))


class ChatMessageSerializer(serializers.Serializer):
    role = serializers.ChoiceField(choices=["user", "assistant"])
    content = serializers.CharField(allow_blank=True, trim_whitespace=False)


class ChatRequestSerializer(serializers.Serializer):
    messages = ChatMessageSerializer(many=True, required=False)


class ChatResponseSerializer(serializers.Serializer):
    content = serializers.CharField(allow_blank=True)


# =============================================================================
# Library
# =============================================================================


class RoadmapWriteSerializer(serializers.Serializer):
    """Create/PATCH body. Step and link lists are normalized by the service."""

    title = serializers.CharField(required=False, allow_blank=True)
    description = serializers.CharField(required=False, allow_blank=True)
    nodes = serializers.ListField(required=False)
    steps = serializers.ListField(required=False, help_text="Step titles, used when nodes is absent (create only)")
    edges = serializers.ListField(required=False)
    estimatedTotalDuration = serializers.CharField(required=False, allow_blank=True)
    difficulty = serializers.CharField(required=False, allow_blank=True)
    category = serializers.CharField(required=False, allow_blank=True)
    isPublic = serializers.BooleanField(required=False)


class AddStepRequestSerializer(serializers.Serializer):
    title = serializers.CharField(allow_blank=True)
    description = serializers.CharField(required=False, allow_blank=True, default="")
    duration = serializers.CharField(required=False, allow_blank=True, default="")


# =============================================================================
# Auth / system
# =============================================================================


class LoginRequestSerializer(serializers.Serializer):
    idToken = serializers.CharField()


class AuthUserSerializer(serializers.Serializer):
    uid = serializers.CharField()
    email = serializers.CharField(allow_blank=True)
    displayName = serializers.CharField(allow_blank=True)


class LoginResponseSerializer(serializers.Serializer):
    success = serializers.BooleanField()
    message = serializers.CharField()
    user = AuthUserSerializer()


class SuccessSerializer(serializers.Serializer):
    success = serializers.BooleanField()


class AuthStatusSerializer(serializers.Serializer):
    authenticated = serializers.BooleanField()
    user = AuthUserSerializer(allow_null=True)


class FirebaseConfigSerializer(serializers.Serializer):
    apiKey = serializers.CharField(allow_blank=True)
    authDomain = serializers.CharField(allow_blank=True)
    projectId = serializers.CharField(allow_blank=True)
    storageBucket = serializers.CharField(allow_blank=True)
    messagingSenderId = serializers.CharField(allow_blank=True)
    appId = serializers.CharField(allow_blank=True)


class HealthServicesSerializer(serializers.Serializer):
    gemini = serializers.BooleanField()
    firebase = serializers.BooleanField()


class HealthCheckSerializer(serializers.Serializer):
    status = serializers.CharField()
    version = serializers.CharField()
    services = HealthServicesSerializer()
    timestamp = serializers.CharField()


class ErrorSerializer(serializers.Serializer):
    error = serializers.CharField()
    kind = serializers.CharField()
