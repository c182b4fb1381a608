from django.urls import path

from drf_spectacular.views import SpectacularAPIView, SpectacularRedocView, SpectacularSwaggerView

from roadmap_ai.ai_core.controller.auth_views import (
    AuthStatusAPIView,
    FirebaseConfigAPIView,
    LoginAPIView,
    LogoutAPIView,
)
from roadmap_ai.ai_core.controller.library_views import (
    RoadmapCollectionAPIView,
    RoadmapDetailAPIView,
    RoadmapDuplicateAPIView,
    RoadmapStepAPIView,
)
from roadmap_ai.ai_core.controller.roadmap_views import (
    ChatAPIView,
    GenerateRoadmapAPIView,
    RefineRoadmapAPIView,
    SuggestRoadmapAPIView,
)
from roadmap_ai.ai_core.controller.system_views import HealthCheckAPIView

API_PREFIXES = ("api",)

urlpatterns = []
for prefix in API_PREFIXES:
    # OpenAPI schema and docs
    urlpatterns.extend(
        [
            path(f"{prefix}/schema/", SpectacularAPIView.as_view(), name=f"schema-{prefix}"),
            path(
                f"{prefix}/docs/",
                SpectacularSwaggerView.as_view(url_name=f"schema-{prefix}"),
                name=f"swagger-ui-{prefix}",
            ),
            path(
                f"{prefix}/redoc/",
                SpectacularRedocView.as_view(url_name=f"schema-{prefix}"),
                name=f"redoc-{prefix}",
            ),
        ]
    )

    urlpatterns.append(path(f"{prefix}/health/", HealthCheckAPIView.as_view(), name=f"health-check-{prefix}"))

    # session auth
    urlpatterns.append(path(f"{prefix}/login", LoginAPIView.as_view(), name=f"login-{prefix}"))
    urlpatterns.append(path(f"{prefix}/logout", LogoutAPIView.as_view(), name=f"logout-{prefix}"))
    urlpatterns.append(path(f"{prefix}/auth-status", AuthStatusAPIView.as_view(), name=f"auth-status-{prefix}"))
    urlpatterns.append(
        path(f"{prefix}/firebase-config", FirebaseConfigAPIView.as_view(), name=f"firebase-config-{prefix}")
    )

    # AI
    urlpatterns.append(path(f"{prefix}/generate-roadmap", GenerateRoadmapAPIView.as_view()))
    urlpatterns.append(path(f"{prefix}/refine-roadmap", RefineRoadmapAPIView.as_view()))
    urlpatterns.append(path(f"{prefix}/suggest-roadmap", SuggestRoadmapAPIView.as_view()))
    urlpatterns.append(path(f"{prefix}/chat", ChatAPIView.as_view()))

    # library
    urlpatterns.append(path(f"{prefix}/roadmaps", RoadmapCollectionAPIView.as_view()))
    urlpatterns.append(path(f"{prefix}/roadmaps/<str:roadmap_id>", RoadmapDetailAPIView.as_view()))
    urlpatterns.append(path(f"{prefix}/roadmaps/<str:roadmap_id>/duplicate", RoadmapDuplicateAPIView.as_view()))
    urlpatterns.append(path(f"{prefix}/roadmaps/<str:roadmap_id>/steps", RoadmapStepAPIView.as_view()))
