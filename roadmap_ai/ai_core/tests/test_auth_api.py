from unittest import mock

from django.core.cache import cache
from django.test import TestCase, override_settings
from rest_framework.test import APIClient

from roadmap_ai.ai_core.common.errors import AuthenticationFailedError
from roadmap_ai.ai_core.domain import AuthContext
from roadmap_ai.ai_core.models import UserProfile

USER = AuthContext(uid="uid-1", email="ada@example.com", display_name="Ada", photo_url="https://example.com/a.png")


class FakeTokenVerifier:
    def verify(self, token: str) -> AuthContext:
        if token != "good-token":
            raise AuthenticationFailedError("Invalid token")
        return USER


def _fake_verifier() -> FakeTokenVerifier:
    return FakeTokenVerifier()


@mock.patch("roadmap_ai.ai_core.controller.auth_views.get_token_verifier", _fake_verifier)
@mock.patch("roadmap_ai.ai_core.controller.authentication.get_token_verifier", _fake_verifier)
class AuthAPITests(TestCase):
    def setUp(self) -> None:
        cache.clear()
        self.client = APIClient()

    def test_login_starts_session_and_syncs_profile(self) -> None:
        response = self.client.post("/api/login", {"idToken": "good-token"}, format="json")

        self.assertEqual(response.status_code, 200)
        body = response.json()
        self.assertTrue(body["success"])
        self.assertEqual(body["user"], {"uid": "uid-1", "email": "ada@example.com", "displayName": "Ada"})
        self.assertEqual(UserProfile.objects.get(uid="uid-1").display_name, "Ada")

        status = self.client.get("/api/auth-status").json()
        self.assertTrue(status["authenticated"])
        self.assertEqual(status["user"]["uid"], "uid-1")
        self.assertEqual(self.client.get("/api/roadmaps").status_code, 200)

    def test_login_with_invalid_token_is_unauthenticated(self) -> None:
        response = self.client.post("/api/login", {"idToken": "bad-token"}, format="json")
        self.assertEqual(response.status_code, 401)
        self.assertEqual(response.json(), {"error": "Invalid token", "kind": "unauthenticated"})
        self.assertFalse(self.client.get("/api/auth-status").json()["authenticated"])

    def test_login_without_token_is_bad_request(self) -> None:
        response = self.client.post("/api/login", {}, format="json")
        self.assertEqual(response.status_code, 400)
        self.assertEqual(response.json()["kind"], "invalid_request")

    def test_logout_ends_session(self) -> None:
        self.client.post("/api/login", {"idToken": "good-token"}, format="json")
        response = self.client.post("/api/logout")

        self.assertEqual(response.json(), {"success": True})
        self.assertEqual(self.client.get("/api/auth-status").json(), {"authenticated": False, "user": None})
        self.assertEqual(self.client.get("/api/roadmaps").status_code, 401)

    def test_session_writes_require_csrf_token(self) -> None:
        client = APIClient(enforce_csrf_checks=True)
        self.assertEqual(client.post("/api/login", {"idToken": "good-token"}, format="json").status_code, 200)

        response = client.post("/api/roadmaps", {"title": "planted"}, format="json")
        self.assertEqual(response.status_code, 403)
        self.assertEqual(response.json()["kind"], "invalid_request")

        token = client.cookies["csrftoken"].value
        response = client.post("/api/roadmaps", {"title": "Mine"}, format="json", HTTP_X_CSRFTOKEN=token)
        self.assertEqual(response.status_code, 201)
        self.assertEqual(client.get("/api/roadmaps").json()["roadmaps"][0]["title"], "Mine")

    def test_bearer_writes_skip_csrf(self) -> None:
        client = APIClient(enforce_csrf_checks=True)
        response = client.post(
            "/api/roadmaps", {"title": "Mine"}, format="json", HTTP_AUTHORIZATION="Bearer good-token"
        )
        self.assertEqual(response.status_code, 201)

    def test_bearer_token_authenticates_request(self) -> None:
        response = self.client.get("/api/roadmaps", HTTP_AUTHORIZATION="Bearer good-token")
        self.assertEqual(response.status_code, 200)

    def test_invalid_bearer_token_is_rejected(self) -> None:
        response = self.client.get("/api/roadmaps", HTTP_AUTHORIZATION="Bearer bad-token")
        self.assertEqual(response.status_code, 401)
        self.assertEqual(response.json()["kind"], "unauthenticated")

    @override_settings(
        FIREBASE_API_KEY="web-key",
        FIREBASE_AUTH_DOMAIN="roadmap-ai.firebaseapp.com",
        FIREBASE_PROJECT_ID="roadmap-ai",
        FIREBASE_STORAGE_BUCKET="roadmap-ai.appspot.com",
        FIREBASE_MESSAGING_SENDER_ID="42",
        FIREBASE_APP_ID="1:42:web:abc",
    )
    def test_firebase_config_is_public(self) -> None:
        response = self.client.get("/api/firebase-config")
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.json()["projectId"], "roadmap-ai")
        self.assertEqual(response.json()["appId"], "1:42:web:abc")


class HealthCheckAPITests(TestCase):
    def setUp(self) -> None:
        cache.clear()

    @override_settings(AI_DISABLE_LLM=True, FIREBASE_PROJECT_ID="roadmap-ai")
    def test_health(self) -> None:
        response = APIClient().get("/api/health/")
        self.assertEqual(response.status_code, 200)
        body = response.json()
        self.assertEqual(body["status"], "ok")
        self.assertEqual(body["services"], {"gemini": False, "firebase": True})
