import json
from unittest import mock

from django.core.cache import cache
from django.test import TestCase, override_settings
from rest_framework.test import APIClient

from roadmap_ai.ai_core.controller import roadmap_views
from roadmap_ai.ai_core.domain import AuthContext
from roadmap_ai.ai_core.models import RoadmapDocument
from roadmap_ai.ai_core.service.chat.chat_service import ChatService
from roadmap_ai.ai_core.service.roadmap.roadmap_generator import RoadmapGeneratorService

USER = AuthContext(uid="user-1", email="user@example.com", display_name="User")
LEARN_GO = '{"title":"Learn Go","steps":["Read docs","Build a CLI"]}'


class FakeLLMClient:
    def __init__(self, response: str = LEARN_GO) -> None:
        self.response = response

    def generate_text(self, contents, config=None, system_instruction=None) -> str:
        return self.response

    def chat(self, messages, config=None, system_instruction=None) -> str:
        return f"echo: {messages[-1]['content']}"


def _generator(response: str = LEARN_GO) -> RoadmapGeneratorService:
    return RoadmapGeneratorService(llm_client=FakeLLMClient(response))


class RoadmapAPITests(TestCase):
    def setUp(self) -> None:
        cache.clear()
        self.client = APIClient()
        self.client.force_authenticate(user=USER)

    def _post(self, path: str, body: dict):
        return self.client.post(path, body, format="json")

    def test_generate_requires_authentication(self) -> None:
        response = APIClient().post("/api/generate-roadmap", {"goal": "Learn Go"}, format="json")
        self.assertEqual(response.status_code, 401)
        self.assertEqual(response.json()["kind"], "unauthenticated")

    def test_generate_returns_canonical_roadmap(self) -> None:
        with mock.patch.object(roadmap_views, "_generator_service", return_value=_generator()):
            response = self._post("/api/generate-roadmap", {"goal": "Learn Go", "settings": {"maxSteps": 5}})

        self.assertEqual(response.status_code, 200)
        body = response.json()
        self.assertTrue(body["success"])
        self.assertEqual(body["message"], "Created roadmap with 2 steps")
        self.assertEqual(body["roadmap"]["edges"], [{"source": "step_1", "target": "step_2", "label": "Then"}])
        self.assertEqual(body["roadmap"]["difficulty"], "beginner")
        self.assertNotIn("id", body["roadmap"])
        self.assertEqual(RoadmapDocument.objects.count(), 0)

    def test_generate_with_save_stores_private_copy(self) -> None:
        with mock.patch.object(roadmap_views, "_generator_service", return_value=_generator()):
            response = self._post("/api/generate-roadmap", {"goal": "Learn Go", "save": True})

        self.assertEqual(response.status_code, 200)
        roadmap_id = response.json()["roadmap"]["id"]
        document = RoadmapDocument.objects.get(roadmap_id=roadmap_id)
        self.assertEqual(document.owner_uid, "user-1")
        self.assertFalse(document.is_public)

    def test_generate_missing_goal_is_bad_request(self) -> None:
        response = self._post("/api/generate-roadmap", {"settings": {"maxSteps": 5}})
        self.assertEqual(response.status_code, 400)
        self.assertEqual(response.json()["kind"], "invalid_request")

    def test_generate_blank_goal_is_bad_request(self) -> None:
        with mock.patch.object(roadmap_views, "_generator_service", return_value=_generator()):
            response = self._post("/api/generate-roadmap", {"goal": "  "})
        self.assertEqual(response.status_code, 400)
        self.assertEqual(response.json(), {"error": "Goal is required", "kind": "invalid_request"})

    def test_generate_refusal_is_bad_gateway_and_not_saved(self) -> None:
        refusal = _generator("Sorry, I can't help with that.")
        with mock.patch.object(roadmap_views, "_generator_service", return_value=refusal):
            response = self._post("/api/generate-roadmap", {"goal": "Learn Go", "save": True})

        self.assertEqual(response.status_code, 502)
        self.assertEqual(response.json()["kind"], "malformed_response")
        self.assertEqual(RoadmapDocument.objects.count(), 0)

    def test_generate_without_steps_is_empty_roadmap(self) -> None:
        with mock.patch.object(roadmap_views, "_generator_service", return_value=_generator('{"title": "x"}')):
            response = self._post("/api/generate-roadmap", {"goal": "Learn Go"})
        self.assertEqual(response.status_code, 502)
        self.assertEqual(response.json()["kind"], "empty_roadmap")

    @override_settings(AI_DISABLE_LLM=True)
    def test_generate_without_gemini_is_unavailable(self) -> None:
        response = self._post("/api/generate-roadmap", {"goal": "Learn Go"})
        self.assertEqual(response.status_code, 503)
        self.assertEqual(response.json()["kind"], "llm_not_configured")

    def test_unexpected_error_is_internal(self) -> None:
        broken = mock.Mock()
        broken.generate.side_effect = RuntimeError("boom")
        with mock.patch.object(roadmap_views, "_generator_service", return_value=broken):
            response = self._post("/api/generate-roadmap", {"goal": "Learn Go"})
        self.assertEqual(response.status_code, 500)
        self.assertEqual(response.json()["kind"], "internal")

    def test_refine(self) -> None:
        refined = json.dumps({"title": "Learn Go fast", "steps": ["Tour of Go"], "changes": "Shortened"})
        original = {"title": "Learn Go", "nodes": [{"id": "step_1", "title": "Read docs"}]}
        with mock.patch.object(roadmap_views, "_generator_service", return_value=_generator(refined)):
            response = self._post("/api/refine-roadmap", {"originalRoadmap": original, "feedback": "shorter"})

        self.assertEqual(response.status_code, 200)
        body = response.json()
        self.assertEqual(body["roadmap"]["title"], "Learn Go fast")
        self.assertEqual(body["changes"], "Shortened")

    def test_refine_requires_feedback(self) -> None:
        original = {"title": "Learn Go", "nodes": []}
        with mock.patch.object(roadmap_views, "_generator_service", return_value=_generator()):
            response = self._post("/api/refine-roadmap", {"originalRoadmap": original})
        self.assertEqual(response.status_code, 400)
        self.assertEqual(response.json()["error"], "Feedback is required")

    def test_suggest(self) -> None:
        reply = json.dumps({
            "suggestions": [{"type": "addition", "title": "Add tests", "priority": "high"}],
            "overallAssessment": "Good",
            "strengths": ["Clear"],
            "improvements": ["Testing"],
        })
        roadmap = {"title": "Learn Go", "nodes": [{"id": "step_1", "title": "Read docs"}]}
        with mock.patch.object(roadmap_views, "_generator_service", return_value=_generator(reply)):
            response = self._post("/api/suggest-roadmap", {"roadmap": roadmap})

        self.assertEqual(response.status_code, 200)
        body = response.json()
        self.assertEqual(body["assessment"], "Good")
        self.assertEqual(body["suggestions"][0]["reasoning"], "")
        self.assertEqual(body["improvements"], ["Testing"])

    def test_chat(self) -> None:
        service = ChatService(llm_client=FakeLLMClient())
        with mock.patch.object(roadmap_views, "_chat_service", return_value=service):
            response = self._post("/api/chat", {"messages": [{"role": "user", "content": "Plan a trip"}]})

        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.json(), {"content": "echo: Plan a trip"})

    def test_chat_requires_messages(self) -> None:
        service = ChatService(llm_client=FakeLLMClient())
        with mock.patch.object(roadmap_views, "_chat_service", return_value=service):
            response = self._post("/api/chat", {"messages": []})
        self.assertEqual(response.status_code, 400)
        self.assertEqual(response.json()["error"], "Messages array required")
