from django.core.cache import cache
from django.test import TestCase
from rest_framework.test import APIClient

from roadmap_ai.ai_core.domain import AuthContext

ALICE = AuthContext(uid="alice", email="alice@example.com")
BOB = AuthContext(uid="bob", email="bob@example.com")


class RoadmapLibraryAPITests(TestCase):
    def setUp(self) -> None:
        cache.clear()
        self.client = APIClient()
        self.client.force_authenticate(user=ALICE)

    def _create(self, body: dict) -> dict:
        response = self.client.post("/api/roadmaps", body, format="json")
        self.assertEqual(response.status_code, 201)
        return response.json()

    def test_list_requires_authentication(self) -> None:
        response = APIClient().get("/api/roadmaps")
        self.assertEqual(response.status_code, 401)

    def test_create_and_list(self) -> None:
        created = self._create({"title": "Learn Go", "steps": ["Read docs", "Build a CLI"]})

        self.assertTrue(created["id"].startswith("rm_"))
        self.assertFalse(created["isPublic"])
        self.assertIn("createdAt", created)
        self.assertEqual(len(created["edges"]), 1)

        listed = self.client.get("/api/roadmaps").json()["roadmaps"]
        self.assertEqual([item["id"] for item in listed], [created["id"]])

    def test_roadmaps_are_scoped_to_owner(self) -> None:
        created = self._create({"title": "Private"})
        other = APIClient()
        other.force_authenticate(user=BOB)

        self.assertEqual(other.get("/api/roadmaps").json(), {"roadmaps": []})
        response = other.get(f"/api/roadmaps/{created['id']}")
        self.assertEqual(response.status_code, 404)
        self.assertEqual(response.json()["kind"], "not_found")
        self.assertEqual(other.delete(f"/api/roadmaps/{created['id']}").status_code, 404)

    def test_patch_updates_given_fields(self) -> None:
        created = self._create({"title": "Go", "description": "keep", "steps": ["a"]})
        response = self.client.patch(
            f"/api/roadmaps/{created['id']}",
            {"difficulty": "advanced", "isPublic": True},
            format="json",
        )

        self.assertEqual(response.status_code, 200)
        body = response.json()
        self.assertEqual(body["difficulty"], "advanced")
        self.assertEqual(body["description"], "keep")
        self.assertTrue(body["isPublic"])

    def test_patch_rejects_wrong_types(self) -> None:
        created = self._create({"title": "Go"})
        response = self.client.patch(f"/api/roadmaps/{created['id']}", {"nodes": "not a list"}, format="json")
        self.assertEqual(response.status_code, 400)
        self.assertEqual(response.json()["kind"], "invalid_request")

    def test_delete(self) -> None:
        created = self._create({"title": "Temp"})
        self.assertEqual(self.client.delete(f"/api/roadmaps/{created['id']}").status_code, 204)
        self.assertEqual(self.client.get(f"/api/roadmaps/{created['id']}").status_code, 404)

    def test_duplicate(self) -> None:
        created = self._create({"title": "Go", "steps": ["a"], "isPublic": True})
        response = self.client.post(f"/api/roadmaps/{created['id']}/duplicate")

        self.assertEqual(response.status_code, 201)
        body = response.json()
        self.assertEqual(body["title"], "Go (Copy)")
        self.assertFalse(body["isPublic"])
        self.assertNotEqual(body["id"], created["id"])

    def test_add_step(self) -> None:
        created = self._create({"title": "Go", "steps": ["a", "b"]})
        response = self.client.post(
            f"/api/roadmaps/{created['id']}/steps",
            {"title": "c", "duration": "2 days"},
            format="json",
        )

        self.assertEqual(response.status_code, 200)
        body = response.json()
        self.assertEqual(body["nodes"][-1]["id"], "step_3")
        self.assertEqual(body["nodes"][-1]["type"], "task")
        self.assertEqual(body["edges"][-1], {"source": "step_2", "target": "step_3", "label": "Then"})

    def test_add_step_requires_title(self) -> None:
        created = self._create({"title": "Go"})
        response = self.client.post(f"/api/roadmaps/{created['id']}/steps", {"title": ""}, format="json")
        self.assertEqual(response.status_code, 400)
        self.assertEqual(response.json()["error"], "Step title is required")
