import json
import unittest

from django.test import override_settings

from roadmap_ai.ai_core.common.errors import EmptyRoadmapError, InvalidRequestError, MalformedResponseError
from roadmap_ai.ai_core.service.roadmap.roadmap_generator import RoadmapGeneratorService, clamp_max_steps


class FakeLLMClient:
    def __init__(self, response: str) -> None:
        self.response = response
        self.prompts = []

    def generate_text(self, contents, config=None, system_instruction=None) -> str:
        self.prompts.append(contents)
        return self.response


ORIGINAL = {
    "title": "Learn Go",
    "nodes": [{"id": "step_1", "title": "Read docs"}, {"id": "step_2", "title": "Build a CLI"}],
}


class RoadmapGeneratorTests(unittest.TestCase):
    def test_generate_normalizes_model_output(self) -> None:
        llm = FakeLLMClient('```json\n{"title":"Learn Go","steps":["Read docs","Build a CLI"]}\n```')
        roadmap = RoadmapGeneratorService(llm_client=llm).generate("Learn Go", max_steps=5)

        self.assertEqual(roadmap.title, "Learn Go")
        self.assertEqual(len(roadmap.nodes), 2)
        self.assertEqual(len(roadmap.edges), 1)
        self.assertIn('"Learn Go"', llm.prompts[0])
        self.assertIn("Maximum 5 steps", llm.prompts[0])

    def test_blank_goal_is_rejected_before_calling_model(self) -> None:
        llm = FakeLLMClient("{}")
        with self.assertRaises(InvalidRequestError):
            RoadmapGeneratorService(llm_client=llm).generate("   ")
        self.assertEqual(llm.prompts, [])

    def test_refusal_raises_malformed(self) -> None:
        service = RoadmapGeneratorService(llm_client=FakeLLMClient("Sorry, I can't help with that."))
        with self.assertRaises(MalformedResponseError):
            service.generate("Learn Go")

    def test_roadmap_without_steps_raises_empty(self) -> None:
        service = RoadmapGeneratorService(llm_client=FakeLLMClient('{"title": "Nothing"}'))
        with self.assertRaises(EmptyRoadmapError) as ctx:
            service.generate("Learn Go")
        self.assertEqual(ctx.exception.status_code, 502)

    def test_refine_returns_changes(self) -> None:
        response = json.dumps({
            "title": "Learn Go faster",
            "nodes": [{"id": "step_1", "title": "Tour of Go"}],
            "changes": "Merged the reading steps",
        })
        llm = FakeLLMClient(response)
        refined = RoadmapGeneratorService(llm_client=llm).refine(ORIGINAL, "Make it shorter")

        self.assertEqual(refined.roadmap.title, "Learn Go faster")
        self.assertEqual(refined.changes, "Merged the reading steps")
        self.assertIn("Make it shorter", llm.prompts[0])
        self.assertIn('"changes"', llm.prompts[0])

    def test_refine_validates_input(self) -> None:
        service = RoadmapGeneratorService(llm_client=FakeLLMClient("{}"))
        with self.assertRaises(InvalidRequestError):
            service.refine({"title": "no nodes"}, "feedback")
        with self.assertRaises(InvalidRequestError):
            service.refine(ORIGINAL, "")

    def test_refine_empty_result_raises(self) -> None:
        service = RoadmapGeneratorService(llm_client=FakeLLMClient('{"nodes": [], "changes": "removed all"}'))
        with self.assertRaises(EmptyRoadmapError):
            service.refine(ORIGINAL, "Remove everything")

    def test_suggest_fills_defaults(self) -> None:
        response = json.dumps({
            "suggestions": [{"title": "Add tests"}, "not an object"],
            "overallAssessment": "Solid start",
            "strengths": ["clear order", 3],
        })
        suggestions = RoadmapGeneratorService(llm_client=FakeLLMClient(response)).suggest(ORIGINAL)

        self.assertEqual(len(suggestions.suggestions), 1)
        self.assertEqual(suggestions.suggestions[0].type, "enhancement")
        self.assertEqual(suggestions.suggestions[0].priority, "medium")
        self.assertEqual(suggestions.to_dict()["assessment"], "Solid start")
        self.assertEqual(suggestions.strengths, ["clear order"])
        self.assertEqual(suggestions.improvements, [])

    def test_suggest_requires_nodes(self) -> None:
        with self.assertRaises(InvalidRequestError):
            RoadmapGeneratorService(llm_client=FakeLLMClient("{}")).suggest({})

    @override_settings(ROADMAP_DEFAULT_MAX_STEPS=10, ROADMAP_MAX_STEPS_LIMIT=20)
    def test_clamp_max_steps(self) -> None:
        self.assertEqual(clamp_max_steps(None), 10)
        self.assertEqual(clamp_max_steps(0), 10)
        self.assertEqual(clamp_max_steps(True), 10)
        self.assertEqual(clamp_max_steps(7), 7)
        self.assertEqual(clamp_max_steps(99), 20)


if __name__ == "__main__":
    unittest.main()
