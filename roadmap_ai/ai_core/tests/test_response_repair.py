import json
import unittest

from roadmap_ai.ai_core.common.errors import ErrorKind, MalformedResponseError
from roadmap_ai.ai_core.common.response_repair import PREVIEW_LENGTH, preview, repair


class ResponseRepairTests(unittest.TestCase):
    def test_strict_json_object_round_trips(self) -> None:
        payload = {"title": "Learn Go", "steps": ["Read docs", "Build a CLI"], "meta": {"n": 2}}
        self.assertEqual(repair(json.dumps(payload)), payload)

    def test_markdown_fence_is_stripped(self) -> None:
        raw = '```json\n{"title": "A", "nodes": []}\n```'
        self.assertEqual(repair(raw), {"title": "A", "nodes": []})

    def test_compact_fenced_steps_object(self) -> None:
        raw = "```json\n{\"title\":\"A\",\"steps\":[]}\n```"
        self.assertEqual(repair(raw), {"title": "A", "steps": []})

    def test_leading_and_trailing_prose(self) -> None:
        raw = 'Here is your roadmap:\n{"title": "Cook pasta"}\nGood luck!'
        self.assertEqual(repair(raw), {"title": "Cook pasta"})

    def test_outermost_braces_keep_nested_objects(self) -> None:
        raw = 'x {"a": {"b": 1}, "c": [{"d": 2}]} y'
        self.assertEqual(repair(raw), {"a": {"b": 1}, "c": [{"d": 2}]})

    def test_refusal_without_json_raises(self) -> None:
        with self.assertRaises(MalformedResponseError) as ctx:
            repair("Sorry, I can't help with that.")
        self.assertEqual(ctx.exception.kind, ErrorKind.MALFORMED_RESPONSE)
        self.assertEqual(ctx.exception.status_code, 502)
        self.assertEqual(ctx.exception.raw_preview, "Sorry, I can't help with that.")

    def test_empty_and_none_input_raise(self) -> None:
        for raw in ("", None):
            with self.subTest(raw=raw):
                with self.assertRaises(MalformedResponseError):
                    repair(raw)

    def test_invalid_json_inside_braces_raises(self) -> None:
        with self.assertRaises(MalformedResponseError) as ctx:
            repair('{"title": "A", "nodes": [1, 2,]}')
        self.assertTrue(ctx.exception.message.startswith("AI response contained invalid JSON"))

    def test_truncated_object_raises(self) -> None:
        with self.assertRaises(MalformedResponseError):
            repair('{"title": "A", "nodes": [{"id": "step_1"')

    def test_nesting_past_recursion_limit_raises_malformed(self) -> None:
        raw = '{"a": ' + "[" * 100000 + "]" * 100000 + "}"
        with self.assertRaises(MalformedResponseError) as ctx:
            repair(raw)
        self.assertEqual(ctx.exception.status_code, 502)
        self.assertEqual(len(ctx.exception.raw_preview), PREVIEW_LENGTH + 3)

    def test_top_level_array_falls_back_to_embedded_object(self) -> None:
        self.assertEqual(repair('[{"title": "A"}]'), {"title": "A"})

    def test_preview_truncates_long_text(self) -> None:
        text = "x" * (PREVIEW_LENGTH + 50)
        self.assertEqual(preview(text), "x" * PREVIEW_LENGTH + "...")
        self.assertEqual(preview("short"), "short")


if __name__ == "__main__":
    unittest.main()
