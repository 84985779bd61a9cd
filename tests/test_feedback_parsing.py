import json
import unittest

from interviewiq.schemas.feedback import FeedbackRecord, coerce_feedback
from interviewiq.services.feedback_service import EMPTY_REPLY_FEEDBACK, build_feedback_prompt, parse_feedback

RECORD = {
    "spoken": "You covered the basics well.",
    "strengths": "Concise",
    "improvements": "Missing an example",
    "suggestion": "Add a concrete story",
    "overall": "Decent answer.",
}


class TestParseFeedback(unittest.TestCase):
    def test_plain_json(self):
        self.assertEqual(parse_feedback(json.dumps(RECORD)).model_dump(), RECORD)

    def test_json_fenced_block(self):
        raw = "```json\n" + json.dumps(RECORD, indent=2) + "\n```"
        self.assertEqual(parse_feedback(raw).model_dump(), RECORD)

    def test_bare_fence(self):
        raw = "```\n" + json.dumps(RECORD) + "\n```"
        self.assertEqual(parse_feedback(raw).model_dump(), RECORD)

    def test_object_embedded_in_prose(self):
        raw = "Here is my assessment:\n" + json.dumps(RECORD) + "\nGood luck!"
        self.assertEqual(parse_feedback(raw).model_dump(), RECORD)

    def test_prose_falls_back_to_raw_text(self):
        raw = "The answer was fine but lacked depth."
        record = parse_feedback(raw)
        self.assertEqual(record.spoken, raw)
        self.assertEqual(record.overall, raw)
        self.assertEqual(record.strengths, "")
        self.assertEqual(record.improvements, "")
        self.assertEqual(record.suggestion, "")

    def test_json_list_is_not_a_record(self):
        raw = json.dumps(["strength one", "strength two"])
        record = parse_feedback(raw)
        self.assertEqual(record.overall, raw)

    def test_broken_json_falls_back(self):
        raw = '{"spoken": "unterminated'
        self.assertEqual(parse_feedback(raw).spoken, raw)

    def test_non_string_values_are_coerced(self):
        raw = json.dumps(
            {
                "spoken": "ok",
                "strengths": ["clear", "structured"],
                "improvements": None,
                "suggestion": 3,
                "extra": "ignored",
            }
        )
        record = parse_feedback(raw)
        self.assertEqual(record.strengths, "clear\nstructured")
        self.assertEqual(record.improvements, "")
        self.assertEqual(record.suggestion, "3")
        self.assertEqual(record.overall, "")
        self.assertNotIn("extra", record.model_dump())

    def test_nested_values_stay_readable(self):
        raw = json.dumps(
            {
                "spoken": "ok",
                "strengths": {"clarity": "high"},
                "improvements": [{"area": "depth"}, "examples"],
            }
        )
        record = parse_feedback(raw)
        self.assertEqual(record.strengths, '{"clarity": "high"}')
        self.assertEqual(record.improvements, '{"area": "depth"}\nexamples')

    def test_object_without_feedback_keys_falls_back(self):
        raw = json.dumps({"feedback": "Strong, concrete answer. Mention caching too.", "score": 8})
        record = parse_feedback(raw)
        self.assertEqual(record.spoken, raw)
        self.assertEqual(record.overall, raw)
        self.assertFalse(record.is_empty())

    def test_object_with_only_blank_keys_falls_back(self):
        raw = json.dumps({key: "" for key in RECORD})
        self.assertEqual(parse_feedback(raw).overall, raw)

    def test_empty_reply_still_yields_feedback(self):
        for raw in ("", "   \n"):
            record = parse_feedback(raw)
            self.assertFalse(record.is_empty())
            self.assertEqual(record.overall, EMPTY_REPLY_FEEDBACK)


class TestCoerceFeedback(unittest.TestCase):
    def test_absent_and_blank(self):
        self.assertIsNone(coerce_feedback(None))
        self.assertIsNone(coerce_feedback(""))
        self.assertIsNone(coerce_feedback("   "))
        self.assertIsNone(coerce_feedback({}))
        self.assertIsNone(coerce_feedback({"overall": ""}))

    def test_legacy_text(self):
        record = coerce_feedback("Well done.")
        self.assertEqual(record, FeedbackRecord(overall="Well done."))

    def test_mapping_and_record(self):
        self.assertEqual(coerce_feedback(RECORD).model_dump(), RECORD)
        record = FeedbackRecord(**RECORD)
        self.assertIs(coerce_feedback(record), record)


class TestFeedbackPrompt(unittest.TestCase):
    def test_prompt_names_every_key(self):
        prompt = build_feedback_prompt("Why Python?", "Because it reads well.")
        self.assertIn('"Why Python?"', prompt)
        self.assertIn('"Because it reads well."', prompt)
        for key in RECORD:
            self.assertIn(f'"{key}"', prompt)


if __name__ == "__main__":
    unittest.main()
