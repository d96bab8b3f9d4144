import unittest

from taskapi.models.task import (
    MAX_TEXT_LENGTH,
    Task,
    TaskValidationError,
    clean_task_text,
    is_valid_task_id,
    new_task_id,
    utc_timestamp,
)
from taskapi.routes.tasks import MAX_LIMIT, MAX_PAGE, page_params, parse_int


class TaskModelTestCase(unittest.TestCase):

    def test_clean_task_text(self):
        self.assertEqual(clean_task_text("  buy milk  "), "buy milk")
        self.assertEqual(clean_task_text("x" * MAX_TEXT_LENGTH), "x" * MAX_TEXT_LENGTH)

    def test_clean_task_text_errors(self):
        cases = [
            (None, "Task text must be a string"),
            (12, "Task text must be a string"),
            ("", "Task text is required"),
            ("\n\t ", "Task text is required"),
            ("y" * 201, "Task text must be at most 200 characters"),
            ("a\ud800b", "Task text must be valid UTF-8"),
        ]
        for value, message in cases:
            with self.assertRaises(TaskValidationError) as ctx:
                clean_task_text(value)
            self.assertEqual(str(ctx.exception), message)

    def test_task_ids(self):
        task_id = new_task_id()
        self.assertTrue(is_valid_task_id(task_id))
        self.assertNotEqual(task_id, new_task_id())
        self.assertTrue(is_valid_task_id("507F1F77BCF86CD799439011"))
        for bad in ("not-an-id", "", "a" * 23, "a" * 25, "g" * 24, None, 123):
            self.assertFalse(is_valid_task_id(bad), bad)

    def test_to_dict(self):
        task = Task(id="a" * 24, text="hi", created_at="2026-01-01T00:00:00.000Z", updated_at="2026-01-01T00:00:00.000Z")
        self.assertEqual(
            task.to_dict(),
            {"id": "a" * 24, "text": "hi", "createdAt": "2026-01-01T00:00:00.000Z", "updatedAt": "2026-01-01T00:00:00.000Z"},
        )

    def test_utc_timestamp_format(self):
        self.assertRegex(utc_timestamp(), r"^\d{4}-\d{2}-\d{2}T\d{2}:\d{2}:\d{2}\.\d{3}Z$")

    def test_parse_int(self):
        self.assertEqual(parse_int(None, 1), 1)
        self.assertEqual(parse_int("3", 1), 3)
        self.assertEqual(parse_int(" 12px", 1), 12)
        self.assertEqual(parse_int("0", 50), 50)
        self.assertEqual(parse_int("-4", 50), -4)
        self.assertEqual(parse_int("٣", 1), 1)
        self.assertEqual(parse_int("1" * 5000, 1), 2**63 - 1)
        self.assertEqual(parse_int("-" + "9" * 25, 1), -(2**63 - 1))
        self.assertEqual(parse_int("0" * 30 + "7", 1), 7)

    def test_page_params(self):
        self.assertEqual(page_params({}), (1, 50))
        self.assertEqual(page_params({"page": "5", "limit": "101"}), (5, 100))
        self.assertEqual(page_params({"page": "0", "limit": "1"}), (1, 1))
        self.assertEqual(page_params({"page": "9" * 25, "limit": "100"}), (MAX_PAGE, 100))
        self.assertLessEqual((MAX_PAGE - 1) * MAX_LIMIT, 2**63 - 1)


if __name__ == '__main__':
    unittest.main()
