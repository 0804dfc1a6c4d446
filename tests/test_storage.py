"""Tests for the report storage backends."""

import json
import os
import tempfile
import unittest

from media_scraper.errors import ReportError
from media_scraper.models import PageRecord
from media_scraper.storage import JsonlStorage, TextReportStorage, create_storage


RECORDS = [
    PageRecord("https://x/1", 200, ("a.png", "b.jpg"), "hello"),
    PageRecord("https://x/2", 404, (), ""),
]


class TestTextReportStorage(unittest.TestCase):
    """Verify the human-readable report layout."""

    def setUp(self):
        self._tmp = tempfile.TemporaryDirectory()
        self.path = os.path.join(self._tmp.name, "image_results.txt")

    def tearDown(self):
        self._tmp.cleanup()

    def test_writes_blocks(self):
        """Each record should be a block followed by a blank line."""
        with TextReportStorage(self.path) as storage:
            written = storage.write_all(RECORDS)

        self.assertEqual(written, 2)
        with open(self.path, encoding="utf-8") as f:
            content = f.read()
        expected = (
            "URL: https://x/1\nStatusCode: 200\nMeta Description: hello\nImages:\n- a.png\n- b.jpg\n\n"
            "URL: https://x/2\nStatusCode: 404\nMeta Description: \nImages:\n\n"
        )
        self.assertEqual(content, expected)

    def test_utf8_output(self):
        """Non-ASCII snippets should be written as UTF-8."""
        with TextReportStorage(self.path) as storage:
            storage.write_all([PageRecord("https://x/é", 200, ("ñ.png",), "café")])
        with open(self.path, "rb") as f:
            raw = f.read()
        self.assertIn("café".encode("utf-8"), raw)

    def test_open_creates_empty_file(self):
        """open() should create the artifact before anything is written."""
        storage = TextReportStorage(self.path)
        storage.open()
        try:
            self.assertTrue(os.path.exists(self.path))
        finally:
            storage.close()

    def test_unwritable_path_raises(self):
        """A path inside a missing directory should raise ReportError."""
        storage = TextReportStorage(os.path.join(self._tmp.name, "missing", "out.txt"))
        with self.assertRaises(ReportError):
            storage.open()

    def test_write_before_open_raises(self):
        """Writing without opening should raise ReportError."""
        with self.assertRaises(ReportError):
            TextReportStorage(self.path).write_all(RECORDS)


class TestJsonlStorage(unittest.TestCase):
    """Verify JSON Lines output."""

    def test_one_object_per_record(self):
        """Each record should be serialized as one JSON line."""
        with tempfile.TemporaryDirectory() as tmp:
            path = os.path.join(tmp, "out.jsonl")
            with JsonlStorage(path) as storage:
                storage.write_all(RECORDS)
            with open(path, encoding="utf-8") as f:
                rows = [json.loads(line) for line in f]
        self.assertEqual(len(rows), 2)
        self.assertEqual(rows[0]["images"], ["a.png", "b.jpg"])
        self.assertEqual(rows[1]["status_code"], 404)


class TestCreateStorage(unittest.TestCase):
    """Verify format selection."""

    def test_known_formats(self):
        self.assertIsInstance(create_storage("a.txt", "text"), TextReportStorage)
        self.assertIsInstance(create_storage("a.jsonl", "jsonl"), JsonlStorage)

    def test_unknown_format_raises(self):
        with self.assertRaises(ValueError):
            create_storage("a.csv", "csv")


if __name__ == "__main__":
    unittest.main()
