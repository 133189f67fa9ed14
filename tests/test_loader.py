"""Tests for reading logs and ignore lists."""

import json
import shutil
import tempfile
import unittest
from pathlib import Path
from unittest.mock import patch

import pytest

from activity_report.config import FieldMapping, ReportSettings
from activity_report.errors import InputError
from activity_report.loader import (
    load_events,
    load_ignore_list,
    parse_events,
    resolve_ignore_path,
)


class TestParseEvents(unittest.TestCase):
    """Test cases for parse_events."""

    def test_rejects_empty(self):
        with self.assertRaisesRegex(InputError, "no data"):
            parse_events([])

    def test_rejects_non_array(self):
        for data in ({"ApplicationName": "A"}, "text", None, 3):
            with self.subTest(data=data):
                with self.assertRaises(InputError):
                    parse_events(data)

    def test_custom_fields(self):
        events = parse_events([{"name": "A", "keys": 2}], FieldMapping(app_name="name", keystrokes="keys"))
        self.assertEqual(events[0].application_name, "A")
        self.assertEqual(events[0].keystrokes, 2)


def test_load_events(log_file):
    events = load_events(log_file)
    assert [e.application_name for e in events] == ["A", "B", "A", "A"]
    assert events[1].keystrokes == 3


def test_load_events_with_bom(tmp_path, sample_records):
    path = tmp_path / "bom.json"
    path.write_text(json.dumps(sample_records), encoding="utf-8-sig")
    assert len(load_events(path)) == 4


@pytest.mark.parametrize(
    "name,content,message",
    [
        ("log.txt", "[]", "not a .json file"),
        ("broken.json", "[{", "not valid JSON"),
        ("empty.json", "[]", "no data"),
    ],
)
def test_load_events_errors(tmp_path, name, content, message):
    path = tmp_path / name
    path.write_text(content, encoding="utf-8")
    with pytest.raises(InputError, match=message):
        load_events(path)


def test_load_events_missing_file(tmp_path):
    with pytest.raises(InputError, match="Cannot read"):
        load_events(tmp_path / "missing.json")


def test_load_ignore_list(tmp_path):
    path = tmp_path / "IgnoreList.tsv"
    path.write_text("Explorer\r\n  LockApp \n\nSearchHost\n", encoding="utf-8")
    assert load_ignore_list(path) == {"Explorer", "LockApp", "SearchHost"}


def test_load_ignore_list_missing(tmp_path):
    assert load_ignore_list(tmp_path / "IgnoreList.tsv") == set()
    assert load_ignore_list(None) == set()


class TestResolveIgnorePath(unittest.TestCase):
    """Test cases for ignore-list discovery."""

    def setUp(self):
        """Set up test fixtures."""
        self.temp_dir = Path(tempfile.mkdtemp())

    def tearDown(self):
        """Clean up test fixtures."""
        shutil.rmtree(self.temp_dir)

    @patch("activity_report.loader.get_default_ignore_path")
    def test_prefers_sibling(self, mock_default):
        sibling = self.temp_dir / "IgnoreList.tsv"
        sibling.write_text("X\n", encoding="utf-8")

        self.assertEqual(resolve_ignore_path(self.temp_dir / "log.json"), sibling)
        mock_default.assert_not_called()

    @patch("activity_report.loader.get_default_ignore_path")
    def test_falls_back_to_user_config(self, mock_default):
        fallback = self.temp_dir / "config" / "Ignore.tsv"
        fallback.parent.mkdir()
        fallback.write_text("X\n", encoding="utf-8")
        mock_default.return_value = fallback
        settings = ReportSettings(ignore_file_name="Ignore.tsv")

        result = resolve_ignore_path(self.temp_dir / "logs" / "log.json", settings)

        self.assertEqual(result, fallback)
        mock_default.assert_called_once_with("Ignore.tsv")

    @patch("activity_report.loader.get_default_ignore_path")
    def test_none_when_absent(self, mock_default):
        mock_default.return_value = self.temp_dir / "nowhere.tsv"
        self.assertIsNone(resolve_ignore_path(self.temp_dir / "log.json"))


def test_load_events_invalid_utf8(tmp_path):
    path = tmp_path / "latin.json"
    path.write_bytes(b'[{"ApplicationName": "\xff"}]')
    with pytest.raises(InputError, match="not valid UTF-8"):
        load_events(path)


def test_load_ignore_list_directory(tmp_path):
    with pytest.raises(InputError, match="Cannot read"):
        load_ignore_list(tmp_path)


def test_load_ignore_list_invalid_utf8(tmp_path):
    path = tmp_path / "IgnoreList.tsv"
    path.write_bytes(b"Explorer\n\xff\xfe\xfa\n")
    with pytest.raises(InputError, match="Cannot read"):
        load_ignore_list(path)
