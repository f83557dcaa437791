"""Unit tests for JSON file helpers."""
import json
import os

import pytest

from wrestlecraft.infrastructure.json_io import read_json_safe, write_json_atomic


class TestReadJsonSafe:
    def test_missing_file_returns_default(self, tmp_path):
        assert read_json_safe(str(tmp_path / "nope.json"), []) == []

    def test_empty_file_returns_default(self, tmp_path):
        path = tmp_path / "empty.json"
        path.write_text("   \n")
        assert read_json_safe(str(path), "d") == "d"

    def test_invalid_json_returns_default(self, tmp_path):
        path = tmp_path / "bad.json"
        path.write_text("{not json")
        assert read_json_safe(str(path), None) is None

    def test_non_utf8_returns_default(self, tmp_path):
        path = tmp_path / "latin.json"
        path.write_bytes(b'{"archetypes": "\xff\xfe"}')
        assert read_json_safe(str(path), "d") == "d"

    def test_valid_json(self, tmp_path):
        path = tmp_path / "ok.json"
        path.write_text('[{"id": "a"}]')
        assert read_json_safe(str(path), None) == [{"id": "a"}]

    def test_directory_raises_os_error(self, tmp_path):
        with pytest.raises(OSError):
            read_json_safe(str(tmp_path), None)


class TestWriteJsonAtomic:
    def test_creates_parent_directory(self, tmp_path):
        path = tmp_path / "nested" / "dir" / "out.json"
        write_json_atomic(str(path), [1, 2])
        assert json.loads(path.read_text()) == [1, 2]

    def test_replaces_existing_content(self, tmp_path):
        path = tmp_path / "out.json"
        write_json_atomic(str(path), ["old"])
        write_json_atomic(str(path), ["new"])
        assert json.loads(path.read_text()) == ["new"]

    def test_no_temp_files_left_behind(self, tmp_path):
        path = tmp_path / "out.json"
        write_json_atomic(str(path), {"a": 1})
        assert os.listdir(tmp_path) == ["out.json"]

    def test_failed_write_keeps_original_and_cleans_up(self, tmp_path):
        path = tmp_path / "out.json"
        write_json_atomic(str(path), ["keep"])
        with pytest.raises(TypeError):
            write_json_atomic(str(path), [object()])
        assert json.loads(path.read_text()) == ["keep"]
        assert os.listdir(tmp_path) == ["out.json"]
