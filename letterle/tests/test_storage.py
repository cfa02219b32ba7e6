"""
Tests for storage adapters and the persisted record codec.
"""

import json
import pytest

from ..engine_core.action import Guess
from ..engine_core.reducer import transition
from ..engine_core.state import SessionStatus, Theme
from ..session import FileStorage, MemoryStorage, SessionRecord, dump_session, load_record


class TestMemoryStorage:

    def test_missing_key(self):
        assert MemoryStorage().get("localData") is None

    def test_set_get_delete(self):
        storage = MemoryStorage()
        storage.set("localData", "{}")
        assert storage.get("localData") == "{}"
        storage.delete("localData")
        assert storage.get("localData") is None


class TestFileStorage:

    def test_missing_key(self, tmp_path):
        assert FileStorage(tmp_path / "data").get("localData") is None

    def test_directory_created_on_write(self, tmp_path):
        data_dir = tmp_path / "data"
        storage = FileStorage(data_dir)
        assert not data_dir.exists()

        storage.set("localData", '{"a": 1}')

        assert (data_dir / "localData.json").read_text(encoding="utf-8") == '{"a": 1}'
        assert storage.get("localData") == '{"a": 1}'

    def test_overwrite_leaves_no_temp_file(self, tmp_path):
        storage = FileStorage(tmp_path)
        storage.set("localData", "one")
        storage.set("localData", "two")
        assert storage.get("localData") == "two"
        assert [p.name for p in tmp_path.iterdir()] == ["localData.json"]

    def test_delete(self, tmp_path):
        storage = FileStorage(tmp_path)
        storage.set("localData", "x")
        storage.delete("localData")
        storage.delete("localData")
        assert storage.get("localData") is None

    def test_rejects_path_like_keys(self, tmp_path):
        with pytest.raises(ValueError):
            FileStorage(tmp_path).get("../escape")


class TestSessionRecord:
    """Tests for serializing sessions."""

    def test_dump_and_load(self, loaded_session):
        state = transition(loaded_session, Guess("a"))
        record = load_record(dump_session(state))

        data = record.to_data()
        assert data.answer == "m"
        assert data.options == ("a",)
        assert data.attempts == 1
        assert data.history == (3, 5)
        assert data.theme == Theme.LIGHT
        assert data.expires_at == state.expires_at

    def test_stored_shape(self, loaded_session):
        raw = json.loads(dump_session(loaded_session))
        assert set(raw) == {"status", "answer", "expires", "attempts", "options", "history", "theme"}
        assert raw["status"] == "loaded"
        assert raw["theme"] == "light"

    def test_missing_record(self):
        assert load_record(None) is None

    @pytest.mark.parametrize("raw", [
        "",
        "not json",
        "[]",
        "null",
        '{"answer": "m"}',
        '{"answer": "M", "expires": "2026-10-19T23:59:59Z"}',
        '{"answer": "m", "expires": "yesterday"}',
        '{"answer": "m", "expires": "2026-10-19T23:59:59Z", "options": ["a", "a"], "attempts": 2}',
        '{"answer": "m", "expires": "2026-10-19T23:59:59Z", "options": ["1"], "attempts": 1}',
        '{"answer": "m", "expires": "2026-10-19T23:59:59Z", "options": ["a"], "attempts": 3}',
        '{"answer": "m", "expires": "2026-10-19T23:59:59Z", "history": [0]}',
        '{"answer": "m", "expires": "2026-10-19T23:59:59Z", "theme": "sepia"}',
        '{"answer": "m", "expires": "9999-12-31T23:59:59-14:00"}',
        '{"answer": "m", "expires": "0001-01-01T00:00:00+14:00"}',
        '{"answer": "m", "expires": "2026-10-19T23:59:59Z", "options": ["m", "a"], "attempts": 2}',
    ])
    def test_malformed_records(self, raw):
        assert load_record(raw) is None

    def test_accepts_minimal_record(self):
        record = load_record('{"answer": "m", "expires": "2026-10-19T23:59:59Z"}')
        assert isinstance(record, SessionRecord)
        assert record.status == SessionStatus.LOADED
        assert record.history == []
