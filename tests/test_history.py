"""
Tests for the local history and API settings records.
"""

from __future__ import annotations

import json
import stat

from summarize_docs_ai.history import ApiSettingsRecord, History, HistoryEntry


class TestHistory:
    def test_newest_first_and_capped(self):
        history = History(max_items=10)
        for i in range(12):
            history.add(HistoryEntry(f"in {i}", f"out {i}", "paragraph", timestamp=i, id=str(i)))

        assert len(history) == 10
        assert history.entries[0].id == "11"
        assert history.entries[-1].id == "2"

    def test_entry_id_defaults_to_timestamp(self):
        entry = HistoryEntry("in", "out", "bullet", timestamp=1700000000000)
        assert entry.id == "1700000000000"

    def test_camel_case_round_trip(self, temp_dir):
        path = temp_dir / "history.json"
        history = History()
        history.record("The cat sat.", "- cat sat", "bullet")
        history.save(path)

        raw = json.loads(path.read_text(encoding="utf-8"))
        assert set(raw[0]) == {"id", "inputText", "outputText", "mode", "timestamp"}

        loaded = History.load(path)
        assert loaded.entries[0].input_text == "The cat sat."
        assert loaded.entries[0].mode == "bullet"

    def test_get_and_clear(self):
        history = History()
        entry = history.record("a", "b", "grammar")
        assert history.get(entry.id) is entry
        assert history.get("missing") is None
        history.clear()
        assert len(history) == 0

    def test_missing_file(self, temp_dir):
        assert len(History.load(temp_dir / "nope.json")) == 0

    def test_corrupt_file(self, temp_dir, caplog):
        path = temp_dir / "history.json"
        path.write_text("{not json", encoding="utf-8")

        history = History.load(path)

        assert len(history) == 0
        assert "Ignoring unreadable history file" in caplog.text


class TestApiSettingsRecord:
    def test_defaults(self, temp_dir):
        record = ApiSettingsRecord.load(temp_dir / "missing.json")
        assert record.provider == "mistral"
        assert record.api_key == ""

    def test_save_and_load(self, temp_dir):
        path = temp_dir / "api_settings.json"
        ApiSettingsRecord(provider="anthropic", api_key="sk-ant-123").save(path)

        assert json.loads(path.read_text()) == {"provider": "anthropic", "apiKey": "sk-ant-123"}
        assert stat.S_IMODE(path.stat().st_mode) == 0o600

        record = ApiSettingsRecord.load(path)
        creds = record.credentials()
        assert creds.provider == "anthropic"
        assert creds.api_key == "sk-ant-123"
