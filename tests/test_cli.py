"""
Tests for the command-line interface.
"""

from __future__ import annotations

import json

import httpx
import pytest
import yaml
from typer.testing import CliRunner

from summarize_docs_ai import cli
from summarize_docs_ai.cli import app, resolve_credentials
from summarize_docs_ai.config import load_config
from summarize_docs_ai.history import ApiSettingsRecord
from summarize_docs_ai.router import ProviderRouter

runner = CliRunner()


@pytest.fixture
def config_file(temp_dir):
    path = temp_dir / "config.yaml"
    path.write_text(
        yaml.safe_dump(
            {
                "history": {
                    "path": str(temp_dir / "history.json"),
                    "api_settings_path": str(temp_dir / "api_settings.json"),
                },
                "logging": {"level": "WARNING"},
            }
        ),
        encoding="utf-8",
    )
    return path


@pytest.fixture
def mock_router(monkeypatch, chat_transport):
    def router_factory(settings):
        return ProviderRouter(settings, client=httpx.AsyncClient(transport=chat_transport))

    monkeypatch.setattr(cli, "ProviderRouter", router_factory)
    return chat_transport


class TestSummarizeCommand:
    def test_summarize_text(self, config_file, mock_router, temp_dir):
        result = runner.invoke(
            app,
            [
                "summarize",
                "--text", "The cat sat.",
                "--mode", "bullet",
                "--length", "0",
                "--provider", "openai",
                "--api-key", "sk-test",
                "--config", str(config_file),
            ],
        )

        assert result.exit_code == 0, result.output
        assert "A short summary." in result.output
        assert mock_router.last_json["max_tokens"] == 3
        assert "few key points" in mock_router.last_json["messages"][1]["content"]

        history = json.loads((temp_dir / "history.json").read_text(encoding="utf-8"))
        assert history[0]["mode"] == "bullet"
        assert history[0]["inputText"] == "The cat sat."

    def test_summarize_file(self, config_file, mock_router, temp_dir):
        doc = temp_dir / "notes.txt"
        doc.write_text("Notes from the meeting. Decisions were made.", encoding="utf-8")

        result = runner.invoke(
            app,
            ["summarize", str(doc), "-p", "mistral", "-k", "key", "--no-history", "-c", str(config_file)],
        )

        assert result.exit_code == 0, result.output
        assert "Notes from the meeting." in mock_router.last_json["messages"][1]["content"]
        assert not (temp_dir / "history.json").exists()

    def test_quick_action_switches_to_custom(self, config_file, mock_router):
        result = runner.invoke(
            app,
            ["summarize", "-t", "Body.", "-q", "academic", "-p", "openai", "-k", "k", "-c", str(config_file)],
        )

        assert result.exit_code == 0, result.output
        prompt = mock_router.last_json["messages"][1]["content"]
        assert prompt.startswith("Rewrite this text in an academic style.")

    def test_missing_key(self, config_file, mock_router):
        result = runner.invoke(
            app, ["summarize", "--text", "Hello.", "--provider", "openai", "--config", str(config_file)]
        )

        assert result.exit_code == 1
        assert "API key is required" in result.output
        assert mock_router.requests == []

    def test_no_input(self, config_file):
        result = runner.invoke(app, ["summarize", "--config", str(config_file)])
        assert result.exit_code == 1

    def test_grammar(self, config_file, mock_router):
        result = runner.invoke(
            app, ["grammar", "-t", "Their going.", "-p", "openai", "-k", "k", "-c", str(config_file)]
        )

        assert result.exit_code == 0, result.output
        assert mock_router.last_json["max_tokens"] == 1024
        assert "temperature" not in mock_router.last_json


class TestOtherCommands:
    def test_extract(self, config_file, temp_dir):
        doc = temp_dir / "a.txt"
        doc.write_text("hello world", encoding="utf-8")

        result = runner.invoke(app, ["extract", str(doc), "--config", str(config_file)])

        assert result.exit_code == 0
        assert "hello world" in result.output

    def test_extract_to_file(self, config_file, temp_dir):
        doc = temp_dir / "a.txt"
        doc.write_text("hello world", encoding="utf-8")
        out = temp_dir / "out" / "text.txt"

        result = runner.invoke(app, ["extract", str(doc), "-o", str(out), "-c", str(config_file)])

        assert result.exit_code == 0
        assert out.read_text(encoding="utf-8") == "hello world"

    def test_extract_unsupported(self, config_file, temp_dir):
        doc = temp_dir / "x.xyz"
        doc.write_bytes(b"data")

        result = runner.invoke(app, ["extract", str(doc), "--config", str(config_file)])

        assert result.exit_code == 1
        assert "Unsupported file type" in result.output

    def test_history_empty(self, config_file):
        result = runner.invoke(app, ["history", "--config", str(config_file)])
        assert result.exit_code == 0
        assert "No history yet" in result.output

    def test_history_clear(self, config_file, temp_dir):
        (temp_dir / "history.json").write_text(
            json.dumps([{"id": "1", "inputText": "a", "outputText": "b", "mode": "paragraph", "timestamp": 1}]),
            encoding="utf-8",
        )

        shown = runner.invoke(app, ["history", "--show", "1", "--config", str(config_file)])
        cleared = runner.invoke(app, ["history", "--clear", "--config", str(config_file)])

        assert shown.exit_code == 0
        assert cleared.exit_code == 0
        assert json.loads((temp_dir / "history.json").read_text(encoding="utf-8")) == []

    def test_providers(self, config_file):
        result = runner.invoke(app, ["providers", "--config", str(config_file)])
        assert result.exit_code == 0
        for provider in ("openai", "mistral", "anthropic"):
            assert provider in result.output

    def test_configure(self, config_file, temp_dir):
        result = runner.invoke(
            app,
            ["configure", "--provider", "Anthropic", "--api-key", "sk-ant-123456789", "-c", str(config_file)],
        )

        assert result.exit_code == 0, result.output
        record = ApiSettingsRecord.load(temp_dir / "api_settings.json")
        assert record.provider == "anthropic"
        assert record.api_key == "sk-ant-123456789"

        creds = resolve_credentials(load_config(config_file), None, None)
        assert creds.provider == "anthropic"
        assert creds.api_key == "sk-ant-123456789"

    def test_configure_rejects_unknown_provider(self, config_file):
        result = runner.invoke(
            app, ["configure", "--provider", "cohere", "--api-key", "k", "-c", str(config_file)]
        )
        assert result.exit_code == 1
        assert "Invalid AI provider selected" in result.output

    def test_init(self, temp_dir):
        path = temp_dir / "generated.yaml"

        result = runner.invoke(app, ["init", "--output", str(path)])

        assert result.exit_code == 0
        assert load_config(path).providers.default == "mistral"


class TestResolveCredentials:
    def test_option_wins(self, settings, monkeypatch):
        monkeypatch.setenv("OPENAI_API_KEY", "from-env")
        creds = resolve_credentials(settings, "openai", "from-option")
        assert creds.api_key == "from-option"

    def test_env_used(self, settings, monkeypatch):
        monkeypatch.setenv("OPENAI_API_KEY", "from-env")
        assert resolve_credentials(settings, "openai", None).api_key == "from-env"

    def test_record_only_for_its_provider(self, settings):
        ApiSettingsRecord("mistral", "saved").save(settings.history.api_settings_path)

        assert resolve_credentials(settings, None, None).api_key == "saved"
        assert resolve_credentials(settings, "openai", None).api_key == ""
