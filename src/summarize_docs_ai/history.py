"""
Local history and API settings records.

These are the two JSON blobs the presentation layer keeps between sessions:
the most recent results and the selected provider plus API key. They are
passed explicitly into calls; the core never reads them on its own.
"""

from __future__ import annotations

import json
import logging
import time
from dataclasses import asdict, dataclass, field
from pathlib import Path
from typing import Any

from summarize_docs_ai.models import ProviderCredentials

logger = logging.getLogger(__name__)

DEFAULT_MAX_ITEMS = 10


def _now_ms() -> int:
    return int(time.time() * 1000)


@dataclass
class HistoryEntry:
    """One completed summarization or grammar check."""

    input_text: str
    output_text: str
    mode: str
    timestamp: int = field(default_factory=_now_ms)
    id: str = ""

    def __post_init__(self) -> None:
        if not self.id:
            self.id = str(self.timestamp)

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "inputText": self.input_text,
            "outputText": self.output_text,
            "mode": self.mode,
            "timestamp": self.timestamp,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> HistoryEntry:
        return cls(
            id=str(data.get("id", "")),
            input_text=data.get("inputText", ""),
            output_text=data.get("outputText", ""),
            mode=data.get("mode", ""),
            timestamp=int(data.get("timestamp", 0)),
        )


class History:
    """Newest-first list of at most ``max_items`` entries."""

    def __init__(self, entries: list[HistoryEntry] | None = None, max_items: int = DEFAULT_MAX_ITEMS):
        self.max_items = max_items
        self._entries: list[HistoryEntry] = list(entries or [])[:max_items]

    @property
    def entries(self) -> list[HistoryEntry]:
        return list(self._entries)

    def __len__(self) -> int:
        return len(self._entries)

    def add(self, entry: HistoryEntry) -> HistoryEntry:
        """Prepend an entry, dropping the oldest beyond max_items."""
        self._entries = [entry, *self._entries[: self.max_items - 1]]
        return entry

    def record(self, input_text: str, output_text: str, mode: str) -> HistoryEntry:
        return self.add(HistoryEntry(input_text=input_text, output_text=output_text, mode=mode))

    def get(self, entry_id: str) -> HistoryEntry | None:
        for entry in self._entries:
            if entry.id == entry_id:
                return entry
        return None

    def clear(self) -> None:
        self._entries = []

    def to_json(self) -> str:
        return json.dumps([e.to_dict() for e in self._entries], ensure_ascii=False)

    @classmethod
    def from_json(cls, raw: str, max_items: int = DEFAULT_MAX_ITEMS) -> History:
        data = json.loads(raw) if raw.strip() else []
        if not isinstance(data, list):
            raise ValueError("history JSON must be an array")
        entries = [HistoryEntry.from_dict(item) for item in data if isinstance(item, dict)]
        return cls(entries, max_items=max_items)

    @classmethod
    def load(cls, path: Path, max_items: int = DEFAULT_MAX_ITEMS) -> History:
        """Load history from disk; a missing or unreadable file yields an empty history."""
        if not path.exists():
            return cls(max_items=max_items)
        try:
            return cls.from_json(path.read_text(encoding="utf-8"), max_items=max_items)
        except (ValueError, OSError) as e:
            logger.warning("Ignoring unreadable history file %s: %s", path, e)
            return cls(max_items=max_items)

    def save(self, path: Path) -> None:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(self.to_json(), encoding="utf-8")


@dataclass
class ApiSettingsRecord:
    """Selected provider and API key, stored as ``{"provider", "apiKey"}``."""

    provider: str = "mistral"
    api_key: str = ""

    def to_dict(self) -> dict[str, str]:
        return {"provider": self.provider, "apiKey": self.api_key}

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> ApiSettingsRecord:
        defaults = asdict(cls())
        return cls(
            provider=data.get("provider") or defaults["provider"],
            api_key=data.get("apiKey") or "",
        )

    def credentials(self) -> ProviderCredentials:
        return ProviderCredentials(provider=self.provider, api_key=self.api_key)

    @classmethod
    def load(cls, path: Path) -> ApiSettingsRecord:
        if not path.exists():
            return cls()
        try:
            data = json.loads(path.read_text(encoding="utf-8"))
        except (ValueError, OSError) as e:
            logger.warning("Ignoring unreadable API settings file %s: %s", path, e)
            return cls()
        return cls.from_dict(data) if isinstance(data, dict) else cls()

    def save(self, path: Path) -> None:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(json.dumps(self.to_dict()), encoding="utf-8")
        path.chmod(0o600)
