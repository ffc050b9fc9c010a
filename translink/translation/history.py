"""
Translation History

Keeps the most recent translations in memory for display. Entries created
from images carry a provenance marker; the text that was translated is
stored unmarked.
"""

import threading
import time
import uuid
from collections import deque
from dataclasses import asdict, dataclass, field
from typing import Any, Dict, List

from translink.config import DEFAULT_HISTORY_SIZE

IMAGE_MARKER = "[IMAGE] "

SOURCE_TEXT = "text"
SOURCE_IMAGE = "image"


@dataclass
class HistoryEntry:
    """One completed translation."""
    source_text: str
    translated_text: str
    from_language: str             # Detected language when the request said 'auto'
    to_language: str
    source_kind: str = SOURCE_TEXT  # "text" or "image"
    id: str = field(default_factory=lambda: uuid.uuid4().hex)
    timestamp: float = field(default_factory=time.time)

    @property
    def display_text(self) -> str:
        if self.source_kind == SOURCE_IMAGE:
            return IMAGE_MARKER + self.source_text
        return self.source_text

    def to_dict(self) -> Dict[str, Any]:
        payload = asdict(self)
        payload["display_text"] = self.display_text
        return payload


class TranslationHistory:
    """Newest-first list of the last `max_entries` translations."""

    def __init__(self, max_entries: int = DEFAULT_HISTORY_SIZE):
        self.max_entries = max_entries
        self._entries: "deque[HistoryEntry]" = deque(maxlen=max_entries)
        self._lock = threading.Lock()

    def add(self, entry: HistoryEntry) -> HistoryEntry:
        with self._lock:
            self._entries.appendleft(entry)
        return entry

    def entries(self) -> List[HistoryEntry]:
        with self._lock:
            return list(self._entries)

    def clear(self) -> None:
        with self._lock:
            self._entries.clear()

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)
