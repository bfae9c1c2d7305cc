"""
Activity log module.

Defines the sink interface the chat core reports events to, and Transcript,
the default sink: an append-only list of entries that is mirrored to a file
and to any registered viewers (such as the server log window).
"""

import threading
from pathlib import Path
from typing import Callable, List, Optional, Protocol

from common.protocol_definitions import TranscriptEntry
from server.utils.logger import logger


class ActivityLogSink(Protocol):
    """Anything that accepts activity events from the chat core."""

    def log_event(self, actor_label: str, timestamp_hhmm: str, text: str) -> None:
        ...


class Transcript:
    """In-memory chat transcript, optionally mirrored to a file."""

    def __init__(self, log_path: Optional[Path] = None):
        self.log_path = Path(log_path) if log_path else None
        self._entries: List[TranscriptEntry] = []
        self._listeners: List[Callable[[str], None]] = []
        self._lock = threading.Lock()  # viewers read from another thread

    def log_event(self, actor_label: str, timestamp_hhmm: str, text: str) -> None:
        """Append one entry and publish its formatted line."""
        entry = TranscriptEntry(actor_label, timestamp_hhmm, text)
        with self._lock:
            self._entries.append(entry)
        self._publish(entry.format())

    def append_notice(self, text: str) -> None:
        """Publish a free-form line (banners) without recording an entry."""
        self._publish(text)

    def add_listener(self, listener: Callable[[str], None]):
        """Register a callable that receives every published line."""
        self._listeners.append(listener)

    def entries(self) -> List[TranscriptEntry]:
        """Get a copy of all entries so far."""
        with self._lock:
            return list(self._entries)

    def lines(self) -> List[str]:
        """Get all entries formatted for display."""
        return [entry.format() for entry in self.entries()]

    def _publish(self, line: str):
        if self.log_path is not None:
            self._write_to_file(self.log_path, line)
        for listener in list(self._listeners):
            try:
                listener(line)
            except Exception as e:
                logger.warning(f"Transcript listener failed: {e}")

    def _write_to_file(self, file_path: Path, content: str):
        """Write content to log file."""
        try:
            file_path.parent.mkdir(parents=True, exist_ok=True)
            with open(file_path, 'a', encoding='utf-8') as f:
                f.write(content + '\n')
        except Exception as e:
            logger.error(f"Failed to write to log file {file_path}: {e}")
