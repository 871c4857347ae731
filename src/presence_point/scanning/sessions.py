from __future__ import annotations

import threading
from contextlib import contextmanager
from dataclasses import dataclass, field
from typing import Dict, Iterator

from ..core.constants import SCAN_GAP_MS
from .tokenizer import KeystrokeTokenizer


@dataclass
class _ScanSession:
    tokenizer: KeystrokeTokenizer
    lock: threading.Lock = field(default_factory=threading.Lock)


class ScanSessionRegistry:
    """Process-local tokenizers, one per browser session.

    Flask may serve requests on several threads and one browser can have two
    key batches in flight. The mapping has its own lock, and every use of a
    tokenizer goes through ``hold`` so batches of one session run one at a time.
    """

    def __init__(self, *, gap_ms: int = SCAN_GAP_MS):
        self._gap_ms = int(gap_ms)
        self._lock = threading.Lock()
        self._sessions: Dict[str, _ScanSession] = {}

    def _session(self, session_key: str) -> _ScanSession:
        with self._lock:
            entry = self._sessions.get(session_key)
            if entry is None:
                entry = _ScanSession(KeystrokeTokenizer(gap_ms=self._gap_ms))
                self._sessions[session_key] = entry
            return entry

    @contextmanager
    def hold(self, session_key: str) -> Iterator[KeystrokeTokenizer]:
        entry = self._session(session_key)
        with entry.lock:
            yield entry.tokenizer

    def is_enabled(self, session_key: str) -> bool:
        with self.hold(session_key) as tokenizer:
            return tokenizer.enabled

    def set_mode(self, session_key: str, *, enabled: bool) -> bool:
        with self.hold(session_key) as tokenizer:
            if enabled:
                tokenizer.enable()
            else:
                tokenizer.disable()
            return tokenizer.enabled

    def discard(self, session_key: str) -> None:
        with self._lock:
            entry = self._sessions.pop(session_key, None)
        if entry:
            with entry.lock:
                entry.tokenizer.disable()
