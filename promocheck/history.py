"""
Analysis History

Bounded in-memory history of mode A results, newest first.
When full, appending evicts the oldest entry. Nothing is persisted.

Usage:
    from promocheck.history import AnalysisHistory
    history = AnalysisHistory()
    history.append(result)
    for entry in history:
        ...
"""

from __future__ import annotations

from collections import deque
from typing import Iterator, Optional

from promocheck.analyzer import AnalysisResult
from promocheck.config import settings


class AnalysisHistory:
    """Ring buffer of AnalysisResult, newest first."""

    def __init__(self, max_entries: Optional[int] = None):
        max_entries = max_entries if max_entries is not None else settings.HISTORY_SIZE
        if max_entries < 1:
            raise ValueError("history size must be at least 1")
        self._entries: deque[AnalysisResult] = deque(maxlen=max_entries)

    @property
    def max_entries(self) -> int:
        return self._entries.maxlen

    def append(self, result: AnalysisResult) -> None:
        # appendleft on a full deque drops from the right, i.e. the oldest
        self._entries.appendleft(result)

    def get(self, result_id: str) -> Optional[AnalysisResult]:
        for entry in self._entries:
            if entry.id == result_id:
                return entry
        return None

    def clear(self) -> None:
        self._entries.clear()

    def __iter__(self) -> Iterator[AnalysisResult]:
        return iter(list(self._entries))

    def __len__(self) -> int:
        return len(self._entries)
