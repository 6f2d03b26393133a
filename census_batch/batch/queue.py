"""Ordered queue of pending geocode requests."""

from __future__ import annotations

from census_batch.common.models import GeocodeRequest


class BatchQueue:
    def __init__(self) -> None:
        self._items: list[GeocodeRequest] = []

    def add(self, request: GeocodeRequest) -> None:
        self._items.append(request)

    def take_up_to(self, n: int) -> list[GeocodeRequest]:
        """Remove and return the first ``min(n, size)`` requests in order."""
        if n <= 0:
            return []
        taken = self._items[:n]
        self._items = self._items[n:]
        return taken

    def size(self) -> int:
        return len(self._items)

    def is_empty(self) -> bool:
        return not self._items

    def __len__(self) -> int:
        return len(self._items)
