"""Cache of matched responses and the set of ids with no match."""

from __future__ import annotations

from census_batch.common.models import GeocodeResponse


class ResponseStore:
    def __init__(self) -> None:
        self.enabled = True
        self._cache: dict[str, GeocodeResponse] = {}
        self._missed: set[str] = set()

    def record_match(self, request_id: str, response: GeocodeResponse) -> None:
        if self.enabled:
            self._cache[request_id] = response

    def record_miss(self, request_id: str) -> None:
        if self.enabled:
            self._missed.add(request_id)

    def get(self, request_id: str) -> GeocodeResponse | None:
        return self._cache.get(request_id)

    def is_missed(self, request_id: str) -> bool:
        return request_id in self._missed

    def clear(self) -> None:
        # the missed set is deliberately left alone
        self._cache = {}

    def __len__(self) -> int:
        return len(self._cache)
