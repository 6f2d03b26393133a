"""Per-id listener registration for sync and async result callbacks."""

from __future__ import annotations

from typing import Generic, TypeVar

from census_batch.common.models import GeocodeAsyncListener, GeocodeListener

L = TypeVar("L")


class ListenerMap(Generic[L]):
    """Ordered listener lists keyed by request id.

    An id only has an entry while at least one listener is registered.
    """

    def __init__(self) -> None:
        self._listeners: dict[str, list[L]] = {}

    def add(self, request_id: str, listener: L) -> None:
        self._listeners.setdefault(request_id, []).append(listener)

    def remove(self, request_id: str, listener: L) -> None:
        listeners = self._listeners.get(request_id)
        if not listeners or listener not in listeners:
            return
        if len(listeners) == 1:
            self.clear(request_id)
        else:
            listeners.remove(listener)

    def clear(self, request_id: str) -> None:
        self._listeners.pop(request_id, None)

    def reset(self) -> None:
        self._listeners = {}

    def get(self, request_id: str) -> list[L]:
        return list(self._listeners.get(request_id, ()))

    def __contains__(self, request_id: object) -> bool:
        return request_id in self._listeners

    def __len__(self) -> int:
        return len(self._listeners)


class ListenerRegistry:
    def __init__(self) -> None:
        self.sync: ListenerMap[GeocodeListener] = ListenerMap()
        self.async_: ListenerMap[GeocodeAsyncListener] = ListenerMap()
