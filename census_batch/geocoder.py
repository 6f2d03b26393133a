"""Batch geocoding engine for the US Census Bureau address batch API."""

from __future__ import annotations

from census_batch.batch.classify import build_response, is_match, is_tie
from census_batch.batch.codec import encode_requests
from census_batch.batch.listeners import ListenerRegistry
from census_batch.batch.queue import BatchQueue
from census_batch.batch.store import ResponseStore
from census_batch.batch.submission import SubmissionDriver
from census_batch.common.constants import (
    CENSUS_BENCHMARK,
    CENSUS_BENCHMARK_CURRENT,
    CENSUS_GEOGRAPHY,
    CENSUS_GEOGRAPHY_CURRENT,
    MAX_BATCH_SIZE,
)
from census_batch.common.http import CensusHttpClient, Transport
from census_batch.common.logging import get_logger, log_event
from census_batch.common.models import (
    GeocodeAddress,
    GeocodeAsyncListener,
    GeocodeListener,
    GeocodeRequest,
    GeocodeResponse,
    GeocoderConfig,
)

logger = get_logger(__name__)


def resolve_benchmark(benchmark: str | None) -> str:
    return CENSUS_BENCHMARK.get(benchmark or "current", CENSUS_BENCHMARK_CURRENT)


def resolve_geography(geography: str | None) -> str | None:
    if not geography:
        return None
    return CENSUS_GEOGRAPHY.get(geography, CENSUS_GEOGRAPHY_CURRENT)


class Geocoder:
    """Queues address lookups and resolves them in batches.

    Requests are correlated by the caller's id. Matched results are cached
    (while caching is on) and passed to the listeners registered for that
    id: sync listeners first, then async listeners awaited one at a time.

    One instance is one pipeline: calls to :meth:`geocode` and
    :meth:`add_async` must not overlap.
    """

    def __init__(
        self,
        benchmark: str | None = None,
        geography: str | None = None,
        *,
        transport: Transport | None = None,
        config: GeocoderConfig | None = None,
    ) -> None:
        config = config or GeocoderConfig()
        if benchmark is None:
            benchmark = config.benchmark
        if geography is None:
            geography = config.geography

        self.config = config
        self.benchmark = resolve_benchmark(benchmark)
        self.geography = resolve_geography(geography)
        self.timeout = config.timeout_seconds

        self._queue = BatchQueue()
        self._store = ResponseStore()
        self._listeners = ListenerRegistry()
        self._id_counter = 0
        self._driver = SubmissionDriver(
            transport or CensusHttpClient(),
            benchmark=self.benchmark,
            geography=self.geography,
            base_url=config.base_url,
            retries=config.retries,
        )

    @property
    def api_url(self) -> str:
        return self._driver.url

    async def geocode(self, batch_size: int | None = None) -> list[GeocodeResponse]:
        """Send up to ``batch_size`` queued requests and return the matches.

        Only this call's matches are returned. An empty queue returns ``[]``
        without touching the network. The requests taken for the batch are
        not put back if submission fails.
        """
        if not self.has_geocode_batch():
            return []
        if batch_size is None:
            batch_size = self.config.batch_size

        batch = self._queue.take_up_to(batch_size)
        csv = encode_requests(batch)
        log_event(logger, "batch submitted", event="BATCH_SUBMIT", status="ok", batch_size=len(batch))

        rows = await self._driver.submit(csv, self.timeout)

        responses: list[GeocodeResponse] = []
        missed = 0
        for row in rows:
            if not row:
                continue
            request_id = row[0]
            if is_tie(row):
                # ties are not resolved into a response
                logger.debug("tie result left unresolved for id %s", request_id)
            elif is_match(row):
                response = build_response(row)
                responses.append(response)
                await self._handle_response(request_id, response)
            else:
                missed += 1
                self._store.record_miss(request_id)

        log_event(
            logger,
            "batch decoded",
            event="BATCH_DONE",
            status="ok",
            batch_size=len(batch),
            rows_in=len(rows),
            matched=len(responses),
            missed=missed,
        )
        return responses

    async def submit(self, csv: str, timeout: float | None = None) -> list[list[str]]:
        """Submit an already encoded batch, e.g. the ``csv`` of a ``RequestError``."""
        return await self._driver.submit(csv, self.timeout if timeout is None else timeout)

    async def _handle_response(self, request_id: str, response: GeocodeResponse) -> None:
        self._store.record_match(request_id, response)
        # listener errors propagate and abort the rest of the batch
        for listener in self._listeners.sync.get(request_id):
            listener(response)
        for async_listener in self._listeners.async_.get(request_id):
            await async_listener(response)

    def add(self, request_id: str, address: GeocodeAddress, listener: GeocodeListener | None = None) -> None:
        self._queue.add(GeocodeRequest.from_address(request_id, address))
        if listener:
            self.add_listener(request_id, listener)

    def add_unique(self, address: GeocodeAddress, listener: GeocodeListener | None = None) -> str:
        request_id = str(self._id_counter)
        self._id_counter += 1
        self.add(request_id, address, listener)
        return request_id

    async def add_async(self, request_id: str, address: GeocodeAddress, listener: GeocodeAsyncListener) -> None:
        """Queue a request with an async listener, flushing once the queue is full.

        After a flush every async listener is dropped, including listeners for
        ids still waiting in the queue.
        """
        self._queue.add(GeocodeRequest.from_address(request_id, address))
        self.add_async_listener(request_id, listener)

        if self._queue.size() >= MAX_BATCH_SIZE:
            await self.geocode()
            self.reset_async_listeners()

    def get(self, request_id: str) -> GeocodeResponse | None:
        return self._store.get(request_id)

    def no_match(self, request_id: str) -> bool:
        return self._store.is_missed(request_id)

    def clear_cache(self) -> None:
        self._store.clear()

    def use_cache(self, use_cache: bool = True) -> None:
        self._store.enabled = use_cache is not False

    def add_listener(self, request_id: str, listener: GeocodeListener) -> "Geocoder":
        self._listeners.sync.add(request_id, listener)
        return self

    def add_async_listener(self, request_id: str, listener: GeocodeAsyncListener) -> "Geocoder":
        self._listeners.async_.add(request_id, listener)
        return self

    def clear_listener(self, request_id: str, listener: GeocodeListener) -> None:
        self._listeners.sync.remove(request_id, listener)

    def clear_listeners(self, request_id: str) -> None:
        self._listeners.sync.clear(request_id)

    def reset_listeners(self) -> None:
        self._listeners.sync.reset()

    def clear_async_listener(self, request_id: str, listener: GeocodeAsyncListener) -> None:
        self._listeners.async_.remove(request_id, listener)

    def clear_async_listeners(self, request_id: str) -> None:
        self._listeners.async_.clear(request_id)

    def reset_async_listeners(self) -> None:
        self._listeners.async_.reset()

    def has_listeners(self, request_id: str) -> bool:
        return request_id in self._listeners.sync

    def has_async_listeners(self, request_id: str) -> bool:
        return request_id in self._listeners.async_

    def has_geocode_batch(self) -> bool:
        return not self._queue.is_empty()

    def current_batch_size(self) -> int:
        return min(self._queue.size(), MAX_BATCH_SIZE)

    def max_batch_size(self) -> int:
        return MAX_BATCH_SIZE
