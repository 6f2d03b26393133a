"""Batch submission with fixed-delay retry."""

from __future__ import annotations

import asyncio
import logging
from typing import Awaitable, Callable

from tenacity import AsyncRetrying, RetryError, retry_if_exception_type, stop_after_attempt, wait_fixed

from census_batch.batch.codec import decode
from census_batch.common.constants import CENSUS_GEOCODER_URL, MAX_RETRIES
from census_batch.common.errors import RequestError
from census_batch.common.http import Transport, TransportError
from census_batch.common.logging import get_logger, log_event

logger = get_logger(__name__)


def batch_url(base_url: str, geography: str | None) -> str:
    kind = "geographies" if geography else "locations"
    return f"{base_url.rstrip('/')}/{kind}/addressbatch"


class SubmissionDriver:
    """Sends one encoded batch to the transport and decodes the reply.

    Only ``TransportError`` triggers a retry. An empty or odd body is handed
    back decoded as-is. Each retry waits ``timeout`` seconds first.
    """

    def __init__(
        self,
        transport: Transport,
        *,
        benchmark: str,
        geography: str | None = None,
        base_url: str = CENSUS_GEOCODER_URL,
        retries: int = MAX_RETRIES,
        sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
    ) -> None:
        self.transport = transport
        self.benchmark = benchmark
        self.geography = geography
        self.url = batch_url(base_url, geography)
        self.retries = retries
        self._sleep = sleep

    def _post(self, csv: str, timeout: float) -> str:
        return self.transport.post_address_batch(
            self.url,
            csv,
            benchmark=self.benchmark,
            geography=self.geography,
            timeout=timeout,
        )

    def _log_failed_attempt(self, retry_state) -> None:
        exc = retry_state.outcome.exception() if retry_state.outcome else None
        log_event(
            logger,
            f"batch attempt failed: {exc}",
            level=logging.WARNING,
            event="BATCH_ATTEMPT_FAIL",
            status="retry",
            attempt=retry_state.attempt_number,
            error_code=getattr(exc, "error_code", None),
        )

    async def submit(self, csv: str, timeout: float) -> list[list[str]]:
        retrying = AsyncRetrying(
            stop=stop_after_attempt(self.retries + 1),
            wait=wait_fixed(timeout),
            retry=retry_if_exception_type(TransportError),
            before_sleep=self._log_failed_attempt,
            sleep=self._sleep,
        )
        try:
            async for attempt in retrying:
                with attempt:
                    body = await asyncio.to_thread(self._post, csv, timeout)
        except RetryError as exc:
            log_event(
                logger,
                "batch retries exhausted",
                level=logging.ERROR,
                event="BATCH_FAIL",
                status="error",
                attempt=exc.last_attempt.attempt_number,
                error_code=RequestError.error_code,
            )
            raise RequestError(
                csv,
                benchmark=self.benchmark,
                geography=self.geography,
                retries=self.retries,
                timeout=timeout,
            ) from exc.last_attempt.exception()

        return decode(body)
