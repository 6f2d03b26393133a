from __future__ import annotations

import asyncio

import pytest

from census_batch.batch.submission import SubmissionDriver, batch_url
from census_batch.common.errors import RequestError
from census_batch.common.http import TransportError


class FakeTransport:
    def __init__(self, body: str = "", failures: int = 0, error: Exception | None = None):
        self.body = body
        self.failures = failures
        self.error = error
        self.calls: list[dict] = []

    def post_address_batch(self, url, csv, *, benchmark, geography, timeout):
        self.calls.append({"url": url, "csv": csv, "benchmark": benchmark, "geography": geography, "timeout": timeout})
        if self.error is not None:
            raise self.error
        if len(self.calls) <= self.failures:
            raise TransportError("connection reset")
        return self.body


class RecordingSleep:
    def __init__(self):
        self.delays: list[float] = []

    async def __call__(self, seconds: float) -> None:
        self.delays.append(seconds)


def test_batch_url_depends_on_geography():
    assert batch_url("https://x.test/geocoder/", None) == "https://x.test/geocoder/locations/addressbatch"
    assert batch_url("https://x.test/geocoder", "420") == "https://x.test/geocoder/geographies/addressbatch"


def test_submit_decodes_body():
    transport = FakeTransport(body='"a","q","No_Match"\n')
    driver = SubmissionDriver(transport, benchmark="4")

    rows = asyncio.run(driver.submit('"a","q","","",""', timeout=5))

    assert rows == [["a", "q", "No_Match"], []]
    assert transport.calls[0]["benchmark"] == "4"
    assert transport.calls[0]["geography"] is None
    assert transport.calls[0]["timeout"] == 5


def test_submit_retries_with_fixed_delay_then_succeeds():
    transport = FakeTransport(body='"a","q","No_Match"', failures=2)
    sleep = RecordingSleep()
    driver = SubmissionDriver(transport, benchmark="4", sleep=sleep)

    rows = asyncio.run(driver.submit("csv", timeout=7))

    assert rows == [["a", "q", "No_Match"]]
    assert len(transport.calls) == 3
    assert sleep.delays == [7, 7]


def test_submit_raises_request_error_after_four_attempts():
    transport = FakeTransport(failures=10)
    sleep = RecordingSleep()
    driver = SubmissionDriver(transport, benchmark="8", geography="420", sleep=sleep)

    with pytest.raises(RequestError) as excinfo:
        asyncio.run(driver.submit('"a","1 Main St","","",""', timeout=3))

    err = excinfo.value
    assert len(transport.calls) == 4
    assert sleep.delays == [3, 3, 3]
    assert err.code == "RequestError"
    assert err.csv == '"a","1 Main St","","",""'
    assert err.retries == 3
    assert err.timeout == 3
    assert err.benchmark == "8"
    assert err.geography == "420"
    assert isinstance(err.__cause__, TransportError)


def test_empty_body_is_not_retried():
    transport = FakeTransport(body="")
    driver = SubmissionDriver(transport, benchmark="4")

    assert asyncio.run(driver.submit("csv", timeout=0)) == [[]]
    assert len(transport.calls) == 1


def test_non_transport_errors_are_not_retried():
    transport = FakeTransport(error=RuntimeError("bug"))
    driver = SubmissionDriver(transport, benchmark="4")

    with pytest.raises(RuntimeError):
        asyncio.run(driver.submit("csv", timeout=0))
    assert len(transport.calls) == 1
