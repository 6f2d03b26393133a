"""HTTP transport for the Census batch endpoints."""

from __future__ import annotations

from types import TracebackType
from typing import Protocol

import requests

from census_batch.common.constants import USER_AGENT
from census_batch.common.errors import GeocoderError
from census_batch.common.logging import get_logger

logger = get_logger(__name__)

BATCH_FILENAME = "geocode.csv"


class TransportError(GeocoderError):
    """A single failed attempt to reach the batch endpoint."""

    error_code = "TRANSPORT_ERROR"


class Transport(Protocol):
    def post_address_batch(
        self,
        url: str,
        csv: str,
        *,
        benchmark: str,
        geography: str | None,
        timeout: float,
    ) -> str: ...


class CensusHttpClient:
    def __init__(self, *, user_agent: str = USER_AGENT) -> None:
        self.user_agent = user_agent
        self.session = requests.Session()

    def close(self) -> None:
        self.session.close()

    def __enter__(self) -> "CensusHttpClient":
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        self.close()

    def _headers(self, headers: dict[str, str] | None) -> dict[str, str]:
        out = {"User-Agent": self.user_agent, "Accept": "text/csv, text/plain, */*"}
        if headers:
            out.update(headers)
        return out

    def _raise_for_status(self, response: requests.Response) -> None:
        status = response.status_code
        if status >= 400:
            raise TransportError(f"HTTP status: {status}")

    def post_address_batch(
        self,
        url: str,
        csv: str,
        *,
        benchmark: str,
        geography: str | None,
        timeout: float,
        headers: dict[str, str] | None = None,
    ) -> str:
        """POST one address file as multipart form data and return the body text."""
        data = {"benchmark": benchmark}
        if geography:
            data["vintage"] = geography
        files = {"addressFile": (BATCH_FILENAME, csv.encode("utf-8"), "text/csv")}

        try:
            response = self.session.request(
                method="POST",
                url=url,
                data=data,
                files=files,
                headers=self._headers(headers),
                timeout=timeout,
            )
        except requests.RequestException as exc:
            raise TransportError(f"POST {url} failed: {exc}") from exc

        self._raise_for_status(response)
        logger.debug("batch endpoint responded", extra={"status": "ok", "rows_in": csv.count("\n") + 1})
        response.encoding = response.encoding or "utf-8"
        return response.text
