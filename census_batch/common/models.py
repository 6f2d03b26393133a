"""Data models shared by the batch pipeline."""

from __future__ import annotations

from dataclasses import asdict, dataclass, field
from typing import Any, Awaitable, Callable

from census_batch.common.constants import (
    CENSUS_GEOCODER_URL,
    DEFAULT_TIMEOUT_SECONDS,
    MAX_BATCH_SIZE,
    MAX_RETRIES,
    REQUEST_FIELDS,
)


class MatchType:
    MATCH = "Match"
    NO_MATCH = "No_Match"
    TIE = "Tie"


@dataclass(frozen=True)
class GeocodeAddress:
    address: str | None = None
    city: str | None = None
    state: str | None = None
    zip: str | None = None


@dataclass(frozen=True)
class GeocodeRequest:
    """One queued lookup.

    ``id`` is the correlation key for the cache and for listeners. Several
    requests may share an id; the last matching row wins in the cache and
    listeners fire once per matching row.
    """

    id: str
    address: str | None = None
    city: str | None = None
    state: str | None = None
    zip: str | None = None

    @classmethod
    def from_address(cls, request_id: str, address: GeocodeAddress) -> "GeocodeRequest":
        return cls(
            id=request_id,
            address=address.address,
            city=address.city,
            state=address.state,
            zip=address.zip,
        )

    def fields(self) -> list[str | None]:
        return [getattr(self, name) for name in REQUEST_FIELDS]


@dataclass
class GeocodeResponse:
    id: str
    query: str
    address: str
    roadway: str
    side: str
    lat: float
    lon: float
    exact: bool | None = None
    # FIPS codes, only present for geography lookups
    state: str | None = None
    district: str | None = None
    tract: str | None = None
    block: str | None = None

    @property
    def has_geography(self) -> bool:
        return self.state is not None

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


GeocodeListener = Callable[[GeocodeResponse], Any]
GeocodeAsyncListener = Callable[[GeocodeResponse], Awaitable[Any]]


@dataclass(frozen=True)
class GeocoderConfig:
    benchmark: str = "current"
    geography: str | None = None
    timeout_seconds: float = DEFAULT_TIMEOUT_SECONDS
    retries: int = MAX_RETRIES
    batch_size: int = MAX_BATCH_SIZE
    base_url: str = field(default=CENSUS_GEOCODER_URL)
