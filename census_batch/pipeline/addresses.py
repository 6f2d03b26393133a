"""Input CSV loading."""

from __future__ import annotations

from pathlib import Path

from census_batch.common.errors import ConfigError
from census_batch.common.fs import read_csv_rows
from census_batch.common.models import GeocodeAddress
from census_batch.geocoder import Geocoder

ADDRESS_COLUMNS = ("address", "city", "state", "zip")


def _clean(value: str | None) -> str | None:
    if value is None:
        return None
    value = value.strip()
    return value or None


def row_to_address(row: dict[str, str]) -> GeocodeAddress:
    return GeocodeAddress(**{column: _clean(row.get(column)) for column in ADDRESS_COLUMNS})


def load_addresses(path: Path) -> list[tuple[str | None, GeocodeAddress]]:
    if not path.exists():
        raise ConfigError(f"Input file not found: {path}")
    rows = read_csv_rows(path)
    if rows and not set(ADDRESS_COLUMNS) & set(rows[0]):
        raise ConfigError(f"Input file {path} has none of the columns: {', '.join(ADDRESS_COLUMNS)}")
    return [(_clean(row.get("id")), row_to_address(row)) for row in rows]


def enqueue_addresses(geocoder: Geocoder, entries: list[tuple[str | None, GeocodeAddress]]) -> list[str]:
    """Queue every entry, assigning ids to rows without one; returns the ids in order."""
    ids = []
    for request_id, address in entries:
        if request_id is None:
            ids.append(geocoder.add_unique(address))
        else:
            geocoder.add(request_id, address)
            ids.append(request_id)
    return ids
