"""Turn decoded result rows into responses."""

from __future__ import annotations

from census_batch.common.models import GeocodeResponse, MatchType

ID_COLUMN = 0
QUERY_COLUMN = 1
MATCH_TYPE_COLUMN = 2
MATCH_QUALITY_COLUMN = 3
ADDRESS_COLUMN = 4
LONLAT_COLUMN = 5
ROADWAY_COLUMN = 6
SIDE_COLUMN = 7
GEOGRAPHY_COLUMNS = 8


def parse_lonlat(value: str) -> tuple[float, float]:
    """Split the combined ``"lon,lat"`` column; returns ``(lat, lon)``."""
    lonlat = value.split(",")
    return float(lonlat[1]), float(lonlat[0])


def build_response(row: list[str]) -> GeocodeResponse:
    lat, lon = parse_lonlat(row[LONLAT_COLUMN])
    response = GeocodeResponse(
        id=row[ID_COLUMN],
        query=row[QUERY_COLUMN],
        address=row[ADDRESS_COLUMN],
        roadway=row[ROADWAY_COLUMN],
        side=row[SIDE_COLUMN],
        lat=lat,
        lon=lon,
        exact=row[MATCH_QUALITY_COLUMN] == "Exact",
    )
    if len(row) > GEOGRAPHY_COLUMNS:
        response.state = row[8]
        response.district = row[9]
        response.tract = row[10]
        response.block = row[11]
    return response


def match_type(row: list[str]) -> str:
    return row[MATCH_TYPE_COLUMN]


def is_match(row: list[str]) -> bool:
    return match_type(row) == MatchType.MATCH


def is_tie(row: list[str]) -> bool:
    return match_type(row) == MatchType.TIE
