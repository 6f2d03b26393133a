"""Result CSV export."""

from __future__ import annotations

from pathlib import Path

from census_batch.common.fs import write_csv
from census_batch.common.models import GeocodeResponse

RESULT_HEADERS = [
    "id",
    "query",
    "address",
    "lat",
    "lon",
    "exact",
    "roadway",
    "side",
    "state",
    "district",
    "tract",
    "block",
]


def _serialize_row(response: GeocodeResponse) -> dict:
    row = response.to_dict()
    out = {}
    for key in RESULT_HEADERS:
        value = row.get(key)
        if value is None:
            out[key] = ""
        elif isinstance(value, bool):
            out[key] = "true" if value else "false"
        else:
            out[key] = value
    return out


def write_results_csv(out_path: Path, responses: list[GeocodeResponse]) -> Path:
    sorted_responses = sorted(responses, key=lambda response: response.id)
    write_csv(out_path, RESULT_HEADERS, [_serialize_row(response) for response in sorted_responses])
    return out_path
