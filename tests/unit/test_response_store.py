from census_batch.batch.store import ResponseStore
from census_batch.common.models import GeocodeResponse


def _response(request_id: str, lat: float = 1.0) -> GeocodeResponse:
    return GeocodeResponse(id=request_id, query="q", address="A", roadway="1", side="L", lat=lat, lon=2.0)


def test_unknown_id_is_neither_cached_nor_missed():
    store = ResponseStore()
    assert store.get("x") is None
    assert store.is_missed("x") is False


def test_record_match_overwrites_previous_value():
    store = ResponseStore()
    first = _response("x", lat=1.0)
    second = _response("x", lat=5.0)
    store.record_match("x", first)
    store.record_match("x", second)
    assert store.get("x") is second


def test_disabled_store_records_nothing_but_keeps_existing_entries():
    store = ResponseStore()
    kept = _response("x")
    store.record_match("x", kept)

    store.enabled = False
    store.record_match("y", _response("y"))
    store.record_miss("z")

    assert store.get("x") is kept
    assert store.get("y") is None
    assert store.is_missed("z") is False


def test_clear_keeps_missed_ids():
    store = ResponseStore()
    store.record_match("x", _response("x"))
    store.record_miss("y")

    store.clear()

    assert store.get("x") is None
    assert len(store) == 0
    assert store.is_missed("y") is True
