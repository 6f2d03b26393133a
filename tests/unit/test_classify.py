import pytest

from census_batch.batch.classify import build_response, is_match, is_tie, parse_lonlat


def test_build_response_swaps_lonlat_and_flags_exact():
    row = ["a", "1 Main St, City, ST", "Match", "Exact", "1 MAIN ST", "-77.03,38.90", "MAIN ST", "L"]

    response = build_response(row)

    assert response.lat == 38.90
    assert response.lon == -77.03
    assert response.exact is True
    assert response.query == "1 Main St, City, ST"
    assert response.address == "1 MAIN ST"
    assert response.roadway == "MAIN ST"
    assert response.side == "L"
    assert response.state is None
    assert response.has_geography is False


def test_build_response_non_exact_match():
    row = ["a", "q", "Match", "Non_Exact", "A", "1.5,2.5", "R", "R"]
    assert build_response(row).exact is False


def test_build_response_with_geography_columns():
    row = ["a", "q", "Match", "Exact", "A", "-77.03,38.90", "76225813", "L", "11", "001", "006202", "1031"]

    response = build_response(row)

    assert (response.state, response.district, response.tract, response.block) == ("11", "001", "006202", "1031")
    assert response.has_geography is True


def test_match_type_predicates():
    assert is_match(["a", "q", "Match"])
    assert is_tie(["a", "q", "Tie"])
    assert not is_match(["a", "q", "No_Match"])


def test_malformed_rows_raise():
    with pytest.raises(ValueError):
        parse_lonlat("not-a-number,1")
    with pytest.raises(IndexError):
        build_response(["a", "q", "Match"])
