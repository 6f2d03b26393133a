"""Application constants."""

USER_AGENT = "census-batch/1.0 (+batch geocoding client)"
CENSUS_GEOCODER_URL = "https://geocoding.geo.census.gov/geocoder/"

MAX_BATCH_SIZE = 10000
DEFAULT_TIMEOUT_SECONDS = 60.0
MAX_RETRIES = 3

CENSUS_BENCHMARK_CURRENT = "4"
CENSUS_BENCHMARK = {
    "current": CENSUS_BENCHMARK_CURRENT,
    "2021": "8",
    "2020": "2020",
}

CENSUS_GEOGRAPHY_CURRENT = "4"
CENSUS_GEOGRAPHY = {
    "current": CENSUS_GEOGRAPHY_CURRENT,
    "2010": "410",
    "2017": "417",
    "2018": "418",
    "2019": "419",
    "2020": "420",
    "2021": "421",
}

REQUEST_FIELDS = ("id", "address", "city", "state", "zip")

EXIT_SUCCESS = 0
EXIT_PARTIAL = 10
EXIT_HARD_FAIL = 20
JSON_LOG_FIELDS = (
    "timestamp",
    "run_id",
    "event",
    "status",
    "attempt",
    "batch_size",
    "rows_in",
    "rows_out",
    "matched",
    "missed",
    "error_code",
    "message",
)
