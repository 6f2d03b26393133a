import json
import logging
from pathlib import Path

from census_batch.common.logging import JsonLineFormatter, build_logger, close_logger, get_logger, log_event


def test_json_line_formatter_has_stable_fields():
    record = logging.LogRecord("census_batch.test", logging.INFO, __file__, 1, "hello %s", ("world",), None)
    record.event = "BATCH_DONE"
    record.matched = 3

    payload = json.loads(JsonLineFormatter().format(record))

    assert payload["message"] == "hello world"
    assert payload["event"] == "BATCH_DONE"
    assert payload["matched"] == 3
    assert payload["attempt"] is None
    assert payload["level"] == "INFO"


def test_get_logger_namespaces_module_loggers():
    assert get_logger("census_batch.geocoder").name == "census_batch.geocoder"
    assert get_logger("other").name == "census_batch.other"


def test_build_logger_writes_jsonl_file(tmp_path: Path):
    logger = build_logger("run-log", data_dir=tmp_path)
    log_event(get_logger("census_batch.test"), "batch submitted", event="BATCH_SUBMIT", batch_size=2)
    close_logger(logger)

    lines = (tmp_path / "run_meta" / "run-log.log.jsonl").read_text(encoding="utf-8").splitlines()
    payload = json.loads(lines[-1])
    assert payload["event"] == "BATCH_SUBMIT"
    assert payload["batch_size"] == 2
