import argparse

import pytest

from census_batch.cli import batch_size_arg, parse_args


def test_parse_args_defaults():
    args = parse_args(["geocode", "--input", "in.csv", "--output", "out.csv"])
    assert args.command == "geocode"
    assert args.config_dir == "./config"
    assert args.overlay_config_dir is None
    assert args.batch_size is None
    assert args.strict is False


def test_parse_args_accepts_overrides():
    args = parse_args(
        [
            "geocode",
            "--input",
            "in.csv",
            "--output",
            "out.csv",
            "--benchmark",
            "2021",
            "--geography",
            "2020",
            "--batch-size",
            "250",
            "--overlay-config-dir",
            "config/live",
        ]
    )
    assert args.benchmark == "2021"
    assert args.geography == "2020"
    assert args.batch_size == 250
    assert args.overlay_config_dir == "config/live"


@pytest.mark.parametrize("value", ["0", "-1", "10001", "ten"])
def test_parse_args_rejects_batch_size_out_of_range(value):
    with pytest.raises(SystemExit):
        parse_args(["geocode", "--input", "in.csv", "--output", "out.csv", "--batch-size", value])


@pytest.mark.parametrize("value, expected", [("1", 1), ("10000", 10000)])
def test_parse_args_accepts_batch_size_bounds(value, expected):
    args = parse_args(["geocode", "--input", "in.csv", "--output", "out.csv", "--batch-size", value])
    assert args.batch_size == expected


def test_batch_size_arg_error_message():
    with pytest.raises(argparse.ArgumentTypeError, match="1..10000"):
        batch_size_arg("-1")
