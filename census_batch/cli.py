"""CLI entrypoint for the Census batch geocoder."""

from __future__ import annotations

import argparse
import asyncio
import logging
import sys
from pathlib import Path

from census_batch.common.config_loader import load_config
from census_batch.common.constants import EXIT_HARD_FAIL, EXIT_PARTIAL, EXIT_SUCCESS, MAX_BATCH_SIZE
from census_batch.common.errors import GeocoderError, RequestError
from census_batch.common.fs import ensure_dir
from census_batch.common.ids import generate_run_id
from census_batch.common.logging import build_logger, close_logger, log_event
from census_batch.common.models import GeocodeResponse
from census_batch.common.time_utils import utc_today_iso
from census_batch.geocoder import Geocoder
from census_batch.pipeline.addresses import enqueue_addresses, load_addresses
from census_batch.pipeline.export import write_results_csv
from census_batch.pipeline.reports import write_run_summary


def batch_size_arg(value: str) -> int:
    try:
        size = int(value)
    except ValueError as exc:
        raise argparse.ArgumentTypeError(f"invalid batch size: {value!r}") from exc
    if not 1 <= size <= MAX_BATCH_SIZE:
        raise argparse.ArgumentTypeError(f"batch size must be in 1..{MAX_BATCH_SIZE}, got {size}")
    return size


def parse_args(argv: list[str]) -> argparse.Namespace:
    parser = argparse.ArgumentParser(prog="census-batch", description=__doc__)
    parser.add_argument("command", choices=["geocode"])
    parser.add_argument("--input", required=True)
    parser.add_argument("--output", required=True)
    parser.add_argument("--config-dir", default="./config")
    parser.add_argument("--overlay-config-dir", default=None)
    parser.add_argument("--benchmark", default=None)
    parser.add_argument("--geography", default=None)
    parser.add_argument("--batch-size", type=batch_size_arg, default=None)
    parser.add_argument("--data-dir", default="./data")
    parser.add_argument("--run-id", default=None)
    parser.add_argument("--log-level", default="INFO", choices=["DEBUG", "INFO", "WARN", "ERROR"])
    parser.add_argument("--strict", action="store_true")
    return parser.parse_args(argv)


async def geocode_all(
    geocoder: Geocoder,
    *,
    batch_size: int,
    data_dir: Path,
    run_id: str,
    logger: logging.Logger,
    strict: bool = False,
) -> tuple[list[GeocodeResponse], list[dict]]:
    """Flush the queue batch by batch.

    A batch whose retries run out is written to ``out/failed`` for manual
    resubmission and skipped, unless ``strict`` is set.
    """
    responses: list[GeocodeResponse] = []
    failed_batches: list[dict] = []
    batch_number = 0

    while geocoder.has_geocode_batch():
        batch_number += 1
        size = min(geocoder.current_batch_size(), batch_size)
        try:
            responses.extend(await geocoder.geocode(batch_size))
        except RequestError as exc:
            failed_path = data_dir / "out" / "failed" / f"{run_id}-batch-{batch_number:04d}.csv"
            ensure_dir(failed_path.parent)
            failed_path.write_text(exc.csv, encoding="utf-8")
            details = exc.to_dict()
            details.pop("csv")
            failed_batches.append({"batch": batch_number, "size": size, "path": str(failed_path), **details})
            log_event(
                logger,
                f"batch {batch_number} failed",
                level=logging.ERROR,
                run_id=run_id,
                event="BATCH_FAIL",
                status="error",
                batch_size=size,
                error_code=exc.error_code,
            )
            if strict:
                raise

    return responses, failed_batches


def run_command(args: argparse.Namespace, *, transport=None) -> int:
    run_id = args.run_id or generate_run_id()
    data_dir = Path(args.data_dir)
    config_dir = Path(args.config_dir)
    overlay_config_dir = Path(args.overlay_config_dir) if args.overlay_config_dir else None

    logger = build_logger(run_id, data_dir=data_dir, level=args.log_level)
    try:
        try:
            config = load_config(config_dir, overlay_config_dir=overlay_config_dir)
            entries = load_addresses(Path(args.input))
        except GeocoderError as exc:
            log_event(logger, str(exc), level=logging.ERROR, run_id=run_id, event="RUN_FAIL", status="error", error_code=exc.error_code)
            return EXIT_HARD_FAIL

        geocoder = Geocoder(args.benchmark, args.geography, transport=transport, config=config)
        ids = enqueue_addresses(geocoder, entries)
        batch_size = args.batch_size or config.batch_size
        log_event(logger, "run start", run_id=run_id, event="RUN_START", status="ok", rows_in=len(ids), batch_size=batch_size)

        try:
            responses, failed_batches = asyncio.run(
                geocode_all(
                    geocoder,
                    batch_size=batch_size,
                    data_dir=data_dir,
                    run_id=run_id,
                    logger=logger,
                    strict=args.strict,
                )
            )
        except RequestError:
            return EXIT_HARD_FAIL

        write_results_csv(Path(args.output), responses)
        matched = sum(1 for request_id in ids if geocoder.get(request_id) is not None)
        missed = sum(1 for request_id in ids if geocoder.no_match(request_id))
        write_run_summary(
            data_dir,
            run_id=run_id,
            run_date=utc_today_iso(),
            requested=len(ids),
            matched=matched,
            missed=missed,
            failed_batches=failed_batches,
        )
        log_event(logger, "run end", run_id=run_id, event="RUN_END", status="ok", rows_in=len(ids), rows_out=len(responses), matched=matched, missed=missed)

        if failed_batches:
            return EXIT_PARTIAL
        return EXIT_SUCCESS
    finally:
        close_logger(logger)


def main(argv: list[str] | None = None) -> int:
    args = parse_args(argv or sys.argv[1:])
    try:
        return run_command(args)
    except GeocoderError:
        return EXIT_HARD_FAIL


if __name__ == "__main__":
    raise SystemExit(main())
