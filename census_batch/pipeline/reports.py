"""Run report."""

from __future__ import annotations

from pathlib import Path

from census_batch.common.fs import write_json


def write_run_summary(
    data_dir: Path,
    *,
    run_id: str,
    run_date: str,
    requested: int,
    matched: int,
    missed: int,
    failed_batches: list[dict],
) -> Path:
    failed_requests = sum(batch["size"] for batch in failed_batches)
    status = "success"
    if failed_batches:
        status = "partial" if matched or missed else "error"

    summary_path = data_dir / "out" / "reports" / "run_summary.json"
    payload = {
        "run_id": run_id,
        "run_date": run_date,
        "status": status,
        "totals": {
            "requested": requested,
            "matched": matched,
            "missed": missed,
            "unresolved": requested - matched - missed - failed_requests,
            "failed": failed_requests,
        },
        "failed_batch_count": len(failed_batches),
        "failed_batches": failed_batches,
    }
    write_json(summary_path, payload)
    return summary_path
