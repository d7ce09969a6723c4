"""Run summary rendering and completion logging."""

from __future__ import annotations

from core.logging_config import get_logger
from core.types import RunSummary

_LOGGER = get_logger(__name__)


def render_run_summary(summary: RunSummary) -> str:
    """Render a run summary into stable multi-line text for CLI output."""
    if summary.operation == "export" and summary.total_count == 0:
        return "No keys were found in the database, nothing was exported."
    elapsed_ms = round(summary.elapsed_seconds * 1000)
    lines: list[str] = []
    if summary.flushed_key_count:
        lines.append(f"Flushed {summary.flushed_key_count} key(s)")
    lines.append(
        f"{summary.operation.capitalize()} finished in {elapsed_ms}ms "
        f"(success: {summary.succeeded_count}, "
        f"failed: {summary.failed_count}, "
        f"total: {summary.total_count})"
    )
    for outcome in summary.outcomes:
        if outcome.status == "succeeded":
            continue
        lines.append(
            f"[{outcome.status.upper()}] {outcome.key} "
            f"({outcome.key_type or 'unknown'}) :: {outcome.reason}"
        )
    if summary.output_path:
        lines.append(f"output_path={summary.output_path}")
    return "\n".join(lines)


def log_run_completion(summary: RunSummary) -> None:
    """Log pipeline completion with aggregate counts."""
    _LOGGER.info(
        f"{summary.operation}_completed",
        succeeded=summary.succeeded_count,
        skipped=summary.skipped_count,
        failed=summary.failed_count,
        total=summary.total_count,
        elapsed_seconds=round(summary.elapsed_seconds, 3),
        output_path=summary.output_path,
        flushed_key_count=summary.flushed_key_count,
    )
