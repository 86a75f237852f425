import logging
from pathlib import Path
from typing import Iterable, Optional, Union

from contentgen.models import BatchSummary, FolderStats, Outcome
from contentgen.notifier import EmailNotifier

logger = logging.getLogger(__name__)


def folder_stats(output_dir: Union[str, Path]) -> Optional[FolderStats]:
    """Count visible files in output_dir; None if the directory does not exist."""
    path = Path(output_dir)
    if not path.is_dir():
        return None
    files = [p for p in path.iterdir() if p.is_file() and not p.name.startswith(".")]
    return FolderStats(file_count=len(files), total_bytes=sum(p.stat().st_size for p in files))


def build_summary(outcomes: Iterable[Outcome], output_dir: Optional[Union[str, Path]] = None) -> BatchSummary:
    outcomes = list(outcomes)
    return BatchSummary(
        total=len(outcomes),
        succeeded=[o.name for o in outcomes if o.success],
        failed=[o for o in outcomes if not o.success],
        folder_stats=folder_stats(output_dir) if output_dir is not None else None,
    )


def render_subject(summary: BatchSummary) -> str:
    return f"Content Generation Report: {len(summary.succeeded)} Success, {len(summary.failed)} Failed"


def render_body(summary: BatchSummary) -> str:
    lines = [
        "Content Generation Batch Report",
        "-------------------------------",
        f"Total Processed: {summary.total}",
        f"Success: {len(summary.succeeded)}",
        f"Failed: {len(summary.failed)}",
        "",
        "Successful Files:",
    ]
    lines.extend(f"- {name}" for name in summary.succeeded)
    lines.append("")
    lines.append("Failed Files:")
    lines.extend(f"- {o.name}: {o.error}" for o in summary.failed)

    if summary.folder_stats is not None:
        lines.append("")
        lines.append("Output Folder:")
        lines.append(f"- Files: {summary.folder_stats.file_count}")
        lines.append(f"- Size: {summary.folder_stats.total_bytes} bytes")

    return "\n".join(lines) + "\n"


def send_report(summary: BatchSummary, notifier: EmailNotifier) -> bool:
    """Hand the summary to the notifier. A failed send is logged, never raised."""
    subject = render_subject(summary)
    logger.info(subject)
    try:
        return notifier.send(subject, render_body(summary))
    except Exception as e:
        logger.exception(f"Unexpected error sending batch report: {e}")
        return False
