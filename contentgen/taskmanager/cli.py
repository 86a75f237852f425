"""contentgen-run command-line entry-point and reusable `run()` helper.

One invocation processes one batch: fetch pending files, generate content for
each with a pool of workers, write the results, mark the files done upstream
and mail a summary.

Example
-------
>>> GEMINI_API_KEY=... GEMINI_API_KEY_2=... contentgen-run \
        --batch-size 20 --concurrency 3 --output generated-content

Users who prefer Python can also import ``run`` directly::

    from contentgen.config import Settings
    from contentgen.taskmanager.cli import run

    run(Settings(batch_size=5), environ=os.environ)
"""
from __future__ import annotations

import argparse
import logging
import os
import sys
import time
from typing import Callable, Mapping, Optional

from dotenv import load_dotenv

from contentgen.client import FilesClient
from contentgen.config import Settings
from contentgen.models import BatchSummary
from contentgen.notifier import EmailNotifier, get_email_config_from_env
from contentgen.report import build_summary, send_report
from contentgen.taskmanager.backend import BackendManager, GeminiBackendManager
from contentgen.taskmanager.credentials import CredentialRotator
from contentgen.taskmanager.generation import GenerationClient
from contentgen.taskmanager.processor import FileProcessor
from contentgen.taskmanager.taskmanager import QueueRunner

logger = logging.getLogger(__name__)

FAILURE_SUBJECT = "Content Generation Failed"


###############################################################################
# Internal helpers
###############################################################################

def _quiet_http_loggers():
    for name in ("urllib3", "httpx", "httpcore", "openai"):
        logging.getLogger(name).setLevel(logging.WARNING)


def _report_fatal(notifier: EmailNotifier, error: Exception) -> None:
    try:
        notifier.send(FAILURE_SUBJECT, f"Fatal error: {error}")
    except Exception as e:
        logger.error(f"Could not send failure notification: {e}")

###############################################################################
# Public runner API (can be imported)
###############################################################################

def run(
    settings: Settings,
    *,
    environ: Mapping[str, str],
    files_client: Optional[FilesClient] = None,
    backend: Optional[BackendManager] = None,
    notifier: Optional[EmailNotifier] = None,
    sleep: Callable[[float], None] = time.sleep,
) -> Optional[BatchSummary]:
    """
    Process one batch to completion.

    Credentials are resolved before any network call, so a missing key aborts
    the run without touching the files API.

    Returns:
        The batch summary, or None when there was nothing to do and no
        empty-batch report was requested.

    Raises:
        ConfigurationError: no credentials or invalid settings
        requests.RequestException: the pending batch could not be fetched
    """
    rotator = CredentialRotator.from_environ(environ, settings.credential_prefix)
    logger.info(f"Loaded {len(rotator)} API credentials")

    notifier = notifier or EmailNotifier(None)
    if not notifier.enabled:
        logger.info("Email is not configured; the batch report will only be logged")
    files_client = files_client or FilesClient(settings.api_base, timeout=settings.request_timeout)

    logger.info("Fetching pending files...")
    items = files_client.get_pending(settings.batch_size)

    if not items:
        logger.info("No pending files found.")
        if not settings.notify_empty_batch:
            return None
        summary = build_summary([], settings.output_dir)
        send_report(summary, notifier)
        return summary

    logger.info(f"Found {len(items)} pending files to process.")

    owns_backend = backend is None
    if backend is None:
        backend = GeminiBackendManager(
            base_url=settings.generation_base_url,
            request_timeout=settings.request_timeout,
        )

    generator = GenerationClient(
        backend,
        rotator,
        max_attempts=settings.max_attempts,
        request_delay=settings.request_delay,
        backoff_base=settings.backoff_base,
        sleep=sleep,
    )
    processor = FileProcessor(files_client, generator, settings.output_dir, settings.model)

    try:
        outcomes = QueueRunner(num_workers=settings.concurrency).run(items, processor.process_file)
    finally:
        if owns_backend:
            backend.close()

    summary = build_summary(outcomes, settings.output_dir)
    send_report(summary, notifier)
    logger.info("Batch processing complete.")
    return summary

###############################################################################
# CLI entry-point
###############################################################################

def _build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(
        prog="contentgen-run",
        description="Generate content for pending files and report back",
        formatter_class=argparse.ArgumentDefaultsHelpFormatter,
    )

    # source / sink
    p.add_argument("--api-base", help="Files API base URL (env FILES_API_BASE)")
    p.add_argument("--output", dest="output_dir", help="Directory for generated files (env OUTPUT_DIR)")
    p.add_argument("--env-file", default=".env", help="dotenv file loaded before reading the environment")

    # model
    p.add_argument("--model", help="Generation model name (env GEMINI_MODEL)")
    p.add_argument("--credential-prefix", help="Prefix of the API key variables (env CREDENTIAL_PREFIX)")

    # queue & retries
    p.add_argument("--batch-size", type=int, help="Maximum pending files per run (env BATCH_SIZE)")
    p.add_argument("--concurrency", type=int, help="Number of workers (env CONCURRENCY)")
    p.add_argument("--max-attempts", type=int, help="Generation attempts per file (env MAX_ATTEMPTS)")
    p.add_argument("--request-delay", type=float, help="Seconds before every generation call (env REQUEST_DELAY)")
    p.add_argument("--notify-empty-batch", action="store_true", default=None,
                   help="Send a zero-count report when nothing is pending (env NOTIFY_EMPTY_BATCH)")

    p.add_argument("-v", "--verbose", action="store_true", help="Debug logging")
    return p


def main(argv: Optional[list[str]] = None) -> int:
    args = _build_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(message)s",
    )
    _quiet_http_loggers()

    load_dotenv(args.env_file)
    notifier = EmailNotifier(get_email_config_from_env(os.environ))

    logger.info("Starting content generation batch...")
    try:
        settings = Settings.from_env(os.environ, overrides={
            "api_base": args.api_base,
            "output_dir": args.output_dir,
            "model": args.model,
            "credential_prefix": args.credential_prefix,
            "batch_size": args.batch_size,
            "concurrency": args.concurrency,
            "max_attempts": args.max_attempts,
            "request_delay": args.request_delay,
            "notify_empty_batch": args.notify_empty_batch,
        })
        run(settings, environ=os.environ, notifier=notifier)
    except Exception as e:
        logger.exception(f"Fatal error in generation run: {e}")
        _report_fatal(notifier, e)
        return 1

    return 0


if __name__ == "__main__":
    sys.exit(main())
