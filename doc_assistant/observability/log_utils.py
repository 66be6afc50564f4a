"""
Structured logging helpers for indexing and request failures.

Flattens domain objects (chunks, reports, exception details) into short
string fields passed through `extra`, so log lines stay bounded no matter
how large a repository or failure list gets.

Dependencies: logging (stdlib), doc_assistant.core.exceptions, doc_assistant.models
System role: Logging helper functions
"""

import logging
from collections.abc import Mapping, Sequence
from typing import Any

from pydantic import BaseModel

from doc_assistant.core.exceptions import DocAssistantException
from doc_assistant.models.chunk import Chunk
from doc_assistant.models.indexing import IndexingReport

# Failures listed by path in a report summary
MAX_REPORTED_FAILURES = 5


def summarize(value: Any, max_length: int = 200) -> str:
    """
    Short string form of a value for a log field.

    Chunks become `path#index`, other models their class name, collections
    their size; long strings are cut at max_length.
    """
    if value is None:
        return "None"
    if isinstance(value, Chunk):
        text = f"{value.file_path}#{value.chunk_index}"
    elif isinstance(value, BaseModel):
        text = type(value).__name__
    elif isinstance(value, str):
        text = value
    elif isinstance(value, Mapping):
        text = f"{len(value)} keys"
    elif isinstance(value, Sequence):
        text = f"{len(value)} items"
    else:
        text = str(value)

    if len(text) > max_length:
        return f"{text[:max_length]}... ({len(text)} chars)"
    return text


def _fields(context: Mapping[str, Any]) -> dict[str, str]:
    return {key: summarize(val) for key, val in context.items()}


def log_failure(logger: logging.Logger, message: str, exc: Exception, **context) -> None:
    """
    Log a caught exception with its type, message and domain details.

    Domain errors are expected operational failures (a repository that
    cannot be fetched, a store that cannot be written) and go to WARNING
    without a traceback; anything else is logged at ERROR with one.
    """
    fields = _fields(context)
    fields["error_type"] = type(exc).__name__
    if isinstance(exc, DocAssistantException):
        fields["error_msg"] = exc.message
        fields.update({f"error_{key}": summarize(val) for key, val in exc.details.items()})
        logger.warning(f"{message}: {exc}", extra=fields)
    else:
        fields["error_msg"] = str(exc)
        logger.error(f"{message}: {exc}", exc_info=exc, extra=fields)


def log_indexing_report(logger: logging.Logger, report: IndexingReport, scope: str) -> None:
    """One INFO line with the counts of a finished run, WARNING when files failed."""
    failed_paths = [
        failure.file_path or f"{failure.repository} (listing)"
        for failure in report.failures[:MAX_REPORTED_FAILURES]
    ]
    level = logging.WARNING if report.failures else logging.INFO
    message = (
        f"Indexed {scope}: {report.files_processed}/{report.files_total} files, "
        f"{report.files_failed} failed, {report.chunks_written} chunks in {report.duration_ms}ms"
    )
    if failed_paths:
        more = len(report.failures) - len(failed_paths)
        message += f" (failed: {', '.join(failed_paths)}" + (f" and {more} more)" if more else ")")
    logger.log(
        level,
        message,
        extra=_fields(
            {
                "files_total": report.files_total,
                "files_failed": report.files_failed,
                "chunks_written": report.chunks_written,
                "repositories_skipped": report.repositories_skipped,
                "duration_ms": report.duration_ms,
            }
        ),
    )
