"""
Tracing configuration for promptform.

Uses the OpenAI Agents SDK tracing hooks. With no local processors, traces go
to the OpenAI dashboard when an API key is configured.
"""

import json
import logging
from typing import Any

from agents import set_tracing_disabled
from agents.tracing import Span, Trace, TracingProcessor, set_trace_processors

logger = logging.getLogger("promptform.tracing")


class LoggingTracingProcessor(TracingProcessor):
    """Writes trace and span boundaries to the `promptform.tracing` logger."""

    def __init__(self, verbose: bool = False):
        self.verbose = verbose

    def on_trace_start(self, trace: Trace) -> None:
        logger.info("[TRACE START] %s (ID: %s...)", trace.name, trace.trace_id[:8])

    def on_trace_end(self, trace: Trace) -> None:
        logger.info("[TRACE END] %s", trace.name)

    def on_span_start(self, span: Span[Any]) -> None:
        if self.verbose:
            logger.debug("[SPAN START] %s", span.span_data)

    def on_span_end(self, span: Span[Any]) -> None:
        if self.verbose:
            logger.debug("[SPAN END] %s", span.span_data)

    def shutdown(self) -> None:
        pass

    def force_flush(self) -> None:
        pass


class FileTracingProcessor(TracingProcessor):
    """Appends one JSON line per finished trace to `file_path`."""

    def __init__(self, file_path: str = "traces.jsonl"):
        self.file_path = file_path
        self._traces: dict[str, dict[str, Any]] = {}

    def on_trace_start(self, trace: Trace) -> None:
        self._traces[trace.trace_id] = {
            "trace_id": trace.trace_id,
            "name": trace.name,
            "spans": [],
        }

    def on_trace_end(self, trace: Trace) -> None:
        record = self._traces.pop(trace.trace_id, None)
        if record is None:
            return
        with open(self.file_path, "a") as f:
            f.write(json.dumps(record) + "\n")

    def on_span_start(self, span: Span[Any]) -> None:
        pass

    def on_span_end(self, span: Span[Any]) -> None:
        record = self._traces.get(span.trace_id)
        if record is not None:
            record["spans"].append({
                "span_id": span.span_id,
                "data": str(span.span_data),
            })

    def shutdown(self) -> None:
        pass

    def force_flush(self) -> None:
        pass


def setup_tracing(
    enabled: bool = True,
    console: bool = False,
    verbose: bool = False,
    file_path: str | None = None,
) -> None:
    """
    Configure tracing for promptform.

    Args:
        enabled: Whether tracing is enabled.
        console: Whether to log trace boundaries locally.
        verbose: Whether to log span details as well.
        file_path: Optional JSON Lines file to write traces to.

    Example:
        >>> from promptform.tracing import setup_tracing
        >>> setup_tracing(console=True, verbose=True)
    """
    if not enabled:
        set_tracing_disabled(True)
        return

    set_tracing_disabled(False)

    processors: list[TracingProcessor] = []

    if console:
        processors.append(LoggingTracingProcessor(verbose=verbose))

    if file_path:
        processors.append(FileTracingProcessor(file_path=file_path))

    if processors:
        set_trace_processors(processors)
