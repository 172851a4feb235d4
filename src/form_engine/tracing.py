"""
Tracing configuration for the form engine.

Submissions are traced with the OpenAI Agents SDK tracing primitives:
each ``FormEngine.submit`` runs inside a trace, with spans for the
validation pass and for the submit handler call. Tracing is off unless
``FORM_ENGINE_ENABLE_TRACING=true`` (or ``update_config``).
"""

import logging
from typing import Any

from agents import custom_span, set_tracing_disabled, trace
from agents.tracing import (
    Span,
    Trace,
    TracingProcessor,
    set_trace_processors,
)

from form_engine.config import get_config

logger = logging.getLogger("form-engine.trace")


class ConsoleTracingProcessor(TracingProcessor):
    """
    A tracing processor that writes traces to the log.

    Useful for development and debugging.
    """

    def __init__(self, verbose: bool = False):
        """
        Initialize the console tracing processor.

        Args:
            verbose: If True, log detailed span information.
        """
        self.verbose = verbose

    def on_trace_start(self, trace: Trace) -> None:
        logger.info(f"[TRACE START] {trace.name} (ID: {trace.trace_id[:8]}...)")

    def on_trace_end(self, trace: Trace) -> None:
        logger.info(f"[TRACE END] {trace.name}")

    def on_span_start(self, span: Span[Any]) -> None:
        if self.verbose:
            logger.info(f"  ├─ [SPAN START] {span.span_data.export()}")

    def on_span_end(self, span: Span[Any]) -> None:
        if self.verbose:
            logger.info(f"  └─ [SPAN END] {span.span_data.export()}")

    def shutdown(self) -> None:
        pass

    def force_flush(self) -> None:
        pass


def setup_tracing(
    enabled: bool = True,
    console: bool = True,
    verbose: bool = False,
) -> None:
    """
    Configure tracing for the form engine.

    Args:
        enabled: Whether submissions are traced.
        console: Whether to log traces instead of exporting them.
        verbose: Whether to log detailed span information.

    Example:
        >>> from form_engine.tracing import setup_tracing
        >>> setup_tracing(console=True, verbose=True)
    """
    config = get_config()
    config.enable_tracing = enabled
    set_tracing_disabled(not enabled)

    if enabled and console:
        set_trace_processors([ConsoleTracingProcessor(verbose=verbose)])


def disable_tracing() -> None:
    """Disable all tracing."""
    setup_tracing(enabled=False)


def form_trace(name: str, metadata: dict[str, Any] | None = None):
    """Trace context for one form operation; a no-op when tracing is off."""
    config = get_config()
    return trace(
        f"{config.trace_name_prefix}.{name}",
        metadata=metadata,
        disabled=not config.enable_tracing,
    )


def form_span(name: str, data: dict[str, Any] | None = None):
    """Span inside the current form trace; a no-op when tracing is off."""
    return custom_span(name, data=data, disabled=not get_config().enable_tracing)
