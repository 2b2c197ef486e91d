# ungd_nlp/utils/telemetry.py
from __future__ import annotations
import contextlib
import logging
import time
from typing import Any, Iterator

from opentelemetry import trace

logger = logging.getLogger("ungd_nlp.obs")

_tracer = trace.get_tracer("ungd_nlp")


@contextlib.contextmanager
def step(name: str, **attrs: Any) -> Iterator[trace.Span]:
    """Run one pipeline stage inside a span and log how long it took."""
    start = time.perf_counter()
    with _tracer.start_as_current_span(name) as span:
        for k, v in attrs.items():
            if v is not None:
                span.set_attribute(f"ungd.{k}", v)
        logger.info("▶ %s started", name)
        try:
            yield span
            span.set_attribute("ungd.success", True)
        except Exception as e:
            span.record_exception(e)
            span.set_attribute("ungd.success", False)
            span.set_status(trace.Status(trace.StatusCode.ERROR, str(e)))
            logger.error("❌ %s failed: %s", name, e)
            raise
        finally:
            elapsed = time.perf_counter() - start
            span.set_attribute("ungd.duration_ms", elapsed * 1000)
        logger.info("✅ %s completed in %.2f seconds", name, elapsed)
