"""
cep_weather.observability.tracing

Span factory capability injected into the orchestrator and the gateway.

Responsibilities:
- Define the `SpanFactory`/`Span` interfaces the request path depends on.
- Provide a no-op implementation (tests, tracing disabled).
- Provide an OpenTelemetry-API implementation that continues an incoming
  W3C trace context and exposes headers for outbound propagation.
"""

from __future__ import annotations

from collections.abc import Iterator, Mapping
from contextlib import AbstractContextManager, contextmanager
from typing import Protocol

from opentelemetry import propagate, trace
from opentelemetry.trace import Status, StatusCode

AttributeValue = str | int | float | bool


class Span(Protocol):
    def set_attribute(self, key: str, value: AttributeValue) -> None: ...

    def record_exception(self, exc: BaseException) -> None: ...

    def propagation_headers(self) -> dict[str, str]: ...


class SpanFactory(Protocol):
    def start_span(
        self, name: str, *, carrier: Mapping[str, str] | None = None
    ) -> AbstractContextManager[Span]:
        """
        Open a span that ends when the context manager exits.

        `carrier` holds incoming request headers; when given, the span continues
        the trace they describe. Without it the span nests under the current one.
        """
        ...


class _NoopSpan:
    def set_attribute(self, key: str, value: AttributeValue) -> None:
        return None

    def record_exception(self, exc: BaseException) -> None:
        return None

    def propagation_headers(self) -> dict[str, str]:
        return {}


_NOOP_SPAN = _NoopSpan()


class NoopSpanFactory:
    @contextmanager
    def start_span(
        self, name: str, *, carrier: Mapping[str, str] | None = None
    ) -> Iterator[Span]:
        yield _NOOP_SPAN


class _OtelSpan:
    def __init__(self, span: trace.Span) -> None:
        self._span = span

    def set_attribute(self, key: str, value: AttributeValue) -> None:
        self._span.set_attribute(key, value)

    def record_exception(self, exc: BaseException) -> None:
        self._span.record_exception(exc)
        self._span.set_status(Status(StatusCode.ERROR, str(exc)))

    def propagation_headers(self) -> dict[str, str]:
        # Called while this span is current, so the injected parent is this span.
        headers: dict[str, str] = {}
        propagate.inject(headers)
        return headers


class OtelSpanFactory:
    """
    Spans via the OpenTelemetry API. SDK/exporter setup belongs to the deployment;
    without it the global tracer is a no-op and only context propagation remains.
    """

    def __init__(self, *, service_name: str, tracer: trace.Tracer | None = None) -> None:
        self._tracer = tracer or trace.get_tracer(service_name)

    @contextmanager
    def start_span(
        self, name: str, *, carrier: Mapping[str, str] | None = None
    ) -> Iterator[Span]:
        ctx = propagate.extract(dict(carrier)) if carrier is not None else None
        with self._tracer.start_as_current_span(name, context=ctx) as span:
            yield _OtelSpan(span)


# --- Module Notes -----------------------------------------------------------
# Request ids (observability.middleware) and trace ids are independent: the former
# correlates log lines, the latter correlates spans across services.
