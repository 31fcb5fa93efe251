from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class TraceContext:
    trace_id: str | None
    request_id: str | None


EMPTY_TRACE_CONTEXT = TraceContext(trace_id=None, request_id=None)
