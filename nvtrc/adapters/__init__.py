"""
Trace event adapters.

Adapters turn decoded captures into generic TraceEvent objects for
timeline viewers.
"""

from .base import (
    TraceEvent,
    TraceInfo,
    StringPool,
    INVALID_ID,
    DURATION_UNSET,
    TRACE_FLAG_AUTOGEN_COLOR,
)
from .nvtrc_adapter import (
    EVENT_SYSTEM,
    EVENT_COMM,
    EVENT_USER_COMM,
    event_name,
    adapt,
    adapt_trace_info,
    adapt_events,
    iter_events,
    read_nvtrc_file,
)

__all__ = [
    'TraceEvent',
    'TraceInfo',
    'StringPool',
    'INVALID_ID',
    'DURATION_UNSET',
    'TRACE_FLAG_AUTOGEN_COLOR',
    'EVENT_SYSTEM',
    'EVENT_COMM',
    'EVENT_USER_COMM',
    'event_name',
    'adapt',
    'adapt_trace_info',
    'adapt_events',
    'iter_events',
    'read_nvtrc_file',
]
