"""
Chrome trace-event JSON export.

Writes adapted events in the Trace Event Format understood by
chrome://tracing and Perfetto. Each context switch becomes an instant
event on a track per process.
"""

import json
import logging
from pathlib import Path
from typing import Any, Dict, Iterable, Optional, Union

from ..adapters.base import StringPool, TraceEvent, TraceInfo


logger = logging.getLogger(__name__)


def event_to_dict(
    event: TraceEvent,
    strpool: StringPool,
    origin: int = 0,
    time_divisor: float = 1.0,
) -> Dict[str, Any]:
    """Convert one TraceEvent to a Chrome instant event."""
    return {
        "name": strpool.lookup(event.name),
        "cat": strpool.lookup(event.system),
        "ph": "i",
        "s": "t",
        "ts": (event.ts - origin) / time_divisor,
        "pid": event.pid,
        "tid": event.pid,
    }


def to_chrome_trace(
    trace_info: TraceInfo,
    events: Iterable[TraceEvent],
    strpool: StringPool,
    time_divisor: float = 1.0,
) -> Dict[str, Any]:
    """
    Build a Chrome trace document.

    Timestamps are made relative to trace_info.min_file_ts and divided
    by time_divisor.
    """
    if time_divisor <= 0:
        raise ValueError(f"time_divisor must be positive, got {time_divisor}")

    trace_events = [
        event_to_dict(e, strpool, trace_info.min_file_ts, time_divisor)
        for e in events
    ]

    return {
        "traceEvents": trace_events,
        "metadata": {
            "source": trace_info.file,
            "devices": trace_info.uname,
            "origin": trace_info.min_file_ts,
        },
    }


def write_chrome_trace(
    path: Union[Path, str],
    trace_info: TraceInfo,
    events: Iterable[TraceEvent],
    strpool: StringPool,
    time_divisor: float = 1.0,
    indent: Optional[int] = None,
) -> int:
    """
    Write a Chrome trace JSON file.

    Returns:
        Number of events written
    """
    document = to_chrome_trace(trace_info, events, strpool, time_divisor)

    path = Path(path)
    path.write_text(json.dumps(document, indent=indent))

    count = len(document["traceEvents"])
    logger.info(f"Wrote {count} events to {path}")
    return count
