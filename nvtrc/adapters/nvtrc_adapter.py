"""
Adapter from decoded nvtrc captures to generic timeline events.

Every context-switch record becomes exactly one TraceEvent, emitted per
device and then per record in capture order. Events are NOT time-sorted
across devices; the consumer does that.

Adaptation never fails on a decoded capture: unknown record types become
labeled placeholder events.
"""

import logging
from pathlib import Path
from typing import Callable, Iterator, Tuple, Union

from .base import StringPool, TraceEvent, TraceInfo
from ..core.errors import CodecError
from ..formats.pretty import summarize
from ..formats.reader import FileData, read_file
from ..formats.record_types import ContextSwitchType
from ..sync.converter import converter_for_device


logger = logging.getLogger(__name__)

EventCallback = Callable[[TraceEvent], None]

# Interned strings shared by every event
EVENT_SYSTEM = 'nvcontext'
EVENT_COMM = '(event_comm)'
EVENT_USER_COMM = '(event_usercomm)'


def event_name(record_type: int) -> str:
    """Event name for a raw record type value."""
    return f"(event_name:{ContextSwitchType.label(record_type)})"


def adapt_trace_info(
    file_data: FileData,
    filename: str,
    raw_gpu_timestamps: bool = False,
) -> TraceInfo:
    """
    Build the capture summary.

    The origin is the earliest CPU sync start (GPU sync start when raw GPU
    timestamps are requested), or 0 for a capture without devices.
    """
    labels = [f"nvgpu({desc.name})" for desc in file_data.device_descs]

    if raw_gpu_timestamps:
        starts = [desc.gpu_timestamp_start for desc in file_data.device_descs]
    else:
        starts = [desc.cpu_timestamp_start for desc in file_data.device_descs]

    return TraceInfo(
        uname='&'.join(labels),
        timestamp_in_us=True,
        cpus=0,
        file=str(filename),
        min_file_ts=min(starts) if starts else 0,
    )


def iter_events(
    file_data: FileData,
    strpool: StringPool,
    raw_gpu_timestamps: bool = False,
) -> Iterator[TraceEvent]:
    """Lazily yield one TraceEvent per record."""
    system = strpool.getstr(EVENT_SYSTEM)
    comm = strpool.getstr(EVENT_COMM)
    user_comm = strpool.getstr(EVENT_USER_COMM)

    for desc, records in file_data.devices():
        to_cpu = converter_for_device(desc)

        for record in records:
            ts = record.timestamp if raw_gpu_timestamps else to_cpu(record.timestamp)

            yield TraceEvent(
                pid=record.process_id,
                ts=ts,
                name=strpool.getstr(event_name(record.record_type)),
                system=system,
                comm=comm,
                user_comm=user_comm,
            )


def adapt_events(
    cb: EventCallback,
    trace_info: TraceInfo,
    file_data: FileData,
    strpool: StringPool,
    raw_gpu_timestamps: bool = False,
) -> int:
    """
    Deliver every adapted event to a callback.

    Returns:
        Number of events delivered
    """
    count = 0
    for event in iter_events(file_data, strpool, raw_gpu_timestamps):
        cb(event)
        count += 1

    logger.debug(f"{trace_info.file}: adapted {count} events")
    return count


def adapt(
    file_data: FileData,
    filename: str,
    strpool: StringPool,
    raw_gpu_timestamps: bool = False,
) -> Tuple[TraceInfo, Iterator[TraceEvent]]:
    """Summary plus a lazy event stream for a decoded capture."""
    trace_info = adapt_trace_info(file_data, filename, raw_gpu_timestamps)
    return trace_info, iter_events(file_data, strpool, raw_gpu_timestamps)


def read_nvtrc_file(
    filename: Union[Path, str],
    strpool: StringPool,
    trace_info: TraceInfo,
    cb: EventCallback,
    raw_gpu_timestamps: bool = False,
) -> bool:
    """
    Decode a capture file and feed its events to a callback.

    trace_info is filled in place on success. On failure nothing is
    delivered, an error naming the file is logged and False is returned.
    """
    try:
        file_data = read_file(filename)
    except CodecError as e:
        logger.error(f"nvtrc: {filename}: {e}")
        return False

    for line in summarize(file_data, str(filename)):
        logger.info(line)

    summary = adapt_trace_info(file_data, str(filename), raw_gpu_timestamps)
    trace_info.uname = summary.uname
    trace_info.timestamp_in_us = summary.timestamp_in_us
    trace_info.cpus = summary.cpus
    trace_info.file = summary.file
    trace_info.min_file_ts = summary.min_file_ts

    adapt_events(cb, trace_info, file_data, strpool, raw_gpu_timestamps)
    return True
