"""Plain-text rendering of decoded captures for diagnostics."""

import sys
from typing import List, Optional, TextIO

from .reader import FileData
from .record_types import ContextSwitchType, GpuCtxSwTraceError


_CTXSW_SUPPORT_MESSAGES = {
    GpuCtxSwTraceError.NONE: "yes",
    GpuCtxSwTraceError.UNSUPPORTED_GPU:
        "no -- unsupported GPU (requires Volta, Turing, or newer)",
    GpuCtxSwTraceError.UNSUPPORTED_DRIVER:
        "no -- driver is missing required support, try a newer version",
    GpuCtxSwTraceError.NEED_ROOT:
        "no -- process must be running as root/admin to use this feature",
    GpuCtxSwTraceError.UNKNOWN: "no -- internal error encountered",
}

_EVENT_LABELS = {
    ContextSwitchType.CONTEXT_SWITCHED_IN: "Context Start",
    ContextSwitchType.CONTEXT_SWITCHED_OUT: "Context Stop",
}


def printable_uuid(uuid: bytes) -> str:
    """
    Format a 16-byte UUID as 4-2-2-2-6 hex groups.

    Bytes are printed without zero padding, so the result is not a
    canonical UUID string; it matches what capture tools print.
    """
    if len(uuid) != 16:
        raise ValueError(f"UUID must be 16 bytes, got {len(uuid)}")

    groups = []
    offset = 0
    for count in (4, 2, 2, 2, 6):
        groups.append(''.join(f'{b:x}' for b in uuid[offset:offset + count]))
        offset += count
    return '-'.join(groups)


def ctxsw_support_message(error: int) -> str:
    return _CTXSW_SUPPORT_MESSAGES[GpuCtxSwTraceError.from_wire(error)]


def summarize(file_data: FileData, source: str) -> List[str]:
    """Device enumeration lines, numbered from 1."""
    lines = []
    for i, (desc, records) in enumerate(file_data.devices(), start=1):
        lines.append(f"nvtrc: {source}: GPU device #{i} is {desc.name}")
        lines.append(f"nvtrc: {source}: GPU device #{i} has {len(records)} records")
    return lines


def pretty_print(
    file_data: FileData,
    stream: Optional[TextIO] = None,
    show_device_descs: bool = True,
    show_records: bool = True,
) -> None:
    """
    Write a human-readable dump of a capture.

    Args:
        file_data: Decoded capture
        stream: Destination (defaults to stderr)
        show_device_descs: Include the per-device descriptor block
        show_records: Include every context-switch record
    """
    out = stream if stream is not None else sys.stderr

    if show_device_descs:
        for d, desc in enumerate(file_data.device_descs):
            out.write(
                f"Device {d}:\n"
                f"\tName: {desc.name}\n"
                f"\tUUID: {{{printable_uuid(desc.uuid)}}}\n"
                f"\tSupports GPU context-switch trace: "
                f"{ctxsw_support_message(desc.gpu_ctxsw_trace_error)}\n"
                f"\tTimestamps for synchronization (raw values, in hex):\n"
                f"\t  CPU start: {desc.cpu_timestamp_start:x} "
                f"GPU start: {desc.gpu_timestamp_start:x}\n"
                f"\t  CPU end:   {desc.cpu_timestamp_end:x} "
                f"GPU end:   {desc.gpu_timestamp_end:x}\n"
            )

    if show_records:
        for d, records in enumerate(file_data.per_device_data):
            out.write(f"Device {d} records:\n")
            for record in records:
                label = _EVENT_LABELS.get(record.switch_type, "<Other>")
                out.write(
                    f"\tTimestamp: 0x{record.timestamp:016x}"
                    f" | Event: {label:<13}"
                    f" | PID: {record.process_id:<10}"
                    f" | ContextID: 0x{record.context_handle:08x}\n"
                )
