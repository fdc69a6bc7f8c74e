"""
Generic trace-event model consumed by timeline viewers.

TraceEvent is the normalized event the adapter emits for every hardware
record. TraceInfo summarizes a whole capture. StringPool is a reference
implementation of the string-interning capability events refer to; any
object with a compatible getstr() can be passed instead.
"""

from dataclasses import dataclass
from typing import Dict, List


# Marker for event ids that are not assigned
INVALID_ID = -1

# Marker for a duration that is not set
DURATION_UNSET = 2 ** 63 - 1

# Let the viewer pick a color for the event
TRACE_FLAG_AUTOGEN_COLOR = 0x1


class StringPool:
    """
    Append-only string interning pool.

    Equal strings always map to the same integer handle. Not thread-safe;
    callers sharing a pool across decode sessions must serialize access.
    """

    def __init__(self):
        self._handles: Dict[str, int] = {}
        self._strings: List[str] = []

    def getstr(self, text: str) -> int:
        """Intern text and return its handle."""
        handle = self._handles.get(text)
        if handle is None:
            handle = len(self._strings)
            self._strings.append(text)
            self._handles[text] = handle
        return handle

    def lookup(self, handle: int) -> str:
        """Return the string behind a handle."""
        return self._strings[handle]

    def __len__(self) -> int:
        return len(self._strings)

    def __contains__(self, text: str) -> bool:
        return text in self._handles


@dataclass
class TraceEvent:
    """
    One timeline event.

    Attributes:
        pid: Process identifier
        ts: Timestamp in the destination (CPU) clock domain
        name: Interned event name handle
        system: Interned event system handle
        comm: Interned command name handle
        user_comm: Interned user command name handle
        id: Event id (assigned by the consumer)
        cpu: CPU index
        flags: TRACE_FLAG_* bits
        seqno: Sequence number
        id_start: Id of the matching start event
        graph_row_id: Row in the viewer's graph
        crtc: Display controller index (-1 = none)
        color: Packed color (0 = default)
        duration: Event duration (DURATION_UNSET = not set)
    """
    pid: int
    ts: int
    name: int
    system: int
    comm: int
    user_comm: int
    id: int = INVALID_ID
    cpu: int = 0
    flags: int = TRACE_FLAG_AUTOGEN_COLOR
    seqno: int = 0
    id_start: int = INVALID_ID
    graph_row_id: int = 0
    crtc: int = -1
    color: int = 0
    duration: int = DURATION_UNSET

    @property
    def has_duration(self) -> bool:
        return self.duration != DURATION_UNSET


@dataclass
class TraceInfo:
    """
    Summary of an adapted capture.

    Attributes:
        uname: Descriptive label built from the device names
        timestamp_in_us: Event timestamps are already in the viewer's domain
        cpus: Number of CPUs described (always 0 for GPU captures)
        file: Source file path
        min_file_ts: Timeline origin (earliest sync start)
    """
    uname: str = ''
    timestamp_in_us: bool = False
    cpus: int = 0
    file: str = ''
    min_file_ts: int = 0
