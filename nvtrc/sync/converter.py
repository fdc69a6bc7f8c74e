"""
Cross-clock-domain timestamp conversion.

Each device descriptor carries two sync points: (CPU, GPU) timestamp pairs
captured at the start and the end of the capture. A TimestampConverter is
the affine map through those points, from GPU (source) time to CPU
(destination) time.

Precision:
    Timestamps are made relative to a sync point before scaling, so the
    53-bit double mantissa limits error to roughly 1 unit per week of
    distance from the sync point at 1 GHz. The END of the capture is used
    as the anchor because snapshot captures are usually inspected near
    their end.

Merging captures:
    When several captures of the same device are placed on one timeline,
    keep every record in GPU time, merge, and convert once with
    merged_converter() over all of their descriptors. Converting each
    capture on its own first and merging afterwards throws away the
    precision of a single shared map.
"""

from dataclasses import dataclass, replace
from typing import Iterable

from ..formats.reader import FileData
from ..formats.records import DeviceDesc


@dataclass(frozen=True)
class TimestampConverter:
    """
    Affine map from a source clock to a destination clock.

    convert(ts) = dst_at_sync_point + round(scale * (ts - src_at_sync_point))
    """
    dst_at_sync_point: int
    src_at_sync_point: int
    scale: float

    def __call__(self, src_timestamp: int) -> int:
        src_delta = src_timestamp - self.src_at_sync_point
        if self.scale == 1.0:
            # Exact for deltas beyond the double mantissa
            dst_delta = src_delta
        else:
            dst_delta = int(round(self.scale * float(src_delta)))
        return self.dst_at_sync_point + dst_delta

    convert = __call__


def create_timestamp_converter(
    src_start: int,
    src_end: int,
    dst_start: int,
    dst_end: int,
) -> TimestampConverter:
    """
    Build a converter from two sync points.

    A zero-length source window gives scale 0, so every timestamp maps
    to dst_end.
    """
    dst_delta = dst_end - dst_start
    src_delta = src_end - src_start
    scale = 0.0 if src_delta == 0 else float(dst_delta) / float(src_delta)

    if dst_delta == src_delta and src_delta != 0:
        scale = 1.0

    return TimestampConverter(
        dst_at_sync_point=dst_end,
        src_at_sync_point=src_end,
        scale=scale,
    )


def converter_for_device(desc: DeviceDesc) -> TimestampConverter:
    """Converter from a device's GPU time to CPU time."""
    return create_timestamp_converter(
        desc.gpu_timestamp_start,
        desc.gpu_timestamp_end,
        desc.cpu_timestamp_start,
        desc.cpu_timestamp_end,
    )


def merged_converter(descs: Iterable[DeviceDesc]) -> TimestampConverter:
    """
    Single converter spanning several captures of the same device.

    Uses the sync pair of the earliest start and of the latest end, both
    ordered by GPU time.

    Raises:
        ValueError: If no descriptors are given
    """
    descs = list(descs)
    if not descs:
        raise ValueError("merged_converter() needs at least one descriptor")

    first = min(descs, key=lambda d: d.gpu_timestamp_start)
    last = max(descs, key=lambda d: d.gpu_timestamp_end)

    return create_timestamp_converter(
        first.gpu_timestamp_start,
        last.gpu_timestamp_end,
        first.cpu_timestamp_start,
        last.cpu_timestamp_end,
    )


def convert_to_cpu_time(file_data: FileData) -> FileData:
    """
    Return a copy of a capture with every record timestamp in CPU time.

    The input is left untouched.
    """
    per_device_data = []
    for desc, records in file_data.devices():
        to_cpu = converter_for_device(desc)
        per_device_data.append(
            [replace(r, timestamp=to_cpu(r.timestamp)) for r in records]
        )

    return FileData(
        device_descs=[replace(d) for d in file_data.device_descs],
        per_device_data=per_device_data,
    )
