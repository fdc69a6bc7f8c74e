"""GPU-to-CPU clock domain synchronization."""

from .converter import (
    TimestampConverter,
    create_timestamp_converter,
    converter_for_device,
    merged_converter,
    convert_to_cpu_time,
)

__all__ = [
    'TimestampConverter',
    'create_timestamp_converter',
    'converter_for_device',
    'merged_converter',
    'convert_to_cpu_time',
]
