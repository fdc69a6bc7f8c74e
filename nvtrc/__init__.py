"""
nvtrc v1.0 - Reader for NVIDIA GPU context-switch trace captures.

This package provides:
- formats: Binary codec for nvtrc01 captures and a diagnostic printer
- sync: GPU-to-CPU timestamp conversion
- adapters: Generic timeline events from decoded captures
- exporters: Chrome trace-event JSON export
- config: YAML configuration with environment variable support
- core: Error codes
- cli: Command-line interface
"""

__version__ = "1.0.0"

from .formats import (
    MAGIC,
    ArrayHeader,
    DeviceDesc,
    RecordGpuCtxSw,
    FileData,
    GpuCtxSwTraceError,
    Category,
    ContextSwitchType,
    decode,
    encode,
    read_file,
    write_file,
    pretty_print,
)
from .sync import (
    TimestampConverter,
    create_timestamp_converter,
    converter_for_device,
    merged_converter,
)
from .adapters import (
    TraceEvent,
    TraceInfo,
    StringPool,
    adapt,
    adapt_events,
    adapt_trace_info,
    read_nvtrc_file,
)
from .config import NvtrcConfig, load_config
from .core import (
    ErrorCode,
    CodecError,
    BadMagicError,
    TruncatedError,
    TraceIOError,
    UnsupportedOlderVersionError,
    InvalidArrayHeaderError,
)

__all__ = [
    # Version
    '__version__',
    # Formats
    'MAGIC',
    'ArrayHeader',
    'DeviceDesc',
    'RecordGpuCtxSw',
    'FileData',
    'GpuCtxSwTraceError',
    'Category',
    'ContextSwitchType',
    'decode',
    'encode',
    'read_file',
    'write_file',
    'pretty_print',
    # Sync
    'TimestampConverter',
    'create_timestamp_converter',
    'converter_for_device',
    'merged_converter',
    # Adapters
    'TraceEvent',
    'TraceInfo',
    'StringPool',
    'adapt',
    'adapt_events',
    'adapt_trace_info',
    'read_nvtrc_file',
    # Config
    'NvtrcConfig',
    'load_config',
    # Errors
    'ErrorCode',
    'CodecError',
    'BadMagicError',
    'TruncatedError',
    'TraceIOError',
    'UnsupportedOlderVersionError',
    'InvalidArrayHeaderError',
]
