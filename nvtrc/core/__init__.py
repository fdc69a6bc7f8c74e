"""Error taxonomy shared by the codec, adapter and CLI."""

from .errors import (
    ErrorCode,
    NvtrcError,
    ERROR_METADATA,
    CodecError,
    BadMagicError,
    UnsupportedOlderVersionError,
    TruncatedError,
    TraceIOError,
    InvalidArrayHeaderError,
)

__all__ = [
    'ErrorCode',
    'NvtrcError',
    'ERROR_METADATA',
    'CodecError',
    'BadMagicError',
    'UnsupportedOlderVersionError',
    'TruncatedError',
    'TraceIOError',
    'InvalidArrayHeaderError',
]
