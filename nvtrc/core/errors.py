"""
Error codes for nvtrc.

Structured error codes for machine-parseable diagnostics.

Format: E{category}{number}
- E1xxx: Data (codec) errors
- E3xxx: Configuration errors
"""

from enum import Enum
from dataclasses import dataclass
from typing import Optional


class ErrorCode(Enum):
    """Structured error codes."""

    # E1xxx: Data errors
    E1001_BAD_MAGIC = "E1001"
    E1002_UNSUPPORTED_OLDER_VERSION = "E1002"
    E1003_TRUNCATED = "E1003"
    E1004_IO_ERROR = "E1004"
    E1005_INVALID_ARRAY_HEADER = "E1005"

    # E3xxx: Configuration errors
    E3001_INVALID_CONFIG = "E3001"
    E3002_MISSING_ENV_VAR = "E3002"
    E3003_VALIDATION_FAILED = "E3003"


# Error code metadata
ERROR_METADATA = {
    ErrorCode.E1001_BAD_MAGIC: {
        'severity': 'error',
        'message': 'File is not an nvtrc capture (bad magic)',
        'recoverable': False,
    },
    ErrorCode.E1002_UNSUPPORTED_OLDER_VERSION: {
        'severity': 'error',
        'message': 'File was written by an older, unsupported format version',
        'recoverable': False,
    },
    ErrorCode.E1003_TRUNCATED: {
        'severity': 'error',
        'message': 'File ended before the expected structure was complete',
        'recoverable': False,
    },
    ErrorCode.E1004_IO_ERROR: {
        'severity': 'error',
        'message': 'I/O error while accessing capture file',
        'recoverable': False,
    },
    ErrorCode.E1005_INVALID_ARRAY_HEADER: {
        'severity': 'error',
        'message': 'Array header is malformed',
        'recoverable': False,
    },
    ErrorCode.E3001_INVALID_CONFIG: {
        'severity': 'error',
        'message': 'Invalid configuration',
        'recoverable': False,
    },
    ErrorCode.E3002_MISSING_ENV_VAR: {
        'severity': 'warning',
        'message': 'Environment variable not set',
        'recoverable': True,
    },
    ErrorCode.E3003_VALIDATION_FAILED: {
        'severity': 'error',
        'message': 'Configuration validation failed',
        'recoverable': False,
    },
}


@dataclass
class NvtrcError:
    """
    Structured error with context.

    Example:
        error = NvtrcError(
            code=ErrorCode.E1003_TRUNCATED,
            context={'offset': 296, 'needed': 24, 'available': 7},
        )
    """
    code: ErrorCode
    context: Optional[dict] = None

    @property
    def severity(self) -> str:
        return ERROR_METADATA.get(self.code, {}).get('severity', 'error')

    @property
    def message(self) -> str:
        base_msg = ERROR_METADATA.get(self.code, {}).get('message', 'Unknown error')
        if self.context:
            return f"{base_msg}: {self.context}"
        return base_msg

    @property
    def recoverable(self) -> bool:
        return ERROR_METADATA.get(self.code, {}).get('recoverable', False)

    def to_dict(self) -> dict:
        return {
            'code': self.code.value,
            'severity': self.severity,
            'message': self.message,
            'recoverable': self.recoverable,
            'context': self.context,
        }


class CodecError(ValueError):
    """
    Raised when a capture cannot be decoded.

    Decoding is all-or-nothing: whenever this is raised no partially
    populated FileData escapes to the caller.
    """

    code = ErrorCode.E1004_IO_ERROR

    def __init__(self, detail: str, **context):
        self.error = NvtrcError(code=self.code, context=context or None)
        super().__init__(f"[{self.code.value}] {detail}")

    def to_dict(self) -> dict:
        return self.error.to_dict()


class BadMagicError(CodecError):
    code = ErrorCode.E1001_BAD_MAGIC


class UnsupportedOlderVersionError(CodecError):
    code = ErrorCode.E1002_UNSUPPORTED_OLDER_VERSION


class TruncatedError(CodecError):
    code = ErrorCode.E1003_TRUNCATED


class TraceIOError(CodecError):
    code = ErrorCode.E1004_IO_ERROR


class InvalidArrayHeaderError(CodecError):
    code = ErrorCode.E1005_INVALID_ARRAY_HEADER
