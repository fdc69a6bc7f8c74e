"""
Enumerated field values used by nvtrc captures.

Enumerated fields are stored on disk as fixed-width integers. Records keep
the raw integer so that unknown values written by a newer producer survive
a decode/encode cycle; these enums interpret the raw value and fall back to
an explicit UNRECOGNIZED (or UNKNOWN) member instead of failing.
"""

from enum import IntEnum


class GpuCtxSwTraceError(IntEnum):
    """Per-device capability error for GPU context-switch tracing (u8)."""

    NONE = 0
    UNSUPPORTED_GPU = 1
    UNSUPPORTED_DRIVER = 2
    NEED_ROOT = 3
    UNKNOWN = 255

    @classmethod
    def from_wire(cls, value: int) -> 'GpuCtxSwTraceError':
        """Interpret a raw value; anything unexpected is UNKNOWN."""
        try:
            return cls(value)
        except ValueError:
            return cls.UNKNOWN


class Category(IntEnum):
    """Record category (u16)."""

    INVALID = 0
    GPU_CONTEXT_SWITCH = 1

    # Not a wire value; stands in for values this reader does not know
    UNRECOGNIZED = -1

    @classmethod
    def from_wire(cls, value: int) -> 'Category':
        """Interpret a raw value, falling back to UNRECOGNIZED."""
        if value < 0:
            return cls.UNRECOGNIZED
        try:
            return cls(value)
        except ValueError:
            return cls.UNRECOGNIZED


class ContextSwitchType(IntEnum):
    """GPU context-switch record type (u16)."""

    INVALID = 0
    CONTEXT_SWITCHED_IN = 1
    CONTEXT_SWITCHED_OUT = 2

    # Not a wire value; stands in for values this reader does not know
    UNRECOGNIZED = -1

    @classmethod
    def from_wire(cls, value: int) -> 'ContextSwitchType':
        """Interpret a raw value, falling back to UNRECOGNIZED."""
        if value < 0:
            return cls.UNRECOGNIZED
        try:
            return cls(value)
        except ValueError:
            return cls.UNRECOGNIZED

    @classmethod
    def label(cls, value: int) -> str:
        """
        Get human-readable name for a raw type value.

        Known values use the capture format's own spelling
        ("ContextSwitchedIn"); anything else yields "Unrecognized(<n>)".
        """
        names = {
            cls.INVALID: 'Invalid',
            cls.CONTEXT_SWITCHED_IN: 'ContextSwitchedIn',
            cls.CONTEXT_SWITCHED_OUT: 'ContextSwitchedOut',
        }
        member = cls.from_wire(value)
        if member is cls.UNRECOGNIZED:
            return f'Unrecognized({value})'
        return names[member]

    @classmethod
    def is_valid(cls, value: int) -> bool:
        """Check if type value is a known, non-invalid switch type."""
        return cls.from_wire(value) in (
            cls.CONTEXT_SWITCHED_IN,
            cls.CONTEXT_SWITCHED_OUT,
        )
