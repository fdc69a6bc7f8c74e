"""
Element types stored in nvtrc arrays.

Each struct is encoded field by field with an explicit little-endian
struct format, so the byte layout is an auditable contract rather than
an accident of compiler padding.

CRITICAL: New fields may only ever be APPENDED to these formats. Readers
accept wider elements by ignoring the trailing bytes, which only works if
existing fields keep their offsets.
"""

import struct
from dataclasses import dataclass

from .record_types import Category, ContextSwitchType, GpuCtxSwTraceError


# Capacity of the embedded device name, including its NUL terminator
NAME_CAPACITY = 239

# Size of a device UUID in bytes
UUID_SIZE = 16


def truncate_name(name: str) -> str:
    """
    Truncate a device name so it fits the fixed name field.

    At most NAME_CAPACITY - 1 bytes of UTF-8 are kept so a terminator
    always fits. A multi-byte character cut at the boundary is dropped
    entirely rather than stored half-written.
    """
    encoded = name.encode('utf-8')
    if len(encoded) < NAME_CAPACITY:
        return name
    return encoded[:NAME_CAPACITY - 1].decode('utf-8', errors='ignore')


@dataclass
class DeviceDesc:
    """
    Descriptor for one physical GPU in a capture.

    Layout (288 bytes):
        Bytes 0-15:    uuid                  (16 bytes) VkPhysicalDeviceIDProperties::deviceUUID
        Bytes 16-254:  name                  (239 bytes) NUL-terminated
        Byte 255:      gpu_ctxsw_trace_error (u8)  See GpuCtxSwTraceError
        Bytes 256-263: cpu_timestamp_start   (i64) CPU clock (RDTSC on x86)
        Bytes 264-271: gpu_timestamp_start   (i64) GPU globaltimer
        Bytes 272-279: cpu_timestamp_end     (i64) CPU clock
        Bytes 280-287: gpu_timestamp_end     (i64) GPU globaltimer

    The start and end pairs are the two sync points used to map GPU time
    onto CPU time for this device.
    """

    uuid: bytes = b'\x00' * UUID_SIZE
    name: str = ''
    gpu_ctxsw_trace_error: int = GpuCtxSwTraceError.NONE
    cpu_timestamp_start: int = 0
    gpu_timestamp_start: int = 0
    cpu_timestamp_end: int = 0
    gpu_timestamp_end: int = 0

    # 16s=uuid, 239s=name, B=error, q=cpu_start, q=gpu_start, q=cpu_end, q=gpu_end
    FORMAT = '<16s239sBqqqq'
    SIZE = 288

    def __post_init__(self):
        """Validate fixed-size fields."""
        if len(self.uuid) != UUID_SIZE:
            raise ValueError(f"UUID must be {UUID_SIZE} bytes, got {len(self.uuid)}")
        self.uuid = bytes(self.uuid)

    @property
    def trace_error(self) -> GpuCtxSwTraceError:
        return GpuCtxSwTraceError.from_wire(self.gpu_ctxsw_trace_error)

    @property
    def supports_ctxsw_trace(self) -> bool:
        return self.trace_error is GpuCtxSwTraceError.NONE

    def set_name(self, name: str) -> None:
        """Set the device name, truncating it to the on-disk capacity."""
        self.name = truncate_name(name)

    def encode(self) -> bytes:
        """Encode descriptor to bytes. Over-long names are truncated."""
        name_bytes = truncate_name(self.name).encode('utf-8')
        return struct.pack(
            self.FORMAT,
            self.uuid,
            name_bytes,  # struct pads with NULs up to the capacity
            self.gpu_ctxsw_trace_error,
            self.cpu_timestamp_start,
            self.gpu_timestamp_start,
            self.cpu_timestamp_end,
            self.gpu_timestamp_end,
        )

    @classmethod
    def decode(cls, raw: bytes) -> 'DeviceDesc':
        """Decode descriptor from the first SIZE bytes of raw."""
        if len(raw) < cls.SIZE:
            raise ValueError(f"Buffer too small: {len(raw)} < {cls.SIZE}")

        (
            uuid,
            name_field,
            error,
            cpu_start,
            gpu_start,
            cpu_end,
            gpu_end,
        ) = struct.unpack(cls.FORMAT, raw[:cls.SIZE])

        name = name_field.split(b'\x00', 1)[0].decode('utf-8', errors='replace')

        return cls(
            uuid=uuid,
            name=name,
            gpu_ctxsw_trace_error=error,
            cpu_timestamp_start=cpu_start,
            gpu_timestamp_start=gpu_start,
            cpu_timestamp_end=cpu_end,
            gpu_timestamp_end=gpu_end,
        )


@dataclass
class RecordGpuCtxSw:
    """
    One GPU context-switch event.

    Layout (24 bytes):
        Bytes 0-1:   category        (u16) See Category
        Bytes 2-3:   record_type     (u16) See ContextSwitchType
        Bytes 4-7:   process_id      (u32)
        Bytes 8-15:  timestamp       (i64) GPU globaltimer
        Bytes 16-23: context_handle  (u64) Opaque context identifier
    """

    category: int = Category.GPU_CONTEXT_SWITCH
    record_type: int = ContextSwitchType.INVALID
    process_id: int = 0
    timestamp: int = 0
    context_handle: int = 0

    # H=u16, H=u16, I=u32, q=i64, Q=u64
    FORMAT = '<HHIqQ'
    SIZE = 24

    @property
    def switch_type(self) -> ContextSwitchType:
        return ContextSwitchType.from_wire(self.record_type)

    def encode(self) -> bytes:
        """Encode record to bytes."""
        return struct.pack(
            self.FORMAT,
            self.category,
            self.record_type,
            self.process_id,
            self.timestamp,
            self.context_handle,
        )

    @classmethod
    def decode(cls, raw: bytes) -> 'RecordGpuCtxSw':
        """Decode record from the first SIZE bytes of raw."""
        if len(raw) < cls.SIZE:
            raise ValueError(f"Buffer too small: {len(raw)} < {cls.SIZE}")

        category, record_type, pid, timestamp, handle = struct.unpack(
            cls.FORMAT, raw[:cls.SIZE]
        )

        return cls(
            category=category,
            record_type=record_type,
            process_id=pid,
            timestamp=timestamp,
            context_handle=handle,
        )


# Verify struct sizes at module load
assert struct.calcsize(DeviceDesc.FORMAT) == DeviceDesc.SIZE, \
    "DeviceDesc format verification failed"
assert struct.calcsize(RecordGpuCtxSw.FORMAT) == RecordGpuCtxSw.SIZE, \
    "RecordGpuCtxSw format verification failed"
