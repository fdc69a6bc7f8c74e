"""
Reading and writing complete nvtrc captures.

File layout:
    FileHeader                                   magic
    ArrayHeader, DeviceDesc[count]               one per GPU
    { ArrayHeader, RecordGpuCtxSw[count] }       once per device, same order

Every array is framed by an ArrayHeader carrying the producer's element
size. When reading an array:
    element_size == width  -> elements are decoded back to back
    element_size >  width  -> newer producer; trailing bytes of each
                              element are skipped
    element_size <  width  -> older producer; rejected, never up-converted

decode() is atomic: it returns a fully populated FileData or raises a
CodecError, never a half-filled document.
"""

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Callable, List, TypeVar, Union

from .file_header import MAGIC, HEADER_SIZE, ARRAY_HEADER_SIZE, ArrayHeader
from .records import DeviceDesc, RecordGpuCtxSw
from ..core.errors import (
    BadMagicError,
    InvalidArrayHeaderError,
    TraceIOError,
    TruncatedError,
    UnsupportedOlderVersionError,
)


logger = logging.getLogger(__name__)

T = TypeVar('T')


@dataclass
class FileData:
    """
    Decoded contents of a capture.

    Attributes:
        device_descs: One descriptor per GPU; the list index is the device index
        per_device_data: Records per device, in capture order. Always the
            same length as device_descs.
    """
    device_descs: List[DeviceDesc] = field(default_factory=list)
    per_device_data: List[List[RecordGpuCtxSw]] = field(default_factory=list)

    def __post_init__(self):
        if len(self.device_descs) != len(self.per_device_data):
            raise ValueError(
                f"Device count mismatch: {len(self.device_descs)} descriptors, "
                f"{len(self.per_device_data)} record arrays"
            )

    @property
    def device_count(self) -> int:
        return len(self.device_descs)

    @property
    def record_count(self) -> int:
        """Total records across all devices."""
        return sum(len(records) for records in self.per_device_data)

    def devices(self):
        """Iterate (descriptor, records) pairs in device order."""
        return zip(self.device_descs, self.per_device_data)


class _Cursor:
    """Bounds-checked sequential view over an in-memory capture."""

    def __init__(self, data: bytes):
        self.view = memoryview(data)
        self.offset = 0

    @property
    def remaining(self) -> int:
        return len(self.view) - self.offset

    def take(self, size: int, what: str) -> memoryview:
        if size > self.remaining:
            raise TruncatedError(
                f"Capture ended while reading {what}",
                offset=self.offset,
                needed=size,
                available=self.remaining,
            )
        chunk = self.view[self.offset:self.offset + size]
        self.offset += size
        return chunk


def read_array(
    cursor: _Cursor,
    decode_element: Callable[[bytes], T],
    width: int,
    what: str,
) -> List[T]:
    """
    Read one ArrayHeader-framed array of fixed-width elements.

    Args:
        cursor: Position in the capture buffer
        decode_element: Element decoder, given at least `width` bytes
        width: This reader's element width
        what: Array description for error messages

    Returns:
        Decoded elements in stored order
    """
    header = ArrayHeader.decode(cursor.take(ARRAY_HEADER_SIZE, f"{what} header"))

    if header.count < 0:
        raise InvalidArrayHeaderError(
            f"Negative element count in {what} header",
            count=header.count,
        )

    if header.element_size < width:
        # File has older version than expected
        raise UnsupportedOlderVersionError(
            f"{what} elements are {header.element_size} bytes, "
            f"this reader needs at least {width}",
            element_size=header.element_size,
            expected=width,
        )

    if header.element_size > width:
        logger.debug(
            f"{what}: skipping {header.element_size - width} trailing bytes "
            f"per element (newer producer)"
        )

    payload = cursor.take(header.payload_size(), f"{header.count} {what} elements")

    stride = header.element_size
    return [
        decode_element(payload[i * stride:i * stride + width])
        for i in range(header.count)
    ]


def write_array(elements: List, width: int) -> bytes:
    """Frame already-typed elements with an ArrayHeader of the current width."""
    header = ArrayHeader(count=len(elements), element_size=width)
    return header.encode() + b''.join(e.encode() for e in elements)


def decode(data: bytes) -> FileData:
    """
    Decode a complete capture from bytes.

    Raises:
        BadMagicError: Buffer is not an nvtrc capture
        TruncatedError: Buffer ended before the structure was complete
        UnsupportedOlderVersionError: Elements narrower than this reader's
        InvalidArrayHeaderError: Array header with a negative count
    """
    cursor = _Cursor(data)

    # A short buffer that could still be the start of a capture is truncated
    if cursor.remaining < HEADER_SIZE and not MAGIC.startswith(bytes(cursor.view)):
        magic = bytes(cursor.view)
    else:
        magic = bytes(cursor.take(HEADER_SIZE, "file header"))

    if magic != MAGIC:
        raise BadMagicError(
            f"Invalid magic: {magic!r} (expected {MAGIC!r})",
            magic=magic.hex(),
        )

    device_descs = read_array(cursor, DeviceDesc.decode, DeviceDesc.SIZE, "device descriptor")

    per_device_data = []
    for index in range(len(device_descs)):
        per_device_data.append(
            read_array(
                cursor,
                RecordGpuCtxSw.decode,
                RecordGpuCtxSw.SIZE,
                f"device {index} record",
            )
        )

    if cursor.remaining:
        logger.debug(f"Ignoring {cursor.remaining} bytes after last record array")

    return FileData(device_descs=device_descs, per_device_data=per_device_data)


def encode(file_data: FileData) -> bytes:
    """Encode a capture using the current element widths."""
    parts = [MAGIC, write_array(file_data.device_descs, DeviceDesc.SIZE)]
    for records in file_data.per_device_data:
        parts.append(write_array(records, RecordGpuCtxSw.SIZE))
    return b''.join(parts)


def read_file(path: Union[Path, str]) -> FileData:
    """
    Read and decode a capture file.

    Raises:
        TraceIOError: File could not be read
        CodecError: Any decode failure (see decode())
    """
    path = Path(path)
    try:
        data = path.read_bytes()
    except OSError as e:
        raise TraceIOError(f"Cannot read {path}: {e}", path=str(path)) from e

    return decode(data)


def write_file(path: Union[Path, str], file_data: FileData) -> None:
    """
    Encode and write a capture file.

    Raises:
        TraceIOError: File could not be written
    """
    path = Path(path)
    data = encode(file_data)
    try:
        path.write_bytes(data)
    except OSError as e:
        raise TraceIOError(f"Cannot write {path}: {e}", path=str(path)) from e
