"""
Framing structures for nvtrc capture files.

A capture starts with a fixed 8-byte magic and is followed by a sequence
of variable-length arrays, each introduced by an ArrayHeader.

Layout (little-endian):
    FileHeader   (8 bytes):  magic        "nvtrc01\\0"
    ArrayHeader  (8 bytes):  count        (i32) Number of elements
                             element_size (i32) Producer's bytes per element

The element_size recorded by the producer lets a reader skip fields that
were appended by a newer format revision.
"""

import struct
from dataclasses import dataclass
from pathlib import Path
from typing import Optional


# Magic bytes: "nvtrc01" plus terminating NUL
MAGIC = b'nvtrc01\x00'

# File header size in bytes
HEADER_SIZE = 8

# Array header size in bytes
ARRAY_HEADER_SIZE = 8


def has_magic(data: bytes) -> bool:
    """Check whether a buffer starts with the nvtrc magic."""
    return bytes(data[:HEADER_SIZE]) == MAGIC


def probe(path: Path) -> bool:
    """
    Check if a file looks like an nvtrc capture.

    Only the magic is inspected; the rest of the file is not validated.
    """
    path = Path(path)
    if not path.is_file():
        return False

    with open(path, 'rb') as f:
        return has_magic(f.read(HEADER_SIZE))


@dataclass
class ArrayHeader:
    """Header preceding every variable-length array in a capture."""

    count: int = 0
    element_size: int = 0

    # Struct format: i=count, i=element_size
    FORMAT = '<ii'

    def encode(self) -> bytes:
        """Encode header to bytes."""
        return struct.pack(self.FORMAT, self.count, self.element_size)

    @classmethod
    def decode(cls, data: bytes) -> 'ArrayHeader':
        """Decode header from bytes."""
        if len(data) < ARRAY_HEADER_SIZE:
            raise ValueError(f"Array header too small: {len(data)} < {ARRAY_HEADER_SIZE}")

        count, element_size = struct.unpack(cls.FORMAT, data[:ARRAY_HEADER_SIZE])
        return cls(count=count, element_size=element_size)

    def payload_size(self) -> int:
        """Bytes occupied by the elements following this header."""
        return self.count * self.element_size

    def validate(self, expected_size: Optional[int] = None) -> Optional[str]:
        """
        Validate header fields.

        Returns:
            Error message if invalid, None if valid.
        """
        if self.count < 0:
            return f"Negative element count: {self.count}"

        if expected_size is not None and self.element_size < expected_size:
            return f"Element size {self.element_size} < {expected_size}"

        return None


# Verify struct size at module load
_computed_size = struct.calcsize(ArrayHeader.FORMAT)
assert _computed_size == ARRAY_HEADER_SIZE, \
    f"ArrayHeader format size mismatch: {_computed_size} != {ARRAY_HEADER_SIZE}"
