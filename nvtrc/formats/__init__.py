"""Capture format definitions, codec and diagnostic printer."""

from .file_header import MAGIC, HEADER_SIZE, ARRAY_HEADER_SIZE, ArrayHeader, probe
from .record_types import GpuCtxSwTraceError, Category, ContextSwitchType
from .records import DeviceDesc, RecordGpuCtxSw, NAME_CAPACITY, truncate_name
from .reader import FileData, decode, encode, read_file, write_file
from .pretty import pretty_print, printable_uuid, summarize

__all__ = [
    'MAGIC',
    'HEADER_SIZE',
    'ARRAY_HEADER_SIZE',
    'ArrayHeader',
    'probe',
    'GpuCtxSwTraceError',
    'Category',
    'ContextSwitchType',
    'DeviceDesc',
    'RecordGpuCtxSw',
    'NAME_CAPACITY',
    'truncate_name',
    'FileData',
    'decode',
    'encode',
    'read_file',
    'write_file',
    'pretty_print',
    'printable_uuid',
    'summarize',
]
