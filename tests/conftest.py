"""Pytest fixtures shared by the nvtrc tests."""

import sys
from pathlib import Path

import pytest

# Make the package importable without installation
sys.path.insert(0, str(Path(__file__).parent.parent))

from nvtrc.formats import (
    Category,
    ContextSwitchType,
    DeviceDesc,
    FileData,
    GpuCtxSwTraceError,
    RecordGpuCtxSw,
    write_file,
)


def make_device(name: str = "NVIDIA GeForce RTX 2080", **overrides) -> DeviceDesc:
    """Device whose GPU window [1000, 2000] maps to CPU [5_000_000, 5_000_010]."""
    fields = dict(
        uuid=bytes(range(16)),
        name=name,
        gpu_ctxsw_trace_error=GpuCtxSwTraceError.NONE,
        cpu_timestamp_start=5_000_000,
        gpu_timestamp_start=1000,
        cpu_timestamp_end=5_000_010,
        gpu_timestamp_end=2000,
    )
    fields.update(overrides)
    return DeviceDesc(**fields)


def make_record(record_type: int, timestamp: int, pid: int = 4242,
                handle: int = 0xCAFE) -> RecordGpuCtxSw:
    return RecordGpuCtxSw(
        category=Category.GPU_CONTEXT_SWITCH,
        record_type=record_type,
        process_id=pid,
        timestamp=timestamp,
        context_handle=handle,
    )


@pytest.fixture
def single_device_data() -> FileData:
    """One device, one switched-in and one switched-out record."""
    return FileData(
        device_descs=[make_device()],
        per_device_data=[[
            make_record(ContextSwitchType.CONTEXT_SWITCHED_IN, 1000),
            make_record(ContextSwitchType.CONTEXT_SWITCHED_OUT, 2000),
        ]],
    )


@pytest.fixture
def two_device_data() -> FileData:
    """Two devices with different sync windows; second device has no records."""
    return FileData(
        device_descs=[
            make_device("GPU A", cpu_timestamp_start=7_000, cpu_timestamp_end=8_000),
            make_device("GPU B", uuid=b'\xff' * 16,
                        gpu_ctxsw_trace_error=GpuCtxSwTraceError.NEED_ROOT),
        ],
        per_device_data=[
            [
                make_record(ContextSwitchType.CONTEXT_SWITCHED_IN, 1500, pid=1),
                make_record(ContextSwitchType.CONTEXT_SWITCHED_OUT, 1600, pid=1),
                make_record(ContextSwitchType.CONTEXT_SWITCHED_IN, 1700, pid=2),
            ],
            [],
        ],
    )


@pytest.fixture
def capture_file(tmp_path, single_device_data) -> Path:
    """Capture file on disk holding single_device_data."""
    path = tmp_path / "capture.nvtrc"
    write_file(path, single_device_data)
    return path
