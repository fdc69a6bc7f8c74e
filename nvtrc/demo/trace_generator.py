"""
Generate synthetic nvtrc captures.

Captures are synthetic but shaped like real ones:
- GPU globaltimer in nanoseconds, CPU clock at a different rate and offset
- Alternating switched-in / switched-out records per context
- A handful of processes sharing each GPU
"""

import random
from dataclasses import dataclass
from pathlib import Path
from typing import List, Union

from ..formats.reader import FileData, write_file
from ..formats.record_types import Category, ContextSwitchType, GpuCtxSwTraceError
from ..formats.records import DeviceDesc, RecordGpuCtxSw


@dataclass
class CaptureConfig:
    """Configuration for capture generation."""
    device_count: int = 1
    records_per_device: int = 100
    process_count: int = 4
    duration_ns: int = 10_000_000
    cpu_ticks_per_ns: float = 3.0
    gpu_epoch_ns: int = 1_000_000_000
    cpu_epoch_ticks: int = 50_000_000_000


class CaptureGenerator:
    """Generate deterministic synthetic captures from a seed."""

    def __init__(self, seed: int = 42):
        self.seed = seed
        self.rng = random.Random(seed)

    def device(self, index: int, config: CaptureConfig) -> DeviceDesc:
        gpu_start = config.gpu_epoch_ns + index * 1000
        gpu_end = gpu_start + config.duration_ns
        cpu_start = config.cpu_epoch_ticks + self.rng.randrange(1_000_000)
        cpu_end = cpu_start + int(config.duration_ns * config.cpu_ticks_per_ns)

        desc = DeviceDesc(
            uuid=bytes(self.rng.randrange(256) for _ in range(16)),
            gpu_ctxsw_trace_error=GpuCtxSwTraceError.NONE,
            cpu_timestamp_start=cpu_start,
            gpu_timestamp_start=gpu_start,
            cpu_timestamp_end=cpu_end,
            gpu_timestamp_end=gpu_end,
        )
        desc.set_name(f"Synthetic GPU {index}")
        return desc

    def records(self, desc: DeviceDesc, config: CaptureConfig) -> List[RecordGpuCtxSw]:
        pids = [1000 + self.rng.randrange(30000) for _ in range(config.process_count)]
        handles = [self.rng.getrandbits(64) for _ in range(config.process_count)]

        count = config.records_per_device
        span = desc.gpu_timestamp_end - desc.gpu_timestamp_start
        step = span // max(count, 1)

        records = []
        ts = desc.gpu_timestamp_start
        slot = 0
        for i in range(count):
            if i % 2 == 0:
                slot = self.rng.randrange(config.process_count)
                switch = ContextSwitchType.CONTEXT_SWITCHED_IN
            else:
                switch = ContextSwitchType.CONTEXT_SWITCHED_OUT

            records.append(RecordGpuCtxSw(
                category=Category.GPU_CONTEXT_SWITCH,
                record_type=switch,
                process_id=pids[slot],
                timestamp=ts,
                context_handle=handles[slot],
            ))
            ts += self.rng.randint(max(step // 2, 1), max(step, 1))

        return records

    def generate(self, config: CaptureConfig) -> FileData:
        descs = [self.device(i, config) for i in range(config.device_count)]
        return FileData(
            device_descs=descs,
            per_device_data=[self.records(d, config) for d in descs],
        )


def generate_file_data(
    device_count: int = 1,
    records_per_device: int = 100,
    seed: int = 42,
) -> FileData:
    """Generate a synthetic capture in memory."""
    config = CaptureConfig(device_count=device_count, records_per_device=records_per_device)
    return CaptureGenerator(seed).generate(config)


def write_demo_file(
    path: Union[Path, str],
    device_count: int = 1,
    records_per_device: int = 100,
    seed: int = 42,
) -> FileData:
    """Generate a synthetic capture and write it to path."""
    file_data = generate_file_data(device_count, records_per_device, seed)
    write_file(path, file_data)
    return file_data
