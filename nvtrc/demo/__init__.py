"""Synthetic capture generation for demos and tests."""

from .trace_generator import (
    CaptureConfig,
    CaptureGenerator,
    generate_file_data,
    write_demo_file,
)

__all__ = [
    'CaptureConfig',
    'CaptureGenerator',
    'generate_file_data',
    'write_demo_file',
]
