"""Configuration management for nvtrc."""

from .schema import (
    NvtrcConfig,
    TimestampConfig,
    OutputConfig,
    ExportConfig,
    LoggingConfig,
    load_config,
    generate_default_config,
)

__all__ = [
    'NvtrcConfig',
    'TimestampConfig',
    'OutputConfig',
    'ExportConfig',
    'LoggingConfig',
    'load_config',
    'generate_default_config',
]
