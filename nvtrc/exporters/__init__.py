"""Exporters for adapted trace events."""

from .chrome import event_to_dict, to_chrome_trace, write_chrome_trace

__all__ = [
    'event_to_dict',
    'to_chrome_trace',
    'write_chrome_trace',
]
