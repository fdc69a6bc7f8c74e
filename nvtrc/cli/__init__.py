"""Command-line interface for nvtrc."""

from .main import app, main

__all__ = ['app', 'main']
