"""Conversion pipeline - format routing, single-item orchestration and batching."""

from .router import FormatRouter, detect_format
from .batch import run_batch
from .orchestrator import ModelConverter

__all__ = ['FormatRouter', 'detect_format', 'run_batch', 'ModelConverter']
