"""Telemetry and observability helpers.

This package emits phase-level command logs and routes decoder diagnostics.
"""

from .logger import RunLogger

__all__ = ["RunLogger"]
