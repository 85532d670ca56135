"""Workflow orchestration package for flatdir.

This package contains orchestration components for flatten runs:
- FlattenLogger: Structured report of a flatten run written to a log file.
- FlattenOrchestrator: Central coordinator for the flatten workflow.
"""

from flatdir.orchestration.flatten_logger import FlattenLogger
from flatdir.orchestration.flatten_orchestrator import FlattenOrchestrator

__all__ = ["FlattenLogger", "FlattenOrchestrator"]
