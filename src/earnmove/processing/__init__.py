"""Processing layer: earnings-move estimation and batch execution."""

from earnmove.processing.batch import BatchReport, BatchRunner, partition

__all__ = [
    "BatchReport",
    "BatchRunner",
    "partition",
]
