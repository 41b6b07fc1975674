"""Core utilities: constants, logging, exceptions."""

from earnmove.core.exceptions import EarnMoveError
from earnmove.core.logging import get_logger, run_context, setup_logging

__all__ = [
    "EarnMoveError",
    "get_logger",
    "run_context",
    "setup_logging",
]
