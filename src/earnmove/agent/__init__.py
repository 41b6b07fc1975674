"""Run orchestration: single runs and periodic scheduling."""

from earnmove.agent.runner import PipelineState, pipeline_resources, run_batch, run_once
from earnmove.agent.scheduler import run_scheduled

__all__ = [
    "PipelineState",
    "pipeline_resources",
    "run_batch",
    "run_once",
    "run_scheduled",
]
