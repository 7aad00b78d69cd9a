"""Operational tasks: parameter setters, timelock queueing and config validation."""

from stablecoin.ops.tasks import TASKS, run_task

__all__ = ["TASKS", "run_task"]
