"""specguard: run RSpec for a set of spec paths, remotely or locally."""

from .core.models.options import RunnerConfig
from .services.execution.runner import Runner

__all__ = [
    "Runner",
    "RunnerConfig",
]
