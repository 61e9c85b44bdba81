"""
Click context extension for specguard CLI.

Provides SpecguardContext dataclass that holds specguard-specific data
passed through the Click command chain via ctx.obj.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

from ..core.settings import SpecguardSettings, load_settings
from ..services.execution import Runner


@dataclass
class SpecguardContext:
    """Extended context passed through Click command chain.

    Attributes:
        cwd: Project directory the specs run in
        settings: Loaded configuration
    """

    cwd: Path
    settings: SpecguardSettings

    @classmethod
    def create(cls, cwd: Path | None = None, config_path: Path | None = None) -> SpecguardContext:
        """Create a SpecguardContext for the current environment.

        Args:
            cwd: Working directory override (defaults to Path.cwd())
            config_path: Explicit config file (searched from cwd otherwise)

        Raises:
            SpecguardConfigError: If the configuration cannot be loaded
        """
        if cwd is None:
            cwd = Path.cwd()

        settings = load_settings(config_path=config_path, start_dir=str(cwd))
        return cls(cwd=cwd, settings=settings)

    def create_runner(self) -> Runner:
        """Build a Runner from the configured options."""
        return Runner(self.settings.runner_config(), project_root=self.cwd)
