"""
Configuration management for Progression.

Uses environment variables and sensible defaults.
"""
import os
from pathlib import Path
from dataclasses import dataclass, field
from typing import Optional

from .types import AUTO_DEPTH


@dataclass
class ProgressConfig:
    """Defaults applied when beginning tasks and registering callbacks."""
    default_max_depth: int = AUTO_DEPTH     # Negative = Auto
    default_estimated_weight: float = 0.5   # Unknown tasks reach this at the estimated count


@dataclass
class LogConfig:
    """Logging configuration."""
    level: str = "WARNING"
    log_file: Optional[Path] = None
    max_file_size: int = 10 * 1024 * 1024  # 10 MB
    backup_count: int = 5


@dataclass
class Config:
    """Main library configuration."""
    progress: ProgressConfig = field(default_factory=ProgressConfig)
    log: LogConfig = field(default_factory=LogConfig)

    def __post_init__(self):
        self._load_from_env()

    def _load_from_env(self):
        """Load configuration from environment variables."""
        if os.environ.get("PROGRESSION_MAX_DEPTH"):
            self.progress.default_max_depth = int(os.environ["PROGRESSION_MAX_DEPTH"])
        if os.environ.get("PROGRESSION_ESTIMATED_WEIGHT"):
            self.progress.default_estimated_weight = float(
                os.environ["PROGRESSION_ESTIMATED_WEIGHT"]
            )
        if os.environ.get("PROGRESSION_LOG_LEVEL"):
            self.log.level = os.environ["PROGRESSION_LOG_LEVEL"]
        if os.environ.get("PROGRESSION_LOG_FILE"):
            self.log.log_file = Path(os.environ["PROGRESSION_LOG_FILE"])


# Global config instance
_config: Optional[Config] = None


def get_config() -> Config:
    """Get the global configuration instance."""
    global _config
    if _config is None:
        _config = Config()
    return _config


def set_config(config: Optional[Config]):
    """Set the global configuration instance (None resets to defaults)."""
    global _config
    _config = config
