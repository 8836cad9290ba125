"""
Configuration settings for KillTracker.

Handles environment variables and tracker tuning values for the poll loop,
line de-duplication and record storage.
"""

import os
import logging
from typing import Dict, Any
from pathlib import Path
from dataclasses import dataclass, asdict


@dataclass
class TrackerSettings:
    """Main tracker settings container."""

    # Poll loop
    poll_interval_ms: int = 450
    window_size: int = 30

    # Line de-duplication
    dedup_capacity: int = 2000
    dedup_retain: int = 1200

    # Diagnostics
    debug_buffer_size: int = 12
    log_level: str = "info"

    # Storage
    store_path: str = str(Path.home() / ".killtracker" / "killtracker.v1.json")

    @classmethod
    def from_env(cls) -> "TrackerSettings":
        """Load tracker settings from environment variables."""
        defaults = cls()
        return cls(
            poll_interval_ms=int(os.getenv("KILLTRACKER_POLL_MS", str(defaults.poll_interval_ms))),
            window_size=int(os.getenv("KILLTRACKER_WINDOW", str(defaults.window_size))),
            dedup_capacity=int(os.getenv("KILLTRACKER_DEDUP_CAPACITY", str(defaults.dedup_capacity))),
            dedup_retain=int(os.getenv("KILLTRACKER_DEDUP_RETAIN", str(defaults.dedup_retain))),
            debug_buffer_size=int(os.getenv("KILLTRACKER_DEBUG_LINES", str(defaults.debug_buffer_size))),
            log_level=os.getenv("KILLTRACKER_LOG_LEVEL", defaults.log_level).lower(),
            store_path=os.getenv("KILLTRACKER_STORE", defaults.store_path),
        )

    @property
    def poll_interval(self) -> float:
        """Poll interval in seconds."""
        return self.poll_interval_ms / 1000.0

    def update(self, overrides: Dict[str, Any]) -> None:
        """Apply overrides for known fields, coercing to the field's type."""
        logger = logging.getLogger(__name__)
        fields = asdict(self)

        for name, value in overrides.items():
            if name not in fields:
                logger.warning(f"Ignoring unknown setting: {name}")
                continue
            try:
                setattr(self, name, type(fields[name])(value))
                logger.debug(f"Setting override: {name} = {value}")
            except (ValueError, TypeError) as e:
                logger.warning(f"Invalid value for setting {name}: {e}")

    def setup_logging(self):
        """Configure logging based on settings."""
        level = getattr(logging, self.log_level.upper(), logging.INFO)

        logging.basicConfig(
            level=level,
            format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S"
        )
        # basicConfig is a no-op once handlers exist, the level still applies
        logging.getLogger().setLevel(level)

    def validate(self):
        """Validate configuration settings."""
        errors = []

        if self.poll_interval_ms <= 0:
            errors.append(f"Poll interval must be positive: {self.poll_interval_ms}")

        if self.window_size <= 0:
            errors.append(f"Window size must be positive: {self.window_size}")

        if self.dedup_retain <= 0 or self.dedup_retain > self.dedup_capacity:
            errors.append(
                f"Dedup retain ({self.dedup_retain}) must be between 1 and "
                f"capacity ({self.dedup_capacity})"
            )

        if self.debug_buffer_size < 0:
            errors.append(f"Debug buffer size cannot be negative: {self.debug_buffer_size}")

        if errors:
            raise ValueError(f"Configuration validation failed: {'; '.join(errors)}")

    def log_configuration(self):
        """Log current configuration."""
        logger = logging.getLogger(__name__)

        logger.info("=== Tracker Configuration ===")
        logger.info(f"Poll: every {self.poll_interval_ms}ms, last {self.window_size} lines")
        logger.info(f"Dedup: capacity {self.dedup_capacity}, retain {self.dedup_retain}")
        logger.info(f"Store: {self.store_path}")
        logger.info(f"Log Level: {self.log_level}")
        logger.info("=== End Configuration ===")


# Global settings instance
settings = TrackerSettings.from_env()


def get_settings() -> TrackerSettings:
    """Get the global settings instance."""
    return settings


def reload_settings() -> TrackerSettings:
    """Reload settings from environment variables."""
    global settings
    settings = TrackerSettings.from_env()
    return settings
