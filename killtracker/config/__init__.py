"""
Configuration module for KillTracker.

Provides tracker settings, YAML overrides and the static game data tables.
"""

from .settings import (
    TrackerSettings,
    get_settings,
    reload_settings,
    settings,
)
from .item_data import PET_ITEM_NAMES, is_pet_item

__all__ = [
    "TrackerSettings",
    "get_settings",
    "reload_settings",
    "settings",
    "PET_ITEM_NAMES",
    "is_pet_item",
]
