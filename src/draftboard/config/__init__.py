"""Configuration helpers for the dashboard."""

from .settings import DEFAULT_LEAGUE_START, DEFAULT_SEASON, Settings, load_settings

__all__ = [
    "DEFAULT_LEAGUE_START",
    "DEFAULT_SEASON",
    "Settings",
    "load_settings",
]
