"""Runtime settings for the dashboard, resolved from the environment."""

from __future__ import annotations

import os
from dataclasses import dataclass
from datetime import date
from pathlib import Path
from typing import Mapping


DEFAULT_DB_PATH = Path(__file__).resolve().parent.parent / "draftboard.sqlite"
DEFAULT_LEAGUE_START = date(2024, 10, 22)
DEFAULT_SEASON = 2025
DEFAULT_SEASON_CHOICES = 15


@dataclass(frozen=True)
class Settings:
    db_path: Path | str
    league_start: date
    default_season: int
    season_choices: int

    @property
    def seasons(self) -> tuple[int, ...]:
        """Seasons offered by the selector, newest first."""

        return tuple(self.default_season - offset for offset in range(self.season_choices))


def _int_setting(env: Mapping[str, str], key: str, default: int) -> int:
    raw = env.get(key)
    if raw is None or not raw.strip():
        return default
    try:
        return int(raw)
    except ValueError:
        raise ValueError(f"{key} must be an integer, got {raw!r}") from None


def load_settings(env: Mapping[str, str] | None = None) -> Settings:
    """Build settings from ``DRAFTBOARD_*`` variables, falling back to defaults.

    ``DRAFTBOARD_DB_PATH`` may be a filesystem path or a ``file:`` URI (useful
    for shared in-memory databases).
    """

    env = os.environ if env is None else env

    db_path: Path | str
    env_db = env.get("DRAFTBOARD_DB_PATH")
    if env_db:
        db_path = env_db if env_db.startswith("file:") else Path(env_db)
    else:
        db_path = DEFAULT_DB_PATH

    raw_start = env.get("DRAFTBOARD_LEAGUE_START")
    if raw_start:
        try:
            league_start = date.fromisoformat(raw_start)
        except ValueError:
            raise ValueError(f"DRAFTBOARD_LEAGUE_START must be YYYY-MM-DD, got {raw_start!r}") from None
    else:
        league_start = DEFAULT_LEAGUE_START

    season_choices = _int_setting(env, "DRAFTBOARD_SEASON_CHOICES", DEFAULT_SEASON_CHOICES)
    if season_choices < 1:
        raise ValueError("DRAFTBOARD_SEASON_CHOICES must be at least 1")

    return Settings(
        db_path=db_path,
        league_start=league_start,
        default_season=_int_setting(env, "DRAFTBOARD_DEFAULT_SEASON", DEFAULT_SEASON),
        season_choices=season_choices,
    )
