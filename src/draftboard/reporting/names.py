"""Player name normalization for matching draft rows to game-log snapshots."""

from __future__ import annotations

import unicodedata
from dataclasses import dataclass
from typing import Iterable

from draftboard.models import PlayerSnapshotRecord


# Characters the game-log feed spells differently from the draft grader.
_LATIN_EXTENDED = str.maketrans(
    {
        "ć": "c",
        "č": "c",
        "š": "s",
        "ž": "z",
        "đ": "dj",
        "ň": "n",
        "ř": "r",
        "ı": "i",
        "ş": "s",
        "ģ": "g",
    }
)


def normalize_name(name: str) -> str:
    """Lower-case, trim, and fold diacritics so "Dončić" keys as "doncic"."""

    folded = name.lower().translate(_LATIN_EXTENDED)
    decomposed = unicodedata.normalize("NFD", folded)
    stripped = "".join(c for c in decomposed if not unicodedata.combining(c))
    return stripped.strip()


@dataclass(frozen=True)
class PlayerMatch:
    draft_name: str
    draft_id: int
    gp: int


def match_games_played(
    draft_players: Iterable[tuple[str, int]],
    snapshots: Iterable[PlayerSnapshotRecord],
) -> list[PlayerMatch]:
    """Attach games played to each distinct drafted player.

    The normalized name is a best-effort key: when several snapshots share it
    the first one wins, and players with no match report ``gp`` of 0.
    """

    games_by_name: dict[str, int] = {}
    for snapshot in snapshots:
        games_by_name.setdefault(normalize_name(snapshot.player_name), snapshot.gp)

    matches: list[PlayerMatch] = []
    seen: set[tuple[str, int]] = set()
    for name, player_id in draft_players:
        key = (name, player_id)
        if key in seen:
            continue
        seen.add(key)
        matches.append(
            PlayerMatch(
                draft_name=name,
                draft_id=player_id,
                gp=games_by_name.get(normalize_name(name), 0),
            )
        )
    return matches
