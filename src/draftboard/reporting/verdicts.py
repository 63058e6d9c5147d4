"""Verdict scoring."""

from __future__ import annotations

from statistics import fmean
from typing import Iterable

from draftboard.models import Verdict


_VERDICT_SCORES: dict[Verdict, int | None] = {
    Verdict.STEAL: 4,
    Verdict.VALUE: 3,
    Verdict.FAIR: 2,
    Verdict.REACH: 1,
    Verdict.BUST: 0,
    Verdict.NO_VERDICT: None,
}

if set(_VERDICT_SCORES) != set(Verdict):  # pragma: no cover
    raise RuntimeError("every Verdict needs a score entry")


def score(verdict: Verdict | str | None) -> int | None:
    """Map a verdict label to the 0-4 scale.

    Unknown labels and ``No Verdict`` return ``None`` so callers can leave
    them out of averages instead of counting them as zero.
    """

    parsed = verdict if isinstance(verdict, Verdict) else Verdict.lookup(verdict)
    if parsed is None:
        return None
    return _VERDICT_SCORES[parsed]


def average_score(verdicts: Iterable[Verdict | str | None], *, digits: int = 2) -> float | None:
    """Mean score over the scorable verdicts, or ``None`` when there are none."""

    scores = [value for value in (score(verdict) for verdict in verdicts) if value is not None]
    if not scores:
        return None
    return round(fmean(scores), digits)
