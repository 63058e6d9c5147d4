import pytest

from draftboard.models import Verdict
from draftboard.reporting import average_score, score


@pytest.mark.parametrize(
    ("label", "expected"),
    [("Steal", 4), ("Value", 3), ("Fair", 2), ("Reach", 1), ("Bust", 0), ("No Verdict", None)],
)
def test_score_scale(label, expected):
    assert score(label) == expected


def test_score_accepts_enum_members():
    assert score(Verdict.VALUE) == 3


def test_unknown_labels_are_unscored():
    assert score("Great") is None
    assert score(None) is None


def test_average_skips_unscored_verdicts():
    assert average_score(["Steal", "Bust", "No Verdict", "Mystery"]) == 2.0
    assert average_score(["Steal", "Value", "Value"]) == pytest.approx(3.33)


def test_average_of_nothing_scorable_is_none():
    assert average_score([]) is None
    assert average_score(["No Verdict", "No Verdict"]) is None
