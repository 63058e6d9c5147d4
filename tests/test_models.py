import pytest
from pydantic import ValidationError

from draftboard.models import DraftPick, EvalMethod, PlayerSnapshot, TransactionView, Verdict
from tests.factories import pick_payload, player_snapshot_payload


def test_draft_pick_is_frozen():
    pick = DraftPick.model_validate(pick_payload())

    assert pick.team_id == 7
    with pytest.raises((TypeError, ValidationError)):
        pick.team_id = 8  # type: ignore[misc]


@pytest.mark.parametrize("field", ["pick_number", "round", "overall_pick", "player_id", "team_id"])
def test_draft_pick_rejects_non_positive_ids(field):
    with pytest.raises(ValidationError):
        DraftPick.model_validate(pick_payload(**{field: 0}))


def test_draft_pick_rejects_empty_names():
    with pytest.raises(ValidationError):
        DraftPick.model_validate(pick_payload(team_name=""))


def test_player_snapshot_reads_upper_case_keys():
    snapshot = PlayerSnapshot.model_validate(player_snapshot_payload(1, "Luka Dončić", 12))

    assert snapshot.player_name == "Luka Dončić"
    assert snapshot.gp == 12
    assert snapshot.fg3_pct == pytest.approx(0.343)


def test_player_snapshot_allows_missing_team():
    snapshot = PlayerSnapshot.model_validate(
        player_snapshot_payload(2, "Free Agent", 0, TEAM_ID=None, TEAM_ABBREVIATION=None)
    )

    assert snapshot.team_id is None
    assert snapshot.team_abbreviation is None


def test_verdict_lookup_is_exact():
    assert Verdict.lookup("Steal") is Verdict.STEAL
    assert Verdict.lookup("No Verdict") is Verdict.NO_VERDICT
    assert Verdict.lookup("steal") is None
    assert Verdict.lookup(None) is None
    assert Verdict.BUST.badge_style == "verdict-bust"


def test_eval_method_labels():
    assert EvalMethod("weighted_ppg") is EvalMethod.WEIGHTED_PPG
    assert EvalMethod.AVERAGE_PPG.column == "PPG"
    assert EvalMethod.TOTAL_POINTS.label == "Total Points"


@pytest.mark.parametrize(
    ("transac_type", "is_add", "is_drop"),
    [("ADDED", True, False), ("WAIVER ADDED", True, False), ("DROPPED", False, True), ("TRADED", False, False)],
)
def test_transaction_view_kinds(transac_type, is_add, is_drop):
    view = TransactionView(
        transac_team="7",
        transac_date="2024-10-30",
        transac_type=transac_type,
        player_info="Someone",
        related_transaction=False,
        snapshot_date="2024-10-31",
    )

    assert view.is_add is is_add
    assert view.is_drop is is_drop
    assert view.team_name is None
