import json

import pytest

from draftboard.cli import main
from draftboard.persistence import DraftStore
from tests.factories import pick_payload


def _write(path, payload) -> str:
    path.write_text(json.dumps(payload), encoding="utf-8")
    return str(path)


def test_load_and_report(tmp_path, capsys):
    db = str(tmp_path / "cli.sqlite")
    picks = _write(
        tmp_path / "picks.json",
        {
            "snapshot_timestamp": "2024-10-29T00:00",
            "allpicks": [
                pick_payload(verdict="Steal"),
                pick_payload(overall_pick=2, team_id=8, team_name="Bench Mob", verdict="Bust"),
            ],
        },
    )

    main(["--db", db, "load", "picks", picks])
    assert "Stored 2 draft picks" in capsys.readouterr().out

    main(["--db", db, "report", "--season", "2025", "--method", "total_points"])
    out = capsys.readouterr().out
    assert "2025 season, snapshot 2024-10-29T00:00" in out
    assert out.index("Hoopers") < out.index("Bench Mob")
    assert "Total Points" in out


def test_load_rejects_invalid_batch(tmp_path, capsys):
    db = tmp_path / "cli.sqlite"
    picks = _write(
        tmp_path / "picks.json",
        {"snapshot_timestamp": "2024-10-29T00:00", "allpicks": [pick_payload(pick_number=-1)]},
    )

    with pytest.raises(SystemExit) as excinfo:
        main(["--db", str(db), "load", "picks", picks])

    assert excinfo.value.code == 1
    assert "allpicks.0.pick_number" in capsys.readouterr().out
    assert DraftStore(db).latest_snapshot(2025) is None


def test_report_csv_output(tmp_path, capsys):
    output = tmp_path / "ratings.csv"

    main(["--db", str(tmp_path / "cli.sqlite"), "report", "--season", "2025", "--output", str(output)])

    assert output.read_text(encoding="utf-8").startswith("Rank,Team ID,Team,Picks,Rating,PPG")
    assert "Wrote 0 teams" in capsys.readouterr().out


def test_report_without_data(tmp_path, capsys):
    main(["--db", str(tmp_path / "cli.sqlite"), "report", "--season", "2019"])

    assert "No draft data available for 2019 season" in capsys.readouterr().out
