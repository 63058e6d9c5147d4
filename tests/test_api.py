from datetime import date

import pytest
from httpx import ASGITransport, AsyncClient

from draftboard.api import create_app
from draftboard.config import Settings
from draftboard.persistence import DraftStore, StoreError
from tests.factories import pick_payload, player_snapshot_payload, transaction_payload


@pytest.fixture
async def client(tmp_path):
    settings = Settings(
        db_path=tmp_path / "api.sqlite",
        league_start=date(2024, 10, 22),
        default_season=2025,
        season_choices=3,
    )
    app = create_app(settings)
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://testserver") as async_client:
        async_client.app = app
        yield async_client


def _draft_batch() -> dict:
    return {
        "snapshot_timestamp": "2024-10-29T00:00",
        "allpicks": [
            pick_payload(verdict="Steal", fantasy_points_per_game=52.3),
            pick_payload(
                pick_number=2,
                overall_pick=2,
                player_id=203999,
                player_name="Nikola Jokić",
                team_id=8,
                team_name="Bench Mob",
                verdict="Bust",
            ),
            pick_payload(
                pick_number=1,
                round=2,
                overall_pick=3,
                player_id=1630578,
                player_name="Alperen Şengün",
                verdict="Bust",
                fantasy_points_per_game=20.0,
                draft_round_fantasy_per_game_average=30.0,
            ),
        ],
    }


async def _seed(client: AsyncClient) -> None:
    resp = await client.post("/seed_draft_ratings", json=_draft_batch())
    assert resp.status_code == 201


@pytest.mark.anyio
async def test_health(client: AsyncClient):
    resp = await client.get("/health")
    assert resp.status_code == 200
    assert resp.json()["status"] == "ok"


@pytest.mark.anyio
async def test_seed_draft_ratings(client: AsyncClient):
    resp = await client.post("/seed_draft_ratings", json=_draft_batch())

    assert resp.status_code == 201
    assert resp.json() == {
        "success": True,
        "message": "Successfully inserted 3 draft picks",
        "timestamp": "2024-10-29T00:00",
    }


@pytest.mark.anyio
async def test_seed_rejects_negative_pick_number(client: AsyncClient):
    batch = _draft_batch()
    batch["allpicks"][0]["pick_number"] = -1

    resp = await client.post("/seed_draft_ratings", json=batch)

    assert resp.status_code == 400
    body = resp.json()
    assert body["success"] is False
    assert body["message"] == "Data validation failed"
    assert [error["path"] for error in body["errors"]] == ["allpicks.0.pick_number"]
    assert client.app.state.store.latest_snapshot(2025) is None


@pytest.mark.anyio
async def test_seed_rejects_malformed_json(client: AsyncClient):
    resp = await client.post(
        "/seed_draft_ratings",
        content=b"{\"snapshot_timestamp\": ",
        headers={"Content-Type": "application/json"},
    )

    assert resp.status_code == 400
    body = resp.json()
    assert body["message"] == "Invalid JSON format"
    assert body["error"]
    assert "errors" not in body


@pytest.mark.anyio
async def test_dashboard_ranks_teams(client: AsyncClient):
    await _seed(client)

    resp = await client.get("/", params={"season": 2025, "evalMethod": "total_points"})

    assert resp.status_code == 200
    html = resp.text
    assert "Draft Ratings Dashboard" in html
    assert "Latest Snapshot: 2024-10-29T00:00" in html
    # Hoopers: Steal + Bust = 2.00, Bench Mob: Bust = 0.00
    assert html.index("Hoopers") < html.index("Bench Mob")
    assert "2.00" in html
    assert "72.3" in html
    assert "<th>Total Points</th>" in html
    assert "hx-get=\"/team/7/picks?season=2025\"" in html


@pytest.mark.anyio
async def test_dashboard_without_data(client: AsyncClient):
    resp = await client.get("/", params={"season": 2019})

    assert resp.status_code == 200
    assert "No draft data available for 2019 season" in resp.text
    assert "<option value=\"2019\" selected>" in resp.text


@pytest.mark.anyio
async def test_unknown_eval_method_rejected(client: AsyncClient):
    resp = await client.get("/", params={"evalMethod": "vibes"})

    assert resp.status_code == 400
    assert resp.json()["errors"][0]["path"] == "query.evalMethod"


@pytest.mark.anyio
async def test_ratings_json(client: AsyncClient):
    await _seed(client)

    resp = await client.get("/api/ratings", params={"evalMethod": "weighted_ppg"})

    assert resp.status_code == 200
    body = resp.json()
    assert body["season"] == 2025
    assert body["eval_method"] == "weighted_ppg"
    hoopers = body["teams"][0]
    assert hoopers["team_id"] == 7
    assert hoopers["total_picks"] == 2
    assert hoopers["average_rating"] == 2.0
    # (52.3 * 40 + 20 * 30) / 70
    assert hoopers["secondary_metric"] == pytest.approx(38.5)


@pytest.mark.anyio
async def test_ratings_csv_export(client: AsyncClient):
    await _seed(client)

    resp = await client.get("/export/ratings.csv", params={"season": 2025})

    assert resp.status_code == 200
    assert resp.headers["content-type"].startswith("text/csv")
    assert "draft-ratings-2025-average_ppg.csv" in resp.headers["content-disposition"]
    lines = resp.text.splitlines()
    assert lines[0] == "Rank,Team ID,Team,Picks,Rating,PPG"
    assert lines[1].startswith("1,7,Hoopers,2,2.00,")


@pytest.mark.anyio
async def test_team_picks_fragment(client: AsyncClient):
    await _seed(client)

    resp = await client.get("/team/7/picks", params={"season": 2025})

    assert resp.status_code == 200
    assert "Hoopers's 2025 Picks" in resp.text
    assert "Luka Dončić" in resp.text
    assert "verdict-steal" in resp.text
    assert "Round 2.1" in resp.text


@pytest.mark.anyio
async def test_team_picks_fragment_empty(client: AsyncClient):
    resp = await client.get("/team/7/picks", params={"season": 2020})

    assert resp.status_code == 200
    assert "No picks available for this team in 2020 season" in resp.text


@pytest.mark.anyio
async def test_team_picks_csv(client: AsyncClient):
    await _seed(client)

    resp = await client.get("/team/8/picks.csv", params={"season": 2025})

    assert resp.status_code == 200
    assert "Nikola Jokić" in resp.text


@pytest.mark.anyio
async def test_team_summary_page(client: AsyncClient):
    await _seed(client)

    resp = await client.get("/team/7")

    assert resp.status_code == 200
    assert "Hoopers" in resp.text
    assert "Lifetime Draft Rating" in resp.text
    assert "Total Picks: 2" in resp.text
    assert "<title>Hoopers - Draft History</title>" in resp.text


@pytest.mark.anyio
async def test_team_without_picks_renders_empty_history(client: AsyncClient):
    resp = await client.get("/team/999")

    assert resp.status_code == 200
    assert "Team 999" in resp.text
    assert "No draft history for this team" in resp.text
    assert "Total Picks: 0" in resp.text
    assert "N/A" in resp.text


@pytest.mark.anyio
async def test_waiver_wire_groups_by_team(client: AsyncClient):
    await _seed(client)
    resp = await client.post(
        "/transactions",
        json={
            "snapshot_date": "2024-11-01",
            "transactions": [
                transaction_payload(),
                transaction_payload(transac_type="DROPPED", player_info="Cut Loose"),
                transaction_payload(transac_team="99", player_info="Nobody Knows"),
                transaction_payload(transac_date="2024-10-23T09:00:00", player_info="Week One Add"),
            ],
        },
    )
    assert resp.status_code == 200
    assert resp.json() == {"success": True, "message": "Inserted 4 transactions", "count": 4}

    resp = await client.get("/waiverwire", params={"week": 2})
    html = resp.text
    assert resp.status_code == 200
    assert "Week 2 Transactions" in html
    assert "Jalen Free Agent" in html
    assert "Cut Loose" in html
    assert "Week One Add" not in html
    assert html.index("Hoopers") < html.index("Unknown Team")

    resp = await client.get("/waiverwire", params={"week": 2, "type": "adds"})
    assert "Jalen Free Agent" in resp.text
    assert "Cut Loose" not in resp.text


@pytest.mark.anyio
async def test_waiver_wire_empty_week(client: AsyncClient):
    resp = await client.get("/waiverwire", params={"week": 5})

    assert resp.status_code == 200
    assert "No transactions this week" in resp.text


@pytest.mark.anyio
async def test_waiver_wire_rejects_week_zero(client: AsyncClient):
    resp = await client.get("/waiverwire", params={"week": 0})

    assert resp.status_code == 400


@pytest.mark.anyio
async def test_matching_players(client: AsyncClient):
    await _seed(client)
    resp = await client.post(
        "/load_gp",
        json={
            "snapshot_date": "2024-11-20",
            "player_info": [
                player_snapshot_payload(1629029, "Luka Doncic", 14),
                player_snapshot_payload(203999, "Nikola Jokic", 15),
            ],
        },
    )
    assert resp.status_code == 200
    assert resp.json() == {"success": True, "count": 2}

    resp = await client.get("/matching-players/2025")

    assert resp.status_code == 200
    body = resp.json()
    assert body["snapshot_date"] == "2024-11-20"
    assert body["results"] == [
        {"draft_name": "Luka Dončić", "draft_id": 1629029, "gp": 14},
        {"draft_name": "Nikola Jokić", "draft_id": 203999, "gp": 15},
        {"draft_name": "Alperen Şengün", "draft_id": 1630578, "gp": 0},
    ]


@pytest.mark.anyio
async def test_load_gp_rejects_bad_date(client: AsyncClient):
    resp = await client.post(
        "/load_gp",
        json={"snapshot_date": "20-11-2024", "player_info": [player_snapshot_payload(1, "A", 1)]},
    )

    assert resp.status_code == 400
    assert resp.json()["errors"][0]["path"] == "snapshot_date"


@pytest.mark.anyio
async def test_week_one_header_includes_preseason_moves(client: AsyncClient):
    await _seed(client)
    await client.post(
        "/transactions",
        json={
            "snapshot_date": "2024-10-20",
            "transactions": [transaction_payload(transac_date="2024-10-15T12:00:00", player_info="Preseason Add")],
        },
    )

    resp = await client.get("/waiverwire", params={"week": 1})

    assert "Preseason Add" in resp.text
    assert "On or before 2024-10-28" in resp.text

    resp = await client.get("/waiverwire", params={"week": 2})
    assert "2024-10-29 to 2024-11-04" in resp.text


class BrokenStore(DraftStore):
    def latest_snapshot(self, season):
        raise StoreError("no such table: draft_ratings")

    def insert_draft_picks(self, *, snapshot_timestamp, picks):
        raise StoreError("database is locked")


@pytest.fixture
async def broken_client(tmp_path):
    settings = Settings(
        db_path=tmp_path / "broken.sqlite",
        league_start=date(2024, 10, 22),
        default_season=2025,
        season_choices=3,
    )
    app = create_app(settings, store=BrokenStore(settings.db_path))
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://testserver") as async_client:
        yield async_client


@pytest.mark.anyio
async def test_store_failure_on_read_is_opaque_500(broken_client: AsyncClient):
    resp = await broken_client.get("/", params={"season": 2025})

    assert resp.status_code == 500
    assert resp.json() == {"success": False, "message": "Internal server error"}
    assert "no such table" not in resp.text


@pytest.mark.anyio
async def test_store_failure_on_write_is_opaque_500(broken_client: AsyncClient):
    resp = await broken_client.post("/seed_draft_ratings", json=_draft_batch())

    assert resp.status_code == 500
    assert resp.json() == {"success": False, "message": "Internal server error"}
    assert "locked" not in resp.text
