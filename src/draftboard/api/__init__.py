"""REST API and dashboard pages for draft analytics."""

from __future__ import annotations

import logging
from typing import Callable, TypeVar

from fastapi import Depends, FastAPI, Query, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import HTMLResponse, JSONResponse, Response
from pydantic import BaseModel

from draftboard.api.schemas import (
    ErrorResponse,
    FieldErrorResponse,
    IngestResponse,
    MatchingPlayerResponse,
    MatchingPlayersResponse,
    TeamRatingResponse,
    TeamRatingsResponse,
)
from draftboard.api.views import (
    render_dashboard,
    render_team_picks,
    render_team_summary,
    render_waiver_wire,
)
from draftboard.config import Settings, load_settings
from draftboard.export import export_picks_to_csv, export_team_report_to_csv
from draftboard.ingest import (
    DraftPicksPayload,
    ParseError,
    ParseResult,
    PlayerSnapshotsPayload,
    TransactionsPayload,
    parse_payload,
    store_draft_picks,
    store_player_snapshots,
    store_transactions,
)
from draftboard.models import EvalMethod
from draftboard.persistence import DraftStore, StoreError
from draftboard.reporting import (
    TransactionFilter,
    matching_players,
    secondary_metric,
    team_picks,
    team_report,
    team_summary,
    waiver_report,
)


logger = logging.getLogger("uvicorn.error")

PayloadT = TypeVar("PayloadT", bound=BaseModel)


def _error_response(result: ParseError) -> JSONResponse:
    if result.kind == "malformed":
        payload = ErrorResponse(message=result.message, error=result.detail)
    else:
        payload = ErrorResponse(
            message=result.message,
            errors=[FieldErrorResponse(path=item.path, message=item.message) for item in result.violations],
        )
    return JSONResponse(status_code=400, content=payload.model_dump(exclude_none=True))


def get_store(request: Request) -> DraftStore:
    return request.app.state.store


def get_settings(request: Request) -> Settings:
    return request.app.state.settings


def _season_options(settings: Settings, selected: int) -> list[int]:
    seasons = list(settings.seasons)
    if selected not in seasons:
        seasons.append(selected)
        seasons.sort(reverse=True)
    return seasons


def create_app(settings: Settings | None = None, store: DraftStore | None = None) -> FastAPI:
    settings = settings or load_settings()
    app = FastAPI(title="draftboard")
    app.state.settings = settings
    app.state.store = store or DraftStore(settings.db_path)

    @app.exception_handler(StoreError)
    async def store_error_handler(request: Request, exc: StoreError) -> JSONResponse:
        logger.error("Store failure during %s %s", request.method, request.url.path, exc_info=exc)
        payload = ErrorResponse(message="Internal server error")
        return JSONResponse(status_code=500, content=payload.model_dump(exclude_none=True))

    @app.exception_handler(RequestValidationError)
    async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
        payload = ErrorResponse(
            message="Invalid request parameters",
            errors=[
                FieldErrorResponse(path=".".join(str(part) for part in error["loc"]), message=error["msg"])
                for error in exc.errors()
            ],
        )
        return JSONResponse(status_code=400, content=payload.model_dump(exclude_none=True))

    async def _parse(request: Request, model: type[PayloadT]) -> ParseResult[PayloadT]:
        return parse_payload(model, await request.body())

    def _ingest(
        result: ParseResult[PayloadT],
        writer: Callable[[DraftStore, PayloadT], int],
        store: DraftStore,
    ) -> int | JSONResponse:
        if isinstance(result, ParseError):
            return _error_response(result)
        return writer(store, result.value)

    @app.get("/health")
    async def health() -> dict[str, str]:
        return {"status": "ok"}

    @app.post(
        "/seed_draft_ratings",
        status_code=201,
        response_model=IngestResponse,
        response_model_exclude_none=True,
        responses={400: {"model": ErrorResponse}, 500: {"model": ErrorResponse}},
    )
    async def seed_draft_ratings(request: Request, store: DraftStore = Depends(get_store)):
        result = await _parse(request, DraftPicksPayload)
        outcome = _ingest(result, store_draft_picks, store)
        if isinstance(outcome, JSONResponse):
            return outcome
        return IngestResponse(
            message=f"Successfully inserted {outcome} draft picks",
            timestamp=result.value.snapshot_timestamp,
        )

    @app.post(
        "/transactions",
        response_model=IngestResponse,
        response_model_exclude_none=True,
        responses={400: {"model": ErrorResponse}, 500: {"model": ErrorResponse}},
    )
    async def load_transactions(request: Request, store: DraftStore = Depends(get_store)):
        result = await _parse(request, TransactionsPayload)
        outcome = _ingest(result, store_transactions, store)
        if isinstance(outcome, JSONResponse):
            return outcome
        return IngestResponse(message=f"Inserted {outcome} transactions", count=outcome)

    @app.post(
        "/load_gp",
        response_model=IngestResponse,
        response_model_exclude_none=True,
        responses={400: {"model": ErrorResponse}, 500: {"model": ErrorResponse}},
    )
    async def load_games_played(request: Request, store: DraftStore = Depends(get_store)):
        result = await _parse(request, PlayerSnapshotsPayload)
        outcome = _ingest(result, store_player_snapshots, store)
        if isinstance(outcome, JSONResponse):
            return outcome
        return IngestResponse(count=outcome)

    @app.get("/", response_class=HTMLResponse)
    async def dashboard(
        season: int | None = Query(None),
        eval_method: EvalMethod = Query(EvalMethod.AVERAGE_PPG, alias="evalMethod"),
        store: DraftStore = Depends(get_store),
        settings: Settings = Depends(get_settings),
    ) -> HTMLResponse:
        report = team_report(store, season if season is not None else settings.default_season, eval_method)
        return HTMLResponse(render_dashboard(report, _season_options(settings, report.season)))

    @app.get("/api/ratings", response_model=TeamRatingsResponse)
    async def ratings(
        season: int | None = Query(None),
        eval_method: EvalMethod = Query(EvalMethod.AVERAGE_PPG, alias="evalMethod"),
        store: DraftStore = Depends(get_store),
        settings: Settings = Depends(get_settings),
    ) -> TeamRatingsResponse:
        report = team_report(store, season if season is not None else settings.default_season, eval_method)
        return TeamRatingsResponse(
            season=report.season,
            snapshot_timestamp=report.snapshot_timestamp,
            eval_method=report.method.value,
            teams=[
                TeamRatingResponse(
                    team_id=team.team_id,
                    team_name=team.team_name,
                    total_picks=team.total_picks,
                    average_rating=team.average_rating,
                    avg_points_per_pick=team.avg_points_per_pick,
                    weighted_ppg=team.weighted_ppg,
                    total_points=team.total_points,
                    secondary_metric=secondary_metric(team, report.method),
                )
                for team in report.teams
            ],
        )

    @app.get("/export/ratings.csv")
    async def export_ratings(
        season: int | None = Query(None),
        eval_method: EvalMethod = Query(EvalMethod.AVERAGE_PPG, alias="evalMethod"),
        store: DraftStore = Depends(get_store),
        settings: Settings = Depends(get_settings),
    ) -> Response:
        report = team_report(store, season if season is not None else settings.default_season, eval_method)
        filename = f"draft-ratings-{report.season}-{report.method.value}.csv"
        return Response(
            content=export_team_report_to_csv(report),
            media_type="text/csv",
            headers={"Content-Disposition": f"attachment; filename={filename}"},
        )

    @app.get("/team/{team_id}", response_class=HTMLResponse)
    async def team_page(team_id: int, store: DraftStore = Depends(get_store)) -> HTMLResponse:
        return HTMLResponse(render_team_summary(team_summary(store, team_id)))

    @app.get("/team/{team_id}/picks", response_class=HTMLResponse)
    async def team_picks_fragment(
        team_id: int,
        season: int | None = Query(None),
        store: DraftStore = Depends(get_store),
        settings: Settings = Depends(get_settings),
    ) -> HTMLResponse:
        result = team_picks(store, team_id, season if season is not None else settings.default_season)
        return HTMLResponse(render_team_picks(result))

    @app.get("/team/{team_id}/picks.csv")
    async def export_team_picks(
        team_id: int,
        season: int | None = Query(None),
        store: DraftStore = Depends(get_store),
        settings: Settings = Depends(get_settings),
    ) -> Response:
        result = team_picks(store, team_id, season if season is not None else settings.default_season)
        filename = f"team-{team_id}-picks-{result.season}.csv"
        return Response(
            content=export_picks_to_csv(result.picks),
            media_type="text/csv",
            headers={"Content-Disposition": f"attachment; filename={filename}"},
        )

    @app.get("/waiverwire", response_class=HTMLResponse)
    async def waiver_wire(
        week: int | None = Query(None, ge=1),
        kind: TransactionFilter = Query(TransactionFilter.ALL, alias="type"),
        store: DraftStore = Depends(get_store),
        settings: Settings = Depends(get_settings),
    ) -> HTMLResponse:
        report = waiver_report(store, league_start=settings.league_start, week=week, kind=kind)
        return HTMLResponse(render_waiver_wire(report))

    @app.get("/matching-players/{season}", response_model=MatchingPlayersResponse)
    async def matching_players_for_season(
        season: int,
        store: DraftStore = Depends(get_store),
    ) -> MatchingPlayersResponse:
        report = matching_players(store, season)
        return MatchingPlayersResponse(
            season=report.season,
            snapshot_date=report.snapshot_date,
            results=[
                MatchingPlayerResponse(draft_name=match.draft_name, draft_id=match.draft_id, gp=match.gp)
                for match in report.matches
            ],
        )

    return app


__all__ = ["create_app", "get_settings", "get_store"]
