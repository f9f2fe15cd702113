from typing import Any

from fastapi import FastAPI, HTTPException, Request
from fastapi.responses import JSONResponse
from pydantic import BaseModel, Field, ValidationError

from golf_games import golf_api
from golf_games.aggregator import score_round
from golf_games.engines import ENGINES, get_engine
from golf_games.errors import InvalidRoundError
from golf_games.handicap import (
    DEFAULT_COURSE_RATING,
    DEFAULT_SLOPE,
    RoundDifferential,
    calculate_handicap_index,
)
from golf_games.history import load_player_history
from golf_games.models import (
    Course,
    GameMode,
    Hole,
    HoleScore,
    Player,
    Round,
    RoundData,
    RoundStatus,
)
from golf_games.settings import load_settings
from golf_games.settlement import collect_ledger, net_ledger
from golf_games.stats import round_stats

app = FastAPI(title="Golf Games Scoring")
settings = load_settings()


class HolePayload(BaseModel):
    number: int = Field(ge=1, le=18)
    par: int = Field(default=4, ge=3, le=5)
    yardage: int | None = None
    stroke_index: int | None = Field(default=None, ge=1, le=18)


class HoleScorePayload(BaseModel):
    hole: int = Field(ge=1, le=18)
    strokes: int = Field(ge=1)
    putts: int | None = Field(default=None, ge=0)
    fairway_hit: bool = False
    green_in_regulation: bool = False
    chips: int = 0
    sand_traps: int = 0
    penalties: int = 0
    notes: str | None = None


class PlayerPayload(BaseModel):
    id: str
    name: str = ""
    handicap: float = 0.0
    scores: list[HoleScorePayload] = []


class RoundPayload(BaseModel):
    id: str = ""
    course: list[HolePayload] | None = None
    players: list[PlayerPayload]
    game_mode: GameMode = GameMode.STROKE_PLAY
    game_modes: list[GameMode] = []
    status: RoundStatus = RoundStatus.ACTIVE
    configs: dict[str, dict[str, Any]] = {}

    def to_round(self) -> Round:
        course = Course.default()
        if self.course:
            course = Course(
                tuple(
                    Hole(hole.number, hole.par, hole.yardage, hole.stroke_index)
                    for hole in sorted(self.course, key=lambda item: item.number)
                )
            )
        golf_round = Round(
            id=self.id,
            course=course,
            players=[Player(p.id, p.name, p.handicap) for p in self.players],
            game_mode=self.game_mode,
            game_modes=list(self.game_modes),
            status=self.status,
        )
        for player in self.players:
            for entry in player.scores:
                golf_round.upsert_score(
                    player.id,
                    HoleScore(
                        hole_number=entry.hole,
                        strokes=entry.strokes,
                        putts=entry.putts,
                        fairway_hit=entry.fairway_hit,
                        green_in_regulation=entry.green_in_regulation,
                        chips=entry.chips,
                        sand_traps=entry.sand_traps,
                        penalties=entry.penalties,
                        notes=entry.notes,
                    ),
                )
        return golf_round


class DifferentialPayload(BaseModel):
    round_id: str = ""
    gross: int = Field(ge=1)
    course_rating: float = DEFAULT_COURSE_RATING
    slope: int = DEFAULT_SLOPE
    date: int | None = None
    course_name: str | None = None


class HandicapPayload(BaseModel):
    rounds: list[DifferentialPayload]


async def _parse_round(request: Request) -> RoundPayload | JSONResponse:
    try:
        return RoundPayload.model_validate(await request.json())
    except ValidationError as exc:
        return JSONResponse({"error": "Invalid payload", "details": exc.errors()}, status_code=422)


def _handicap_response(differentials: list[RoundDifferential]) -> dict:
    result = calculate_handicap_index(differentials)
    return {
        "index": result.index,
        "method": result.method,
        "description": result.description,
        "rounds_used": result.rounds_used,
        "rounds_available": result.rounds_available,
        "minimum_rounds_needed": result.minimum_rounds_needed,
        "differentials": [
            {"round_id": item.round_id, "gross": item.gross, "differential": round(item.differential, 1)}
            for item in result.differentials
        ],
        "best_differentials": [item.round_id for item in result.best_differentials],
    }


@app.get("/api/modes")
async def api_modes():
    return {"modes": [{"mode": mode.value, "name": mode.display_name} for mode in ENGINES]}


@app.post("/api/rounds/score")
async def api_score_round(request: Request):
    payload = await _parse_round(request)
    if isinstance(payload, JSONResponse):
        return payload
    try:
        result = score_round(payload.to_round(), payload.configs)
    except InvalidRoundError as exc:
        raise HTTPException(status_code=400, detail=str(exc))
    return {
        "round_id": payload.id,
        "primary": result.primary.value,
        "winners": result.winners,
        "results": result.results,
        "failures": result.failures,
    }


@app.post("/api/formats/{mode}")
async def api_score_format(mode: str, request: Request):
    payload = await _parse_round(request)
    if isinstance(payload, JSONResponse):
        return payload
    try:
        engine = get_engine(mode)
        data = RoundData.from_round(payload.to_round())
        return engine.compute(data, payload.configs.get(mode))
    except InvalidRoundError as exc:
        raise HTTPException(status_code=400, detail=str(exc))


@app.post("/api/rounds/settlement")
async def api_settlement(request: Request):
    payload = await _parse_round(request)
    if isinstance(payload, JSONResponse):
        return payload
    try:
        result = score_round(payload.to_round(), payload.configs)
    except InvalidRoundError as exc:
        raise HTTPException(status_code=400, detail=str(exc))
    ledger = collect_ledger(result.results.values())
    return {"ledger": ledger, "settlement": net_ledger(ledger)}


@app.post("/api/rounds/stats")
async def api_round_stats(request: Request):
    payload = await _parse_round(request)
    if isinstance(payload, JSONResponse):
        return payload
    data = RoundData.from_round(payload.to_round())
    return {"players": [round_stats(data, pid) for pid in data.players]}


@app.post("/api/handicap")
async def api_handicap(payload: HandicapPayload):
    differentials = [
        RoundDifferential(
            round_id=item.round_id or str(idx),
            gross=item.gross,
            course_rating=item.course_rating,
            slope=item.slope,
            date=item.date,
            course_name=item.course_name,
        )
        for idx, item in enumerate(payload.rounds, 1)
    ]
    return _handicap_response(differentials)


@app.get("/api/players/{player_id}/handicap")
async def api_player_handicap(player_id: str):
    history = load_player_history(
        settings.database_url, player_id, timeout=settings.history_timeout
    )
    return {"player_id": player_id, **_handicap_response(history)}


@app.get("/api/courses/search")
async def api_course_search(query: str):
    try:
        return golf_api.search_courses(query, settings.golf_api_key)
    except golf_api.GolfApiError as exc:
        raise HTTPException(status_code=502, detail=str(exc))


@app.get("/api/courses/{course_id}")
async def api_course(course_id: int, tee: str | None = None):
    try:
        payload = golf_api.fetch_course(course_id, settings.golf_api_key)
    except golf_api.GolfApiError as exc:
        raise HTTPException(status_code=502, detail=str(exc))
    course = golf_api.course_from_payload(payload, tee)
    rating, slope = golf_api.tee_ratings(payload, tee)
    return {
        "course_id": course.course_id,
        "name": course.name,
        "par": course.par_total,
        "course_rating": rating,
        "slope": slope,
        "holes": course.holes,
    }
