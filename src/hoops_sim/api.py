from __future__ import annotations

import logging
import math
from contextlib import asynccontextmanager
from typing import Any

from fastapi import FastAPI, HTTPException
from fastapi.middleware.cors import CORSMiddleware
from pydantic import BaseModel, ConfigDict, Field, ValidationInfo, field_validator

from . import config
from .career import simulate_career
from .engine import SeasonSimulator
from .leaderboard import LeaderboardError, LeaderboardStore
from .models import RATING_FIELDS, LeaderboardEntry, Player

logger = logging.getLogger(__name__)

LEADERBOARD_INT_FIELDS = (
    "seasons_played",
    "total_points",
    "championships",
    "mvps",
    "all_stars",
    "finals_mvps",
    "all_nba_first_teams",
    "all_nba_teams",
    "scoring_titles",
    "legacy_points",
)
MAX_CAREER_SEASONS = 30


def _to_number(value: Any, default: float) -> float:
    if isinstance(value, bool):
        return float(value)
    try:
        number = float(value)
    except (TypeError, ValueError):
        return float(default)
    if math.isnan(number) or math.isinf(number):
        return float(default)
    return number


def _nonzero_number(value: Any, default: float) -> float:
    # Zero counts as missing for leaderboard totals, so seasons_played never lands at 0.
    number = _to_number(value, default)
    return number if number else float(default)


def _text(value: Any, default: str) -> str:
    if isinstance(value, str) and value.strip():
        return value
    return default


class PlayerPayload(BaseModel):
    name: str = str(config.DEFAULT_PLAYER_VALUES["name"])
    position: str = str(config.DEFAULT_PLAYER_VALUES["position"])
    shooting: float = float(config.DEFAULT_PLAYER_VALUES["shooting"])
    playmaking: float = float(config.DEFAULT_PLAYER_VALUES["playmaking"])
    defense: float = float(config.DEFAULT_PLAYER_VALUES["defense"])
    athleticism: float = float(config.DEFAULT_PLAYER_VALUES["athleticism"])
    basketball_iq: float = float(config.DEFAULT_PLAYER_VALUES["basketball_iq"])
    work_ethic: float = float(config.DEFAULT_PLAYER_VALUES["work_ethic"])
    injury_prone: float = float(config.DEFAULT_PLAYER_VALUES["injury_prone"])
    age: int = int(config.DEFAULT_PLAYER_VALUES["age"])

    @field_validator("name", "position", mode="before")
    @classmethod
    def _coerce_text(cls, value: Any, info: ValidationInfo) -> str:
        return _text(value, str(config.DEFAULT_PLAYER_VALUES[info.field_name]))

    @field_validator(*RATING_FIELDS, mode="before")
    @classmethod
    def _coerce_rating(cls, value: Any, info: ValidationInfo) -> float:
        return _to_number(value, float(config.DEFAULT_PLAYER_VALUES[info.field_name]))

    @field_validator("age", mode="before")
    @classmethod
    def _coerce_age(cls, value: Any) -> int:
        return int(math.floor(_to_number(value, float(config.DEFAULT_PLAYER_VALUES["age"]))))

    def to_player(self) -> Player:
        return Player(**self.model_dump())


class SeasonRequest(BaseModel):
    player: PlayerPayload = Field(default_factory=PlayerPayload)
    season: int = config.DEFAULT_SEASON
    seed: int | None = None

    @field_validator("season", mode="before")
    @classmethod
    def _coerce_season(cls, value: Any) -> int:
        return int(_nonzero_number(value, config.DEFAULT_SEASON))


class CareerRequest(BaseModel):
    player: PlayerPayload = Field(default_factory=PlayerPayload)
    seasons: int = 15
    seed: int | None = None

    @field_validator("seasons", mode="before")
    @classmethod
    def _coerce_seasons(cls, value: Any) -> int:
        return max(1, min(MAX_CAREER_SEASONS, int(_nonzero_number(value, 15))))


class LeaderboardSubmission(BaseModel):
    model_config = ConfigDict(extra="allow")

    player_name: str = ""
    position: str = str(config.DEFAULT_LEADERBOARD_VALUES["position"])
    seasons_played: int = 1
    total_points: int = 0
    career_ppg: float = 0.0
    championships: int = 0
    mvps: int = 0
    all_stars: int = 0
    finals_mvps: int = 0
    all_nba_first_teams: int = 0
    all_nba_teams: int = 0
    scoring_titles: int = 0
    legacy_points: int = 0
    goat_rating: str = config.DEFAULT_GOAT_RATING

    @field_validator("player_name", mode="before")
    @classmethod
    def _coerce_name(cls, value: Any) -> str:
        return value.strip() if isinstance(value, str) else ""

    @field_validator("position", "goat_rating", mode="before")
    @classmethod
    def _coerce_label(cls, value: Any, info: ValidationInfo) -> str:
        return _text(value, str(config.DEFAULT_LEADERBOARD_VALUES[info.field_name]))

    @field_validator(*LEADERBOARD_INT_FIELDS, mode="before")
    @classmethod
    def _coerce_count(cls, value: Any, info: ValidationInfo) -> int:
        return int(round(_nonzero_number(value, float(config.DEFAULT_LEADERBOARD_VALUES[info.field_name]))))

    @field_validator("career_ppg", mode="before")
    @classmethod
    def _coerce_ppg(cls, value: Any) -> float:
        return _nonzero_number(value, 0.0)

    def to_entry(self) -> LeaderboardEntry:
        values = {column: getattr(self, column) for column in LeaderboardEntry.COLUMNS}
        return LeaderboardEntry(extra=dict(self.model_extra or {}), **values)


class SimService:
    def __init__(self, store: LeaderboardStore) -> None:
        self.store = store

    def simulate_season(self, request: SeasonRequest) -> dict[str, Any]:
        player = request.player.to_player()
        logger.info("Simulating season %s for %s (age %s)", request.season, player.name, player.age)
        result = SeasonSimulator(seed=request.seed).simulate(player, request.season)
        return result.to_dict()

    def simulate_career(self, request: CareerRequest) -> dict[str, Any]:
        player = request.player.to_player()
        logger.info("Simulating %s-season career for %s", request.seasons, player.name)
        return simulate_career(player, request.seasons, seed=request.seed).to_dict()

    def leaderboard(self, limit: int) -> list[dict[str, Any]]:
        return [entry.to_dict() for entry in self.store.top(limit)]

    def submit(self, submission: LeaderboardSubmission) -> dict[str, Any]:
        entry = self.store.add_entry(submission.to_entry())
        return {
            "success": True,
            "player": entry.to_dict(),
            "rank": self.store.rank_for(entry.legacy_points),
            "totalPlayers": self.store.count(),
        }

    def close(self) -> None:
        self.store.close()


def create_app(service: SimService | None = None) -> FastAPI:
    owns_service = service is None
    if service is None:
        service = SimService(LeaderboardStore(config.db_path()))

    @asynccontextmanager
    async def lifespan(_app: FastAPI):
        yield
        if owns_service:
            service.close()

    app = FastAPI(title="Hoops Career Sim API", version="0.1.0", lifespan=lifespan)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.state.service = service

    @app.get("/api/health")
    def health() -> dict[str, str]:
        return {"status": "ok"}

    @app.post("/api/simulate-season")
    def simulate_season(payload: SeasonRequest) -> dict[str, Any]:
        return service.simulate_season(payload)

    @app.post("/api/simulate-career")
    def simulate_career_route(payload: CareerRequest) -> dict[str, Any]:
        return service.simulate_career(payload)

    @app.get("/api/goat-leaderboard")
    def goat_leaderboard(limit: int = config.DEFAULT_LEADERBOARD_LIMIT) -> list[dict[str, Any]]:
        try:
            return service.leaderboard(limit)
        except LeaderboardError as exc:
            logger.exception("Error fetching leaderboard")
            raise HTTPException(status_code=500, detail="Failed to retrieve leaderboard") from exc

    @app.post("/api/goat-leaderboard")
    def add_to_leaderboard(payload: LeaderboardSubmission) -> dict[str, Any]:
        if not payload.player_name:
            raise HTTPException(status_code=400, detail="Missing required field: player_name cannot be empty")
        try:
            return service.submit(payload)
        except LeaderboardError as exc:
            logger.exception("Error adding %s to leaderboard", payload.player_name)
            raise HTTPException(status_code=500, detail="Failed to add player to leaderboard") from exc

    return app
