"""Static simulation configuration constants and runtime settings."""

from __future__ import annotations

import os
from pathlib import Path

SEASON_GAMES = 82
AWARD_MIN_GAMES = 58
MINOR_INJURY_GAMES = 75
RATING_MIN = 0.0
RATING_MAX = 99.0

MAJOR_INJURY_GAMES = (10, 50)
MAJOR_INJURY_PRONE_PENALTY = 5.0
ATHLETICISM_DECLINE_AGE = 30
ATHLETICISM_DECLINE = 1.0

WIN_PCT_FLOOR = 0.1
WIN_PCT_CEILING = 0.85
WIN_CONTRIBUTION_CAP = 0.75
TEAM_FACTOR_SCALE = 0.275

DEFAULT_SEASON = 1
DEFAULT_LEADERBOARD_LIMIT = 10

# Cumulative legacy points needed for each career label, best first.
GOAT_RATING_TIERS: tuple[tuple[int, str], ...] = (
    (3000, "GOAT"),
    (2000, "Top 10 All-Time"),
    (1200, "Hall of Famer"),
    (700, "All-Star Caliber"),
    (300, "Solid Starter"),
)
DEFAULT_GOAT_RATING = "Role Player"

DEFAULT_PLAYER_VALUES: dict[str, object] = {
    "name": "Rookie",
    "position": "PG",
    "shooting": 50.0,
    "playmaking": 50.0,
    "defense": 50.0,
    "athleticism": 50.0,
    "basketball_iq": 50.0,
    "work_ethic": 50.0,
    "injury_prone": 50.0,
    "age": 19,
}

DEFAULT_LEADERBOARD_VALUES: dict[str, object] = {
    "position": "PG",
    "seasons_played": 1,
    "total_points": 0,
    "career_ppg": 0.0,
    "championships": 0,
    "mvps": 0,
    "all_stars": 0,
    "finals_mvps": 0,
    "all_nba_first_teams": 0,
    "all_nba_teams": 0,
    "scoring_titles": 0,
    "legacy_points": 0,
    "goat_rating": DEFAULT_GOAT_RATING,
}


def db_path() -> Path:
    return Path(os.environ.get("HOOPS_SIM_DB_PATH", "data/basketball_tycoon.db"))


def server_host() -> str:
    return os.environ.get("HOOPS_SIM_HOST", "127.0.0.1")


def server_port() -> int:
    try:
        return int(os.environ.get("HOOPS_SIM_PORT", "3000"))
    except ValueError:
        return 3000


def log_level() -> str:
    return os.environ.get("HOOPS_SIM_LOG_LEVEL", "INFO").upper()
