from __future__ import annotations

import logging
import math
import random
from dataclasses import dataclass

from .awards import evaluate_accolades, legacy_points
from .config import (
    ATHLETICISM_DECLINE,
    ATHLETICISM_DECLINE_AGE,
    MAJOR_INJURY_GAMES,
    MAJOR_INJURY_PRONE_PENALTY,
    MINOR_INJURY_GAMES,
    RATING_MAX,
    RATING_MIN,
    SEASON_GAMES,
    TEAM_FACTOR_SCALE,
    WIN_CONTRIBUTION_CAP,
    WIN_PCT_CEILING,
    WIN_PCT_FLOOR,
)
from .models import InjuryStatus, Player, SeasonResult, SeasonStats, TeamRecord

logger = logging.getLogger(__name__)

# Multiplicative jitter per stat, as a +/- fraction of the base value.
STAT_VARIANCE: dict[str, float] = {
    "ppg": 0.3,
    "rpg": 0.2,
    "apg": 0.2,
    "spg": 0.2,
    "bpg": 0.2,
}
TEAM_VARIANCE = 0.1


@dataclass(slots=True, frozen=True)
class AgingProfile:
    age_factor: float
    skill_improvement: float


@dataclass(slots=True, frozen=True)
class InjuryOutcome:
    injury_risk: float
    major_injury: bool
    games_played: int

    @property
    def status(self) -> InjuryStatus:
        if self.major_injury:
            return InjuryStatus.MAJOR
        if self.games_played < MINOR_INJURY_GAMES:
            return InjuryStatus.MINOR
        return InjuryStatus.HEALTHY


def _clamp_rating(value: float, low: float = RATING_MIN, high: float = RATING_MAX) -> float:
    return max(low, min(high, value))


def add_randomness(value: float, factor: float, rng: random.Random) -> float:
    return value * (1 + (rng.random() * 2 - 1) * factor)


def age_factor(age: int, work_ethic: float) -> float:
    if age < 22:
        factor = 0.8 + (age - 19) * 0.07
    elif age < 28:
        factor = 0.95 + (age - 22) * 0.01
    elif age < 33:
        factor = 1.0
    else:
        # Steep decline from 33 on; can reach zero or below for very old players.
        factor = 0.6 - (age - 33) * 0.05

    if age < 27:
        factor += (work_ethic / 100) * 0.1
    elif age > 32:
        factor += (work_ethic / 100) * 0.05
    return factor


def skill_improvement(age: int, work_ethic: float) -> float:
    return max(0.0, work_ethic / 20 - age / 10)


def aging_profile(age: int, work_ethic: float) -> AgingProfile:
    profile = AgingProfile(age_factor=age_factor(age, work_ethic), skill_improvement=skill_improvement(age, work_ethic))
    if profile.age_factor <= 0:
        logger.debug("Non-positive age factor %.3f at age %s; stats will be zero or negative", profile.age_factor, age)
    return profile


def injury_risk(injury_prone: float, age: int) -> float:
    return (injury_prone / 100) * (1 + ((age - 30) * 0.01 if age > 30 else 0))


def roll_injuries(injury_prone: float, age: int, rng: random.Random) -> InjuryOutcome:
    risk = injury_risk(injury_prone, age)
    major = rng.random() < risk * 0.1
    if major:
        low, high = MAJOR_INJURY_GAMES
        games = math.floor(rng.random() * (high - low + 1)) + low
    else:
        games = math.floor(SEASON_GAMES - rng.random() * risk * 20)
    clamped = max(0, min(SEASON_GAMES, games))
    if clamped != games:
        logger.debug("Games played %s outside season bounds; clamped to %s", games, clamped)
    return InjuryOutcome(injury_risk=risk, major_injury=major, games_played=clamped)


def generate_stats(player: Player, factor: float, games_played: int, rng: random.Random) -> SeasonStats:
    base = {
        "ppg": (player.shooting * 0.2 + player.playmaking * 0.1 + player.athleticism * 0.1) * factor,
        "rpg": (player.athleticism * 0.1 + player.defense * 0.1) * factor,
        "apg": (player.playmaking * 0.1 + player.basketball_iq * 0.3) * factor,
        "spg": (player.defense * 0.1 + player.athleticism * 0.1) * factor * 0.1,
        "bpg": (player.defense * 0.1 + player.athleticism * 0.1) * factor * 0.1,
    }
    jittered = {key: add_randomness(value, STAT_VARIANCE[key], rng) for key, value in base.items()}
    return SeasonStats(games_played=games_played, **jittered)


def win_contribution(stats: SeasonStats, basketball_iq: float) -> float:
    raw = (
        stats.ppg * 0.5
        + stats.rpg * 0.2
        + stats.apg * 0.3
        + stats.spg * 2
        + stats.bpg * 2
        + basketball_iq * 0.3
    ) / 90
    return min(WIN_CONTRIBUTION_CAP, raw)


def calculate_team_record(
    stats: SeasonStats,
    basketball_iq: float,
    season: int,
    rng: random.Random,
) -> TeamRecord:
    # Season number is accepted for future era adjustments; it does not move the formula yet.
    team_factor = rng.random() * TEAM_FACTOR_SCALE
    win_pct = add_randomness(win_contribution(stats, basketball_iq) + team_factor, TEAM_VARIANCE, rng)
    win_pct = max(WIN_PCT_FLOOR, min(WIN_PCT_CEILING, win_pct))
    wins = math.floor(win_pct * SEASON_GAMES)
    return TeamRecord(wins=wins, losses=SEASON_GAMES - wins)


def progress_ratings(
    player: Player,
    improvement: float,
    major_injury: bool,
    rng: random.Random,
) -> Player:
    shooting = _clamp_rating(player.shooting + rng.random() * improvement)
    playmaking = _clamp_rating(player.playmaking + rng.random() * improvement)
    defense = _clamp_rating(player.defense + rng.random() * improvement)
    if player.age > ATHLETICISM_DECLINE_AGE:
        athleticism = _clamp_rating(player.athleticism - ATHLETICISM_DECLINE)
    else:
        athleticism = _clamp_rating(player.athleticism + rng.random() * improvement)
    basketball_iq = _clamp_rating(player.basketball_iq + rng.random() * improvement * 0.5)
    injury_prone = _clamp_rating(player.injury_prone + (MAJOR_INJURY_PRONE_PENALTY if major_injury else 0.0))
    return player.with_ratings(
        shooting=shooting,
        playmaking=playmaking,
        defense=defense,
        athleticism=athleticism,
        basketball_iq=basketball_iq,
        injury_prone=injury_prone,
        age=player.age + 1,
    )


class SeasonSimulator:
    """Turns a player snapshot into one simulated season.

    All draws come from a single ``random.Random``; two simulators built with
    the same seed produce identical results for identical inputs.
    """

    def __init__(self, seed: int | None = None, rng: random.Random | None = None) -> None:
        self._rng = rng if rng is not None else random.Random(seed)

    def simulate(self, player: Player, season: int = 1) -> SeasonResult:
        rng = self._rng
        aging = aging_profile(player.age, player.work_ethic)
        injury = roll_injuries(player.injury_prone, player.age, rng)
        stats = generate_stats(player, aging.age_factor, injury.games_played, rng)
        record = calculate_team_record(stats, player.basketball_iq, season, rng)
        accolades = evaluate_accolades(stats, record, rng)
        new_ratings = progress_ratings(player, aging.skill_improvement, injury.major_injury, rng)
        points = legacy_points(stats, accolades, record)
        logger.debug(
            "Season %s for %s (age %s): %.1f ppg, %s, %d legacy points",
            season,
            player.name,
            player.age,
            stats.ppg,
            record.record,
            points,
        )
        return SeasonResult(
            season=season,
            age=player.age,
            stats=stats,
            team_record=record,
            accolades=accolades,
            injuries=injury.status,
            legacy_points=points,
            new_ratings=new_ratings,
            age_factor=aging.age_factor,
            major_injury=injury.major_injury,
        )


def simulate_season(player: Player, season: int = 1, rng: random.Random | None = None) -> SeasonResult:
    return SeasonSimulator(rng=rng).simulate(player, season)
