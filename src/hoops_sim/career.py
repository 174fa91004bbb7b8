from __future__ import annotations

import logging
import random
from dataclasses import dataclass, field
from typing import Any, Iterable

from .config import DEFAULT_GOAT_RATING, GOAT_RATING_TIERS
from .engine import SeasonSimulator, age_factor
from .models import ALL_NBA_ACCOLADES, Accolade, LeaderboardEntry, Player, SeasonResult

logger = logging.getLogger(__name__)


def goat_rating(total_legacy_points: int) -> str:
    for threshold, label in GOAT_RATING_TIERS:
        if total_legacy_points >= threshold:
            return label
    return DEFAULT_GOAT_RATING


@dataclass(slots=True)
class CareerSummary:
    seasons_played: int = 0
    total_points: int = 0
    games_played: int = 0
    championships: int = 0
    mvps: int = 0
    all_stars: int = 0
    finals_mvps: int = 0
    all_nba_first_teams: int = 0
    all_nba_teams: int = 0
    scoring_titles: int = 0
    legacy_points: int = 0

    @property
    def career_ppg(self) -> float:
        if self.games_played <= 0:
            return 0.0
        return round(self.total_points / self.games_played, 1)

    @property
    def goat_rating(self) -> str:
        return goat_rating(self.legacy_points)

    @classmethod
    def from_seasons(cls, seasons: Iterable[SeasonResult]) -> CareerSummary:
        summary = cls()
        for season in seasons:
            summary.add(season)
        return summary

    def add(self, season: SeasonResult) -> None:
        self.seasons_played += 1
        self.total_points += season.points_scored
        self.games_played += season.stats.games_played
        self.championships += season.count([Accolade.NBA_CHAMPION])
        self.mvps += season.count([Accolade.MVP])
        self.all_stars += season.count([Accolade.ALL_STAR])
        self.finals_mvps += season.count([Accolade.FINALS_MVP])
        self.all_nba_first_teams += season.count([Accolade.ALL_NBA_FIRST])
        self.all_nba_teams += season.count(ALL_NBA_ACCOLADES)
        self.scoring_titles += season.count([Accolade.SCORING_CHAMPION])
        self.legacy_points += season.legacy_points

    def to_leaderboard_entry(self, player: Player) -> LeaderboardEntry:
        return LeaderboardEntry(
            player_name=player.name,
            position=player.position,
            seasons_played=self.seasons_played,
            total_points=self.total_points,
            career_ppg=self.career_ppg,
            championships=self.championships,
            mvps=self.mvps,
            all_stars=self.all_stars,
            finals_mvps=self.finals_mvps,
            all_nba_first_teams=self.all_nba_first_teams,
            all_nba_teams=self.all_nba_teams,
            scoring_titles=self.scoring_titles,
            legacy_points=self.legacy_points,
            goat_rating=self.goat_rating,
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "seasons_played": self.seasons_played,
            "total_points": self.total_points,
            "career_ppg": self.career_ppg,
            "championships": self.championships,
            "mvps": self.mvps,
            "all_stars": self.all_stars,
            "finals_mvps": self.finals_mvps,
            "all_nba_first_teams": self.all_nba_first_teams,
            "all_nba_teams": self.all_nba_teams,
            "scoring_titles": self.scoring_titles,
            "legacy_points": self.legacy_points,
            "goat_rating": self.goat_rating,
        }


@dataclass(slots=True)
class Career:
    player: Player
    seasons: list[SeasonResult] = field(default_factory=list)
    retired_early: bool = False

    @property
    def final_ratings(self) -> Player:
        if not self.seasons:
            return self.player
        return self.seasons[-1].new_ratings

    @property
    def summary(self) -> CareerSummary:
        return CareerSummary.from_seasons(self.seasons)

    def to_dict(self) -> dict[str, Any]:
        return {
            "player": self.player.to_dict(),
            "seasons": [season.to_dict() for season in self.seasons],
            "retired_early": self.retired_early,
            "summary": self.summary.to_dict(),
        }


def simulate_career(
    player: Player,
    seasons: int,
    seed: int | None = None,
    rng: random.Random | None = None,
    first_season: int = 1,
) -> Career:
    """Play up to ``seasons`` consecutive seasons, feeding each season's new ratings forward.

    The run ends early once age has worn the player's age factor down to zero.
    """
    simulator = SeasonSimulator(seed=seed, rng=rng)
    career = Career(player=player)
    current = player
    for offset in range(max(0, seasons)):
        if age_factor(current.age, current.work_ethic) <= 0:
            career.retired_early = True
            logger.info("%s retires at age %s after %s seasons", current.name, current.age, len(career.seasons))
            break
        result = simulator.simulate(current, first_season + offset)
        career.seasons.append(result)
        current = result.new_ratings
    return career
