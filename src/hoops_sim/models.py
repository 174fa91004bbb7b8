from __future__ import annotations

from dataclasses import dataclass, field, replace
from enum import Enum
from typing import Any, ClassVar, Iterable

RATING_FIELDS = (
    "shooting",
    "playmaking",
    "defense",
    "athleticism",
    "basketball_iq",
    "work_ethic",
    "injury_prone",
)


class Accolade(str, Enum):
    ALL_STAR = "All-Star"
    ALL_NBA_FIRST = "All-NBA First Team"
    ALL_NBA_SECOND = "All-NBA Second Team"
    ALL_NBA_THIRD = "All-NBA Third Team"
    ALL_DEFENSIVE_FIRST = "All-Defensive First Team"
    ALL_DEFENSIVE_SECOND = "All-Defensive Second Team"
    MVP = "MVP"
    MVP_CANDIDATE = "MVP Candidate"
    SCORING_CHAMPION = "Scoring Champion"
    NBA_CHAMPION = "NBA Champion"
    FINALS_MVP = "Finals MVP"
    FINALS_APPEARANCE = "Finals Appearance"
    CONFERENCE_FINALS = "Conference Finals"
    SECOND_ROUND_EXIT = "Second Round Exit"
    FIRST_ROUND_EXIT = "First Round Exit"
    MISSED_PLAYOFFS = "Missed Playoffs"

    @property
    def bonus(self) -> int:
        return ACCOLADE_BONUS.get(self, 0)

    @classmethod
    def from_label(cls, label: object) -> Accolade | None:
        if isinstance(label, cls):
            return label
        try:
            return cls(str(label))
        except ValueError:
            return None


ACCOLADE_BONUS: dict[Accolade, int] = {
    Accolade.ALL_STAR: 10,
    Accolade.ALL_NBA_FIRST: 25,
    Accolade.ALL_NBA_SECOND: 15,
    Accolade.ALL_NBA_THIRD: 10,
    Accolade.ALL_DEFENSIVE_FIRST: 15,
    Accolade.ALL_DEFENSIVE_SECOND: 8,
    Accolade.MVP: 50,
    Accolade.MVP_CANDIDATE: 20,
    Accolade.SCORING_CHAMPION: 20,
    Accolade.NBA_CHAMPION: 40,
    Accolade.FINALS_MVP: 30,
    Accolade.FINALS_APPEARANCE: 20,
    Accolade.CONFERENCE_FINALS: 10,
    Accolade.SECOND_ROUND_EXIT: 5,
    Accolade.FIRST_ROUND_EXIT: 2,
    Accolade.MISSED_PLAYOFFS: 0,
}

ALL_NBA_ACCOLADES = {Accolade.ALL_NBA_FIRST, Accolade.ALL_NBA_SECOND, Accolade.ALL_NBA_THIRD}


class InjuryStatus(str, Enum):
    MAJOR = "Major injury"
    MINOR = "Minor injuries"
    HEALTHY = "Healthy season"


@dataclass(slots=True, frozen=True)
class Player:
    name: str
    position: str = "PG"
    shooting: float = 50.0
    playmaking: float = 50.0
    defense: float = 50.0
    athleticism: float = 50.0
    basketball_iq: float = 50.0
    work_ethic: float = 50.0
    injury_prone: float = 50.0
    age: int = 19

    def with_ratings(self, **changes: Any) -> Player:
        return replace(self, **changes)

    def to_dict(self) -> dict[str, Any]:
        return {
            "name": self.name,
            "position": self.position,
            "shooting": self.shooting,
            "playmaking": self.playmaking,
            "defense": self.defense,
            "athleticism": self.athleticism,
            "basketball_iq": self.basketball_iq,
            "work_ethic": self.work_ethic,
            "injury_prone": self.injury_prone,
            "age": self.age,
        }


@dataclass(slots=True, frozen=True)
class SeasonStats:
    ppg: float
    rpg: float
    apg: float
    spg: float
    bpg: float
    games_played: int

    def rounded(self) -> dict[str, Any]:
        return {
            "ppg": round(self.ppg, 1),
            "rpg": round(self.rpg, 1),
            "apg": round(self.apg, 1),
            "spg": round(self.spg, 1),
            "bpg": round(self.bpg, 1),
            "gamesPlayed": self.games_played,
        }


@dataclass(slots=True, frozen=True)
class TeamRecord:
    wins: int
    losses: int

    @property
    def record(self) -> str:
        return f"{self.wins}-{self.losses}"


@dataclass(slots=True)
class SeasonResult:
    season: int
    age: int
    stats: SeasonStats
    team_record: TeamRecord
    accolades: list[Accolade]
    injuries: InjuryStatus
    legacy_points: int
    new_ratings: Player
    age_factor: float = 1.0
    major_injury: bool = False

    def has(self, accolade: Accolade) -> bool:
        return accolade in self.accolades

    def count(self, accolades: Iterable[Accolade]) -> int:
        wanted = set(accolades)
        return sum(1 for a in self.accolades if a in wanted)

    @property
    def points_scored(self) -> int:
        return int(round(self.stats.ppg * self.stats.games_played))

    def to_dict(self) -> dict[str, Any]:
        return {
            "season": self.season,
            "age": self.age,
            "stats": self.stats.rounded(),
            "teamRecord": {"wins": self.team_record.wins, "losses": self.team_record.losses},
            "accolades": [a.value for a in self.accolades],
            "injuries": self.injuries.value,
            "legacyPoints": self.legacy_points,
            "newRatings": self.new_ratings.to_dict(),
        }


@dataclass(slots=True)
class LeaderboardEntry:
    player_name: str
    position: str = "PG"
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
    goat_rating: str = "Role Player"
    entry_id: int | None = None
    created_at: str | None = None
    extra: dict[str, Any] = field(default_factory=dict)

    COLUMNS: ClassVar[tuple[str, ...]] = (
        "player_name",
        "position",
        "seasons_played",
        "total_points",
        "career_ppg",
        "championships",
        "mvps",
        "all_stars",
        "finals_mvps",
        "all_nba_first_teams",
        "all_nba_teams",
        "scoring_titles",
        "legacy_points",
        "goat_rating",
    )

    def column_values(self) -> list[Any]:
        return [getattr(self, column) for column in self.COLUMNS]

    def to_dict(self) -> dict[str, Any]:
        payload: dict[str, Any] = dict(self.extra)
        payload.update({column: getattr(self, column) for column in self.COLUMNS})
        if self.entry_id is not None:
            payload["id"] = self.entry_id
        if self.created_at is not None:
            payload["created_at"] = self.created_at
        return payload
