from __future__ import annotations

import math
import random
from dataclasses import dataclass
from typing import Iterable

from .config import AWARD_MIN_GAMES
from .models import Accolade, SeasonStats, TeamRecord


@dataclass(slots=True, frozen=True)
class PlayoffStep:
    """One rung of a playoff run.

    ``chance`` is the probability the rung is reached. A failed rung ends the
    run, unless it carries a ``fallback`` run to follow instead.
    """

    accolade: Accolade
    chance: float = 1.0
    fallback: tuple[PlayoffStep, ...] = ()

    @property
    def certain(self) -> bool:
        return self.chance >= 1.0


@dataclass(slots=True, frozen=True)
class PlayoffRule:
    max_wins: int | None
    steps: tuple[PlayoffStep, ...]

    def matches(self, wins: int) -> bool:
        return self.max_wins is None or wins <= self.max_wins


# Ordered by win ceiling; the first matching rule decides the postseason.
PLAYOFF_RULES: tuple[PlayoffRule, ...] = (
    PlayoffRule(40, (PlayoffStep(Accolade.MISSED_PLAYOFFS),)),
    PlayoffRule(45, (PlayoffStep(Accolade.FIRST_ROUND_EXIT, 0.3),)),
    PlayoffRule(
        48,
        (
            PlayoffStep(
                Accolade.FIRST_ROUND_EXIT,
                0.5,
                fallback=(
                    PlayoffStep(Accolade.SECOND_ROUND_EXIT),
                    PlayoffStep(Accolade.CONFERENCE_FINALS, 0.3),
                    PlayoffStep(Accolade.FINALS_APPEARANCE, 0.3),
                    PlayoffStep(Accolade.NBA_CHAMPION, 0.4),
                    PlayoffStep(Accolade.FINALS_MVP, 0.5),
                ),
            ),
        ),
    ),
    PlayoffRule(
        52,
        (
            PlayoffStep(Accolade.CONFERENCE_FINALS, 0.4, fallback=(PlayoffStep(Accolade.SECOND_ROUND_EXIT),)),
            PlayoffStep(Accolade.FINALS_APPEARANCE, 0.4),
            PlayoffStep(Accolade.NBA_CHAMPION, 0.5),
            PlayoffStep(Accolade.FINALS_MVP, 0.6),
        ),
    ),
    PlayoffRule(
        60,
        (
            PlayoffStep(Accolade.FINALS_APPEARANCE),
            PlayoffStep(Accolade.NBA_CHAMPION, 0.6),
            PlayoffStep(Accolade.FINALS_MVP, 0.7),
        ),
    ),
    PlayoffRule(
        None,
        (
            PlayoffStep(Accolade.NBA_CHAMPION),
            PlayoffStep(Accolade.FINALS_MVP),
        ),
    ),
)


def _step_fires(step: PlayoffStep, rng: random.Random) -> bool:
    if step.certain:
        return True
    return rng.random() > 1.0 - step.chance


def run_playoff_steps(steps: Iterable[PlayoffStep], rng: random.Random) -> list[Accolade]:
    earned: list[Accolade] = []
    for step in steps:
        if _step_fires(step, rng):
            earned.append(step.accolade)
            continue
        if step.fallback:
            earned.extend(run_playoff_steps(step.fallback, rng))
        break
    return earned


def playoff_rule_for(wins: int) -> PlayoffRule:
    for rule in PLAYOFF_RULES:
        if rule.matches(wins):
            return rule
    return PLAYOFF_RULES[-1]


def playoff_outcome(wins: int, rng: random.Random) -> list[Accolade]:
    return run_playoff_steps(playoff_rule_for(wins).steps, rng)


def individual_honors(stats: SeasonStats, record: TeamRecord) -> list[Accolade]:
    if stats.games_played < AWARD_MIN_GAMES:
        return []
    ppg, rpg, apg, spg, bpg = stats.ppg, stats.rpg, stats.apg, stats.spg, stats.bpg
    wins = record.wins
    honors: list[Accolade] = []

    if ppg > 23 or (ppg > 18 and apg > 7) or (ppg > 15 and rpg > 10):
        honors.append(Accolade.ALL_STAR)

    if ppg > 25 and wins > 45:
        honors.append(Accolade.ALL_NBA_FIRST)
    elif ppg > 23 and wins > 40:
        honors.append(Accolade.ALL_NBA_SECOND)
    elif ppg > 20 and wins > 35:
        honors.append(Accolade.ALL_NBA_THIRD)

    if spg > 2 and bpg > 1 and wins > 42:
        honors.append(Accolade.ALL_DEFENSIVE_FIRST)
    elif spg > 1.5 and bpg > 0.8 and wins > 38:
        honors.append(Accolade.ALL_DEFENSIVE_SECOND)

    if ppg > 26 and wins > 55 and (rpg > 7 or apg > 7):
        honors.append(Accolade.MVP)
    elif ppg > 25 and wins > 50 and (rpg > 6 or apg > 6):
        honors.append(Accolade.MVP_CANDIDATE)

    if ppg > 28:
        honors.append(Accolade.SCORING_CHAMPION)
    return honors


def evaluate_accolades(stats: SeasonStats, record: TeamRecord, rng: random.Random) -> list[Accolade]:
    return individual_honors(stats, record) + playoff_outcome(record.wins, rng)


def accolade_bonus(accolade: Accolade | str) -> int:
    resolved = Accolade.from_label(accolade)
    if resolved is None:
        return 0
    return resolved.bonus


def legacy_points(stats: SeasonStats, accolades: Iterable[Accolade | str], record: TeamRecord) -> int:
    points = stats.ppg * 1 + stats.rpg * 0.7 + stats.apg * 0.8
    points += sum(accolade_bonus(a) for a in accolades)
    points += record.wins * 0.5
    # Halves round up, not to even.
    return math.floor(points + 0.5)
