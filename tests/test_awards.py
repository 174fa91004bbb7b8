import random

import pytest

from hoops_sim.awards import (
    PLAYOFF_RULES,
    accolade_bonus,
    evaluate_accolades,
    individual_honors,
    legacy_points,
    playoff_outcome,
    playoff_rule_for,
)
from hoops_sim.models import Accolade, SeasonStats, TeamRecord

A = Accolade


def _stats(ppg=10.0, rpg=4.0, apg=3.0, spg=0.8, bpg=0.4, games_played=82) -> SeasonStats:
    return SeasonStats(ppg=ppg, rpg=rpg, apg=apg, spg=spg, bpg=bpg, games_played=games_played)


def _record(wins: int) -> TeamRecord:
    return TeamRecord(wins=wins, losses=82 - wins)


def test_all_star_paths() -> None:
    assert A.ALL_STAR in individual_honors(_stats(ppg=23.5), _record(30))
    assert A.ALL_STAR in individual_honors(_stats(ppg=18.5, apg=7.5), _record(30))
    assert A.ALL_STAR in individual_honors(_stats(ppg=15.5, rpg=10.5), _record(30))
    assert A.ALL_STAR not in individual_honors(_stats(ppg=18.5, apg=6.9), _record(30))


def test_all_nba_tiers_are_exclusive() -> None:
    assert A.ALL_NBA_FIRST in individual_honors(_stats(ppg=25.5), _record(46))
    second = individual_honors(_stats(ppg=25.5), _record(45))
    assert A.ALL_NBA_SECOND in second
    assert A.ALL_NBA_FIRST not in second
    assert A.ALL_NBA_THIRD in individual_honors(_stats(ppg=21), _record(36))
    assert not {A.ALL_NBA_FIRST, A.ALL_NBA_SECOND, A.ALL_NBA_THIRD} & set(individual_honors(_stats(ppg=21), _record(35)))


def test_all_defensive_teams() -> None:
    assert A.ALL_DEFENSIVE_FIRST in individual_honors(_stats(spg=2.1, bpg=1.1), _record(43))
    assert A.ALL_DEFENSIVE_SECOND in individual_honors(_stats(spg=2.1, bpg=1.1), _record(42))
    assert A.ALL_DEFENSIVE_SECOND in individual_honors(_stats(spg=1.6, bpg=0.9), _record(39))
    assert not {A.ALL_DEFENSIVE_FIRST, A.ALL_DEFENSIVE_SECOND} & set(individual_honors(_stats(spg=1.6, bpg=0.9), _record(38)))


def test_mvp_and_candidate() -> None:
    assert A.MVP in individual_honors(_stats(ppg=27, rpg=7.5), _record(56))
    candidate = individual_honors(_stats(ppg=27, apg=6.5), _record(56))
    assert A.MVP_CANDIDATE in candidate
    assert A.MVP not in candidate
    assert A.MVP_CANDIDATE not in individual_honors(_stats(ppg=27, rpg=6.5), _record(50))


def test_scoring_champion() -> None:
    assert A.SCORING_CHAMPION in individual_honors(_stats(ppg=28.1), _record(20))
    assert A.SCORING_CHAMPION not in individual_honors(_stats(ppg=28.0), _record(20))


def test_games_played_gate_blocks_individual_honors() -> None:
    stats = _stats(ppg=30, rpg=8, apg=8, spg=2.5, bpg=1.5, games_played=57)
    assert individual_honors(stats, _record(65)) == []
    eligible = _stats(ppg=30, rpg=8, apg=8, spg=2.5, bpg=1.5, games_played=58)
    assert individual_honors(eligible, _record(65)) == [
        A.ALL_STAR,
        A.ALL_NBA_FIRST,
        A.ALL_DEFENSIVE_FIRST,
        A.MVP,
        A.SCORING_CHAMPION,
    ]


def test_playoff_outcome_still_runs_when_gate_fails(no_draw_rng) -> None:
    stats = _stats(ppg=30, games_played=20)
    assert evaluate_accolades(stats, _record(62), no_draw_rng) == [A.NBA_CHAMPION, A.FINALS_MVP]


def test_missed_playoffs_at_forty_or_fewer(no_draw_rng) -> None:
    for wins in (8, 25, 40):
        assert playoff_outcome(wins, no_draw_rng) == [A.MISSED_PLAYOFFS]


def test_dominant_team_always_wins_title(no_draw_rng) -> None:
    for wins in (61, 65, 69):
        assert playoff_outcome(wins, no_draw_rng) == [A.NBA_CHAMPION, A.FINALS_MVP]


def test_fringe_playoff_team(fixed_rng) -> None:
    assert playoff_outcome(43, fixed_rng(0.75)) == [A.FIRST_ROUND_EXIT]
    assert playoff_outcome(43, fixed_rng(0.65)) == []


def test_first_round_or_deep_run_branch(fixed_rng, sequence_rng) -> None:
    assert playoff_outcome(47, fixed_rng(0.9)) == [A.FIRST_ROUND_EXIT]
    assert playoff_outcome(47, fixed_rng(0.5)) == [A.SECOND_ROUND_EXIT]
    assert playoff_outcome(47, sequence_rng([0.1, 0.8, 0.5])) == [A.SECOND_ROUND_EXIT, A.CONFERENCE_FINALS]
    assert playoff_outcome(47, sequence_rng([0.1, 0.9, 0.9, 0.9, 0.9])) == [
        A.SECOND_ROUND_EXIT,
        A.CONFERENCE_FINALS,
        A.FINALS_APPEARANCE,
        A.NBA_CHAMPION,
        A.FINALS_MVP,
    ]


def test_conference_finals_branch(fixed_rng, sequence_rng) -> None:
    assert playoff_outcome(50, fixed_rng(0.5)) == [A.SECOND_ROUND_EXIT]
    assert playoff_outcome(50, fixed_rng(0.99)) == [
        A.CONFERENCE_FINALS,
        A.FINALS_APPEARANCE,
        A.NBA_CHAMPION,
        A.FINALS_MVP,
    ]
    assert playoff_outcome(50, sequence_rng([0.7, 0.7, 0.3])) == [A.CONFERENCE_FINALS, A.FINALS_APPEARANCE]
    assert playoff_outcome(50, sequence_rng([0.7, 0.7, 0.7, 0.5])) == [
        A.CONFERENCE_FINALS,
        A.FINALS_APPEARANCE,
        A.NBA_CHAMPION,
        A.FINALS_MVP,
    ]
    assert playoff_outcome(50, sequence_rng([0.7, 0.7, 0.7, 0.35])) == [
        A.CONFERENCE_FINALS,
        A.FINALS_APPEARANCE,
        A.NBA_CHAMPION,
    ]


def test_finals_branch(fixed_rng, sequence_rng) -> None:
    assert playoff_outcome(55, fixed_rng(0.3)) == [A.FINALS_APPEARANCE]
    assert playoff_outcome(55, fixed_rng(0.5)) == [A.FINALS_APPEARANCE, A.NBA_CHAMPION, A.FINALS_MVP]
    assert playoff_outcome(55, sequence_rng([0.5, 0.25])) == [A.FINALS_APPEARANCE, A.NBA_CHAMPION]
    assert playoff_outcome(60, fixed_rng(0.9)) == [A.FINALS_APPEARANCE, A.NBA_CHAMPION, A.FINALS_MVP]


def test_finals_appearance_is_free_draw(fixed_rng) -> None:
    rng = fixed_rng(0.3)
    playoff_outcome(58, rng)
    assert rng.draws == 1


def test_rule_lookup_by_wins() -> None:
    assert playoff_rule_for(40) is PLAYOFF_RULES[0]
    assert playoff_rule_for(41) is PLAYOFF_RULES[1]
    assert playoff_rule_for(48) is PLAYOFF_RULES[2]
    assert playoff_rule_for(52) is PLAYOFF_RULES[3]
    assert playoff_rule_for(60) is PLAYOFF_RULES[4]
    assert playoff_rule_for(61) is PLAYOFF_RULES[5]


def test_champion_and_finals_mvp_at_most_once() -> None:
    for seed in range(500):
        rng = random.Random(seed)
        wins = rng.randint(8, 69)
        accolades = playoff_outcome(wins, rng)
        assert accolades.count(A.NBA_CHAMPION) <= 1
        assert accolades.count(A.FINALS_MVP) <= 1
        if A.FINALS_MVP in accolades:
            assert A.NBA_CHAMPION in accolades


def test_accolade_bonus_table() -> None:
    assert accolade_bonus(A.MVP) == 50
    assert accolade_bonus("All-NBA Second Team") == 15
    assert accolade_bonus(A.FIRST_ROUND_EXIT) == 2
    assert accolade_bonus(A.MISSED_PLAYOFFS) == 0
    assert accolade_bonus("Sixth Man of the Year") == 0


def test_legacy_points_sum_stats_wins_and_bonuses() -> None:
    stats = _stats(ppg=20.0, rpg=10.0, apg=5.0)
    assert legacy_points(stats, [], _record(40)) == 51
    assert legacy_points(stats, [A.ALL_STAR, A.NBA_CHAMPION], _record(40)) == 101
    assert legacy_points(stats, [A.ALL_STAR, A.ALL_STAR], _record(40)) == 71
    assert legacy_points(stats, ["Unknown Award"], _record(40)) == 51


def test_legacy_points_round_half_up() -> None:
    assert legacy_points(_stats(ppg=0.5, rpg=0, apg=0), [], _record(0)) == 1
    assert legacy_points(_stats(ppg=2.5, rpg=0, apg=0), [], _record(0)) == 3


@pytest.mark.parametrize("field", ["ppg", "rpg", "apg"])
def test_legacy_points_monotonic_in_stats(field) -> None:
    accolades = [A.ALL_STAR, A.SECOND_ROUND_EXIT]
    previous = None
    for step in range(0, 40):
        stats = _stats(**{field: float(step)})
        points = legacy_points(stats, accolades, _record(44))
        if previous is not None:
            assert points >= previous
        previous = points


def test_legacy_points_monotonic_in_wins() -> None:
    stats = _stats()
    values = [legacy_points(stats, [A.ALL_STAR], _record(w)) for w in range(8, 70)]
    assert values == sorted(values)
