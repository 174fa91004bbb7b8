from __future__ import annotations

import argparse
import logging
from typing import Iterable, Sequence

import uvicorn

from . import config
from .career import Career, CareerSummary, simulate_career
from .models import Player, SeasonResult


def build_sample_player(name: str = "Franchise Star") -> Player:
    return Player(
        name=name,
        position="SF",
        shooting=90,
        playmaking=85,
        defense=80,
        athleticism=88,
        basketball_iq=92,
        work_ethic=95,
        injury_prone=10,
        age=27,
    )


def format_seasons(seasons: Iterable[SeasonResult]) -> str:
    lines = ["Ssn Age  GP   PPG  RPG  APG  SPG  BPG  W-L    Legacy Accolades"]
    for result in seasons:
        stats = result.stats.rounded()
        accolades = ", ".join(a.value for a in result.accolades) or "-"
        lines.append(
            f"{result.season:>3} {result.age:>3} {stats['gamesPlayed']:>3} {stats['ppg']:>5} {stats['rpg']:>4}"
            f" {stats['apg']:>4} {stats['spg']:>4} {stats['bpg']:>4}  {result.team_record.record:<6} {result.legacy_points:>6}"
            f" {accolades}"
        )
    return "\n".join(lines)


def format_summary(player: Player, summary: CareerSummary) -> str:
    return "\n".join(
        [
            f"{player.name} ({player.position}) - {summary.goat_rating}",
            f"Seasons {summary.seasons_played}  Points {summary.total_points}  PPG {summary.career_ppg}",
            f"Titles {summary.championships}  MVPs {summary.mvps}  Finals MVPs {summary.finals_mvps}"
            f"  All-Star {summary.all_stars}  All-NBA {summary.all_nba_teams} ({summary.all_nba_first_teams} first)"
            f"  Scoring titles {summary.scoring_titles}",
            f"Legacy points {summary.legacy_points}",
        ]
    )


def format_career(career: Career) -> str:
    text = format_seasons(career.seasons) + "\n\n" + format_summary(career.player, career.summary)
    if career.retired_early:
        text += "\nRetired before the final scheduled season."
    return text


def _player_from_args(args: argparse.Namespace) -> Player:
    sample = build_sample_player(args.name)
    overrides = {
        key: getattr(args, key)
        for key in ("position", "shooting", "playmaking", "defense", "athleticism", "basketball_iq", "work_ethic", "injury_prone", "age")
        if getattr(args, key) is not None
    }
    return sample.with_ratings(**overrides)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="hoops-sim", description="Basketball career season simulator")
    parser.add_argument("--log-level", default=config.log_level())
    sub = parser.add_subparsers(dest="command", required=True)

    career = sub.add_parser("career", help="Simulate a career and print the season table")
    career.add_argument("--name", default="Franchise Star")
    career.add_argument("--position")
    for rating in ("shooting", "playmaking", "defense", "athleticism", "basketball_iq", "work_ethic", "injury_prone"):
        career.add_argument(f"--{rating.replace('_', '-')}", dest=rating, type=float)
    career.add_argument("--age", type=int)
    career.add_argument("--seasons", type=int, default=15)
    career.add_argument("--seed", type=int)

    serve = sub.add_parser("serve", help="Run the HTTP API")
    serve.add_argument("--host", default=config.server_host())
    serve.add_argument("--port", type=int, default=config.server_port())
    return parser


def main(argv: Sequence[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    logging.basicConfig(level=args.log_level.upper(), format="%(asctime)s %(levelname)s %(name)s: %(message)s")

    if args.command == "career":
        career = simulate_career(_player_from_args(args), args.seasons, seed=args.seed)
        print(format_career(career))
        return 0

    uvicorn.run("hoops_sim.api:create_app", factory=True, host=args.host, port=args.port, log_level=args.log_level.lower())
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
