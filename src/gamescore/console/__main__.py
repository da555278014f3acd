"""Interactive scorekeeper for Game Score.

Run ``gamescore`` with no arguments for the interactive shell, or with a
subcommand (``gamescore standings --sport football --tournament <id>``) for
one-shot use.
"""

# Game Score
# Copyright (C) 2025  Game Score developers
#
# This program is free software: you can redistribute it and/or modify
# it under the terms of the GNU General Public License as published by
# the Free Software Foundation, either version 3 of the License, or
# (at your option) any later version.
#
# This program is distributed in the hope that it will be useful,
# but WITHOUT ANY WARRANTY; without even the implied warranty of
# MERCHANTABILITY or FITNESS FOR A PARTICULAR PURPOSE.  See the
# GNU General Public License for more details.
#
# You should have received a copy of the GNU General Public License
# along with this program.  If not, see <http://www.gnu.org/licenses/>.

import argparse
import shlex
import sys
import time
from dataclasses import replace
from typing import Callable, Dict, List, Optional

from prompt_toolkit import PromptSession
from prompt_toolkit.completion import NestedCompleter, WordCompleter
from prompt_toolkit.history import InMemoryHistory
from prompt_toolkit.styles import Style

from gamescore.config import AppConfig
from gamescore.constants import (
    ENGINE_SETS,
    FORMAT_MODE_CUSTOM,
    MODE_POINTS,
    MODE_TIMED,
    SET_FORMAT_BEST_OF,
    SET_FORMAT_SINGLE,
)
from gamescore.controllers.tournament.engine import TournamentEngine
from gamescore.exceptions import GameScoreException
from gamescore.models.team import team_name
from gamescore.models.tournament import KnockoutConfig, MatchFormat, Tournament
from gamescore.scoring import GameSession, LiveScoreSession, ScoringSession, SetsLiveScoreSession
from gamescore.scoring.timer import format_time
from gamescore.sports import SPORT_REGISTRY, apply_standard_defaults, get_sport, get_sports_list
from gamescore.standings import GoalsStandingsRow
from gamescore.storage import JsonFileStore, SessionRepository
from gamescore.utils import setup_logger

logger = setup_logger(__name__)


# ANSI color codes for terminal output
class Colors:
    HEADER = "\033[95m"
    OKBLUE = "\033[94m"
    OKCYAN = "\033[96m"
    OKGREEN = "\033[92m"
    WARNING = "\033[93m"
    FAIL = "\033[91m"
    ENDC = "\033[0m"
    BOLD = "\033[1m"


STYLE = Style.from_dict({"prompt": "#00aa00 bold"})

# Command definitions with their options
COMMANDS = {
    "sports": {"description": "List supported sports", "options": {}},
    "new": {
        "description": "Create a round-robin tournament",
        "options": {
            "--sport": "Sport id (see 'sports')",
            "--name": "Tournament name",
            "--teams": "Team names, comma separated",
            "--knockout": "Teams advancing to knockouts (2 or 4)",
            "--third-place": "Play a third-place match",
            "--target": "Points target (goals sports)",
            "--time-limit": "Time limit in seconds (goals sports)",
            "--sets": "Sets per match, best-of (sets sports)",
            "--points": "Points per set (sets sports)",
        },
    },
    "list": {"description": "List tournaments of a sport", "options": {"--sport": "Sport id"}},
    "show": {
        "description": "Show matches of a tournament",
        "options": {"--sport": "Sport id", "--tournament": "Tournament id"},
    },
    "standings": {
        "description": "Show the standings table",
        "options": {"--sport": "Sport id", "--tournament": "Tournament id"},
    },
    "bracket": {
        "description": "Show the knockout bracket",
        "options": {"--sport": "Sport id", "--tournament": "Tournament id"},
    },
    "result": {
        "description": "Enter a final result (goals: 3-1, sets: 25-20 25-18)",
        "options": {
            "--sport": "Sport id",
            "--tournament": "Tournament id",
            "--match": "Match id",
            "--score": "Score(s), e.g. 3-1 or 25-20 25-18",
        },
    },
    "clear": {
        "description": "Clear a match result",
        "options": {"--sport": "Sport id", "--tournament": "Tournament id", "--match": "Match id"},
    },
    "live": {
        "description": "Score a match live (interactive only)",
        "options": {"--sport": "Sport id", "--tournament": "Tournament id", "--match": "Match id"},
    },
    "delete": {
        "description": "Delete a tournament",
        "options": {"--sport": "Sport id", "--tournament": "Tournament id"},
    },
    "quick": {
        "description": "Play a quick game (interactive only)",
        "options": {"--name": "Game name", "--players": "Participant names, comma separated"},
    },
    "history": {"description": "Show finished quick games", "options": {}},
    "help": {"description": "Show help for specific command", "options": {"<command>": "Command name"}},
    "exit": {"description": "Exit the interactive mode", "options": {}},
}


def print_banner():
    """Print the application banner."""
    banner = f"""
{Colors.OKBLUE}╔═══════════════════════════════════════════════╗
║                                               ║
║               GAME SCORE - CLI                ║
║                                               ║
║        [Leagues, brackets, live scores]       ║
║                                               ║
╚═══════════════════════════════════════════════╝{Colors.ENDC}
Type {Colors.BOLD}/help{Colors.ENDC} to see all available commands
Type {Colors.BOLD}exit{Colors.ENDC} or {Colors.BOLD}quit{Colors.ENDC} to leave interactive mode
"""
    print(banner)


def print_commands_list():
    """Print list of all available commands."""
    print(f"\n{Colors.BOLD}Available Commands:{Colors.ENDC}\n")
    for cmd, info in COMMANDS.items():
        print(f"  {Colors.OKGREEN}{cmd:15}{Colors.ENDC} - {info['description']}")
    print()


def print_command_help(command: str):
    """Print detailed help for a specific command."""
    if command not in COMMANDS:
        print(f"{Colors.FAIL}Unknown command: {command}{Colors.ENDC}")
        print_commands_list()
        return

    cmd_info = COMMANDS[command]
    print(f"\n{Colors.BOLD}{Colors.OKBLUE}Command: {command}{Colors.ENDC}")
    print(f"{Colors.BOLD}Description:{Colors.ENDC} {cmd_info['description']}\n")
    if cmd_info["options"]:
        print(f"{Colors.BOLD}Options:{Colors.ENDC}")
        for option, description in cmd_info["options"].items():
            print(f"  {Colors.OKCYAN}{option:20}{Colors.ENDC} {description}")
    print()


def create_completer() -> NestedCompleter:
    """Create autocomplete completer for interactive mode."""
    completions: Dict[str, Optional[WordCompleter]] = {}
    for cmd, info in COMMANDS.items():
        options = list(info["options"].keys()) + list(SPORT_REGISTRY)
        options_completer = WordCompleter(options) if info["options"] else None
        completions[cmd] = options_completer
        completions[f"/{cmd}"] = options_completer
    completions["/help"] = None
    completions["/list"] = None
    return NestedCompleter.from_nested_dict(completions)


# ========== Shared helpers ==========


class ConsoleContext:
    """Configuration and store shared by every command in one run."""

    def __init__(self, config: Optional[AppConfig] = None):
        self.config = config or AppConfig.from_env()
        setup_logger("gamescore", self.config.log_level)
        self.store = JsonFileStore(self.config.data_dir)
        self.sessions = SessionRepository(self.store)

    def engine(self, sport_id: str) -> TournamentEngine:
        return TournamentEngine(
            self.store, sport_id, completion_delay=self.config.completion_delay
        )


def _require(args: argparse.Namespace, *names: str) -> bool:
    missing = [n for n in names if not getattr(args, n, None)]
    if missing:
        flags = ", ".join(f"--{n.replace('_', '-')}" for n in missing)
        print(f"{Colors.FAIL}Error: {flags} required{Colors.ENDC}")
        return False
    return True


def _split_names(raw: Optional[str]) -> List[str]:
    return [n.strip() for n in (raw or "").split(",") if n.strip()]


def _parse_pair(text: str) -> tuple:
    left, _, right = text.partition("-")
    return int(left), int(right)


def _match_line(tournament: Tournament, match) -> str:
    home = team_name(tournament.teams, match.team1_id) if match.team1_id else "TBD"
    away = team_name(tournament.teams, match.team2_id) if match.team2_id else "TBD"
    if match.sets:
        score = " ".join(f"{s.score1}-{s.score2}" for s in match.sets)
    elif match.has_scores:
        score = f"{match.score1}-{match.score2}"
    else:
        score = ""
    return f"{str(match.id):28} {home:>16} vs {away:<16} {match.status:12} {score}"


def _format_line(engine: TournamentEngine, fmt: MatchFormat) -> str:
    if engine.sport.engine == ENGINE_SETS:
        shape = "single set" if fmt.is_single_set else f"best of {fmt.total_sets}"
        return f"{shape}, sets to {fmt.points}"
    if fmt.points_target:
        return f"first to {fmt.points_target}"
    if fmt.timed_limit:
        return f"timed, {format_time(fmt.timed_limit)}"
    return "free play" if fmt.is_free else str(fmt.mode)


# ========== Commands ==========


def run_sports_command(ctx: ConsoleContext, args: argparse.Namespace) -> int:
    """List every registered sport."""
    print(f"\n{Colors.BOLD}Sports:{Colors.ENDC}")
    for sport in get_sports_list():
        draws = "draws" if sport.draw_allowed else "no draws"
        print(f"  {sport.icon} {sport.id:12} {sport.name:14} {sport.engine:6} {draws:9} {sport.desc}")
    return 0


def run_new_command(ctx: ConsoleContext, args: argparse.Namespace) -> int:
    """Create a tournament."""
    if not _require(args, "sport", "teams"):
        return 1
    sport = get_sport(args.sport)
    match_format = apply_standard_defaults(sport.id)
    overrides = {
        "target": args.target,
        "time_limit": args.time_limit,
        "sets": args.sets,
        "points": args.points,
    }
    if any(v is not None for v in overrides.values()):
        custom = MatchFormat(
            mode=MODE_POINTS if args.target else (MODE_TIMED if args.time_limit else None),
            type=SET_FORMAT_SINGLE if args.sets == 1 else (SET_FORMAT_BEST_OF if args.sets else None),
            **overrides,
        )
        match_format = replace(
            apply_standard_defaults(sport.id, custom), format_mode=FORMAT_MODE_CUSTOM
        )

    knockout = None
    if args.knockout:
        knockout = KnockoutConfig(teams_advancing=args.knockout, third_place_match=args.third_place)

    tournament = ctx.engine(sport.id).create_tournament(
        args.name or "", _split_names(args.teams), match_format, knockout
    )
    print(f"{Colors.OKGREEN}Created {tournament.name} ({tournament.id}){Colors.ENDC}")
    print(f"  {len(tournament.teams)} teams, {len(tournament.matches)} matches")
    return 0


def run_list_command(ctx: ConsoleContext, args: argparse.Namespace) -> int:
    """List the tournaments of a sport."""
    if not _require(args, "sport"):
        return 1
    engine = ctx.engine(args.sport)
    tournaments = engine.list_tournaments()
    if not tournaments:
        print(f"No {engine.sport.name} tournaments yet")
        return 0
    for tournament in tournaments:
        done, total = engine.progress(tournament)
        state = "complete" if engine.is_complete(tournament) else tournament.phase
        print(f"  {tournament.id:24} {tournament.name:28} {done}/{total} matches  {state}")
    return 0


def run_show_command(ctx: ConsoleContext, args: argparse.Namespace) -> int:
    """Print every match of a tournament."""
    if not _require(args, "sport", "tournament"):
        return 1
    engine = ctx.engine(args.sport)
    tournament = engine.load(args.tournament)
    print(f"\n{Colors.BOLD}{tournament.name}{Colors.ENDC} ({engine.sport.name}, {tournament.phase} phase)")
    print(f"  Format: {_format_line(engine, tournament.format)} ({tournament.format.format_mode})")
    for match in tournament.matches:
        print("  " + _match_line(tournament, match))
    if tournament.knockout_matches:
        print(f"\n{Colors.BOLD}Knockouts:{Colors.ENDC}")
        for match in tournament.knockout_matches:
            print(f"  {match.label:14} " + _match_line(tournament, match))
    return 0


def run_standings_command(ctx: ConsoleContext, args: argparse.Namespace) -> int:
    """Print the standings table and champion if decided."""
    if not _require(args, "sport", "tournament"):
        return 1
    engine = ctx.engine(args.sport)
    tournament = engine.load(args.tournament)
    print(f"\n{Colors.BOLD}{tournament.name} standings{Colors.ENDC}")
    print("  " + " ".join(f"{c:>4}" for c in ("#", "Team".ljust(16)) + engine.sport.standings_columns))
    for rank, row in enumerate(engine.standings(tournament), start=1):
        if isinstance(row, GoalsStandingsRow):
            cells = (row.played, row.won, row.drawn, row.lost, row.goals_for,
                     row.goals_against, row.goal_diff, row.points)
        else:
            cells = (row.played, row.won, row.lost, row.sets_won, row.sets_lost,
                     row.points_for, row.points_against, row.diff, row.match_points)
        print(f"  {rank:>4} {row.team_name[:16]:16} " + " ".join(f"{c:>4}" for c in cells))

    champion = engine.winner(tournament)
    if champion is not None:
        print(f"\n{Colors.OKGREEN}Champion: {champion.name}{Colors.ENDC}")
    return 0


def run_bracket_command(ctx: ConsoleContext, args: argparse.Namespace) -> int:
    """Print the knockout bracket."""
    if not _require(args, "sport", "tournament"):
        return 1
    tournament = ctx.engine(args.sport).load(args.tournament)
    if not tournament.is_knockout_phase:
        print("Knockout stage has not started")
        return 0
    for match in tournament.knockout_matches:
        print(f"  {match.label:14} " + _match_line(tournament, match))
    return 0


def run_result_command(ctx: ConsoleContext, args: argparse.Namespace) -> int:
    """Record a final score entered by hand."""
    if not _require(args, "sport", "tournament", "match", "score"):
        return 1
    engine = ctx.engine(args.sport)
    tournament = engine.load(args.tournament)
    pairs = [_parse_pair(s) for s in args.score]
    if engine.sport.engine == ENGINE_SETS:
        tournament = engine.record_sets_result(tournament, args.match, pairs)
    else:
        tournament = engine.record_goals_result(tournament, args.match, *pairs[0])
    print(f"{Colors.OKGREEN}Result saved{Colors.ENDC}")
    if tournament.knockout_matches:
        print(f"  Phase: {tournament.phase}")
    return 0


def run_clear_command(ctx: ConsoleContext, args: argparse.Namespace) -> int:
    """Reset a match to pending."""
    if not _require(args, "sport", "tournament", "match"):
        return 1
    engine = ctx.engine(args.sport)
    engine.clear_result(engine.load(args.tournament), args.match)
    print(f"{Colors.OKGREEN}Result cleared{Colors.ENDC}")
    return 0


def run_delete_command(ctx: ConsoleContext, args: argparse.Namespace) -> int:
    """Delete a tournament."""
    if not _require(args, "sport", "tournament"):
        return 1
    if ctx.engine(args.sport).delete(args.tournament):
        print(f"{Colors.OKGREEN}Tournament deleted{Colors.ENDC}")
        return 0
    print(f"{Colors.FAIL}No such tournament{Colors.ENDC}")
    return 1


def run_history_command(ctx: ConsoleContext, args: argparse.Namespace) -> int:
    """List finished quick games, newest first."""
    records = ctx.sessions.load_history()
    if not records:
        print("No finished games yet")
        return 0
    for record in records:
        scores = ", ".join(f"{n} {s}" for n, s in record.get("finalScores", {}).items())
        winner = record.get("winner") or "no winner"
        print(f"  {record.get('gameName', ''):24} {scores:40} {winner:16} {format_time(record.get('duration', 0))}")
    return 0


# ========== Live scoring ==========


def _print_live_state(session: ScoringSession, tournament: Tournament):
    home = team_name(tournament.teams, session.match.team1_id)
    away = team_name(tournament.teams, session.match.team2_id)
    if isinstance(session, SetsLiveScoreSession):
        sets = "  ".join(
            f"[{s.score1}-{s.score2}]" if s.completed else f"{s.score1}-{s.score2}"
            for s in session.sets
        )
        won1, won2 = session.sets_won
        print(f"  {home} {won1} - {won2} {away}   {sets}")
    else:
        clock = ""
        if session.format.timed_limit:
            clock = f"   {session.timer.formatted} / {format_time(session.format.timed_limit)}"
        print(f"  {home} {session.score1} - {session.score2} {away}{clock}")


def run_live_scoring(ctx: ConsoleContext, args: argparse.Namespace, prompt: PromptSession) -> int:
    """Drive a live scoring session from the keyboard.

    Keys: ``1``/``2`` score for a side (``1 3`` adds three), ``u`` undo,
    ``d`` save draft, ``f`` save and finish, ``q`` leave without saving.
    """
    if not _require(args, "sport", "tournament", "match"):
        return 1
    engine = ctx.engine(args.sport)
    tournament = engine.load(args.tournament)

    def delayed(delay: float, callback: Callable[[], None]) -> None:
        time.sleep(delay)
        callback()

    session = engine.open_live_session(tournament, args.match, scheduler=delayed)
    last_tick = time.monotonic()
    print(f"{Colors.BOLD}Live scoring{Colors.ENDC}: 1/2 [points], u undo, d draft, f finish, q quit")

    while not session.completed:
        _print_live_state(session, tournament)
        try:
            line = prompt.prompt("live> ").strip().lower()
        except (KeyboardInterrupt, EOFError):
            line = "q"

        if isinstance(session, LiveScoreSession):
            now = time.monotonic()
            for _ in range(int(now - last_tick)):
                session.tick()
            last_tick += int(now - last_tick)
            if session.completed:
                print(f"{Colors.WARNING}Time is up{Colors.ENDC}")
                break

        parts = line.split()
        if not parts:
            continue
        key = parts[0]
        if key in ("1", "2"):
            if isinstance(session, SetsLiveScoreSession):
                session.add_point(int(key))
            else:
                session.add_score(int(key), int(parts[1]) if len(parts) > 1 else 1)
        elif key == "u":
            session.undo()
        elif key == "d":
            session.save_draft()
            print(f"{Colors.OKGREEN}Draft saved! You can resume this match later.{Colors.ENDC}")
            return 0
        elif key == "f":
            try:
                match = session.finish()
            except GameScoreException as e:
                print(f"{Colors.FAIL}{e}{Colors.ENDC}")
                continue
            print(f"{Colors.OKGREEN}Match saved ({match.status}){Colors.ENDC}")
            return 0
        elif key == "q":
            print(f"{Colors.WARNING}Left without saving{Colors.ENDC}")
            return 0

    _print_live_state(session, tournament)
    print(f"{Colors.OKGREEN}Match complete{Colors.ENDC}")
    return 0


def run_quick_game(ctx: ConsoleContext, args: argparse.Namespace, prompt: PromptSession) -> int:
    """Play a quick game.

    Keys: ``<n> <delta>`` score for participant n, ``u <n>`` undo, ``p``
    pause, ``r`` resume, ``x`` reset, ``done [n]`` finish with winner n.
    """
    game = GameSession.start(args.name, _split_names(args.players))
    ctx.sessions.save_session(game.to_dict())

    while True:
        for index, p in enumerate(game.participants, start=1):
            print(f"  {index}. {p.name:16} {game.total(p.id)}")
        try:
            parts = prompt.prompt(f"{game.status}> ").strip().split()
        except (KeyboardInterrupt, EOFError):
            parts = ["done"]
        if not parts:
            continue

        def participant_id(text: str) -> str:
            return game.participants[int(text) - 1].id

        try:
            if parts[0] == "done":
                winner = participant_id(parts[1]) if len(parts) > 1 else None
                record = game.complete(winner)
                ctx.sessions.add_history_record(record.to_dict())
                ctx.sessions.delete_session(game.id)
                print(f"{Colors.OKGREEN}Game saved to history{Colors.ENDC}")
                return 0
            if parts[0] == "u" and len(parts) > 1:
                game.undo_last_score(participant_id(parts[1]))
            elif parts[0] == "p":
                game.pause()
            elif parts[0] == "r":
                game.resume()
            elif parts[0] == "x":
                game.reset()
            else:
                delta = int(parts[1]) if len(parts) > 1 else 1
                game.update_score(participant_id(parts[0]), delta)
        except (ValueError, IndexError):
            print(f"{Colors.FAIL}Unknown input{Colors.ENDC}")
            continue
        ctx.sessions.save_session(game.to_dict())


# ========== Parsers ==========


def _add_target_args(parser: argparse.ArgumentParser, *names: str):
    if "sport" in names:
        parser.add_argument("--sport", choices=sorted(SPORT_REGISTRY))
    if "tournament" in names:
        parser.add_argument("--tournament")
    if "match" in names:
        parser.add_argument("--match")


def create_main_parser() -> argparse.ArgumentParser:
    """Create the main argument parser with subcommands."""
    parser = argparse.ArgumentParser(
        prog="gamescore", description="Score tracker and tournament engine"
    )
    parser.add_argument("--interactive", "-i", action="store_true", help="Start interactive mode")
    subparsers = parser.add_subparsers(dest="command")

    subparsers.add_parser("sports", help="List sports").set_defaults(func=run_sports_command)

    new_parser = subparsers.add_parser("new", help="Create a tournament")
    _add_target_args(new_parser, "sport")
    new_parser.add_argument("--name")
    new_parser.add_argument("--teams")
    new_parser.add_argument("--knockout", type=int, choices=[2, 4])
    new_parser.add_argument("--third-place", action="store_true")
    new_parser.add_argument("--target", type=int)
    new_parser.add_argument("--time-limit", type=int)
    new_parser.add_argument("--sets", type=int)
    new_parser.add_argument("--points", type=int)
    new_parser.set_defaults(func=run_new_command)

    for name, func, targets in (
        ("list", run_list_command, ("sport",)),
        ("show", run_show_command, ("sport", "tournament")),
        ("standings", run_standings_command, ("sport", "tournament")),
        ("bracket", run_bracket_command, ("sport", "tournament")),
        ("clear", run_clear_command, ("sport", "tournament", "match")),
        ("delete", run_delete_command, ("sport", "tournament")),
        ("live", None, ("sport", "tournament", "match")),
    ):
        sub = subparsers.add_parser(name, help=COMMANDS[name]["description"])
        _add_target_args(sub, *targets)
        if func is not None:
            sub.set_defaults(func=func)

    result_parser = subparsers.add_parser("result", help="Enter a final result")
    _add_target_args(result_parser, "sport", "tournament", "match")
    result_parser.add_argument("--score", nargs="+")
    result_parser.set_defaults(func=run_result_command)

    quick_parser = subparsers.add_parser("quick", help="Play a quick game")
    quick_parser.add_argument("--name")
    quick_parser.add_argument("--players")

    subparsers.add_parser("history", help="Finished quick games").set_defaults(
        func=run_history_command
    )
    return parser


# ========== Modes ==========


def execute(ctx: ConsoleContext, args_list: List[str], prompt: Optional[PromptSession] = None) -> int:
    """Parse and run one command line."""
    args = create_main_parser().parse_args(args_list)
    if args.command in ("live", "quick"):
        if prompt is None:
            print(f"{Colors.FAIL}'{args.command}' needs interactive mode (gamescore -i){Colors.ENDC}")
            return 1
        runner = run_live_scoring if args.command == "live" else run_quick_game
        return runner(ctx, args, prompt)
    if hasattr(args, "func"):
        return args.func(ctx, args)
    print_commands_list()
    return 0


def run_interactive_mode(ctx: ConsoleContext) -> int:
    """Run in interactive mode with autocomplete."""
    print_banner()
    session = PromptSession(
        completer=create_completer(),
        history=InMemoryHistory(),
        style=STYLE,
    )

    while True:
        try:
            user_input = session.prompt("gamescore> ").strip()
            if not user_input:
                continue

            if user_input in ["exit", "quit", "q"]:
                print(f"\n{Colors.OKGREEN}Goodbye!{Colors.ENDC}\n")
                break
            if user_input in ["/help", "help", "?", "/list"]:
                print_commands_list()
                continue
            if user_input.startswith("/help ") or user_input.startswith("help "):
                print_command_help(user_input.split()[1].lstrip("/"))
                continue

            parts = shlex.split(user_input)
            command = parts[0].lstrip("/")
            if command not in COMMANDS:
                print(f"{Colors.FAIL}Unknown command: {command}{Colors.ENDC}")
                print(f"Type {Colors.BOLD}/help{Colors.ENDC} to see available commands")
                continue

            try:
                execute(ctx, [command] + parts[1:], session)
            except SystemExit:
                # argparse exits on bad arguments
                continue
            except GameScoreException as e:
                print(f"{Colors.FAIL}Error: {e}{Colors.ENDC}")
            except Exception as e:
                print(f"{Colors.FAIL}Error: {e}{Colors.ENDC}")
                logger.exception("Command execution failed")

        except KeyboardInterrupt:
            print(f"\n{Colors.WARNING}Use 'exit' or 'quit' to leave{Colors.ENDC}")
        except EOFError:
            print(f"\n{Colors.OKGREEN}Goodbye!{Colors.ENDC}\n")
            break
    return 0


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point for the gamescore CLI."""
    argv = sys.argv[1:] if argv is None else argv
    try:
        ctx = ConsoleContext()
        if not argv or "--interactive" in argv or "-i" in argv:
            return run_interactive_mode(ctx)
        return execute(ctx, argv)
    except GameScoreException as e:
        print(f"{Colors.FAIL}Error: {e}{Colors.ENDC}")
        return 1


if __name__ == "__main__":
    sys.exit(main())
