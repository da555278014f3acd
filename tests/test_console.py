import pytest

from gamescore.config import AppConfig
from gamescore.console.__main__ import (
    COMMANDS,
    ConsoleContext,
    create_completer,
    execute,
    main,
    print_command_help,
)


@pytest.fixture
def ctx(tmp_path):
    return ConsoleContext(AppConfig(data_dir=tmp_path, completion_delay=0))


def _only_tournament(ctx, sport_id):
    (tournament,) = ctx.engine(sport_id).list_tournaments()
    return tournament


def test_completer_offers_plain_and_slash_commands():
    options = create_completer().options

    for command in COMMANDS:
        assert command in options
        assert f"/{command}" in options


def test_command_help(capsys):
    print_command_help("result")
    assert "--score" in capsys.readouterr().out

    print_command_help("bogus")
    assert "Unknown command: bogus" in capsys.readouterr().out


def test_league_from_the_command_line(ctx, capsys):
    assert execute(ctx, ["new", "--sport", "football", "--name", "Cup", "--teams", "Lions,Tigers"]) == 0
    tournament = _only_tournament(ctx, "football")
    target = ["--sport", "football", "--tournament", tournament.id]

    assert execute(ctx, ["result", *target, "--match", tournament.matches[0].id, "--score", "2-1"]) == 0
    capsys.readouterr()

    assert execute(ctx, ["standings", *target]) == 0
    out = capsys.readouterr().out
    assert "Champion: Lions" in out

    assert execute(ctx, ["list", "--sport", "football"]) == 0
    assert "1/1 matches" in capsys.readouterr().out


def test_sets_result_and_custom_format(ctx):
    execute(ctx, ["new", "--sport", "volleyball", "--teams", "Sand,Sun", "--sets", "1", "--points", "21"])
    tournament = _only_tournament(ctx, "volleyball")
    assert tournament.format.format_mode == "custom"
    assert tournament.format.is_single_set

    execute(
        ctx,
        ["result", "--sport", "volleyball", "--tournament", tournament.id,
         "--match", tournament.matches[0].id, "--score", "19-21"],
    )

    match = _only_tournament(ctx, "volleyball").matches[0]
    assert match.winner == tournament.teams[1].id


def test_show_prints_format_and_matches(ctx, capsys):
    execute(ctx, ["new", "--sport", "volleyball", "--teams", "Sand,Sun", "--sets", "1", "--points", "21"])
    execute(ctx, ["new", "--sport", "football", "--teams", "Lions,Tigers"])
    capsys.readouterr()

    execute(ctx, ["show", "--sport", "volleyball", "--tournament", _only_tournament(ctx, "volleyball").id])
    out = capsys.readouterr().out
    assert "Format: single set, sets to 21 (custom)" in out
    assert "Sand" in out and "pending" in out

    execute(ctx, ["show", "--sport", "football", "--tournament", _only_tournament(ctx, "football").id])
    assert "Format: timed, 1:30:00 (standard)" in capsys.readouterr().out


def test_missing_arguments_are_reported(ctx, capsys):
    assert execute(ctx, ["standings", "--sport", "football"]) == 1
    assert "--tournament" in capsys.readouterr().out


def test_live_scoring_needs_interactive_mode(ctx, capsys):
    assert execute(ctx, ["live", "--sport", "football"]) == 1
    assert "interactive" in capsys.readouterr().out


def test_main_runs_one_shot_commands(tmp_path, monkeypatch, capsys):
    monkeypatch.setenv("GAMESCORE_DATA_DIR", str(tmp_path))

    assert main(["sports"]) == 0
    out = capsys.readouterr().out
    assert "Volleyball" in out and "Kabaddi" in out

    assert main(["standings", "--sport", "football", "--tournament", "nope"]) == 1
