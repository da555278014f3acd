import pytest

from gamescore.controllers.tournament import (
    KnockoutManager,
    ResultRecorder,
    generate_round_robin_matches,
)
from gamescore.exceptions import (
    DrawNotAllowedException,
    MatchCompletedException,
    MatchNotFoundException,
    ScoringException,
)
from gamescore.models import KnockoutConfig, Match, MatchFormat, SetScore, Team, Tournament
from gamescore.sports import get_sport
from gamescore.standings import standings_for


def _tournament(sport_id, match_format=None, knockout_config=None):
    teams = [Team(id=f"t{i}", name=f"Team {i}") for i in range(1, 5)]
    return Tournament(
        id="t",
        name="Test",
        sport=sport_id,
        teams=teams,
        matches=generate_round_robin_matches(teams),
        format=match_format or MatchFormat(),
        knockout_config=knockout_config,
    )


def _volleyball():
    return _tournament("volleyball", MatchFormat(type="best-of", sets=3, points=25))


def _knockout_tournament(manager):
    tournament = _tournament("football", knockout_config=KnockoutConfig(4))
    tournament = tournament.with_matches([m.with_goals_result(1, 0) for m in tournament.matches])
    return manager.initialize_knockout_stage(
        tournament, standings_for(tournament, get_sport("football"))
    ).value


def test_goals_result_completes_match():
    recorder = ResultRecorder(get_sport("football"))
    tournament = _tournament("football")
    match_id = tournament.matches[0].id

    updated = recorder.record_goals_result(tournament, match_id, 2, 1)

    match = updated.matches[0]
    assert (match.status, match.winner, match.score1, match.score2) == ("completed", "t1", 2, 1)
    assert tournament.matches[0].is_pending


def test_football_draw_is_recorded():
    recorder = ResultRecorder(get_sport("football"))
    tournament = _tournament("football")

    updated = recorder.record_goals_result(tournament, tournament.matches[0].id, 1, 1)

    assert updated.matches[0].winner == "draw"


def test_draw_rejected_when_sport_forbids_it():
    recorder = ResultRecorder(get_sport("basketball"))
    tournament = _tournament("basketball")

    with pytest.raises(DrawNotAllowedException):
        recorder.record_goals_result(tournament, tournament.matches[0].id, 80, 80)


def test_draw_rejected_in_knockout_match():
    manager = KnockoutManager()
    tournament = _knockout_tournament(manager)
    recorder = ResultRecorder(get_sport("football"), manager)
    semi = tournament.knockout_matches[0]

    with pytest.raises(DrawNotAllowedException):
        recorder.record_goals_result(tournament, semi.id, 2, 2)


def test_result_for_unseeded_knockout_match_is_rejected():
    manager = KnockoutManager()
    tournament = _knockout_tournament(manager)
    final = next(m for m in tournament.knockout_matches if m.round == "final")

    with pytest.raises(ScoringException):
        ResultRecorder(get_sport("football"), manager).record_goals_result(
            tournament, final.id, 1, 0
        )


def test_negative_score_and_unknown_match_are_rejected():
    recorder = ResultRecorder(get_sport("football"))
    tournament = _tournament("football")

    with pytest.raises(ScoringException):
        recorder.record_goals_result(tournament, tournament.matches[0].id, -1, 0)
    with pytest.raises(MatchNotFoundException):
        recorder.record_goals_result(tournament, "missing", 1, 0)


def test_sets_result_picks_majority_winner():
    recorder = ResultRecorder(get_sport("volleyball"))
    tournament = _volleyball()

    updated = recorder.record_sets_result(
        tournament, tournament.matches[0].id, [(20, 25), (25, 23), (15, 10)]
    )

    match = updated.matches[0]
    assert match.status == "completed"
    assert match.winner == "t1"
    assert match.sets_won() == (2, 1)
    assert all(s.completed for s in match.sets)


@pytest.mark.parametrize(
    "sets, message",
    [
        ([(20, 18)], "Set 1: First to 25"),
        ([(25, 24)], "Set 1: Win by 2"),
        ([(25, 25)], "Set 1: Win by 2"),
        ([(25, 20), (10, 15)], "Set 2: First to 25"),
        ([(25, 20), (25, 20), (25, 20), (25, 20)], "Max 3 sets"),
        ([(25, 20), (20, 25)], "Sets are level"),
        ([("x", 3)], "Set 1: Invalid score"),
    ],
)
def test_invalid_sets_are_rejected(sets, message):
    recorder = ResultRecorder(get_sport("volleyball"))
    tournament = _volleyball()

    with pytest.raises(ScoringException, match=message):
        recorder.record_sets_result(tournament, tournament.matches[0].id, sets)


def test_badminton_cap_ends_set_without_margin():
    recorder = ResultRecorder(get_sport("badminton"))
    tournament = _tournament("badminton", MatchFormat(type="best-of", sets=3, points=21))

    updated = recorder.record_sets_result(
        tournament, tournament.matches[0].id, [(30, 29), (21, 15)]
    )

    assert updated.matches[0].winner == "t1"
    with pytest.raises(ScoringException, match="Max 30"):
        recorder.record_sets_result(tournament, tournament.matches[0].id, [(31, 29)])


def test_goals_sport_cannot_record_sets():
    recorder = ResultRecorder(get_sport("football"))
    tournament = _tournament("football")

    with pytest.raises(ScoringException):
        recorder.record_sets_result(tournament, tournament.matches[0].id, [(25, 20)])


def test_clear_result_resets_match():
    recorder = ResultRecorder(get_sport("football"))
    tournament = _tournament("football")
    match_id = tournament.matches[0].id
    tournament = recorder.record_goals_result(tournament, match_id, 3, 0)

    cleared = recorder.clear_result(tournament, match_id).matches[0]

    assert cleared.is_pending
    assert (cleared.winner, cleared.score1, cleared.score2) == (None, None, None)


def test_semi_cannot_be_cleared_after_final_is_played():
    manager = KnockoutManager()
    recorder = ResultRecorder(get_sport("football"), manager)
    tournament = _knockout_tournament(manager)
    semi1, semi2 = tournament.knockout_matches[:2]
    tournament = recorder.record_goals_result(tournament, semi1.id, 1, 0)
    tournament = recorder.record_goals_result(tournament, semi2.id, 1, 0)
    tournament = tournament.with_knockout_matches(
        manager.update_knockout_bracket(tournament.knockout_matches).value
    )
    final = next(m for m in tournament.knockout_matches if m.round == "final")
    tournament = recorder.record_goals_result(tournament, final.id, 2, 1)

    with pytest.raises(MatchCompletedException):
        recorder.clear_result(tournament, semi1.id)


def test_record_match_replaces_by_id():
    recorder = ResultRecorder(get_sport("football"))
    tournament = _tournament("football")
    finished = tournament.matches[1].with_goals_result(0, 4)

    updated = recorder.record_match(tournament, finished)

    assert updated.matches[1] == finished
    with pytest.raises(MatchNotFoundException):
        recorder.record_match(tournament, Match(id="ghost"))


def test_repair_completes_stale_single_set_match():
    tournament = _tournament("badminton", MatchFormat(type="single", points=21))
    stale = tournament.matches[0]
    stale.sets = [SetScore(21, 18)]
    tournament.matches[1].sets = [SetScore(10, 10)]

    repaired = ResultRecorder.repair_single_set_matches(tournament)

    assert repaired.changed
    match = repaired.value.matches[0]
    assert (match.status, match.winner) == ("completed", "t1")
    assert repaired.value.matches[1].is_pending


def test_repair_covers_knockout_matches():
    single = MatchFormat(type="single", points=21)
    tournament = _tournament("badminton", single, KnockoutConfig(4))
    tournament = tournament.with_matches(
        [m.with_sets_result([SetScore(21, 15, completed=True)]) for m in tournament.matches]
    )
    tournament = KnockoutManager().initialize_knockout_stage(
        tournament, standings_for(tournament, get_sport("badminton"))
    ).value
    semi = tournament.knockout_matches[0]
    semi.sets = [SetScore(18, 21)]

    repaired = ResultRecorder.repair_single_set_matches(tournament)

    assert repaired.changed
    fixed = repaired.value.knockout_matches[0]
    assert (fixed.status, fixed.winner) == ("completed", semi.team2_id)
    assert fixed.label == semi.label
    assert repaired.value.knockout_matches[2].is_pending
    assert repaired.value.matches == tournament.matches


def test_repair_ignores_best_of_formats():
    tournament = _volleyball()
    tournament.matches[0].sets = [SetScore(25, 18)]

    repaired = ResultRecorder.repair_single_set_matches(tournament)

    assert not repaired.changed
    assert repaired.value is tournament
