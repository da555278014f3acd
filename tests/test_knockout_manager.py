from dataclasses import replace

from gamescore.controllers.tournament import KnockoutManager, generate_round_robin_matches
from gamescore.models import KnockoutConfig, Team, Tournament
from gamescore.sports import get_sport
from gamescore.standings import standings_for

FOOTBALL = get_sport("football")


def _tournament(teams_advancing=4, third_place=True, winner_mode="knockouts", configured=True):
    teams = [Team(id=f"t{i}", name=f"Team {i}") for i in range(1, 5)]
    return Tournament(
        id="cup",
        name="Cup",
        sport="football",
        teams=teams,
        matches=generate_round_robin_matches(teams),
        knockout_config=KnockoutConfig(teams_advancing, third_place) if configured else None,
        winner_mode=winner_mode,
    )


def _finish_group(tournament):
    # side 1 always wins, so the table reads t1, t2, t3, t4
    return tournament.with_matches([m.with_goals_result(2, 0) for m in tournament.matches])


def _start_knockouts(manager, tournament):
    tournament = _finish_group(tournament)
    return manager.initialize_knockout_stage(tournament, standings_for(tournament, FOOTBALL)).value


def _round(tournament, round_name):
    return next(m for m in tournament.knockout_matches if m.round == round_name)


def _play(tournament, round_name, score1, score2):
    match = _round(tournament, round_name)
    return KnockoutManager.update_match_in_tournament(
        tournament, match.id, lambda m: m.with_goals_result(score1, score2)
    ).value


def _reseed(manager, tournament):
    return tournament.with_knockout_matches(
        manager.update_knockout_bracket(tournament.knockout_matches).value
    )


def test_group_stage_completion():
    tournament = _tournament()

    assert not KnockoutManager.is_group_stage_complete([])
    assert not KnockoutManager.is_group_stage_complete(tournament.matches)
    assert KnockoutManager.is_group_stage_complete(_finish_group(tournament).matches)


def test_initialize_seeds_semis_from_standings():
    manager = KnockoutManager()

    tournament = _start_knockouts(manager, _tournament())

    assert tournament.phase == "knockout"
    semi1 = _round(tournament, "semi-1")
    semi2 = _round(tournament, "semi-2")
    assert (semi1.team1_id, semi1.team2_id) == ("t1", "t4")
    assert (semi2.team1_id, semi2.team2_id) == ("t2", "t3")
    assert _round(tournament, "final").team1_id is None


def test_initialize_is_one_shot():
    manager = KnockoutManager()
    tournament = _start_knockouts(manager, _tournament())

    again = manager.initialize_knockout_stage(tournament, standings_for(tournament, FOOTBALL))

    assert not again.changed
    assert again.value is tournament


def test_initialize_without_knockout_config_is_a_no_op():
    manager = KnockoutManager()
    tournament = _finish_group(_tournament(winner_mode="table-topper", configured=False))

    result = manager.initialize_knockout_stage(tournament, standings_for(tournament, FOOTBALL))

    assert not result
    assert result.value.phase == "group"
    assert result.value.knockout_matches == []


def test_semi_results_seed_final_and_third_place():
    manager = KnockoutManager()
    tournament = _start_knockouts(manager, _tournament())
    tournament = _play(tournament, "semi-1", 2, 0)
    tournament = _play(tournament, "semi-2", 0, 1)

    tournament = _reseed(manager, tournament)

    final = _round(tournament, "final")
    third = _round(tournament, "third-place")
    assert (final.team1_id, final.team2_id) == ("t1", "t3")
    assert (third.team1_id, third.team2_id) == ("t4", "t2")


def test_reseeding_its_own_output_changes_nothing():
    manager = KnockoutManager()
    tournament = _start_knockouts(manager, _tournament())
    tournament = _play(tournament, "semi-1", 2, 0)
    tournament = _play(tournament, "semi-2", 2, 0)
    seeded = manager.update_knockout_bracket(tournament.knockout_matches).value

    again = manager.update_knockout_bracket(seeded)

    assert not again.changed
    assert again.value is seeded


def test_clearing_a_semi_rolls_back_seeded_slots():
    manager = KnockoutManager()
    tournament = _start_knockouts(manager, _tournament())
    tournament = _play(tournament, "semi-1", 2, 0)
    tournament = _play(tournament, "semi-2", 2, 0)
    tournament = _reseed(manager, tournament)

    semi1 = _round(tournament, "semi-1")
    tournament = KnockoutManager.update_match_in_tournament(
        tournament, semi1.id, lambda m: m.cleared()
    ).value
    result = manager.update_knockout_bracket(tournament.knockout_matches)

    assert result.changed
    for match in result.value:
        if match.round in ("final", "third-place"):
            assert match.team1_id is None and match.team2_id is None


def test_unseeded_bracket_with_pending_semis_is_unchanged():
    manager = KnockoutManager()
    tournament = _start_knockouts(manager, _tournament())

    result = manager.update_knockout_bracket(tournament.knockout_matches)

    assert not result.changed
    assert result.value is tournament.knockout_matches


def test_drawn_semi_does_not_seed():
    manager = KnockoutManager()
    tournament = _start_knockouts(manager, _tournament())
    tournament = _play(tournament, "semi-1", 1, 1)
    tournament = _play(tournament, "semi-2", 2, 0)

    result = manager.update_knockout_bracket(tournament.knockout_matches)

    assert not result.changed
    assert _round(tournament, "final").team1_id is None


def test_completion_waits_for_third_place_match():
    manager = KnockoutManager()
    tournament = _start_knockouts(manager, _tournament())
    tournament = _play(tournament, "semi-1", 2, 0)
    tournament = _play(tournament, "semi-2", 2, 0)
    tournament = _reseed(manager, tournament)

    tournament = _play(tournament, "final", 0, 3)
    assert not KnockoutManager.is_tournament_complete(tournament)

    tournament = _play(tournament, "third-place", 1, 0)
    assert KnockoutManager.is_tournament_complete(tournament)
    assert KnockoutManager.get_tournament_winner(tournament).id == "t2"


def test_table_topper_completes_with_group_stage():
    tournament = _tournament(winner_mode="table-topper", configured=False)

    assert not KnockoutManager.is_tournament_complete(tournament)
    finished = _finish_group(tournament)
    assert KnockoutManager.is_tournament_complete(finished)
    assert KnockoutManager.get_tournament_winner(finished) is None


def test_knockout_completion_holds_as_more_matches_finish():
    manager = KnockoutManager()
    tournament = _start_knockouts(manager, _tournament())
    # third-place match is played but not required
    tournament = replace(tournament, knockout_config=KnockoutConfig(4, third_place_match=False))
    tournament = _play(tournament, "semi-1", 2, 0)
    tournament = _play(tournament, "semi-2", 0, 1)
    tournament = _reseed(manager, tournament)
    assert not KnockoutManager.is_tournament_complete(tournament)

    tournament = _play(tournament, "final", 1, 0)
    assert KnockoutManager.is_tournament_complete(tournament)

    tournament = _play(tournament, "third-place", 2, 1)
    tournament = _reseed(manager, tournament)
    assert KnockoutManager.is_tournament_complete(tournament)
    assert KnockoutManager.get_tournament_winner(tournament).id == "t1"


def test_table_topper_completion_holds_as_more_matches_finish():
    manager = KnockoutManager()
    tournament = _tournament(third_place=False, winner_mode="table-topper")
    tournament = _start_knockouts(manager, tournament)
    assert KnockoutManager.is_tournament_complete(tournament)

    for round_name in ("semi-1", "semi-2"):
        tournament = _play(tournament, round_name, 3, 1)
        tournament = _reseed(manager, tournament)
        assert KnockoutManager.is_tournament_complete(tournament)

    tournament = _play(tournament, "final", 0, 1)
    assert KnockoutManager.is_tournament_complete(tournament)


def test_two_team_knockout_is_a_single_final():
    manager = KnockoutManager()

    tournament = _start_knockouts(manager, _tournament(teams_advancing=2, third_place=False))

    assert len(tournament.knockout_matches) == 1
    final = tournament.knockout_matches[0]
    assert (final.round, final.team1_id, final.team2_id) == ("final", "t1", "t2")
    assert not manager.update_knockout_bracket(tournament.knockout_matches).changed

    tournament = _play(tournament, "final", 3, 1)
    assert KnockoutManager.is_tournament_complete(tournament)
    assert KnockoutManager.get_tournament_winner(tournament).name == "Team 1"


def test_find_and_update_match():
    manager = KnockoutManager()
    tournament = _start_knockouts(manager, _tournament())
    semi1 = _round(tournament, "semi-1")

    assert manager.find_match_in_tournament(tournament, semi1.id) == (semi1, True)
    assert manager.find_match_in_tournament(tournament, tournament.matches[0].id)[1] is False
    assert manager.find_match_in_tournament(tournament, "nope") == (None, False)

    missing = manager.update_match_in_tournament(tournament, "nope", lambda m: m.cleared())
    assert not missing.changed
    assert missing.value is tournament
