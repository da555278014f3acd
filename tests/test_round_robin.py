from gamescore.controllers.tournament import (
    generate_knockout_matches,
    generate_round_robin_matches,
    get_completed_match_count,
    get_total_match_count,
)
from gamescore.models import KnockoutConfig, Team


def test_every_pair_meets_exactly_once():
    teams = [Team.create(name) for name in "ABCDE"]

    matches = generate_round_robin_matches(teams)

    assert len(matches) == get_total_match_count(5) == 10
    assert len({frozenset((m.team1_id, m.team2_id)) for m in matches}) == 10
    assert len({m.id for m in matches}) == 10
    assert all(m.is_pending and m.team1_id != m.team2_id for m in matches)


def test_earlier_roster_entry_is_side_one():
    teams = [Team.create(name) for name in "ABC"]

    matches = generate_round_robin_matches(teams)

    assert [(m.team1_id, m.team2_id) for m in matches] == [
        (teams[0].id, teams[1].id),
        (teams[0].id, teams[2].id),
        (teams[1].id, teams[2].id),
    ]


def test_four_team_bracket_seeds_one_v_four_and_two_v_three():
    bracket = generate_knockout_matches(
        ["w", "x", "y", "z", "extra"], KnockoutConfig(4, third_place_match=True)
    )

    assert [m.round for m in bracket] == ["semi-1", "semi-2", "final", "third-place"]
    assert (bracket[0].team1_id, bracket[0].team2_id) == ("w", "z")
    assert (bracket[1].team1_id, bracket[1].team2_id) == ("x", "y")
    assert bracket[2].team1_id is None and bracket[2].team2_id is None
    assert [m.label for m in bracket] == ["Semi-final 1", "Semi-final 2", "Final", "3rd Place"]
    assert all(m.is_pending for m in bracket)


def test_third_place_match_only_when_configured():
    bracket = generate_knockout_matches(["w", "x", "y", "z"], KnockoutConfig(4))

    assert [m.round for m in bracket] == ["semi-1", "semi-2", "final"]


def test_two_team_bracket_goes_straight_to_final():
    bracket = generate_knockout_matches(["w", "x", "y"], KnockoutConfig(2))

    assert len(bracket) == 1
    final = bracket[0]
    assert (final.round, final.team1_id, final.team2_id) == ("final", "w", "x")


def test_too_few_ranked_teams_gives_empty_bracket():
    assert generate_knockout_matches(["w", "x", "y"], KnockoutConfig(4)) == []


def test_completed_match_count():
    teams = [Team.create(name) for name in "ABC"]
    matches = generate_round_robin_matches(teams)
    matches[0] = matches[0].with_goals_result(1, 0)

    assert get_completed_match_count(matches) == 1
    assert get_total_match_count(1) == 0
