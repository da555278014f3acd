import pytest

from gamescore.exceptions import ConfigurationException
from gamescore.models import KnockoutConfig, MatchFormat
from gamescore.sports import (
    apply_standard_defaults,
    get_goals_sports,
    get_sets_sports,
    get_sport,
    is_standard_format,
)
from gamescore.utils.validation import (
    validate_set_score,
    validate_team_name,
    validate_team_roster,
)

VOLLEYBALL = get_sport("volleyball").rules
BEST_OF_3 = MatchFormat(type="best-of", sets=3, points=25)


def test_team_name_is_stripped_and_bounded():
    assert validate_team_name("  Lions ").sanitized_value == "Lions"
    assert not validate_team_name("   ")
    assert not validate_team_name("x" * 41)


def test_roster_rules():
    assert validate_team_roster(["A", "B"]).sanitized_value == ["A", "B"]
    assert "Duplicate" in validate_team_roster(["Lions", " LIONS"]).error_message
    assert not validate_team_roster(["A"])
    assert not validate_team_roster(["A", "B", "C"], KnockoutConfig(4))
    assert validate_team_roster(["A", "B"], KnockoutConfig(2))


def test_knockout_config_only_accepts_two_or_four():
    with pytest.raises(ConfigurationException):
        KnockoutConfig(3)


@pytest.mark.parametrize(
    "score1, score2, index, count, error",
    [
        (25, 23, 0, 2, None),
        (27, 25, 0, 2, None),
        (15, 13, 2, 3, None),
        (15, 13, 2, 2, "First to 25"),
        (24, 20, 0, 2, "First to 25"),
        (25, 24, 0, 2, "Win by 2"),
        (-1, 25, 0, 2, "Scores must be positive"),
        ("", 25, 0, 2, "Invalid score"),
    ],
)
def test_set_score_validation(score1, score2, index, count, error):
    result = validate_set_score(score1, score2, index, VOLLEYBALL, BEST_OF_3, count)

    if error is None:
        assert result
        assert result.sanitized_value == (int(score1), int(score2))
    else:
        assert result.error_message == error


def test_numeric_strings_are_accepted():
    result = validate_set_score("25", "19", 0, VOLLEYBALL, BEST_OF_3, 2)

    assert result.sanitized_value == (25, 19)


def test_set_target_and_completion_rules():
    single = MatchFormat(type="single", points=15)

    assert VOLLEYBALL.set_target(BEST_OF_3, 0) == 25
    assert VOLLEYBALL.set_target(BEST_OF_3, 2) == 15
    assert VOLLEYBALL.set_target(single, 0) == 15


def test_sport_families_and_defaults():
    assert {s.id for s in get_sets_sports()} == {
        "volleyball", "badminton", "tabletennis", "tennis", "pickleball", "squash"
    }
    assert len(get_goals_sports()) == 7
    assert get_sport("football").storage_key == "gamescore_football"

    defaults = apply_standard_defaults("tabletennis")
    assert (defaults.type, defaults.sets, defaults.points) == ("best-of", 5, 11)
    assert is_standard_format("tabletennis", defaults)

    custom = apply_standard_defaults("volleyball", MatchFormat(sets=5))
    assert (custom.sets, custom.points, custom.format_mode) == (5, 25, "standard")
    assert not is_standard_format("volleyball", custom)
