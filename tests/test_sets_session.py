import pytest

from gamescore.exceptions import MatchCompletedException, ScoringException
from gamescore.models import Match, MatchFormat, SetScore
from gamescore.scoring import SetsLiveScoreSession
from gamescore.sports import get_sport

BEST_OF_3 = MatchFormat(type="best-of", sets=3, points=25)


class FakeClock:
    def __init__(self):
        self.now = 0.0

    def __call__(self):
        return self.now


def _session(sport_id="volleyball", match_format=BEST_OF_3, match=None, **kwargs):
    commits = []
    session = SetsLiveScoreSession(
        match or Match(id="m1", team1_id="a", team2_id="b"),
        get_sport(sport_id),
        match_format,
        clock=FakeClock(),
        on_commit=commits.append,
        **kwargs,
    )
    return session, commits


def _points(session, side, count):
    for _ in range(count):
        session.clock.now += 200
        assert session.add_point(side)


def _deuce(session, score):
    for _ in range(score):
        _points(session, 1, 1)
        _points(session, 2, 1)


def test_set_closes_at_target_and_next_set_opens():
    session, _ = _session()

    _points(session, 1, 25)

    assert session.sets[0].completed
    assert (session.sets[0].score1, session.sets[0].score2) == (25, 0)
    assert session.current_set == 1
    assert len(session.sets) == 2
    assert session.sets_won == (1, 0)
    assert not session.completed


def test_set_needs_two_point_margin():
    session, _ = _session()
    _deuce(session, 24)

    _points(session, 2, 1)
    assert not session.sets[0].completed

    _points(session, 2, 1)
    assert session.sets[0].completed
    assert (session.sets[0].score1, session.sets[0].score2) == (24, 26)


def test_deciding_set_uses_decider_target():
    session, _ = _session()
    _points(session, 1, 25)
    _points(session, 2, 25)

    _points(session, 1, 15)

    assert session.completed
    assert session.result.winner == "a"
    assert [(s.score1, s.score2) for s in session.result.sets] == [(25, 0), (0, 25), (15, 0)]


def test_match_completion_is_committed_after_delay():
    calls = []
    session, commits = _session(scheduler=lambda delay, cb: calls.append((delay, cb)))
    _points(session, 2, 25)
    _points(session, 2, 25)

    assert session.completed
    assert commits == []
    assert not session.add_point(1)

    delay, callback = calls[0]
    callback()
    assert delay == 0.6
    assert commits[0].winner == "b"
    assert commits[0].status == "completed"
    assert len(commits[0].sets) == 2


def test_badminton_cap_closes_set_at_thirty():
    session, _ = _session("badminton", MatchFormat(type="best-of", sets=3, points=21))
    _deuce(session, 29)

    _points(session, 1, 1)

    assert session.sets[0].completed
    assert (session.sets[0].score1, session.sets[0].score2) == (30, 29)


def test_single_set_format_ends_after_one_set():
    session, commits = _session("tabletennis", MatchFormat(type="single", points=11))

    _points(session, 1, 11)

    assert session.completed
    assert commits[0].winner == "a"
    assert len(commits[0].sets) == 1


def test_undo_reopens_previous_set():
    session, _ = _session()
    _points(session, 1, 25)

    assert session.undo()

    assert session.current_set == 0
    assert len(session.sets) == 1
    assert (session.sets[0].score1, session.sets[0].completed) == (24, False)


def test_finish_before_decided_keeps_match_in_progress():
    session, commits = _session()
    _points(session, 1, 25)
    _points(session, 2, 3)

    saved = session.finish()

    assert saved.status == "in-progress"
    assert saved.winner is None
    assert [(s.score1, s.score2) for s in saved.sets] == [(25, 0), (0, 3)]
    assert commits == [saved]

    resumed, _ = _session(match=Match.from_dict(saved.to_dict()))
    assert resumed.current_set == 1
    assert resumed.sets_won == (1, 0)
    assert (resumed.sets[1].score1, resumed.sets[1].score2) == (0, 3)


def test_recorded_sets_continue_in_a_fresh_set():
    recorded = Match(
        id="m1", team1_id="a", team2_id="b", status="in-progress",
        sets=[SetScore(25, 20, completed=True)],
    )
    session, _ = _session(match=recorded)

    assert session.current_set == 1
    assert session.sets_won == (1, 0)
    _points(session, 2, 1)
    assert (session.sets[1].score1, session.sets[1].score2) == (0, 1)


def test_decided_match_cannot_be_reopened():
    decided = Match(id="m1", team1_id="a", team2_id="b").with_sets_result(
        [SetScore(25, 20, completed=True), SetScore(25, 22, completed=True)]
    )

    with pytest.raises(MatchCompletedException):
        _session(match=decided)


def test_decided_match_finishes_immediately():
    session, commits = _session(scheduler=lambda delay, cb: None)
    _points(session, 1, 25)
    _points(session, 1, 25)

    finished = session.finish()

    assert finished.winner == "a"
    assert session.result is finished


def test_goals_sport_is_rejected():
    with pytest.raises(ScoringException):
        _session("football", MatchFormat(mode="free"))
