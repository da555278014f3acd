import pytest

from gamescore.exceptions import DrawNotAllowedException, InvalidSideException
from gamescore.models import Match, MatchFormat
from gamescore.scoring import LiveScoreSession
from gamescore.sports import get_sport


class FakeClock:
    def __init__(self):
        self.now = 0.0

    def __call__(self):
        return self.now

    def advance(self, ms=200):
        self.now += ms


class RecordingScheduler:
    def __init__(self):
        self.calls = []

    def __call__(self, delay, callback):
        self.calls.append((delay, callback))

    def run_all(self):
        for _, callback in self.calls:
            callback()


def _session(sport_id="football", match_format=None, **kwargs):
    commits = []
    clock = kwargs.pop("clock", FakeClock())
    session = LiveScoreSession(
        kwargs.pop("match", Match(id="m1", team1_id="a", team2_id="b")),
        get_sport(sport_id),
        match_format or MatchFormat(mode="free"),
        clock=clock,
        on_commit=commits.append,
        **kwargs,
    )
    return session, clock, commits


def _score(session, clock, side, delta=1):
    clock.advance()
    return session.add_score(side, delta)


def test_actions_inside_debounce_window_are_dropped():
    session, clock, _ = _session()

    assert session.add_score(1)
    clock.advance(100)
    assert not session.add_score(1)
    clock.advance(100)
    assert session.add_score(1)

    assert session.score1 == 2
    assert len(session.history) == 2


def test_undo_walks_back_one_action_at_a_time():
    session, clock, _ = _session()
    _score(session, clock, 1)
    _score(session, clock, 2, 3)

    assert session.undo()
    assert (session.score1, session.score2) == (1, 0)
    assert session.undo()
    assert (session.score1, session.score2) == (0, 0)
    assert not session.undo()


def test_history_is_capped():
    session, clock, _ = _session()

    for _ in range(150):
        _score(session, clock, 1)

    assert session.score1 == 150
    assert len(session.history) == 100
    assert session.history[0].score1 == 50


def test_negative_delta_corrects_score():
    session, clock, _ = _session()
    _score(session, clock, 2, 3)
    _score(session, clock, 2, -1)

    assert session.score2 == 2


def test_invalid_side_is_rejected():
    session, _, _ = _session()

    with pytest.raises(InvalidSideException):
        session.add_score(3)


def test_points_target_completes_after_scheduled_delay():
    scheduler = RecordingScheduler()
    session, clock, commits = _session(
        match_format=MatchFormat(mode="points", target=3), scheduler=scheduler
    )

    for _ in range(3):
        _score(session, clock, 1)

    assert session.completed
    assert [delay for delay, _ in scheduler.calls] == [0.6]
    assert commits == []

    scheduler.run_all()
    assert len(commits) == 1
    assert (commits[0].status, commits[0].winner, commits[0].score1) == ("completed", "a", 3)

    assert not _score(session, clock, 2)
    assert not session.undo()


def test_timed_match_ends_when_time_runs_out():
    session, clock, commits = _session(match_format=MatchFormat(mode="timed", time_limit=3))

    for _ in range(5):
        assert not session.tick()
    assert session.timer.elapsed == 0

    _score(session, clock, 2)
    assert not session.tick()
    assert not session.tick()
    assert session.tick()

    assert session.completed
    assert not session.timer.running
    assert commits[-1].winner == "b"
    assert not _score(session, clock, 1)


def test_expired_timer_rejects_scores():
    session, clock, _ = _session(match_format=MatchFormat(mode="timed", time_limit=60))
    session.timer.elapsed = 60

    assert not _score(session, clock, 1)
    assert session.score1 == 0


def test_finish_rejects_draw_when_not_allowed():
    session, clock, commits = _session("basketball")
    _score(session, clock, 1, 2)
    _score(session, clock, 2, 2)

    with pytest.raises(DrawNotAllowedException):
        session.finish()
    assert commits == []
    assert not session.completed


def test_knockout_match_cannot_finish_level():
    session, clock, _ = _session("football", is_knockout=True)

    with pytest.raises(DrawNotAllowedException):
        session.finish()


def test_group_draw_finishes_immediately():
    session, clock, commits = _session("football")
    _score(session, clock, 1)
    _score(session, clock, 2)

    finished = session.finish()

    assert finished.winner == "draw"
    assert commits == [finished]


def test_draft_survives_persistence_and_resumes():
    session, clock, commits = _session(match_format=MatchFormat(mode="timed", time_limit=600))
    _score(session, clock, 1)
    session.tick()
    _score(session, clock, 2, 2)

    parked = session.save_draft()

    assert parked.status == "in-progress"
    assert commits == [parked]
    stored = Match.from_dict(parked.to_dict())
    assert stored.draft_state.saved_at is not None

    resumed, clock, _ = _session(
        match=stored, match_format=MatchFormat(mode="timed", time_limit=600)
    )
    assert (resumed.score1, resumed.score2) == (1, 2)
    assert resumed.timer.elapsed == 1
    assert resumed.timer.running
    assert len(resumed.history) == 2
    assert resumed.undo()
    assert (resumed.score1, resumed.score2) == (1, 0)


def test_draft_keeps_only_recent_history():
    session, clock, _ = _session()
    for _ in range(80):
        _score(session, clock, 1)
    assert len(session.history) == 80

    draft = session.save_draft().draft_state

    assert len(draft.history) == 50
    assert [entry.score1 for entry in draft.history] == list(range(30, 80))
    assert draft.history[0] == session.history[-50]

    resumed, _, _ = _session(match=Match.from_dict(session.match.to_dict()))
    assert resumed.score1 == 80
    assert len(resumed.history) == 50
    assert resumed.undo()
    assert resumed.score1 == 79


def test_session_starts_from_recorded_scores():
    match = Match(id="m1", team1_id="a", team2_id="b").with_goals_result(4, 2)

    session, _, _ = _session(match=match)

    assert (session.score1, session.score2) == (4, 2)
    assert session.history == []
