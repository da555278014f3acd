"""Tournament engine: one edit cycle from result entry to persistence.

Each state-changing call patches the tournament, recomputes standings, lets
the knockout manager decide on phase transition and reseeding, and then
commits the result to the injected store. There is no background writer;
nothing reaches the store except through :meth:`TournamentEngine.commit`.
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

from typing import List, Optional, Sequence, Tuple, Union

from gamescore.constants import (
    COMPLETION_DELAY,
    WINNER_MODE_KNOCKOUTS,
    WINNER_MODE_TABLE_TOPPER,
)
from gamescore.controllers.tournament.knockout_manager import KnockoutManager
from gamescore.controllers.tournament.result_recorder import ResultRecorder
from gamescore.controllers.tournament.round_robin import (
    generate_round_robin_matches,
    get_completed_match_count,
)
from gamescore.exceptions import ConfigurationException, MatchNotFoundException
from gamescore.models.team import Team, find_team
from gamescore.models.tournament import KnockoutConfig, Match, MatchFormat, Tournament
from gamescore.scoring.live_session import LiveScoreSession, ScoringSession
from gamescore.scoring.sets_session import SetsLiveScoreSession
from gamescore.sports.defaults import apply_standard_defaults
from gamescore.sports.registry import Sport, get_sport
from gamescore.sports.rules import SetsRules
from gamescore.standings import Standings, calculator_for
from gamescore.storage.store import KeyValueStore, TournamentRepository
from gamescore.type_hints import Changed, Clock, Scheduler
from gamescore.utils import generate_id, setup_logger
from gamescore.utils.validation import validate_team_roster_strict

logger = setup_logger(__name__)


class TournamentEngine:
    """Runs tournaments of one sport against a key-value store.

    The scoring family is resolved once here, from the sport's rules, and
    every later standings computation goes through that calculator.
    """

    def __init__(
        self,
        store: KeyValueStore,
        sport: Union[Sport, str],
        knockout_manager: Optional[KnockoutManager] = None,
        completion_delay: float = COMPLETION_DELAY,
    ):
        """Initialize the engine.

        Args:
            store: Store the tournaments are committed to
            sport: Sport or sport id
            knockout_manager: Optional manager, mainly for tests
            completion_delay: Seconds between an automatic match completion
                and its commit

        Raises:
            SportNotFoundException: If ``sport`` is an unknown id
        """
        self.sport = get_sport(sport) if isinstance(sport, str) else sport
        self.repository = TournamentRepository(store, self.sport)
        self.knockout = knockout_manager or KnockoutManager()
        self.recorder = ResultRecorder(self.sport, self.knockout)
        self.completion_delay = completion_delay
        self._calculate = calculator_for(self.sport.rules)

    # ========== Lifecycle ==========

    def create_tournament(
        self,
        name: str,
        team_names: Sequence[str],
        match_format: Optional[MatchFormat] = None,
        knockout_config: Optional[KnockoutConfig] = None,
        winner_mode: Optional[str] = None,
    ) -> Tournament:
        """Create, schedule and commit a new round-robin tournament.

        Args:
            name: Tournament name
            team_names: One name per team, in seeding order
            match_format: Match format; the sport's standard format if None
            knockout_config: Knockout settings, None for a league only
            winner_mode: Defaults to ``knockouts`` when a knockout stage is
                configured, ``table-topper`` otherwise

        Raises:
            TeamValidationException: If the roster is invalid
            ConfigurationException: If knockouts decide the winner but no
                knockout stage is configured
        """
        names = validate_team_roster_strict(team_names, knockout_config)
        if winner_mode is None:
            winner_mode = WINNER_MODE_KNOCKOUTS if knockout_config else WINNER_MODE_TABLE_TOPPER
        if winner_mode == WINNER_MODE_KNOCKOUTS and knockout_config is None:
            raise ConfigurationException("Knockout winner mode needs a knockout configuration")

        teams = [Team.create(n) for n in names]
        tournament = Tournament(
            id=generate_id(),
            name=name.strip() or f"{self.sport.name} Tournament",
            sport=self.sport.id,
            teams=teams,
            matches=generate_round_robin_matches(teams),
            format=match_format or apply_standard_defaults(self.sport.id),
            knockout_config=knockout_config,
            winner_mode=winner_mode,
        )
        logger.info(
            f"Created {self.sport.name} tournament {tournament.name!r} "
            f"with {len(teams)} teams and {len(tournament.matches)} matches"
        )
        self.commit(tournament)
        return tournament

    def list_tournaments(self) -> List[Tournament]:
        return self.repository.load_all()

    def load(self, tournament_id) -> Tournament:
        """Load a tournament and bring its bracket up to date.

        Raises:
            TournamentNotFoundException: If the id is unknown
        """
        tournament = self.repository.get(tournament_id)
        result = self.recompute(tournament)
        if result.changed:
            self.commit(result.value)
        return result.value

    def delete(self, tournament_id) -> bool:
        return self.repository.delete(tournament_id)

    def commit(self, tournament: Tournament) -> Tournament:
        """Persist the whole tournament, replacing the stored copy."""
        self.repository.save(tournament)
        logger.info(f"Committed tournament {tournament.name!r} ({tournament.phase} phase)")
        return tournament

    # ========== Progression ==========

    def standings(self, tournament: Tournament) -> Standings:
        return self._calculate(tournament.teams, tournament.matches, self.sport.rules)

    def recompute(self, tournament: Tournament) -> Changed[Tournament]:
        """Recompute standings, then phase transition, then bracket seeding.

        Returns:
            Changed tournament; the same object when nothing moved
        """
        changed = False
        if self.knockout.is_group_stage_complete(tournament.matches):
            started = self.knockout.initialize_knockout_stage(
                tournament, self.standings(tournament)
            )
            tournament = started.value
            changed = started.changed

        bracket = self.knockout.update_knockout_bracket(tournament.knockout_matches)
        if bracket.changed:
            tournament = tournament.with_knockout_matches(bracket.value)
            changed = True

        return Changed(tournament, changed)

    def _apply(self, tournament: Tournament) -> Tournament:
        return self.commit(self.recompute(tournament).value)

    def record_result(self, tournament: Tournament, match: Match) -> Tournament:
        """Store a match coming out of a live scoring session and commit."""
        return self._apply(self.recorder.record_match(tournament, match))

    def record_goals_result(self, tournament: Tournament, match_id, score1: int, score2: int) -> Tournament:
        return self._apply(self.recorder.record_goals_result(tournament, match_id, score1, score2))

    def record_sets_result(
        self, tournament: Tournament, match_id, sets: Sequence[Tuple[int, int]]
    ) -> Tournament:
        return self._apply(self.recorder.record_sets_result(tournament, match_id, sets))

    def clear_result(self, tournament: Tournament, match_id) -> Tournament:
        return self._apply(self.recorder.clear_result(tournament, match_id))

    # ========== Outcome ==========

    def is_complete(self, tournament: Tournament) -> bool:
        return self.knockout.is_tournament_complete(tournament)

    def winner(self, tournament: Tournament) -> Optional[Team]:
        """Champion of a completed tournament, None while still running."""
        if not self.is_complete(tournament):
            return None
        if tournament.uses_knockouts:
            return self.knockout.get_tournament_winner(tournament)
        table = self.standings(tournament)
        return find_team(tournament.teams, table[0].team_id) if table else None

    def progress(self, tournament: Tournament) -> Tuple[int, int]:
        """(completed, total) over group and knockout matches."""
        matches = tournament.all_matches()
        return get_completed_match_count(matches), len(matches)

    # ========== Live scoring ==========

    def open_live_session(
        self,
        tournament: Tournament,
        match_id,
        clock: Optional[Clock] = None,
        scheduler: Optional[Scheduler] = None,
    ) -> ScoringSession:
        """Start live scoring for one match.

        Drafts and finished results are committed through the engine as the
        session produces them, so the returned session can be driven without
        further bookkeeping.

        Raises:
            MatchNotFoundException: If the match does not exist or has no teams
            MatchCompletedException: If a sets match is already decided
        """
        match, is_knockout = self.knockout.find_match_in_tournament(tournament, match_id)
        if match is None or not match.has_teams:
            raise MatchNotFoundException(f"No playable match {match_id} in {tournament.name!r}")

        tournament_id = tournament.id

        def on_commit(updated: Match) -> None:
            current = self.repository.get(tournament_id)
            self.record_result(current, updated)

        session_cls = (
            SetsLiveScoreSession if isinstance(self.sport.rules, SetsRules) else LiveScoreSession
        )
        return session_cls(
            match,
            self.sport,
            tournament.format,
            is_knockout=is_knockout,
            clock=clock,
            scheduler=scheduler,
            on_commit=on_commit,
            completion_delay=self.completion_delay,
        )
