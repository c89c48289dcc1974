from __future__ import annotations

import logging
from pathlib import Path
from typing import Iterable, Mapping, Optional, Tuple

from league_repo import LeagueRepo, utc_now_iso

from . import repo as t_repo
from .mapping import classify_training_type
from .types import LineupAssignment, MatchRef, MatchStatistics, TrainingTypeClassification, TrainingWindow

logger = logging.getLogger(__name__)


class SqliteTrainingDataSource:
    """TrainingDataSource backed by the league SQLite DB.

    Every call opens its own LeagueRepo (short-lived connection), like the API
    routes do. Window matches come back in chronological order: kickoff
    ascending, matches without kickoff last, ties broken by match_id.
    """

    def __init__(self, db_path: str | Path):
        self.db_path = str(db_path)

    def init_db(self) -> None:
        with LeagueRepo(self.db_path) as repo:
            repo.init_db()

    # ------------------------------------------------------------------
    # TrainingDataSource
    # ------------------------------------------------------------------

    def resolve_current_season_and_week(self) -> Tuple[int, int]:
        with LeagueRepo(self.db_path) as repo:
            cal = repo.get_calendar()
        if cal is None:
            raise ValueError("league calendar is not set")
        return cal

    def resolve_next_training_week_id(self, season: int, week: int) -> Optional[int]:
        with LeagueRepo(self.db_path) as repo:
            with repo.transaction() as cur:
                return t_repo.get_future_training(cur, season=int(season), week=int(week))

    def resolve_last_completed_training_window(self) -> Optional[TrainingWindow]:
        with LeagueRepo(self.db_path) as repo:
            cal = repo.get_calendar()
            if cal is None:
                return None
            with repo.transaction() as cur:
                last = t_repo.get_last_training_week(cur, season=cal[0], week=cal[1])
                if last is None:
                    return None
                rows = t_repo.list_matches_for_week(cur, season=last["season"], week=last["week"])

        matches = tuple(
            MatchRef(
                match_id=r["match_id"],
                match_type=r["match_type"],
                status=r["status"],
                kickoff=r["kickoff"],
            )
            for r in rows
        )
        return TrainingWindow(
            training_type_id=last["training_type"],
            season=last["season"],
            week=last["week"],
            matches=matches,
        )

    def classify_training_type(self, training_type_id: int) -> TrainingTypeClassification:
        return classify_training_type(training_type_id)

    def load_finished_match_statistics(self, match: MatchRef) -> MatchStatistics:
        with LeagueRepo(self.db_path) as repo:
            with repo.transaction() as cur:
                rows = t_repo.list_match_player_minutes(cur, match_id=match.match_id)
        return MatchStatistics.from_rows(match.match_id, rows)

    def load_upcoming_lineup_assignment(self, match: MatchRef) -> Optional[LineupAssignment]:
        with LeagueRepo(self.db_path) as repo:
            with repo.transaction() as cur:
                positions = t_repo.get_match_order(cur, match_id=match.match_id, match_type=match.match_type)
        if positions is None:
            return None
        return LineupAssignment(match_id=match.match_id, match_type=match.match_type, positions=positions)

    def discard_planned_lineup_artifacts(self) -> None:
        with LeagueRepo(self.db_path) as repo:
            with repo.transaction() as cur:
                n = t_repo.delete_all_match_orders(cur)
        logger.info("MATCH_ORDERS_DISCARDED count=%d", n)

    # ------------------------------------------------------------------
    # Writers (data download / lineup editing)
    # ------------------------------------------------------------------

    def set_calendar(self, season: int, week: int) -> Tuple[int, int]:
        with LeagueRepo(self.db_path) as repo:
            return repo.set_calendar(season, week)

    def record_training_week(self, *, season: int, week: int, training_type: int) -> None:
        with LeagueRepo(self.db_path) as repo:
            with repo.transaction() as cur:
                t_repo.upsert_training_week(
                    cur, season=season, week=week, training_type=training_type, now=utc_now_iso()
                )

    def record_future_training(self, *, season: int, week: int, training_type: int) -> None:
        with LeagueRepo(self.db_path) as repo:
            with repo.transaction() as cur:
                t_repo.upsert_future_training(
                    cur, season=season, week=week, training_type=training_type, now=utc_now_iso()
                )

    def record_match(
        self,
        *,
        match_id: int,
        match_type: int,
        season: int,
        week: int,
        status: str,
        kickoff: Optional[str] = None,
        player_minutes: Optional[Iterable[Tuple[int, int, int]]] = None,
    ) -> None:
        """Upsert a match; player_minutes rows are (player_id, role_id, minutes)."""
        with LeagueRepo(self.db_path) as repo:
            with repo.transaction() as cur:
                t_repo.upsert_match(
                    cur,
                    match_id=match_id,
                    match_type=match_type,
                    season=season,
                    week=week,
                    status=status,
                    kickoff=kickoff,
                    now=utc_now_iso(),
                )
                if player_minutes is not None:
                    t_repo.replace_match_player_minutes(cur, match_id=match_id, rows=player_minutes)

    def save_match_order(self, *, match_id: int, match_type: int, positions: Mapping[int, int]) -> None:
        with LeagueRepo(self.db_path) as repo:
            with repo.transaction() as cur:
                t_repo.upsert_match_order(
                    cur,
                    match_id=match_id,
                    match_type=match_type,
                    positions=positions,
                    now=utc_now_iso(),
                )
