"""Daily progression state machine.

A player may push once per local calendar date. Pushing on the day right after
the previous push grows height and streak; skipping a day while holding height
kills the player. The kill happens in two phases: the death is recorded as soon
as a push attempt notices the gap, and the player row is only zeroed once the
client acknowledges the rollback (after animating it).
"""

import logging
from typing import Optional

from sqlalchemy.exc import IntegrityError

from sisyphus import helpers
from sisyphus.engine.dates import DateArithmetic
from sisyphus.errors import AlreadyPlayedError, InvalidDateError, PlayerNotFoundError, RollbackRequiredError
from sisyphus.models.outcomes import ProgressionState, PushDecision, PushResult, RollbackInfo
from sisyphus.models.player import PlayerRecord, PlayerState
from sisyphus.persistence.database import Database
from sisyphus.persistence.ledgers import DeathLedger, PushLedger
from sisyphus.persistence.player_store import PlayerStore

logger = logging.getLogger(__name__.split(".")[-1])

# Days missed recorded when a rollback is acknowledged before any push noticed it
ACKNOWLEDGED_DAYS_MISSED = 1

_ACKNOWLEDGE_ATTEMPTS = 2


class ProgressionRules:
    """Pure decisions over a player snapshot and a claimed local date."""

    @staticmethod
    def is_already_played(player: PlayerRecord, claimed_date: str) -> bool:
        """Same-day retry or backward time travel."""
        if player.last_played_date is None:
            return False
        return DateArithmetic.is_on_or_before(claimed_date, player.last_played_date)

    @staticmethod
    def needs_rollback(player: PlayerRecord, claimed_date: str) -> bool:
        """Forward in time by more than one day while holding height."""
        if player.last_played_date is None or player.height <= 0:
            return False
        if ProgressionRules.is_already_played(player, claimed_date):
            return False
        return not DateArithmetic.is_consecutive_day(player.last_played_date, claimed_date)

    @staticmethod
    def rollback_info(player: PlayerRecord, claimed_date: str) -> RollbackInfo:
        """Cost of the missed interval between the last push and ``claimed_date``."""
        days_missed = DateArithmetic.days_between(player.last_played_date, claimed_date) - 1
        return RollbackInfo(
            height_lost=player.height,
            streak_lost=player.streak,
            days_missed=days_missed,
        )

    @staticmethod
    def evaluate_push(player: PlayerRecord, claimed_date: str, already_pushed: bool = False) -> PushDecision:
        """
        Decide what a push attempt does. First match wins:

        1. already pushed on that date, or date not after the last push
        2. missed day(s) with height to lose
        3. advance (or first push ever)

        Args:
            player: Current player snapshot
            claimed_date: Validated local date sent by the client
            already_pushed: Whether the push ledger has this date

        Returns:
            PushDecision
        """
        if already_pushed or ProgressionRules.is_already_played(player, claimed_date):
            return PushDecision(state=ProgressionState.ALREADY_PLAYED)

        if ProgressionRules.needs_rollback(player, claimed_date):
            return PushDecision(
                state=ProgressionState.ROLLBACK_REQUIRED,
                rollback=ProgressionRules.rollback_info(player, claimed_date),
            )

        if player.last_played_date is None:
            return PushDecision(state=ProgressionState.FRESH)
        return PushDecision(state=ProgressionState.ADVANCE)

    @staticmethod
    def describe(player: PlayerRecord, claimed_date: str, is_new: bool = False) -> PlayerState:
        """
        Build the read-side view of a player for ``claimed_date``.

        Nothing here is stored: a pending rollback is re-derived on every read
        from the player's last push and current height.
        """
        has_played_today = ProgressionRules.is_already_played(player, claimed_date)
        needs_rollback = not is_new and ProgressionRules.needs_rollback(player, claimed_date)
        return PlayerState(
            id=player.id,
            height=player.height,
            streak=player.streak,
            last_played_date=player.last_played_date,
            has_played_today=has_played_today,
            needs_rollback=needs_rollback,
            previous_height=player.height if needs_rollback else 0,
            total_pushes=player.total_pushes,
            max_height=player.max_height,
            death_count=player.death_count,
        )


class ProgressionEngine:
    """Applies progression decisions to the player store and ledgers."""

    def __init__(
        self,
        database: Database,
        players: Optional[PlayerStore] = None,
        pushes: Optional[PushLedger] = None,
        deaths: Optional[DeathLedger] = None,
    ) -> None:
        """
        Initialize progression engine.

        Args:
            database: Database handing out transactions
            players: Player store
            pushes: Push ledger
            deaths: Death ledger
        """
        self._database = database
        self._players = players or PlayerStore()
        self._pushes = pushes or PushLedger()
        self._deaths = deaths or DeathLedger()

    @staticmethod
    def _require_valid_date(local_date: Optional[str]) -> str:
        if not local_date or not DateArithmetic.is_valid_date(local_date):
            raise InvalidDateError()
        return local_date

    @helpers.log_call
    def register(self) -> str:
        """Create a new player and return its id."""
        with self._database.transaction() as session:
            row = self._players.create(session)
            return row.id

    def get_player(self, player_id: str) -> PlayerRecord:
        """
        Get a player snapshot.

        Raises:
            PlayerNotFoundError: If the id is unknown
        """
        with self._database.transaction() as session:
            row = self._players.get(session, player_id)
            if row is None:
                raise PlayerNotFoundError()
            return self._players.to_record(row)

    def require_player(self, player_id: str) -> None:
        """Raise PlayerNotFoundError unless the player exists."""
        self.get_player(player_id)

    def get_state(self, player_id: Optional[str], local_date: Optional[str]) -> PlayerState:
        """
        Read a player's state for their local date.

        Without a player id a new player is created. Never records a death,
        so reconnecting clients can re-read a pending rollback freely.

        Raises:
            InvalidDateError: If local_date is missing or malformed
            PlayerNotFoundError: If player_id is given but unknown
        """
        local_date = self._require_valid_date(local_date)

        with self._database.transaction() as session:
            if player_id:
                row = self._players.get(session, player_id)
                if row is None:
                    raise PlayerNotFoundError()
                self._players.touch(row)
                is_new = False
            else:
                row = self._players.create(session)
                is_new = True
            player = self._players.to_record(row)

        return ProgressionRules.describe(player, local_date, is_new=is_new)

    @helpers.log_call
    def push(self, player_id: str, local_date: Optional[str]) -> PushResult:
        """
        Push the boulder for ``local_date``.

        The player update and the push record commit together or not at all.

        Raises:
            InvalidDateError: If local_date is missing or malformed
            PlayerNotFoundError: If the player is unknown
            AlreadyPlayedError: If the date is not after the last push
            RollbackRequiredError: If days were missed; the death is recorded
        """
        local_date = self._require_valid_date(local_date)
        decision: Optional[PushDecision] = None

        try:
            with self._database.transaction() as session:
                row = self._players.lock(session, player_id)
                if row is None:
                    raise PlayerNotFoundError()

                already_pushed = self._pushes.has_pushed(session, player_id, local_date)
                decision = ProgressionRules.evaluate_push(self._players.to_record(row), local_date, already_pushed)

                if decision.state == ProgressionState.ALREADY_PLAYED:
                    raise AlreadyPlayedError()

                if decision.allows_push:
                    self._players.advance(row, local_date)
                    self._pushes.append(session, player_id, local_date, row.height, row.streak)
                    result = PushResult(height=row.height, streak=row.streak)
                else:
                    rollback = decision.rollback
                    death, created = self._deaths.record_once(
                        session,
                        player_id,
                        row.last_played_date,
                        rollback.height_lost,
                        rollback.streak_lost,
                        rollback.days_missed,
                    )
                    if not created:
                        logger.debug(
                            f"Death for {player_id} after {row.last_played_date} already recorded "
                            f"with {death.days_missed} day(s) missed, reporting {rollback.days_missed}"
                        )
                    self._players.touch(row)
        except IntegrityError:
            # A concurrent request wrote the same push or death first
            if decision is not None and decision.state == ProgressionState.ROLLBACK_REQUIRED:
                logger.info(f"Concurrent death record for {player_id}, keeping the first one")
                raise RollbackRequiredError(**decision.rollback.model_dump())
            logger.info(f"Concurrent push for {player_id} on {local_date} lost the race")
            raise AlreadyPlayedError()

        if decision.state == ProgressionState.ROLLBACK_REQUIRED:
            raise RollbackRequiredError(**decision.rollback.model_dump())

        logger.info(f"Player {player_id} pushed on {local_date}: height {result.height}, streak {result.streak}")
        return result

    @helpers.log_call
    def acknowledge_rollback(self, player_id: str) -> PushResult:
        """
        Commit a rollback after the client has shown it.

        Reuses the death a push attempt already recorded for the current
        interval, or records one. Idempotent: with height already 0 nothing
        changes.

        Raises:
            PlayerNotFoundError: If the player is unknown
        """
        attempt = 1
        while True:
            try:
                return self._acknowledge_once(player_id)
            except IntegrityError:
                # A push attempt recorded the death between our read and insert
                if attempt >= _ACKNOWLEDGE_ATTEMPTS:
                    raise
                attempt += 1
                logger.info(f"Concurrent death record for {player_id}, re-reading")

    def _acknowledge_once(self, player_id: str) -> PushResult:
        with self._database.transaction() as session:
            row = self._players.lock(session, player_id)
            if row is None:
                raise PlayerNotFoundError()

            if row.height > 0:
                _, created = self._deaths.record_once(
                    session,
                    player_id,
                    row.last_played_date,
                    row.height,
                    row.streak,
                    ACKNOWLEDGED_DAYS_MISSED,
                )
                self._players.reset(row)
                logger.info(
                    f"Player {player_id} rolled back to the bottom "
                    f"({'new' if created else 'pending'} death, {row.death_count} total)"
                )

            return PushResult(height=row.height, streak=row.streak)
