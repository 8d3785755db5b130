"""
Doko Tally - Archive Manager

CRUD operations for the `archived_sessions` table. Finished sessions are
archived whole; resuming one rebuilds its Bock queue from the stored rounds.
"""

import logging
import time

from httpx import RemoteProtocolError
from supabase import Client

from doko.database.client import get_supabase_client
from doko.database.models import ArchivedSession, StoredPlayer, StoredRound
from doko.engine.base import Configuration
from doko.engine.rules import get_ruleset
from doko.engine.session import Session

logger = logging.getLogger(__name__)


def _db_retry(fn, *args, retries=2, on_retry=None, **kwargs):
    """
    Call *fn* with simple retry on transient connection errors.

    Before each retry the cached client is dropped and *on_retry* (if given)
    is called, so a caller holding a table handle can swap in a fresh one.
    """
    for attempt in range(retries + 1):
        try:
            return fn(*args, **kwargs)
        except (RemoteProtocolError, ConnectionError, OSError):
            if attempt == retries:
                raise
            logger.warning("Archive request failed, retrying (%d/%d)", attempt + 1, retries)
            get_supabase_client.cache_clear()
            if on_retry is not None:
                on_retry()
            time.sleep(0.3)


def to_session(archive: ArchivedSession) -> Session:
    """Rebuild a live session from an archive entry."""
    return Session.restore(
        participants=[player.to_participant() for player in archive.players],
        config=Configuration(value_pair=archive.value_pair, solo_value=archive.solo_value),
        ruleset=get_ruleset(archive.ruleset),
        rounds=[stored.to_played() for stored in archive.rounds],
    )


class ArchiveManager:
    """
    Manages archived sessions in Supabase.

    Without an explicit client the manager uses the shared cached one and
    reconnects through it when a request hits a dropped connection. An
    injected client is kept as is.
    """

    TABLE = "archived_sessions"

    def __init__(self, client: Client | None = None) -> None:
        self._owns_client = client is None
        self.client = client if client is not None else get_supabase_client()
        self.table = self.client.table(self.TABLE)

    def _reconnect(self) -> None:
        if not self._owns_client:
            return
        self.client = get_supabase_client()
        self.table = self.client.table(self.TABLE)
        logger.info("Reconnected archive client")

    def _execute(self, build):
        """Run the query *build* makes from the table, rebuilt on every attempt."""
        return _db_retry(lambda: build(self.table).execute(), on_retry=self._reconnect)

    def save(self, session: Session) -> ArchivedSession:
        """
        Archive a finished session.

        Raises:
            ValueError: If the session has no participants or no rounds
        """
        if not session.participants or not session.rounds:
            raise ValueError("A session needs at least one player and one round to be saved.")

        data = self._execute(
            lambda table: table
            .insert({
                "players": [
                    StoredPlayer(id=p.id, name=p.name).model_dump(mode="json")
                    for p in session.participants
                ],
                "rounds": [
                    StoredRound.from_played(played).model_dump(mode="json")
                    for played in session.rounds
                ],
                "value_pair": session.config.value_pair,
                "solo_value": session.config.solo_value,
                "ruleset": session.ruleset.name,
            })
        )
        archive = ArchivedSession.model_validate(data.data[0])
        logger.info("Archived session %s with %d rounds", archive.id, len(archive.rounds))
        return archive

    def list_all(self) -> list[ArchivedSession]:
        """All archived sessions, newest first."""
        data = self._execute(
            lambda table: table
            .select("*")
            .order("created_at", desc=True)
        )
        return [ArchivedSession.model_validate(row) for row in data.data]

    def get(self, archive_id: str) -> ArchivedSession | None:
        """Look up an archived session by its UUID."""
        data = self._execute(
            lambda table: table
            .select("*")
            .eq("id", archive_id)
        )
        if data.data:
            return ArchivedSession.model_validate(data.data[0])
        return None

    def delete(self, archive_id: str) -> None:
        """Permanently delete an archived session."""
        self._execute(lambda table: table.delete().eq("id", archive_id))
        logger.info("Deleted archived session %s", archive_id)

    def resume(self, archive_id: str) -> Session | None:
        """
        Continue an archived session.

        The entry is removed from the archive since the session is live
        again; its Bock queue is recomputed from the stored rounds.
        """
        archive = self.get(archive_id)
        if archive is None:
            return None
        session = to_session(archive)
        self.delete(archive_id)
        return session
