"""
Doko Tally Database Layer.

Supabase integration for archiving and resuming sessions.
"""

from doko.database.archive import ArchiveManager, to_session
from doko.database.client import get_supabase_client
from doko.database.models import ArchivedSession, StoredPlayer, StoredRound

__all__ = [
    "get_supabase_client",
    "ArchivedSession",
    "ArchiveManager",
    "StoredPlayer",
    "StoredRound",
    "to_session",
]
