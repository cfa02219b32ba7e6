"""
Session Module - Persistence and lifecycle of the one local session.

A session lives across page loads (or process runs) through a single
persisted record:
- Reconciled once per load against the current day
- Mutated only through reducer actions dispatched to the store
- Written back after every dispatch once loaded

The only persistence is that one record per device.
"""

from .storage import Storage, MemoryStorage, FileStorage
from .record import SessionRecord, dump_session, load_record
from .reconcile import Reconciliation, ReconcileOutcome, reconcile
from .store import SessionStore

__all__ = [
    "Storage",
    "MemoryStorage",
    "FileStorage",
    "SessionRecord",
    "dump_session",
    "load_record",
    "Reconciliation",
    "ReconcileOutcome",
    "reconcile",
    "SessionStore",
]
