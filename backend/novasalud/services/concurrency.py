# Overview: Transaction scope and row locking shared by every stock-changing write.

from __future__ import annotations

import threading
import weakref
from contextlib import contextmanager

from sqlalchemy import event, text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.pool import StaticPool

from ..errors import StoreError
from ..extensions import db

# Single writer per process for engines with a connection per thread.
_writer_lock = threading.Lock()

# Engines whose one connection is shared between threads, and the lock that
# hands that connection to a single thread at a time.
_shared_connection_locks: weakref.WeakKeyDictionary = weakref.WeakKeyDictionary()


def guard_shared_connection(engine) -> None:
    """
    Serialize every use of a connection shared between threads.

    In-memory SQLite runs on one StaticPool connection. Returning it to the
    pool rolls it back, which would discard a transaction another thread
    still has open, so a thread holds the connection from checkout to
    checkin. Ledger transactions on the engine take the same lock.
    """
    if not isinstance(engine.pool, StaticPool) or engine in _shared_connection_locks:
        return

    lock = threading.RLock()
    _shared_connection_locks[engine] = lock

    @event.listens_for(engine, "checkout")
    def _acquire(dbapi_connection, connection_record, connection_proxy):
        lock.acquire()

    # The pool resets the connection before this fires
    @event.listens_for(engine, "checkin")
    def _release(dbapi_connection, connection_record):
        lock.release()


def lock_for_update(query):
    """
    Apply row-level locking for critical operations.

    NOTE: SQLite ignores SELECT ... FOR UPDATE; BEGIN IMMEDIATE covers it there.
    """
    return query.with_for_update()


@contextmanager
def ledger_transaction():
    """
    Run a read-check-write sequence as one unit.

    Commits when the block exits normally. On any exception the session is
    rolled back before the exception propagates, so no partial write is ever
    visible. Store failures are re-raised as StoreError carrying the driver
    message; no retries are attempted.
    """
    engine = db.engine
    with _shared_connection_locks.get(engine, _writer_lock):
        try:
            if engine.dialect.name == "sqlite":
                db.session.execute(text("BEGIN IMMEDIATE"))
            yield db.session
            db.session.commit()
        except SQLAlchemyError as exc:
            db.session.rollback()
            raise StoreError(str(exc)) from exc
        except Exception:
            db.session.rollback()
            raise
