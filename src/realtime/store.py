"""
Poker Arena Sync - Arena Store

The single source of truth handed to every reader: the current
``SessionState``, the ``dispatch`` that advances it, and the transport
that feeds it. There is no module-level instance; a store is constructed
explicitly and made reachable through ``store_scope``.
"""

from __future__ import annotations

import logging
import threading
from contextlib import contextmanager
from contextvars import ContextVar
from typing import Callable, Iterator

from src.arena.events import EventPayload, set_active_table
from src.arena.reducer import reduce
from src.arena.state import SessionState
from src.config.settings import Settings
from src.realtime.transport import ArenaTransport

logger = logging.getLogger(__name__)

Listener = Callable[[SessionState], None]


class StoreNotInitializedError(RuntimeError):
    """Raised when the store is read outside its lifecycle scope."""


class ArenaStore:
    """Holds the session snapshot and serializes transitions.

    Each ``dispatch`` runs the reducer to completion and swaps the state
    reference before notifying listeners, so readers on any thread see a
    whole snapshot, never a partial one.
    """

    def __init__(
        self,
        transport: ArenaTransport | None = None,
        initial: SessionState | None = None,
    ) -> None:
        self._state = initial or SessionState()
        self._transport = transport
        self._listeners: list[Listener] = []
        self._lock = threading.RLock()
        self._open = False

    @classmethod
    def for_arena(cls, settings: Settings | None = None) -> "ArenaStore":
        """Build a store wired to a Socket.IO transport (not yet connected)."""
        store = cls()
        store._transport = ArenaTransport(store.dispatch, settings)
        return store

    # -- Accessors -------------------------------------------------------

    @property
    def state(self) -> SessionState:
        return self._state

    @property
    def transport(self) -> ArenaTransport | None:
        return self._transport

    @property
    def is_open(self) -> bool:
        return self._open

    # -- Transitions -----------------------------------------------------

    def dispatch(self, payload: EventPayload) -> SessionState:
        """Apply one event and notify listeners if the state changed."""
        with self._lock:
            previous = self._state
            self._state = reduce(previous, payload)
            if self._state is not previous:
                self._notify(self._state)
            return self._state

    def select_table(self, table_id: str) -> SessionState:
        """Make ``table_id`` the active table."""
        return self.dispatch(set_active_table(table_id))

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """Register a listener called with each new state.

        Returns:
            A callable that removes the listener.
        """
        with self._lock:
            self._listeners.append(listener)

        def unsubscribe() -> None:
            with self._lock:
                if listener in self._listeners:
                    self._listeners.remove(listener)

        return unsubscribe

    def _notify(self, state: SessionState) -> None:
        for listener in list(self._listeners):
            try:
                listener(state)
            except Exception:
                logger.exception("Store listener %r failed", listener)

    # -- Lifecycle -------------------------------------------------------

    def open(self) -> "ArenaStore":
        """Start the transport (if any). Idempotent."""
        if self._open:
            return self
        if self._transport is not None:
            self._transport.connect()
        self._open = True
        logger.info("Arena store opened")
        return self

    def close(self) -> None:
        """Shut the transport down. The last state stays readable."""
        if not self._open:
            return
        self._open = False
        if self._transport is not None:
            self._transport.shutdown()
        with self._lock:
            self._listeners.clear()
        logger.info("Arena store closed")

    def __enter__(self) -> "ArenaStore":
        return self.open()

    def __exit__(self, *exc_info) -> None:
        self.close()


# -- Scoped access ---------------------------------------------------------

_current_store: ContextVar[ArenaStore | None] = ContextVar("arena_store", default=None)


@contextmanager
def store_scope(store: ArenaStore) -> Iterator[ArenaStore]:
    """Make ``store`` reachable via ``use_store`` for the enclosed block."""
    token = _current_store.set(store)
    try:
        yield store
    finally:
        _current_store.reset(token)


def use_store() -> ArenaStore:
    """Return the store bound by the enclosing ``store_scope``.

    Raises:
        StoreNotInitializedError: When called outside any scope.
    """
    store = _current_store.get()
    if store is None:
        raise StoreNotInitializedError("use_store() must be called within store_scope()")
    return store
