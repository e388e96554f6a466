"""Streamlit session binding for the arena store.

Each browser session owns one ``ArenaStore`` kept in ``st.session_state``.
Script reruns read the latest snapshot from it; rendering lives elsewhere.
"""

from __future__ import annotations

import streamlit as st

from src.config.logging_config import configure_logging
from src.config.settings import Settings, get_settings
from src.realtime.store import ArenaStore, StoreNotInitializedError

_STORE_KEY = "_arena_store"


def init_arena_store(settings: Settings | None = None) -> ArenaStore:
    """Create and open this session's store on first call; reuse it afterwards."""
    store = st.session_state.get(_STORE_KEY)
    if store is None or not store.is_open:
        settings = settings or get_settings()
        configure_logging(settings)
        store = ArenaStore.for_arena(settings)
        store.open()
        st.session_state[_STORE_KEY] = store
    return store


def get_arena_store() -> ArenaStore:
    """Return this session's store.

    Raises:
        StoreNotInitializedError: If ``init_arena_store`` has not run yet
            in this session, or the store was torn down.
    """
    store = st.session_state.get(_STORE_KEY)
    if store is None or not store.is_open:
        raise StoreNotInitializedError(
            "get_arena_store() called before init_arena_store()"
        )
    return store


def teardown_arena_store() -> None:
    """Close and forget this session's store. No-op when there is none."""
    store = st.session_state.pop(_STORE_KEY, None)
    if store is not None:
        store.close()
