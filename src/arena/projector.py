"""
Poker Arena Sync - Active Table Projector

Flattens the active table out of the multi-table registry so single-table
consumers never deal with multiplexing. Called only from reducer
transitions; consumers read ``SessionState.active_table``.
"""

from typing import Mapping

from src.arena.state import EMPTY_VIEW, ActiveTableView, TableSnapshot


def derive_active_table(
    tables: Mapping[str, TableSnapshot],
    active_table_id: str | None,
) -> ActiveTableView:
    """Project the active table into an ``ActiveTableView``.

    A missing or unknown ``active_table_id`` is not an error: the empty
    view is returned.
    """
    table = tables.get(active_table_id) if active_table_id is not None else None
    if table is None:
        return EMPTY_VIEW
    return ActiveTableView(
        seats=table.seats,
        hand_number=table.hand_number,
        phase=table.phase,
        community_cards=table.community_cards,
        active_player_id=table.active_player_id,
        pots=table.pots,
        current_bet=table.current_bet,
        last_result=table.last_result,
    )
