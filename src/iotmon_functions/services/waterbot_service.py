"""Service for WaterBot status snapshots."""

from __future__ import annotations

from typing import List

from ..models import WaterBotState
from ..stores import WaterBotStatusStore


class WaterBotStatusService:
    """Service for WaterBot status snapshots."""

    def __init__(self, store: WaterBotStatusStore) -> None:
        self.store = store

    def get_latest_states(self) -> List[WaterBotState]:
        """Returns every row of the status table.

        The table is expected to hold one row per bot; rows are returned as
        stored, without deduplication or ordering.
        """
        return self.store.list_all()
