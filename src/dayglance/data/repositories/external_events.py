from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import List

from ...domain import ExternalEventRecord
from ..supabase import SupabaseGateway


@dataclass(slots=True)
class ExternalEventRepository:
    gateway: SupabaseGateway
    table_name: str
    connections_table: str

    def _select_clause(self) -> str:
        return f"title, start_time, end_time, all_day, location, connection:{self.connections_table}!inner(user_id)"

    def fetch_overlapping(self, user_id: str, start: datetime, end: datetime) -> List[ExternalEventRecord]:
        """Synced events overlapping ``[start, end)``, joined through the user's calendar connections."""

        def query():
            return (
                self.gateway.table(self.table_name)
                .select(self._select_clause())
                .eq("connection.user_id", user_id)
                .lt("start_time", end.isoformat())
                .gt("end_time", start.isoformat())
                .order("start_time", desc=False)
                .execute()
            )

        response = self.gateway.run("external events from database", query)
        records = response.data or []
        events: list[ExternalEventRecord] = []
        for record in records:
            record.pop("connection", None)
            events.append(ExternalEventRecord.from_record(record))
        return events
