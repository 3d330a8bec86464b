from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import List

from ...domain import TaskRecord
from ..supabase import SupabaseGateway

_TASK_COLUMNS = "title, scheduled_time, duration_minutes, is_completed"


@dataclass(slots=True)
class TaskRepository:
    gateway: SupabaseGateway
    table_name: str

    def fetch_window(self, user_id: str, start: datetime, end: datetime) -> List[TaskRecord]:
        """Tasks whose ``scheduled_time`` falls in ``[start, end)``, oldest first."""

        def query():
            return (
                self.gateway.table(self.table_name)
                .select(_TASK_COLUMNS)
                .eq("user_id", user_id)
                .gte("scheduled_time", start.isoformat())
                .lt("scheduled_time", end.isoformat())
                .order("scheduled_time", desc=False)
                .execute()
            )

        response = self.gateway.run("schedule from database", query)
        records = response.data or []
        return [TaskRecord.from_record(record) for record in records]
