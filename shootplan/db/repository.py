"""
Repository layer for database operations.

Stores generated schedules keyed by project and scene-list fingerprint so an
unchanged storyboard is not rescheduled.
"""

from datetime import datetime, timezone
from typing import Any

import structlog
from pydantic import ValidationError
from supabase import Client

from shootplan.db.client import get_supabase_client
from shootplan.scheduling.models import Schedule

logger = structlog.get_logger()


class BaseRepository:
    """Base repository with common operations."""

    table_name: str = ""

    def __init__(self, client: Client | None = None):
        self.client = client or get_supabase_client()

    def _table(self):
        return self.client.table(self.table_name)


class ScheduleRepository(BaseRepository):
    """Repository for schedules table (one row per project)."""

    table_name = "schedules"

    def get(self, project_id: str) -> dict[str, Any] | None:
        """Get the stored schedule row of a project."""
        result = self._table().select("*").eq("project_id", project_id).execute()
        return result.data[0] if result.data else None

    def get_cached(self, project_id: str, fingerprint: str) -> Schedule | None:
        """
        Return the stored schedule when it was built from the same scenes.

        A row with a different fingerprint or an unreadable payload is a miss.
        """
        row = self.get(project_id)
        if not row or row.get("fingerprint") != fingerprint:
            return None
        try:
            return Schedule.model_validate(row.get("payload") or {})
        except ValidationError as e:
            logger.warning("Stored schedule unreadable", project_id=project_id, error=str(e))
            return None

    def save(self, project_id: str, schedule: Schedule) -> dict[str, Any]:
        """Replace the project's stored schedule."""
        data = {
            "project_id": project_id,
            "fingerprint": schedule.fingerprint,
            "payload": schedule.model_dump(mode="json"),
            "updated_at": datetime.now(timezone.utc).isoformat(),
        }
        result = self._table().upsert(data, on_conflict="project_id").execute()
        logger.info(
            "Saved schedule",
            project_id=project_id,
            fingerprint=schedule.fingerprint[:12],
            total_days=schedule.total_days,
        )
        return result.data[0] if result.data else data

    def delete(self, project_id: str) -> None:
        """Drop the project's stored schedule."""
        self._table().delete().eq("project_id", project_id).execute()
        logger.info("Deleted schedule", project_id=project_id)
