"""
Database layer for the schedule service.

Uses Supabase (PostgreSQL) as an optional cache of generated schedules.
"""

from shootplan.db.client import get_supabase_client
from shootplan.db.repository import ScheduleRepository

__all__ = [
    "get_supabase_client",
    "ScheduleRepository",
]
