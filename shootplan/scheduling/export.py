"""
CSV exports of a schedule and a breakdown.
"""

import csv
import io

from shootplan.scheduling.models import Breakdown, Schedule

SCHEDULE_HEADER = ["Day", "Date", "Location", "Scenes", "Estimated Duration", "Crew", "Equipment"]
BREAKDOWN_HEADER = ["Category", "Item", "Scenes", "Count"]

# Breakdown attribute -> category label in the CSV
BREAKDOWN_CATEGORIES = [
    ("locations", "Location"),
    ("actors", "Actor"),
    ("time_slots", "TimeSlot"),
    ("equipment", "Equipment"),
    ("crew", "Crew"),
    ("props", "Props"),
    ("costumes", "Costume"),
    ("cameras", "Camera"),
]


def _write(header: list[str], rows: list[list[str]]) -> str:
    buffer = io.StringIO()
    writer = csv.writer(buffer)
    writer.writerow(header)
    writer.writerows(rows)
    return buffer.getvalue()


def schedule_csv(schedule: Schedule) -> str:
    """One row per shooting day."""
    rows = []
    for day in schedule.days:
        rows.append([
            str(day.day_index),
            day.date or f"Day {day.day_index}",
            day.location_group_name or day.location_group_id,
            ", ".join(str(scene.scene_number) for scene in day.scenes),
            f"{day.total_minutes}분",
            ", ".join(day.required_crew),
            ", ".join(day.required_equipment),
        ])
    return _write(SCHEDULE_HEADER, rows)


def breakdown_csv(breakdown: Breakdown) -> str:
    """One row per (category, item) pair."""
    rows = []
    for attribute, label in BREAKDOWN_CATEGORIES:
        for item, refs in getattr(breakdown, attribute).items():
            rows.append([
                label,
                item,
                ", ".join(str(ref.scene_number) for ref in refs),
                str(len(refs)),
            ])
    return _write(BREAKDOWN_HEADER, rows)
