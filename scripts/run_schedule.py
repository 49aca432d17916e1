#!/usr/bin/env python3
"""Generate a shooting schedule from a scene file and save the CSV exports.

Usage:
    python scripts/run_schedule.py scenes.json
    python scripts/run_schedule.py scenes.json --project proj_001 --start-date 2026-03-02

The scene file is either a JSON array of scenes or an object with a
"scenes" array. SHOOTPLAN_URL and SHOOTPLAN_TOKEN are read from .env.
"""

import argparse
import json
import os
import sys
from pathlib import Path

import requests
from dotenv import load_dotenv

project_root = Path(__file__).parent.parent
load_dotenv(project_root / ".env")


def load_scenes(path: Path) -> list:
    with open(path, encoding="utf-8") as f:
        data = json.load(f)
    if isinstance(data, dict):
        data = data.get("scenes", [])
    return data


def main():
    parser = argparse.ArgumentParser(description="Generate a shooting schedule")
    parser.add_argument("scene_file", type=Path)
    parser.add_argument("--project", default="")
    parser.add_argument("--start-date", default=None)
    parser.add_argument("--output-dir", type=Path, default=Path("."))
    args = parser.parse_args()

    base_url = os.environ.get("SHOOTPLAN_URL", "http://localhost:8000").rstrip("/")
    headers = {}
    if os.environ.get("SHOOTPLAN_TOKEN"):
        headers["Authorization"] = f"Bearer {os.environ['SHOOTPLAN_TOKEN']}"

    scenes = load_scenes(args.scene_file)
    body = {"project_id": args.project, "scenes": scenes}
    if args.start_date:
        body["start_date"] = args.start_date

    print(f"Scheduling {len(scenes)} scenes from {args.scene_file}")
    print("-" * 50)

    response = requests.post(f"{base_url}/api/schedules/generate", json=body, headers=headers)
    if response.status_code != 200:
        print(f"[ERROR] {response.status_code}: {response.text}")
        sys.exit(1)

    schedule = response.json()
    if schedule.get("message"):
        print(f"[STATUS] {schedule['message']}")

    for day in schedule["days"]:
        scene_numbers = ", ".join(str(scene["scene_number"]) for scene in day["scenes"])
        label = day.get("date") or f"Day {day['day_index']}"
        print(f"[{label}] {day['location_group_name']}: scenes {scene_numbers} ({day['total_shooting_minutes']}분)")

    for warning in schedule.get("warnings", []):
        print(f"[WARN] {warning}")

    score = schedule["optimization_score"]
    print(f"\n[COMPLETE] {schedule['total_days']} days, efficiency {score['efficiency_percent']}%")

    args.output_dir.mkdir(parents=True, exist_ok=True)
    exports = [
        ("schedule.csv", "/api/schedules/export/schedule.csv", body),
        ("breakdown.csv", "/api/schedules/export/breakdown.csv", {"scenes": scenes}),
    ]
    for filename, path, payload in exports:
        response = requests.post(f"{base_url}{path}", json=payload, headers=headers)
        response.raise_for_status()
        output_file = args.output_dir / filename
        output_file.write_text(response.text, encoding="utf-8")
        print(f"Saved {output_file}")


if __name__ == "__main__":
    main()
