#!/usr/bin/env python3
"""
Generate Noko time entry snapshots for local runs of the report scripts.

Writes <data_dir>/<Project>/logs/noko-<YYYY-MM-DD>.json for each project,
with entries for the last N weekdays.

Usage:
    uv run python tests/fixtures/generate_entries.py --data-dir data --days 30
"""

import argparse
import json
import random
from datetime import date, timedelta
from pathlib import Path

from faker import Faker

fake = Faker()

# Projects - [LSM] marker means client work for the department
CLIENT_PROJECTS = [
    {"id": 701450, "name": "[LSM] CATIC Support Retainer"},
    {"id": 701708, "name": "[LSM] SDSU Maintenance"},
    {"id": 701900, "name": "[LSM] GovHub Platform"},
]
DEPARTMENT_PROJECT = {"id": 700100, "name": "LSM General"}
INTERNAL_PROJECT = {"id": 700001, "name": "Internal"}

TAGS = ["internal", "sales", "professional", "consulting", "design", "bugfix", "meeting"]

WORK_DESCRIPTIONS = [
    "Fixed login redirect bug",
    "Reviewed pull requests",
    "Drupal 11 upgrade planning",
    "Playwright test coverage for checkout",
    "Client call about release schedule",
    "Storybook component cleanup",
    "Security updates",
    "Auth0 migration spike",
    "Deployment and smoke testing",
]


def make_users(count: int) -> list[dict]:
    users = []
    for user_id in range(8370, 8370 + count):
        first, last = fake.first_name(), fake.last_name()
        users.append({
            "id": user_id,
            "first_name": first,
            "last_name": last,
            "email": f"{first}.{last}@example.com".lower(),
        })
    return users


def generate_entries(days: int, users: list[dict], start_id: int = 1) -> list[dict]:
    """Generate entries for every weekday in the last N days."""
    entries = []
    entry_id = start_id
    today = date.today()

    for offset in range(days, -1, -1):
        day = today - timedelta(days=offset)
        if day.weekday() >= 5:
            continue
        for user in users:
            for _ in range(random.randint(1, 4)):
                project = random.choices(
                    CLIENT_PROJECTS + [DEPARTMENT_PROJECT, INTERNAL_PROJECT],
                    weights=[3, 3, 3, 2, 1],
                    k=1,
                )[0]
                tags = random.sample(TAGS, k=random.choice([0, 0, 1, 2]))
                entries.append({
                    "id": entry_id,
                    "date": day.isoformat(),
                    "minutes": random.choice([15, 30, 45, 60, 90, 120, 180]),
                    "description": random.choice(WORK_DESCRIPTIONS + [fake.sentence(nb_words=5)]),
                    "user": user,
                    "project": project,
                    "tags": [{"name": tag} for tag in tags],
                })
                entry_id += 1
    return entries


def write_snapshot(data_dir: Path, project: str, entries: list[dict]) -> Path:
    logs_dir = data_dir / project / "logs"
    logs_dir.mkdir(parents=True, exist_ok=True)
    filepath = logs_dir / f"noko-{date.today().isoformat()}.json"
    filepath.write_text(json.dumps(entries, indent=2), encoding="utf-8")
    return filepath


def main():
    parser = argparse.ArgumentParser(description="Generate sample Noko snapshots")
    parser.add_argument("--data-dir", type=Path, default=Path("data"))
    parser.add_argument("--days", type=int, default=30)
    parser.add_argument("--users", type=int, default=4)
    parser.add_argument("--projects", default="CATIC,SDSU,GovHub")
    args = parser.parse_args()

    users = make_users(args.users)
    next_id = 1
    for project in [p.strip() for p in args.projects.split(",") if p.strip()]:
        entries = generate_entries(args.days, users, start_id=next_id)
        next_id += len(entries)
        path = write_snapshot(args.data_dir, project, entries)
        print(f"Wrote {len(entries)} entries to {path}")


if __name__ == "__main__":
    main()
