#!/usr/bin/env python3
"""
Seed Salary Data Script

Adds salary records for 3-5 random roles per company, one row per level,
from fixed pay templates with some random variance.

Usage:
    python -m scripts.seed_salary_data
    python -m scripts.seed_salary_data --limit 50 --seed 7
"""

import argparse
import os
import random
import sys
from datetime import date
from typing import Dict, Optional

# Add project root to path
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from sqlalchemy.orm import Session

from app.core.database import create_tables, get_session_factory
from app.core.models import Company, SalaryData

DATA_SOURCE = "Internal Survey"
LOCATION = "United States"
DEFAULT_COMPANY_LIMIT = 200

# role -> level -> (base salary, bonus % of base, equity value)
SALARY_TEMPLATES = {
    "Software Engineer": {
        "Entry": (120000, 10, 50000),
        "Mid": (180000, 15, 100000),
        "Senior": (250000, 20, 200000),
        "Lead": (320000, 25, 300000),
    },
    "Product Manager": {
        "Entry": (110000, 15, 40000),
        "Mid": (170000, 20, 80000),
        "Senior": (240000, 25, 150000),
        "Director": (320000, 30, 250000),
    },
    "Data Scientist": {
        "Entry": (115000, 12, 45000),
        "Mid": (175000, 18, 90000),
        "Senior": (245000, 22, 180000),
        "Lead": (310000, 28, 280000),
    },
    "UX/UI Designer": {
        "Entry": (80000, 8, 30000),
        "Mid": (130000, 12, 60000),
        "Senior": (180000, 15, 100000),
        "Lead": (240000, 20, 150000),
    },
    "DevOps Engineer": {
        "Entry": (125000, 11, 55000),
        "Mid": (190000, 16, 110000),
        "Senior": (270000, 21, 220000),
        "Lead": (340000, 26, 320000),
    },
    "Sales Executive": {
        "Entry": (60000, 50, 20000),
        "Mid": (100000, 60, 50000),
        "Senior": (150000, 75, 100000),
        "Manager": (200000, 100, 150000),
    },
    "Marketing Manager": {
        "Entry": (70000, 10, 25000),
        "Mid": (120000, 15, 50000),
        "Senior": (170000, 20, 100000),
        "Director": (240000, 25, 150000),
    },
    "Finance Analyst": {
        "Entry": (75000, 15, 20000),
        "Mid": (130000, 25, 50000),
        "Senior": (190000, 35, 100000),
        "Manager": (260000, 50, 150000),
    },
}

YEARS_BY_LEVEL = {"Entry": 0, "Mid": 3, "Senior": 7}
DEFAULT_YEARS = 10


def years_of_experience(level: str) -> int:
    return YEARS_BY_LEVEL.get(level, DEFAULT_YEARS)


def build_salary_row(
    company_id: int, role: str, level: str, rng: random.Random, today: date
) -> SalaryData:
    base, bonus_pct, equity = SALARY_TEMPLATES[role][level]
    base_salary = base + (rng.random() * 20000 - 10000)
    bonus = base_salary * bonus_pct / 100
    equity_value = equity + (rng.random() * 50000 - 25000)
    return SalaryData(
        company_id=company_id,
        job_title=role,
        level=level,
        base_salary=round(base_salary),
        bonus=round(bonus),
        stock_equity=round(equity_value),
        total_compensation=round(base_salary + bonus + equity_value),
        years_experience=years_of_experience(level),
        location=LOCATION,
        data_source=DATA_SOURCE,
        reported_date=today,
    )


def seed_salary_data(
    db: Session,
    company_limit: int = DEFAULT_COMPANY_LIMIT,
    rng: Optional[random.Random] = None,
) -> int:
    """Returns the number of salary rows written."""
    rng = rng or random.Random()
    today = date.today()
    company_ids = [
        row[0] for row in db.query(Company.id).order_by(Company.id).limit(company_limit).all()
    ]
    print(f"Found {len(company_ids)} companies. Seeding salary data...")

    roles = list(SALARY_TEMPLATES)
    total = 0
    for company_id in company_ids:
        for role in rng.sample(roles, rng.randint(3, 5)):
            for level in SALARY_TEMPLATES[role]:
                db.add(build_salary_row(company_id, role, level, rng, today))
                total += 1
        db.flush()

    db.commit()
    return total


def main():
    parser = argparse.ArgumentParser(description="Seed salary data for existing companies")
    parser.add_argument("--limit", type=int, default=DEFAULT_COMPANY_LIMIT, help="Max companies")
    parser.add_argument("--seed", type=int, default=None, help="Random seed for repeatable data")
    args = parser.parse_args()

    create_tables()
    db = get_session_factory()()
    try:
        total = seed_salary_data(db, company_limit=args.limit, rng=random.Random(args.seed))
        print(f"\nSeeded {total} salary data entries")
    finally:
        db.close()


if __name__ == "__main__":
    main()
