#!/usr/bin/env python3
"""
Seed Turnover Script

Sets annual turnover rate and average tenure on companies matched by
exact name. Turnover feeds the aggregate score adjustment.

Usage:
    python -m scripts.seed_turnover
"""

import os
import sys
from typing import Dict, Tuple

# Add project root to path
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from sqlalchemy.orm import Session

from app.core.database import create_tables, get_session_factory
from app.core.models import Company

# company name -> (turnover %, average tenure in years)
TURNOVER_DATA: Dict[str, Tuple[float, float]] = {
    # Technology
    "Google NYC": (9.5, 4.0),
    "Microsoft": (11.2, 3.9),
    "Apple": (13.8, 3.6),
    "Amazon": (22.5, 2.8),
    "Meta NYC": (18.3, 3.2),
    "Tesla": (28.5, 2.2),
    "Netflix": (12.1, 3.8),
    "Nvidia": (8.9, 4.1),
    "Intel": (14.2, 3.6),
    "Adobe": (10.5, 3.95),
    "Salesforce": (15.3, 3.5),
    "Oracle": (16.8, 3.3),
    "IBM": (17.5, 3.3),
    "Cisco": (12.9, 3.7),
    "Stripe": (12.3, 3.77),
    "Airbnb": (13.1, 3.69),
    "Uber": (19.5, 3.05),
    "Datadog": (13.2, 3.68),
    "Figma": (9.8, 4.02),
    "Canva": (11.2, 3.88),
    "Spotify": (13.0, 3.7),
    "MongoDB": (12.6, 3.74),
    "Databricks": (11.4, 3.86),
    "Rackspace": (24.1, 2.7),
    # Finance
    "USAA": (9.1, 4.3),
    "Goldman Sachs": (18.2, 3.18),
    "Morgan Stanley": (16.1, 3.39),
    "Citadel": (21.7, 2.9),
    # Healthcare / biotech
    "Moderna": (15.6, 3.44),
    "Amgen": (10.5, 3.95),
    "Illumina": (13.7, 3.63),
    "Regeneron": (10.1, 3.99),
    "Vertex Pharmaceuticals": (11.5, 3.85),
    "Genentech": (10.8, 3.92),
    "Tempus AI": (16.4, 3.1),
}


def seed_turnover(db: Session, data: Dict[str, Tuple[float, float]] = TURNOVER_DATA) -> Dict[str, int]:
    """
    Returns:
        {"updated": n, "not_found": m}
    """
    updated = 0
    not_found = 0
    for name, (turnover, tenure) in data.items():
        company = db.query(Company).filter(Company.name == name).first()
        if company is None:
            print(f"  Company not found: {name}")
            not_found += 1
            continue
        company.turnover_rate = turnover
        company.avg_tenure = tenure
        print(f"  Updated {name}: {turnover}% turnover, {tenure} years avg tenure")
        updated += 1

    db.commit()
    return {"updated": updated, "not_found": not_found}


def main():
    create_tables()
    db = get_session_factory()()
    try:
        print("Starting turnover rate seeding...")
        result = seed_turnover(db)
        print(f"\nSeeding complete: {result['updated']} updated, {result['not_found']} not found")
    finally:
        db.close()


if __name__ == "__main__":
    main()
