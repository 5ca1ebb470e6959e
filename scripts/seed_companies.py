#!/usr/bin/env python3
"""
Seed Companies Script

Populates the companies table with a starter set of employers, each with
culture scores from three review sources, six months of metric trends and
an occasional layoff event.

Usage:
    python -m scripts.seed_companies
    python -m scripts.seed_companies --seed 42
"""

import argparse
import os
import random
import sys
from datetime import date, timedelta
from typing import Dict, List, Optional

# Add project root to path
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from sqlalchemy.orm import Session

from app.core.database import create_tables, get_session_factory
from app.core.models import Company, CultureScore, CultureTrend, LayoffEvent

SOURCES = ("glassdoor", "indeed", "comparably")
TREND_METRICS = ("overall_rating", "work_life_balance", "compensation_benefits")
TREND_MONTHS = 6
LAYOFF_PROBABILITY = 0.3

# name, domain, industry, size range, city, state, country
COMPANIES = [
    ("Rackspace", "rackspace.com", "Cloud Computing", "1001-5000", "San Antonio", "TX", "USA"),
    ("USAA", "usaa.com", "Financial Services", "5000+", "San Antonio", "TX", "USA"),
    ("Google NYC", "google.com", "Technology", "5000+", "New York", "NY", "USA"),
    ("Meta NYC", "meta.com", "Technology", "5000+", "New York", "NY", "USA"),
    ("Goldman Sachs", "goldmansachs.com", "Finance", "5000+", "New York", "NY", "USA"),
    ("Morgan Stanley", "morganstanley.com", "Finance", "5000+", "New York", "NY", "USA"),
    ("Citadel", "citadel.com", "Finance", "1001-5000", "New York", "NY", "USA"),
    ("Spotify", "spotify.com", "Technology", "1001-5000", "New York", "NY", "USA"),
    ("Apple", "apple.com", "Technology", "5000+", "Cupertino", "CA", "USA"),
    ("Microsoft", "microsoft.com", "Technology", "5000+", "Redmond", "WA", "USA"),
    ("Amazon", "amazon.com", "Technology", "5000+", "Seattle", "WA", "USA"),
    ("Tesla", "tesla.com", "Automotive", "5000+", "Palo Alto", "CA", "USA"),
    ("Netflix", "netflix.com", "Technology", "1001-5000", "Los Gatos", "CA", "USA"),
    ("Adobe", "adobe.com", "Technology", "1001-5000", "San Jose", "CA", "USA"),
    ("Intel", "intel.com", "Technology", "5000+", "Santa Clara", "CA", "USA"),
    ("Nvidia", "nvidia.com", "Technology", "1001-5000", "Santa Clara", "CA", "USA"),
    ("Salesforce", "salesforce.com", "Technology", "1001-5000", "San Francisco", "CA", "USA"),
    ("Uber", "uber.com", "Technology", "1001-5000", "San Francisco", "CA", "USA"),
    ("Airbnb", "airbnb.com", "Technology", "501-1000", "San Francisco", "CA", "USA"),
    ("Stripe", "stripe.com", "Financial Technology", "501-1000", "San Francisco", "CA", "USA"),
    ("Figma", "figma.com", "Technology", "201-500", "San Francisco", "CA", "USA"),
    ("Canva", "canva.com", "Technology", "501-1000", "Sydney", "NSW", "Australia"),
    ("Moderna", "modernatx.com", "Biotech", "1001-5000", "Cambridge", "MA", "USA"),
    ("Regeneron", "regeneron.com", "Biotech", "1001-5000", "Tarrytown", "NY", "USA"),
    ("Vertex Pharmaceuticals", "vrtx.com", "Biotech", "1001-5000", "Boston", "MA", "USA"),
    ("Genentech", "gene.com", "Biotech", "1001-5000", "San Francisco", "CA", "USA"),
    ("Amgen", "amgen.com", "Biotech", "5000+", "Thousand Oaks", "CA", "USA"),
    ("Illumina", "illumina.com", "Biotech", "1001-5000", "San Diego", "CA", "USA"),
    ("Tempus AI", "tempus.com", "Healthcare Tech", "201-500", "Chicago", "IL", "USA"),
    ("IBM", "ibm.com", "Technology", "5000+", "Armonk", "NY", "USA"),
    ("Oracle", "oracle.com", "Technology", "5000+", "Austin", "TX", "USA"),
    ("Cisco", "cisco.com", "Technology", "5000+", "San Jose", "CA", "USA"),
    ("Datadog", "datadoghq.com", "Technology", "501-1000", "New York", "NY", "USA"),
    ("MongoDB", "mongodb.com", "Technology", "501-1000", "New York", "NY", "USA"),
    ("Databricks", "databricks.com", "Technology", "201-500", "San Francisco", "CA", "USA"),
]


def random_culture_scores(rng: random.Random) -> Dict[str, float]:
    """One source's ratings, biased toward the upper half of the scale."""
    return {
        "overall_rating": round(3.8 + rng.random() * 1.2, 2),
        "work_life_balance": round(3.5 + rng.random() * 1.5, 2),
        "compensation_benefits": round(4.2 + rng.random() * 0.8, 2),
        "career_opportunities": round(4.0 + rng.random() * 1.0, 2),
        "culture_values": round(3.7 + rng.random() * 1.3, 2),
        "senior_management": round(3.6 + rng.random() * 1.4, 2),
        "ceo_approval": round(70 + rng.random() * 30, 2),
        "recommend_to_friend": round(65 + rng.random() * 35, 2),
        "review_count": int(100 + rng.random() * 900),
    }


def _months_ago(today: date, months: int) -> date:
    year, month = divmod(today.month - 1 - months, 12)
    return date(today.year + year, month + 1, 1)


def get_or_create_company(db: Session, row: tuple) -> Company:
    name, domain, industry, size_range, city, state, country = row
    company = db.query(Company).filter(Company.name == name).first()
    if company:
        return company
    company = Company(
        name=name,
        domain=domain,
        industry=industry,
        size_range=size_range,
        headquarters_city=city,
        headquarters_state=state,
        headquarters_country=country,
        logo_url=f"https://logo.clearbit.com/{domain}",
        website=f"https://{domain}",
    )
    db.add(company)
    db.flush()
    return company


def seed_companies(
    db: Session,
    companies: Optional[List[tuple]] = None,
    rng: Optional[random.Random] = None,
    today: Optional[date] = None,
) -> Dict[str, int]:
    """
    Insert companies and their culture data.

    Existing company names are reused rather than duplicated.

    Returns:
        Counts of companies, scores, trends and layoffs written
    """
    rng = rng or random.Random()
    today = today or date.today()
    counts = {"companies": 0, "scores": 0, "trends": 0, "layoffs": 0}

    for row in companies if companies is not None else COMPANIES:
        company = get_or_create_company(db, row)
        counts["companies"] += 1

        for source in SOURCES:
            db.add(CultureScore(
                company_id=company.id,
                source=source,
                date_collected=today,
                **random_culture_scores(rng),
            ))
            counts["scores"] += 1

        for months in range(TREND_MONTHS):
            for metric in TREND_METRICS:
                db.add(CultureTrend(
                    company_id=company.id,
                    metric_name=metric,
                    metric_value=round(3.5 + rng.random() * 1.5, 2),
                    month_year=_months_ago(today, months),
                    source="glassdoor",
                ))
                counts["trends"] += 1

        if rng.random() < LAYOFF_PROBABILITY:
            db.add(LayoffEvent(
                company_id=company.id,
                date=today - timedelta(days=30 * rng.randrange(12)),
                employees_affected=rng.randrange(50, 550),
                percentage_of_workforce=round(rng.random() * 15, 2),
                notes="Restructuring",
            ))
            counts["layoffs"] += 1

        print(f"  Seeded {company.name}")

    db.commit()
    return counts


def main():
    parser = argparse.ArgumentParser(description="Seed companies and culture data")
    parser.add_argument("--seed", type=int, default=None, help="Random seed for repeatable data")
    args = parser.parse_args()

    create_tables()
    db = get_session_factory()()
    try:
        print("Starting company data seed...")
        counts = seed_companies(db, rng=random.Random(args.seed))
        print(
            f"\nSeeded {counts['companies']} companies, {counts['scores']} scores, "
            f"{counts['trends']} trend points, {counts['layoffs']} layoff events"
        )
    finally:
        db.close()


if __name__ == "__main__":
    main()
