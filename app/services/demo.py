"""
Static demo companies for the unauthenticated heat map preview.

Nothing here touches the database; records use the same shape as the
live company endpoints (company fields plus aggregate_score).
"""

import copy
from dataclasses import dataclass
from typing import Any, Dict, List, Optional


def _company(
    id: int,
    name: str,
    industry: str,
    size_range: str,
    city: str,
    state: str,
    domain: str,
    turnover_rate: float,
    overall: float,
    work_life: float,
    compensation: float,
    career: float,
    culture: float,
    management: float,
    ceo_approval: float,
    recommend: float,
) -> Dict[str, Any]:
    return {
        "id": id,
        "name": name,
        "domain": domain,
        "industry": industry,
        "size_range": size_range,
        "headquarters_city": city,
        "headquarters_state": state,
        "headquarters_country": "USA",
        "logo_url": f"https://logo.clearbit.com/{domain}",
        "website": f"https://{domain}",
        "turnover_rate": turnover_rate,
        "aggregate_score": {
            "overall_rating": overall,
            "work_life_balance": work_life,
            "compensation_benefits": compensation,
            "career_opportunities": career,
            "culture_values": culture,
            "senior_management": management,
            "ceo_approval": ceo_approval,
            "recommend_to_friend": recommend,
            "source_count": 3,
        },
    }


DEMO_COMPANIES: List[Dict[str, Any]] = [
    _company(1, "Google", "Technology", "10000+", "Mountain View", "CA", "google.com", 9.5, 4.4, 4.1, 4.6, 4.3, 4.4, 4.0, 92.0, 89.0),
    _company(2, "Microsoft", "Technology", "10000+", "Redmond", "WA", "microsoft.com", 11.2, 4.3, 4.2, 4.4, 4.2, 4.3, 4.0, 91.0, 88.0),
    _company(3, "Apple", "Technology", "10000+", "Cupertino", "CA", "apple.com", 13.8, 4.1, 3.7, 4.4, 4.0, 4.1, 3.8, 84.0, 82.0),
    _company(4, "Amazon", "E-commerce", "10000+", "Seattle", "WA", "amazon.com", 22.5, 3.7, 3.1, 4.0, 3.8, 3.5, 3.4, 72.0, 68.0),
    _company(5, "Netflix", "Entertainment", "5001-10000", "Los Gatos", "CA", "netflix.com", 12.1, 4.0, 3.6, 4.7, 3.7, 3.9, 3.6, 80.0, 78.0),
    _company(6, "Salesforce", "Technology", "10000+", "San Francisco", "CA", "salesforce.com", 14.0, 4.2, 4.0, 4.3, 4.0, 4.3, 3.9, 86.0, 83.0),
    _company(7, "Tesla", "Automotive", "10000+", "Austin", "TX", "tesla.com", 28.5, 3.5, 2.8, 3.6, 3.9, 3.4, 3.1, 63.0, 58.0),
    _company(8, "JPMorgan Chase", "Finance", "10000+", "New York", "NY", "jpmorganchase.com", 15.3, 3.9, 3.5, 4.1, 3.9, 3.8, 3.6, 78.0, 75.0),
    _company(9, "Goldman Sachs", "Finance", "10000+", "New York", "NY", "goldmansachs.com", 16.8, 3.8, 3.0, 4.3, 4.0, 3.7, 3.5, 74.0, 71.0),
    _company(10, "Johnson & Johnson", "Healthcare", "10000+", "New Brunswick", "NJ", "jnj.com", 8.7, 4.1, 4.0, 4.0, 3.9, 4.1, 3.8, 85.0, 83.0),
    _company(11, "Nvidia", "Technology", "10000+", "Santa Clara", "CA", "nvidia.com", 8.9, 4.5, 4.0, 4.7, 4.4, 4.5, 4.2, 96.0, 93.0),
    _company(12, "Spotify", "Entertainment", "5001-10000", "New York", "NY", "spotify.com", 13.0, 4.2, 4.3, 4.0, 3.8, 4.3, 3.9, 87.0, 85.0),
]


@dataclass
class DemoFilter:
    location: Optional[str] = None
    industry: Optional[str] = None
    min_score: Optional[float] = None
    max_score: Optional[float] = None


def get_companies() -> List[Dict[str, Any]]:
    return copy.deepcopy(DEMO_COMPANIES)


def get_company_by_id(company_id: int) -> Optional[Dict[str, Any]]:
    for company in DEMO_COMPANIES:
        if company["id"] == company_id:
            return copy.deepcopy(company)
    return None


def filter_companies(criteria: DemoFilter) -> List[Dict[str, Any]]:
    """Location is a substring of "city, state"; industry is exact."""
    results = []
    for company in get_companies():
        if criteria.location:
            label = f"{company['headquarters_city']}, {company['headquarters_state']}"
            if criteria.location.lower() not in label.lower():
                continue
        if criteria.industry and company["industry"] != criteria.industry:
            continue
        overall = company["aggregate_score"]["overall_rating"]
        if criteria.min_score is not None and overall < criteria.min_score:
            continue
        if criteria.max_score is not None and overall > criteria.max_score:
            continue
        results.append(company)
    return results
