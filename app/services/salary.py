"""
Salary insights.

Per-company listings, cross-company comparison, distribution stats and
trend aggregation over the salary_data table.
"""

import logging
import math
from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Sequence

from sqlalchemy.orm import Session

from app.core.models import SalaryData

logger = logging.getLogger(__name__)


@dataclass
class SalaryTrendFilters:
    job_title: Optional[str] = None  # case-insensitive substring
    level: Optional[str] = None      # exact
    min_salary: Optional[int] = None  # on base salary
    max_salary: Optional[int] = None


def empty_trends() -> Dict[str, Any]:
    return {
        "trends": [],
        "job_titles_list": [],
        "levels_list": [],
        "overall_stats": {
            "avg_base_salary": 0,
            "avg_total_compensation": 0,
            "median_base_salary": 0,
            "highest_paying_role": "N/A",
        },
    }


def distribution_stats(values: Sequence[float]) -> Optional[Dict[str, Any]]:
    """count/min/max/average plus lower-index median and quartiles."""
    if not values:
        return None
    ordered = sorted(values)
    n = len(ordered)
    return {
        "count": n,
        "min": ordered[0],
        "max": ordered[-1],
        "median": ordered[n // 2],
        "average": sum(ordered) / n,
        "p25": ordered[math.floor(n * 0.25)],
        "p75": ordered[math.floor(n * 0.75)],
    }


def aggregate_trends(rows: Sequence[SalaryData]) -> Dict[str, Any]:
    """
    Group rows by (job_title, level), averaging base and total pay.

    Rows missing a title, level or base salary are skipped. Total
    compensation falls back to base when absent.
    """
    groups: Dict[tuple, Dict[str, Any]] = {}
    titles, levels = set(), set()
    total_base = total_comp = 0.0
    counted = 0

    for row in rows:
        if not row.job_title or not row.level or not row.base_salary:
            continue
        base = float(row.base_salary)
        total = float(row.total_compensation or base)
        titles.add(row.job_title)
        levels.add(row.level)

        group = groups.setdefault(
            (row.job_title, row.level),
            {"job_title": row.job_title, "level": row.level, "_base": 0.0, "_total": 0.0,
             "min_base_salary": base, "max_base_salary": base, "count": 0},
        )
        group["_base"] += base
        group["_total"] += total
        group["min_base_salary"] = min(group["min_base_salary"], base)
        group["max_base_salary"] = max(group["max_base_salary"], base)
        group["count"] += 1

        total_base += base
        total_comp += total
        counted += 1

    trends = []
    for group in groups.values():
        count = group["count"]
        trends.append({
            "job_title": group["job_title"],
            "level": group["level"],
            "avg_base_salary": group.pop("_base") / count,
            "avg_total_compensation": group.pop("_total") / count,
            "min_base_salary": group["min_base_salary"],
            "max_base_salary": group["max_base_salary"],
            "count": count,
        })
    trends.sort(key=lambda t: t["avg_total_compensation"], reverse=True)

    bases = sorted(float(r.base_salary) for r in rows if r.base_salary and r.base_salary > 0)
    return {
        "trends": trends,
        "job_titles_list": sorted(titles),
        "levels_list": sorted(levels),
        "overall_stats": {
            "avg_base_salary": total_base / counted if counted else 0,
            "avg_total_compensation": total_comp / counted if counted else 0,
            "median_base_salary": bases[len(bases) // 2] if bases else 0,
            "highest_paying_role": trends[0]["job_title"] if trends else "N/A",
        },
    }


class SalaryService:
    """Queries over salary_data."""

    def __init__(self, db: Session):
        self.db = db

    def by_company(self, company_id: int) -> List[SalaryData]:
        return (
            self.db.query(SalaryData)
            .filter(SalaryData.company_id == company_id)
            .order_by(SalaryData.job_title, SalaryData.level)
            .all()
        )

    def compare(
        self,
        job_title: Optional[str] = None,
        level: Optional[str] = None,
        company_ids: Optional[List[int]] = None,
    ) -> List[SalaryData]:
        """Exact title/level match, optionally limited to some companies."""
        query = self.db.query(SalaryData)
        if job_title:
            query = query.filter(SalaryData.job_title == job_title)
        if level:
            query = query.filter(SalaryData.level == level)
        if company_ids:
            query = query.filter(SalaryData.company_id.in_(company_ids))
        return query.order_by(SalaryData.id).all()

    def stats(self, job_title: str, level: str) -> Optional[Dict[str, Any]]:
        """Total-compensation distribution for one title and level."""
        rows = self.compare(job_title=job_title, level=level)
        return distribution_stats([float(r.total_compensation or 0) for r in rows])

    def job_titles(self) -> List[str]:
        rows = self.db.query(SalaryData.job_title).distinct().all()
        return sorted(r[0] for r in rows if r[0] is not None)

    def levels(self) -> List[str]:
        rows = self.db.query(SalaryData.level).distinct().all()
        return sorted(r[0] for r in rows if r[0] is not None)

    def trends(self, filters: Optional[SalaryTrendFilters] = None) -> Dict[str, Any]:
        """Aggregated pay by title and level; an empty structure on failure."""
        filters = filters or SalaryTrendFilters()
        try:
            rows = self.db.query(SalaryData).all()
            if filters.job_title:
                needle = filters.job_title.lower()
                rows = [r for r in rows if r.job_title and needle in r.job_title.lower()]
            if filters.level:
                rows = [r for r in rows if r.level == filters.level]
            if filters.min_salary:
                rows = [r for r in rows if (r.base_salary or 0) >= filters.min_salary]
            if filters.max_salary:
                rows = [r for r in rows if (r.base_salary or 0) <= filters.max_salary]
            return aggregate_trends(rows)
        except Exception as e:
            logger.error(f"Error computing salary trends: {e}")
            return empty_trends()

    def range_by_role(self, job_title: str) -> Dict[str, Any]:
        """Base-salary range for titles containing job_title (case-insensitive)."""
        try:
            rows = (
                self.db.query(SalaryData.base_salary)
                .filter(SalaryData.job_title.ilike(f"%{job_title}%"))
                .all()
            )
        except Exception as e:
            logger.error(f"Error fetching salary range: {e}")
            rows = []

        salaries = [float(r[0]) for r in rows if r[0] and r[0] > 0]
        if not salaries:
            return {"min": 0, "max": 0, "avg": 0, "count": 0}
        return {
            "min": min(salaries),
            "max": max(salaries),
            "avg": sum(salaries) / len(salaries),
            "count": len(salaries),
        }
