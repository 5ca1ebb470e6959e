"""
Pydantic schemas for API responses.

Services hand ORM rows through these models so every record crossing the
data/presentation boundary has an explicit shape.
"""
import json
from datetime import date, datetime
from typing import Optional, List, Dict, Any, Type
from pydantic import BaseModel, field_validator


class CompanyResponse(BaseModel):
    id: int
    name: str
    domain: Optional[str] = None
    industry: Optional[str] = None
    size_range: Optional[str] = None
    headquarters_city: Optional[str] = None
    headquarters_state: Optional[str] = None
    headquarters_country: Optional[str] = None
    logo_url: Optional[str] = None
    website: Optional[str] = None
    turnover_rate: Optional[float] = None
    avg_tenure: Optional[float] = None

    model_config = {"from_attributes": True}


class CultureScoreResponse(BaseModel):
    id: int
    company_id: int
    source: str
    overall_rating: Optional[float] = None
    work_life_balance: Optional[float] = None
    compensation_benefits: Optional[float] = None
    career_opportunities: Optional[float] = None
    culture_values: Optional[float] = None
    senior_management: Optional[float] = None
    ceo_approval: Optional[float] = None
    recommend_to_friend: Optional[float] = None
    review_count: Optional[int] = None
    date_collected: Optional[date] = None

    model_config = {"from_attributes": True}


class CultureTrendResponse(BaseModel):
    id: int
    company_id: int
    metric_name: str
    metric_value: Optional[float] = None
    month_year: date
    source: Optional[str] = None

    model_config = {"from_attributes": True}


class LayoffEventResponse(BaseModel):
    id: int
    company_id: int
    date: date
    employees_affected: Optional[int] = None
    percentage_of_workforce: Optional[float] = None
    notes: Optional[str] = None

    model_config = {"from_attributes": True}


class AnonymousReviewResponse(BaseModel):
    id: int
    company_id: int
    rating: int
    title: Optional[str] = None
    review_text: Optional[str] = None
    pros: Optional[str] = None
    cons: Optional[str] = None
    job_title: Optional[str] = None
    employment_status: Optional[str] = None
    work_life_balance: Optional[int] = None
    compensation_benefits: Optional[int] = None
    career_opportunities: Optional[int] = None
    culture_values: Optional[int] = None
    senior_management: Optional[int] = None
    is_helpful: int = 0
    is_flagged: int = 0
    created_at: Optional[datetime] = None

    model_config = {"from_attributes": True}

    @field_validator("employment_status", mode="before")
    @classmethod
    def enum_to_value(cls, v):
        return getattr(v, "value", v)


class JobOpeningResponse(BaseModel):
    id: int
    company_id: int
    job_title: str
    department: Optional[str] = None
    location: Optional[str] = None
    salary_min: Optional[int] = None
    salary_max: Optional[int] = None
    job_url: Optional[str] = None
    posted_date: Optional[date] = None
    source: Optional[str] = None

    model_config = {"from_attributes": True}


class NewsResponse(BaseModel):
    id: int
    company_id: Optional[int] = None
    industry_category: Optional[str] = None
    headline: str
    summary: Optional[str] = None
    source_url: Optional[str] = None
    source_name: Optional[str] = None
    sentiment: Optional[str] = None
    relevance_score: Optional[float] = None
    published_date: Optional[datetime] = None

    model_config = {"from_attributes": True}


class SavedComparisonResponse(BaseModel):
    id: int
    user_id: int
    name: str
    company_ids: List[int]
    saved_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    model_config = {"from_attributes": True}

    @field_validator("company_ids", mode="before")
    @classmethod
    def decode_company_ids(cls, v):
        if isinstance(v, str):
            return json.loads(v)
        return v


class SalaryResponse(BaseModel):
    id: int
    company_id: int
    job_title: str
    level: Optional[str] = None
    base_salary: Optional[int] = None
    bonus: Optional[int] = None
    stock_equity: Optional[int] = None
    total_compensation: Optional[int] = None
    years_experience: Optional[int] = None
    location: Optional[str] = None
    data_source: Optional[str] = None
    reported_date: Optional[date] = None

    model_config = {"from_attributes": True}


class InterviewResponse(BaseModel):
    id: int
    company_id: int
    glassdoor_interview_id: Optional[str] = None
    job_title: str
    interview_type: Optional[str] = None
    difficulty: Optional[str] = None
    duration: Optional[str] = None
    questions: List[str] = []
    experience: Optional[str] = None
    outcome: Optional[str] = None
    interview_date: Optional[date] = None
    data_source: Optional[str] = None
    cached_at: Optional[datetime] = None

    model_config = {"from_attributes": True}

    @field_validator("questions", mode="before")
    @classmethod
    def decode_questions(cls, v):
        if v is None:
            return []
        if isinstance(v, str):
            return json.loads(v) if v else []
        return v


class GlassdoorMetricsResponse(BaseModel):
    company_id: int
    company_name: str
    overall_rating: Optional[float] = None
    ceo_approval: Optional[float] = None
    recommend_to_friend: Optional[float] = None
    salary_min: Optional[int] = None
    salary_max: Optional[int] = None
    salary_currency: Optional[str] = None
    review_count: int = 0
    interview_count: int = 0
    last_synced_at: Optional[datetime] = None

    model_config = {"from_attributes": True}


def to_dict(schema: Type[BaseModel], obj: Any) -> Dict[str, Any]:
    """Validate an ORM row against a response schema and return it as a dict."""
    return schema.model_validate(obj).model_dump()


def to_dicts(schema: Type[BaseModel], rows) -> List[Dict[str, Any]]:
    return [to_dict(schema, row) for row in rows]
