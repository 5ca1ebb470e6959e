"""
SQLAlchemy models for the culture comparison platform.

Tables:
- users: Authenticated accounts
- companies: Employers being compared
- culture_scores: One rating row per (company, source) collection run
- culture_trends: Monthly metric history
- layoff_events: Reported layoffs
- company_reviews: Reviews scraped from external sources
- anonymous_reviews: Reviews submitted by visitors
- job_openings: Cached job postings
- company_news: Company and industry news items
- user_favorites: Companies a user has starred
- saved_comparisons: Named sets of companies a user compares
- salary_data: Compensation records by role and level
- interview_data: Cached Glassdoor interview experiences
- glassdoor_metrics: Cached Glassdoor company metrics

companyId/userId references are indexed integers, not declared foreign keys.
"""
from datetime import datetime
import enum

from sqlalchemy import (
    Column, Integer, String, DateTime, Date, Text, Numeric, Enum, Index,
)
from sqlalchemy.orm import declarative_base

Base = declarative_base()

# Ratings are stored as decimals but handed back as floats
Rating = Numeric(3, 2, asdecimal=False)
Percent = Numeric(5, 2, asdecimal=False)


class UserRole(str, enum.Enum):
    USER = "user"
    ADMIN = "admin"


class EmploymentStatus(str, enum.Enum):
    """Reviewer relationship to the company - ONLY these values allowed."""
    CURRENT = "current"
    FORMER = "former"
    INTERVIEWING = "interviewing"


def _enum_values(enum_cls):
    return [member.value for member in enum_cls]


# =============================================================================
# Accounts
# =============================================================================


class User(Base):
    """Application user."""
    __tablename__ = "users"

    id = Column(Integer, primary_key=True, autoincrement=True)
    open_id = Column(String(64), nullable=False, unique=True)
    name = Column(Text, nullable=True)
    email = Column(String(320), nullable=True, unique=True, index=True)
    password_hash = Column(String(255), nullable=True)
    login_method = Column(String(64), nullable=True)
    role = Column(
        Enum(UserRole, native_enum=False, length=20, values_callable=_enum_values),
        nullable=False,
        default=UserRole.USER,
    )

    created_at = Column(DateTime, nullable=False, default=datetime.utcnow)
    updated_at = Column(DateTime, nullable=False, default=datetime.utcnow, onupdate=datetime.utcnow)
    last_signed_in = Column(DateTime, nullable=False, default=datetime.utcnow)

    def __repr__(self) -> str:
        return f"<User(id={self.id}, email={self.email}, role={self.role})>"


# =============================================================================
# Companies & Culture Scores
# =============================================================================


class Company(Base):
    """
    An employer tracked by the platform.

    turnover_rate is an annualized percentage; avg_tenure is in years.
    Both are populated by the turnover seed script.
    """
    __tablename__ = "companies"

    id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(String(255), nullable=False, unique=True)
    domain = Column(String(255), nullable=True)
    industry = Column(String(100), nullable=True, index=True)
    size_range = Column(String(50), nullable=True)
    headquarters_city = Column(String(100), nullable=True)
    headquarters_state = Column(String(100), nullable=True)
    headquarters_country = Column(String(100), nullable=True)
    logo_url = Column(Text, nullable=True)
    website = Column(String(255), nullable=True)
    turnover_rate = Column(Percent, nullable=True)
    avg_tenure = Column(Numeric(4, 2, asdecimal=False), nullable=True)

    created_at = Column(DateTime, nullable=False, default=datetime.utcnow)
    updated_at = Column(DateTime, nullable=False, default=datetime.utcnow, onupdate=datetime.utcnow)

    @property
    def location(self) -> str:
        return f"{self.headquarters_city}, {self.headquarters_state}"

    def __repr__(self) -> str:
        return f"<Company(id={self.id}, name={self.name}, industry={self.industry})>"


class CultureScore(Base):
    """
    Ratings collected from one source for one company.

    Rows are inserted fresh per collection run and never updated in place.
    """
    __tablename__ = "culture_scores"

    id = Column(Integer, primary_key=True, autoincrement=True)
    company_id = Column(Integer, nullable=False, index=True)
    source = Column(String(50), nullable=False)  # glassdoor, indeed, comparably
    overall_rating = Column(Rating, nullable=True)
    work_life_balance = Column(Rating, nullable=True)
    compensation_benefits = Column(Rating, nullable=True)
    career_opportunities = Column(Rating, nullable=True)
    culture_values = Column(Rating, nullable=True)
    senior_management = Column(Rating, nullable=True)
    ceo_approval = Column(Percent, nullable=True)
    recommend_to_friend = Column(Percent, nullable=True)
    review_count = Column(Integer, nullable=True)
    date_collected = Column(Date, nullable=False, default=lambda: datetime.utcnow().date())

    created_at = Column(DateTime, nullable=False, default=datetime.utcnow)

    def __repr__(self) -> str:
        return (
            f"<CultureScore(id={self.id}, company_id={self.company_id}, "
            f"source={self.source}, overall_rating={self.overall_rating})>"
        )


class CultureTrend(Base):
    """Monthly value of one culture metric."""
    __tablename__ = "culture_trends"

    id = Column(Integer, primary_key=True, autoincrement=True)
    company_id = Column(Integer, nullable=False, index=True)
    metric_name = Column(String(100), nullable=False)
    metric_value = Column(Rating, nullable=True)
    month_year = Column(Date, nullable=False)
    source = Column(String(50), nullable=True)

    created_at = Column(DateTime, nullable=False, default=datetime.utcnow)

    def __repr__(self) -> str:
        return (
            f"<CultureTrend(company_id={self.company_id}, metric={self.metric_name}, "
            f"month={self.month_year})>"
        )


class LayoffEvent(Base):
    __tablename__ = "layoff_events"

    id = Column(Integer, primary_key=True, autoincrement=True)
    company_id = Column(Integer, nullable=False, index=True)
    date = Column(Date, nullable=False)
    employees_affected = Column(Integer, nullable=True)
    percentage_of_workforce = Column(Percent, nullable=True)
    notes = Column(Text, nullable=True)

    created_at = Column(DateTime, nullable=False, default=datetime.utcnow)

    def __repr__(self) -> str:
        return f"<LayoffEvent(company_id={self.company_id}, date={self.date})>"


# =============================================================================
# Reviews
# =============================================================================


class CompanyReview(Base):
    """Review collected from an external source."""
    __tablename__ = "company_reviews"

    id = Column(Integer, primary_key=True, autoincrement=True)
    company_id = Column(Integer, nullable=False, index=True)
    source = Column(String(50), nullable=False)
    rating = Column(Rating, nullable=True)
    title = Column(String(255), nullable=True)
    review_text = Column(Text, nullable=True)
    pros = Column(Text, nullable=True)
    cons = Column(Text, nullable=True)
    job_title = Column(String(255), nullable=True)
    employment_status = Column(String(50), nullable=True)
    review_date = Column(Date, nullable=True)

    created_at = Column(DateTime, nullable=False, default=datetime.utcnow)

    def __repr__(self) -> str:
        return f"<CompanyReview(id={self.id}, company_id={self.company_id}, source={self.source})>"


class AnonymousReview(Base):
    """
    Review submitted by a visitor.

    Append-only; moderation happens through is_flagged.
    """
    __tablename__ = "anonymous_reviews"

    id = Column(Integer, primary_key=True, autoincrement=True)
    company_id = Column(Integer, nullable=False, index=True)
    rating = Column(Integer, nullable=False)
    title = Column(String(255), nullable=True)
    review_text = Column(Text, nullable=True)
    pros = Column(Text, nullable=True)
    cons = Column(Text, nullable=True)
    job_title = Column(String(255), nullable=True)
    employment_status = Column(
        Enum(EmploymentStatus, native_enum=False, length=20, values_callable=_enum_values),
        nullable=True,
    )
    work_life_balance = Column(Integer, nullable=True)
    compensation_benefits = Column(Integer, nullable=True)
    career_opportunities = Column(Integer, nullable=True)
    culture_values = Column(Integer, nullable=True)
    senior_management = Column(Integer, nullable=True)
    is_helpful = Column(Integer, nullable=False, default=0)
    is_flagged = Column(Integer, nullable=False, default=0)

    created_at = Column(DateTime, nullable=False, default=datetime.utcnow)
    updated_at = Column(DateTime, nullable=False, default=datetime.utcnow, onupdate=datetime.utcnow)

    def __repr__(self) -> str:
        return (
            f"<AnonymousReview(id={self.id}, company_id={self.company_id}, "
            f"rating={self.rating}, flagged={self.is_flagged})>"
        )


# =============================================================================
# Jobs & News
# =============================================================================


class JobOpening(Base):
    __tablename__ = "job_openings"

    id = Column(Integer, primary_key=True, autoincrement=True)
    company_id = Column(Integer, nullable=False, index=True)
    job_title = Column(String(255), nullable=False)
    department = Column(String(100), nullable=True)
    location = Column(String(255), nullable=True)
    salary_min = Column(Integer, nullable=True)
    salary_max = Column(Integer, nullable=True)
    job_url = Column(Text, nullable=True)
    posted_date = Column(Date, nullable=True)
    source = Column(String(50), nullable=True)

    created_at = Column(DateTime, nullable=False, default=datetime.utcnow)

    def __repr__(self) -> str:
        return f"<JobOpening(id={self.id}, company_id={self.company_id}, title={self.job_title})>"


class CompanyNews(Base):
    """
    News item about a company or an industry.

    company_id is NULL for industry-wide items.
    """
    __tablename__ = "company_news"

    id = Column(Integer, primary_key=True, autoincrement=True)
    company_id = Column(Integer, nullable=True, index=True)
    industry_category = Column(String(100), nullable=True, index=True)
    headline = Column(String(500), nullable=False)
    summary = Column(Text, nullable=True)
    source_url = Column(Text, nullable=True)
    source_name = Column(String(100), nullable=True)
    sentiment = Column(String(20), nullable=True)  # positive, negative, neutral
    relevance_score = Column(Numeric(3, 2, asdecimal=False), nullable=True)
    published_date = Column(DateTime, nullable=False, default=datetime.utcnow)

    created_at = Column(DateTime, nullable=False, default=datetime.utcnow)

    def __repr__(self) -> str:
        return f"<CompanyNews(id={self.id}, company_id={self.company_id}, headline={self.headline[:40]})>"


# =============================================================================
# User-owned records
# =============================================================================


class UserFavorite(Base):
    __tablename__ = "user_favorites"

    id = Column(Integer, primary_key=True, autoincrement=True)
    user_id = Column(Integer, nullable=False)
    company_id = Column(Integer, nullable=False)

    created_at = Column(DateTime, nullable=False, default=datetime.utcnow)

    __table_args__ = (
        Index("ix_user_favorites_user_company", "user_id", "company_id"),
    )

    def __repr__(self) -> str:
        return f"<UserFavorite(user_id={self.user_id}, company_id={self.company_id})>"


class SavedComparison(Base):
    """A named set of companies; company_ids is a JSON-encoded list."""
    __tablename__ = "saved_comparisons"

    id = Column(Integer, primary_key=True, autoincrement=True)
    user_id = Column(Integer, nullable=False, index=True)
    name = Column(String(255), nullable=False)
    company_ids = Column(Text, nullable=False)
    saved_at = Column(DateTime, nullable=False, default=datetime.utcnow)
    updated_at = Column(DateTime, nullable=False, default=datetime.utcnow, onupdate=datetime.utcnow)

    def __repr__(self) -> str:
        return f"<SavedComparison(id={self.id}, user_id={self.user_id}, name={self.name})>"


# =============================================================================
# Compensation & Interviews
# =============================================================================


class SalaryData(Base):
    __tablename__ = "salary_data"

    id = Column(Integer, primary_key=True, autoincrement=True)
    company_id = Column(Integer, nullable=False, index=True)
    job_title = Column(String(255), nullable=False, index=True)
    level = Column(String(50), nullable=True)  # Entry, Mid, Senior, Lead, Principal
    base_salary = Column(Integer, nullable=True)
    bonus = Column(Integer, nullable=True)
    stock_equity = Column(Integer, nullable=True)
    total_compensation = Column(Integer, nullable=True)
    years_experience = Column(Integer, nullable=True)
    location = Column(String(255), nullable=True)
    data_source = Column(String(100), nullable=True)
    reported_date = Column(Date, nullable=True)

    created_at = Column(DateTime, nullable=False, default=datetime.utcnow)

    def __repr__(self) -> str:
        return (
            f"<SalaryData(company_id={self.company_id}, job_title={self.job_title}, "
            f"level={self.level}, total={self.total_compensation})>"
        )


class InterviewData(Base):
    """Interview experience cached from Glassdoor. questions is a JSON list."""
    __tablename__ = "interview_data"

    id = Column(Integer, primary_key=True, autoincrement=True)
    company_id = Column(Integer, nullable=False, index=True)
    glassdoor_interview_id = Column(String(255), nullable=True, unique=True)
    job_title = Column(String(255), nullable=False)
    interview_type = Column(String(100), nullable=True)
    difficulty = Column(String(50), nullable=True)
    duration = Column(String(100), nullable=True)
    questions = Column(Text, nullable=True)
    experience = Column(Text, nullable=True)
    outcome = Column(String(50), nullable=True)
    interview_date = Column(Date, nullable=True)
    data_source = Column(String(100), nullable=True, default="Glassdoor")
    cached_at = Column(DateTime, nullable=False, default=datetime.utcnow)

    created_at = Column(DateTime, nullable=False, default=datetime.utcnow)

    def __repr__(self) -> str:
        return f"<InterviewData(id={self.id}, company_id={self.company_id}, title={self.job_title})>"


class GlassdoorMetrics(Base):
    """Latest Glassdoor snapshot per company (one row, upserted)."""
    __tablename__ = "glassdoor_metrics"

    id = Column(Integer, primary_key=True, autoincrement=True)
    company_id = Column(Integer, nullable=False, unique=True)
    company_name = Column(String(255), nullable=False)
    overall_rating = Column(Numeric(3, 1, asdecimal=False), nullable=True)
    ceo_approval = Column(Percent, nullable=True)
    recommend_to_friend = Column(Percent, nullable=True)
    salary_min = Column(Integer, nullable=True)
    salary_max = Column(Integer, nullable=True)
    salary_currency = Column(String(10), nullable=True, default="USD")
    review_count = Column(Integer, nullable=False, default=0)
    interview_count = Column(Integer, nullable=False, default=0)
    last_synced_at = Column(DateTime, nullable=True)

    created_at = Column(DateTime, nullable=False, default=datetime.utcnow)
    updated_at = Column(DateTime, nullable=False, default=datetime.utcnow, onupdate=datetime.utcnow)

    def __repr__(self) -> str:
        return f"<GlassdoorMetrics(company_id={self.company_id}, overall={self.overall_rating})>"
