"""
Pytest configuration and shared fixtures.
"""
import pytest
from datetime import date, datetime
from unittest.mock import AsyncMock, MagicMock

from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from app.core.config import reset_settings
from app.core.database import reset_engine
from app.core.llm_client import LLMClient, LLMResponse
from app.core.models import Base, Company, CultureScore, SalaryData


@pytest.fixture(scope="function")
def clean_env(monkeypatch):
    """
    Clean environment for testing.

    Removes all app-related env vars to ensure clean state.
    """
    env_vars = [
        "DATABASE_URL",
        "LOG_LEVEL",
        "JWT_SECRET_KEY",
        "OPENAI_API_KEY",
        "ANTHROPIC_API_KEY",
        "LLM_PROVIDER",
        "LLM_MODEL",
        "RAPIDAPI_GLASSDOOR_KEY",
        "RAPIDAPI_LINKEDIN_JOBS_KEY",
        "RAPIDAPI_JSEARCH_KEY",
        "NEWSAPI_KEY",
        "HTTP_MAX_RETRIES",
    ]
    for var in env_vars:
        monkeypatch.delenv(var, raising=False)

    # Reset settings singleton
    reset_settings()

    yield

    # Reset again after test
    reset_settings()


@pytest.fixture(scope="function")
def app_env(clean_env, monkeypatch):
    """Minimal valid configuration: in-memory database, no third-party keys."""
    monkeypatch.setenv("DATABASE_URL", "sqlite://")
    monkeypatch.setenv("JWT_SECRET_KEY", "test-secret")
    reset_settings()
    reset_engine()
    yield
    reset_engine()


@pytest.fixture(scope="function")
def test_db():
    """
    Create an in-memory SQLite database for testing.

    Fresh database for each test. StaticPool keeps the single connection
    alive across the threads TestClient runs sync routes in.
    """
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )

    Base.metadata.create_all(bind=engine)

    TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)
    db = TestingSessionLocal()

    try:
        yield db
    finally:
        db.close()
        Base.metadata.drop_all(bind=engine)
        engine.dispose()


def add_company(db, name, industry="Technology", size_range="5000+", city="New York",
                state="NY", turnover_rate=None, scores=()):
    """Insert a company and one CultureScore row per overall rating in scores."""
    company = Company(
        name=name,
        industry=industry,
        size_range=size_range,
        headquarters_city=city,
        headquarters_state=state,
        headquarters_country="USA",
        turnover_rate=turnover_rate,
    )
    db.add(company)
    db.flush()
    for i, overall in enumerate(scores):
        db.add(CultureScore(
            company_id=company.id,
            source=("glassdoor", "indeed", "comparably")[i % 3],
            overall_rating=overall,
            work_life_balance=overall - 0.2,
            compensation_benefits=overall + 0.1,
            date_collected=date(2024, 1, 15),
        ))
    db.commit()
    db.refresh(company)
    return company


@pytest.fixture
def sample_companies(test_db):
    """
    Five companies across industries and cities.

    Acme has turnover 8 (+0.3 adjustment); Unscored has no score rows.
    """
    return {
        "acme": add_company(test_db, "Acme Corp", scores=(4.0, 4.2), turnover_rate=8),
        "globex": add_company(test_db, "Globex", scores=(4.3,), turnover_rate=15),
        "initech": add_company(
            test_db, "Initech", industry="Finance", size_range="1001-5000",
            city="Austin", state="TX", scores=(3.2, 3.4), turnover_rate=35,
        ),
        "umbrella": add_company(
            test_db, "Umbrella Health", industry="Healthcare", size_range="1001-5000",
            city="Boston", state="MA", scores=(2.0,),
        ),
        "unscored": add_company(test_db, "Unscored Inc", scores=()),
    }


@pytest.fixture
def sample_salaries(test_db, sample_companies):
    acme = sample_companies["acme"]
    globex = sample_companies["globex"]
    rows = [
        SalaryData(company_id=acme.id, job_title="Software Engineer", level="Senior",
                   base_salary=200000, bonus=30000, stock_equity=70000, total_compensation=300000),
        SalaryData(company_id=acme.id, job_title="Software Engineer", level="Mid",
                   base_salary=150000, bonus=15000, stock_equity=35000, total_compensation=200000),
        SalaryData(company_id=globex.id, job_title="Software Engineer", level="Senior",
                   base_salary=220000, bonus=20000, stock_equity=60000, total_compensation=300000),
        SalaryData(company_id=globex.id, job_title="Product Manager", level="Senior",
                   base_salary=210000, bonus=25000, stock_equity=65000, total_compensation=300000),
        SalaryData(company_id=globex.id, job_title="Data Scientist", level="Mid",
                   base_salary=0, bonus=0, stock_equity=0, total_compensation=0),
    ]
    test_db.add_all(rows)
    test_db.commit()
    return rows


def make_llm_response(content: str) -> LLMResponse:
    return LLMResponse(content=content, input_tokens=10, output_tokens=20, model="gpt-4o-mini")


@pytest.fixture
def mock_llm():
    """LLMClient stand-in; set mock_llm.complete.return_value / chat.return_value per test."""
    llm = MagicMock(spec=LLMClient)
    llm.is_available = True
    llm.complete = AsyncMock()
    llm.chat = AsyncMock()
    return llm
