"""
Tests for database models.
"""
import pytest
from sqlalchemy import inspect
from sqlalchemy.exc import IntegrityError

from app.core.models import (
    AnonymousReview,
    Base,
    Company,
    EmploymentStatus,
    User,
    UserRole,
)


class TestModels:

    @pytest.mark.unit
    def test_all_tables_created(self, test_db):
        tables = set(inspect(test_db.get_bind()).get_table_names())
        assert tables == set(Base.metadata.tables)
        assert {"companies", "culture_scores", "salary_data", "glassdoor_metrics"} <= tables

    @pytest.mark.unit
    def test_company_name_unique(self, test_db):
        test_db.add(Company(name="Acme Corp"))
        test_db.commit()
        test_db.add(Company(name="Acme Corp"))
        with pytest.raises(IntegrityError):
            test_db.commit()
        test_db.rollback()

    @pytest.mark.unit
    def test_user_defaults(self, test_db):
        user = User(open_id="local:a@b.io", email="a@b.io")
        test_db.add(user)
        test_db.commit()
        test_db.refresh(user)

        assert user.role == UserRole.USER
        assert user.created_at is not None
        assert user.last_signed_in is not None

    @pytest.mark.unit
    def test_review_enum_round_trip(self, test_db):
        review = AnonymousReview(company_id=1, rating=3, employment_status=EmploymentStatus.FORMER)
        test_db.add(review)
        test_db.commit()
        test_db.expire_all()

        stored = test_db.query(AnonymousReview).one()
        assert stored.employment_status == EmploymentStatus.FORMER
        assert stored.is_flagged == 0

