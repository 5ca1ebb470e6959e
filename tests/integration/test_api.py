"""
Integration tests for the HTTP API.

Runs the FastAPI app in-process against the in-memory test database with
no third-party keys configured.
"""
import pytest
from fastapi.testclient import TestClient

from app.main import app
from app.core.database import get_db


@pytest.fixture
def client(app_env, test_db):
    """Create test client with overridden database."""
    def override_get_db():
        try:
            yield test_db
        finally:
            pass

    app.dependency_overrides[get_db] = override_get_db
    with TestClient(app) as c:
        yield c
    app.dependency_overrides.clear()


def register(client, email="ada@culturemail.io", password="correct-horse"):
    response = client.post(
        "/api/v1/auth/register", json={"email": email, "password": password, "name": "Ada"}
    )
    assert response.status_code == 200
    return {"Authorization": f"Bearer {response.json()['access_token']}"}


class TestServiceEndpoints:

    @pytest.mark.integration
    def test_root(self, client):
        response = client.get("/")
        assert response.status_code == 200
        assert response.json()["service"] == "CultureScope API"

    @pytest.mark.integration
    def test_health(self, client):
        response = client.get("/health")
        assert response.status_code == 200
        assert response.json()["database"] == "connected"


class TestCompanyEndpoints:

    @pytest.mark.integration
    def test_list_companies(self, client, sample_companies):
        response = client.get("/api/v1/companies")

        assert response.status_code == 200
        data = response.json()
        assert [c["name"] for c in data] == ["Acme Corp", "Globex", "Initech", "Umbrella Health"]
        assert data[0]["aggregate_score"]["overall_rating"] == pytest.approx(4.4)

    @pytest.mark.integration
    def test_filter(self, client, sample_companies):
        response = client.get(
            "/api/v1/companies/filter", params={"industry": "Technology", "min_score": 4.5}
        )
        assert response.status_code == 200
        assert response.json() == []

    @pytest.mark.integration
    def test_filter_industries_list(self, client, sample_companies):
        response = client.get(
            "/api/v1/companies/filter", params=[("industries", "Finance"), ("industries", "Healthcare")]
        )
        assert [c["name"] for c in response.json()] == ["Initech", "Umbrella Health"]

    @pytest.mark.integration
    def test_filter_rejects_out_of_range_score(self, client):
        response = client.get("/api/v1/companies/filter", params={"min_score": 7})
        assert response.status_code == 422

    @pytest.mark.integration
    def test_search(self, client, sample_companies):
        response = client.get("/api/v1/companies/search", params={"q": "GLOBEX"})
        assert [c["name"] for c in response.json()] == ["Globex"]

    @pytest.mark.integration
    def test_company_detail(self, client, sample_companies):
        acme = sample_companies["acme"]
        response = client.get(f"/api/v1/companies/{acme.id}")

        assert response.status_code == 200
        data = response.json()
        assert data["company"]["name"] == "Acme Corp"
        assert len(data["scores"]) == 2
        assert data["aggregate_score"]["source_count"] == 2

    @pytest.mark.integration
    def test_company_not_found(self, client):
        assert client.get("/api/v1/companies/99999").status_code == 404
        assert client.get("/api/v1/companies/99999/similar").status_code == 404
        assert client.get("/api/v1/companies/99999/similar/ai").status_code == 404

    @pytest.mark.integration
    def test_similar(self, client, sample_companies):
        response = client.get(f"/api/v1/companies/{sample_companies['acme'].id}/similar")

        data = response.json()
        assert data[0]["name"] == "Globex"
        assert data[0]["similarity_score"] == 100

    @pytest.mark.integration
    def test_ai_similar_falls_back_without_llm(self, client, sample_companies):
        response = client.get(
            f"/api/v1/companies/{sample_companies['acme'].id}/similar/ai", params={"limit": 1}
        )

        data = response.json()
        assert data["strategy"] == "heuristic"
        assert [c["name"] for c in data["companies"]] == ["Globex"]


class TestReviewEndpoints:

    @pytest.mark.integration
    def test_submit_list_and_stats(self, client, sample_companies):
        company_id = sample_companies["acme"].id
        response = client.post("/api/v1/reviews", json={
            "company_id": company_id,
            "rating": 4,
            "employment_status": "former",
            "work_life_balance": 5,
        })
        assert response.status_code == 201
        review_id = response.json()["id"]

        reviews = client.get(f"/api/v1/reviews/company/{company_id}").json()
        stats = client.get(f"/api/v1/reviews/company/{company_id}/stats").json()

        assert [r["id"] for r in reviews] == [review_id]
        assert stats["avg_rating"] == "4.00"
        assert client.post(f"/api/v1/reviews/{review_id}/flag").json() == {"success": True}

    @pytest.mark.integration
    @pytest.mark.parametrize("payload", [
        {"rating": 6},
        {"rating": 0},
        {"rating": 3, "employment_status": "contractor"},
        {"rating": 3, "culture_values": 9},
        {"rating": 3, "title": "x" * 256},
    ])
    def test_validation(self, client, sample_companies, payload):
        payload["company_id"] = sample_companies["acme"].id
        assert client.post("/api/v1/reviews", json=payload).status_code == 422

    @pytest.mark.integration
    def test_unknown_company(self, client):
        response = client.post("/api/v1/reviews", json={"company_id": 99999, "rating": 3})
        assert response.status_code == 404

    @pytest.mark.integration
    def test_stats_without_reviews(self, client, sample_companies):
        response = client.get(f"/api/v1/reviews/company/{sample_companies['globex'].id}/stats")
        assert response.status_code == 200
        assert response.json() is None

    @pytest.mark.integration
    def test_flag_unknown_review(self, client):
        assert client.post("/api/v1/reviews/99999/flag").status_code == 404


class TestAuthEndpoints:

    @pytest.mark.integration
    def test_register_login_me(self, client):
        register(client)

        login = client.post(
            "/api/v1/auth/login", json={"email": "ada@culturemail.io", "password": "correct-horse"}
        )
        assert login.status_code == 200
        token = login.json()["access_token"]

        me = client.get("/api/v1/auth/me", headers={"Authorization": f"Bearer {token}"})
        assert me.status_code == 200
        assert me.json()["email"] == "ada@culturemail.io"

    @pytest.mark.integration
    def test_duplicate_registration(self, client):
        register(client)
        response = client.post(
            "/api/v1/auth/register", json={"email": "ada@culturemail.io", "password": "correct-horse"}
        )
        assert response.status_code == 400

    @pytest.mark.integration
    def test_bad_login(self, client):
        register(client)
        response = client.post(
            "/api/v1/auth/login", json={"email": "ada@culturemail.io", "password": "nope-nope"}
        )
        assert response.status_code == 401

    @pytest.mark.integration
    def test_me_requires_token(self, client):
        assert client.get("/api/v1/auth/me").status_code == 401
        response = client.get("/api/v1/auth/me", headers={"Authorization": "Token abc"})
        assert response.status_code == 401
        assert response.json()["detail"] == "Invalid authorization format"


class TestFavoriteEndpoints:

    @pytest.mark.integration
    def test_anonymous(self, client, sample_companies):
        company_id = sample_companies["acme"].id

        assert client.get("/api/v1/favorites").json() == []
        assert client.get(f"/api/v1/favorites/{company_id}/check").json() == {"is_favorite": False}
        assert client.post(f"/api/v1/favorites/{company_id}").status_code == 401
        assert client.delete(f"/api/v1/favorites/{company_id}").status_code == 401

    @pytest.mark.integration
    def test_add_check_remove(self, client, sample_companies):
        headers = register(client)
        company_id = sample_companies["globex"].id

        assert client.post(f"/api/v1/favorites/{company_id}", headers=headers).json() == {"success": True}
        assert client.get(f"/api/v1/favorites/{company_id}/check", headers=headers).json() == {
            "is_favorite": True
        }
        assert [c["name"] for c in client.get("/api/v1/favorites", headers=headers).json()] == ["Globex"]
        assert client.delete(f"/api/v1/favorites/{company_id}", headers=headers).json() == {"success": True}

    @pytest.mark.integration
    def test_unknown_company(self, client):
        headers = register(client)
        assert client.post("/api/v1/favorites/99999", headers=headers).status_code == 404


class TestComparisonEndpoints:

    @pytest.mark.integration
    def test_requires_user(self, client):
        assert client.get("/api/v1/comparisons").status_code == 401
        response = client.post("/api/v1/comparisons", json={"name": "x", "company_ids": [1]})
        assert response.status_code == 401

    @pytest.mark.integration
    def test_scoped_to_owner(self, client):
        alice = register(client, "alice@culturemail.io")
        bob = register(client, "bob@culturemail.io")

        created = client.post(
            "/api/v1/comparisons", json={"name": "Big tech", "company_ids": [1, 2]}, headers=alice
        )
        assert created.status_code == 201
        comparison_id = created.json()["id"]
        assert created.json()["company_ids"] == [1, 2]

        assert client.get("/api/v1/comparisons", headers=bob).json() == []
        assert client.patch(
            f"/api/v1/comparisons/{comparison_id}", json={"name": "Mine now"}, headers=bob
        ).status_code == 404
        assert client.delete(f"/api/v1/comparisons/{comparison_id}", headers=bob).status_code == 404

        renamed = client.patch(
            f"/api/v1/comparisons/{comparison_id}", json={"name": "FAANG"}, headers=alice
        )
        assert renamed.json()["name"] == "FAANG"
        assert client.delete(
            f"/api/v1/comparisons/{comparison_id}", headers=alice
        ).json() == {"success": True}

    @pytest.mark.integration
    def test_empty_company_list_rejected(self, client):
        headers = register(client)
        response = client.post(
            "/api/v1/comparisons", json={"name": "Empty", "company_ids": []}, headers=headers
        )
        assert response.status_code == 422


class TestSalaryAndComparisonEndpoints:

    @pytest.mark.integration
    def test_salary_endpoints(self, client, sample_salaries):
        stats = client.get(
            "/api/v1/salary/stats", params={"job_title": "Software Engineer", "level": "Senior"}
        ).json()
        assert stats["count"] == 2

        assert client.get("/api/v1/salary/levels").json() == ["Mid", "Senior"]
        assert client.get("/api/v1/salary/range", params={"job_title": "engineer"}).json()["count"] == 3

    @pytest.mark.integration
    def test_comparison_metrics(self, client, sample_companies):
        ids = [sample_companies["acme"].id, sample_companies["initech"].id]
        response = client.get("/api/v1/comparison/metrics", params=[("company_ids", i) for i in ids])

        assert [row["name"] for row in response.json()] == ["Acme Corp", "Initech"]

    @pytest.mark.integration
    def test_comparison_data(self, client, sample_companies, sample_salaries):
        response = client.get(
            "/api/v1/comparison/data", params={"company_ids": sample_companies["acme"].id}
        )

        data = response.json()
        assert len(data) == 1
        assert len(data[0]["salary_data"]) == 2


class TestJobAndNewsEndpoints:

    @pytest.mark.integration
    def test_job_openings(self, client, sample_companies):
        company_id = sample_companies["acme"].id
        created = client.post("/api/v1/jobs", json={"company_id": company_id, "job_title": "SRE"})
        assert created.status_code == 201

        jobs = client.get(f"/api/v1/jobs/company/{company_id}").json()
        assert [j["job_title"] for j in jobs] == ["SRE"]

    @pytest.mark.integration
    def test_news(self, client, sample_companies):
        company_id = sample_companies["acme"].id
        created = client.post("/api/v1/news", json={
            "company_id": company_id, "headline": "Acme expands", "sentiment": "positive"
        })
        assert created.status_code == 201

        news = client.get(f"/api/v1/news/company/{company_id}").json()
        assert news[0]["headline"] == "Acme expands"

    @pytest.mark.integration
    def test_news_invalid_sentiment(self, client):
        response = client.post("/api/v1/news", json={"headline": "x", "sentiment": "ecstatic"})
        assert response.status_code == 422

    @pytest.mark.integration
    def test_news_refresh_without_key(self, client, sample_companies):
        company_id = sample_companies["acme"].id
        response = client.post(f"/api/v1/news/company/{company_id}/refresh")
        assert response.json() == {"company_id": company_id, "stored": 0}


class TestExternalIntegrationEndpoints:

    @pytest.mark.integration
    def test_job_search_without_key(self, client):
        response = client.get("/api/v1/linkedin-jobs/search")
        assert response.status_code == 502
        assert "RAPIDAPI_JSEARCH_KEY" in response.json()["detail"]

    @pytest.mark.integration
    def test_linkedin_search_without_key(self, client):
        response = client.get("/api/v1/linkedin-jobs/linkedin/search")
        assert response.status_code == 200
        assert response.json()["jobs"] == []

    @pytest.mark.integration
    def test_glassdoor_refresh_without_key(self, client, sample_companies):
        company_id = sample_companies["acme"].id
        response = client.post(f"/api/v1/glassdoor/{company_id}/refresh")

        assert response.json() == {"success": True, "interviews_count": 0}
        assert client.get(f"/api/v1/glassdoor/{company_id}/metrics").status_code == 404

    @pytest.mark.integration
    def test_chat_without_llm(self, client):
        response = client.post(
            "/api/v1/chatbot/chat", json={"messages": [{"role": "user", "content": "hi"}]}
        )
        assert response.status_code == 502
        assert response.json()["detail"] == "Failed to get response from AI assistant"

    @pytest.mark.integration
    def test_recommendations_without_llm(self, client, sample_companies):
        response = client.post(
            "/api/v1/recommendations", json={"preferred_industry": "Technology", "limit": 2}
        )
        data = response.json()
        assert data["strategy"] == "heuristic"
        assert [c["name"] for c in data["companies"]] == ["Acme Corp", "Globex"]


class TestDemoEndpoints:

    @pytest.mark.integration
    def test_demo(self, client):
        assert len(client.get("/api/v1/demo/companies").json()) == 12
        assert client.get("/api/v1/demo/companies/1").json()["name"] == "Google"
        assert client.get("/api/v1/demo/companies/99").status_code == 404

        filtered = client.get("/api/v1/demo/companies/filter", params={"industry": "Entertainment"})
        assert [c["name"] for c in filtered.json()] == ["Netflix", "Spotify"]
