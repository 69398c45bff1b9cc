"""Pytest fixtures for bounty-feed tests."""

from typing import Callable

import httpx
import pytest

from bounty_feed.models.business import Business, BusinessLead, MissingFeature, PainPoint, Review
from bounty_feed.models.record import Budget, CanonicalRecord

Handler = Callable[[httpx.Request], httpx.Response]


@pytest.fixture
def make_client() -> Callable[[Handler], httpx.AsyncClient]:
    """Factory for an AsyncClient whose requests are answered by handler."""

    def _make(handler: Handler) -> httpx.AsyncClient:
        return httpx.AsyncClient(transport=httpx.MockTransport(handler))

    return _make


@pytest.fixture
def remoteok_payload() -> list[dict]:
    """RemoteOK API response: legal notice first, then jobs."""
    return [
        {"legal": "API Terms of Service: please link back to RemoteOK."},
        {
            "id": "101",
            "slug": "remote-senior-python-developer-acme-101",
            "epoch": 1767225600,
            "date": "2026-01-01T00:00:00+00:00",
            "company": "Acme",
            "position": "Senior Python Developer",
            "tags": ["python", "django", "api"],
            "description": "<p>We are hiring a <b>Python</b> engineer to build web APIs.</p>",
            "location": "Worldwide",
            "salary_min": 90000,
            "salary_max": 120000,
            "url": "https://remoteok.com/remote-jobs/remote-senior-python-developer-acme-101",
        },
        {
            "id": "102",
            "slug": "remote-web-designer-globex-102",
            "epoch": 1767139200,
            "company": "Globex",
            "position": "Web Designer",
            "tags": ["design", "figma"],
            "description": "Design landing pages for our marketing team.",
            "location": "",
            "salary_min": 0,
            "salary_max": 0,
        },
        {
            "id": "103",
            "slug": "remote-backend-engineer-initech-103",
            "epoch": 1767052800,
            "company": "Initech",
            "position": "Backend Engineer",
            "tags": ["go"],
            "description": "Maintain payment services and internal tooling.",
            "location": "USA",
            "salary_min": 40000,
            "salary_max": 50000,
        },
    ]


@pytest.fixture
def arbeitnow_payload() -> dict:
    """Arbeitnow API response with one English and one German posting."""
    return {
        "data": [
            {
                "slug": "frontend-developer-berlin-123",
                "company_name": "Nordwerk",
                "title": "Frontend Developer",
                "description": "<p>Build and maintain our React web application with a small team.</p>",
                "remote": True,
                "url": "https://www.arbeitnow.com/jobs/frontend-developer-berlin-123",
                "tags": ["react", "typescript"],
                "location": "Berlin",
                "created_at": 1767225600,
            },
            {
                "slug": "softwareentwickler-muenchen-456",
                "company_name": "Südlicht GmbH",
                "title": "Softwareentwickler (m/w/d)",
                "description": (
                    "Wir suchen für unser Team einen Entwickler mit Erfahrung in Python. "
                    "Sie arbeiten mit den Kollegen an der Plattform und sind auch für die Wartung zuständig."
                ),
                "remote": False,
                "url": "https://www.arbeitnow.com/jobs/softwareentwickler-muenchen-456",
                "tags": ["python"],
                "location": "",
                "created_at": 1767139200,
            },
        ],
        "links": {},
        "meta": {},
    }


@pytest.fixture
def himalayas_payload() -> dict:
    """Himalayas API response."""
    return {
        "jobs": [
            {
                "guid": "him-1",
                "title": "Web Design Lead",
                "companyName": "Pixel Co",
                "excerpt": "Lead web design for our product site.",
                "categories": ["Design", "Web"],
                "minSalary": 70000,
                "maxSalary": 95000,
                "salaryCurrency": "eur",
                "locationRestrictions": ["Germany", "France"],
                "applicationLink": "https://himalayas.app/companies/pixel-co/jobs/web-design-lead",
                "pubDate": 1767225600,
            },
            {
                "guid": "him-2",
                "title": "Data Engineer",
                "companyName": "Streamly",
                "excerpt": "Own our data pipelines.",
                "categories": ["Data"],
                "applicationLink": "https://himalayas.app/companies/streamly/jobs/data-engineer",
                "pubDate": "2026-01-02T10:00:00Z",
            },
        ]
    }


@pytest.fixture
def jsearch_payload() -> dict:
    """JSearch response with one Indeed and one LinkedIn job."""
    return {
        "status": "OK",
        "data": [
            {
                "job_id": "js-indeed-1",
                "job_title": "Contract Web Developer",
                "employer_name": "Brightside",
                "job_publisher": "Indeed",
                "job_apply_link": "https://indeed.com/viewjob?jk=1",
                "job_description": "Build marketing websites.",
                "job_is_remote": True,
                "job_posted_at_datetime_utc": "2026-01-03T12:00:00.000Z",
                "job_min_salary": 50,
                "job_max_salary": 80,
                "job_salary_currency": "USD",
                "job_salary_period": "HOUR",
                "job_highlights": {"Qualifications": ["3+ years JavaScript experience required", "Strong CSS skills"]},
            },
            {
                "job_id": "js-linkedin-2",
                "job_title": "Python Engineer",
                "employer_name": "Quantix",
                "job_publisher": "LinkedIn",
                "job_apply_link": "https://linkedin.com/jobs/view/2",
                "job_description": "Backend services in Python.",
                "job_is_remote": False,
                "job_city": "Austin",
                "job_state": "TX",
                "job_country": "US",
                "job_required_skills": ["Python", "PostgreSQL"],
                "job_min_salary": 120000,
                "job_max_salary": 150000,
                "job_salary_period": "YEAR",
            },
        ],
    }


def make_record(**kwargs) -> CanonicalRecord:
    defaults = {
        "id": "remoteok:1",
        "source": "remoteok",
        "source_url": "https://remoteok.com/remote-jobs/1",
        "title": "Python developer",
        "description": "Build web services for our customers.",
    }
    defaults.update(kwargs)
    return CanonicalRecord(**defaults)


@pytest.fixture
def record_factory() -> Callable[..., CanonicalRecord]:
    """Factory for CanonicalRecord with sensible defaults."""
    return make_record


@pytest.fixture
def budget_record() -> CanonicalRecord:
    """Record with a 500-1000 fixed budget."""
    return make_record(id="remoteok:b", budget=Budget(min=500, max=1000, type="fixed"))


@pytest.fixture
def salon() -> Business:
    """Business as returned by place details."""
    return Business(
        id="gp_place-1",
        name="Bella Salon",
        category="Beauty Salon",
        address="12 Main St, Austin, TX 78701, USA",
        city="Austin",
        country="United States",
        website=None,
        rating=3.4,
        review_count=120,
        source_id="place-1",
    )


@pytest.fixture
def salon_reviews() -> list[Review]:
    """Reviews with booking and wait-time complaints."""
    return [
        Review(id="r1", business_id="gp_place-1", rating=2, text="Hard to book, the phone always busy.", date="2026-09-01T00:00:00+00:00"),
        Review(id="r2", business_id="gp_place-1", rating=1, text="Long wait even with an appointment.", date="2026-08-15T00:00:00+00:00"),
        Review(id="r3", business_id="gp_place-1", rating=5, text="Lovely staff, great cut!", date="2026-07-01T00:00:00+00:00"),
        Review(id="r4", business_id="gp_place-1", rating=4, text="Great color but I wish there was a way to book online.", date="2025-01-01T00:00:00+00:00"),
    ]


@pytest.fixture
def salon_lead(salon: Business) -> BusinessLead:
    """Lead with one pain point and the no-website feature."""
    return BusinessLead(
        id="opp_gp_place-1",
        business=salon,
        pain_points=[
            PainPoint(category="booking_issues", keywords=["hard to book"], review_ids=["r1", "r2"], severity=6.5, count=2)
        ],
        missing_features=[MissingFeature(feature="website", confidence=1.0)],
        opportunity_score=72,
        priority_level="high",
    )
