"""Tests for integrations/google_jobs.py — SerpApi adapter."""

import responses

from job_aggregator.core.models import SearchCriteria
from job_aggregator.integrations.google_jobs import (
    GoogleJobsProvider,
    annualized_salaries,
    meets_salary_filter,
)

SERP_RESULT = {
    "job_id": "abc123",
    "title": "Senior Data Scientist",
    "company_name": "Initech",
    "location": "Austin, TX",
    "description": "<p>Model <b>all</b> the things.</p>",
    "extensions": ["3 days ago", "120K–150K a year", "Full-time"],
    "detected_extensions": {
        "posted_at": "3 days ago",
        "schedule_type": "Full-time",
        "work_from_home": True,
    },
    "job_highlights": [
        {"title": "Qualifications", "items": ["Python", "Statistics"]},
        {"title": "Benefits", "items": ["Dental"]},
    ],
    "apply_options": [{"title": "Initech", "link": "https://initech.example/apply"}],
}


def test_no_key_returns_tagged_sample_data():
    jobs = GoogleJobsProvider().search_jobs(SearchCriteria(search_query="Data Scientist"))

    assert jobs
    assert all(job.is_sample for job in jobs)
    assert all(job.source == "Sample Data (SerpApi Not Configured)" for job in jobs)


def test_sample_data_is_deterministic():
    criteria = SearchCriteria(search_query="Data Scientist")
    first = GoogleJobsProvider().search_jobs(criteria)
    second = GoogleJobsProvider().search_jobs(criteria)
    assert [j.to_dict() for j in first] == [j.to_dict() for j in second]


@responses.activate
def test_parses_serpapi_results():
    responses.add(
        responses.GET,
        GoogleJobsProvider.API_URL,
        json={"jobs_results": [SERP_RESULT]},
        status=200,
    )

    jobs = GoogleJobsProvider("key").search_jobs(SearchCriteria(search_query="Data Scientist"))

    assert len(jobs) == 1
    job = jobs[0]
    assert job.id == "google_jobs_abc123"
    assert job.title == "Senior Data Scientist"
    assert job.company == "Initech"
    assert job.salary == "120K–150K a year"
    assert job.description == "Model all the things."
    assert job.url == "https://initech.example/apply"
    assert job.posted_date == "3 days ago"
    assert job.remote is True
    assert job.experience_level == "Senior"
    assert job.requirements == ["Python", "Statistics"]
    assert job.benefits == ["Dental"]
    assert job.source == "Google Jobs"
    assert not job.is_sample


@responses.activate
def test_request_params():
    responses.add(responses.GET, GoogleJobsProvider.API_URL, json={"jobs_results": [SERP_RESULT]})

    criteria = SearchCriteria(
        search_query="Data Scientist",
        city="Austin",
        remote=True,
        posted_within=7,
        job_type="FULLTIME",
    )
    GoogleJobsProvider("key").search_jobs(criteria)

    params = responses.calls[0].request.params
    assert params["engine"] == "google_jobs"
    assert params["q"] == "Data Scientist jobs in Austin remote"
    assert params["api_key"] == "key"
    assert params["date_posted"] == "week"
    assert params["employment_type"] == "FULLTIME"


@responses.activate
def test_http_error_falls_back_to_sample():
    responses.add(responses.GET, GoogleJobsProvider.API_URL, status=500)

    jobs = GoogleJobsProvider("key").search_jobs(SearchCriteria(search_query="Engineer"))

    assert jobs
    assert all(job.source == "Sample Data (Google Jobs Unavailable)" for job in jobs)


@responses.activate
def test_serpapi_error_message_falls_back_to_sample():
    responses.add(responses.GET, GoogleJobsProvider.API_URL, json={"error": "Invalid API key."})

    jobs = GoogleJobsProvider("bad").search_jobs(SearchCriteria(search_query="Engineer"))

    assert all(job.is_sample for job in jobs)


@responses.activate
def test_empty_results_fall_back_to_sample():
    responses.add(responses.GET, GoogleJobsProvider.API_URL, json={"jobs_results": []})

    jobs = GoogleJobsProvider("key").search_jobs(SearchCriteria(search_query="Engineer"))

    assert all(job.source == "Sample Data (No Google Jobs Results)" for job in jobs)


@responses.activate
def test_salary_filter_drops_underpaid_listings():
    low = dict(SERP_RESULT, job_id="low", extensions=["50K–60K a year"])
    unknown = dict(SERP_RESULT, job_id="unknown", extensions=["Full-time"])
    responses.add(
        responses.GET,
        GoogleJobsProvider.API_URL,
        json={"jobs_results": [SERP_RESULT, low, unknown]},
    )

    jobs = GoogleJobsProvider("key").search_jobs(
        SearchCriteria(search_query="Data Scientist", salary_min=100000)
    )

    assert [job.id for job in jobs] == ["google_jobs_abc123", "google_jobs_unknown"]


def test_annualized_salaries():
    assert annualized_salaries("120K–150K a year") == [120000, 150000]
    assert annualized_salaries("45 an hour") == [93600]
    assert annualized_salaries("Competitive") == []


def test_meets_salary_filter(make_posting):
    assert meets_salary_filter(make_posting(salary="90K–130K a year"), 100000)
    assert not meets_salary_filter(make_posting(salary="50K–60K a year"), 100000)
    assert meets_salary_filter(make_posting(salary=None), 100000)
    assert meets_salary_filter(make_posting(salary="50K"), None)


@responses.activate
def test_malformed_highlights_and_apply_options_are_skipped():
    responses.add(
        responses.GET,
        GoogleJobsProvider.API_URL,
        json={
            "jobs_results": [
                {"title": "X", "job_highlights": ["Qualifications: Python"]},
                {"title": "Y", "apply_options": ["https://y.example"], "share_link": "https://share.example/y"},
            ]
        },
    )

    jobs = GoogleJobsProvider("key").search_jobs(SearchCriteria(search_query="Engineer"))

    assert [job.title for job in jobs] == ["X", "Y"]
    assert not any(job.is_sample for job in jobs)
    assert jobs[0].requirements == []
    assert jobs[1].url == "https://share.example/y"


@responses.activate
def test_non_list_jobs_results_falls_back_to_sample():
    responses.add(responses.GET, GoogleJobsProvider.API_URL, json={"jobs_results": "oops"})

    jobs = GoogleJobsProvider("key").search_jobs(SearchCriteria(search_query="Engineer"))

    assert jobs
    assert all(job.source == "Sample Data (Google Jobs Unavailable)" for job in jobs)
