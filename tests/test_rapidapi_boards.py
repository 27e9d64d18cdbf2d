"""Tests for the RapidAPI job boards — Indeed, Glassdoor and ZipRecruiter."""

import pytest
import requests
import responses

from job_aggregator.core.models import SearchCriteria
from job_aggregator.integrations.glassdoor import GlassdoorProvider
from job_aggregator.integrations.indeed import IndeedProvider
from job_aggregator.integrations.ziprecruiter import ZipRecruiterProvider

INDEED_URL = "https://indeed11.p.rapidapi.com/search"
GLASSDOOR_URL = "https://glassdoor-api.p.rapidapi.com/jobs"
ZIPRECRUITER_URL = "https://ziprecruiter1.p.rapidapi.com/jobs"


def test_no_key_returns_empty_without_network():
    with responses.RequestsMock() as rsps:
        assert IndeedProvider().search_jobs(SearchCriteria(search_query="Engineer")) == []
        assert len(rsps.calls) == 0


@responses.activate
def test_indeed_parses_alias_fields():
    responses.add(
        responses.GET,
        INDEED_URL,
        json={"jobs": [{
            "jobId": "j1",
            "jobTitle": "Junior Backend Developer",
            "companyName": "Hooli",
            "jobLocation": "Remote",
            "jobDescription": "<div>Write APIs</div>",
            "salaryRange": "70k - 90k",
            "employmentType": "Part-time",
            "datePosted": "2 days ago",
            "jobUrl": "https://indeed.example/j1",
            "workFromHome": "true",
        }]},
    )

    jobs = IndeedProvider("key").search_jobs(SearchCriteria(search_query="Backend"))

    job = jobs[0]
    assert job.id == "indeed_j1"
    assert job.title == "Junior Backend Developer"
    assert job.company == "Hooli"
    assert job.location == "Remote"
    assert job.description == "Write APIs"
    assert job.salary == "70k - 90k"
    assert job.job_type == "Part-time"
    assert job.posted_date == "2 days ago"
    assert job.url == "https://indeed.example/j1"
    assert job.remote is True
    assert job.experience_level == "Junior"
    assert "1-2 years of experience" in job.requirements
    assert "Health insurance" in job.benefits
    assert job.source == "Indeed"

    request = responses.calls[0].request
    assert request.headers["X-RapidAPI-Key"] == "key"
    assert request.headers["X-RapidAPI-Host"] == "indeed11.p.rapidapi.com"
    assert request.params["query"] == "Backend"
    assert request.params["location"] == "United States"


@responses.activate
def test_missing_fields_get_sentinels():
    responses.add(responses.GET, GLASSDOOR_URL, json=[{}])

    job = GlassdoorProvider("key").search_jobs(SearchCriteria())[0]

    assert job.id == "glassdoor_0"
    assert job.title == "Job Title Not Available"
    assert job.company == "Company Not Available"
    assert job.location == "Location Not Available"
    assert job.description == "No description available"
    assert job.url == "#"
    assert job.posted_date == "Recently"
    assert job.job_type == "Full-time"
    assert job.remote is False


@responses.activate
def test_glassdoor_and_ziprecruiter_query_params():
    responses.add(responses.GET, GLASSDOOR_URL, json={"data": []})
    responses.add(responses.GET, ZIPRECRUITER_URL, json={"results": []})
    criteria = SearchCriteria(search_query="Nurse", city="Reno", country="US")

    assert GlassdoorProvider("key").search_jobs(criteria) == []
    assert ZipRecruiterProvider("key").search_jobs(criteria) == []

    assert responses.calls[0].request.params["q"] == "Nurse"
    assert responses.calls[0].request.params["l"] == "Reno, US"
    assert responses.calls[1].request.params["search"] == "Nurse"
    assert responses.calls[1].request.params["location"] == "Reno, US"


@pytest.mark.parametrize("status", [401, 429, 500])
@responses.activate
def test_http_errors_return_empty(status):
    responses.add(responses.GET, ZIPRECRUITER_URL, status=status)
    assert ZipRecruiterProvider("key").search_jobs(SearchCriteria()) == []


@responses.activate
def test_network_error_returns_empty():
    responses.add(responses.GET, INDEED_URL, body=requests.ConnectionError("down"))
    assert IndeedProvider("key").search_jobs(SearchCriteria()) == []


@responses.activate
def test_invalid_json_returns_empty():
    responses.add(responses.GET, INDEED_URL, body="<html>oops</html>")
    assert IndeedProvider("key").search_jobs(SearchCriteria()) == []


@responses.activate
def test_numeric_salary_is_stringified():
    responses.add(responses.GET, INDEED_URL, json={"jobs": [{"title": "Chef", "salary": 55000}]})
    job = IndeedProvider("key").search_jobs(SearchCriteria())[0]
    assert job.salary == "55000"
