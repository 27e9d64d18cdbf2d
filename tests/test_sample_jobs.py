"""Tests for integrations/sample_jobs.py — tagged synthetic postings."""

from job_aggregator.core.models import SearchCriteria
from job_aggregator.integrations.sample_jobs import generate_sample_jobs, title_variations


def test_title_variations_known_family():
    titles = title_variations("Data Scientist")
    assert titles[0] == "Data Scientist"
    assert "Machine Learning Engineer" in titles
    assert len(titles) == len(set(titles))


def test_title_variations_unknown_query():
    assert title_variations("Welder") == [
        "Welder", "Senior Welder", "Lead Welder", "Principal Welder", "Welder Architect",
    ]


def test_generated_postings_are_tagged_and_sized():
    criteria = SearchCriteria(search_query="Welder", city="Tulsa", salary_min=60000, job_type="Contract")
    jobs = generate_sample_jobs(criteria, "test", "No Key", count=3)

    assert [job.id for job in jobs] == ["test_sample_1", "test_sample_2", "test_sample_3"]
    assert all(job.is_sample for job in jobs)
    assert all(job.source == "Sample Data (No Key)" for job in jobs)
    assert [job.salary for job in jobs] == ["60k - 100k", "70k - 110k", "80k - 120k"]
    assert all(job.job_type == "Contract" for job in jobs)
    assert all(job.remote == (job.location == "Remote") for job in jobs)
    assert all(job.location in ("Remote", "Hybrid") or job.location.startswith("Tulsa") for job in jobs)
