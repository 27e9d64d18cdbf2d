"""Tests for core/normalize.py — alias rules and field synthesis."""

from datetime import datetime

from job_aggregator.core.normalize import (
    NO_DESCRIPTION,
    FieldRule,
    apply_rules,
    as_bool,
    as_string_list,
    classify_experience_level,
    clean_description,
    format_posted_date,
    generate_benefits,
    generate_requirements,
    sample_description,
    sample_source,
)


def test_apply_rules_takes_first_present_alias():
    rules = {
        "title": FieldRule(("title", "jobTitle"), "Untitled"),
        "company": FieldRule(("company", "companyName"), "Unknown"),
    }
    fields = apply_rules({"title": "", "jobTitle": "Engineer", "companyName": "Acme"}, rules)

    assert fields == {"title": "Engineer", "company": "Acme"}


def test_apply_rules_falls_back_to_default():
    rules = {"title": FieldRule(("title",), "Untitled")}
    assert apply_rules({}, rules) == {"title": "Untitled"}


def test_classify_experience_level_order():
    assert classify_experience_level("Senior Lead Engineer") == "Senior"
    assert classify_experience_level("Tech Lead") == "Lead"
    assert classify_experience_level("Principal Engineer") == "Principal"
    assert classify_experience_level("Junior Developer") == "Junior"
    assert classify_experience_level("Engineer") == "Mid-level"


def test_generate_requirements_by_seniority_and_stack():
    senior = generate_requirements("Senior Frontend Engineer", "Acme")
    assert "5+ years of relevant experience" in senior
    assert "Proficiency in React, JavaScript, HTML, CSS" in senior

    junior = generate_requirements("Junior Backend Developer", "Acme")
    assert "1-2 years of experience" in junior
    assert "Experience with server-side technologies" in junior

    mid = generate_requirements("Engineer", "Acme")
    assert "3+ years of relevant experience" in mid


def test_generate_benefits_adds_startup_perks():
    assert "Stock options" in generate_benefits("TechCorp")
    assert "Stock options" not in generate_benefits("Bank of Somewhere")


def test_format_posted_date_buckets():
    now = datetime(2026, 3, 31)
    assert format_posted_date("2026-03-30", now) == "1 day ago"
    assert format_posted_date("2026-03-27", now) == "4 days ago"
    assert format_posted_date("2026-03-21", now) == "2 weeks ago"
    assert format_posted_date("2026-01-01", now) == "3 months ago"
    assert format_posted_date("not a date", now) == "Recently"
    assert format_posted_date(None, now) == "Recently"


def test_clean_description_strips_html():
    assert clean_description("<p>Build <b>great</b> things</p>") == "Build great things"
    assert clean_description("Plain text ") == "Plain text"
    assert clean_description("") == NO_DESCRIPTION


def test_as_string_list_and_as_bool():
    assert as_string_list("one") == ["one"]
    assert as_string_list(["a", "", "b"]) == ["a", "b"]
    assert as_string_list(None) == []
    assert as_bool("true")
    assert not as_bool("no")
    assert as_bool(1)


def test_sample_markers():
    assert sample_source("No Key") == "Sample Data (No Key)"
    assert sample_description("text").startswith("[SAMPLE DATA]")
