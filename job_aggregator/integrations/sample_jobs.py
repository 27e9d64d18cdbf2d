"""
Sample postings returned when a provider cannot reach live data.

Every generated posting carries the sample-data marker in its
description and a "Sample Data (...)" source label.
"""

from typing import Optional
from urllib.parse import quote_plus
import random

from job_aggregator.core.models import Posting, SearchCriteria
from job_aggregator.core.normalize import (
    classify_experience_level,
    generate_benefits,
    generate_requirements,
    sample_description,
    sample_source,
)

SAMPLE_COMPANIES = [
    "Microsoft", "Google", "Apple", "Amazon", "Meta", "Netflix", "Uber", "Airbnb",
    "Stripe", "Square", "Slack", "Zoom", "Salesforce", "Adobe", "Oracle", "IBM",
    "Intel", "NVIDIA", "Tesla", "SpaceX", "Palantir", "Snowflake", "Databricks",
    "MongoDB", "Elastic", "GitHub", "GitLab", "Atlassian", "Shopify", "Twilio",
]

SAMPLE_CITIES = ["San Francisco", "New York", "Seattle", "Austin", "Chicago"]

TITLE_VARIATIONS = {
    "account executive": [
        "Account Executive",
        "Senior Account Executive",
        "Account Manager",
        "Sales Account Executive",
        "Enterprise Account Executive",
    ],
    "software engineer": [
        "Software Engineer",
        "Senior Software Engineer",
        "Software Developer",
        "Full Stack Developer",
        "Backend Developer",
        "Frontend Developer",
    ],
    "data scientist": [
        "Data Scientist",
        "Senior Data Scientist",
        "Data Analyst",
        "Machine Learning Engineer",
        "Data Engineer",
    ],
    "product manager": [
        "Product Manager",
        "Senior Product Manager",
        "Product Owner",
        "Technical Product Manager",
    ],
}


def title_variations(query: str) -> list[str]:
    """Plausible job titles for a query, the query itself first."""
    main_title = query.strip() or "Software Engineer"
    variations = [main_title]
    lowered = main_title.lower()

    for family, titles in TITLE_VARIATIONS.items():
        if family in lowered:
            variations.extend(titles)
            break
    else:
        variations.extend([
            f"Senior {main_title}",
            f"Lead {main_title}",
            f"Principal {main_title}",
            f"{main_title} Architect",
        ])

    # dict.fromkeys keeps first-seen order
    return list(dict.fromkeys(variations))


def sample_locations(criteria: SearchCriteria) -> list[str]:
    country = criteria.country or "United States"
    locations = [f"{criteria.city or city}, {country}" for city in SAMPLE_CITIES]
    locations.extend(["Remote", "Hybrid"])
    return locations


def generate_sample_jobs(
    criteria: SearchCriteria,
    id_prefix: str,
    reason: str,
    count: int = 8,
    titles: Optional[list[str]] = None,
) -> list[Posting]:
    """
    Generate sample postings for a search.

    The generator is seeded from the provider prefix and the query, so the
    same search always yields the same sample set.

    Args:
        criteria: The search being answered
        id_prefix: Provider namespace for posting ids
        reason: Why live data is unavailable, shown in the source label
        count: Number of postings to generate
        titles: Candidate titles (defaults to variations of the query)
    """
    rng = random.Random(f"{id_prefix}:{criteria.search_query}")
    titles = titles or title_variations(criteria.search_query)
    locations = sample_locations(criteria)
    base_salary = criteria.salary_min // 1000 if criteria.salary_min else 80

    jobs = []
    for i in range(count):
        company = rng.choice(SAMPLE_COMPANIES)
        title = rng.choice(titles)
        location = rng.choice(locations)
        low = base_salary + i * 10

        jobs.append(Posting(
            id=f"{id_prefix}_sample_{i + 1}",
            title=title,
            company=company,
            location=location,
            salary=f"{low}k - {low + 40}k",
            description=sample_description(
                f"We are looking for a talented {title.lower()} to join our team at "
                f"{company}. You will work on cutting-edge projects and collaborate "
                f"with a team of experienced professionals. "
                f"Note: this is sample data ({reason.lower()})."
            ),
            url=(
                "https://www.linkedin.com/jobs/search/?keywords="
                f"{quote_plus(f'{title} {company}')}"
            ),
            posted_date=f"{i + 1} day{'s' if i > 0 else ''} ago",
            source=sample_source(reason),
            job_type=criteria.job_type or "Full-time",
            experience_level=classify_experience_level(title),
            requirements=generate_requirements(title, company),
            benefits=generate_benefits(company),
            remote=location == "Remote",
        ))

    return jobs
