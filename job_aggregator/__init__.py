"""
Job Aggregator - Multi-source job search and contact lookup

This package:
1. Searches several job boards concurrently (Google Jobs, LinkedIn,
   Indeed, Glassdoor, ZipRecruiter)
2. Tolerates individual provider failures and falls back to tagged
   sample data where a provider has no live data
3. Deduplicates postings across providers by provider priority
4. Ranks postings by relevance to the search
5. Looks up people at a company through a rate-limited, cached,
   key-rotating LinkedIn profile search
"""

__version__ = "1.0.0"
__author__ = "Job Aggregator"
