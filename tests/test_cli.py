"""Tests for cli.py — command wiring against stubbed components."""

import json

import pytest

from job_aggregator import cli
from job_aggregator.core.models import SearchCriteria
from job_aggregator.integrations.aggregator import JobAggregator, ProviderRegistration
from tests.conftest import StubProvider


@pytest.fixture
def config_path(tmp_path):
    return str(tmp_path / "config.json")


@pytest.fixture
def stub_aggregator(monkeypatch, make_posting):
    provider = StubProvider("Stub", [
        make_posting(id="s1", title="Software Engineer", source="Stub"),
        make_posting(id="s2", title="Sample Engineer", description="[SAMPLE DATA] x", source="Sample Data (test)"),
    ])
    aggregator = JobAggregator(providers=[ProviderRegistration(provider, 1)])
    monkeypatch.setattr(cli, "build_aggregator", lambda config, providers=None: aggregator)
    return provider


def test_search_prints_results_and_writes_json(stub_aggregator, config_path, tmp_path, capsys):
    output = tmp_path / "jobs.json"
    cli.main([
        "--config", config_path, "search",
        "--query", "Software Engineer", "--city", "Austin", "--remote", "-o", str(output),
    ])

    out = capsys.readouterr().out
    assert "Found 2 jobs" in out
    assert "SAMPLE DATA" in out
    assert "✅ Stub: 2 jobs" in out

    assert stub_aggregator.calls == [
        SearchCriteria(search_query="Software Engineer", city="Austin", remote=True)
    ]
    saved = json.loads(output.read_text())
    assert saved["total_count"] == 2
    assert saved["has_sample_data"] is True


def test_invalid_salary_range_exits_with_error(config_path, capsys):
    with pytest.raises(SystemExit) as exc:
        cli.main(["--config", config_path, "search", "--min-salary", "200", "--max-salary", "100"])

    assert exc.value.code == 1
    assert "Error:" in capsys.readouterr().out


def test_build_aggregator_filters_providers(config_path):
    aggregator = cli.build_aggregator(cli.Config(config_path), "linkedin, Indeed")
    assert [r.name for r in aggregator.registrations] == ["LinkedIn", "Indeed"]


def test_contacts_without_keys_prints_test_banner(config_path, capsys):
    cli.main(["--config", config_path, "contacts", "--company", "Apple", "--type", "recruiter"])

    out = capsys.readouterr().out
    assert "Found 6 contacts" in out
    assert "TEST PROFILES" in out
    assert "Isabella Garcia" in out


def test_contacts_advanced_limit(config_path, capsys):
    cli.main([
        "--config", config_path, "contacts", "--company", "Apple",
        "--level", "executive", "--sort", "connections", "--limit", "1",
    ])

    out = capsys.readouterr().out
    assert "Found 1 contacts" in out
    assert "Benjamin Wilson" in out


def test_providers_command(config_path, capsys):
    cli.main(["--config", config_path, "providers"])

    out = capsys.readouterr().out
    assert "0/5 live" in out
    assert "Google Jobs" in out
    assert "1. Google Jobs: ⚠️  sample data (no API key)" in out
    assert "2. LinkedIn: ⚠️  sample data (no API key)" in out
    assert "3. Indeed: ⛔ skipped (no API key)" in out
    assert "5. ZipRecruiter: ⛔ skipped (no API key)" in out


def test_config_set_and_show(config_path, capsys):
    cli.main(["--config", config_path, "config", "--set", "lookup.cache_expiry", "60"])
    cli.main(["--config", config_path, "config", "--show"])

    out = capsys.readouterr().out
    assert '"cache_expiry": 60' in out


def test_no_command_prints_help_and_exits(capsys):
    with pytest.raises(SystemExit):
        cli.main([])
