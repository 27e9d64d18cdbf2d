"""
Job Aggregator CLI - Command line interface for the job aggregator.

Usage:
    python -m job_aggregator [command] [options]

Commands:
    search      Search every job provider and print ranked results
    contacts    Look up people at a company
    providers   Show provider availability and priorities
    config      Manage configuration

Examples:
    python -m job_aggregator search --query "Software Engineer" --city Austin --remote
    python -m job_aggregator search --query "Data Scientist" --min-salary 120000 -o jobs.json
    python -m job_aggregator contacts --company SpaceX --type recruiter
    python -m job_aggregator contacts --company Google --level senior --sort connections --limit 3
    python -m job_aggregator config --set-api-key serpapi YOUR_KEY
"""

import argparse
import json
import logging
import sys

from job_aggregator.core.models import ProfileSearchParams, SearchCriteria
from job_aggregator.integrations import JobAggregator, ProfileLookupClient
from job_aggregator.utils import Config


def main(argv=None):
    """Main entry point for the CLI."""
    parser = argparse.ArgumentParser(
        description="Job Aggregator - Multi-source job search and contact lookup",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=__doc__,
    )
    parser.add_argument("--verbose", "-v", action="store_true", help="Enable debug logging")
    parser.add_argument("--config", help="Path to config file")

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # Search command
    search_parser = subparsers.add_parser("search", help="Search for jobs")
    search_parser.add_argument("--query", "-q", default="", help="Job title or keywords")
    search_parser.add_argument("--city", help="City filter")
    search_parser.add_argument("--country", help="Country filter")
    search_parser.add_argument("--remote", action="store_true", help="Prefer remote jobs")
    search_parser.add_argument("--min-salary", type=int, help="Minimum annual salary")
    search_parser.add_argument("--max-salary", type=int, help="Maximum annual salary")
    search_parser.add_argument("--job-type", help="Employment type (e.g. FULLTIME)")
    search_parser.add_argument("--posted-within", type=int, help="Posted within N days")
    search_parser.add_argument("--providers", help="Comma-separated list of providers")
    search_parser.add_argument("--limit", "-n", type=int, help="Max results to print")
    search_parser.add_argument("--output", "-o", help="Output file (JSON)")

    # Contacts command
    contacts_parser = subparsers.add_parser("contacts", help="Look up people at a company")
    contacts_parser.add_argument("--company", "-c", required=True, help="Company name")
    contacts_parser.add_argument(
        "--type", "-t", dest="connection_type", default="employee",
        choices=["recruiter", "hiring_manager", "employee", "all"],
    )
    contacts_parser.add_argument("--level", choices=["entry", "mid", "senior", "executive"])
    contacts_parser.add_argument("--sort", choices=["relevance", "recent", "connections"])
    contacts_parser.add_argument("--limit", "-n", type=int, help="Max profiles")
    contacts_parser.add_argument("--title", help="Job title filter")
    contacts_parser.add_argument("--location", "-l", help="Location filter")
    contacts_parser.add_argument("--advanced", action="store_true", help="Use advanced search")
    contacts_parser.add_argument("--output", "-o", help="Output file (JSON)")

    # Providers command
    subparsers.add_parser("providers", help="Show provider status")

    # Config command
    config_parser = subparsers.add_parser("config", help="Manage configuration")
    config_parser.add_argument("--show", action="store_true", help="Show current config")
    config_parser.add_argument("--set", nargs=2, metavar=("KEY", "VALUE"), help="Set a config value")
    config_parser.add_argument("--set-api-key", nargs=2, metavar=("PROVIDER", "KEY"), help="Set API key")
    config_parser.add_argument("--init", action="store_true", help="Initialize default config")

    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s %(name)s %(levelname)s: %(message)s",
    )

    if not args.command:
        parser.print_help()
        sys.exit(1)

    config = Config(args.config)

    try:
        if args.command == "search":
            cmd_search(args, config)
        elif args.command == "contacts":
            cmd_contacts(args, config)
        elif args.command == "providers":
            cmd_providers(args, config)
        elif args.command == "config":
            cmd_config(args, config)
        else:
            parser.print_help()

    except KeyboardInterrupt:
        print("\n\nOperation cancelled.")
        sys.exit(1)
    except Exception as e:
        print(f"\nError: {e}")
        sys.exit(1)


def build_aggregator(config: Config, providers: str = None) -> JobAggregator:
    """Aggregator over the default providers, optionally narrowed by name."""
    aggregator = JobAggregator(config.get_providers_config())
    if providers:
        wanted = {p.strip().lower() for p in providers.split(",") if p.strip()}
        for registration in list(aggregator.registrations):
            if registration.name.lower() not in wanted:
                aggregator.remove_provider(registration.name)
    return aggregator


def cmd_search(args, config: Config):
    """Execute search command."""
    criteria = SearchCriteria(
        search_query=args.query,
        city=args.city,
        country=args.country,
        salary_min=args.min_salary,
        salary_max=args.max_salary,
        job_type=args.job_type,
        remote=args.remote,
        posted_within=args.posted_within,
    )

    print(f"🔍 Searching for '{criteria.search_query or 'all jobs'}'...")

    aggregator = build_aggregator(config, args.providers)
    result = aggregator.search_jobs(criteria)

    print(
        f"\n✅ Found {result.total_count} jobs in {result.search_time:.1f}s "
        f"({result.duplicates_removed} duplicates removed)\n"
    )

    if result.has_sample_data:
        print("⚠️  Some results are SAMPLE DATA, not live listings. Configure API keys for real data.\n")

    limit = args.limit or config.get_default_limit()
    for i, job in enumerate(result.jobs[:limit], 1):
        salary = ""
        if isinstance(job.salary, str) and job.salary:
            salary = f" | {job.salary}"

        print(f"{i:2}. {job.title}")
        print(f"    {job.company} | {job.location}{salary}")
        print(f"    Source: {job.source} | Posted: {job.posted_date} | ID: {job.id}")
        print()

    print("Sources:")
    for source_result in result.source_results:
        if source_result.success:
            print(
                f"   ✅ {source_result.source}: {len(source_result.jobs)} jobs "
                f"({source_result.response_time:.2f}s)"
            )
        else:
            print(f"   ❌ {source_result.source}: {source_result.error}")

    if args.output:
        with open(args.output, 'w') as f:
            json.dump(result.to_dict(), f, indent=2, default=str)
        print(f"\n💾 Saved {result.total_count} jobs to {args.output}")


def cmd_contacts(args, config: Config):
    """Execute contacts command."""
    print(f"👥 Looking up contacts at {args.company}...")

    client = ProfileLookupClient(
        api_keys=config.get_lookup_keys(),
        **config.get_lookup_settings(),
    )

    if args.advanced or args.level or args.sort or args.limit or args.title or args.location:
        params = ProfileSearchParams(
            query=args.company,
            company=args.company,
            location=args.location,
            job_title=args.title,
            connection_type=args.connection_type,
            experience_level=args.level,
            sort_by=args.sort,
            limit=args.limit,
        )
        profiles = client.advanced_search(params)
    else:
        profiles = client.search_company_employees(args.company, args.connection_type)

    print(f"\n✅ Found {len(profiles)} contacts\n")

    if any(profile.is_sample for profile in profiles):
        print("⚠️  These are TEST PROFILES, not real people. Configure RapidAPI keys for live data.\n")

    for i, profile in enumerate(profiles, 1):
        print(f"{i:2}. {profile.full_name} ({profile.connection_degree})")
        print(f"    {profile.job_title or profile.headline}")
        print(f"    {profile.location} | Mutual connections: {profile.mutual_connections}")
        if profile.profile_url:
            print(f"    {profile.profile_url}")
        print()

    if args.output:
        with open(args.output, 'w') as f:
            json.dump([p.to_dict() for p in profiles], f, indent=2, default=str)
        print(f"💾 Saved {len(profiles)} contacts to {args.output}")


def cmd_providers(args, config: Config):
    """Execute providers command."""
    stats = JobAggregator(config.get_providers_config()).get_stats()

    print(f"\n📋 Providers ({stats['available_providers']}/{stats['total_providers']} live)\n")
    for name, info in stats["providers"].items():
        if info["available"]:
            status = "✅ live"
        elif info["sample_fallback"]:
            status = "⚠️  sample data (no API key)"
        else:
            status = "⛔ skipped (no API key)"
        print(f"   {info['priority']}. {name}: {status}")


def cmd_config(args, config: Config):
    """Execute config command."""
    if args.init:
        config.save()
        print(f"✅ Created config at: {config.config_path}")

    elif args.show:
        print("\n📋 Current Configuration\n")
        config.print_config()

    elif args.set:
        key, value = args.set
        # Try to parse as JSON for numbers and booleans
        try:
            value = json.loads(value)
        except json.JSONDecodeError:
            pass

        config.set(key, value)
        config.save()
        print(f"✅ Set {key} = {value}")

    elif args.set_api_key:
        provider, key = args.set_api_key
        config.set_api_key(provider, key)
        print(f"✅ Set API key for {provider}")

    else:
        print("Use --show, --set, --set-api-key, or --init")


if __name__ == "__main__":
    main()
