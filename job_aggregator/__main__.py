"""
Main entry point for the job_aggregator package.

Usage:
    python -m job_aggregator [command] [options]

See 'python -m job_aggregator --help' for available commands.
"""

from job_aggregator.cli import main

if __name__ == "__main__":
    main()
