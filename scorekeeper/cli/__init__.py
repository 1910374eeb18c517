#!/usr/bin/env python3
"""
Scorekeeper Management CLI

Usage:
    python -m scorekeeper.cli <command> [options]

Commands:
    db          Database operations (init)
    teams       Roster operations (init)
    scores      Score maintenance (verify, rebuild, reset, stats)

Environment:
    DATABASE_URL    SQLAlchemy async connection string
    LOG_LEVEL       DEBUG|INFO|WARNING|ERROR
"""
import sys
import argparse
import logging
from typing import Optional

from scorekeeper import __version__
from scorekeeper.cli.db_commands import DbCommand, TeamsCommand
from scorekeeper.cli.scoring_commands import ScoresCommand


def setup_logging(level: str = "INFO") -> None:
    """Configure logging."""
    logging.basicConfig(
        level=getattr(logging, level.upper()),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
    )


def create_parser() -> argparse.ArgumentParser:
    """Create CLI argument parser."""
    parser = argparse.ArgumentParser(
        prog="scorekeeper",
        description="Scorekeeper Management CLI",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  %(prog)s db init
  %(prog)s teams init
  %(prog)s scores verify
  %(prog)s scores reset --yes
        """
    )

    parser.add_argument(
        "--version",
        action="version",
        version=f"%(prog)s {__version__}"
    )

    parser.add_argument(
        "--log-level",
        default="INFO",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Logging level (default: INFO)"
    )

    parser.add_argument(
        "--dry-run",
        action="store_true",
        help="Show what would be done without executing"
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # Database commands
    db_parser = subparsers.add_parser("db", help="Database operations")
    db_subparsers = db_parser.add_subparsers(dest="db_action")
    db_subparsers.add_parser("init", help="Create missing tables")

    # Roster commands
    teams_parser = subparsers.add_parser("teams", help="Roster operations")
    teams_subparsers = teams_parser.add_subparsers(dest="teams_action")
    teams_subparsers.add_parser("init", help="Insert the default teams if none exist")

    # Score commands
    scores_parser = subparsers.add_parser("scores", help="Score maintenance")
    scores_subparsers = scores_parser.add_subparsers(dest="scores_action")

    scores_subparsers.add_parser("verify", help="Compare stored totals with the score log")
    scores_subparsers.add_parser("rebuild", help="Rebuild stored totals from the score log")
    scores_subparsers.add_parser("stats", help="Print global score statistics")

    reset_parser = scores_subparsers.add_parser("reset", help="Delete all scores and activities")
    reset_parser.add_argument("--yes", action="store_true", help="Skip confirmation")

    return parser


def main(args: Optional[list] = None) -> int:
    """Main entry point."""
    parser = create_parser()
    parsed = parser.parse_args(args)

    if not parsed.command:
        parser.print_help()
        return 1

    setup_logging(parsed.log_level)

    command_map = {
        "db": DbCommand,
        "teams": TeamsCommand,
        "scores": ScoresCommand,
    }

    if parsed.command in command_map:
        handler = command_map[parsed.command](dry_run=parsed.dry_run)
        return handler.execute(parsed)

    parser.print_help()
    return 1


if __name__ == "__main__":
    sys.exit(main())
