"""
Repository Freshness CLI.

Resolves a badge from the shell, using the same parser and resolver as the API.
"""

import argparse
import asyncio
import json
import sys
from datetime import datetime

from dotenv import load_dotenv

from freshness.api import GitHubClient
from freshness.config import get_settings
from freshness.exceptions import FreshnessError
from freshness.logging import configure_logging
from freshness.parsing import parse_repo_path
from freshness.relative_time import humanize_elapsed
from freshness.services import FreshnessResolver

load_dotenv()

COMMANDS = ("badge", "humanize")


def _default_to_badge(argv: list[str]) -> list[str]:
    """Treat ``freshness-badge owner/name`` as ``freshness-badge badge owner/name``."""
    if argv and argv[0] not in COMMANDS and not argv[0].startswith("-"):
        return ["badge", *argv]
    return argv


async def _resolve(path: str) -> dict:
    ref = parse_repo_path(path)
    resolver = FreshnessResolver(GitHubClient(get_settings()))
    badge = await resolver.resolve(ref)
    return badge.model_dump()


def cmd_badge(args) -> int:
    """Print the badge payload for one repository."""
    try:
        payload = asyncio.run(_resolve(args.repo))
    except FreshnessError as e:
        print(f"{e.kind}: {e.message}", file=sys.stderr)
        return 1

    if args.format == "json":
        print(json.dumps(payload, ensure_ascii=False, indent=2 if args.pretty else None))
    else:
        print(f"{payload['label']} {payload['message']}")
    return 0


def cmd_humanize(args) -> int:
    """Render the gap between two ISO-8601 instants with the badge ladder."""
    try:
        updated_at = datetime.fromisoformat(args.updated_at.replace("Z", "+00:00"))
        now = datetime.fromisoformat(args.now.replace("Z", "+00:00"))
    except ValueError as e:
        print(f"Invalid timestamp: {e}", file=sys.stderr)
        return 1

    print(humanize_elapsed(updated_at, now))
    return 0


def main(argv=None) -> int:
    """Main entry point with CLI interface."""
    parser = argparse.ArgumentParser(
        description="Repository Freshness - How long since a repo's community files changed",
        epilog="A bare owner/name is shorthand for the badge command.",
    )
    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # Badge command
    badge_parser = subparsers.add_parser("badge", help="Resolve the badge for owner/name")
    badge_parser.add_argument("repo", help="Repository as owner/name")
    badge_parser.add_argument("--format", choices=["json", "text"], default="json")
    badge_parser.add_argument("--pretty", action="store_true", help="Indent JSON output")

    # Humanize command
    humanize_parser = subparsers.add_parser(
        "humanize", help="Render the elapsed time between two timestamps"
    )
    humanize_parser.add_argument("updated_at", help="Earlier instant, ISO-8601")
    humanize_parser.add_argument("now", help="Later instant, ISO-8601")

    if argv is None:
        argv = sys.argv[1:]
    args = parser.parse_args(_default_to_badge(list(argv)))

    settings = get_settings()
    # Logs share stdout with the payload, so keep them quiet unless debugging
    configure_logging(level="DEBUG" if settings.debug else "WARNING")

    if args.command == "badge":
        return cmd_badge(args)
    if args.command == "humanize":
        return cmd_humanize(args)

    parser.print_help()
    return 1


if __name__ == "__main__":
    sys.exit(main())
