"""
CLI (Command Line Interface).

Quick terminal commands, e.g.:

    studybrowser courses [--search algebra]
    studybrowser weeks <course_id>
    studybrowser materials <week_id>
    studybrowser browse

Note:
- The interactive browser lives in studybrowser/interactive.py
- The list commands print plain text (no rich formatting) so they can be piped
"""

from __future__ import annotations

import argparse
import asyncio
import logging
from typing import Any, Sequence

from pydantic import ValidationError
from rich.logging import RichHandler

from studybrowser.config import Settings, load_settings
from studybrowser.credentials import provider_from_settings
from studybrowser.errors import FetchFailure
from studybrowser.gateway import RemoteGateway
from studybrowser.model import Level, Material, Week
from studybrowser.navigator import FAILURE_MESSAGES, Navigator
from studybrowser.search import filter_records

log = logging.getLogger(__name__)


def configure_logging(verbose: bool = False) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(show_path=False)],
        force=True,
    )


def _print_records(records: Sequence[Any], query: str, empty: str) -> None:
    shown = filter_records(records, query)
    if not shown:
        print(empty if not query else "No results. Try a different search term.")
        return

    for r in shown:
        if isinstance(r, Material):
            print(f"{r.id} | {r.material_type or 'file'} | {r.title} | {r.content}")
        elif isinstance(r, Week):
            print(f"{r.id} | Week {r.week_number} | {r.title}")
        else:
            print(f"{r.id} | {r.title}")


def _cmd_courses(args: argparse.Namespace, gateway: RemoteGateway, token: str | None) -> int:
    """
    List all courses visible to the current user.
    """
    try:
        courses = gateway.get_courses(token)
    except FetchFailure as e:
        log.debug("courses: %s", e)
        print(FAILURE_MESSAGES[Level.COURSES])
        return 1
    _print_records(courses, args.search, "You are not enrolled in any courses yet.")
    return 0


def _cmd_weeks(args: argparse.Namespace, gateway: RemoteGateway, token: str | None) -> int:
    """
    List the weeks of one course, ordered by week number.
    """
    try:
        weeks = gateway.get_weeks(args.course_id, token)
    except FetchFailure as e:
        log.debug("weeks: %s", e)
        print(FAILURE_MESSAGES[Level.WEEKS])
        return 1
    weeks = sorted(weeks, key=lambda w: w.week_number)
    _print_records(weeks, args.search, "No weeks have been added to this course yet.")
    return 0


def _cmd_materials(args: argparse.Namespace, gateway: RemoteGateway, token: str | None) -> int:
    try:
        materials = gateway.get_materials(args.week_id, token)
    except FetchFailure as e:
        log.debug("materials: %s", e)
        print(FAILURE_MESSAGES[Level.MATERIALS])
        return 1
    _print_records(materials, args.search, "No materials have been added to this week yet.")
    return 0


def _cmd_browse(settings: Settings, gateway: RemoteGateway) -> int:
    from studybrowser.interactive import run_browser

    navigator = Navigator(gateway, provider_from_settings(settings))
    try:
        asyncio.run(run_browser(navigator))
    except KeyboardInterrupt:
        print()
    return 0


def build_parser() -> argparse.ArgumentParser:
    """
    Build the argparse CLI parser with sub-commands.
    """
    parser = argparse.ArgumentParser(prog="studybrowser", description="Browse courses, weeks and study materials")
    parser.add_argument("--api-url", type=str, default=None, help="Course API base URL")
    parser.add_argument("--token", type=str, default=None, help="Bearer token (default: env or token file)")
    parser.add_argument("--token-file", type=str, default=None, help="JSON file holding {\"token\": ...}")
    parser.add_argument("--timeout", type=float, default=None, help="Request timeout in seconds")
    parser.add_argument("--verbose", "-v", action="store_true", help="Debug logging")
    sub = parser.add_subparsers(dest="command", required=True)

    p_courses = sub.add_parser("courses", help="List courses")
    p_courses.add_argument("--search", "-s", type=str, default="", help="Filter by title/description")

    p_weeks = sub.add_parser("weeks", help="List the weeks of a course")
    p_weeks.add_argument("course_id", type=int, help="Course ID")
    p_weeks.add_argument("--search", "-s", type=str, default="", help="Filter by title/description")

    p_materials = sub.add_parser("materials", help="List the materials of a week")
    p_materials.add_argument("week_id", type=int, help="Week ID")
    p_materials.add_argument("--search", "-s", type=str, default="", help="Filter by title/description")

    sub.add_parser("browse", help="Interactive browser")

    return parser


def main(argv: list[str] | None = None) -> None:
    """
    CLI entry point. Parses args, dispatches to command handlers,
    and exits via SystemExit with a return code.
    """
    parser = build_parser()
    args = parser.parse_args(argv)
    configure_logging(args.verbose)

    try:
        settings = load_settings(
            api_url=args.api_url,
            token=args.token,
            token_file=args.token_file,
            timeout=args.timeout,
        )
    except ValidationError as e:
        print("Invalid settings:")
        for err in e.errors():
            field = ".".join(str(x) for x in err["loc"])
            print(f"- {field}: {err['msg']}")
        raise SystemExit(2)

    gateway = RemoteGateway(settings.api_url, timeout=settings.timeout)
    token = provider_from_settings(settings)()

    try:
        if args.command == "courses":
            raise SystemExit(_cmd_courses(args, gateway, token))
        if args.command == "weeks":
            raise SystemExit(_cmd_weeks(args, gateway, token))
        if args.command == "materials":
            raise SystemExit(_cmd_materials(args, gateway, token))
        if args.command == "browse":
            raise SystemExit(_cmd_browse(settings, gateway))
    finally:
        gateway.close()

    raise SystemExit(2)
