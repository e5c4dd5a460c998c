#!/usr/bin/env python3
"""
Yoga studio command line.

Runs teacher-facing reports against the seeded in-memory studio.

Usage:
    yoga-booking [--log-level LEVEL] COMMAND [options]

Examples:
    # Dashboard for the default teacher on a fixed day
    yoga-booking dashboard --date 2025-01-10

    # Same dashboard against a dev scenario
    yoga-booking dashboard --scenario fully_booked

    # Revenue and roster for a teacher
    yoga-booking revenue --teacher teacher-0001
    yoga-booking roster --teacher teacher-0001

    # Export pending payments to CSV
    yoga-booking export-payments --teacher teacher-0001 --status pending

    # Report capacity and integrity problems in a scenario
    yoga-booking audit --scenario many_students
"""

import sys
import argparse
import logging
from datetime import datetime
from pathlib import Path
from typing import Optional

from .client import StudioClient
from .fixtures import SCENARIO_NAMES
from .fixtures.scenarios import SCENARIO_OWNER
from .models.result import Result
from .store import EntityStore
from .utils.config import config
from .utils.di_container import DIContainer, configure_default_services
from .utils.file_utils import generate_filename
from .utils.logger import setup_logger
from .validation import audit_store
from .views.dashboard import date_label, group_upcoming, item_label, item_name
from .views.payments_report import export_payments_csv, total_amount


logger = logging.getLogger(__name__)


class CommandError(Exception):
    """A command could not complete; the message is shown to the user."""


def parse_arguments(argv=None):
    """
    Parse command-line arguments.

    Returns:
        Parsed arguments
    """
    parser = argparse.ArgumentParser(
        prog="yoga-booking",
        description="Yoga studio reports",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=__doc__
    )

    parser.add_argument(
        "--log-level",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        default="WARNING",
        help="Logging level (default: WARNING)"
    )

    seeded = argparse.ArgumentParser(add_help=False)
    seeded.add_argument(
        "--scenario",
        choices=SCENARIO_NAMES,
        help="Seed a dev scenario instead of the default fixtures"
    )

    teacher = argparse.ArgumentParser(add_help=False)
    teacher.add_argument("--teacher", required=True, help="Teacher id (e.g., teacher-0001)")

    subparsers = parser.add_subparsers(dest="command", required=True)

    dashboard = subparsers.add_parser("dashboard", parents=[seeded], help="Upcoming sessions")
    dashboard.add_argument(
        "--teacher",
        default=SCENARIO_OWNER,
        help=f"Teacher id (default: {SCENARIO_OWNER})"
    )
    dashboard.add_argument("--date", help="Reference day in YYYY-MM-DD format (default: today)")

    subparsers.add_parser("revenue", parents=[seeded, teacher], help="Payment totals by status")
    subparsers.add_parser("roster", parents=[seeded, teacher], help="Students with bookings")

    export = subparsers.add_parser("export-payments", parents=[seeded, teacher], help="Payments to CSV")
    export.add_argument(
        "--status",
        default="all",
        choices=["all", "pending", "paid", "overdue", "refunded"],
        help="Payment status to export (default: all)"
    )
    export.add_argument("--out", help="CSV path (default: OUTPUT_DIR/reports/payments_<timestamp>.csv)")

    subparsers.add_parser("audit", parents=[seeded], help="Validate every offering, booking and payment")

    return parser.parse_args(argv)


def parse_day(value: Optional[str]) -> Optional[datetime]:
    """
    Parse a YYYY-MM-DD day.

    Raises:
        CommandError: If format is invalid
    """
    if value is None:
        return None
    try:
        return datetime.strptime(value, "%Y-%m-%d")
    except ValueError:
        raise CommandError(f"Invalid date '{value}', expected YYYY-MM-DD")


def unwrap(result: Result, action: str):
    if result.is_failure:
        raise CommandError(f"{action} failed - {result.message}")
    return result.value


def login_as(client: StudioClient, teacher_id: str):
    """Log in with the email of a seeded teacher."""
    teachers = unwrap(client.teachers(), "Teacher lookup")
    match = next((t for t in teachers if t.id == teacher_id), None)
    if match is None:
        raise CommandError(f"Unknown teacher: {teacher_id}")
    return unwrap(client.login(match.email, ""), "Login")


def show_dashboard(client: StudioClient, teacher_id: str, day: Optional[datetime]):
    now = day or datetime.now()
    state = unwrap(client.dashboard(teacher_id, now), "Dashboard")

    print("\n" + "=" * 60)
    print(f"DASHBOARD {teacher_id}")
    print("=" * 60)

    if not state.has_upcoming:
        print("No upcoming sessions.")
        return

    nxt = state.next_session
    print(f"Next: {item_name(nxt)} ({item_label(nxt)})")
    print(f"      {date_label(nxt, now)} {nxt.time} | {nxt.location} | {nxt.enrolled}/{nxt.capacity}")

    for group in group_upcoming(state.remaining_upcoming, now):
        print(f"\n{group.label}:")
        print("-" * 60)
        for item in group.items:
            print(
                f"  {item.date:%Y-%m-%d} {item.time} | {item_name(item):30s} | "
                f"{item.enrolled:3d}/{item.capacity:<3d} | {item_label(item)}"
            )


def show_revenue(client: StudioClient, teacher_id: str):
    revenue = unwrap(client.teacher_revenue(teacher_id), "Revenue")

    print("\n" + "=" * 60)
    print(f"REVENUE {teacher_id}")
    print("=" * 60)
    print(f"Total:    {revenue.total:10.2f}")
    print(f"Paid:     {revenue.paid:10.2f}")
    print(f"Pending:  {revenue.pending:10.2f}")
    print(f"Overdue:  {revenue.overdue:10.2f}")
    print("=" * 60)


def show_roster(client: StudioClient, teacher_id: str):
    entries = unwrap(client.roster(teacher_id), "Roster")

    print("\n" + "=" * 60)
    print(f"ROSTER {teacher_id} ({len(entries)} students)")
    print("=" * 60)
    for idx, entry in enumerate(entries, 1):
        print(
            f"{idx:2d}. {entry.student.name:25s} | "
            f"{entry.booking_count:2d} bookings | {entry.active_bookings:2d} active"
        )


def export_payments(client: StudioClient, teacher_id: str, status: str, out: Optional[str]) -> Path:
    rows = unwrap(client.payment_report(teacher_id, status), "Payment report")

    if out:
        filepath = Path(out)
    else:
        filepath = config.output_dir / "reports" / generate_filename("payments", "csv")

    if not export_payments_csv(rows, filepath):
        raise CommandError(f"Could not write {filepath}")

    print(f"Exported {len(rows)} payments ({total_amount(rows):.2f}) to: {filepath}")
    return filepath


def show_audit(store: EntityStore) -> bool:
    result = audit_store(store)
    print("\n" + "=" * 60)
    print("STORE AUDIT")
    print("=" * 60)
    print(result.get_summary())
    return result.is_valid


def main(argv=None) -> int:
    """Main execution function."""
    args = parse_arguments(argv)

    setup_logger("yoga_booking", level=getattr(logging, args.log_level))

    try:
        config.validate()

        container = DIContainer()
        configure_default_services(container, scenario=args.scenario, today=parse_day(getattr(args, "date", None)))
        client = container.resolve(StudioClient)

        if args.command == "audit":
            return 0 if show_audit(container.resolve(EntityStore)) else 1

        login_as(client, args.teacher)

        if args.command == "dashboard":
            show_dashboard(client, args.teacher, parse_day(args.date))
        elif args.command == "revenue":
            show_revenue(client, args.teacher)
        elif args.command == "roster":
            show_roster(client, args.teacher)
        elif args.command == "export-payments":
            export_payments(client, args.teacher, args.status, args.out)

        return 0

    except CommandError as e:
        logger.error(str(e))
        print(f"ERROR: {e}")
        return 1

    except ValueError as e:
        print(f"ERROR: {e}")
        return 1

    except KeyboardInterrupt:
        print("\n\nInterrupted by user")
        return 130


def run():
    sys.exit(main())


if __name__ == "__main__":
    run()
