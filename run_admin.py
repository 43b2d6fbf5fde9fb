#!/usr/bin/env python3
"""
Course Admin command-line panel.

Usage:
    python run_admin.py COMMAND [options]

Examples:
    # Log in (the session is kept in COURSE_SESSION_FILE)
    python run_admin.py login --email admin@example.com --password "secret"

    # Create an account and log in with it
    python run_admin.py register --name "Ana" --email ana@example.com \\
        --password "secret" --confirm-password "secret"

    # List, search and filter
    python run_admin.py list
    python run_admin.py list --public
    python run_admin.py search web --category Programming

    # Manage courses
    python run_admin.py add --name "Web Dev" --instructor "Ana" --category Prog --price 100
    python run_admin.py edit 3 --price 120 --status Active
    python run_admin.py delete 3

    # Dashboard figures and export
    python run_admin.py stats
    python run_admin.py export

    # Use password from environment variable
    export COURSE_ADMIN_EMAIL="admin@example.com"
    export COURSE_ADMIN_PASSWORD="secret"
    python run_admin.py login
"""

import sys
import argparse
import asyncio
import logging
from typing import List

from course_admin.models.course import Course, CourseDraft, CourseStatus
from course_admin.session.auth import AuthFlow
from course_admin.sync.engine import CourseSyncEngine
from course_admin.utils.config import Config, SecureString, config
from course_admin.utils.di_container import DIContainer, configure_default_services
from course_admin.utils.file_utils import export_courses


STATUS_CHOICES = [status.value for status in CourseStatus]

# Category filter value meaning "no filter"
ALL_CATEGORIES = "all"


def parse_arguments(argv=None):
    """
    Parse command-line arguments.

    Returns:
        Parsed arguments
    """
    parser = argparse.ArgumentParser(
        description="Manage courses on the portfolio course service",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=__doc__
    )
    parser.add_argument(
        "--log-level",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        default=None,
        help="Logging level (default: LOG_LEVEL or INFO)"
    )

    commands = parser.add_subparsers(dest="command", required=True)

    login = commands.add_parser("login", help="Log in and store the session")
    login.add_argument("--email", help="Login email (overrides COURSE_ADMIN_EMAIL)")
    login.add_argument("--password", help="Password (overrides COURSE_ADMIN_PASSWORD)")

    register = commands.add_parser("register", help="Create an account and log in")
    register.add_argument("--name", required=True)
    register.add_argument("--email", required=True)
    register.add_argument("--password", required=True)
    register.add_argument("--confirm-password", required=True)

    commands.add_parser("logout", help="Forget the stored session")
    commands.add_parser("whoami", help="Show the stored session")

    listing = commands.add_parser("list", help="List courses")
    listing.add_argument(
        "--public",
        action="store_true",
        help="Only Active courses, as the public catalog shows them"
    )

    search = commands.add_parser("search", help="Search by name, instructor or category")
    search.add_argument("term", nargs="?", default="")
    search.add_argument(
        "--category",
        help=f"Exact category filter ('{ALL_CATEGORIES}' for every category)"
    )

    add = commands.add_parser("add", help="Create a course")
    add.add_argument("--name", required=True)
    add.add_argument("--instructor", required=True)
    add.add_argument("--category", required=True)
    add.add_argument("--price", type=float, required=True)
    add.add_argument("--students", type=int, default=0)
    add.add_argument("--status", choices=STATUS_CHOICES, default=CourseStatus.DRAFT.value)

    edit = commands.add_parser("edit", help="Update a course (unset fields keep their value)")
    edit.add_argument("id", type=int)
    edit.add_argument("--name")
    edit.add_argument("--instructor")
    edit.add_argument("--category")
    edit.add_argument("--price", type=float)
    edit.add_argument("--students", type=int)
    edit.add_argument("--status", choices=STATUS_CHOICES)

    delete = commands.add_parser("delete", help="Delete a course")
    delete.add_argument("id", type=int)

    commands.add_parser("stats", help="Dashboard figures")
    commands.add_parser("export", help="Write the course list as CSV and JSON")

    return parser.parse_args(argv)


def display_courses(courses: List[Course]):
    """Print courses as a table."""
    if not courses:
        print("No courses found.")
        return

    print("-" * 88)
    print(f"{'ID':>4} | {'Name':30s} | {'Instructor':18s} | {'Category':12s} | {'Price':>8} | Status")
    print("-" * 88)
    for course in courses:
        course_id = course.id if course.id is not None else "-"
        print(
            f"{course_id:>4} | {course.name[:30]:30s} | {course.instructor[:18]:18s} | "
            f"{course.category[:12]:12s} | {course.price:8.2f} | {course.status.value}"
        )
    print("-" * 88)
    print(f"{len(courses)} course(s)")


def report(result) -> int:
    """Print a Result as a ✓/✗ line and map it to an exit code."""
    if result.is_success:
        print(f"✓ {result.message}" if result.message else "✓ Done")
        return 0
    print(f"✗ {result.message}")
    if result.retryable:
        print("  (temporary problem, try again)")
    return 1


async def run_command(args, auth: AuthFlow, engine: CourseSyncEngine, cfg: Config) -> int:
    """Dispatch one CLI command."""
    if args.command == "login":
        email = args.email or cfg.admin_email
        if args.password:
            password = SecureString(args.password)
        elif cfg.admin_password:
            password = cfg.admin_password
        else:
            print("ERROR: Password is required. Use --password or set COURSE_ADMIN_PASSWORD")
            return 1
        return report(await auth.login(email or "", password))

    if args.command == "register":
        return report(await auth.register(
            args.name,
            args.email,
            SecureString(args.password),
            SecureString(args.confirm_password)
        ))

    if args.command == "logout":
        auth.logout()
        print("✓ Logged out")
        return 0

    if args.command == "whoami":
        if not auth.is_authenticated:
            print("Not logged in.")
            return 1
        session = auth.session
        print(f"{session.display_name} <{session.email}> (user {session.user_id})")
        return 0

    refreshed = await engine.refresh()
    if refreshed.is_failure:
        return report(refreshed)

    if args.command == "list":
        display_courses(engine.public_catalog() if args.public else list(engine.courses))
        return 0

    if args.command == "search":
        category = None if args.category == ALL_CATEGORIES else args.category
        display_courses(engine.search(args.term, category))
        return 0

    if args.command == "stats":
        stats = engine.stats()
        print("\n" + "=" * 40)
        print("COURSE DASHBOARD")
        print("=" * 40)
        print(f"Total courses:   {stats.total_courses}")
        print(f"Active courses:  {stats.active_courses}")
        print(f"Total students:  {stats.total_students}")
        print(f"Total revenue:   {stats.total_revenue:.2f}")
        for status, count in stats.by_status.items():
            print(f"  {status:10s} {count}")
        print("=" * 40)
        return 0

    if args.command == "export":
        written = export_courses(engine.courses, cfg.output_dir / "exports")
        for kind, path in written.items():
            print(f"✓ {kind.upper()} saved to: {path}")
        return 0 if len(written) == 2 else 1

    if args.command == "add":
        draft = CourseDraft(
            name=args.name,
            instructor=args.instructor,
            category=args.category,
            price=args.price,
            student_count=args.students,
            status=CourseStatus.parse(args.status)
        )
        return report(await engine.create(draft))

    if args.command == "edit":
        current = engine.find(args.id)
        if current is None:
            print(f"✗ Course {args.id} not found")
            return 1
        draft = CourseDraft.from_course(current).with_changes(
            name=args.name,
            instructor=args.instructor,
            category=args.category,
            price=args.price,
            student_count=args.students,
            status=CourseStatus.parse(args.status) if args.status else None
        )
        return report(await engine.update(args.id, draft))

    if args.command == "delete":
        return report(await engine.delete(args.id))

    print(f"Unknown command: {args.command}")
    return 1


def main(argv=None) -> int:
    """Main execution function."""
    args = parse_arguments(argv)

    container = DIContainer()
    configure_default_services(container, config)

    logger = container.resolve(logging.Logger)
    if args.log_level:
        logger.setLevel(getattr(logging, args.log_level))

    try:
        config.validate()
        config.create_output_directories()

        auth = container.resolve(AuthFlow)
        engine = container.resolve(CourseSyncEngine)

        # Restore the stored session
        if auth.bootstrap() is None and auth.last_error is not None:
            print(f"! {auth.message} (logged out)")

        try:
            return asyncio.run(run_command(args, auth, engine, config))
        finally:
            engine.close()

    except KeyboardInterrupt:
        print("\n\nInterrupted by user")
        logger.info("Interrupted by user")
        return 130

    except ValueError as e:
        logger.error(f"Configuration error: {e}")
        print(f"\nERROR: {e}")
        return 1


if __name__ == "__main__":
    sys.exit(main())
