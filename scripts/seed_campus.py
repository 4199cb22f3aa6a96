"""Utility script to seed the branch hierarchy and an initial administrator."""

from __future__ import annotations

import argparse

from sqlalchemy.exc import SQLAlchemyError

from campus_feed.application.use_cases.taxonomy import seed_branch
from campus_feed.application.use_cases.users import create_user
from campus_feed.domain.exceptions import Conflict
from campus_feed.infrastructure.database import SessionLocal, initialize_database

DEFAULT_BRANCHES = (
    ("CSE", "Computer Science"),
    ("IT", "Information Tech"),
    ("ET", "Electronics"),
    ("EE", "Electrical"),
    ("ME", "Mechanical"),
    ("CE", "Civil"),
    ("CHE", "Chemical"),
    ("PT", "Paint Tech"),
    ("PL", "Plastic Tech"),
    ("OT", "Oil Tech"),
    ("LFT", "Leather & Fashion"),
)


def parse_args() -> argparse.Namespace:
    """Parse command line arguments for seeding."""

    parser = argparse.ArgumentParser(
        description="Seed branches, years, semesters and an administrator account.",
    )
    parser.add_argument(
        "--admin-name",
        default="Administrator",
        help="Name of the administrator account (default: Administrator)",
    )
    parser.add_argument(
        "--admin-email",
        default="admin@example.com",
        help="Email of the administrator account (default: admin@example.com)",
    )
    parser.add_argument(
        "--skip-branches",
        action="store_true",
        help="Only create the administrator account.",
    )
    return parser.parse_args()


def main() -> None:
    """Seed the database using the provided command line arguments."""

    args = parse_args()
    initialize_database()

    session = SessionLocal()
    try:
        if not args.skip_branches:
            for display_order, (code, name) in enumerate(DEFAULT_BRANCHES, start=1):
                seed_branch(session, code=code, name=name, display_order=display_order)
            print(f"Seeded {len(DEFAULT_BRANCHES)} branches")

        try:
            admin = create_user(
                session,
                name=args.admin_name,
                email=args.admin_email,
                is_admin=True,
            )
        except Conflict:
            print(f"Administrator {args.admin_email} already exists")
        else:
            print(
                "Administrator created:\n"
                f"  ID: {admin.id}\n"
                f"  Name: {admin.name}\n"
                f"  Email: {admin.email}"
            )
    except ValueError as exc:
        session.rollback()
        raise SystemExit(f"Could not seed the database: {exc}") from exc
    except SQLAlchemyError as exc:
        session.rollback()
        raise SystemExit(f"Database error while seeding: {exc}") from exc
    finally:
        session.close()


if __name__ == "__main__":
    main()
