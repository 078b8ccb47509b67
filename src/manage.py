"""CRM database management CLI.

Usage:
    python src/manage.py setup-db     # Create all tables
    python src/manage.py drop-db      # Drop all tables
    python src/manage.py seed-admin   # Create the configured admin account
"""

import argparse
import sys


def _init(database_url=None):
    from shared.config import get_settings
    from shared.domain import init_domain

    settings = get_settings()
    if database_url:
        settings = settings.model_copy(update={"database_url": database_url})

    print("Initializing crm domain...")
    return init_domain(settings)


def setup_database(database_url=None):
    """Create every table."""
    from shared.db import setup_db

    domain = _init(database_url)
    print("Creating crm database schema...")
    setup_db(domain)
    print("Done.")


def drop_database(database_url=None):
    """Drop every table."""
    from shared.db import drop_db

    domain = _init(database_url)
    print("Dropping crm database schema...")
    drop_db(domain)
    print("Done.")


def seed_admin(database_url=None):
    """Create the admin configured through CRM_ADMIN_* settings."""
    from identity.user.seeding import seed_initial_admin
    from shared.db import setup_db

    domain = _init(database_url)
    setup_db(domain)
    with domain.domain_context():
        admin = seed_initial_admin()

    if admin is None:
        print("Admin not created (already present or CRM_ADMIN_PASSWORD not set).")
    else:
        print(f"Admin {admin.email} created.")


def main():
    from shared.logging import configure_logging

    parser = argparse.ArgumentParser(description="CRM database management")
    parser.add_argument("--database-url", help="Override CRM_DATABASE_URL")
    subparsers = parser.add_subparsers(dest="command", required=True)

    subparsers.add_parser("setup-db", help="Create all database tables")
    subparsers.add_parser("drop-db", help="Drop all database tables")
    subparsers.add_parser("seed-admin", help="Create the initial admin account")

    args = parser.parse_args()
    configure_logging()

    if args.command == "setup-db":
        setup_database(args.database_url)
    elif args.command == "drop-db":
        drop_database(args.database_url)
    elif args.command == "seed-admin":
        seed_admin(args.database_url)
    else:
        parser.print_help()
        sys.exit(1)


if __name__ == "__main__":
    main()
