"""FreshCart database management CLI.

Creates and drops the database schemas of every domain. Only domains whose
active config points at a SQL database (``PROTEAN_ENV=production``) have
anything to create.

Usage:
    python src/manage.py setup-db   # Create all tables
    python src/manage.py drop-db    # Drop all tables
"""

import argparse
import sys

DOMAIN_NAMES = ["ordering", "newsletter"]


def _domains(names=None):
    from newsletter.domain import newsletter
    from ordering.domain import ordering

    all_domains = {"ordering": ordering, "newsletter": newsletter}
    return {name: all_domains[name] for name in names} if names else all_domains


def setup_databases(domains=None):
    """Create database schemas for the specified (or all) domains."""
    from shared.db import setup_db

    for name, domain in _domains(domains).items():
        print(f"Initializing {name} domain...")
        domain.init()
        providers = setup_db(domain)
        if providers:
            print(f"  {name} schema ready ({', '.join(providers)}).")
        else:
            print(f"  {name} has no SQL database configured, nothing to create.")

    print("Done.")


def drop_databases(domains=None):
    """Drop database schemas for the specified (or all) domains."""
    from shared.db import drop_db

    for name, domain in _domains(domains).items():
        print(f"Initializing {name} domain...")
        domain.init()
        providers = drop_db(domain)
        if providers:
            print(f"  {name} schema dropped ({', '.join(providers)}).")
        else:
            print(f"  {name} has no SQL database configured, nothing to drop.")

    print("Done.")


def main():
    parser = argparse.ArgumentParser(description="FreshCart database management")
    subparsers = parser.add_subparsers(dest="command", required=True)

    for command, help_text in (("setup-db", "Create all database tables"), ("drop-db", "Drop all database tables")):
        sub = subparsers.add_parser(command, help=help_text)
        sub.add_argument(
            "--domain",
            choices=DOMAIN_NAMES,
            nargs="*",
            help="Specific domain(s) (default: all)",
        )

    args = parser.parse_args()

    if args.command == "setup-db":
        setup_databases(args.domain)
    elif args.command == "drop-db":
        drop_databases(args.domain)
    else:
        parser.print_help()
        sys.exit(1)


if __name__ == "__main__":
    main()
