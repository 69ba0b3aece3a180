"""Storefront database management CLI.

Creates and drops the MongoDB indexes/collections behind the product, order
and checkout repositories. Reuses the setup_indexes()/drop_collection()
methods of the domain repositories against the bound database.

Usage:
    python src/manage.py setup-db                        # Create all indexes
    python src/manage.py setup-db --collection orders    # Only the orders collection
    python src/manage.py drop-db                         # Drop all collections
"""

import argparse
import sys

from pymongo.database import Database

from domains import init_domains
from services import REPOSITORIES, drop_collections, setup_collections
from shared.config import load_settings
from shared.mongo import bind_database, connect, unbind_database


def setup_databases(database: Database, collections=None):
    """Create indexes for the specified (or all) collections."""
    targets = collections or list(REPOSITORIES)
    bind_database(database)
    try:
        for name in targets:
            print(f"Creating {name} indexes...")
            setup_collections([name])
            print(f"  {name} ready.")
    finally:
        unbind_database()
    print("Done.")


def drop_databases(database: Database, collections=None):
    """Drop the specified (or all) collections."""
    targets = collections or list(REPOSITORIES)
    bind_database(database)
    try:
        for name in targets:
            print(f"Dropping {name}...")
            drop_collections([name])
            print(f"  {name} dropped.")
    finally:
        unbind_database()
    print("Done.")


def main():
    parser = argparse.ArgumentParser(description="Storefront database management")
    subparsers = parser.add_subparsers(dest="command", required=True)

    for command, help_text in (("setup-db", "Create all indexes"), ("drop-db", "Drop all collections")):
        sub = subparsers.add_parser(command, help=help_text)
        sub.add_argument(
            "--collection",
            choices=list(REPOSITORIES),
            nargs="*",
            help="Specific collection(s) to act on (default: all)",
        )

    args = parser.parse_args()

    init_domains()
    settings = load_settings()
    client = connect(settings.mongodb_uri)
    database = client[settings.mongodb_database]
    try:
        if args.command == "setup-db":
            setup_databases(database, args.collection)
        elif args.command == "drop-db":
            drop_databases(database, args.collection)
        else:
            parser.print_help()
            sys.exit(1)
    finally:
        client.close()


if __name__ == "__main__":
    main()
