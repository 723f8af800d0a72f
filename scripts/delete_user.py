#!/usr/bin/env python3
"""Delete a user account and everything it owns.

There is no API endpoint for account deletion; this is the administrative path.
The user's favorites and sessions are removed by ON DELETE CASCADE.

Usage:
    python scripts/delete_user.py alice@example.com

    # Against another database:
    DATABASE_URL=sqlite:///./wallpaper.db python scripts/delete_user.py alice@example.com
"""

import argparse
import os
import sys

# Add parent directory to path for imports
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from src.config import get_settings
from src.database import Database
from src.services.auth import CredentialStore


def delete_user(database: Database, email: str) -> bool:
    """Delete the user with this email. Returns False if there was none."""
    db = database.session()
    try:
        store = CredentialStore(db)
        user = store.find_by_email(email)
        if user is None:
            return False
        return store.delete_user(user.id)
    finally:
        db.close()


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Delete a user and their favorites.")
    parser.add_argument("email", help="email address of the account to delete")
    args = parser.parse_args(argv)

    database = Database(get_settings().database_url)
    database.open()
    try:
        deleted = delete_user(database, args.email)
    finally:
        database.close()

    if not deleted:
        print(f"No user with email {args.email}")
        return 1
    print(f"Deleted {args.email}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
