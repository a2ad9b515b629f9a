"""
create_admin.py — Create an administrator account.

Example:
    python scripts/create_admin.py --username admin --full-name "관리자" --email admin@example.com
    (the password is prompted for unless --password is given)
"""

from __future__ import annotations

import argparse
import getpass
import sys

from findiag.core.config import settings
from findiag.core.database import SessionLocal, init_db
from findiag.core.logging import configure_logging
from findiag.services.admin_users import create_admin


def main():
    """Main entry point."""
    parser = argparse.ArgumentParser(description="Create an administrator account")
    parser.add_argument("--username", required=True, help="Login name")
    parser.add_argument("--password", default=None, help="Password (prompted if omitted)")
    parser.add_argument("--full-name", default=None, help="Display name")
    parser.add_argument("--email", default=None, help="Contact email")

    args = parser.parse_args()
    configure_logging(settings.LOG_LEVEL)

    password = args.password or getpass.getpass("Password: ")
    if not password:
        print("ERROR: password must not be empty", file=sys.stderr)
        sys.exit(1)

    init_db()
    try:
        with SessionLocal() as db:
            admin = create_admin(
                db,
                username=args.username,
                password=password,
                full_name=args.full_name,
                email=args.email,
            )
            print(f"✓ Created admin '{admin.username}' (id={admin.id})")
    except ValueError as e:
        print(f"ERROR: {e}", file=sys.stderr)
        sys.exit(1)


if __name__ == "__main__":
    main()
