#!/usr/bin/env python
"""CLI script to create a user account.

Usage:
    python -m whereto_auth.cli.create_user "Alice Example" alice@example.com

This creates the account with a randomly generated password.
The password is printed to stdout - save it securely!

This script is idempotent - running it again with the same email
will do nothing if the user already exists.
"""

import asyncio
import logging
import sys

from whereto_auth import config
from whereto_auth.domain.errors import UserAlreadyExists
from whereto_auth.domain.services import AccountService, PasswordHasher, generate_temp_password
from whereto_auth.storage.database import Database
from whereto_auth.storage.repository import SqlCredentialStore


async def create_user(
    name: str,
    email: str,
    database: Database,
    hasher: PasswordHasher | None = None,
) -> tuple[bool, str]:
    """Create a user account.

    Args:
        name: Display name
        email: Email address for the account
        database: Connected database (schema is created if missing)
        hasher: Password hasher, defaults to the configured bcrypt cost

    Returns:
        Tuple of (created: bool, message: str)
        - If created=True, message contains the temporary password
        - If created=False, message explains why (e.g., already exists)
    """
    await database.init_schema()

    accounts = AccountService(SqlCredentialStore(database), hasher or PasswordHasher())
    temp_password = generate_temp_password(16)
    try:
        await accounts.create_account(name, email, temp_password)
    except UserAlreadyExists:
        return False, f"User {email} already exists"

    return True, temp_password


async def _run(name: str, email: str) -> tuple[bool, str]:
    database = Database()
    await database.connect()
    try:
        return await create_user(name, email, database)
    finally:
        await database.close()


def main():
    """Main entry point for CLI."""
    logging.basicConfig(level=config.LOG_LEVEL)

    if len(sys.argv) != 3:
        print("Usage: python -m whereto_auth.cli.create_user <name> <email>")
        print('Example: python -m whereto_auth.cli.create_user "Alice" alice@example.com')
        sys.exit(1)

    name, email = sys.argv[1], sys.argv[2]

    # Basic email validation
    if "@" not in email or "." not in email:
        print(f"Error: Invalid email address: {email}")
        sys.exit(1)

    print(f"Creating user: {email}")

    created, message = asyncio.run(_run(name, email))

    if created:
        print("\n" + "=" * 50)
        print("USER CREATED SUCCESSFULLY")
        print("=" * 50)
        print(f"Email:    {email}")
        print(f"Password: {message}")
        print("=" * 50)
        print("\nIMPORTANT: Save this password securely!")
    else:
        print(f"\n{message}")


if __name__ == "__main__":
    main()
