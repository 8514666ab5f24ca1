#!/usr/bin/env python3
"""Operator CLI for account state: activate, deactivate, promote, demote, list.

Deactivated users cannot log in and their outstanding tokens are refused by
the API, so this is the way to lock an account without deleting it.

Usage:
    python scripts/manage_users.py deactivate user@example.com
    python scripts/manage_users.py promote admin@example.com
    python scripts/manage_users.py list-active
"""

import argparse
import logging
import os
import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from dotenv import load_dotenv

from adapter.mongodb.connection import MongoConnection
from adapter.mongodb.user_repository import MongoUserRepository
from domain.model.errors import DomainError
from domain.model.user import UserRole

ACTIONS = {
    "activate": {"is_active": True},
    "deactivate": {"is_active": False},
    "promote": {"role": UserRole.ADMIN},
    "demote": {"role": UserRole.USER},
}


def apply_action(repo: MongoUserRepository, action: str, email: str) -> int:
    user = repo.get_by_email(email)
    if not user:
        print(f"No user with email {email}", file=sys.stderr)
        return 1

    try:
        updated = repo.update(user.id, ACTIONS[action])
    except DomainError as e:
        print(f"Failed to {action} {email}: {e}", file=sys.stderr)
        return 1

    print(f"{action}: {updated.email} (active={updated.is_active}, role={updated.role.value})")
    return 0


def list_active(repo: MongoUserRepository) -> int:
    users = repo.list_active()
    for user in users:
        print(f"{user.id}  {user.email:<40} {user.role.value:<6} {user.username}")
    print(f"{len(users)} active user(s)")
    return 0


def main() -> int:
    parser = argparse.ArgumentParser(description="Manage TaskTrack user accounts")
    subparsers = parser.add_subparsers(dest="command", required=True)
    for action in ACTIONS:
        sub = subparsers.add_parser(action, help=f"{action.capitalize()} a user by email")
        sub.add_argument("email")
    subparsers.add_parser("list-active", help="List active users")
    args = parser.parse_args()

    load_dotenv()
    logging.basicConfig(level=logging.WARNING)

    mongo = MongoConnection(os.getenv("MONGO_URL"), os.getenv("MONGODB_DATABASE", "tasktrack"))
    if not mongo.open():
        print("Could not connect to MongoDB (is MONGO_URL set?)", file=sys.stderr)
        return 2

    try:
        repo = MongoUserRepository(mongo.database)
        if args.command == "list-active":
            return list_active(repo)
        return apply_action(repo, args.command, args.email)
    finally:
        mongo.close()


if __name__ == "__main__":
    sys.exit(main())
