#!/usr/bin/env python3
"""
Create an activated admin account, or promote an existing user to admin.

Usage:
  python scripts/create_admin.py --email admin@example.com [--password secret] [--name Ann --surname Lee]
"""
from __future__ import annotations

import argparse
import secrets
import sys

from alumni_api.core.config import get_settings
from alumni_api.core.security import PasswordHashing
from alumni_api.repositories.sql_repository import SQLRepository


def gen_password(length: int = 16) -> str:
    return secrets.token_urlsafe(length)[:length]


def main() -> None:
    ap = argparse.ArgumentParser(description="Create or promote an admin account")
    ap.add_argument("--email", required=True, help="Admin e-mail")
    ap.add_argument("--password", help="Password for a new account (default: random)")
    ap.add_argument("--name", default="Admin")
    ap.add_argument("--surname", default="Admin")
    ap.add_argument("--phone", default="")
    args = ap.parse_args()

    repo = SQLRepository()
    email = (args.email or "").strip()
    if not email or "@" not in email:
        raise SystemExit("Invalid e-mail")

    existing = repo.find_user_by_email(email)
    if existing:
        existing.is_admin = True
        existing.is_activated = True
        repo.save_user(existing)
        print(f"OK: {email} promoted to admin")
        return

    password = (args.password or "").strip() or gen_password()
    if not 3 <= len(password) <= 32:
        raise SystemExit("Password must be 3-32 characters")
    hasher = PasswordHashing(get_settings().password_hash_time_cost or None)
    repo.create_user(
        email=email,
        password_hash=hasher.hash(password),
        name=args.name,
        surname=args.surname,
        phone_number=args.phone,
        is_admin=True,
        is_activated=True,
    )
    print("OK: admin created")
    print(f"  Email: {email}")
    if not args.password:
        print(f"  Password: {password}")


if __name__ == "__main__":
    try:
        main()
    except Exception as exc:  # pragma: no cover - CLI usage
        sys.stderr.write(f"Error: {exc}\n")
        raise SystemExit(1)
