"""CLI for the CMS session.

Usage:
    python -m src.auth.main login --email admin@example.org --password secret
    python -m src.auth.main whoami
    python -m src.auth.main check event.create news.publish
    python -m src.auth.main logout
"""

from __future__ import annotations

import argparse
import getpass
import sys

import requests

from src.common.http_client import ApiClient
from src.common.logging import setup_logging

from .session import AuthSession
from .token_store import TokenStore, is_token_valid

logger = setup_logging(module_name="auth.main")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Manage the CMS login session")
    sub = parser.add_subparsers(dest="command", required=True)

    login = sub.add_parser("login", help="Sign in and store the token")
    login.add_argument("--email", required=True)
    login.add_argument("--password", help="Prompted for when omitted")

    sub.add_parser("whoami", help="Show the signed-in user and permissions")
    sub.add_parser("logout", help="Forget the stored token")

    check = sub.add_parser("check", help="Check permissions of the signed-in user")
    check.add_argument("permissions", nargs="+")
    check.add_argument(
        "--any",
        action="store_true",
        help="Succeed if any permission is granted (default: all)",
    )
    return parser


def run(args: argparse.Namespace, session: AuthSession) -> int:
    """Execute one command; returns the process exit code."""
    if args.command == "login":
        password = args.password or getpass.getpass("Password: ")
        user = session.login(args.email, password)
        print(f"Logged in as {user.name} <{user.email}> ({user.role})")
        return 0

    if args.command == "logout":
        session.logout()
        print("Logged out")
        return 0

    if session.token and not is_token_valid(session.token):
        logger.warning("Stored token looks expired; the server may reject it")

    user = session.load()
    if user is None:
        print("Not logged in")
        return 1

    if args.command == "whoami":
        print(f"{user.name} <{user.email}> role={user.role}")
        for permission in sorted(session.permissions):
            print(f"  {permission}")
        return 0

    # check
    if args.any:
        allowed = session.has_any_permission(args.permissions)
    else:
        allowed = session.has_all_permissions(args.permissions)
    for permission in args.permissions:
        mark = "yes" if session.has_permission(permission) else "no"
        print(f"{permission}: {mark}")
    return 0 if allowed else 1


def main(argv: list[str] | None = None) -> None:
    args = build_parser().parse_args(argv)
    with ApiClient() as client:
        session = AuthSession(client, TokenStore())
        try:
            code = run(args, session)
        except requests.RequestException as exc:
            logger.error("%s failed: %s", args.command, exc)
            code = 1
    sys.exit(code)


if __name__ == "__main__":
    main()
