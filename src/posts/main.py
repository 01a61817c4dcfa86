"""CLI for managing unified posts.

Create/update read a YAML or JSON payload file with three sections:

    post:        {postType: news, slug: hello, status: draft}
    translation: {locale: ko, title: 안녕하세요}
    meta:        [{key: news.category, valueText: notice}]

Usage:
    python -m src.posts.main get <post-id> --locale en
    python -m src.posts.main list --type event --upcoming
    python -m src.posts.main create --file payload.yaml
    python -m src.posts.main update <post-id> --file payload.yaml
    python -m src.posts.main delete <post-id>
    python -m src.posts.main register <post-id> --name 홍길동 --email hong@example.org
    python -m src.posts.main registrations <post-id>
"""

from __future__ import annotations

import argparse
import json
import sys
from pathlib import Path

import requests
import yaml

from src.auth.token_store import TokenStore
from src.common.config import settings
from src.common.http_client import ApiClient
from src.common.logging import setup_logging
from src.common.models import PostWithTranslations, RegistrationInput

from .api import PostApi
from .helpers import get_translation_safe

logger = setup_logging(module_name="posts.main")


def load_payload(path: Path) -> tuple[dict, dict, list]:
    """Read post/translation/meta sections from a YAML or JSON file.

    Raises:
        ValueError: If the translation section is missing or not a mapping,
            or the post or meta section has the wrong shape.
    """
    text = path.read_text(encoding="utf-8")
    if path.suffix.lower() == ".json":
        data = json.loads(text)
    else:
        data = yaml.safe_load(text) or {}

    if not isinstance(data, dict) or "translation" not in data:
        raise ValueError(f"{path}: payload must contain a 'translation' section")
    translation = data["translation"]
    if not isinstance(translation, dict):
        raise ValueError(f"{path}: 'translation' must be a mapping")
    post = data.get("post") or {}
    if not isinstance(post, dict):
        raise ValueError(f"{path}: 'post' must be a mapping")
    meta = data.get("meta") or []
    if not isinstance(meta, list):
        raise ValueError(f"{path}: 'meta' must be a list")

    _check_locale(translation.get("locale", settings.locale.default_locale))
    return post, translation, meta


def _check_locale(locale: str) -> None:
    if not settings.locale.is_supported(locale):
        logger.warning(
            "Locale %r is not one of the supported locales %s",
            locale,
            ", ".join(settings.locale.supported_locales),
        )


def _print_post(post: PostWithTranslations, locale: str) -> None:
    translation = get_translation_safe(post, locale)
    status = post.status.value if post.status else "-"
    print(f"{post.id}  [{status}]  {translation.locale}: {translation.title}")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Manage CMS posts")
    sub = parser.add_subparsers(dest="command", required=True)

    get = sub.add_parser("get", help="Show one post")
    get.add_argument("post_id")
    get.add_argument("--locale", default=settings.locale.default_locale)
    get.add_argument("--json", action="store_true", help="Dump the raw record")

    ls = sub.add_parser("list", help="List posts")
    ls.add_argument("--type", dest="post_type", choices=["news", "event", "resource"])
    ls.add_argument("--status", choices=["draft", "published", "archived"])
    ls.add_argument("--search")
    ls.add_argument("--tag", dest="tags", action="append")
    ls.add_argument("--upcoming", action="store_true")
    ls.add_argument("--locale", default=settings.locale.default_locale)
    ls.add_argument("--limit", type=int, default=20)
    ls.add_argument("--offset", type=int, default=0)

    create = sub.add_parser("create", help="Create a post from a payload file")
    create.add_argument("--file", type=Path, required=True)

    update = sub.add_parser("update", help="Update a post from a payload file")
    update.add_argument("post_id")
    update.add_argument("--file", type=Path, required=True)

    delete = sub.add_parser("delete", help="Delete a post")
    delete.add_argument("post_id")

    register = sub.add_parser("register", help="Register for an event")
    register.add_argument("post_id")
    register.add_argument("--name", required=True)
    register.add_argument("--email", required=True)
    register.add_argument("--phone")
    register.add_argument("--company")

    registrations = sub.add_parser("registrations", help="List registrations of an event")
    registrations.add_argument("post_id")
    return parser


def run(args: argparse.Namespace, api: PostApi) -> int:
    """Execute one command; returns the process exit code."""
    if getattr(args, "locale", None):
        _check_locale(args.locale)

    if args.command == "get":
        post = api.get_post(args.post_id)
        if args.json:
            print(post.model_dump_json(by_alias=True, indent=2))
        else:
            _print_post(post, args.locale)
        return 0

    if args.command == "list":
        result = api.list_posts(
            post_type=args.post_type,
            status=args.status,
            search=args.search,
            tags=args.tags,
            upcoming=args.upcoming,
            limit=args.limit,
            offset=args.offset,
        )
        for post in result.posts:
            _print_post(post, args.locale)
        print(f"{len(result.posts)} of {result.total} post(s)")
        return 0

    if args.command == "create":
        post, translation, meta = load_payload(args.file)
        created = api.create_post(post, translation, meta)
        print(f"Created post {created.id}")
        return 0

    if args.command == "update":
        post, translation, meta = load_payload(args.file)
        updated = api.update_post(args.post_id, post, translation, meta)
        _print_post(updated, translation.get("locale", settings.locale.default_locale))
        return 0

    if args.command == "delete":
        api.delete_post(args.post_id)
        print(f"Deleted post {args.post_id}")
        return 0

    if args.command == "register":
        registration = api.register_for_event(
            args.post_id,
            RegistrationInput(
                attendee_name=args.name,
                attendee_email=args.email,
                attendee_phone=args.phone,
                company_name=args.company,
            ),
        )
        print(f"Registration {registration.id}: {registration.status}")
        return 0

    if args.command == "registrations":
        rows = api.list_registrations(args.post_id)
        for row in rows:
            print(f"{row.id}  [{row.status}]  {row.attendee_name} <{row.attendee_email}>")
        print(f"{len(rows)} registration(s)")
        return 0

    return 1


def main(argv: list[str] | None = None) -> None:
    args = build_parser().parse_args(argv)
    with ApiClient() as client:
        # Bearer token from the last `auth login`.
        client.token = TokenStore().get()
        try:
            code = run(args, PostApi(client))
        except (requests.RequestException, ValueError) as exc:
            logger.error("%s failed: %s", args.command, exc)
            code = 1
    sys.exit(code)


if __name__ == "__main__":
    main()
