"""Permission catalog and default role grants.

Permission keys use the ``resource.action`` format. Grants may use a
suffix wildcard (``event.*``) or the global ``*``.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class Role(str, Enum):
    """Role codes."""
    GUEST = "guest"
    MEMBER = "member"
    EDITOR = "editor"
    OPERATOR = "operator"
    ADMIN = "admin"


@dataclass(frozen=True)
class PermissionDef:
    """One entry of the permission catalog."""
    key: str
    resource: str
    action: str
    description: str = ""


GLOBAL_WILDCARD = "*"

PERMISSIONS: tuple[PermissionDef, ...] = (
    # Events
    PermissionDef("event.read", "event", "read", "이벤트 열람"),
    PermissionDef("event.create", "event", "create", "이벤트 생성"),
    PermissionDef("event.update", "event", "update", "이벤트 수정"),
    PermissionDef("event.delete", "event", "delete", "이벤트 삭제"),
    PermissionDef("event.publish", "event", "publish", "이벤트 발행"),
    PermissionDef("event.attendee.manage", "event", "manage", "참석자 관리"),
    # News
    PermissionDef("news.read", "news", "read", "뉴스 열람"),
    PermissionDef("news.create", "news", "create", "뉴스 작성"),
    PermissionDef("news.update", "news", "update", "뉴스 수정"),
    PermissionDef("news.delete", "news", "delete", "뉴스 삭제"),
    PermissionDef("news.publish", "news", "publish", "뉴스 발행"),
    # Resources
    PermissionDef("resource.read", "resource", "read", "자료 열람"),
    PermissionDef("resource.upload", "resource", "create", "자료 업로드"),
    PermissionDef("resource.update", "resource", "update", "자료 수정"),
    PermissionDef("resource.delete", "resource", "delete", "자료 삭제"),
    PermissionDef("resource.publish", "resource", "publish", "자료 발행"),
    # Members
    PermissionDef("member.read", "member", "read", "회원 정보 열람"),
    PermissionDef("member.create", "member", "create", "회원 등록"),
    PermissionDef("member.update", "member", "update", "회원 정보 수정"),
    PermissionDef("member.delete", "member", "delete", "회원 삭제"),
    PermissionDef("member.manage", "member", "manage", "회원 관리"),
    # Partners
    PermissionDef("partner.read", "partner", "read", "파트너 정보 열람"),
    PermissionDef("partner.manage", "partner", "manage", "파트너 관리"),
    # Inquiries
    PermissionDef("inquiry.read", "inquiry", "read", "문의 열람"),
    PermissionDef("inquiry.respond", "inquiry", "update", "문의 응답"),
    # System
    PermissionDef("system.dashboard", "system", "read", "대시보드 접근"),
    PermissionDef("system.settings", "system", "manage", "시스템 설정"),
)

PERMISSION_KEYS: frozenset[str] = frozenset(p.key for p in PERMISSIONS)

ROLE_PERMISSIONS: dict[Role, tuple[str, ...]] = {
    Role.GUEST: ("event.read", "news.read", "partner.read"),
    Role.MEMBER: (
        "event.read",
        "news.read",
        "resource.read",
        "member.read",
        "partner.read",
    ),
    Role.EDITOR: (
        "event.*",
        "news.*",
        "resource.*",
        "member.read",
        "partner.read",
        "inquiry.read",
    ),
    Role.OPERATOR: (
        "event.*",
        "news.*",
        "resource.*",
        "member.*",
        "partner.*",
        "inquiry.*",
        "system.dashboard",
    ),
    Role.ADMIN: (GLOBAL_WILDCARD,),
}


def permissions_for_role(role: Role | str) -> frozenset[str]:
    """Default grants for a role code; unknown roles get nothing."""
    try:
        role = Role(role)
    except ValueError:
        return frozenset()
    return frozenset(ROLE_PERMISSIONS[role])
