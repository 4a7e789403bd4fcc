"""Talentgate — User Roles & Permissions.

Maps each marketplace role to a fixed permission set. A user's role is
resolved from which profile records they own; a user with no matching
profile gets Role.NONE and no permissions.
"""

from __future__ import annotations

from enum import Enum


class Role(str, Enum):
    """Marketplace roles."""

    EMPLOYER = "employer"
    TALENT = "talent"
    TRAINER = "trainer"
    ADMIN = "admin"
    NONE = "none"


ROLE_PERMISSIONS: dict[Role, frozenset[str]] = {
    Role.EMPLOYER: frozenset({
        "post_projects",
        "hire_talent",
        "manage_projects",
        "view_talent_profiles",
        "send_messages",
        "make_payments",
    }),
    Role.TALENT: frozenset({
        "apply_to_projects",
        "pick_projects",
        "create_portfolio",
        "submit_verification",
        "receive_messages",
        "receive_payments",
        "view_client_profiles",
        "view_project_details",
    }),
    Role.TRAINER: frozenset({
        "publish_courses",
        "manage_courses",
        "view_talent_profiles",
        "send_messages",
        "receive_payments",
    }),
    Role.ADMIN: frozenset({
        "review_verifications",
        "manage_users",
        "view_talent_profiles",
        "view_client_profiles",
        "send_messages",
    }),
    Role.NONE: frozenset(),
}

_DISPLAY: dict[Role, tuple[str, str]] = {
    Role.EMPLOYER: ("Employer", "blue"),
    Role.TALENT: ("Talent Developer", "green"),
    Role.TRAINER: ("Trainer", "purple"),
    Role.ADMIN: ("Administrator", "red"),
    Role.NONE: ("User", "gray"),
}

# First profile type present wins.
_RESOLUTION_ORDER: tuple[Role, ...] = (Role.ADMIN, Role.EMPLOYER, Role.TALENT, Role.TRAINER)


def resolve_role(profile_types: set[str] | frozenset[str]) -> Role:
    """Pick a user's role from the profile types they own.

    Args:
        profile_types: Role names of the profiles attached to the user,
            e.g. {"talent"}. Unknown names are ignored.

    Returns:
        The highest-precedence matching role, or Role.NONE.
    """
    for role in _RESOLUTION_ORDER:
        if role.value in profile_types:
            return role
    return Role.NONE


def get_permissions(role: Role) -> frozenset[str]:
    return ROLE_PERMISSIONS[Role(role)]


def has_permission(role: Role, permission: str) -> bool:
    return permission in get_permissions(role)


def get_role_display_name(role: Role) -> str:
    return _DISPLAY[Role(role)][0]


def get_role_color(role: Role) -> str:
    return _DISPLAY[Role(role)][1]
