from __future__ import annotations

from enum import Enum
from types import MappingProxyType
from typing import FrozenSet, Mapping, Tuple

from schoolpolicy.core.roles import Role, RoleLike, check_exhaustive, parse_role


class Section(str, Enum):
    # Declaration order is the sidebar order.
    DASHBOARD = "dashboard"
    SCHOOLS = "schools"
    USERS = "users"
    USER_ROLES = "user-roles"
    SCHEDULE = "schedule"
    HOMEWORK = "homework"
    GRADES = "grades"
    MESSAGES = "messages"
    DOCUMENTS = "documents"
    ANALYTICS = "analytics"
    NOTIFICATIONS = "notifications"
    SETTINGS = "settings"
    SUPPORT = "support"


def _sections(*items: Section) -> FrozenSet[Section]:
    return frozenset(items)


S = Section
_LEADERSHIP = _sections(
    S.DASHBOARD, S.USERS, S.SCHEDULE, S.GRADES, S.ANALYTICS, S.MESSAGES, S.DOCUMENTS, S.SETTINGS, S.SUPPORT
)

_ACCESS: Mapping[Role, FrozenSet[Section]] = MappingProxyType(
    {
        Role.SUPER_ADMIN: _sections(
            S.DASHBOARD, S.SCHOOLS, S.USERS, S.USER_ROLES, S.ANALYTICS, S.MESSAGES, S.NOTIFICATIONS, S.SETTINGS, S.SUPPORT
        ),
        Role.SCHOOL_ADMIN: _sections(
            S.DASHBOARD,
            S.USERS,
            S.USER_ROLES,
            S.SCHEDULE,
            S.HOMEWORK,
            S.GRADES,
            S.ANALYTICS,
            S.MESSAGES,
            S.NOTIFICATIONS,
            S.SETTINGS,
            S.SUPPORT,
        ),
        Role.TEACHER: _sections(S.DASHBOARD, S.SCHEDULE, S.HOMEWORK, S.MESSAGES, S.DOCUMENTS, S.SUPPORT),
        Role.CLASS_TEACHER: _sections(S.DASHBOARD, S.SCHEDULE, S.HOMEWORK, S.GRADES, S.MESSAGES, S.DOCUMENTS, S.SUPPORT),
        Role.STUDENT: _sections(S.DASHBOARD, S.SCHEDULE, S.HOMEWORK, S.GRADES, S.MESSAGES, S.DOCUMENTS, S.SUPPORT),
        Role.PARENT: _sections(S.DASHBOARD, S.GRADES, S.MESSAGES, S.DOCUMENTS, S.SUPPORT),
        Role.PRINCIPAL: _LEADERSHIP,
        Role.VICE_PRINCIPAL: _LEADERSHIP,
    }
)

check_exhaustive(_ACCESS, "navigation access")


def visible_sections(role: RoleLike) -> Tuple[Section, ...]:
    """Sidebar sections for the active role, in sidebar order. No role, no sections."""
    r = parse_role(role)
    if r is None:
        return ()
    allowed = _ACCESS[r]
    return tuple(s for s in Section if s in allowed)


def can_access(role: RoleLike, section: Section) -> bool:
    r = parse_role(role)
    return r is not None and section in _ACCESS[r]
