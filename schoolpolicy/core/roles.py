"""
Role model and composite role predicates.

Why:
- Roles are a closed enumeration; compare by value only.
- Anything resembling a hierarchy ("admin" = super admin or school admin) lives
  here as a named predicate, defined once and imported by every caller.
"""

from __future__ import annotations

from enum import Enum
from typing import TYPE_CHECKING, Any, FrozenSet, Iterable, Mapping, Optional, Union

if TYPE_CHECKING:
    from schoolpolicy.core.models import Actor


class Role(str, Enum):
    SUPER_ADMIN = "super_admin"
    SCHOOL_ADMIN = "school_admin"
    TEACHER = "teacher"
    CLASS_TEACHER = "class_teacher"
    STUDENT = "student"
    PARENT = "parent"
    PRINCIPAL = "principal"
    VICE_PRINCIPAL = "vice_principal"


class RoleNotAssignedError(ValueError):
    """Raised when switching to a role the actor does not hold."""


RoleLike = Union[Role, str, None]

ADMIN_ROLES: FrozenSet[Role] = frozenset({Role.SUPER_ADMIN, Role.SCHOOL_ADMIN})
LEADERSHIP_ROLES: FrozenSet[Role] = frozenset({Role.PRINCIPAL, Role.VICE_PRINCIPAL})
SCHOOL_MANAGEMENT_ROLES: FrozenSet[Role] = frozenset({Role.SCHOOL_ADMIN}) | LEADERSHIP_ROLES
TEACHING_ROLES: FrozenSet[Role] = frozenset({Role.TEACHER, Role.CLASS_TEACHER})


def parse_role(value: RoleLike) -> Optional[Role]:
    """Map a Role or its string value to a Role; anything else is None."""
    if value is None:
        return None
    if isinstance(value, Role):
        return value
    if not isinstance(value, str):
        return None
    raw = value.strip().lower()
    if not raw:
        return None
    try:
        return Role(raw)
    except ValueError:
        return None


def held_roles(actor: Optional["Actor"]) -> FrozenSet[Role]:
    if actor is None:
        return frozenset()
    out = {a.role for a in actor.assignments}
    if actor.role is not None:
        out.add(actor.role)
    return frozenset(out)


def active_role(actor: Optional["Actor"]) -> Optional[Role]:
    """
    The single role currently governing the actor's permissions.

    An explicitly selected active role wins, but only if the actor holds it.
    Without a selection the primary role applies.
    """
    if actor is None:
        return None
    if actor.active_role is not None:
        return actor.active_role if actor.active_role in held_roles(actor) else None
    return actor.role


def switch_active_role(actor: "Actor", role: RoleLike) -> "Actor":
    """Return a copy of `actor` with `role` active. The input is not mutated."""
    target = parse_role(role)
    if target is None or target not in held_roles(actor):
        raise RoleNotAssignedError(f"actor {actor.id} does not hold role {role!r}")
    return actor.model_copy(update={"active_role": target})


def has_role(role: RoleLike, roles: Iterable[Role]) -> bool:
    r = parse_role(role)
    if r is None:
        return False
    return r in frozenset(roles)


def any_role(role: RoleLike) -> bool:
    return parse_role(role) is not None


def is_admin(role: RoleLike) -> bool:
    return has_role(role, ADMIN_ROLES)


def is_super_admin(role: RoleLike) -> bool:
    return parse_role(role) is Role.SUPER_ADMIN


def is_school_admin(role: RoleLike) -> bool:
    return parse_role(role) is Role.SCHOOL_ADMIN


def is_school_leadership(role: RoleLike) -> bool:
    return has_role(role, LEADERSHIP_ROLES)


def is_school_management(role: RoleLike) -> bool:
    # School-scoped oversight: school admin, principal, vice principal.
    return has_role(role, SCHOOL_MANAGEMENT_ROLES)


def is_teaching_staff(role: RoleLike) -> bool:
    return has_role(role, TEACHING_ROLES)


def is_student(role: RoleLike) -> bool:
    return parse_role(role) is Role.STUDENT


def is_parent(role: RoleLike) -> bool:
    return parse_role(role) is Role.PARENT


def check_exhaustive(mapping: Mapping[Role, Any], name: str) -> None:
    """Fail at import when a per-role table misses a Role (e.g. a newly added one)."""
    missing = [r.value for r in Role if r not in mapping]
    if missing:
        raise RuntimeError(f"{name} has no entry for roles: {', '.join(missing)}")
