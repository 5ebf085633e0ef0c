from __future__ import annotations

import pytest

from schoolpolicy.core.models import Actor, RoleAssignment
from schoolpolicy.core.roles import (
    Role,
    RoleNotAssignedError,
    active_role,
    held_roles,
    is_admin,
    is_parent,
    is_school_admin,
    is_school_leadership,
    is_school_management,
    is_student,
    is_super_admin,
    is_teaching_staff,
    parse_role,
    switch_active_role,
)


def test_parse_role_accepts_enum_and_string_values() -> None:
    assert parse_role(Role.TEACHER) is Role.TEACHER
    assert parse_role("class_teacher") is Role.CLASS_TEACHER
    assert parse_role("  Super_Admin ") is Role.SUPER_ADMIN


@pytest.mark.parametrize("value", [None, "", "janitor", 42, "SUPERADMIN"])
def test_parse_role_unrecognized_is_none(value) -> None:
    assert parse_role(value) is None


@pytest.mark.parametrize("role", list(Role) + [None, "nope"])
def test_is_admin_matches_super_and_school_admin_only(role) -> None:
    assert is_admin(role) == (role in (Role.SUPER_ADMIN, Role.SCHOOL_ADMIN))


def test_is_admin_accepts_string_values() -> None:
    assert is_admin("school_admin") is True
    assert is_admin("principal") is False


def test_composite_groups() -> None:
    assert is_teaching_staff(Role.CLASS_TEACHER)
    assert not is_teaching_staff(Role.PRINCIPAL)
    assert is_school_leadership(Role.VICE_PRINCIPAL)
    assert not is_school_leadership(Role.SCHOOL_ADMIN)
    assert is_school_management(Role.SCHOOL_ADMIN)
    assert not is_school_management(Role.SUPER_ADMIN)
    assert not is_school_management(None)


def test_active_role_falls_back_to_primary_role() -> None:
    actor = Actor(id=1, role=Role.TEACHER)
    assert active_role(actor) is Role.TEACHER


def test_active_role_prefers_selected_role_when_held() -> None:
    actor = Actor(
        id=1,
        role=Role.TEACHER,
        active_role=Role.CLASS_TEACHER,
        assignments=[RoleAssignment(role=Role.CLASS_TEACHER, school_id=3, class_id=7)],
    )
    assert active_role(actor) is Role.CLASS_TEACHER


def test_active_role_not_held_fails_closed() -> None:
    actor = Actor(id=1, role=Role.STUDENT, active_role=Role.SUPER_ADMIN)
    assert active_role(actor) is None


def test_active_role_without_any_role_is_none() -> None:
    assert active_role(Actor(id=1)) is None
    assert active_role(None) is None


def test_held_roles_merges_primary_and_assignments() -> None:
    actor = Actor(id=1, role=Role.PARENT, assignments=[RoleAssignment(role=Role.TEACHER)])
    assert held_roles(actor) == {Role.PARENT, Role.TEACHER}


def test_switch_active_role_returns_copy() -> None:
    actor = Actor(id=5, role=Role.TEACHER, assignments=[RoleAssignment(role=Role.PRINCIPAL)])
    switched = switch_active_role(actor, "principal")
    assert active_role(switched) is Role.PRINCIPAL
    assert actor.active_role is None


def test_switch_active_role_rejects_unheld_role() -> None:
    actor = Actor(id=5, role=Role.STUDENT)
    with pytest.raises(RoleNotAssignedError):
        switch_active_role(actor, Role.SCHOOL_ADMIN)
    with pytest.raises(RoleNotAssignedError):
        switch_active_role(actor, "not-a-role")


@pytest.mark.parametrize("role", list(Role) + [None, "nope"])
def test_single_role_predicates_match_only_their_role(role) -> None:
    assert is_super_admin(role) == (role is Role.SUPER_ADMIN)
    assert is_school_admin(role) == (role is Role.SCHOOL_ADMIN)
    assert is_student(role) == (role is Role.STUDENT)
    assert is_parent(role) == (role is Role.PARENT)


def test_single_role_predicates_accept_string_values() -> None:
    assert is_super_admin("super_admin")
    assert is_school_admin(" School_Admin ")
    assert is_student("student")
    assert is_parent("parent")
    assert not is_parent("student")


def test_is_admin_is_union_of_admin_predicates() -> None:
    for role in Role:
        assert is_admin(role) == (is_super_admin(role) or is_school_admin(role))
