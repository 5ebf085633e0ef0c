from __future__ import annotations

import pytest

from schoolpolicy.core.roles import Role
from schoolpolicy.dashboard.navigation import Section, can_access, visible_sections


def test_parent_sections_in_sidebar_order() -> None:
    assert visible_sections(Role.PARENT) == (
        Section.DASHBOARD,
        Section.GRADES,
        Section.MESSAGES,
        Section.DOCUMENTS,
        Section.SUPPORT,
    )


def test_only_super_admin_sees_schools() -> None:
    for role in Role:
        assert can_access(role, Section.SCHOOLS) == (role is Role.SUPER_ADMIN)


@pytest.mark.parametrize("role", list(Role))
def test_every_role_reaches_dashboard_and_messages(role) -> None:
    sections = visible_sections(role)
    assert Section.DASHBOARD in sections
    assert Section.MESSAGES in sections


@pytest.mark.parametrize("role", [None, "guest"])
def test_unknown_role_sees_nothing(role) -> None:
    assert visible_sections(role) == ()
    assert can_access(role, Section.DASHBOARD) is False


def test_principal_and_vice_principal_match() -> None:
    assert visible_sections("principal") == visible_sections("vice_principal")
