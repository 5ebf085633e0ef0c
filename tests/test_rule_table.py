from __future__ import annotations

import pytest

from schoolpolicy.authz.rules import (
    RULE_TABLE,
    PolicyRule,
    RuleTableError,
    any_relationship,
    is_creator,
    validate_rule_table,
)
from schoolpolicy.core.models import Action, EntityKind
from schoolpolicy.core.roles import any_role


def _rule(name: str, kind: EntityKind, **kw) -> PolicyRule:
    return PolicyRule(name=name, entity_kind=kind, relationship=any_relationship, role=any_role, **kw)


def test_every_entity_kind_has_exactly_one_family() -> None:
    assert set(RULE_TABLE) == set(EntityKind)
    for kind, family in RULE_TABLE.items():
        assert family
        assert all(r.entity_kind is kind for r in family)


def test_rule_names_are_unique() -> None:
    names = [r.name for fam in RULE_TABLE.values() for r in fam]
    assert len(names) == len(set(names))


def test_group_edit_is_a_single_named_rule() -> None:
    editors = [r for r in RULE_TABLE[EntityKind.GROUP] if Action.EDIT in r.grants]
    assert [r.name for r in editors] == ["chat.group.edit_title"]
    assert editors[0].relationship is is_creator


def test_rule_table_is_read_only() -> None:
    with pytest.raises(TypeError):
        RULE_TABLE[EntityKind.GROUP] = ()  # type: ignore[index]


def test_validate_rejects_missing_family() -> None:
    with pytest.raises(RuleTableError, match="no rule family"):
        validate_rule_table({EntityKind.PRIVATE: ()})


def test_validate_rejects_misfiled_rule() -> None:
    table = {
        EntityKind.PRIVATE: (_rule("x", EntityKind.GROUP, grants=frozenset({Action.LEAVE})),),
        EntityKind.GROUP: (),
    }
    with pytest.raises(RuleTableError, match="filed under"):
        validate_rule_table(table)


def test_validate_rejects_duplicate_names() -> None:
    table = {
        EntityKind.PRIVATE: (_rule("dup", EntityKind.PRIVATE),),
        EntityKind.GROUP: (_rule("dup", EntityKind.GROUP),),
    }
    with pytest.raises(RuleTableError, match="duplicate"):
        validate_rule_table(table)


def test_validate_rejects_self_contradicting_rule() -> None:
    table = {
        EntityKind.PRIVATE: (
            _rule("both", EntityKind.PRIVATE, grants=frozenset({Action.EDIT}), denies=frozenset({Action.EDIT})),
        ),
        EntityKind.GROUP: (),
    }
    with pytest.raises(RuleTableError, match="both grants and denies"):
        validate_rule_table(table)
