"""
Static policy rule table.

Each entity kind is governed by exactly one rule family. Rules are named so that a
decision (e.g. who may rename a group chat) exists in one place and consumers
never re-derive it.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from types import MappingProxyType
from typing import Callable, FrozenSet, Mapping, Tuple

from schoolpolicy.core.models import Action, EntityKind, Relationship
from schoolpolicy.core.roles import Role, any_role

logger = logging.getLogger(__name__)

RelationshipPredicate = Callable[[Relationship], bool]
RolePredicate = Callable[[Role], bool]


class RuleTableError(RuntimeError):
    """The rule table is malformed. Raised at import, never during evaluation."""


def any_relationship(_rel: Relationship) -> bool:
    return True


def is_creator(rel: Relationship) -> bool:
    return rel.is_creator


def not_creator(rel: Relationship) -> bool:
    return not rel.is_creator


@dataclass(frozen=True)
class PolicyRule:
    name: str
    entity_kind: EntityKind
    relationship: RelationshipPredicate
    role: RolePredicate
    grants: FrozenSet[Action] = frozenset()
    denies: FrozenSet[Action] = frozenset()
    description: str = ""

    def matches(self, kind: EntityKind, rel: Relationship, role: Role) -> bool:
        return kind is self.entity_kind and self.relationship(rel) and self.role(role)


CHAT_RULES: Tuple[PolicyRule, ...] = (
    PolicyRule(
        name="chat.private.member",
        entity_kind=EntityKind.PRIVATE,
        relationship=any_relationship,
        role=any_role,
        grants=frozenset({Action.DELETE, Action.LEAVE}),
        description="Either participant may delete or leave a private chat.",
    ),
    PolicyRule(
        name="chat.group.edit_title",
        entity_kind=EntityKind.GROUP,
        relationship=is_creator,
        role=any_role,
        grants=frozenset({Action.EDIT}),
        description="Only the creator of a group chat may rename it.",
    ),
    PolicyRule(
        name="chat.group.delete",
        entity_kind=EntityKind.GROUP,
        relationship=is_creator,
        role=any_role,
        grants=frozenset({Action.DELETE}),
        description="Only the creator may delete a group chat.",
    ),
    PolicyRule(
        name="chat.group.leave",
        entity_kind=EntityKind.GROUP,
        relationship=any_relationship,
        role=any_role,
        grants=frozenset({Action.LEAVE}),
        description="Participants may leave a group chat.",
    ),
    PolicyRule(
        name="chat.group.creator_stays",
        entity_kind=EntityKind.GROUP,
        relationship=is_creator,
        role=any_role,
        denies=frozenset({Action.LEAVE}),
        description="The creator owns the group and deletes it instead of leaving.",
    ),
)


def validate_rule_table(table: Mapping[EntityKind, Tuple[PolicyRule, ...]]) -> None:
    missing = [k.value for k in EntityKind if k not in table]
    if missing:
        raise RuleTableError(f"no rule family for entity kinds: {', '.join(missing)}")

    seen = set()
    for kind, family in table.items():
        for rule in family:
            if rule.entity_kind is not kind:
                raise RuleTableError(
                    f"rule {rule.name} targets {rule.entity_kind.value} but is filed under {kind.value}"
                )
            if rule.name in seen:
                raise RuleTableError(f"duplicate rule name: {rule.name}")
            seen.add(rule.name)
            both = rule.grants & rule.denies
            if both:
                raise RuleTableError(
                    f"rule {rule.name} both grants and denies: {sorted(a.value for a in both)}"
                )


def _build_rule_table() -> Mapping[EntityKind, Tuple[PolicyRule, ...]]:
    table = {kind: tuple(r for r in CHAT_RULES if r.entity_kind is kind) for kind in EntityKind}
    validate_rule_table(table)
    logger.debug("Loaded policy rule table: %d rules across %d entity kinds", len(CHAT_RULES), len(table))
    return MappingProxyType(table)


RULE_TABLE: Mapping[EntityKind, Tuple[PolicyRule, ...]] = _build_rule_table()


def rules_for(kind: EntityKind) -> Tuple[PolicyRule, ...]:
    return RULE_TABLE.get(kind, ())
