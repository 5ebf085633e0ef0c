"""Policy evaluator: (entity context, active role) -> permitted actions.

Pure and synchronous. Reads only its inputs, the immutable rule table and the
cached deployment policy, so it is safe to call on every render or request.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, FrozenSet, Mapping, Optional, Tuple, Union

from schoolpolicy.authz.policy import AuthzPolicy, load_authz_policy
from schoolpolicy.authz.rules import rules_for
from schoolpolicy.core.models import Action, EntityContext, EntityKind, Relationship, describe
from schoolpolicy.core.roles import RoleLike, parse_role

logger = logging.getLogger(__name__)

_EMPTY: FrozenSet[Action] = frozenset()


@dataclass(frozen=True)
class Decision:
    matched_rules: Tuple[str, ...]
    granted: FrozenSet[Action]
    denied: FrozenSet[Action]
    actions: FrozenSet[Action]


def explain(context: EntityContext, role: RoleLike, *, policy: Optional[AuthzPolicy] = None) -> Decision:
    """Evaluate and keep the intermediate sets (for audit and debugging)."""
    pol = policy if policy is not None else load_authz_policy()
    r = parse_role(role)
    if r is None:
        # Fail closed: no active role, no actions.
        return Decision(matched_rules=(), granted=_EMPTY, denied=_EMPTY, actions=_EMPTY)

    matched = [
        rule for rule in rules_for(context.entity_kind) if rule.matches(context.entity_kind, context.relationship, r)
    ]
    granted = frozenset().union(*(rule.grants for rule in matched))
    denied = frozenset().union(*(rule.denies for rule in matched))
    if pol.action_denylist:
        denied = denied | pol.action_denylist

    decision = Decision(
        matched_rules=tuple(rule.name for rule in matched),
        granted=granted,
        denied=denied,
        actions=granted - denied,
    )
    if pol.audit_decisions:
        logger.debug(
            "authz kind=%s creator=%s role=%s rules=%s actions=%s",
            context.entity_kind.value,
            context.is_creator,
            r.value,
            ",".join(decision.matched_rules) or "-",
            ",".join(sorted(a.value for a in decision.actions)) or "-",
        )
    return decision


def evaluate(context: EntityContext, role: RoleLike, *, policy: Optional[AuthzPolicy] = None) -> FrozenSet[Action]:
    """Union of grants from matching rules, minus every deny (deny wins)."""
    return explain(context, role, policy=policy).actions


def permitted_actions(
    entity_kind: Union[EntityKind, str],
    relationship: Union[Relationship, Mapping[str, Any], bool, None],
    role: RoleLike,
    *,
    policy: Optional[AuthzPolicy] = None,
) -> FrozenSet[Action]:
    """
    Query form used by consumers that have not built a context yet.

    `relationship` may be a Relationship, a mapping like `{"is_creator": False}`,
    or a bare creator flag. Only a real bool (or None) takes the flag shortcut;
    anything else is validated as a Relationship, so `"false"` is rejected
    instead of being read as truthy. An unknown entity kind raises from `describe`.
    """
    if relationship is None or isinstance(relationship, bool):
        ctx = describe(entity_kind, is_creator=bool(relationship))
    else:
        ctx = describe(entity_kind, relationship)
    return evaluate(ctx, role, policy=policy)


def is_permitted(
    context: EntityContext, role: RoleLike, action: Action, *, policy: Optional[AuthzPolicy] = None
) -> bool:
    return action in evaluate(context, role, policy=policy)
