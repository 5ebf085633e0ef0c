from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from functools import lru_cache
from typing import FrozenSet, List, Optional

from schoolpolicy.core.models import Action

logger = logging.getLogger(__name__)


def _env_bool(name: str, default: bool = False) -> bool:
    raw = (os.getenv(name) or "").strip().lower()
    if not raw:
        return default
    return raw in ("1", "true", "yes", "y", "on")


def _split_csv(raw: str) -> List[str]:
    return [x.strip() for x in (raw or "").split(",") if x.strip()]


@dataclass(frozen=True)
class AuthzPolicy:
    """
    Deployment-level knobs around the static rule table.

    The rule table itself is code. These settings can only take permissions away
    (denylist) or add visibility (audit logging); they never grant.
    """

    # Log every decision at DEBUG (matched rules, granted, denied).
    audit_decisions: bool = False

    # Actions withheld everywhere, e.g. during an incident. Deny wins over any rule.
    action_denylist: Optional[FrozenSet[Action]] = None


@lru_cache(maxsize=1)
def load_authz_policy() -> AuthzPolicy:
    """
    Load evaluator policy from env (ConfigMap/Secret friendly).

    Recommended vars:
    - AUTHZ_AUDIT_DECISIONS=0|1
    - AUTHZ_ACTION_DENYLIST=delete,leave
    """

    deny: List[Action] = []
    for name in _split_csv(os.getenv("AUTHZ_ACTION_DENYLIST", "")):
        try:
            deny.append(Action(name.lower()))
        except ValueError:
            logger.warning("Ignoring unknown action in AUTHZ_ACTION_DENYLIST: %s", name)

    return AuthzPolicy(
        audit_decisions=_env_bool("AUTHZ_AUDIT_DECISIONS", False),
        action_denylist=frozenset(deny) if deny else None,
    )
