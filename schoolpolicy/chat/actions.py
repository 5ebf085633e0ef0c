"""Chat action affordances (context menu + swipe panel).

Both consumers ask the evaluator and only filter by which handlers the caller
wired up. Neither looks at the chat kind, creator flag or role itself.
"""

from __future__ import annotations

from typing import Iterable, List, Optional, Tuple

from pydantic import BaseModel, Field

from schoolpolicy.authz.evaluator import evaluate
from schoolpolicy.authz.policy import AuthzPolicy
from schoolpolicy.core.models import Action, EntityContext
from schoolpolicy.core.roles import RoleLike

# Order in which entries appear; fixed so output is stable across calls.
MENU_ORDER: Tuple[Action, ...] = (Action.EDIT, Action.LEAVE, Action.DELETE)
SWIPE_ORDER: Tuple[Action, ...] = (Action.LEAVE, Action.EDIT, Action.DELETE)

# Row translation, in spacing units. The close button is always revealed.
SWIPE_BASE_OFFSET = 16
SWIPE_OFFSET_PER_ACTION = 8

_LABELS = {
    Action.EDIT: "Edit name",
    Action.LEAVE: "Leave chat",
    Action.DELETE: "Delete chat",
}
_DESTRUCTIVE = frozenset({Action.LEAVE, Action.DELETE})


class MenuEntry(BaseModel):
    action: Action
    label: str
    destructive: bool = False


class SwipePanel(BaseModel):
    actions: List[Action] = Field(default_factory=list)
    reveal_offset: int = 0

    @property
    def can_reveal(self) -> bool:
        return bool(self.actions)


def _visible(
    context: EntityContext,
    role: RoleLike,
    available: Optional[Iterable[Action]],
    order: Tuple[Action, ...],
    policy: Optional[AuthzPolicy],
) -> List[Action]:
    permitted = evaluate(context, role, policy=policy)
    if available is not None:
        # An action without a handler has nothing to render.
        permitted = permitted & frozenset(available)
    return [a for a in order if a in permitted]


def context_menu(
    context: EntityContext,
    role: RoleLike,
    available: Optional[Iterable[Action]] = None,
    *,
    policy: Optional[AuthzPolicy] = None,
) -> List[MenuEntry]:
    return [
        MenuEntry(action=a, label=_LABELS[a], destructive=a in _DESTRUCTIVE)
        for a in _visible(context, role, available, MENU_ORDER, policy)
    ]


def swipe_panel(
    context: EntityContext,
    role: RoleLike,
    available: Optional[Iterable[Action]] = None,
    *,
    policy: Optional[AuthzPolicy] = None,
) -> SwipePanel:
    actions = _visible(context, role, available, SWIPE_ORDER, policy)
    if not actions:
        return SwipePanel()
    return SwipePanel(actions=actions, reveal_offset=SWIPE_BASE_OFFSET + SWIPE_OFFSET_PER_ACTION * len(actions))
