"""Canonical domain models (single source of truth).

Actors and their role assignments come from the session collaborator; entity
contexts are built by callers from data they already loaded. Nothing here does
I/O.
"""

from __future__ import annotations

from enum import Enum
from typing import Any, List, Mapping, Optional, Union

from pydantic import BaseModel, ConfigDict, Field

from schoolpolicy.core.roles import Role


class BaseModelStrict(BaseModel):
    model_config = ConfigDict(extra="forbid")


class BaseModelFrozen(BaseModel):
    # Hashable so callers can memoize on (context, role).
    model_config = ConfigDict(extra="forbid", frozen=True)


class Action(str, Enum):
    EDIT = "edit"
    DELETE = "delete"
    LEAVE = "leave"


class EntityKind(str, Enum):
    """Chat entity kinds. Other families (schedules, assignments) extend this enum."""

    PRIVATE = "private"
    GROUP = "group"


class UnknownEntityKindError(ValueError):
    """Raised when a context is built for a kind outside the closed enumeration."""


class RoleAssignment(BaseModelFrozen):
    role: Role
    school_id: Optional[int] = None
    class_id: Optional[int] = None


class Actor(BaseModelStrict):
    """A signed-in user as handed over by the session layer."""

    id: int
    role: Optional[Role] = None  # primary role
    active_role: Optional[Role] = None
    assignments: List[RoleAssignment] = Field(default_factory=list)


class Relationship(BaseModelFrozen):
    is_creator: bool = False


class EntityContext(BaseModelFrozen):
    entity_kind: EntityKind
    relationship: Relationship = Field(default_factory=Relationship)

    @property
    def is_creator(self) -> bool:
        return self.relationship.is_creator


def parse_entity_kind(value: Union[EntityKind, str]) -> EntityKind:
    if isinstance(value, EntityKind):
        return value
    raw = str(value or "").strip().lower()
    try:
        return EntityKind(raw)
    except ValueError:
        raise UnknownEntityKindError(f"unknown entity kind: {value!r}") from None


def describe(
    entity_kind: Union[EntityKind, str],
    relationship: Union[Relationship, Mapping[str, Any], None] = None,
    *,
    is_creator: Optional[bool] = None,
) -> EntityContext:
    """
    Build the context the evaluator needs for one entity instance.

    `is_creator` is a shortcut for `Relationship(is_creator=...)`; passing both is a
    caller bug. Unknown kinds raise `UnknownEntityKindError`.
    """
    kind = parse_entity_kind(entity_kind)
    if relationship is not None and is_creator is not None:
        raise ValueError("pass either relationship or is_creator, not both")
    if relationship is None:
        relationship = Relationship(is_creator=bool(is_creator))
    return EntityContext(entity_kind=kind, relationship=relationship)
