"""Dashboard content selection: active role -> view descriptor.

`select_view` is total over Role. `_VIEWS` is checked at import so a Role added
without a dashboard entry fails immediately instead of rendering nothing.
"""

from __future__ import annotations

from enum import Enum
from types import MappingProxyType
from typing import FrozenSet, Mapping, Optional, Tuple

from pydantic import BaseModel, ConfigDict

from schoolpolicy.core.roles import Role, RoleLike, check_exhaustive, parse_role


class Widget(str, Enum):
    SCHOOL_LIST = "school_list"
    SYSTEM_STATUS = "system_status"
    RECENT_ACTIVITY = "recent_activity"
    ADMIN_CLASS_LIST = "admin_class_list"
    TEACHER_SCHEDULE = "teacher_schedule"
    STUDENT_SCHEDULE = "student_schedule"
    HOMEWORK_LIST = "homework_list"
    CLASS_OVERVIEW = "class_overview"
    SCHOOL_OVERVIEW = "school_overview"


class StatKind(str, Enum):
    SCHOOLS = "schools"
    USERS = "users"
    STUDENTS = "students"
    TEACHERS = "teachers"
    NOTIFICATIONS = "notifications"
    HOMEWORK = "homework"
    SYSTEM = "system"


class DataSource(str, Enum):
    SCHOOLS = "schools"
    USERS = "users"
    NOTIFICATIONS = "notifications"
    HOMEWORK = "homework"


# Which query backs each stat tile.
_STAT_SOURCES: Mapping[StatKind, Optional[DataSource]] = MappingProxyType(
    {
        StatKind.SCHOOLS: DataSource.SCHOOLS,
        StatKind.USERS: DataSource.USERS,
        StatKind.STUDENTS: DataSource.USERS,
        StatKind.TEACHERS: DataSource.USERS,
        StatKind.NOTIFICATIONS: DataSource.NOTIFICATIONS,
        StatKind.HOMEWORK: DataSource.HOMEWORK,
        StatKind.SYSTEM: None,
    }
)


class ViewDescriptor(BaseModel):
    model_config = ConfigDict(frozen=True)

    role: Optional[Role] = None
    widgets: Tuple[Widget, ...] = ()
    stats: Tuple[StatKind, ...] = ()

    @property
    def is_empty(self) -> bool:
        return not self.widgets and not self.stats

    @property
    def data_sources(self) -> FrozenSet[DataSource]:
        """Queries the page must enable to fill this view."""
        out = {_STAT_SOURCES[s] for s in self.stats}
        out.discard(None)
        return frozenset(out)  # type: ignore[arg-type]


EMPTY_VIEW = ViewDescriptor()


def _view(role: Role, widgets: Tuple[Widget, ...], stats: Tuple[StatKind, ...]) -> ViewDescriptor:
    return ViewDescriptor(role=role, widgets=widgets, stats=stats)


_LEARNER_STATS = (StatKind.HOMEWORK, StatKind.NOTIFICATIONS)

_VIEWS: Mapping[Role, ViewDescriptor] = MappingProxyType(
    {
        Role.SUPER_ADMIN: _view(
            Role.SUPER_ADMIN,
            (Widget.SCHOOL_LIST, Widget.SYSTEM_STATUS, Widget.RECENT_ACTIVITY),
            (StatKind.SCHOOLS, StatKind.USERS, StatKind.NOTIFICATIONS, StatKind.SYSTEM),
        ),
        Role.SCHOOL_ADMIN: _view(
            Role.SCHOOL_ADMIN,
            (Widget.ADMIN_CLASS_LIST, Widget.RECENT_ACTIVITY),
            (StatKind.STUDENTS, StatKind.TEACHERS, StatKind.NOTIFICATIONS, StatKind.HOMEWORK),
        ),
        Role.TEACHER: _view(
            Role.TEACHER,
            (Widget.TEACHER_SCHEDULE, Widget.HOMEWORK_LIST),
            (StatKind.HOMEWORK, StatKind.NOTIFICATIONS),
        ),
        Role.CLASS_TEACHER: _view(
            Role.CLASS_TEACHER,
            (Widget.TEACHER_SCHEDULE, Widget.CLASS_OVERVIEW),
            (StatKind.HOMEWORK, StatKind.NOTIFICATIONS),
        ),
        Role.STUDENT: _view(Role.STUDENT, (Widget.STUDENT_SCHEDULE, Widget.HOMEWORK_LIST), _LEARNER_STATS),
        Role.PARENT: _view(Role.PARENT, (Widget.SCHOOL_OVERVIEW, Widget.HOMEWORK_LIST), _LEARNER_STATS),
        Role.PRINCIPAL: _view(Role.PRINCIPAL, (Widget.SCHOOL_OVERVIEW, Widget.HOMEWORK_LIST), ()),
        Role.VICE_PRINCIPAL: _view(Role.VICE_PRINCIPAL, (Widget.SCHOOL_OVERVIEW, Widget.HOMEWORK_LIST), ()),
    }
)

check_exhaustive(_VIEWS, "dashboard views")


def select_view(role: RoleLike) -> ViewDescriptor:
    r = parse_role(role)
    if r is None:
        return EMPTY_VIEW
    return _VIEWS[r]
