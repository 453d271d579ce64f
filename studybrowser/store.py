"""
Hierarchy store: the records currently known for each level plus the
selection path (selected course, selected week).

State lives in an immutable Snapshot. Every operation builds a new snapshot
and replaces the current one, so views are always computed from a
consistent picture and never see a half-applied change.

Store contract:
- selecting a course clears the selected week, the weeks and the materials
- selecting a week clears the materials
- weeks are kept sorted by week_number (stable, ties keep fetch order)
- a failed level keeps an empty collection, never a partial one
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from typing import Iterable, Optional

from studybrowser.model import Course, Level, Material, Week

IDLE = "idle"
LOADING = "loading"
LOADED = "loaded"
ERROR = "error"


@dataclass(frozen=True)
class LevelStatus:
    state: str = IDLE
    error: Optional[str] = None

    @property
    def loading(self) -> bool:
        return self.state == LOADING


@dataclass(frozen=True)
class Snapshot:
    courses: tuple[Course, ...] = ()
    weeks: tuple[Week, ...] = ()
    materials: tuple[Material, ...] = ()
    selected_course: Optional[Course] = None
    selected_week: Optional[Week] = None
    status: dict[Level, LevelStatus] = field(
        default_factory=lambda: {level: LevelStatus() for level in Level}
    )

    def status_of(self, level: Level) -> LevelStatus:
        return self.status.get(level, LevelStatus())

    def records(self, level: Level) -> tuple:
        if level is Level.COURSES:
            return self.courses
        if level is Level.WEEKS:
            return self.weeks
        return self.materials


def _with_status(snap: Snapshot, **changes: LevelStatus) -> dict[Level, LevelStatus]:
    status = dict(snap.status)
    for name, value in changes.items():
        status[Level(name)] = value
    return status


class HierarchyStore:
    def __init__(self) -> None:
        self._snapshot = Snapshot()

    @property
    def snapshot(self) -> Snapshot:
        return self._snapshot

    def _commit(self, snap: Snapshot) -> None:
        self._snapshot = snap

    # -----------------------------------------------------------------------
    # Collections
    # -----------------------------------------------------------------------

    def set_courses(self, courses: Iterable[Course]) -> None:
        snap = self._snapshot
        self._commit(
            replace(snap, courses=tuple(courses), status=_with_status(snap, courses=LevelStatus(LOADED)))
        )

    def set_weeks(self, weeks: Iterable[Week]) -> None:
        snap = self._snapshot
        ordered = tuple(sorted(weeks, key=lambda w: w.week_number))
        self._commit(replace(snap, weeks=ordered, status=_with_status(snap, weeks=LevelStatus(LOADED))))

    def set_materials(self, materials: Iterable[Material]) -> None:
        snap = self._snapshot
        self._commit(
            replace(snap, materials=tuple(materials), status=_with_status(snap, materials=LevelStatus(LOADED)))
        )

    def mark_loading(self, level: Level) -> None:
        """
        Enter the pending state for a level. Its collection is emptied so
        nothing from an earlier fetch is shown while loading.
        """
        snap = self._snapshot
        status = _with_status(snap, **{level.value: LevelStatus(LOADING)})
        self._commit(replace(snap, status=status, **{level.value: ()}))

    def mark_failed(self, level: Level, message: str) -> None:
        snap = self._snapshot
        status = _with_status(snap, **{level.value: LevelStatus(ERROR, message)})
        self._commit(replace(snap, status=status, **{level.value: ()}))

    # -----------------------------------------------------------------------
    # Selection path
    # -----------------------------------------------------------------------

    def select_course(self, course: Optional[Course]) -> None:
        snap = self._snapshot
        self._commit(
            replace(
                snap,
                selected_course=course,
                selected_week=None,
                weeks=(),
                materials=(),
                status=_with_status(snap, weeks=LevelStatus(), materials=LevelStatus()),
            )
        )

    def select_week(self, week: Optional[Week]) -> None:
        snap = self._snapshot
        if week is not None:
            if snap.selected_course is None:
                raise ValueError("Cannot select a week while no course is selected")
            if week.course_id != snap.selected_course.id:
                raise ValueError(
                    f"Week {week.id} belongs to course {week.course_id}, "
                    f"not to the selected course {snap.selected_course.id}"
                )
        self._commit(
            replace(
                snap,
                selected_week=week,
                materials=(),
                status=_with_status(snap, materials=LevelStatus()),
            )
        )
