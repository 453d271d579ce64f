"""
View selection: which level to show and what to show in it.

Computed purely from a store snapshot and the search query:
- a week is selected      -> filtered materials
- a course is selected    -> filtered weeks
- otherwise               -> filtered courses
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Optional

from studybrowser.model import Level
from studybrowser.search import filter_records
from studybrowser.store import Snapshot

_EMPTY_TITLES = {
    Level.COURSES: "No courses found",
    Level.WEEKS: "No weeks found",
    Level.MATERIALS: "No materials found",
}

_EMPTY_HINTS = {
    Level.COURSES: "You are not enrolled in any courses yet.",
    Level.WEEKS: "No weeks have been added to this course yet.",
    Level.MATERIALS: "No materials have been added to this week yet.",
}

SEARCH_HINT = "Try a different search term."


@dataclass(frozen=True)
class View:
    level: Level
    heading: str
    items: tuple[Any, ...]
    total: int
    query: str
    loading: bool
    error: Optional[str]

    @property
    def empty_title(self) -> str:
        return _EMPTY_TITLES[self.level]

    @property
    def empty_hint(self) -> str:
        return SEARCH_HINT if self.query else _EMPTY_HINTS[self.level]


def displayed_level(snap: Snapshot) -> Level:
    if snap.selected_course is not None and snap.selected_week is not None:
        return Level.MATERIALS
    if snap.selected_course is not None:
        return Level.WEEKS
    return Level.COURSES


def _heading(snap: Snapshot, level: Level) -> str:
    if level is Level.MATERIALS:
        return f"{snap.selected_course.title} - {snap.selected_week.title}"
    if level is Level.WEEKS:
        return f"{snap.selected_course.title} - Weeks"
    return "Courses"


def select_view(snap: Snapshot, query: str = "") -> View:
    level = displayed_level(snap)
    records = snap.records(level)
    status = snap.status_of(level)
    return View(
        level=level,
        heading=_heading(snap, level),
        items=tuple(filter_records(records, query)),
        total=len(records),
        query=query,
        loading=status.loading,
        error=status.error,
    )
