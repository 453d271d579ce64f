"""
Navigator: the state machine behind the browser.

States (derived from the selection path):

    COURSES                      nothing selected
    WEEKS(course)                a course is selected
    MATERIALS(course, week)      a course and one of its weeks are selected

Selecting a course or week changes the state immediately (the level enters
its loading state) and starts the fetch for the next level as an asyncio
task. Going back never fetches.

Stale responses: every fetch gets a FetchTicket. When the response arrives
it is applied only if the ticket is still the current one for that level;
otherwise the user has moved on and the response is dropped. Nothing is
cancelled, the request just finishes unnoticed.
"""

from __future__ import annotations

import asyncio
import enum
import itertools
import logging
from dataclasses import dataclass
from typing import Any, Awaitable, Optional, Protocol

from studybrowser.credentials import CredentialProvider
from studybrowser.errors import FetchFailure
from studybrowser.model import Course, Level, Material, Week
from studybrowser.store import HierarchyStore, Snapshot
from studybrowser.view import View, displayed_level, select_view

log = logging.getLogger(__name__)

FAILURE_MESSAGES = {
    Level.COURSES: "Failed to load courses. Please try again later.",
    Level.WEEKS: "Failed to load course weeks. Please try again later.",
    Level.MATERIALS: "Failed to load course materials. Please try again later.",
}


class Browsing(enum.Enum):
    COURSES = "courses"
    WEEKS = "weeks"
    MATERIALS = "materials"


class Gateway(Protocol):
    async def fetch_courses(self, token: Optional[str] = None) -> list[Course]: ...

    async def fetch_weeks(self, course_id: int, token: Optional[str] = None) -> list[Week]: ...

    async def fetch_materials(self, week_id: int, token: Optional[str] = None) -> list[Material]: ...


@dataclass(frozen=True)
class FetchTicket:
    level: Level
    course_id: Optional[int]
    week_id: Optional[int]
    seq: int


class Navigator:
    def __init__(
        self,
        gateway: Gateway,
        credentials: CredentialProvider,
        store: Optional[HierarchyStore] = None,
    ) -> None:
        self.gateway = gateway
        self.credentials = credentials
        self.store = store if store is not None else HierarchyStore()
        self.query = ""
        self._seq = itertools.count(1)
        self._current: dict[Level, Optional[FetchTicket]] = {level: None for level in Level}
        self._tasks: set[asyncio.Task] = set()

    # -----------------------------------------------------------------------
    # Read side
    # -----------------------------------------------------------------------

    @property
    def snapshot(self) -> Snapshot:
        return self.store.snapshot

    @property
    def state(self) -> Browsing:
        return Browsing(displayed_level(self.store.snapshot).value)

    def view(self) -> View:
        return select_view(self.store.snapshot, self.query)

    def set_query(self, query: str) -> None:
        self.query = query

    # -----------------------------------------------------------------------
    # Transitions
    # -----------------------------------------------------------------------

    def start(self) -> asyncio.Task:
        """
        Fetch the course list. Call once when the browsing session begins.
        """
        return self._dispatch(Level.COURSES)

    def select_course(self, course: Course) -> Optional[asyncio.Task]:
        snap = self.store.snapshot
        if self._is_current(snap.selected_course, course) and not self._needs_refetch(Level.WEEKS):
            # same course: the weeks are already held (or on their way)
            self.back_to_weeks()
            return None

        self._invalidate(Level.WEEKS, Level.MATERIALS)
        self.store.select_course(course)
        return self._dispatch(Level.WEEKS)

    def select_week(self, week: Week) -> Optional[asyncio.Task]:
        snap = self.store.snapshot
        if snap.selected_course is None:
            raise ValueError("Select a course before selecting a week")
        if self._is_current(snap.selected_week, week) and not self._needs_refetch(Level.MATERIALS):
            return None

        # the store validates the week before anything is invalidated
        self.store.select_week(week)
        self._invalidate(Level.MATERIALS)
        return self._dispatch(Level.MATERIALS)

    def back_to_courses(self) -> None:
        self._invalidate(Level.WEEKS, Level.MATERIALS)
        self.store.select_course(None)

    def back_to_weeks(self) -> None:
        if self.store.snapshot.selected_week is None:
            return
        self._invalidate(Level.MATERIALS)
        self.store.select_week(None)

    def back(self) -> None:
        """One level up; does nothing on the course list."""
        state = self.state
        if state is Browsing.MATERIALS:
            self.back_to_weeks()
        elif state is Browsing.WEEKS:
            self.back_to_courses()

    def refresh(self) -> asyncio.Task:
        """
        Re-fetch the level currently shown. Only ever triggered by the user.
        """
        state = self.state
        if state is Browsing.MATERIALS:
            return self._dispatch(Level.MATERIALS)
        if state is Browsing.WEEKS:
            self._invalidate(Level.MATERIALS)
            return self._dispatch(Level.WEEKS)
        return self._dispatch(Level.COURSES)

    async def wait_idle(self) -> None:
        """Wait until every fetch started so far has finished."""
        while self._tasks:
            await asyncio.gather(*list(self._tasks))

    # -----------------------------------------------------------------------
    # Fetching
    # -----------------------------------------------------------------------

    @staticmethod
    def _is_current(selected: Any, candidate: Any) -> bool:
        return selected is not None and selected.id == candidate.id

    def _needs_refetch(self, level: Level) -> bool:
        return self.store.snapshot.status_of(level).error is not None

    def _invalidate(self, *levels: Level) -> None:
        for level in levels:
            self._current[level] = None

    def _request(self, ticket: FetchTicket) -> Awaitable[list]:
        token = self.credentials()
        if ticket.level is Level.COURSES:
            return self.gateway.fetch_courses(token)
        if ticket.level is Level.WEEKS:
            return self.gateway.fetch_weeks(ticket.course_id, token)
        return self.gateway.fetch_materials(ticket.week_id, token)

    def _dispatch(self, level: Level) -> asyncio.Task:
        snap = self.store.snapshot
        ticket = FetchTicket(
            level=level,
            course_id=snap.selected_course.id if snap.selected_course is not None else None,
            week_id=snap.selected_week.id if snap.selected_week is not None else None,
            seq=next(self._seq),
        )
        self._current[level] = ticket
        self.store.mark_loading(level)
        log.debug("fetch %s dispatched (ticket %s)", level.value, ticket)

        task = asyncio.get_running_loop().create_task(self._run(ticket))
        self._tasks.add(task)
        task.add_done_callback(self._tasks.discard)
        return task

    async def _run(self, ticket: FetchTicket) -> None:
        try:
            records = await self._request(ticket)
        except FetchFailure as e:
            if self._current[ticket.level] != ticket:
                log.debug("stale failure for %s dropped: %s", ticket.level.value, e)
                return
            log.warning("fetch %s failed: %s", ticket.level.value, e)
            self._current[ticket.level] = None
            self.store.mark_failed(ticket.level, FAILURE_MESSAGES[ticket.level])
            return

        if self._current[ticket.level] != ticket:
            log.debug("stale response for %s dropped (ticket %s)", ticket.level.value, ticket)
            return

        self._current[ticket.level] = None
        if ticket.level is Level.COURSES:
            self.store.set_courses(records)
        elif ticket.level is Level.WEEKS:
            self.store.set_weeks(records)
        else:
            self.store.set_materials(records)
        log.debug("fetch %s applied: %d records", ticket.level.value, len(records))
