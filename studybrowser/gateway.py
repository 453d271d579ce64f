"""
Remote data gateway: HTTP access to the course API.

Endpoints (all return a JSON array):

    GET /courses/
    GET /course-weeks/course/<course_id>
    GET /course-materials/week/<week_id>

Every request carries `Authorization: Bearer <token>` when a token is given.
Anything that goes wrong (connection, timeout, HTTP status, bad JSON,
malformed records) is raised as FetchFailure.

The blocking `get_*` methods are used by the plain CLI. The async `fetch_*`
methods run the same request in a worker thread so the navigator's event
loop is never blocked.
"""

from __future__ import annotations

import asyncio
import logging
import threading
from typing import Any, Callable, Optional, TypeVar

import requests

from studybrowser.config import DEFAULT_API_URL, DEFAULT_TIMEOUT
from studybrowser.errors import FetchFailure
from studybrowser.model import Course, Material, Week

log = logging.getLogger(__name__)

T = TypeVar("T")


# ---------------------------------------------------------------------------
# Paths
# ---------------------------------------------------------------------------

COURSES_PATH = "/courses/"
WEEKS_PATH = "/course-weeks/course/{course_id}"
MATERIALS_PATH = "/course-materials/week/{week_id}"


class RemoteGateway:
    """
    Without an explicit `session`, each thread gets its own requests.Session:
    a stale fetch and the current one may run in two worker threads at the
    same time, and a Session is not safe to share between threads. A session
    passed in is used as-is for every call.
    """

    def __init__(
        self,
        base_url: str = DEFAULT_API_URL,
        timeout: float = DEFAULT_TIMEOUT,
        session: Optional[requests.Session] = None,
    ) -> None:
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self._shared = session
        self._local = threading.local()
        self._sessions: list[requests.Session] = []
        self._lock = threading.Lock()

    def _session(self) -> requests.Session:
        if self._shared is not None:
            return self._shared
        session = getattr(self._local, "session", None)
        if session is None:
            session = requests.Session()
            self._local.session = session
            with self._lock:
                self._sessions.append(session)
        return session

    # -----------------------------------------------------------------------
    # Core logic
    # -----------------------------------------------------------------------

    def _get_json_list(self, path: str, token: Optional[str]) -> list[dict[str, Any]]:
        url = self.base_url + path
        headers = {"Accept": "application/json"}
        if token:
            headers["Authorization"] = f"Bearer {token}"

        log.debug("GET %s", url)
        try:
            resp = self._session().get(url, headers=headers, timeout=self.timeout)
            resp.raise_for_status()
        except requests.HTTPError as e:
            status = e.response.status_code if e.response is not None else None
            raise FetchFailure(f"GET {path} failed with HTTP {status}", status=status) from e
        except requests.RequestException as e:
            raise FetchFailure(f"GET {path} failed: {e}") from e

        try:
            data = resp.json()
        except ValueError as e:
            # requests' JSONDecodeError is a ValueError subclass
            raise FetchFailure(f"GET {path} returned invalid JSON") from e

        if not isinstance(data, list):
            raise FetchFailure(f"GET {path} returned {type(data).__name__}, expected a list")

        out: list[dict[str, Any]] = []
        for item in data:
            if not isinstance(item, dict):
                raise FetchFailure(f"GET {path} returned a non-object record")
            out.append(item)
        return out

    def get_courses(self, token: Optional[str] = None) -> list[Course]:
        return [Course.from_dict(r) for r in self._get_json_list(COURSES_PATH, token)]

    def get_weeks(self, course_id: int, token: Optional[str] = None) -> list[Week]:
        """
        Weeks of one course, in the order the server sent them.
        """
        path = WEEKS_PATH.format(course_id=course_id)
        return [Week.from_dict(r) for r in self._get_json_list(path, token)]

    def get_materials(self, week_id: int, token: Optional[str] = None) -> list[Material]:
        path = MATERIALS_PATH.format(week_id=week_id)
        return [Material.from_dict(r) for r in self._get_json_list(path, token)]

    # -----------------------------------------------------------------------
    # Async facade
    # -----------------------------------------------------------------------

    async def _in_thread(self, fn: Callable[..., T], *args: Any) -> T:
        return await asyncio.to_thread(fn, *args)

    async def fetch_courses(self, token: Optional[str] = None) -> list[Course]:
        return await self._in_thread(self.get_courses, token)

    async def fetch_weeks(self, course_id: int, token: Optional[str] = None) -> list[Week]:
        return await self._in_thread(self.get_weeks, course_id, token)

    async def fetch_materials(self, week_id: int, token: Optional[str] = None) -> list[Material]:
        return await self._in_thread(self.get_materials, week_id, token)

    def close(self) -> None:
        if self._shared is not None:
            self._shared.close()
        with self._lock:
            sessions, self._sessions = self._sessions, []
        for session in sessions:
            session.close()
