"""
In-memory gateway for navigator tests.

Each fetch waits on its own asyncio.Event, so a test decides exactly when
(and in which order) responses arrive.
"""

from __future__ import annotations

import asyncio
from typing import Any, Optional

from studybrowser.errors import FetchFailure
from studybrowser.model import Course, Material, Week


class FakeGateway:
    def __init__(self, auto_release: bool = True) -> None:
        self.auto_release = auto_release
        self.courses: list[Course] = []
        self.weeks: dict[int, list[Week]] = {}
        self.materials: dict[int, list[Material]] = {}
        self.failing: set[tuple[str, Optional[int]]] = set()
        self.calls: list[tuple[str, Optional[int], Optional[str]]] = []
        self.gates: dict[int, asyncio.Event] = {}

    def fail(self, kind: str, key: Optional[int] = None) -> None:
        self.failing.add((kind, key))

    def release(self, call_index: int) -> None:
        self.gates[call_index].set()

    async def _answer(self, kind: str, key: Optional[int], token: Optional[str], result: Any) -> Any:
        index = len(self.calls)
        self.calls.append((kind, key, token))
        gate = asyncio.Event()
        self.gates[index] = gate
        if self.auto_release:
            gate.set()
        await gate.wait()
        if (kind, key) in self.failing:
            raise FetchFailure(f"{kind} {key} unavailable", status=503)
        return list(result)

    async def fetch_courses(self, token: Optional[str] = None) -> list[Course]:
        return await self._answer("courses", None, token, self.courses)

    async def fetch_weeks(self, course_id: int, token: Optional[str] = None) -> list[Week]:
        return await self._answer("weeks", course_id, token, self.weeks.get(course_id, []))

    async def fetch_materials(self, week_id: int, token: Optional[str] = None) -> list[Material]:
        return await self._answer("materials", week_id, token, self.materials.get(week_id, []))


def course(id: int, title: str, description: Optional[str] = None) -> Course:
    return Course(id=id, title=title, description=description, lecturer_id=7)


def week(id: int, course_id: int, week_number: int, title: str, description: str = "") -> Week:
    return Week(id=id, course_id=course_id, title=title, description=description, week_number=week_number)


def material(id: int, week_id: int, title: str, material_type: str = "link", description: str = "") -> Material:
    return Material(
        id=id,
        week_id=week_id,
        title=title,
        description=description,
        material_type=material_type,
        content=f"https://example.org/m/{id}",
    )
