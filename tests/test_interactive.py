"""
Scripted session through the interactive browser.

Input comes from a list of answers, output goes to a recording rich Console.
"""

import unittest
from unittest import mock

from fakes import FakeGateway, course, material, week
from rich.console import Console

from studybrowser.interactive import run_browser
from studybrowser.navigator import Browsing, Navigator


def scripted(*answers: str):
    it = iter(answers)

    def _prompt(msg: str) -> str:
        try:
            return next(it)
        except StopIteration:
            raise EOFError

    return _prompt


class TestInteractive(unittest.IsolatedAsyncioTestCase):
    def setUp(self) -> None:
        self.gateway = FakeGateway()
        self.gateway.courses = [course(1, "Algebra")]
        self.gateway.weeks = {1: [week(10, 1, 2, "W2"), week(11, 1, 1, "W1")]}
        self.gateway.materials = {11: [material(100, 11, "Intro slides")]}
        self.nav = Navigator(self.gateway, lambda: None)
        self.console = Console(record=True, width=120)

    async def test_browse_down_and_open_material(self) -> None:
        with mock.patch("studybrowser.interactive.webbrowser.open") as open_url:
            await run_browser(self.nav, self.console, scripted("1", "/w1", "1", "/", "1", "y", "q"))

        open_url.assert_called_once_with("https://example.org/m/100")
        self.assertEqual(self.nav.state, Browsing.MATERIALS)
        text = self.console.export_text()
        self.assertIn("Algebra - Weeks", text)
        self.assertIn("Algebra - W1", text)
        self.assertIn("Bye.", text)

    async def test_back_and_invalid_input(self) -> None:
        await run_browser(self.nav, self.console, scripted("1", "b", "x", "9"))
        self.assertEqual(self.nav.state, Browsing.COURSES)
        text = self.console.export_text()
        self.assertIn("Invalid choice.", text)
        self.assertIn("Out of range.", text)
        self.assertEqual([c[0] for c in self.gateway.calls], ["courses", "weeks"])

    async def test_failure_is_shown(self) -> None:
        self.gateway.fail("weeks", 1)
        await run_browser(self.nav, self.console, scripted("1", "q"))
        self.assertIn("Failed to load course weeks", self.console.export_text())

    async def test_input_ends_at_open_material_prompt(self) -> None:
        # course 1, week W1 (first after sorting), material 1, then stdin closes
        with mock.patch("studybrowser.interactive.webbrowser.open") as open_url:
            await run_browser(self.nav, self.console, scripted("1", "1", "1"))

        open_url.assert_not_called()
        text = self.console.export_text()
        self.assertIn("Location: https://example.org/m/100", text)
        self.assertIn("Bye.", text)

    async def test_week_without_description_shows_placeholder(self) -> None:
        self.gateway.courses = [course(1, "Algebra", "Linear maps")]
        await run_browser(self.nav, self.console, scripted("q"))
        self.assertNotIn("No description available", self.console.export_text())

        await run_browser(self.nav, self.console, scripted("1", "q"))
        self.assertIn("No description available", self.console.export_text())


if __name__ == "__main__":
    unittest.main()
