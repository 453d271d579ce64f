import unittest

from fakes import course, material, week

from studybrowser.model import Level
from studybrowser.store import HierarchyStore
from studybrowser.view import SEARCH_HINT, select_view


class TestSelectView(unittest.TestCase):
    def setUp(self) -> None:
        self.store = HierarchyStore()
        self.algebra = course(1, "Algebra")
        self.w1 = week(11, 1, 1, "W1")
        self.store.set_courses([self.algebra, course(2, "Physics")])

    def test_courses_when_nothing_selected(self) -> None:
        view = select_view(self.store.snapshot)
        self.assertEqual(view.level, Level.COURSES)
        self.assertEqual(view.heading, "Courses")
        self.assertEqual(view.total, 2)

    def test_weeks_when_course_selected(self) -> None:
        self.store.select_course(self.algebra)
        self.store.set_weeks([week(10, 1, 2, "W2"), self.w1])
        view = select_view(self.store.snapshot, "w1")
        self.assertEqual(view.level, Level.WEEKS)
        self.assertEqual(view.heading, "Algebra - Weeks")
        self.assertEqual(view.items, (self.w1,))
        self.assertEqual(view.total, 2)

    def test_materials_when_week_selected(self) -> None:
        self.store.select_course(self.algebra)
        self.store.set_weeks([self.w1])
        self.store.select_week(self.w1)
        self.store.set_materials([material(100, 11, "Slides")])
        view = select_view(self.store.snapshot)
        self.assertEqual(view.level, Level.MATERIALS)
        self.assertEqual(view.heading, "Algebra - W1")
        self.assertEqual(len(view.items), 1)

    def test_empty_hints(self) -> None:
        self.store.select_course(self.algebra)
        self.store.set_weeks([])
        view = select_view(self.store.snapshot)
        self.assertEqual(view.empty_title, "No weeks found")
        self.assertEqual(view.empty_hint, "No weeks have been added to this course yet.")
        self.assertEqual(select_view(self.store.snapshot, "x").empty_hint, SEARCH_HINT)

    def test_error_belongs_to_displayed_level(self) -> None:
        self.store.select_course(self.algebra)
        self.store.mark_failed(Level.WEEKS, "Failed")
        self.assertEqual(select_view(self.store.snapshot).error, "Failed")
        self.store.select_course(None)
        self.assertIsNone(select_view(self.store.snapshot).error)


if __name__ == "__main__":
    unittest.main()
