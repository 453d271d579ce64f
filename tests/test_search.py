"""
Unit tests for client-side search.

Match rule: case-insensitive substring of title OR description.
"""

import unittest

from fakes import course, week

from studybrowser.search import filter_records


class TestFilterRecords(unittest.TestCase):
    def setUp(self) -> None:
        self.courses = [
            course(1, "Linear Algebra", "Vectors and matrices"),
            course(2, "Physics", None),
            course(3, "Statistics", "Probability, MATRIX methods"),
        ]

    def test_empty_query_is_identity(self) -> None:
        self.assertEqual(filter_records(self.courses, ""), self.courses)

    def test_whitespace_is_matched_literally(self) -> None:
        self.assertEqual(filter_records(self.courses, "   "), [])
        courses = [course(1, "Algebra"), course(2, "Linear Algebra I")]
        self.assertEqual([c.id for c in filter_records(courses, "algebra ")], [2])
        self.assertEqual([c.id for c in filter_records(courses, " ")], [2])

    def test_title_or_description_case_insensitive(self) -> None:
        self.assertEqual([c.id for c in filter_records(self.courses, "matri")], [1, 3])
        self.assertEqual([c.id for c in filter_records(self.courses, "PHYS")], [2])

    def test_missing_description_never_matches(self) -> None:
        self.assertEqual(filter_records(self.courses, "none"), [])

    def test_idempotent(self) -> None:
        once = filter_records(self.courses, "a")
        self.assertEqual(filter_records(once, "a"), once)

    def test_input_not_modified(self) -> None:
        weeks = (week(11, 1, 1, "W1"), week(10, 1, 2, "W2"))
        self.assertEqual([w.title for w in filter_records(weeks, "w1")], ["W1"])
        self.assertEqual(len(weeks), 2)


if __name__ == "__main__":
    unittest.main()
