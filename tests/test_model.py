import unittest

from studybrowser.errors import FetchFailure
from studybrowser.model import Course, Material, Week


class TestModel(unittest.TestCase):
    def test_course_optional_fields(self) -> None:
        c = Course.from_dict({"id": 1, "title": "Algebra", "lecturer_id": 4})
        self.assertIsNone(c.description)
        self.assertIsNone(c.created_at)
        self.assertEqual(c.lecturer_id, 4)

    def test_week_defaults_and_validation(self) -> None:
        w = Week.from_dict({"id": 2, "course_id": 1, "title": "W1", "week_number": 1})
        self.assertEqual(w.description, "")
        with self.assertRaises(FetchFailure):
            Week.from_dict({"id": 2, "course_id": 1, "title": "W1"})

    def test_id_must_be_integer(self) -> None:
        with self.assertRaises(FetchFailure):
            Course.from_dict({"id": True, "title": "x"})
        with self.assertRaises(FetchFailure):
            Course.from_dict({"title": "no id"})

    def test_material_type(self) -> None:
        base = {"id": 3, "week_id": 2, "title": "T", "description": "", "content": "x"}
        self.assertTrue(Material.from_dict({**base, "material_type": "link"}).is_link)
        self.assertFalse(Material.from_dict({**base, "material_type": "drive-file"}).is_link)
        self.assertEqual(Material.from_dict({**base, "material_type": "video"}).material_type, "video")


if __name__ == "__main__":
    unittest.main()
