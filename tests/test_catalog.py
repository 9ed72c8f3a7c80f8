import unittest

from biuh_gpa.catalog import DEFAULT_CATALOG, CourseCatalog, CultureCourseOption
from biuh_gpa.config import CREDIT_STANDARD


class TestDefaultCatalog(unittest.TestCase):
    def test_seven_fixed_entries(self) -> None:
        self.assertEqual(len(DEFAULT_CATALOG), 7)
        self.assertEqual(
            DEFAULT_CATALOG.keys(),
            ("cc-1", "cc-2", "cc-3-1", "cc-3-2", "cc-3-3", "cc-4-1", "cc-4-2"),
        )

    def test_credits(self) -> None:
        credits = {o.key: o.credit for o in DEFAULT_CATALOG}
        self.assertEqual(credits["cc-1"], 3)
        self.assertEqual(credits["cc-3-1"], 2)
        self.assertEqual(credits["cc-3-3"], 1)
        self.assertEqual(credits["cc-4-2"], 2.5)

    def test_credit_standard(self) -> None:
        self.assertEqual(CREDIT_STANDARD, {"language": 2.5, "major": 5})

    def test_unknown_key_falls_back_to_first_entry(self) -> None:
        self.assertEqual(DEFAULT_CATALOG.resolve("cc-9").key, "cc-1")
        self.assertEqual(DEFAULT_CATALOG.resolve(None).key, "cc-1")
        self.assertIsNone(DEFAULT_CATALOG.get("cc-9"))

    def test_known_key(self) -> None:
        option = DEFAULT_CATALOG.resolve("cc-3-2")
        self.assertEqual(option.label, "Chinese culture 3-2")
        self.assertIn("cc-3-2", DEFAULT_CATALOG)


class TestCatalogConstruction(unittest.TestCase):
    def test_empty_catalog_rejected(self) -> None:
        with self.assertRaises(ValueError):
            CourseCatalog([])

    def test_duplicate_keys_rejected(self) -> None:
        with self.assertRaises(ValueError):
            CourseCatalog([CultureCourseOption("a", "A", 1), CultureCourseOption("a", "A again", 2)])

    def test_non_positive_credit_rejected(self) -> None:
        with self.assertRaises(ValueError):
            CourseCatalog([CultureCourseOption("a", "A", 0)])

    def test_custom_catalog_default(self) -> None:
        catalog = CourseCatalog([CultureCourseOption("x", "X", 4), CultureCourseOption("y", "Y", 1)])
        self.assertEqual(catalog.default.key, "x")
        self.assertEqual(catalog.resolve("zzz").credit, 4)


if __name__ == "__main__":
    unittest.main()
