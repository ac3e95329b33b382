from unittest import TestCase

from msu_schedule.services.parsers.row_classifier import (
    build_row_text, classify_header, find_course, find_direction, is_header_candidate,
    lesson_columns, parse_period,
)
from msu_schedule.services.utils.lookup_tables import DEFAULT_TABLES, LookupTables


class HeaderDetectionTest(TestCase):
    def test_applied_math_second_course(self):
        text = build_row_text(["", "Прикладная математика и информатика", "", "2 курс"])
        header = classify_header(text)
        self.assertIsNotNone(header)
        self.assertEqual(header.id, "pmi_2")
        self.assertEqual(header.title, "ПМИ, 2 курс")

    def test_every_direction_resolves(self):
        expected = {
            "ХИМИЯ": ("hfmm_1", "ХФММ, 1 курс"),
            "ГЕОЛОГИЯ": ("geo_1", "Геология, 1 курс"),
            "МЕЖДУНАРОДНЫЕ ОТНОШЕНИЯ": ("mo_1", "МО, 1 курс"),
            "ЛИНГВИСТИКА": ("ling_1", "Лингвистика, 1 курс"),
            "ГОСУДАРСТВЕННОЕ УПРАВЛЕНИЕ": ("gmu_1", "ГМУ, 1 курс"),
        }
        for keyword, (group_id, title) in expected.items():
            header = classify_header(f"{keyword} 1 КУРС")
            self.assertEqual((header.id, header.title), (group_id, title), keyword)

    def test_practical_rows_are_not_headers(self):
        text = "ПРАКТИЧЕСКИЙ КУРС ХИМИЯ 1 КУРС"
        self.assertFalse(is_header_candidate(text))
        self.assertIsNone(classify_header(text))

    def test_missing_direction_or_course(self):
        self.assertIsNone(classify_header("ОБЩИЙ 3 КУРС"))
        self.assertIsNone(classify_header("ХИМИЯ, КУРС ЛЕКЦИЙ"))

    def test_first_declared_direction_wins(self):
        text = "ПРИКЛАДНАЯ ХИМИЯ 3 КУРС"
        self.assertEqual(find_direction(text), "pmi")

        tables = LookupTables(directions=(("ХИМИЯ", "hfmm"), ("ПРИКЛАДНАЯ", "pmi")))
        self.assertEqual(classify_header(text, tables).id, "hfmm_3")

    def test_course_allows_missing_space(self):
        self.assertEqual(find_course("ГЕОЛОГИЯ 4КУРС"), "4")

    def test_row_text_is_uppercased_and_trimmed(self):
        self.assertEqual(build_row_text(["", "химия", "1 курс", ""]), "ХИМИЯ 1 КУРС")


class PeriodTest(TestCase):
    def test_roman_and_arabic_numerals(self):
        values = {"I": 1, "II": 2, "III": 3, "IV": 4, "V": 5, "VI": 6,
                  "1": 1, "2": 2, "3": 3, "4": 4, "5": 5, "6": 6}
        for token, number in values.items():
            self.assertEqual(parse_period(token), number, token)

    def test_dots_and_spaces_are_trimmed(self):
        self.assertEqual(parse_period(" III. "), 3)
        self.assertEqual(parse_period(".2."), 2)

    def test_other_cells(self):
        self.assertIsNone(parse_period(""))
        self.assertIsNone(parse_period("VII"))
        self.assertIsNone(parse_period("Понедельник"))

    def test_lesson_columns(self):
        self.assertEqual(lesson_columns(0), (1, 2))
        self.assertEqual(lesson_columns(6), (13, 14))


class LookupTablesTest(TestCase):
    def test_default_tables_are_read_only(self):
        with self.assertRaises(TypeError):
            DEFAULT_TABLES.periods["VII"] = 7
        with self.assertRaises(TypeError):
            DEFAULT_TABLES.direction_titles["pmi"] = "Математика"
        self.assertIsNone(parse_period("VII"))

    def test_custom_periods_are_copied(self):
        periods = {"I": 1}
        tables = LookupTables(periods=periods)
        periods["II"] = 2

        self.assertIsNone(parse_period("II", tables))
        self.assertEqual(parse_period("I", tables), 1)

    def test_tables_are_hashable(self):
        self.assertEqual(hash(DEFAULT_TABLES), hash(LookupTables()))
        self.assertEqual(DEFAULT_TABLES, LookupTables())
