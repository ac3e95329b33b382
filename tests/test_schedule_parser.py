from unittest import TestCase

from msu_schedule.services.parsers.common_structs import ParsingResult
from msu_schedule.services.parsers.schedule_parser import ScheduleParser
from msu_schedule.services.utils.excel_reader import SpreadsheetOpenError, cell_text, open_workbook
from msu_schedule.services.utils.data_validator import parse_russian_date, parse_week_number


def _filled_slots(group):
    return [
        (day_index, lesson_index)
        for day_index, day in enumerate(group.days)
        for lesson_index, lesson in enumerate(day.lessons)
        if lesson is not None
    ]


class ParseRowsTest(TestCase):
    def setUp(self):
        self.parser = ScheduleParser()
        self.result = ParsingResult()

    def test_two_row_fixture(self):
        rows = [
            ["", "Химия, физика и механика материалов ... 1 курс"],
            ["I", "Органическая химия [ЛК] (Иванов А.А.)", "101"],
        ]
        self.parser.parse_rows(rows, self.result)

        self.assertEqual(list(self.result.groups), ["hfmm_1"])
        group = self.result.groups["hfmm_1"]
        self.assertEqual(group.title, "ХФММ, 1 курс")
        self.assertEqual(_filled_slots(group), [(0, 0)])

        lesson = group.days[0].lessons[0]
        self.assertEqual(lesson.subject, "Органическая химия")
        self.assertEqual(lesson.type, "Лекция")
        self.assertEqual(lesson.rooms, ["101"])

    def test_new_group_has_fixed_grid(self):
        self.parser.parse_rows([["ГЕОЛОГИЯ 2 КУРС"]], self.result)
        group = self.result.groups["geo_2"]
        self.assertEqual([d.day for d in group.days],
                         ["Понедельник", "Вторник", "Среда", "Четверг", "Пятница", "Суббота", "Воскресенье"])
        self.assertTrue(all(len(d.lessons) == 5 for d in group.days))
        self.assertEqual(_filled_slots(group), [])
        self.assertEqual(group.updated_at, "")

    def test_weekday_column_pairs(self):
        rows = [
            ["ЛИНГВИСТИКА 3 КУРС"],
            ["II", "", "", "Фонетика", "204", "", "", "", "", "", "", "", "", "Экзамен [экзамен]", "104"],
        ]
        self.parser.parse_rows(rows, self.result)
        group = self.result.groups["ling_3"]
        self.assertEqual(_filled_slots(group), [(1, 1), (6, 1)])
        self.assertEqual(group.days[6].lessons[1].type, "Экзамен")

    def test_room_column_may_be_just_past_row_end(self):
        rows = [["ХИМИЯ 1 КУРС"], ["3", "Физика"]]
        self.parser.parse_rows(rows, self.result)
        lesson = self.result.groups["hfmm_1"].days[0].lessons[2]
        self.assertEqual(lesson.subject, "Физика")
        self.assertEqual(lesson.rooms, [])

    def test_sixth_period_is_dropped(self):
        rows = [["ХИМИЯ 1 КУРС"], ["VI", "Физика", "101"], ["6.", "Химия", "102"]]
        self.parser.parse_rows(rows, self.result)
        self.assertEqual(_filled_slots(self.result.groups["hfmm_1"]), [])

    def test_lesson_rows_without_group_are_ignored(self):
        self.parser.parse_rows([["I", "Физика", "101"]], self.result)
        self.assertEqual(self.result.groups, {})

    def test_unresolved_header_keeps_current_group(self):
        rows = [
            ["ХИМИЯ 1 КУРС"],
            ["", "ОБЩИЙ 3 КУРС"],
            ["I", "Физика", "101"],
        ]
        self.parser.parse_rows(rows, self.result)
        self.assertEqual(list(self.result.groups), ["hfmm_1"])
        self.assertEqual(_filled_slots(self.result.groups["hfmm_1"]), [(0, 0)])

    def test_header_switches_between_groups(self):
        rows = [
            ["ХИМИЯ 1 КУРС"],
            ["I", "Химия", "101"],
            ["ГЕОЛОГИЯ 1 КУРС"],
            ["I", "Геология", "102"],
        ]
        self.parser.parse_rows(rows, self.result)
        self.assertEqual(self.result.groups["hfmm_1"].days[0].lessons[0].subject, "Химия")
        self.assertEqual(self.result.groups["geo_1"].days[0].lessons[0].subject, "Геология")

    def test_later_file_wins_per_slot(self):
        self.parser.parse_rows([["ХИМИЯ 1 КУРС"], ["I", "Химия", "101"], ["II", "Физика", "102"]], self.result)
        self.parser.parse_rows([["ХИМИЯ 1 КУРС"], ["I", "Биология", "103"]], self.result)

        group = self.result.groups["hfmm_1"]
        self.assertEqual(group.days[0].lessons[0].subject, "Биология")
        self.assertEqual(group.days[0].lessons[1].subject, "Физика")

    def test_parsing_is_idempotent(self):
        rows = [["ХИМИЯ 1 КУРС"], ["I", "Химия [ЛК] (Иванов А.А.)", "101"]]
        first = self.parser.parse_rows(rows, ParsingResult())
        second = self.parser.parse_rows(rows, ParsingResult())
        self.assertEqual(first, second)

    def test_week_number_and_dates(self):
        rows = [
            ["РАСПИСАНИЕ ЗАНЯТИЙ НА 12-Я НЕДЕЛЮ"],
            ["", "12-я неделя"],
            ["ХИМИЯ 1 КУРС"],
            ["", "Понедельник", "", "Вторник"],
            ["", "12 января 2026", "", "13 января 2026"],
            ["I", "Химия", "101"],
        ]
        self.parser.parse_rows(rows, self.result)

        group = self.result.groups["hfmm_1"]
        self.assertEqual(self.result.week_number, 12)
        self.assertEqual(group.days[0].date, "2026-01-12")
        self.assertEqual(group.days[1].date, "2026-01-13")
        self.assertIsNone(group.days[2].date)
        self.assertEqual(self.result.dates, ["2026-01-12", "2026-01-13"])
        self.assertEqual(_filled_slots(group), [(0, 0)])


class ContainerErrorTest(TestCase):
    def test_corrupt_bytes_raise_and_leave_result_untouched(self):
        result = ParsingResult()
        with self.assertRaises(SpreadsheetOpenError):
            ScheduleParser().parse_xls(b"definitely not a spreadsheet", result)
        self.assertEqual(result.groups, {})

    def test_open_workbook_wraps_reader_errors(self):
        with self.assertRaises(SpreadsheetOpenError):
            open_workbook(b"PK\x03\x04 not an xls either")


class CellTextTest(TestCase):
    def test_values(self):
        self.assertEqual(cell_text(101.0), "101")
        self.assertEqual(cell_text(float("nan")), "")
        self.assertEqual(cell_text(None), "")
        self.assertEqual(cell_text(1.5), "1.5")
        self.assertEqual(cell_text("II"), "II")


class DateHelpersTest(TestCase):
    def test_russian_dates(self):
        self.assertEqual(parse_russian_date("Понедельник 12 января 2026"), "2026-01-12")
        self.assertEqual(parse_russian_date("5 Мая 2025 г."), "2025-05-05")
        self.assertIsNone(parse_russian_date("5 брумера 2025"))
        self.assertIsNone(parse_russian_date(""))

    def test_week_number(self):
        self.assertEqual(parse_week_number("12-я неделя"), 12)
        self.assertEqual(parse_week_number("3 я Неделя"), 3)
        self.assertIsNone(parse_week_number("неделя"))
