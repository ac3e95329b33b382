# msu_schedule/services/parsers/schedule_parser.py

import pandas as pd
import logging
from typing import List, Optional

from .common_structs import GroupSchedule, ParsingResult, empty_week
from .lesson_parser import parse_lesson
from .row_classifier import build_row_text, classify_header, parse_period, lesson_columns

from config import Config
from msu_schedule.services.utils import excel_reader
from msu_schedule.services.utils.data_validator import parse_russian_date, parse_week_number
from msu_schedule.services.utils.lookup_tables import LookupTables, DEFAULT_TABLES


log = logging.getLogger(__name__)

# Сколько первых строк листа просматривать в поисках "N-я неделя"
WEEK_SCAN_ROWS = 6
# Сколько строк под заголовком группы может занимать шапка с днями и датами
DATE_SCAN_ROWS = 2


def _cell(row: List[str], col: int) -> str:
    return row[col].strip() if col < len(row) else ""


class ScheduleParser:
    """
    Разбирает недельные таблицы расписания в словарь групп.

    Один вызов parse_xls() получает монопольный доступ к переданному ParsingResult
    и не хранит на него ссылку после возврата. Файлы одного цикла разбираются
    последовательно в общий ParsingResult; при совпадении id группы побеждает
    последний записанный слот.
    """

    def __init__(self, tables: LookupTables = DEFAULT_TABLES, encoding: Optional[str] = None):
        self.tables = tables
        self.encoding = encoding or Config.SOURCE_ENCODING

    def parse_xls(self, data: bytes, result: ParsingResult) -> ParsingResult:
        """
        Главная функция парсера. Открывает .xls из памяти и дописывает группы в result.
        Если файл не открывается, бросает SpreadsheetOpenError, не трогая result.
        """
        xls = excel_reader.open_workbook(data, self.encoding)
        try:
            self.parse_workbook(xls, result)
        finally:
            # Всегда закрываем открытый файл
            xls.close()
        return result

    def parse_workbook(self, xls: pd.ExcelFile, result: ParsingResult) -> ParsingResult:
        log.info("Запуск парсера расписания...")
        for sheet_name in xls.sheet_names:
            rows = excel_reader.read_sheet_rows(xls, sheet_name)
            if not rows:
                log.info(f"  [✗] Пропуск листа '{sheet_name}': лист пуст.")
                continue

            log.info(f"  [✓] Анализ листа '{sheet_name}' ({len(rows)} строк)...")
            self.parse_rows(rows, result)

        log.info(f"Парсер расписания завершил работу. Групп в накопителе: {len(result.groups)}.")
        return result

    def parse_rows(self, rows: List[List[str]], result: ParsingResult) -> ParsingResult:
        """
        Проходит строки одного листа. Строка-заголовок делает группу текущей,
        строка с номером пары заполняет слоты текущей группы по всем дням недели.
        """
        if result.week_number is None:
            self._detect_week_number(rows, result)

        current_group: Optional[GroupSchedule] = None

        for r, row in enumerate(rows):
            if not row:
                continue

            header = classify_header(build_row_text(row), self.tables)
            if header:
                current_group = result.groups.get(header.id)
                if current_group is None:
                    current_group = GroupSchedule(
                        id=header.id,
                        title=header.title,
                        days=empty_week(self.tables.day_names, self.tables.periods_per_day),
                    )
                    result.groups[header.id] = current_group
                    log.info(f"Найдена группа: {header.title}")
                self._assign_dates(rows[r + 1:r + 1 + DATE_SCAN_ROWS], current_group, result)
                continue

            if current_group is not None:
                self._parse_lesson_row(row, current_group)

        return result

    def _parse_lesson_row(self, row: List[str], group: GroupSchedule):
        period = parse_period(_cell(row, 0), self.tables)
        if period is None:
            return

        lesson_index = period - 1
        if not 0 <= lesson_index < self.tables.periods_per_day:
            log.debug(f"Пара {period} вне сетки, строка пропущена ({group.id}).")
            return

        width = len(row)
        for day_index, day in enumerate(group.days):
            subject_col, room_col = lesson_columns(day_index)
            if room_col > width:
                continue

            subject = _cell(row, subject_col)
            if not subject:
                continue

            day.lessons[lesson_index] = parse_lesson(subject, _cell(row, room_col), self.tables)

    def _assign_dates(self, header_rows: List[List[str]], group: GroupSchedule, result: ParsingResult):
        """Даты дней под заголовком группы: колонка c относится к дню (c - 1) // 2."""
        for row in header_rows:
            for col, text in enumerate(row):
                if col == 0:
                    continue
                parsed_date = parse_russian_date(text)
                if not parsed_date:
                    continue

                day_index = (col - 1) // 2
                if day_index < len(group.days):
                    group.days[day_index].date = parsed_date
                result.dates.append(parsed_date)

    def _detect_week_number(self, rows: List[List[str]], result: ParsingResult):
        for row in rows[:WEEK_SCAN_ROWS]:
            week_number = parse_week_number(" ".join(row))
            if week_number is not None:
                result.week_number = week_number
                log.info(f"Номер учебной недели: {week_number}")
                return
