# msu_schedule/services/parsers/row_classifier.py

import re
from dataclasses import dataclass
from typing import List, Optional, Tuple

from msu_schedule.services.utils.lookup_tables import LookupTables, DEFAULT_TABLES


@dataclass(frozen=True)
class GroupHeader:
    id: str
    title: str


def build_row_text(cells: List[str]) -> str:
    """Склеивает ячейки строки в одну строку для поиска ключевых слов."""
    return " ".join(cells).strip().upper()


def is_header_candidate(row_text: str, tables: LookupTables = DEFAULT_TABLES) -> bool:
    # "... курс" встречается и в заголовках практик, такие строки группу не открывают
    return tables.course_marker in row_text and tables.header_exclusion not in row_text


def find_direction(row_text: str, tables: LookupTables = DEFAULT_TABLES) -> Optional[str]:
    """Код направления по первому совпавшему ключевому слову (в порядке таблицы)."""
    for keyword, code in tables.directions:
        if keyword in row_text:
            return code
    return None


def find_course(row_text: str, tables: LookupTables = DEFAULT_TABLES) -> Optional[str]:
    match = re.search(r'(\d+)\s*' + re.escape(tables.course_marker), row_text)
    if match:
        return match.group(1)
    return None


def format_title(code: str, course: str, tables: LookupTables = DEFAULT_TABLES) -> str:
    return f"{tables.direction_title(code)}, {course} курс"


def classify_header(row_text: str, tables: LookupTables = DEFAULT_TABLES) -> Optional[GroupHeader]:
    """
    Определяет, открывает ли строка новую группу ("ПРИКЛАДНАЯ МАТЕМАТИКА ... 2 КУРС").
    Если не нашлось направление или номер курса, строка заголовком не считается.
    """
    if not is_header_candidate(row_text, tables):
        return None

    code = find_direction(row_text, tables)
    course = find_course(row_text, tables)
    if not code or not course:
        return None

    return GroupHeader(id=f"{code}_{course}", title=format_title(code, course, tables))


def parse_period(first_cell: str, tables: LookupTables = DEFAULT_TABLES) -> Optional[int]:
    """Номер пары из первой ячейки строки: 'II.', ' 3 ' и т.п. Возвращает None для прочих строк."""
    token = str(first_cell).strip().strip('. ')
    return tables.period_number(token)


def lesson_columns(day_index: int) -> Tuple[int, int]:
    """Колонки (предмет, аудитория) для дня недели: у каждого дня своя пара колонок после номера пары."""
    return day_index * 2 + 1, day_index * 2 + 2
