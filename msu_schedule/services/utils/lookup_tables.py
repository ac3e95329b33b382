# msu_schedule/services/utils/lookup_tables.py

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Dict, Mapping, Optional, Tuple

from .enums import LessonType


DAY_NAMES: Tuple[str, ...] = (
    "Понедельник", "Вторник", "Среда", "Четверг", "Пятница", "Суббота", "Воскресенье"
)

PERIODS: Dict[str, int] = {
    "I": 1, "II": 2, "III": 3, "IV": 4, "V": 5, "VI": 6,
    "1": 1, "2": 2, "3": 3, "4": 4, "5": 5, "6": 6,
}

# Порядок важен: при нескольких совпадениях в строке заголовка побеждает первое.
DIRECTIONS: Tuple[Tuple[str, str], ...] = (
    ("ПРИКЛАДНАЯ", "pmi"),
    ("ХИМИЯ", "hfmm"),
    ("ГЕОЛОГИЯ", "geo"),
    ("МЕЖДУНАРОДНЫЕ", "mo"),
    ("ЛИНГВИСТИКА", "ling"),
    ("ГОСУДАРСТВЕННОЕ", "gmu"),
)

DIRECTION_TITLES: Dict[str, str] = {
    "pmi": "ПМИ",
    "hfmm": "ХФММ",
    "geo": "Геология",
    "mo": "МО",
    "ling": "Лингвистика",
    "gmu": "ГМУ",
}

LESSON_TYPES: Tuple[Tuple[str, str], ...] = (
    ("ЛК", LessonType.LECTURE.value),
    ("ПЗ", LessonType.PRACTICE.value),
    ("СЕМИНАР", LessonType.SEMINAR.value),
    ("ЗАЧЕТ", LessonType.CREDIT_TEST.value),
    ("ЭКЗАМЕН", LessonType.EXAM.value),
)

LAB_ROOMS: Tuple[Tuple[str, str], ...] = (
    ("физ", "лабФИЗ"),
    ("хим", "лабХИМ"),
    ("гео", "лабГЕО"),
    ("стд", "стд"),
)

ROOMS: Tuple[str, ...] = (
    "100", "101", "102", "103", "104", "105", "106", "107", "108",
    "208",
    "301", "302",
    "401", "402", "403", "404",
    "601", "602", "603",
    "701", "702", "703", "704",
    "801", "802",
    "лабГЕО", "лабФИЗ", "лабХИМ", "стд",
)


@dataclass(frozen=True)
class LookupTables:
    """
    Неизменяемый набор справочников, от которых зависит разбор таблицы.
    Передается в парсер и агрегаторы явно, чтобы в тестах можно было подставить свои таблицы.
    """
    day_names: Tuple[str, ...] = DAY_NAMES
    periods: Optional[Mapping[str, int]] = field(default=None, hash=False)
    directions: Tuple[Tuple[str, str], ...] = DIRECTIONS
    direction_titles: Optional[Mapping[str, str]] = field(default=None, hash=False)
    lesson_types: Tuple[Tuple[str, str], ...] = LESSON_TYPES
    lab_rooms: Tuple[Tuple[str, str], ...] = LAB_ROOMS
    rooms: Tuple[str, ...] = ROOMS

    course_marker: str = "КУРС"
    header_exclusion: str = "ПРАКТИЧЕСКИЙ"
    periods_per_day: int = 5

    def __post_init__(self):
        # Словари хранятся как read-only копии, чтобы общий DEFAULT_TABLES нельзя было изменить
        periods = PERIODS if self.periods is None else self.periods
        titles = DIRECTION_TITLES if self.direction_titles is None else self.direction_titles
        object.__setattr__(self, 'periods', MappingProxyType(dict(periods)))
        object.__setattr__(self, 'direction_titles', MappingProxyType(dict(titles)))

    @property
    def days_per_week(self) -> int:
        return len(self.day_names)

    def period_number(self, token: str) -> Optional[int]:
        return self.periods.get(token)

    def direction_title(self, code: str) -> str:
        return self.direction_titles.get(code, code)


DEFAULT_TABLES = LookupTables()
