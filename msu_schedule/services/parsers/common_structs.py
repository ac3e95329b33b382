# msu_schedule/services/parsers/common_structs.py

from dataclasses import dataclass, field
from typing import Dict, List, Optional, Sequence


@dataclass
class Lesson:
    """
    Одно занятие, извлеченное из пары ячеек "предмет / аудитория".
    В расписании преподавателя поле teachers хранит названия групп.
    """
    subject: str
    type: str = ""
    teachers: List[str] = field(default_factory=list)
    rooms: List[str] = field(default_factory=list)


@dataclass
class DaySchedule:
    day: str
    lessons: List[Optional[Lesson]] = field(default_factory=list)
    date: Optional[str] = None  # 'YYYY-MM-DD', если дата указана под заголовком группы


@dataclass
class GroupSchedule:
    id: str
    title: str
    days: List[DaySchedule]
    updated_at: str = ""


@dataclass
class TeacherSchedule:
    name: str
    days: List[DaySchedule]
    updated_at: str = ""


@dataclass
class FreeRoomsData:
    # {'1': {'1': ['100', '101', ...], ...}, ...} - день -> пара -> свободные аудитории
    schedule: Dict[str, Dict[str, List[str]]] = field(default_factory=dict)
    last_update: str = ""


@dataclass
class ParsingResult:
    """
    Накопитель одного цикла обновления: группы из всех файлов, номер учебной недели и найденные даты.
    Парсер изменяет его на месте; параллельный разбор в один и тот же объект не допускается.
    """
    groups: Dict[str, GroupSchedule] = field(default_factory=dict)
    week_number: Optional[int] = None
    dates: List[str] = field(default_factory=list)


def empty_week(day_names: Sequence[str], periods_per_day: int) -> List[DaySchedule]:
    """Пустая сетка дни x пары."""
    return [DaySchedule(day=name, lessons=[None] * periods_per_day) for name in day_names]
