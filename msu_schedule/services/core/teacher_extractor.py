# msu_schedule/services/core/teacher_extractor.py

import logging
import re
from typing import Dict, List

from msu_schedule.services.parsers.common_structs import GroupSchedule, Lesson, TeacherSchedule, empty_week
from msu_schedule.services.utils.lookup_tables import LookupTables, DEFAULT_TABLES


log = logging.getLogger(__name__)


# "Иванов А.А.", "Петрова Б. В" - фамилия и инициалы
TEACHER_NAME_RE = re.compile(r'([А-ЯЁ][а-яё]+[\s\xa0]+[А-ЯЁ]\.[\s\xa0]*[А-ЯЁ]\.?)')

# Символы, недопустимые в ключах realtime-базы
FORBIDDEN_CHARS = set('.$#[]/')

REPLACEMENTS = (
    ('.', '_'),
    ('/', '-'),
    ('[', '('),
    (']', ')'),
    ('#', ''),
    ('$', ''),
)

# Слова, которые встречаются в скобках вместо ФИО ("Английский язык, 1 подгруппа")
JUNK_WORDS = (
    "английский", "немецкий", "китайский", "французский",
    "язык", "подгруппа", "группа", "физ", "пр.", "лк.", "[пз]", "(", ")",
)
MIN_NAME_LENGTH = 3
FOREIGN_LANGUAGE_STUB = "Иностранный"


def _is_control(ch: str) -> bool:
    return ord(ch) < 32 or ord(ch) == 127


def sanitize_name(name: str) -> str:
    """
    Делает имя пригодным для ключа базы: убирает управляющие символы,
    заменяет '.', '/', '[', ']' на безопасные аналоги, удаляет '#' и '$'.
    """
    cleaned = "".join(ch for ch in name if not _is_control(ch)).strip()
    for old, new in REPLACEMENTS:
        cleaned = cleaned.replace(old, new)
    return cleaned.strip(': ,')


def is_valid_key(name: str) -> bool:
    if not name or not name.strip():
        return False
    return not any(ch in FORBIDDEN_CHARS or _is_control(ch) for ch in name)


def is_meaningful_name(name: str) -> bool:
    return name != FOREIGN_LANGUAGE_STUB and len(name) >= MIN_NAME_LENGTH


def split_teacher_names(raw_name: str) -> List[str]:
    """
    Превращает одну запись из скобок в список ФИО.
    Если в записи есть "Фамилия И.О.", берутся все такие совпадения,
    иначе из текста вычищаются служебные слова и остаток считается именем.
    """
    if not raw_name or not raw_name.strip():
        return []

    matches = TEACHER_NAME_RE.findall(raw_name)
    if matches:
        return matches

    cleaned = raw_name
    for junk in JUNK_WORDS:
        cleaned = re.sub(re.escape(junk), '', cleaned, flags=re.IGNORECASE)
    cleaned = cleaned.strip()

    if not is_meaningful_name(cleaned):
        return []
    return [cleaned]


def _add_lesson(teachers: Dict[str, TeacherSchedule], name: str, group: GroupSchedule, lesson: Lesson,
                day_index: int, lesson_index: int, tables: LookupTables, updated_at: str):
    schedule = teachers.get(name)
    if schedule is None:
        schedule = TeacherSchedule(
            name=name,
            days=empty_week(tables.day_names, tables.periods_per_day),
            updated_at=updated_at,
        )
        teachers[name] = schedule

    lessons = schedule.days[day_index].lessons
    existing = lessons[lesson_index]
    if existing is None:
        lessons[lesson_index] = Lesson(
            subject=lesson.subject,
            type=lesson.type,
            teachers=[group.title],
            rooms=list(lesson.rooms),
        )
    elif group.title not in existing.teachers:
        # Один преподаватель ведет поток у нескольких групп: предмет/аудитории берутся у первой
        existing.teachers.append(group.title)


def extract_teachers(groups: Dict[str, GroupSchedule], tables: LookupTables = DEFAULT_TABLES,
                     updated_at: str = "") -> Dict[str, TeacherSchedule]:
    """
    Разворачивает расписания групп в расписания преподавателей.
    В слоте преподавателя поле teachers содержит названия групп, у которых он ведет занятие.
    """
    teachers: Dict[str, TeacherSchedule] = {}

    for group in groups.values():
        for day_index, day in enumerate(group.days[:tables.days_per_week]):
            for lesson_index, lesson in enumerate(day.lessons[:tables.periods_per_day]):
                if lesson is None:
                    continue

                for raw_name in lesson.teachers:
                    for name in split_teacher_names(raw_name):
                        safe_name = sanitize_name(name)
                        if not is_valid_key(safe_name) or not is_meaningful_name(safe_name):
                            log.debug(f"Имя преподавателя отброшено: {raw_name!r}")
                            continue
                        _add_lesson(teachers, safe_name, group, lesson, day_index, lesson_index,
                                    tables, updated_at)

    result = {name: schedule for name, schedule in teachers.items() if is_valid_key(name)}
    log.info(f"Извлечено расписаний преподавателей: {len(result)}")
    return result
