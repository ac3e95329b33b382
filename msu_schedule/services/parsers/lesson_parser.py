# msu_schedule/services/parsers/lesson_parser.py

import re
from typing import List, Optional, Tuple

from .common_structs import Lesson

from msu_schedule.services.utils.lookup_tables import LookupTables, DEFAULT_TABLES


ROOM_RE = re.compile(r'\b\d{3}\b')
TYPE_RE = re.compile(r'\[(.*?)\]')
TEACHER_RE = re.compile(r'\((.*?)\)')
SPACES_RE = re.compile(r'\s+')


def clean_type(raw_type: str, tables: LookupTables = DEFAULT_TABLES) -> str:
    """Сводит содержимое [..] к одному из канонических типов. Неизвестное возвращается в верхнем регистре."""
    upper = raw_type.upper()
    for keyword, label in tables.lesson_types:
        if keyword in upper:
            return label
    return upper


def extract_type(text: str, tables: LookupTables = DEFAULT_TABLES) -> Tuple[Optional[str], str]:
    """
    Ищет первый токен вида [ЛК] и возвращает (тип, текст без этого токена).
    Если скобок нет, тип равен None, а текст не меняется.
    """
    match = TYPE_RE.search(text)
    if not match:
        return None, text
    return clean_type(match.group(1), tables), text.replace(match.group(0), "", 1)


def extract_teachers(text: str) -> Tuple[List[str], str]:
    """
    Ищет первый токен вида (Иванов А.А., Петров Б.Б.) и возвращает (список ФИО, текст без токена).
    Повторы внутри одной ячейки здесь не убираются.
    """
    match = TEACHER_RE.search(text)
    if not match:
        return [], text
    teachers = [part.strip() for part in match.group(1).split(',') if part.strip()]
    return teachers, text.replace(match.group(0), "", 1)


def clean_subject(text: str) -> str:
    return SPACES_RE.sub(' ', text.strip())


def parse_rooms(text: str, tables: LookupTables = DEFAULT_TABLES) -> List[str]:
    """
    Достает из ячейки аудитории все трехзначные номера и метки лабораторий ("физ" -> лабФИЗ).
    Порядок - как в тексте, повторы убираются, хвост '.0' от числовых ячеек отрезается.
    """
    if not text:
        return []

    rooms = ROOM_RE.findall(text)
    lower = text.lower()
    for keyword, token in tables.lab_rooms:
        if keyword in lower:
            rooms.append(token)

    unique = []
    for room in rooms:
        room = room[:-2] if room.endswith('.0') else room
        if room not in unique:
            unique.append(room)
    return unique


def parse_lesson(subject_raw: str, room_raw: str, tables: LookupTables = DEFAULT_TABLES) -> Lesson:
    """Разбирает пару ячеек "предмет [тип] (преподаватели)" / "аудитория" в Lesson."""
    lesson_type, rest = extract_type(subject_raw, tables)
    teachers, rest = extract_teachers(rest)

    return Lesson(
        subject=clean_subject(rest),
        type=lesson_type or "",
        teachers=teachers,
        rooms=parse_rooms(room_raw, tables),
    )
