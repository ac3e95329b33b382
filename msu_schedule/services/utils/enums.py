# msu_schedule/services/utils/enums.py

from enum import Enum


class LessonType(Enum):
    """Канонические типы занятий. Нераспознанный тип хранится как есть, в верхнем регистре."""
    LECTURE = "Лекция"
    PRACTICE = "Практика"
    SEMINAR = "Семинар"
    CREDIT_TEST = "Зачет"
    EXAM = "Экзамен"
