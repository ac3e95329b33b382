import re
from typing import Optional


MONTHS_RU = {
    "января": "01", "февраля": "02", "марта": "03", "апреля": "04",
    "мая": "05", "июня": "06", "июля": "07", "августа": "08",
    "сентября": "09", "октября": "10", "ноября": "11", "декабря": "12",
}

DATE_RE = re.compile(r'(\d{1,2})\s+([а-яА-ЯёЁ]+)\s+(\d{4})')
WEEK_RE = re.compile(r'(\d{1,2})\s*-?\s*я\s+неделя', re.IGNORECASE)


def parse_russian_date(text: str) -> Optional[str]:
    """
    Парсит дату вида '12 января 2026' в строку '2026-01-12'.
    Возвращает None, если даты нет или месяц не распознан.
    """
    match = DATE_RE.search(str(text))
    if not match:
        return None
    day, month_name, year = match.groups()
    month = MONTHS_RU.get(month_name.lower())
    if not month:
        return None
    return f"{year}-{month}-{day.zfill(2)}"


def parse_week_number(text: str) -> Optional[int]:
    """Ищет номер учебной недели в строке вида '12-я неделя'."""
    match = WEEK_RE.search(str(text))
    if match:
        return int(match.group(1))
    return None
