# msu_schedule/services/clients/time_service.py

import logging
from datetime import date, datetime, timedelta, timezone
from typing import Iterable, Optional

from config import Config


log = logging.getLogger(__name__)


TIMESTAMP_FORMAT = '%Y-%m-%d %H:%M:%S'
DATE_FORMAT = '%Y-%m-%d'
TIME_OFFSET = timedelta(hours=Config.REGION_TIMEDELTA)


def get_local_now() -> datetime:
    """Текущее местное время (Душанбе) без привязки к часовому поясу сервера."""
    return datetime.now(timezone.utc).replace(tzinfo=None) + TIME_OFFSET


def format_timestamp(moment: Optional[datetime] = None) -> str:
    """Метка времени 'YYYY-MM-DD HH:MM:SS' для updated_at и last_global_update."""
    return (moment or get_local_now()).strftime(TIMESTAMP_FORMAT)


def is_active_hours(moment: Optional[datetime] = None) -> bool:
    hour = (moment or get_local_now()).hour
    return Config.ACTIVE_HOURS_START <= hour < Config.ACTIVE_HOURS_END


def get_sleep_duration(moment: Optional[datetime] = None) -> int:
    """
    Пауза между опросами в секундах: днем расписание меняют часто,
    поэтому опрашиваем каждые ACTIVE_POLL_INTERVAL секунд, ночью - реже.
    """
    if is_active_hours(moment):
        return Config.ACTIVE_POLL_INTERVAL
    return Config.PASSIVE_POLL_INTERVAL


def is_next_week(dates: Iterable[str], today: Optional[date] = None) -> bool:
    """
    Относится ли разобранный файл к следующей неделе.
    Сравнивается ISO-неделя (с годом) самой ранней даты из шапки с текущей неделей.
    Без дат файл считается расписанием текущей недели.
    """
    parsed = []
    for value in dates:
        try:
            parsed.append(datetime.strptime(value, DATE_FORMAT).date())
        except ValueError:
            log.warning(f"Некорректная дата в шапке расписания: {value!r}")
    if not parsed:
        return False

    today = today or get_local_now().date()
    file_year, file_week, _ = min(parsed).isocalendar()
    current_year, current_week, _ = today.isocalendar()
    result = (file_year, file_week) > (current_year, current_week)
    log.info(f"Проверка недели: файл {file_year}-W{file_week}, сейчас {current_year}-W{current_week}, "
             f"следующая: {result}")
    return result
