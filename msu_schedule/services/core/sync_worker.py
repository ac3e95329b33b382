# msu_schedule/services/core/sync_worker.py

import logging
import threading
import time
from enum import Enum, auto
from typing import Callable, Dict, List, Optional

from config import Config

from msu_schedule.services.clients import source_client, time_service
from msu_schedule.services.clients.source_client import SourceFetchError
from msu_schedule.services.clients.firebase_client import StorageWriteError
from msu_schedule.services.core import cache_manager
from msu_schedule.services.core.free_rooms import calculate_free_rooms
from msu_schedule.services.core.teacher_extractor import extract_teachers
from msu_schedule.services.parsers.common_structs import ParsingResult
from msu_schedule.services.parsers.schedule_parser import ScheduleParser
from msu_schedule.services.utils.excel_reader import SpreadsheetOpenError


log = logging.getLogger(__name__)


class UpdateStatus(Enum):
    """Статусы завершения одного цикла опроса."""
    SKIPPED = auto()  # Ни один файл не менялся
    SUCCESS = auto()  # Данные разобраны и записаны
    NO_DATA = auto()  # Файлы изменились, но ни одной группы получить не удалось
    FAILED = auto()  # Ошибка записи в базу


class SyncWorker:
    """
    Цикл опроса: HEAD по всем источникам -> при изменении скачать и разобрать все файлы
    в общий накопитель -> посчитать свободные аудитории и преподавателей -> записать в базу.
    Файлы разбираются строго по очереди, накопитель создается заново на каждый цикл.
    """

    def __init__(self, storage, urls: Optional[List[str]] = None, parser: Optional[ScheduleParser] = None,
                 check_header: Callable = source_client.check_file_header,
                 download: Callable = source_client.download_file,
                 snapshot_file: Optional[str] = None):
        self.storage = storage
        self.urls = list(urls) if urls is not None else list(Config.SOURCE_URLS)
        self.parser = parser or ScheduleParser()
        self.check_header = check_header
        self.download = download
        self.snapshot_file = snapshot_file
        self.last_modified: Dict[str, Optional[str]] = {}

    def run_cycle(self) -> UpdateStatus:
        previous_last_modified = dict(self.last_modified)

        need_update = False
        for url in self.urls:
            result = self.check_header(url, self.last_modified.get(url))
            if result.is_changed:
                self.last_modified[url] = result.last_modified
                need_update = True

        if not need_update:
            return UpdateStatus.SKIPPED

        log.info("Обнаружены изменения. Запускаю обновление базы...")
        start = time.monotonic()

        parsing_result = ParsingResult()
        success_count = 0
        for url in self.urls:
            try:
                data = self.download(url)
                self.parser.parse_xls(data, parsing_result)
                success_count += 1
            except (SourceFetchError, SpreadsheetOpenError) as e:
                log.error(f"Ошибка обработки {url}: {e}")

        groups = parsing_result.groups
        if success_count == 0 or not groups:
            log.warning("Не получено ни одной группы, запись в базу пропущена.")
            return UpdateStatus.NO_DATA

        timestamp = time_service.format_timestamp()
        for group in groups.values():
            group.updated_at = timestamp

        free_rooms = calculate_free_rooms(groups, self.parser.tables)
        free_rooms.last_update = timestamp
        teachers = extract_teachers(groups, self.parser.tables, updated_at=timestamp)

        next_week = time_service.is_next_week(parsing_result.dates)

        try:
            self.storage.save_full_update(groups, free_rooms, teachers, timestamp,
                                          week_number=parsing_result.week_number, next_week=next_week)
        except StorageWriteError as e:
            # Откатываем Last-Modified, иначе неизменившийся файл больше не будет перечитан
            self.last_modified = previous_last_modified
            log.error(f"Ошибка записи в базу: {e}")
            return UpdateStatus.FAILED

        cache_manager.save_snapshot({
            "schedules": groups,
            "free_rooms": free_rooms,
            "teachers": teachers,
            "last_global_update": timestamp,
            "academic_week": parsing_result.week_number,
            "next_week": next_week,
        }, self.snapshot_file)

        log.info(f"Обновление завершено за {time.monotonic() - start:.1f} с. "
                 f"Групп: {len(groups)}, преподавателей: {len(teachers)}.")
        return UpdateStatus.SUCCESS

    def run_forever(self, stop_event: Optional[threading.Event] = None):
        stop_event = stop_event or threading.Event()
        log.info("Запуск цикла опроса расписаний...")
        while not stop_event.is_set():
            try:
                self.run_cycle()
            except Exception as e:
                log.critical(f"Непредвиденная ошибка цикла обновления: {e}", exc_info=True)

            sleep_duration = time_service.get_sleep_duration()
            log.debug(f"Пауза {sleep_duration} с...")
            stop_event.wait(sleep_duration)
