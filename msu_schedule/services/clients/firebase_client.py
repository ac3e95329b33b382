# msu_schedule/services/clients/firebase_client.py

import requests
import logging
from typing import Dict, Optional

from config import Config
from msu_schedule.utils import make_json_serializable
from msu_schedule.services.parsers.common_structs import FreeRoomsData, GroupSchedule, TeacherSchedule


log = logging.getLogger(__name__)

DATA_KEYS = ("schedules", "free_rooms", "teachers")
NEXT_WEEK_SUFFIX = "_next"


class StorageWriteError(Exception):
    """Не удалось записать данные в realtime-базу."""


class RealtimeDatabaseClient:
    """
    Запись в Firebase Realtime Database через REST API.
    Каждый ключ перезаписывается целиком (PUT), частичных слияний нет.
    """

    def __init__(self, db_url: Optional[str] = None, auth_token: Optional[str] = None,
                 session: Optional[requests.Session] = None, timeout: Optional[int] = None):
        db_url = db_url if db_url is not None else Config.FIREBASE_DB_URL
        if not db_url:
            raise ValueError("Необходимо задать FIREBASE_DB_URL в файле .env")

        self.db_url = db_url.rstrip('/')
        self.auth_token = auth_token if auth_token is not None else Config.FIREBASE_AUTH_TOKEN
        self.session = session or requests.Session()
        self.timeout = timeout or Config.STORAGE_TIMEOUT

    def _url(self, path: str) -> str:
        return f"{self.db_url}/{path}.json"

    def set_value(self, path: str, value) -> None:
        params = {'auth': self.auth_token} if self.auth_token else None
        try:
            response = self.session.put(
                self._url(path), json=make_json_serializable(value), params=params, timeout=self.timeout
            )
            response.raise_for_status()
        except requests.exceptions.RequestException as e:
            raise StorageWriteError(f"Не удалось сохранить '{path}': {e}") from e

    def delete_value(self, path: str) -> None:
        params = {'auth': self.auth_token} if self.auth_token else None
        try:
            response = self.session.delete(self._url(path), params=params, timeout=self.timeout)
            response.raise_for_status()
        except requests.exceptions.RequestException as e:
            raise StorageWriteError(f"Не удалось удалить '{path}': {e}") from e

    def save_full_update(self, groups: Dict[str, GroupSchedule], free_rooms: FreeRoomsData,
                         teachers: Dict[str, TeacherSchedule], timestamp: str,
                         week_number: Optional[int] = None, next_week: bool = False) -> None:
        """
        Полная перезапись данных цикла.
        Расписание следующей недели пишется в ключи с суффиксом '_next', текущей - в основные
        ключи, при этом '_next' очищаются. Номер учебной недели сохраняется в app_info/academic_week.
        """
        suffix = NEXT_WEEK_SUFFIX if next_week else ""
        log.info(f"Запись расписания в 'schedules{suffix}'")

        self.set_value(f"schedules{suffix}", groups)
        self.set_value(f"free_rooms{suffix}", free_rooms)
        self.set_value(f"teachers{suffix}", teachers)

        if not next_week:
            for key in DATA_KEYS:
                self.delete_value(f"{key}{NEXT_WEEK_SUFFIX}")
            log.info("Ключи '_next' очищены: файл относится к текущей неделе")

        self.set_value("last_global_update", timestamp)
        if week_number is not None:
            self.set_value("app_info/academic_week", week_number)
        else:
            self.delete_value("app_info/academic_week")

        log.info(f"Данные (группы: {len(groups)}, преподаватели: {len(teachers)}) отправлены в Realtime Database")
