# msu_schedule/services/clients/source_client.py

import requests
import logging
import time
from dataclasses import dataclass
from typing import Optional

from config import Config


log = logging.getLogger(__name__)


class SourceFetchError(Exception):
    """Файл расписания не удалось скачать."""


@dataclass(frozen=True)
class CheckResult:
    url: str
    last_modified: Optional[str]
    is_changed: bool


def _headers() -> dict:
    return {'User-Agent': Config.USER_AGENT}


def check_file_header(url: str, old_last_modified: Optional[str]) -> CheckResult:
    """
    Проверяет заголовок Last-Modified через HEAD-запрос.
    Ошибки сети не пробрасываются: файл считается неизмененным до следующего опроса.
    """
    start = time.monotonic()
    try:
        response = requests.head(url, headers=_headers(), timeout=Config.HEAD_TIMEOUT, allow_redirects=True)
    except requests.exceptions.RequestException as e:
        log.error(f"[HEAD] Ошибка запроса для {url}: {e}")
        return CheckResult(url, old_last_modified, False)

    duration_ms = int((time.monotonic() - start) * 1000)

    if response.status_code != 200:
        log.warning(f"[HEAD] {url} | Статус: {response.status_code} | Время: {duration_ms} мс")
        return CheckResult(url, old_last_modified, False)

    new_last_modified = response.headers.get('Last-Modified')

    if old_last_modified is None and new_last_modified:
        log.info(f"[HEAD] {url} | Время: {duration_ms} мс | Первая загрузка -> требуется обновление "
                 f"(Last-Modified: {new_last_modified})")
        return CheckResult(url, new_last_modified, True)

    if new_last_modified and new_last_modified != old_last_modified:
        log.info(f"[HEAD] {url} | Время: {duration_ms} мс | Обнаружено изменение: "
                 f"{old_last_modified} -> {new_last_modified}")
        return CheckResult(url, new_last_modified, True)

    return CheckResult(url, old_last_modified, False)


def download_file(url: str) -> bytes:
    """Скачивает файл целиком. Любая сетевая ошибка или статус, отличный от 200, -> SourceFetchError."""
    log.info(f"Скачивание файла {url}")
    try:
        response = requests.get(url, headers=_headers(), timeout=Config.DOWNLOAD_TIMEOUT)
    except requests.exceptions.RequestException as e:
        raise SourceFetchError(f"Сетевая ошибка при скачивании {url}: {e}") from e

    if response.status_code != 200:
        raise SourceFetchError(f"Неверный статус ответа для {url}: {response.status_code}")
    if not response.content:
        raise SourceFetchError(f"Пустой ответ от {url}")

    log.info(f"Файл {url} скачан ({len(response.content)} байт)")
    return response.content
