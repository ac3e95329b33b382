# msu_schedule/services/core/cache_manager.py

import json
import logging
import os
from threading import Lock
from typing import Optional

from config import Config
from msu_schedule.utils import make_json_serializable


log = logging.getLogger(__name__)
thread_lock = Lock()


def save_snapshot(data: dict, cache_file: Optional[str] = None) -> None:
    """
    Сохраняет снимок последнего успешного цикла в JSON.
    Пишем во временный файл и подменяем целиком, чтобы читатель не увидел половину файла.
    """
    cache_file = cache_file or Config.SNAPSHOT_FILE
    os.makedirs(os.path.dirname(cache_file), exist_ok=True)

    temp_cache_file = cache_file + ".tmp"
    with thread_lock:
        with open(temp_cache_file, 'w', encoding='utf-8') as f:
            json.dump(make_json_serializable(data), f, ensure_ascii=False, indent=2)
        os.replace(temp_cache_file, cache_file)
    log.info(f"Снимок расписания сохранен в '{cache_file}'.")


def load_snapshot(cache_file: Optional[str] = None) -> dict:
    """Читает снимок. При отсутствии или повреждении файла возвращает {'error': ...}."""
    cache_file = cache_file or Config.SNAPSHOT_FILE
    try:
        with thread_lock:
            with open(cache_file, 'r', encoding='utf-8') as f:
                return json.load(f)
    except FileNotFoundError:
        log.warning(f"Снимок расписания '{cache_file}' еще не создан.")
        return {"error": "Snapshot not ready"}
    except json.JSONDecodeError as e:
        error_message = f"Не удалось прочитать снимок расписания '{cache_file}'. {e}"
        log.error(error_message)
        return {"error": error_message}
