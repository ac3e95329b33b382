import os
from dotenv import load_dotenv

# Определяем путь к файлу .env.

BASE_DIR = os.path.abspath(os.path.dirname(__file__))

# Используем BASE_DIR для поиска файла .env
load_dotenv(os.path.join(BASE_DIR, '.env'))


DEFAULT_SOURCE_URLS = [
    "https://msu.tj/file/timetable/enf.xls",
    "https://msu.tj/file/timetable/gf.xls",
]


class Config:
    """
    Класс для хранения конфигурационных переменных.
    Загружает переменные из окружения (из файла .env).
    """
    # --- ИСТОЧНИКИ РАСПИСАНИЙ ---
    # SOURCE_URL_1, SOURCE_URL_2, ... Если ни одна не задана, берем файлы сайта по умолчанию.
    SOURCE_URLS = []
    i = 1
    while True:
        source_url = os.getenv(f'SOURCE_URL_{i}')
        if not source_url:
            break
        SOURCE_URLS.append(source_url.strip())
        i += 1
    if not SOURCE_URLS:
        SOURCE_URLS = list(DEFAULT_SOURCE_URLS)
    del i

    # Кодировка текстовых ячеек в .xls (кириллица, однобайтовая кодовая страница)
    SOURCE_ENCODING = os.getenv('SOURCE_ENCODING', 'cp1251')

    USER_AGENT = os.getenv(
        'USER_AGENT',
        'Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 '
        '(KHTML, like Gecko) Chrome/120.0.0.0 Safari/537.36'
    )
    HEAD_TIMEOUT = int(os.getenv('HEAD_TIMEOUT', 10))
    DOWNLOAD_TIMEOUT = int(os.getenv('DOWNLOAD_TIMEOUT', 60))

    # --- Realtime Database ---
    # Запись идет через REST API, токен передается параметром ?auth=.
    # Подходит секрет базы (Project settings -> Service accounts -> Database secrets)
    # или ID-токен Firebase Auth. JSON-ключ сервисного аккаунта здесь не используется.
    FIREBASE_DB_URL = os.getenv('FIREBASE_DB_URL', '')
    FIREBASE_AUTH_TOKEN = os.getenv('FIREBASE_AUTH_TOKEN')
    STORAGE_TIMEOUT = int(os.getenv('STORAGE_TIMEOUT', 30))

    # --- Опрос источников ---
    REGION_TIMEDELTA = int(os.getenv('REGION_TIMEDELTA', 5))  # Asia/Dushanbe
    ACTIVE_HOURS_START = int(os.getenv('ACTIVE_HOURS_START', 6))
    ACTIVE_HOURS_END = int(os.getenv('ACTIVE_HOURS_END', 19))
    ACTIVE_POLL_INTERVAL = int(os.getenv('ACTIVE_POLL_INTERVAL', 15))
    PASSIVE_POLL_INTERVAL = int(os.getenv('PASSIVE_POLL_INTERVAL', 600))

    # --- HTTP-сервер и локальный снимок ---
    PORT = int(os.getenv('PORT', 8080))
    SNAPSHOT_FILE = os.getenv('SNAPSHOT_FILE', os.path.join(BASE_DIR, 'data', 'snapshot.json'))
