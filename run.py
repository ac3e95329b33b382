import logging
import sys
import threading

from config import Config
from msu_schedule import create_app
from msu_schedule.services.clients.firebase_client import RealtimeDatabaseClient
from msu_schedule.services.core.sync_worker import SyncWorker


log = logging.getLogger(__name__)

if __name__ == '__main__':
    logging.basicConfig(level=logging.INFO, stream=sys.stdout)

    if not Config.FIREBASE_DB_URL:
        log.error("FIREBASE_DB_URL должен быть установлен в .env")
        sys.exit(1)

    worker = SyncWorker(storage=RealtimeDatabaseClient())
    threading.Thread(target=worker.run_forever, name='schedule-sync', daemon=True).start()

    app = create_app()
    log.info(f"HTTP-сервер слушает порт {Config.PORT}")
    app.run(host='0.0.0.0', port=Config.PORT)
