import logging
import os

# --- Prometheus Import ---
from prometheus_client import start_http_server

from certprep.config import StudyConfig
from certprep.study.adapters.db_manager import DatabaseManager
from certprep.study.adapters.performance_repository import PerformanceRepository
from certprep.study.adapters.sqlite_storage import SQLiteKeyValueStorage
from certprep.study.adapters.supabase_storage import SupabaseKeyValueStorage
from certprep.study.application.service import StudyService
from certprep.study.domain.ports import IKeyValueStorage

logger = logging.getLogger("certprep.bootstrap")


def configure_observability(metrics_port: int | None = None) -> None:
    """
    Console logging plus a background Prometheus server exposing /metrics.
    The port comes from CERTPREP_METRICS_PORT when not given; unset means no server.
    """
    logging.basicConfig(
        level=logging.INFO, format="%(asctime)s [%(levelname)s] %(message)s"
    )

    port = metrics_port or int(os.getenv("CERTPREP_METRICS_PORT", "0"))
    if not port:
        return
    try:
        start_http_server(port)
        logger.info("Prometheus metrics server started on port %s", port)
    except OSError:
        logger.warning("Prometheus port %s already in use. Skipping.", port)


# --- Composition Root ---
def build_storage(db_path: str = StudyConfig.DB_PATH) -> IKeyValueStorage:
    url = os.getenv("SUPABASE_URL")
    key = os.getenv("SUPABASE_KEY")
    if url and key:
        return SupabaseKeyValueStorage(url, key)
    return SQLiteKeyValueStorage(DatabaseManager(db_path))


def build_service(storage: IKeyValueStorage | None = None) -> StudyService:
    return StudyService(PerformanceRepository(storage or build_storage()))
