import structlog

from motia_studio.config import Settings

from .base import StorageAdapter
from .filesystem import FileStorageAdapter
from .memory import MemoryStorageAdapter
from .redis_kv import RedisStorageAdapter

logger = structlog.get_logger(__name__)


def resolve_backend(settings: Settings) -> str:
    """Resolve ``auto`` to a concrete backend for the current environment."""
    if settings.storage_backend != "auto":
        return settings.storage_backend
    return "memory" if settings.is_serverless else "file"


def create_adapter(settings: Settings) -> StorageAdapter:
    """Create the storage adapter selected by settings.

    ``auto`` picks the volatile in-memory adapter on serverless hosts, where
    every invocation may be a fresh process, and the file adapter otherwise.
    """
    backend = resolve_backend(settings)

    if backend == "memory":
        logger.warning(
            "storage_selected",
            backend=backend,
            detail="data is lost on restart and not shared between processes",
        )
        return MemoryStorageAdapter()
    if backend == "redis":
        logger.info("storage_selected", backend=backend)
        return RedisStorageAdapter(settings.redis_url, key_prefix=settings.redis_key_prefix)

    logger.info("storage_selected", backend=backend, data_dir=settings.data_dir)
    return FileStorageAdapter(settings.data_dir)
