"""Redis-backed storage for cooperating processes without a shared filesystem."""

from collections.abc import Mapping
from typing import Any

import redis.asyncio as redis
import structlog

from . import codec
from .base import check_collection

logger = structlog.get_logger(__name__)


class RedisStorageAdapter:
    """Keeps each collection snapshot in one Redis string key.

    Keys are ``<key_prefix>:<collection>`` and hold the same JSON text the
    file adapter writes. ``SET`` replaces a snapshot atomically.
    """

    def __init__(
        self,
        redis_url: str | None = None,
        *,
        client: redis.Redis | None = None,
        key_prefix: str = "motia_studio",
    ):
        if client is None:
            if not redis_url:
                raise RuntimeError("Redis URL not provided. Set MOTIA_STUDIO_REDIS_URL.")
            client = redis.from_url(redis_url, decode_responses=True)
            self._owns_client = True
        else:
            self._owns_client = False
        self.redis = client
        self.key_prefix = key_prefix

    def key_for(self, name: str) -> str:
        return f"{self.key_prefix}:{check_collection(name)}"

    async def load_collection(self, name: str) -> dict[str, dict[str, Any]]:
        key = self.key_for(name)
        raw = await self.redis.get(key)
        if raw is None:
            return {}
        if isinstance(raw, bytes):
            raw = raw.decode()
        try:
            return codec.loads(raw)
        except ValueError as e:
            logger.error("collection_key_corrupt", key=key, error=str(e))
            return {}

    async def save_collection(self, name: str, records: Mapping[str, Mapping[str, Any]]) -> None:
        key = self.key_for(name)
        await self.redis.set(key, codec.dumps(dict(records)))
        logger.debug("collection_saved", collection=name, records=len(records), key=key)

    async def close(self) -> None:
        if self._owns_client:
            await self.redis.aclose()
            logger.info("redis_connection_closed")
