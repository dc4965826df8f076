from collections.abc import Mapping
import copy
from typing import Any

from .base import COLLECTIONS, check_collection


class MemoryStorageAdapter:
    """Volatile, process-local adapter.

    Data is lost when the process exits and is never shared between worker
    processes. Snapshots are deep-copied in and out so callers cannot alias
    adapter state.
    """

    def __init__(self) -> None:
        self._collections: dict[str, dict[str, dict[str, Any]]] = {name: {} for name in COLLECTIONS}

    async def load_collection(self, name: str) -> dict[str, dict[str, Any]]:
        return copy.deepcopy(self._collections[check_collection(name)])

    async def save_collection(self, name: str, records: Mapping[str, Mapping[str, Any]]) -> None:
        self._collections[check_collection(name)] = copy.deepcopy(
            {key: dict(value) for key, value in records.items()}
        )

    async def close(self) -> None:
        pass
