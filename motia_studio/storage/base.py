from collections.abc import Mapping
from typing import Any, Protocol

COLLECTIONS = ("projects", "deployments", "templates")


def check_collection(name: str) -> str:
    """Validate a collection name."""
    if name not in COLLECTIONS:
        raise ValueError(f"Unknown collection: {name}. Must be one of {COLLECTIONS}")
    return name


class StorageAdapter(Protocol):
    """Persists whole collections (id -> record dict) as snapshots.

    Implementations never raise for missing, empty or unreadable data on load:
    they log and return an empty mapping.
    """

    async def load_collection(self, name: str) -> dict[str, dict[str, Any]]:
        """Load the full snapshot of a collection."""
        ...

    async def save_collection(self, name: str, records: Mapping[str, Mapping[str, Any]]) -> None:
        """Replace the snapshot of a collection."""
        ...

    async def close(self) -> None:
        """Release any resources held by the adapter."""
        ...
