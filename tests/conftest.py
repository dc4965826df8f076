from datetime import UTC, datetime, timedelta

import pytest

from motia_studio.config import get_settings
from motia_studio.ids import generate_id
from motia_studio.models import Project, ProjectFile, ProjectStatus
from motia_studio.storage import MemoryStorageAdapter
from motia_studio.store import RecordStore


class FakeClock:
    """Monotonic clock advanced by hand."""

    def __init__(self, start: float = 1000.0):
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


def make_project(
    *,
    status: ProjectStatus = ProjectStatus.READY,
    user_id: str = "user-1",
    name: str = "Todo API",
    created_at: datetime | None = None,
    **kwargs,
) -> Project:
    created_at = created_at or datetime(2024, 1, 1, 12, 0, tzinfo=UTC)
    return Project(
        id=kwargs.pop("id", generate_id("proj")),
        user_id=user_id,
        name=name,
        description="A simple todo list API",
        status=status,
        files=kwargs.pop(
            "files",
            [ProjectFile(path="src/workflow.ts", content="export {}", language="typescript")],
        ),
        created_at=created_at,
        updated_at=created_at,
        **kwargs,
    )


@pytest.fixture(autouse=True)
def clear_settings_cache():
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def memory_adapter():
    return MemoryStorageAdapter()


@pytest.fixture
def store(memory_adapter, clock):
    return RecordStore(memory_adapter, reload_interval=1.0, clock=clock)


@pytest.fixture
def hours():
    """Offsets for building ordered timestamps."""
    base = datetime(2024, 1, 1, tzinfo=UTC)
    return lambda n: base + timedelta(hours=n)


@pytest.fixture
def project_factory():
    return make_project
