"""Wiring of the studio components for one process."""

from dataclasses import dataclass

import structlog

from .config import Settings, get_settings
from .deployments import DeploymentLifecycle
from .generation import CodeGenerator, create_code_generator
from .projects import ProjectService
from .storage import StorageAdapter, create_adapter
from .store import RecordStore

logger = structlog.get_logger(__name__)


@dataclass
class Studio:
    """All studio services sharing one store.

    Use as an async context manager, or call :meth:`close` when done, so
    in-flight deployments reach a terminal state before the adapter closes.
    """

    settings: Settings
    adapter: StorageAdapter
    store: RecordStore
    lifecycle: DeploymentLifecycle
    generator: CodeGenerator
    projects: ProjectService

    async def close(self) -> None:
        if self.lifecycle.active_count:
            logger.info("draining_deployments", active=self.lifecycle.active_count)
        await self.lifecycle.drain()
        await self.adapter.close()

    async def __aenter__(self) -> "Studio":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.close()


def create_studio(settings: Settings | None = None) -> Studio:
    """Build a :class:`Studio` from settings (cached env settings by default)."""
    settings = settings or get_settings()

    adapter = create_adapter(settings)
    store = RecordStore(
        adapter,
        reload_interval=settings.reload_interval_seconds,
        strict_persistence=settings.strict_persistence,
    )
    lifecycle = DeploymentLifecycle(
        store,
        delay=settings.deploy_delay_seconds,
        memory=settings.deploy_memory,
        timeout=settings.deploy_timeout,
    )
    generator = create_code_generator(settings)

    return Studio(
        settings=settings,
        adapter=adapter,
        store=store,
        lifecycle=lifecycle,
        generator=generator,
        projects=ProjectService(store, generator),
    )
