"""Simulated deployment lifecycle.

A deployment starts in ``deploying`` and is advanced by a background task to
``live`` (with a URL and a zeroed metrics snapshot) or ``failed`` (with the
error message). Callers observe progress only by polling the store.
"""

import asyncio
from collections.abc import Awaitable, Callable
import re

import structlog

from motia_studio.errors import ProjectNotFoundError, ProjectNotReadyError
from motia_studio.ids import generate_id
from motia_studio.logging import bind_deployment_context
from motia_studio.models import (
    Deployment,
    DeploymentConfig,
    DeploymentMetrics,
    DeploymentStatus,
    Project,
    ProjectStatus,
)
from motia_studio.store import RecordStore

logger = structlog.get_logger(__name__)

PROVISIONING_STAGES = ("create_project", "upload_files", "build", "deploy", "health_check")
DEFAULT_FAILURE_MESSAGE = "Deployment failed"


def deployment_url(project: Project) -> str:
    """Public URL of a deployed project, derived from its name and id."""
    slug = re.sub(r"\s+", "-", project.name.lower())
    return f"https://{slug}-{project.id}.motia.app"


def estimate_deployment_time(file_count: int) -> int:
    """Estimated deployment time in seconds: 30s plus 5s per file, capped at 90s."""
    return min(30 + file_count * 5, 90)


class DeploymentLifecycle:
    """Creates deployments and advances them in supervised background tasks.

    There is no cancellation: once started, a deployment always runs to a
    terminal state unless the process exits first, in which case the record
    stays ``deploying``.
    """

    def __init__(
        self,
        store: RecordStore,
        *,
        delay: float = 2.0,
        memory: str = "512MB",
        timeout: int = 30,
        sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
    ):
        self.store = store
        self.delay = delay
        self.memory = memory
        self.timeout = timeout
        self._sleep = sleep
        self._tasks: set[asyncio.Task] = set()

    @property
    def active_count(self) -> int:
        """Number of deployments still being advanced by this process."""
        return len(self._tasks)

    async def start_deployment(self, project: Project) -> str:
        """Create a deployment for a ready project and start advancing it.

        Returns immediately with the new deployment id.

        Raises:
            ProjectNotReadyError: If the project is not ``ready``. Nothing is created.
        """
        if project.status is not ProjectStatus.READY:
            raise ProjectNotReadyError(project.id, project.status.value)

        deployment = Deployment(
            id=generate_id("dep"),
            project_id=project.id,
            status=DeploymentStatus.DEPLOYING,
            config=DeploymentConfig(memory=self.memory, timeout=self.timeout),
        )
        await self.store.create_deployment(deployment)

        task = asyncio.create_task(
            self._advance(deployment.id, project), name=f"deployment:{deployment.id}"
        )
        self._tasks.add(task)
        task.add_done_callback(self._tasks.discard)

        logger.info(
            "deployment_started",
            deployment_id=deployment.id,
            project_id=project.id,
            estimated_seconds=estimate_deployment_time(len(project.files)),
        )
        return deployment.id

    async def deploy_project(self, project_id: str) -> str:
        """Look up a project by id and start deploying it.

        Raises:
            ProjectNotFoundError: If no project has that id.
            ProjectNotReadyError: If the project is not ``ready``.
        """
        project = await self.store.get_project(project_id)
        if project is None:
            raise ProjectNotFoundError(project_id)
        return await self.start_deployment(project)

    async def get_deployment_status(self, deployment_id: str) -> Deployment | None:
        return await self.store.get_deployment(deployment_id)

    async def wait_for_deployment(
        self,
        deployment_id: str,
        *,
        poll_interval: float = 0.5,
        timeout: float | None = None,
    ) -> Deployment | None:
        """Poll until the deployment is terminal.

        Returns:
            The last observed record: terminal, still ``deploying`` if
            ``timeout`` elapsed first, or None if the id is unknown.
        """
        loop = asyncio.get_running_loop()
        deadline = None if timeout is None else loop.time() + timeout
        while True:
            deployment = await self.get_deployment_status(deployment_id)
            if deployment is None or deployment.status.is_terminal:
                return deployment
            if deadline is not None and loop.time() >= deadline:
                return deployment
            await asyncio.sleep(poll_interval)

    async def drain(self) -> None:
        """Wait until every deployment started by this lifecycle is terminal."""
        while self._tasks:
            await asyncio.gather(*list(self._tasks), return_exceptions=True)

    async def _advance(self, deployment_id: str, project: Project) -> None:
        bind_deployment_context(deployment_id, project.id)
        try:
            await self._provision(project)
            url = deployment_url(project)
            updated = await self.store.update_deployment(
                deployment_id,
                status=DeploymentStatus.LIVE,
                url=url,
                metrics=DeploymentMetrics(),
            )
            if updated is None:
                logger.warning("deployment_record_missing")
                return
            logger.info("deployment_live", url=url)
        except Exception as e:
            message = str(e) or DEFAULT_FAILURE_MESSAGE
            logger.exception("deployment_failed", error=message)
            try:
                await self.store.update_deployment(
                    deployment_id, status=DeploymentStatus.FAILED, error=message
                )
            except Exception:
                logger.exception("deployment_failure_not_recorded")

    async def _provision(self, project: Project) -> None:
        stage_delay = self.delay / len(PROVISIONING_STAGES)
        for stage in PROVISIONING_STAGES:
            logger.info("deployment_stage", stage=stage, files=len(project.files))
            await self._sleep(stage_delay)
