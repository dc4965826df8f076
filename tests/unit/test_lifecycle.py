import asyncio

import pytest

from motia_studio.deployments import (
    DEFAULT_FAILURE_MESSAGE,
    PROVISIONING_STAGES,
    DeploymentLifecycle,
    deployment_url,
    estimate_deployment_time,
)
from motia_studio.errors import ProjectNotFoundError, ProjectNotReadyError
from motia_studio.models import DeploymentStatus, ProjectStatus


async def no_sleep(_seconds: float) -> None:
    await asyncio.sleep(0)


@pytest.fixture
def lifecycle(store):
    return DeploymentLifecycle(store, delay=0.0, sleep=no_sleep)


class TestStartDeployment:
    @pytest.mark.asyncio
    async def test_deploy_happy_path(self, store, lifecycle, project_factory):
        project = await store.create_project(project_factory(name="Todo API", id="p1"))

        deployment_id = await lifecycle.start_deployment(project)
        initial = await lifecycle.get_deployment_status(deployment_id)
        await lifecycle.drain()
        final = await lifecycle.get_deployment_status(deployment_id)

        assert deployment_id.startswith("dep_")
        assert initial.status is DeploymentStatus.DEPLOYING
        assert initial.metrics is None
        assert final.status is DeploymentStatus.LIVE
        assert final.url == "https://todo-api-p1.motia.app"
        assert final.metrics.requests == 0
        assert final.metrics.avg_latency == "0ms"
        assert final.metrics.error_rate == "0%"
        assert final.metrics.uptime == "100%"
        assert final.error is None
        assert lifecycle.active_count == 0

    @pytest.mark.asyncio
    async def test_returns_before_advancing(self, store, project_factory):
        gate = asyncio.Event()

        async def blocked_sleep(_seconds):
            await gate.wait()

        lifecycle = DeploymentLifecycle(store, sleep=blocked_sleep)
        project = await store.create_project(project_factory())

        deployment_id = await lifecycle.start_deployment(project)

        assert lifecycle.active_count == 1
        status = await lifecycle.get_deployment_status(deployment_id)
        assert status.status is DeploymentStatus.DEPLOYING
        gate.set()
        await lifecycle.drain()

    @pytest.mark.asyncio
    @pytest.mark.parametrize("status", [ProjectStatus.GENERATING, ProjectStatus.ERROR])
    async def test_deploy_rejected_when_not_ready(
        self, store, lifecycle, project_factory, status
    ):
        project = await store.create_project(project_factory(status=status))
        before = await store.list_deployments(project.id)

        with pytest.raises(ProjectNotReadyError):
            await lifecycle.start_deployment(project)

        assert await store.list_deployments(project.id) == before
        assert lifecycle.active_count == 0

    @pytest.mark.asyncio
    async def test_uses_configured_limits(self, store, project_factory):
        lifecycle = DeploymentLifecycle(
            store, delay=0.0, memory="1GB", timeout=60, sleep=no_sleep
        )
        project = await store.create_project(project_factory())

        deployment = await lifecycle.get_deployment_status(
            await lifecycle.start_deployment(project)
        )
        await lifecycle.drain()

        assert deployment.config.memory == "1GB"
        assert deployment.config.timeout == 60

    @pytest.mark.asyncio
    async def test_deploy_project_by_id(self, store, lifecycle, project_factory):
        project = await store.create_project(project_factory())

        deployment_id = await lifecycle.deploy_project(project.id)
        await lifecycle.drain()

        deployment = await store.get_deployment(deployment_id)
        assert deployment.project_id == project.id
        assert deployment.status is DeploymentStatus.LIVE

    @pytest.mark.asyncio
    async def test_deploy_unknown_project(self, lifecycle):
        with pytest.raises(ProjectNotFoundError):
            await lifecycle.deploy_project("proj_missing")


class TestAdvancement:
    @pytest.mark.asyncio
    async def test_failure_is_recorded(self, store, project_factory):
        async def broken_sleep(_seconds):
            raise RuntimeError("build container crashed")

        lifecycle = DeploymentLifecycle(store, sleep=broken_sleep)
        project = await store.create_project(project_factory())

        deployment_id = await lifecycle.start_deployment(project)
        await lifecycle.drain()

        deployment = await store.get_deployment(deployment_id)
        assert deployment.status is DeploymentStatus.FAILED
        assert deployment.error == "build container crashed"
        assert deployment.metrics is None
        assert deployment.url is None

    @pytest.mark.asyncio
    async def test_failure_without_message_uses_default(self, store, project_factory):
        async def broken_sleep(_seconds):
            raise RuntimeError()

        lifecycle = DeploymentLifecycle(store, sleep=broken_sleep)
        project = await store.create_project(project_factory())

        deployment_id = await lifecycle.start_deployment(project)
        await lifecycle.drain()

        assert (await store.get_deployment(deployment_id)).error == DEFAULT_FAILURE_MESSAGE

    @pytest.mark.asyncio
    async def test_status_only_moves_forward(self, store, project_factory):
        observed = []

        async def observing_sleep(_seconds):
            deployments = await store.list_deployments(project.id)
            observed.append(deployments[0].status)

        lifecycle = DeploymentLifecycle(store, sleep=observing_sleep)
        project = await store.create_project(project_factory())

        deployment_id = await lifecycle.start_deployment(project)
        await lifecycle.drain()
        observed.append((await store.get_deployment(deployment_id)).status)

        assert observed == [DeploymentStatus.DEPLOYING] * len(PROVISIONING_STAGES) + [
            DeploymentStatus.LIVE
        ]

    @pytest.mark.asyncio
    async def test_stage_delay_splits_total_delay(self, store, project_factory):
        delays = []

        async def recording_sleep(seconds):
            delays.append(seconds)

        lifecycle = DeploymentLifecycle(store, delay=2.0, sleep=recording_sleep)
        await lifecycle.start_deployment(await store.create_project(project_factory()))
        await lifecycle.drain()

        assert len(delays) == len(PROVISIONING_STAGES)
        assert sum(delays) == pytest.approx(2.0)

    @pytest.mark.asyncio
    async def test_deleted_project_does_not_break_advancement(
        self, store, lifecycle, project_factory
    ):
        project = await store.create_project(project_factory())

        deployment_id = await lifecycle.start_deployment(project)
        await store.delete_project(project.id)
        await lifecycle.drain()

        assert (await store.get_deployment(deployment_id)).status is DeploymentStatus.LIVE


class TestWaitForDeployment:
    @pytest.mark.asyncio
    async def test_waits_until_terminal(self, store, lifecycle, project_factory):
        project = await store.create_project(project_factory())
        deployment_id = await lifecycle.start_deployment(project)

        deployment = await lifecycle.wait_for_deployment(deployment_id, poll_interval=0.01)

        assert deployment.status is DeploymentStatus.LIVE

    @pytest.mark.asyncio
    async def test_unknown_id(self, lifecycle):
        assert await lifecycle.wait_for_deployment("dep_missing") is None

    @pytest.mark.asyncio
    async def test_timeout_returns_last_observed(self, store, project_factory):
        gate = asyncio.Event()

        async def blocked_sleep(_seconds):
            await gate.wait()

        lifecycle = DeploymentLifecycle(store, sleep=blocked_sleep)
        deployment_id = await lifecycle.start_deployment(
            await store.create_project(project_factory())
        )

        deployment = await lifecycle.wait_for_deployment(
            deployment_id, poll_interval=0.01, timeout=0.05
        )

        assert deployment.status is DeploymentStatus.DEPLOYING
        gate.set()
        await lifecycle.drain()


def test_deployment_url_slugifies_name(project_factory):
    project = project_factory(id="proj_abc", name="Payment   Processing System")

    assert deployment_url(project) == "https://payment-processing-system-proj_abc.motia.app"


def test_deployment_url_keeps_surrounding_whitespace_as_dashes(project_factory):
    project = project_factory(id="proj_abc", name=" Todo API ")

    assert deployment_url(project) == "https://-todo-api--proj_abc.motia.app"


@pytest.mark.parametrize(("files", "expected"), [(0, 30), (4, 50), (12, 90), (100, 90)])
def test_estimate_deployment_time(files, expected):
    assert estimate_deployment_time(files) == expected
