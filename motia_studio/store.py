"""Record store: cached, write-through access to the studio collections.

Every read reloads from the storage adapter first (at most once per
``reload_interval``), every write reloads, persists the whole affected
collection with the change applied and then swaps it into the cache.

Writers in *different* processes sharing one backing store can still lose
updates: each one persists its full snapshot and the last save wins.
"""

import asyncio
from collections.abc import Callable, Iterable
import time
from typing import Any, TypeVar

from pydantic import ValidationError
import structlog

from .errors import InvalidTransitionError, PersistenceError
from .models import Deployment, DeploymentStatus, Project, StudioModel, Template, utcnow
from .storage import StorageAdapter

logger = structlog.get_logger(__name__)

RecordT = TypeVar("RecordT", bound=StudioModel)

PROJECT_IMMUTABLE_FIELDS = frozenset({"id", "created_at"})
DEPLOYMENT_IMMUTABLE_FIELDS = frozenset({"id", "deployed_at", "config"})


class RecordStore:
    """In-process cache of projects, deployments and templates.

    Args:
        adapter: Storage adapter holding the collection snapshots.
        reload_interval: Seconds during which a previous reload is considered fresh.
        clock: Monotonic clock in seconds, injectable for tests.
        strict_persistence: Raise :class:`PersistenceError` on adapter failures
            instead of logging them and carrying on with the cached data.
    """

    def __init__(
        self,
        adapter: StorageAdapter,
        *,
        reload_interval: float = 1.0,
        clock: Callable[[], float] = time.monotonic,
        strict_persistence: bool = False,
    ):
        self.adapter = adapter
        self.reload_interval = reload_interval
        self.strict_persistence = strict_persistence
        self._clock = clock
        self._projects: dict[str, Project] = {}
        self._deployments: dict[str, Deployment] = {}
        self._templates: dict[str, Template] = {}
        self._last_load: float | None = None
        # Serializes reload/mutate/persist sequences within this process.
        self._lock = asyncio.Lock()

    # --- Loading / persisting -------------------------------------------

    async def reload(self, *, force: bool = False) -> None:
        """Refresh the cache from the adapter unless it is still fresh."""
        async with self._lock:
            await self._reload(force=force)

    async def _reload(self, *, force: bool = False) -> None:
        now = self._clock()
        if (
            not force
            and self._last_load is not None
            and now - self._last_load < self.reload_interval
        ):
            return

        try:
            raw_projects = await self.adapter.load_collection("projects")
            raw_deployments = await self.adapter.load_collection("deployments")
            raw_templates = await self.adapter.load_collection("templates")
        except Exception as e:
            self._persistence_failed("load", e)
            return

        self._projects = _parse_records(raw_projects.items(), Project, "projects")
        self._deployments = _parse_records(raw_deployments.items(), Deployment, "deployments")
        self._templates = _parse_records(raw_templates.items(), Template, "templates")
        self._last_load = now

        logger.debug(
            "store_reloaded",
            projects=len(self._projects),
            deployments=len(self._deployments),
            templates=len(self._templates),
        )

    async def _commit(self, name: str, records: dict[str, StudioModel]) -> None:
        """Persist ``records`` as collection ``name``, then make them the cached map.

        Callers pass a modified copy of the cached map. In strict mode a failed
        save raises before the cache changes; otherwise the change is kept
        in memory only.
        """
        snapshot = {key: record.to_record() for key, record in records.items()}
        try:
            await self.adapter.save_collection(name, snapshot)
        except Exception as e:
            self._persistence_failed("save", e, collection=name)
        setattr(self, f"_{name}", records)

    def _persistence_failed(self, operation: str, error: Exception, **context: Any) -> None:
        if self.strict_persistence:
            raise PersistenceError(f"Storage {operation} failed: {error}") from error
        logger.exception("storage_operation_failed", operation=operation, **context)

    # --- Projects --------------------------------------------------------

    async def create_project(self, project: Project) -> Project:
        async with self._lock:
            await self._reload()
            projects = {**self._projects, project.id: project.model_copy(deep=True)}
            await self._commit("projects", projects)
            logger.info("project_saved", project_id=project.id, total=len(projects))
            return project.model_copy(deep=True)

    async def get_project(self, project_id: str) -> Project | None:
        async with self._lock:
            await self._reload()
            project = self._projects.get(project_id)
            if project is None:
                logger.debug("project_not_found", project_id=project_id)
                return None
            return project.model_copy(deep=True)

    async def update_project(self, project_id: str, **changes: Any) -> Project | None:
        """Merge ``changes`` onto a project and refresh ``updated_at``.

        Returns:
            The merged project, or None if no project has that id.
        """
        _check_fields(Project, changes, PROJECT_IMMUTABLE_FIELDS)
        async with self._lock:
            await self._reload()
            current = self._projects.get(project_id)
            if current is None:
                return None
            updated = _merge(current, {**changes, "updated_at": utcnow()})
            await self._commit("projects", {**self._projects, project_id: updated})
            return updated.model_copy(deep=True)

    async def list_projects(self, user_id: str) -> list[Project]:
        """Projects owned by ``user_id``, most recently created first."""
        async with self._lock:
            await self._reload()
            projects = [p for p in self._projects.values() if p.user_id == user_id]
        projects.sort(key=lambda p: p.created_at, reverse=True)
        return [p.model_copy(deep=True) for p in projects]

    async def delete_project(self, project_id: str) -> bool:
        """Delete a project. Its deployments are left in place."""
        async with self._lock:
            await self._reload()
            if project_id not in self._projects:
                return False
            projects = {k: v for k, v in self._projects.items() if k != project_id}
            await self._commit("projects", projects)
            logger.info("project_deleted", project_id=project_id)
            return True

    # --- Deployments -----------------------------------------------------

    async def create_deployment(self, deployment: Deployment) -> Deployment:
        async with self._lock:
            await self._reload()
            await self._commit(
                "deployments",
                {**self._deployments, deployment.id: deployment.model_copy(deep=True)},
            )
            logger.info(
                "deployment_saved", deployment_id=deployment.id, project_id=deployment.project_id
            )
            return deployment.model_copy(deep=True)

    async def get_deployment(self, deployment_id: str) -> Deployment | None:
        async with self._lock:
            await self._reload()
            deployment = self._deployments.get(deployment_id)
            return deployment.model_copy(deep=True) if deployment else None

    async def update_deployment(self, deployment_id: str, **changes: Any) -> Deployment | None:
        """Merge ``changes`` onto a deployment.

        A deployment that reached a terminal status never changes status again.

        Returns:
            The merged deployment, or None if no deployment has that id.

        Raises:
            InvalidTransitionError: If the update would move a terminal deployment.
        """
        _check_fields(Deployment, changes, DEPLOYMENT_IMMUTABLE_FIELDS)
        async with self._lock:
            await self._reload()
            current = self._deployments.get(deployment_id)
            if current is None:
                return None
            if "status" in changes:
                _check_transition(current, DeploymentStatus(changes["status"]))
            updated = _merge(current, changes)
            await self._commit("deployments", {**self._deployments, deployment_id: updated})
            return updated.model_copy(deep=True)

    async def list_deployments(self, project_id: str) -> list[Deployment]:
        """Deployments of ``project_id``, most recent first."""
        async with self._lock:
            await self._reload()
            deployments = [d for d in self._deployments.values() if d.project_id == project_id]
        deployments.sort(key=lambda d: d.deployed_at, reverse=True)
        return [d.model_copy(deep=True) for d in deployments]

    # --- Templates -------------------------------------------------------

    async def create_template(self, template: Template) -> Template:
        async with self._lock:
            await self._reload()
            await self._commit(
                "templates", {**self._templates, template.id: template.model_copy(deep=True)}
            )
            return template.model_copy(deep=True)

    async def get_template(self, template_id: str) -> Template | None:
        async with self._lock:
            await self._reload()
            template = self._templates.get(template_id)
            return template.model_copy(deep=True) if template else None

    async def list_templates(self) -> list[Template]:
        async with self._lock:
            await self._reload()
            return [t.model_copy(deep=True) for t in self._templates.values()]


def _parse_records(
    items: Iterable[tuple[str, Any]], model: type[RecordT], collection: str
) -> dict[str, RecordT]:
    records: dict[str, RecordT] = {}
    for key, raw in items:
        try:
            records[key] = model.model_validate(raw)
        except ValidationError as e:
            logger.warning(
                "record_skipped", collection=collection, record_id=key, errors=e.error_count()
            )
    return records


def _check_fields(model: type[StudioModel], changes: dict[str, Any], immutable: frozenset) -> None:
    unknown = set(changes) - set(model.model_fields)
    if unknown:
        raise ValueError(f"Unknown {model.__name__} fields: {sorted(unknown)}")
    frozen = set(changes) & immutable
    if frozen:
        raise ValueError(f"Immutable {model.__name__} fields: {sorted(frozen)}")


def _check_transition(current: Deployment, new_status: DeploymentStatus) -> None:
    if current.status.is_terminal and new_status is not current.status:
        raise InvalidTransitionError(current.id, current.status, new_status)


def _merge(record: RecordT, changes: dict[str, Any]) -> RecordT:
    data = record.model_dump()
    data.update(changes)
    return type(record).model_validate(data)
