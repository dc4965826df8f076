"""Project creation flows: generation from a description and template instantiation."""

import structlog

from .errors import GenerationError
from .generation import (
    CodeGenerator,
    check_description,
    estimate_generation_time,
    extract_project_name,
    validate_code,
)
from .ids import generate_id
from .models import Project, ProjectStatus, normalize_language, utcnow
from .store import RecordStore

logger = structlog.get_logger(__name__)

DEFAULT_USER_ID = "demo-user"


class ProjectService:
    """Creates projects in the store from generated code or templates."""

    def __init__(self, store: RecordStore, generator: CodeGenerator):
        self.store = store
        self.generator = generator

    async def generate_project(
        self,
        description: str,
        language: str = "typescript",
        features: list[str] | None = None,
        user_id: str = DEFAULT_USER_ID,
    ) -> Project:
        """Generate code for ``description`` and store it as a project.

        The project is stored as ``generating`` first and finalized to
        ``ready`` with its files, or to ``error`` when generation fails.

        Raises:
            InvalidDescriptionError: If the description is too short.
            GenerationError: If no files could be generated. The project is
                kept with status ``error``.
        """
        description = check_description(description)
        lang = normalize_language(language)

        now = utcnow()
        project = await self.store.create_project(
            Project(
                id=generate_id("proj"),
                user_id=user_id,
                name=extract_project_name(description),
                description=description,
                status=ProjectStatus.GENERATING,
                language=lang,
                created_at=now,
                updated_at=now,
            )
        )
        logger.info(
            "project_generation_started",
            project_id=project.id,
            language=lang.value,
            estimated_seconds=estimate_generation_time(description),
        )

        try:
            files = await self.generator.generate_code(description, lang, features or [])
            if not files:
                raise GenerationError("Code generation returned no files")
        except GenerationError as e:
            logger.error("project_generation_failed", project_id=project.id, reason=e.reason)
            await self.store.update_project(project.id, status=ProjectStatus.ERROR, error=str(e))
            raise

        validate_code(files)
        updated = await self.store.update_project(
            project.id, status=ProjectStatus.READY, files=files, error=None
        )
        logger.info("project_generated", project_id=project.id, files=len(files))
        # Another process may have deleted the record in between.
        return updated or project.model_copy(
            update={"status": ProjectStatus.READY, "files": files}
        )

    async def create_from_template(
        self, template_id: str, user_id: str = DEFAULT_USER_ID
    ) -> Project | None:
        """Instantiate a template as a new ready project.

        Returns:
            The new project, or None if the template does not exist.
        """
        template = await self.store.get_template(template_id)
        if template is None:
            return None

        now = utcnow()
        project = await self.store.create_project(
            Project(
                id=generate_id("proj"),
                user_id=user_id,
                name=template.name,
                description=template.description,
                status=ProjectStatus.READY,
                template_id=template.id,
                files=[f.model_copy() for f in template.files],
                created_at=now,
                updated_at=now,
            )
        )
        logger.info("project_created_from_template", project_id=project.id, template_id=template.id)
        return project
