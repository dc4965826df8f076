from typing import Protocol

from motia_studio.models import Language, ProjectFile


class CodeGenerator(Protocol):
    """Turns a free-text description into project files (never an empty list)."""

    async def generate_code(
        self,
        description: str,
        language: Language,
        features: list[str] | None = None,
    ) -> list[ProjectFile]:
        ...
