from datetime import datetime
from enum import Enum

from pydantic import Field

from .base import StudioModel, utcnow


class ProjectStatus(str, Enum):
    """Project generation status."""

    GENERATING = "generating"
    READY = "ready"
    ERROR = "error"


class Language(str, Enum):
    """Target language of a generated project."""

    TYPESCRIPT = "typescript"
    PYTHON = "python"
    GO = "go"


def normalize_language(value: str | None) -> Language:
    """Map free-form input to a supported language, defaulting to TypeScript."""
    if value in (Language.PYTHON.value, Language.GO.value):
        return Language(value)
    return Language.TYPESCRIPT


class ProjectFile(StudioModel):
    """A single generated source file."""

    path: str
    content: str
    language: str


class Project(StudioModel):
    """A generated (or template-instantiated) backend project."""

    id: str
    user_id: str
    name: str
    description: str = ""
    status: ProjectStatus
    language: Language = Language.TYPESCRIPT
    template_id: str | None = None
    files: list[ProjectFile] = Field(default_factory=list)
    created_at: datetime = Field(default_factory=utcnow)
    updated_at: datetime = Field(default_factory=utcnow)
    error: str | None = None
