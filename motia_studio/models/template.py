from enum import Enum

from pydantic import Field

from .base import StudioModel
from .project import ProjectFile


class Difficulty(str, Enum):
    BEGINNER = "beginner"
    INTERMEDIATE = "intermediate"
    ADVANCED = "advanced"


class Template(StudioModel):
    """Read-mostly reference project that new projects can be copied from."""

    id: str
    name: str
    description: str
    category: str
    difficulty: Difficulty
    features: list[str] = Field(default_factory=list)
    deploy_time: str
    files: list[ProjectFile] = Field(default_factory=list)
