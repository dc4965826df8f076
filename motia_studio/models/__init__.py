"""Record models persisted by the studio store."""

from .base import StudioModel, utcnow
from .deployment import Deployment, DeploymentConfig, DeploymentMetrics, DeploymentStatus
from .project import Language, Project, ProjectFile, ProjectStatus, normalize_language
from .template import Difficulty, Template

__all__ = [
    "StudioModel",
    "utcnow",
    "Deployment",
    "DeploymentConfig",
    "DeploymentMetrics",
    "DeploymentStatus",
    "Language",
    "Project",
    "ProjectFile",
    "ProjectStatus",
    "normalize_language",
    "Difficulty",
    "Template",
]
