"""Exception hierarchy for Motia Studio.

Missing records are not exceptions: store reads and updates return ``None``.
"""

from typing import Literal


class StudioError(Exception):
    """Base class for all studio errors."""


class ProjectNotFoundError(StudioError):
    """Raised when a caller-initiated operation references an unknown project."""

    def __init__(self, project_id: str):
        super().__init__(f"Project not found: {project_id}")
        self.project_id = project_id


class ProjectNotReadyError(StudioError):
    """Raised when a deployment is requested for a project that is not ready."""

    def __init__(self, project_id: str, status: str):
        super().__init__(f"Project {project_id} is not ready for deployment (status: {status})")
        self.project_id = project_id
        self.status = status


class InvalidTransitionError(StudioError, ValueError):
    """Raised when an update would move a deployment out of a terminal status."""

    def __init__(self, deployment_id: str, current: str, requested: str):
        current = getattr(current, "value", current)
        requested = getattr(requested, "value", requested)
        super().__init__(f"Deployment {deployment_id} cannot move from {current} to {requested}")
        self.deployment_id = deployment_id
        self.current = current
        self.requested = requested


class PersistenceError(StudioError):
    """Raised by the store in strict mode when the storage adapter fails."""


GenerationFailureReason = Literal["credentials", "rate_limit", "failed"]


class GenerationError(StudioError):
    """Raised when code generation cannot produce any files.

    ``reason`` distinguishes credential problems, rate limiting and generic
    failures so callers can show the right remediation hint.
    """

    def __init__(self, message: str, reason: GenerationFailureReason = "failed"):
        super().__init__(message)
        self.reason = reason


class InvalidDescriptionError(StudioError, ValueError):
    """Raised when a project description is too short to generate from."""
