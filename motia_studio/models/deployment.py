from datetime import datetime
from enum import Enum

from pydantic import Field, model_validator

from .base import StudioModel, utcnow


class DeploymentStatus(str, Enum):
    """Deployment lifecycle state. ``LIVE`` and ``FAILED`` are terminal."""

    DEPLOYING = "deploying"
    LIVE = "live"
    FAILED = "failed"

    @property
    def is_terminal(self) -> bool:
        return self is not DeploymentStatus.DEPLOYING


class DeploymentConfig(StudioModel):
    """Runtime limits fixed when the deployment is created."""

    memory: str = "512MB"
    timeout: int = 30


class DeploymentMetrics(StudioModel):
    """Metrics snapshot attached to a live deployment."""

    requests: int = 0
    avg_latency: str = "0ms"
    error_rate: str = "0%"
    uptime: str = "100%"


class Deployment(StudioModel):
    """A (simulated) deployment of a project."""

    id: str
    project_id: str
    status: DeploymentStatus = DeploymentStatus.DEPLOYING
    url: str | None = None
    error: str | None = None
    deployed_at: datetime = Field(default_factory=utcnow)
    config: DeploymentConfig = Field(default_factory=DeploymentConfig)
    metrics: DeploymentMetrics | None = None

    @model_validator(mode="after")
    def check_terminal_payload(self) -> "Deployment":
        """Metrics belong to live deployments only, errors to failed ones only."""
        if self.metrics is not None and self.status is not DeploymentStatus.LIVE:
            raise ValueError(
                f"metrics are only allowed on live deployments, got {self.status.value}"
            )
        if self.error is not None and self.status is not DeploymentStatus.FAILED:
            raise ValueError(
                f"error is only allowed on failed deployments, got {self.status.value}"
            )
        return self
