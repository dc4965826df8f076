from .lifecycle import (
    DEFAULT_FAILURE_MESSAGE,
    PROVISIONING_STAGES,
    DeploymentLifecycle,
    deployment_url,
    estimate_deployment_time,
)

__all__ = [
    "DEFAULT_FAILURE_MESSAGE",
    "PROVISIONING_STAGES",
    "DeploymentLifecycle",
    "deployment_url",
    "estimate_deployment_time",
]
