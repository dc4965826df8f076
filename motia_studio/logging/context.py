import structlog


def bind_deployment_context(deployment_id: str, project_id: str) -> None:
    """Bind deployment identifiers to every log line of the current context."""
    structlog.contextvars.bind_contextvars(deployment_id=deployment_id, project_id=project_id)


def get_deployment_id() -> str | None:
    """Get the deployment ID bound to the current context."""
    return structlog.contextvars.get_contextvars().get("deployment_id")


def clear_context() -> None:
    """Clear all context variables."""
    structlog.contextvars.clear_contextvars()
