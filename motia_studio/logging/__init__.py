from .config import setup_logging
from .context import bind_deployment_context, clear_context, get_deployment_id

__all__ = [
    "setup_logging",
    "bind_deployment_context",
    "get_deployment_id",
    "clear_context",
]
