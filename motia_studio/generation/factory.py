import structlog

from motia_studio.config import Settings

from .base import CodeGenerator
from .client import CompletionClient
from .keywords import TemplateCodeGenerator
from .llm import LLMCodeGenerator

logger = structlog.get_logger(__name__)


def create_code_generator(settings: Settings) -> CodeGenerator:
    """Create the generator selected by settings.

    ``auto`` uses the completion API when an API key is configured and the
    keyword templates otherwise.
    """
    backend = settings.generation_backend
    if backend == "auto":
        backend = "llm" if settings.groq_api_key.strip() else "template"

    logger.info("code_generator_selected", backend=backend, model=settings.llm_model)
    if backend == "template":
        return TemplateCodeGenerator()

    client = CompletionClient(
        api_key=settings.groq_api_key,
        base_url=settings.llm_base_url,
        model=settings.llm_model,
        temperature=settings.llm_temperature,
        max_tokens=settings.llm_max_tokens,
        timeout=settings.llm_timeout_seconds,
    )
    return LLMCodeGenerator(client)
