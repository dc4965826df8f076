"""Code generation: description in, project files out."""

from .base import CodeGenerator
from .client import CompletionClient
from .factory import create_code_generator
from .fallback import fallback_files
from .keywords import TemplateCodeGenerator
from .llm import LLMCodeGenerator
from .naming import (
    MIN_DESCRIPTION_LENGTH,
    check_description,
    estimate_generation_time,
    extract_project_name,
)
from .parser import GeneratedFileParser, infer_language
from .validation import ValidationReport, validate_code

__all__ = [
    "CodeGenerator",
    "CompletionClient",
    "create_code_generator",
    "fallback_files",
    "TemplateCodeGenerator",
    "LLMCodeGenerator",
    "MIN_DESCRIPTION_LENGTH",
    "check_description",
    "estimate_generation_time",
    "extract_project_name",
    "GeneratedFileParser",
    "infer_language",
    "ValidationReport",
    "validate_code",
]
