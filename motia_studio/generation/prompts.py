"""Prompt text sent to the completion provider."""

from motia_studio.models import Language

SYSTEM_PROMPT = "You are an expert Motia backend developer who generates production-ready code."

_EXTENSIONS = {Language.TYPESCRIPT: "ts", Language.PYTHON: "py", Language.GO: "go"}


def build_prompt(description: str, language: Language, features: list[str] | None = None) -> str:
    """User prompt asking for files in the ``===FILE:===`` delimiter format."""
    ext = _EXTENSIONS[language]
    features_text = f"\nRequired features: {', '.join(features)}" if features else ""
    return f"""You are an expert Motia backend code generator. Generate ONLY executable code files.

Project Description: {description}{features_text}
Language: {language.value}

Required Files:
- Main workflow file (src/workflow.{ext})
- Step definitions (src/steps.{ext})
- Configuration (src/config.{ext})
- README.md with API documentation

Code Requirements:
- Use Motia Steps and Workflows properly
- Include error handling, validation and retry logic for critical operations
- Follow {language.value} best practices
- Minimal inline comments, no tutorial text

OUTPUT FORMAT - use EXACTLY this structure, no text outside the markers:
===FILE: path/to/file===
[file content]
===END FILE===
===FILE: another/file===
[file content]
===END FILE===

Generate the complete project now:"""
