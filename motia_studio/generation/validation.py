from dataclasses import dataclass, field

import structlog

from motia_studio.models import ProjectFile

logger = structlog.get_logger(__name__)


@dataclass(frozen=True)
class ValidationReport:
    """Advisory result of checking generated files."""

    valid: bool
    errors: list[str] = field(default_factory=list)


def validate_code(files: list[ProjectFile]) -> ValidationReport:
    """Check that generated files look like a runnable project.

    Problems are reported and logged as warnings, never raised.
    """
    errors: list[str] = []
    if not files:
        errors.append("No files generated")
    elif not any("workflow" in f.path or "main" in f.path for f in files):
        errors.append("Missing main workflow file")

    if errors:
        logger.warning("generated_code_warnings", errors=errors, files=len(files))
    return ValidationReport(valid=not errors, errors=errors)
