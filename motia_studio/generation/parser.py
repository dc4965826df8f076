from pathlib import PurePosixPath
import re

from motia_studio.models import ProjectFile

EXTENSION_LANGUAGES = {
    ".ts": "typescript",
    ".tsx": "typescript",
    ".js": "javascript",
    ".py": "python",
    ".go": "go",
    ".md": "markdown",
    ".json": "json",
    ".yaml": "yaml",
    ".yml": "yaml",
}


def infer_language(path: str, default: str) -> str:
    """Language of a file from its extension, ``default`` when unknown."""
    return EXTENSION_LANGUAGES.get(PurePosixPath(path).suffix.lower(), default)


class GeneratedFileParser:
    """Extracts files from a completion response.

    Files are delimited as::

        ===FILE: path/to/file===
        <content>
        ===END FILE===

    Anything outside these blocks is ignored.
    """

    _FILE_PATTERN = re.compile(r"===FILE:([^\n]+?)===\r?\n(.*?)===END FILE===", re.DOTALL)

    @classmethod
    def parse(cls, text: str, language: str) -> list[ProjectFile]:
        """Return one file per delimited block, in order.

        Paths and contents are stripped of surrounding whitespace. Returns an
        empty list when no block is found; blocks with an empty path are skipped.
        """
        default = getattr(language, "value", language)
        files = []
        for match in cls._FILE_PATTERN.finditer(text):
            path = match.group(1).strip()
            if not path:
                continue
            files.append(
                ProjectFile(
                    path=path,
                    content=match.group(2).strip(),
                    language=infer_language(path, default),
                )
            )
        return files
