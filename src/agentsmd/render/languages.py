"""Extension → fence language mapping.

This table is closed: an extension missing here is an error, never a
guess.
"""

from __future__ import annotations

from pathlib import PurePosixPath

from agentsmd.errors import UnknownLanguageError

LANGUAGES: dict[str, str] = {
    ".ts": "typescript",
    ".rs": "rust",
    ".xml": "xml",
    ".toml": "toml",
    ".py": "python",
    ".json": "json",
    ".yaml": "yaml",
    ".yml": "yaml",
    ".sh": "bash",
}


def extension(path: str) -> str:
    """Return the final suffix of `path` (empty for dotfiles and bare names)."""
    return PurePosixPath(path).suffix


def language_for(path: str, languages: dict[str, str] | None = None) -> str:
    """Look up the fence language for `path`.

    Raises:
        UnknownLanguageError: If the extension has no mapping.
    """
    table = LANGUAGES if languages is None else languages
    ext = extension(path)
    try:
        return table[ext]
    except KeyError:
        raise UnknownLanguageError(path, ext) from None
