"""Exception hierarchy for the assembler.

Every failure bubbles up to the CLI and aborts the run. Absence of an
optional source is not an error: producers return None for it.
"""

from __future__ import annotations

from collections.abc import Sequence


class AgentsMdError(Exception):
    """Base class for all assembler errors."""


class ConfigError(AgentsMdError):
    """The section manifest is malformed."""


class CommandError(AgentsMdError):
    """An external command exited abnormally or could not be started."""

    def __init__(self, command: Sequence[str], returncode: int | None, stderr: str = "") -> None:
        self.command = list(command)
        self.returncode = returncode
        self.stderr = stderr.strip()
        message = f"{' '.join(self.command)} failed"
        if returncode is not None:
            message += f" (exit status {returncode})"
        if self.stderr:
            message += f": {self.stderr}"
        super().__init__(message)


class MetadataFetchError(CommandError):
    """`cargo metadata` (or its configured replacement) failed."""


class DocsListError(CommandError):
    """The extra-docs enumeration command failed."""


class ParseError(AgentsMdError):
    """Package metadata could not be parsed into a dependency graph."""


class SourceNotFoundError(AgentsMdError):
    """A required source file does not exist."""

    def __init__(self, path: str) -> None:
        self.path = path
        super().__init__(f"required file not found: {path}")


class UnknownLanguageError(AgentsMdError):
    """No fence language is registered for a file extension."""

    def __init__(self, path: str, extension: str) -> None:
        self.path = path
        self.extension = extension
        super().__init__(
            f"could not get a language identifier for extension '{extension}' ({path})"
        )


class RenderError(AgentsMdError):
    """A content transform failed for a source that exists."""

    def __init__(self, path: str, reason: str) -> None:
        self.path = path
        self.reason = reason
        super().__init__(f"failed to render {path}: {reason}")


class AssemblyError(AgentsMdError):
    """Wraps the first producer failure of a batch."""

    def __init__(self, source: str, cause: BaseException) -> None:
        self.source = source
        self.cause = cause
        super().__init__(f"{source}: {cause}")
