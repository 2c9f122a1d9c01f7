"""Extra documentation listing.

Projects can expose additional docs through a task runner command
(`mise run agent:docs:list` by default) that prints one path per line.
The paths are listed in the document so agents know where to look.
"""

from __future__ import annotations

import logging
import re
from collections.abc import Sequence
from pathlib import Path

from agentsmd.errors import DocsListError
from agentsmd.process import Runner, run_command

logger = logging.getLogger(__name__)

DEFAULT_DOCS_LIST_COMMAND = ("mise", "run", "agent:docs:list")

EXTRA_DOCS_INTRO = (
    "# Extra docs\n\n"
    "Read the extra docs from the list below if they are relevant to your current task:"
)


async def list_docs(
    command: Sequence[str] = DEFAULT_DOCS_LIST_COMMAND,
    cwd: Path | None = None,
    runner: Runner = run_command,
) -> list[str]:
    """Run the listing command and return the non-empty lines it printed.

    Raises:
        DocsListError: If the command cannot be started or exits non-zero.
    """
    try:
        result = await runner(command, cwd)
    except OSError as e:
        raise DocsListError(command, None, str(e)) from e
    if not result.ok:
        raise DocsListError(command, result.returncode, result.stderr)

    stdout = result.stdout.rstrip()
    if not stdout:
        return []
    return [line for line in re.split(r"\r?\n", stdout) if line]


def format_extra_docs(paths: Sequence[str]) -> str | None:
    """Render the extra-docs section, or None when there is nothing to list."""
    if not paths:
        return None
    items = "\n".join(f"* {p}" for p in paths)
    return f"{EXTRA_DOCS_INTRO}\n\n{items}".strip()
