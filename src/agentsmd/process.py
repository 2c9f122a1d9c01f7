"""Async external command execution."""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Awaitable, Callable, Sequence
from dataclasses import dataclass
from pathlib import Path

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CommandResult:
    """Captured outcome of a finished command."""

    returncode: int
    stdout: str
    stderr: str

    @property
    def ok(self) -> bool:
        return self.returncode == 0


Runner = Callable[..., Awaitable[CommandResult]]


async def run_command(args: Sequence[str], cwd: Path | None = None) -> CommandResult:
    """Run a command without blocking the event loop and capture its output.

    Raises:
        FileNotFoundError: If the executable cannot be found.
    """
    logger.debug("running %s (cwd=%s)", " ".join(args), cwd)
    process = await asyncio.create_subprocess_exec(
        *args,
        stdout=asyncio.subprocess.PIPE,
        stderr=asyncio.subprocess.PIPE,
        cwd=str(cwd) if cwd else None,
    )
    stdout, stderr = await process.communicate()
    result = CommandResult(
        returncode=process.returncode if process.returncode is not None else -1,
        stdout=stdout.decode("utf-8", errors="replace"),
        stderr=stderr.decode("utf-8", errors="replace"),
    )
    logger.debug("%s exited with %d", args[0], result.returncode)
    return result
