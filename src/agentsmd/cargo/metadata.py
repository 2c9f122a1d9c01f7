"""Cargo metadata loading and caching.

The dependency graph is fetched at most once per run. The first caller
starts the external command and installs a shared pending task; every
later caller awaits the same task, including callers that arrive while
the command is still running. The result is never refreshed.
"""

from __future__ import annotations

import asyncio
import json
import logging
from collections.abc import Sequence
from dataclasses import dataclass
from pathlib import Path
from typing import Any

import semver

from agentsmd.errors import MetadataFetchError, ParseError
from agentsmd.process import CommandResult, Runner, run_command

logger = logging.getLogger(__name__)

DEFAULT_METADATA_COMMAND = ("cargo", "metadata", "--format-version=1")


@dataclass(frozen=True)
class PackageRecord:
    """One package entry from `cargo metadata`."""

    id: str
    name: str
    version: semver.Version
    manifest_path: str

    @property
    def root(self) -> Path:
        """Directory holding the package manifest."""
        return Path(self.manifest_path).parent


@dataclass(frozen=True)
class DependencyGraph:
    """Resolved package set for the current project."""

    packages: tuple[PackageRecord, ...]
    root: str | None = None

    def candidates(self, name: str) -> list[PackageRecord]:
        """Return every package record published under `name`."""
        return [pkg for pkg in self.packages if pkg.name == name]


def parse_version(value: str, package: str = "") -> semver.Version:
    """Parse a semantic version, raising ParseError if it is invalid."""
    try:
        return semver.Version.parse(value)
    except (TypeError, ValueError) as e:
        where = f" for package '{package}'" if package else ""
        raise ParseError(f"invalid semver{where}: '{value}'") from e


def parse_metadata(text: str) -> DependencyGraph:
    """Parse `cargo metadata --format-version=1` output.

    Only the `packages` list and the optional `resolve.root` id are used.

    Raises:
        ParseError: If the output is not JSON, lacks the expected
            structure, or carries an invalid version.
    """
    try:
        data = json.loads(text)
    except json.JSONDecodeError as e:
        raise ParseError(f"cargo metadata output is not valid JSON: {e}") from e

    if not isinstance(data, dict):
        raise ParseError("cargo metadata output is not a JSON object")

    raw_packages = data.get("packages")
    if not isinstance(raw_packages, list):
        raise ParseError("cargo metadata output has no 'packages' list")

    packages = tuple(_parse_package(entry, i) for i, entry in enumerate(raw_packages))

    root = None
    resolve = data.get("resolve")
    if isinstance(resolve, dict):
        root = resolve.get("root")
    elif resolve is not None:
        raise ParseError("cargo metadata 'resolve' must be an object or null")

    return DependencyGraph(packages=packages, root=root)


def _parse_package(entry: Any, index: int) -> PackageRecord:
    if not isinstance(entry, dict):
        raise ParseError(f"packages[{index}] is not an object")
    fields = {}
    for key in ("id", "name", "version", "manifest_path"):
        value = entry.get(key)
        if not isinstance(value, str):
            raise ParseError(f"packages[{index}] has no string '{key}'")
        fields[key] = value
    return PackageRecord(
        id=fields["id"],
        name=fields["name"],
        version=parse_version(fields["version"], fields["name"]),
        manifest_path=fields["manifest_path"],
    )


class PackageMetadataCache:
    """Fetch-or-await-pending access to the run's dependency graph.

    Construct one instance per run and hand it to every producer that
    needs dependency metadata.
    """

    def __init__(
        self,
        command: Sequence[str] = DEFAULT_METADATA_COMMAND,
        cwd: Path | None = None,
        runner: Runner = run_command,
    ) -> None:
        self.command = tuple(command)
        self.cwd = cwd
        self._runner = runner
        self._pending: asyncio.Task[DependencyGraph] | None = None

    async def fetch(self) -> DependencyGraph:
        if self._pending is None:
            self._pending = asyncio.ensure_future(self._load())
        else:
            logger.debug("awaiting shared cargo metadata result")
        return await self._pending

    async def _load(self) -> DependencyGraph:
        try:
            result: CommandResult = await self._runner(self.command, self.cwd)
        except OSError as e:
            raise MetadataFetchError(self.command, None, str(e)) from e
        if not result.ok:
            raise MetadataFetchError(self.command, result.returncode, result.stderr)
        try:
            graph = parse_metadata(result.stdout)
        except ParseError as e:
            message = f"{e} (from {' '.join(self.command)})"
            if result.stderr.strip():
                message += f": {result.stderr.strip()}"
            raise ParseError(message) from e
        logger.debug("loaded %d packages from cargo metadata", len(graph.packages))
        return graph
