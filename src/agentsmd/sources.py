"""Section producers.

A producer is an argument-less coroutine function returning the
section text, or None when its source is absent. Absence is silent;
anything going wrong with a source that exists raises.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Sequence
from dataclasses import dataclass, field
from pathlib import Path

from agentsmd.cargo.metadata import PackageMetadataCache
from agentsmd.cargo.select import select
from agentsmd.docs_list import DEFAULT_DOCS_LIST_COMMAND, format_extra_docs, list_docs
from agentsmd.errors import SourceNotFoundError
from agentsmd.process import Runner, run_command
from agentsmd.render.sections import RendererRegistry, SectionKind

logger = logging.getLogger(__name__)


@dataclass
class SourceContext:
    """Collaborators shared by every producer of one run."""

    root: Path
    metadata: PackageMetadataCache
    renderers: RendererRegistry = field(default_factory=RendererRegistry)
    docs_list_command: Sequence[str] = DEFAULT_DOCS_LIST_COMMAND
    runner: Runner = run_command


async def _exists(path: Path) -> bool:
    return await asyncio.to_thread(path.exists)


async def _read_text(path: Path) -> str:
    return await asyncio.to_thread(path.read_text, encoding="utf-8")


@dataclass
class LiteralText:
    text: str

    @property
    def label(self) -> str:
        return repr(self.text[:40])

    async def __call__(self) -> str | None:
        return self.text


@dataclass
class ProjectFile:
    """A file under the project root."""

    ctx: SourceContext
    path: str
    optional: bool = False
    kind: SectionKind | None = None

    @property
    def label(self) -> str:
        return self.path

    async def __call__(self) -> str | None:
        full_path = self.ctx.root / self.path
        if not await _exists(full_path):
            if self.optional:
                logger.debug("skipping missing optional file %s", self.path)
                return None
            raise SourceNotFoundError(self.path)
        content = await _read_text(full_path)
        return self.ctx.renderers.render(self.path, content, self.kind)


@dataclass
class DependencyFile:
    """A file shipped inside a Cargo dependency's package directory."""

    ctx: SourceContext
    name: str
    path: str
    kind: SectionKind | None = None

    @property
    def label(self) -> str:
        return f"{self.name}/{self.path}"

    async def __call__(self) -> str | None:
        graph = await self.ctx.metadata.fetch()
        package = select(self.name, graph.candidates(self.name))
        if package is None:
            logger.debug("dependency %s not in cargo metadata, skipping", self.name)
            return None
        full_path = package.root / self.path
        if not await _exists(full_path):
            logger.debug("%s has no %s, skipping", self.name, self.path)
            return None
        content = await _read_text(full_path)
        return self.ctx.renderers.render(self.path, content, self.kind, label=self.label)


@dataclass
class ExtraDocs:
    """The list printed by the docs listing command."""

    ctx: SourceContext

    @property
    def label(self) -> str:
        return " ".join(self.ctx.docs_list_command)

    async def __call__(self) -> str | None:
        paths = await list_docs(self.ctx.docs_list_command, self.ctx.root, self.ctx.runner)
        return format_extra_docs(paths)


def include_file(ctx: SourceContext, path: str, kind: SectionKind | None = None) -> ProjectFile:
    return ProjectFile(ctx, path, optional=False, kind=kind)


def include_file_if_exists(
    ctx: SourceContext, path: str, kind: SectionKind | None = None,
) -> ProjectFile:
    return ProjectFile(ctx, path, optional=True, kind=kind)


def include_dependency_file_if_exists(
    ctx: SourceContext, name: str, path: str, kind: SectionKind | None = None,
) -> DependencyFile:
    return DependencyFile(ctx, name, path, kind=kind)
