"""Concurrent gather, ordered assembly.

All producers start at once. The batch waits for every one of them to
settle; if any failed, the earliest failure is raised wrapped in
AssemblyError and nothing is assembled. Otherwise sections are joined
in declaration order, with absent sections dropped.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Awaitable, Callable, Sequence
from dataclasses import dataclass
from pathlib import Path

from agentsmd.cargo.metadata import PackageMetadataCache
from agentsmd.config import Config, SectionEntry
from agentsmd.errors import AssemblyError
from agentsmd.process import Runner, run_command
from agentsmd.render.sections import MarkdownRenderer, RendererRegistry
from agentsmd.sources import (
    ExtraDocs,
    LiteralText,
    SourceContext,
    include_dependency_file_if_exists,
    include_file,
    include_file_if_exists,
)

logger = logging.getLogger(__name__)

SEPARATOR = "\n\n"

Producer = Callable[[], Awaitable["str | None"]]


@dataclass(frozen=True)
class Section:
    order: int
    text: str | None

    @property
    def present(self) -> bool:
        return bool(self.text)


def describe(producer: Producer) -> str:
    """Human-readable name of a producer for error messages."""
    label = getattr(producer, "label", None)
    if label:
        return str(label)
    return getattr(producer, "__qualname__", None) or repr(producer)


async def gather_sections(producers: Sequence[Producer]) -> list[Section]:
    """Run all producers concurrently and return their sections in declaration order.

    Raises:
        AssemblyError: Wrapping the first producer failure, once every
            producer has settled.
    """
    failures: list[tuple[str, Exception]] = []

    async def run(order: int, producer: Producer) -> Section:
        try:
            text = await producer()
        except Exception as e:
            failures.append((describe(producer), e))
            raise
        return Section(order, text)

    results = await asyncio.gather(
        *(run(i, p) for i, p in enumerate(producers)),
        return_exceptions=True,
    )
    if failures:
        source, cause = failures[0]
        if len(failures) > 1:
            logger.debug("%d producers failed, reporting %s", len(failures), source)
        raise AssemblyError(source, cause) from cause
    return list(results)


def join_sections(sections: Sequence[Section]) -> str:
    ordered = sorted(sections, key=lambda s: s.order)
    return SEPARATOR.join(s.text for s in ordered if s.present)


async def assemble(producers: Sequence[Producer]) -> str:
    """Produce every section and join them into one document."""
    return join_sections(await gather_sections(producers))


def build_producers(config: Config, ctx: SourceContext) -> list[Producer]:
    return [_producer_for(entry, ctx) for entry in config.sections]


def _producer_for(entry: SectionEntry, ctx: SourceContext) -> Producer:
    if entry.source == "text":
        return LiteralText(entry.text or "")
    if entry.source == "file":
        if entry.optional:
            return include_file_if_exists(ctx, entry.file, entry.kind)
        return include_file(ctx, entry.file, entry.kind)
    if entry.source == "dependency":
        return include_dependency_file_if_exists(ctx, entry.dependency, entry.path, entry.kind)
    return ExtraDocs(ctx)


async def build_document(
    config: Config,
    root: Path,
    runner: Runner = run_command,
) -> str:
    """Assemble the document described by `config` for the project at `root`."""
    ctx = SourceContext(
        root=root,
        metadata=PackageMetadataCache(config.metadata_command, cwd=root, runner=runner),
        renderers=RendererRegistry(MarkdownRenderer(shift=config.heading_shift)),
        docs_list_command=config.docs_list_command,
        runner=runner,
    )
    producers = build_producers(config, ctx)
    logger.debug("assembling %d sections from %s", len(producers), root)
    return await assemble(producers)
