"""Section renderers.

Each source file becomes one section through a renderer chosen by its
kind. Markdown fragments get their headings shifted, code files are
fenced under a `### <path>` heading, and structured files are wrapped
in an XML envelope. Every renderer trims trailing whitespace.
"""

from __future__ import annotations

import functools
from abc import ABC, abstractmethod
from collections.abc import Callable
from enum import Enum

from agentsmd.errors import RenderError
from agentsmd.render.fence import compute_fence
from agentsmd.render.languages import LANGUAGES, language_for
from agentsmd.render.markdown import HEADING_SHIFT, shift_headings
from agentsmd.render.structured import wrap_file


class SectionKind(str, Enum):
    MARKDOWN = "markdown"
    CODE = "code"
    STRUCTURED = "structured"


def classify(path: str) -> SectionKind:
    """Pick the section kind for a path: `.md` files are markdown, the rest code."""
    if path.lower().endswith(".md"):
        return SectionKind.MARKDOWN
    return SectionKind.CODE


def heading_label(path: str) -> str:
    return f"### {path}"


class SectionRenderer(ABC):
    """Turns the contents of one file into finished section text."""

    kind: SectionKind

    @abstractmethod
    def render(self, path: str, content: str, label: str | None = None) -> str:
        """Render `content` read from `path`.

        `label` is the path shown to readers; it defaults to `path`.
        """


class MarkdownRenderer(SectionRenderer):
    kind = SectionKind.MARKDOWN

    def __init__(
        self,
        transform: Callable[[str], str] | None = None,
        shift: int = HEADING_SHIFT,
    ) -> None:
        self.transform = transform or functools.partial(shift_headings, shift=shift)

    def render(self, path: str, content: str, label: str | None = None) -> str:
        try:
            text = self.transform(content)
        except Exception as e:
            raise RenderError(label or path, str(e) or type(e).__name__) from e
        return text.rstrip()


class CodeRenderer(SectionRenderer):
    kind = SectionKind.CODE

    def __init__(self, languages: dict[str, str] | None = None, marker: str = "`") -> None:
        self.languages = dict(LANGUAGES if languages is None else languages)
        self.marker = marker

    def render(self, path: str, content: str, label: str | None = None) -> str:
        tag = language_for(path, self.languages)
        body = content.rstrip()
        fence = compute_fence(body, self.marker)
        return f"{heading_label(label or path)}\n\n{fence}{tag}\n{body}\n{fence}"


class StructuredRenderer(SectionRenderer):
    kind = SectionKind.STRUCTURED

    def __init__(self, serializer: Callable[[str, str], str] = wrap_file) -> None:
        self.serializer = serializer

    def render(self, path: str, content: str, label: str | None = None) -> str:
        try:
            text = self.serializer(label or path, content)
        except Exception as e:
            raise RenderError(label or path, str(e) or type(e).__name__) from e
        return text.rstrip()


class RendererRegistry:
    """Kind → renderer lookup shared by all producers of a run."""

    def __init__(self, *renderers: SectionRenderer) -> None:
        self._renderers: dict[SectionKind, SectionRenderer] = {
            r.kind: r for r in (MarkdownRenderer(), CodeRenderer(), StructuredRenderer())
        }
        for renderer in renderers:
            self._renderers[renderer.kind] = renderer

    def get(self, kind: SectionKind) -> SectionRenderer:
        return self._renderers[kind]

    def render(
        self,
        path: str,
        content: str,
        kind: SectionKind | None = None,
        label: str | None = None,
    ) -> str:
        renderer = self.get(kind or classify(path))
        return renderer.render(path, content, label)


def render(
    path: str,
    content: str,
    kind: SectionKind | None = None,
    label: str | None = None,
) -> str:
    """Render one file with the default renderers."""
    return RendererRegistry().render(path, content, kind, label)
