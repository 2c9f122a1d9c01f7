"""Markdown heading shift.

Demotes every heading by a fixed number of levels so an included
fragment nests under the document's own headings. Setext headings are
rewritten as ATX headings. Fenced code blocks pass through untouched.
"""

from __future__ import annotations

import re

HEADING_SHIFT = 1
MAX_DEPTH = 6

_FENCE_OPEN = re.compile(r"^ {0,3}(`{3,}|~{3,})(.*)$")
_FENCE_CLOSE = re.compile(r"^ {0,3}(`{3,}|~{3,})[ \t]*$")
_ATX = re.compile(r"^ {0,3}(#{1,6})(?=[ \t]|$)(.*)$")
_ATX_CLOSING = re.compile(r"(?:^|[ \t]+)#+[ \t]*$")
_SETEXT = re.compile(r"^ {0,3}(=+|-+)[ \t]*$")
# Lines that open a block of their own and so cannot carry a setext heading.
_BLOCK_START = re.compile(r"^ {0,3}(?:[-*+>]|\d{1,9}[.)]|<)(?:[ \t]|$)")


def _heading(depth: int, text: str) -> str:
    depth = max(1, min(MAX_DEPTH, depth))
    text = _ATX_CLOSING.sub("", text.strip())
    return "#" * depth + (f" {text}" if text else "")


def shift_headings(markdown: str, shift: int = HEADING_SHIFT) -> str:
    """Return `markdown` with every heading moved `shift` levels deeper.

    Depths are clamped to the 1..6 range markdown allows.
    """
    out: list[str] = []
    fence: tuple[str, int] | None = None
    para_start: int | None = None
    # Inside a list item or blockquote: its continuation lines never
    # carry a setext underline of their own.
    in_container = False
    after_blank = False

    for line in markdown.splitlines():
        if fence is not None:
            out.append(line)
            m = _FENCE_CLOSE.match(line)
            if m and m.group(1)[0] == fence[0] and len(m.group(1)) >= fence[1]:
                fence = None
            continue

        m = _FENCE_OPEN.match(line)
        if m and not (m.group(1)[0] == "`" and "`" in m.group(2)):
            fence = (m.group(1)[0], len(m.group(1)))
            para_start = None
            out.append(line)
            continue

        m = _ATX.match(line)
        if m:
            out.append(_heading(len(m.group(1)) + shift, m.group(2)))
            para_start = None
            in_container = after_blank = False
            continue

        m = _SETEXT.match(line)
        if m and para_start is not None:
            level = 1 if m.group(1)[0] == "=" else 2
            text = " ".join(part.strip() for part in out[para_start:])
            del out[para_start:]
            out.append(_heading(level + shift, text))
            para_start = None
            continue

        if not line.strip():
            para_start = None
            after_blank = True
        elif m:
            para_start = None
            in_container = after_blank = False
        elif _BLOCK_START.match(line):
            para_start = None
            in_container = True
            after_blank = False
        elif in_container and (not after_blank or line[0] in " \t"):
            para_start = None
            after_blank = False
        else:
            in_container = after_blank = False
            if para_start is None and not line.startswith(("    ", "\t")):
                para_start = len(out)
        out.append(line)

    return "\n".join(out) + "\n"
