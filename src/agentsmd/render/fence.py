"""Code fence computation."""

from __future__ import annotations

import re

MIN_FENCE_LENGTH = 3


def longest_run(content: str, marker: str = "`") -> int:
    """Length of the longest contiguous run of `marker` in `content`."""
    runs = re.findall(f"{re.escape(marker)}+", content)
    return max((len(run) for run in runs), default=0)


def compute_fence(content: str, marker: str = "`") -> str:
    """Return a fence that cannot be closed early by anything in `content`.

    A fence of length L is only terminated by a run of at least L markers,
    so the fence is one longer than the longest run, and never shorter
    than three.
    """
    if len(marker) != 1:
        raise ValueError(f"fence marker must be a single character, got {marker!r}")
    return marker * max(MIN_FENCE_LENGTH, longest_run(content, marker) + 1)
