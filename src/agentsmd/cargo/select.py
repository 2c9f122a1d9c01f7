"""Pick one package record among same-named candidates."""

from __future__ import annotations

import logging
from collections.abc import Iterable

from agentsmd.cargo.metadata import PackageRecord

logger = logging.getLogger(__name__)


def _precedence(record: PackageRecord) -> tuple:
    # Highest semver first, then the lexicographically greatest manifest
    # path, then the package id so identical versions/paths still order.
    return (record.version, record.manifest_path, record.id)


def select(name: str, candidates: Iterable[PackageRecord]) -> PackageRecord | None:
    """Return the best candidate for `name`, or None if there is none.

    The result does not depend on the iteration order of `candidates`.
    Records whose name differs from `name` are ignored.
    """
    matching = [c for c in candidates if c.name == name]
    if not matching:
        return None
    best = max(matching, key=_precedence)
    if len(matching) > 1:
        logger.debug(
            "selected %s %s at %s out of %d candidates",
            name, best.version, best.manifest_path, len(matching),
        )
    return best
