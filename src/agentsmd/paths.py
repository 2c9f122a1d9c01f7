"""Project path resolution.

Resolves the project root the document is assembled from. Uses an
environment variable when available, falls back to the current
working directory.

Environment variables:
    AGENTSMD_ROOT: project root (default: current working directory)
"""

from __future__ import annotations

import os
from pathlib import Path

CONFIG_FILENAME = "agentsmd.yaml"


def project_root() -> Path:
    """Return the project root directory."""
    env = os.environ.get("AGENTSMD_ROOT")
    if env:
        return Path(env).expanduser()
    return Path.cwd()


def config_path(root: Path | None = None) -> Path:
    """Return the default location of the section manifest."""
    return (root or project_root()) / CONFIG_FILENAME
