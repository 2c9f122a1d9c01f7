"""Section manifest: which sources make up the document, in which order.

The manifest lives in `agentsmd.yaml` at the project root. Without one,
the built-in default document is assembled.

Example:
    heading_shift: 1
    sections:
      - text: "# Guidelines"
      - file: .agents/general.md
      - file: .agents/project.md
        optional: true
      - dependency: errgonomic
        path: DOCS.md
      - extra_docs: true
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import yaml

from agentsmd import AUTOGEN_BANNER
from agentsmd.cargo.metadata import DEFAULT_METADATA_COMMAND
from agentsmd.docs_list import DEFAULT_DOCS_LIST_COMMAND
from agentsmd.errors import ConfigError
from agentsmd.paths import config_path
from agentsmd.render.markdown import HEADING_SHIFT
from agentsmd.render.sections import SectionKind

SOURCE_KEYS = ("text", "file", "dependency", "extra_docs")
_ALLOWED_KEYS = {
    "text": {"text"},
    "file": {"file", "optional", "kind"},
    "dependency": {"dependency", "path", "kind"},
    "extra_docs": {"extra_docs"},
}
_TOP_LEVEL_KEYS = {"sections", "metadata_command", "docs_list_command", "heading_shift"}


@dataclass(frozen=True)
class SectionEntry:
    """One declared source of the document."""

    source: str
    text: str | None = None
    file: str | None = None
    dependency: str | None = None
    path: str | None = None
    optional: bool = False
    kind: SectionKind | None = None


@dataclass
class Config:
    sections: list[SectionEntry] = field(default_factory=lambda: list(DEFAULT_SECTIONS))
    metadata_command: list[str] = field(default_factory=lambda: list(DEFAULT_METADATA_COMMAND))
    docs_list_command: list[str] = field(default_factory=lambda: list(DEFAULT_DOCS_LIST_COMMAND))
    heading_shift: int = HEADING_SHIFT


DEFAULT_SECTIONS: tuple[SectionEntry, ...] = (
    SectionEntry("text", text=AUTOGEN_BANNER),
    SectionEntry("text", text="# Guidelines"),
    SectionEntry("file", file=".agents/general.md"),
    SectionEntry("file", file=".agents/project.md", optional=True),
    SectionEntry("file", file=".agents/knowledge.md", optional=True),
    SectionEntry("file", file=".agents/docs.md", optional=True),
    SectionEntry("file", file=".agents/gotchas.md", optional=True),
    SectionEntry("dependency", dependency="errgonomic", path="DOCS.md"),
    SectionEntry("text", text="## Project files"),
    SectionEntry("file", file="Cargo.toml"),
    SectionEntry("file", file="src/main.rs", optional=True),
    SectionEntry("file", file="src/lib.rs", optional=True),
)


def load_config(path: Path | str | None = None, root: Path | None = None) -> Config:
    """Load the section manifest.

    Args:
        path: Explicit manifest path. Must exist when given.
        root: Project root used to find `agentsmd.yaml` when no path is given.

    Returns:
        Parsed Config, or the default Config if no manifest exists.

    Raises:
        ConfigError: If the manifest is missing (explicit path only),
            unreadable, or malformed.
    """
    if path is None:
        manifest = config_path(root)
        if not manifest.is_file():
            return Config()
    else:
        manifest = Path(path)
        if not manifest.is_file():
            raise ConfigError(f"config file not found: {manifest}")

    try:
        with open(manifest, encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except (OSError, yaml.YAMLError) as e:
        raise ConfigError(f"could not read {manifest}: {e}") from e

    if data is None:
        return Config()
    if not isinstance(data, dict):
        raise ConfigError(f"{manifest} is not a YAML mapping")
    return parse_config(data, str(manifest))


def parse_config(data: dict[str, Any], origin: str = "config") -> Config:
    """Build a Config from an already-parsed mapping."""
    unknown = set(data) - _TOP_LEVEL_KEYS
    if unknown:
        raise ConfigError(f"{origin}: unknown keys {', '.join(sorted(unknown))}")

    config = Config()
    if "sections" in data:
        raw = data["sections"]
        if not isinstance(raw, list):
            raise ConfigError(f"{origin}: 'sections' must be a list")
        config.sections = [_parse_entry(entry, i, origin) for i, entry in enumerate(raw)]
    for key in ("metadata_command", "docs_list_command"):
        if key in data:
            setattr(config, key, _parse_command(data[key], key, origin))
    if "heading_shift" in data:
        shift = data["heading_shift"]
        if not isinstance(shift, int) or isinstance(shift, bool) or shift < 0:
            raise ConfigError(f"{origin}: 'heading_shift' must be a non-negative integer")
        config.heading_shift = shift
    return config


def _parse_command(value: Any, key: str, origin: str) -> list[str]:
    if isinstance(value, str):
        value = value.split()
    if not isinstance(value, list) or not value or not all(isinstance(v, str) for v in value):
        raise ConfigError(f"{origin}: '{key}' must be a non-empty list of strings")
    return list(value)


def _parse_entry(entry: Any, index: int, origin: str) -> SectionEntry:
    where = f"{origin}: sections[{index}]"
    if not isinstance(entry, dict):
        raise ConfigError(f"{where} must be a mapping")

    sources = [k for k in SOURCE_KEYS if k in entry]
    if len(sources) != 1:
        raise ConfigError(f"{where} must have exactly one of {', '.join(SOURCE_KEYS)}")
    source = sources[0]

    unknown = set(entry) - _ALLOWED_KEYS[source]
    if unknown:
        raise ConfigError(f"{where}: unknown keys {', '.join(sorted(unknown))}")

    kind = None
    if "kind" in entry and entry["kind"] != "auto":
        try:
            kind = SectionKind(entry["kind"])
        except ValueError:
            raise ConfigError(f"{where}: unknown kind '{entry['kind']}'") from None

    if source == "text":
        return SectionEntry("text", text=_require_str(entry, "text", where))
    if source == "file":
        optional = entry.get("optional", False)
        if not isinstance(optional, bool):
            raise ConfigError(f"{where}: 'optional' must be true or false")
        return SectionEntry(
            "file", file=_require_str(entry, "file", where), optional=optional, kind=kind,
        )
    if source == "dependency":
        return SectionEntry(
            "dependency",
            dependency=_require_str(entry, "dependency", where),
            path=_require_str(entry, "path", where),
            kind=kind,
        )
    if entry["extra_docs"] is not True:
        raise ConfigError(f"{where}: 'extra_docs' must be true")
    return SectionEntry("extra_docs")


def _require_str(entry: dict, key: str, where: str) -> str:
    value = entry.get(key)
    if not isinstance(value, str) or not value:
        raise ConfigError(f"{where}: '{key}' must be a non-empty string")
    return value
