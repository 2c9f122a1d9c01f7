"""Generate command."""

import argparse
import asyncio
import os
import sys
import tempfile
from pathlib import Path

from agentsmd.errors import AgentsMdError


def _write_atomic(path: Path, text: str) -> None:
    """Replace `path` with `text`, leaving no partial file behind on failure."""
    fd, tmp_name = tempfile.mkstemp(dir=path.parent, prefix=f".{path.name}.", suffix=".tmp")
    try:
        with os.fdopen(fd, "w", encoding="utf-8") as f:
            f.write(text)
        os.replace(tmp_name, path)
    except BaseException:
        Path(tmp_name).unlink(missing_ok=True)
        raise


def cmd_generate(args: argparse.Namespace) -> int:
    from agentsmd.assembly import build_document
    from agentsmd.config import load_config
    from agentsmd.paths import project_root

    root = Path(args.root).expanduser().resolve() if args.root else project_root().resolve()
    try:
        config = load_config(args.config, root=root)
        content = asyncio.run(build_document(config, root))
    except AgentsMdError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    if args.output:
        output = Path(args.output).expanduser()
        try:
            _write_atomic(output, f"{content}\n")
        except OSError as e:
            print(f"Error: could not write {output}: {e}", file=sys.stderr)
            return 1
    else:
        print(content)
    return 0
