"""Shared test fixtures for agentsmd."""

import asyncio
import json
from pathlib import Path

import pytest

from agentsmd.cargo.metadata import DEFAULT_METADATA_COMMAND, PackageMetadataCache
from agentsmd.process import CommandResult
from agentsmd.sources import SourceContext


class FakeRunner:
    """Stands in for run_command: canned results keyed by command tuple."""

    def __init__(self, responses=None, delay=0.0):
        self.responses = {tuple(k): v for k, v in (responses or {}).items()}
        self.delay = delay
        self.calls = []

    async def __call__(self, args, cwd=None):
        self.calls.append(tuple(args))
        if self.delay:
            await asyncio.sleep(self.delay)
        response = self.responses[tuple(args)]
        if isinstance(response, Exception):
            raise response
        return response


def metadata_json(*packages, root=None):
    """Build `cargo metadata` output from (name, version, manifest_path) triples."""
    return json.dumps({
        "packages": [
            {
                "id": f"{name} {version} (path+file://{manifest})",
                "name": name,
                "version": version,
                "manifest_path": str(manifest),
                "dependencies": [],
            }
            for name, version, manifest in packages
        ],
        "resolve": {"root": root, "nodes": []},
    })


def ok(stdout="", stderr=""):
    return CommandResult(returncode=0, stdout=stdout, stderr=stderr)


@pytest.fixture
def project(tmp_path):
    """Project root with a guidelines fragment and a Cargo manifest."""
    root = tmp_path / "project"
    (root / ".agents").mkdir(parents=True)
    (root / ".agents" / "general.md").write_text("# General\n\nBe concise.\n")
    (root / "Cargo.toml").write_text('[package]\nname = "demo"\nversion = "0.1.0"\n')
    return root


@pytest.fixture
def make_context():
    """Factory for a SourceContext whose external commands are faked."""

    def _make(root: Path, metadata_stdout: str | None = None, docs=None):
        responses = {}
        if metadata_stdout is not None:
            responses[DEFAULT_METADATA_COMMAND] = ok(metadata_stdout)
        if docs is not None:
            responses[("mise", "run", "agent:docs:list")] = docs
        runner = FakeRunner(responses)
        cache = PackageMetadataCache(runner=runner)
        ctx = SourceContext(root=root, metadata=cache, runner=runner)
        return ctx, runner

    return _make
