"""Tests for the command line interface.

Covers:
- Parser construction and defaults
- Writing to stdout and to a file
- Error reporting and exit status
"""

import argparse

import pytest

from agentsmd.cli import build_parser, main


@pytest.fixture
def manifest(project):
    """Project whose manifest avoids external commands."""
    (project / "agentsmd.yaml").write_text(
        "sections:\n"
        "  - text: '# Guidelines'\n"
        "  - file: .agents/general.md\n"
        "  - file: .agents/project.md\n"
        "    optional: true\n"
        "  - file: Cargo.toml\n"
    )
    return project


EXPECTED = (
    "# Guidelines\n\n"
    "## General\n\nBe concise.\n\n"
    '### Cargo.toml\n\n```toml\n[package]\nname = "demo"\nversion = "0.1.0"\n```'
)


class TestParser:
    def test_build_parser_returns_parser(self):
        assert isinstance(build_parser(), argparse.ArgumentParser)

    def test_defaults(self):
        args = build_parser().parse_args([])
        assert args.output is None
        assert args.root is None
        assert args.config is None
        assert args.verbose is False

    def test_short_output_flag(self):
        args = build_parser().parse_args(["-o", "AGENTS.md"])
        assert args.output == "AGENTS.md"

    def test_help_exits_zero(self):
        with pytest.raises(SystemExit) as exc_info:
            build_parser().parse_args(["--help"])
        assert exc_info.value.code == 0


class TestMain:
    def test_prints_to_stdout(self, manifest, capsys):
        rc = main(["--root", str(manifest)])
        assert rc == 0
        assert capsys.readouterr().out == EXPECTED + "\n"

    def test_writes_output_file(self, manifest, tmp_path, capsys):
        out = tmp_path / "AGENTS.md"
        rc = main(["--root", str(manifest), "-o", str(out)])
        assert rc == 0
        assert out.read_text() == EXPECTED + "\n"
        assert capsys.readouterr().out == ""

    def test_root_from_environment(self, manifest, monkeypatch, capsys):
        monkeypatch.setenv("AGENTSMD_ROOT", str(manifest))
        assert main([]) == 0
        assert capsys.readouterr().out.startswith("# Guidelines")

    def test_explicit_config(self, project, tmp_path, capsys):
        config = tmp_path / "only-title.yaml"
        config.write_text("sections:\n  - text: '# Title'\n")
        assert main(["--root", str(project), "--config", str(config)]) == 0
        assert capsys.readouterr().out == "# Title\n"

    def test_failure_writes_nothing(self, manifest, tmp_path, capsys):
        (manifest / "Cargo.toml").unlink()
        out = tmp_path / "AGENTS.md"
        rc = main(["--root", str(manifest), "-o", str(out)])
        assert rc == 1
        assert not out.exists()
        captured = capsys.readouterr()
        assert captured.out == ""
        assert "Error: Cargo.toml" in captured.err
        assert "required file not found" in captured.err

    def test_config_error(self, project, capsys):
        (project / "agentsmd.yaml").write_text("sections: nope\n")
        assert main(["--root", str(project)]) == 1
        assert "'sections' must be a list" in capsys.readouterr().err

    def test_unwritable_output(self, manifest, tmp_path, capsys):
        out = tmp_path / "missing-dir" / "AGENTS.md"
        rc = main(["--root", str(manifest), "-o", str(out)])
        assert rc == 1
        assert not out.parent.exists()
        captured = capsys.readouterr()
        assert captured.out == ""
        assert "Error: could not write" in captured.err

    def test_replaces_existing_output_without_leftovers(self, manifest, tmp_path):
        out_dir = tmp_path / "out"
        out_dir.mkdir()
        out = out_dir / "AGENTS.md"
        out.write_text("stale\n")
        assert main(["--root", str(manifest), "-o", str(out)]) == 0
        assert out.read_text() == EXPECTED + "\n"
        assert [p.name for p in out_dir.iterdir()] == ["AGENTS.md"]
