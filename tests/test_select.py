"""Tests for dependency version selection."""

from itertools import permutations

from agentsmd.cargo.metadata import PackageRecord, parse_version
from agentsmd.cargo.select import select


def record(version, manifest_path="/reg/pkg/Cargo.toml", name="pkg"):
    return PackageRecord(
        id=f"{name} {version} ({manifest_path})",
        name=name,
        version=parse_version(version),
        manifest_path=manifest_path,
    )


class TestSelect:
    def test_empty_candidates_is_not_found(self):
        assert select("pkg", []) is None

    def test_single_candidate(self):
        only = record("0.3.1")
        assert select("pkg", [only]) is only

    def test_highest_version_wins(self):
        candidates = [record("1.0.0", "/a"), record("2.0.0", "/b"), record("1.9.9", "/c")]
        assert str(select("pkg", candidates).version) == "2.0.0"

    def test_equal_versions_pick_greatest_manifest_path(self):
        a = record("1.0.0", "/a/pkg")
        b = record("1.0.0", "/b/pkg")
        assert select("pkg", [a, b]).manifest_path == "/b/pkg"
        assert select("pkg", [b, a]).manifest_path == "/b/pkg"

    def test_release_beats_prerelease(self):
        candidates = [record("1.0.0-rc.1", "/z"), record("1.0.0", "/a")]
        assert str(select("pkg", candidates).version) == "1.0.0"

    def test_prerelease_precedence(self):
        versions = ["1.0.0-alpha", "1.0.0-alpha.1", "1.0.0-beta.2", "1.0.0-beta.11", "1.0.0-rc.1"]
        candidates = [record(v, f"/{i}") for i, v in enumerate(versions)]
        assert str(select("pkg", candidates).version) == "1.0.0-rc.1"

    def test_numeric_not_lexicographic(self):
        candidates = [record("0.9.0", "/z"), record("0.10.0", "/a")]
        assert str(select("pkg", candidates).version) == "0.10.0"

    def test_ignores_other_names(self):
        candidates = [record("9.0.0", "/x", name="other"), record("1.0.0", "/y")]
        assert select("pkg", candidates).manifest_path == "/y"

    def test_order_independent(self):
        candidates = [
            record("1.0.0", "/a/pkg"),
            record("2.0.0", "/c/pkg"),
            record("2.0.0", "/b/pkg"),
            record("2.0.0-beta", "/z/pkg"),
            record("1.9.9", "/y/pkg"),
        ]
        results = {select("pkg", list(p)) for p in permutations(candidates)}
        assert len(results) == 1
        assert results.pop().manifest_path == "/c/pkg"
