"""Tests for indexing files and directory trees."""

import json
import logging
import os
import tempfile
from pathlib import Path

import pytest

from graph.model import ObjectGraph
from scanner.builder import index_file, output_dir_for
from scanner.config import IndexerConfig
from scanner.discovery import claim_output_dirs, index_directory, index_path
from scanner.errors import ConfigurationError, ProviderError


ASSET = {
    "Imports": [{"ObjectName": "Actor", "OuterIndex": {"index": 0}}],
    "Exports": [
        {"ObjectName": "Hero", "ClassIndex": {"index": -1}},
        {"ObjectName": "Mesh", "OuterIndex": {"index": 1}},
    ],
}


def write_asset(path: Path, data=ASSET) -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(data), encoding="utf-8")
    return path


class RecordingProvider:
    """Provider that serves a fixed graph and remembers its calls."""

    def __init__(self):
        self.calls = []

    def __call__(self, path):
        self.calls.append(path)
        graph = ObjectGraph()
        graph.add_export(path.stem, "Export {\n    Self: {\n        index: 1,\n    },\n}")
        return graph


class TestIndexFile:
    """Tests for indexing a single source file."""

    def test_writes_site_next_to_file(self):
        """Test that foo.uasset produces foo/."""
        with tempfile.TemporaryDirectory() as tmpdir:
            asset = write_asset(Path(tmpdir) / "foo.uasset")

            report = index_file(asset)

            assert report.output_dir == Path(tmpdir) / "foo"
            assert (Path(tmpdir) / "foo" / "exports" / "2" / "index.html").exists()
            page = (Path(tmpdir) / "foo" / "exports" / "1" / "index.html").read_text(encoding="utf-8")
            assert '<a href="../../imports/1">-1 (Actor)</a>' in page

    def test_umap_supported(self):
        """Test that map packages are indexed too."""
        with tempfile.TemporaryDirectory() as tmpdir:
            asset = write_asset(Path(tmpdir) / "Level.umap")

            assert index_file(asset).ok

    def test_unsupported_extension(self):
        """Test that other extensions are configuration errors."""
        with tempfile.TemporaryDirectory() as tmpdir:
            path = write_asset(Path(tmpdir) / "foo.json")

            with pytest.raises(ConfigurationError, match="Valid extensions are: 'uasset', 'umap'"):
                index_file(path)

    def test_extension_is_case_sensitive(self):
        """Test that '.UASSET' is not indexed."""
        with tempfile.TemporaryDirectory() as tmpdir:
            path = write_asset(Path(tmpdir) / "foo.UASSET")

            with pytest.raises(ConfigurationError):
                index_file(path)

    def test_no_extension(self):
        """Test that extensionless files are rejected."""
        with tempfile.TemporaryDirectory() as tmpdir:
            path = write_asset(Path(tmpdir) / "foo")

            with pytest.raises(ConfigurationError, match="no extension"):
                index_file(path)

    def test_missing_file(self):
        """Test that a missing file is a configuration error."""
        with tempfile.TemporaryDirectory() as tmpdir:
            with pytest.raises(ConfigurationError, match="does not exist"):
                index_file(Path(tmpdir) / "gone.uasset")

    def test_provider_failure_leaves_nothing(self):
        """Test that a rejected file creates no output directory."""
        with tempfile.TemporaryDirectory() as tmpdir:
            path = Path(tmpdir) / "bad.uasset"
            path.write_text("{ not json: [", encoding="utf-8")

            with pytest.raises(ProviderError):
                index_file(path)
            assert not (Path(tmpdir) / "bad").exists()

    def test_custom_provider(self):
        """Test that a caller-supplied provider is used."""
        with tempfile.TemporaryDirectory() as tmpdir:
            path = Path(tmpdir) / "foo.uasset"
            path.write_bytes(b"\xc1\x83\x2a\x9e")
            provider = RecordingProvider()

            index_file(path, provider=provider)

            assert provider.calls == [path]
            assert (Path(tmpdir) / "foo" / "exports" / "1" / "index.html").exists()

    def test_output_dir_for(self):
        """Test that only the last extension is stripped."""
        assert output_dir_for(Path("a/b.c.uasset")) == Path("a/b.c")


class TestClaimOutputDirs:
    """Tests for the claim set of a directory's first pass."""

    def test_claims_recognized_stems(self):
        """Test that exactly the recognized files claim their stem."""
        root = Path("/content")
        paths = [root / "A.uasset", root / "B.umap", root / "C.uexp", root / "README", root / "d.txt"]

        assert claim_output_dirs(paths) == {root / "A", root / "B"}

    def test_custom_extensions(self):
        """Test that the claim follows the configured extensions."""
        config = IndexerConfig(extensions=frozenset({".pak"}))

        assert claim_output_dirs([Path("x.pak"), Path("y.uasset")], config) == {Path("x")}


class TestIndexDirectory:
    """Tests for walking directory trees."""

    def test_recurses_and_skips_generated_sites(self):
        """Test that generated sites are never indexed as sources."""
        with tempfile.TemporaryDirectory() as tmpdir:
            root = Path(tmpdir)
            write_asset(root / "Hero.uasset")
            write_asset(root / "Maps" / "Level.umap")
            # A leftover site from an earlier run holding an asset-like file
            write_asset(root / "Hero" / "trap.uasset")
            provider = RecordingProvider()

            summary = index_directory(root, provider=provider)

            assert sorted(provider.calls) == [root / "Hero.uasset", root / "Maps" / "Level.umap"]
            assert summary.ok
            assert not (root / "Hero" / "trap").exists()
            assert (root / "Maps" / "Level" / "index.html").exists()

    def test_second_run_does_not_reindex_output(self):
        """Test that re-running over the same tree indexes the same files."""
        with tempfile.TemporaryDirectory() as tmpdir:
            root = Path(tmpdir)
            write_asset(root / "a" / "Hero.uasset")

            first = index_directory(root)
            second = index_directory(root)

            assert first.indexed == second.indexed == [root / "a" / "Hero.uasset"]

    def test_skips_files(self, caplog):
        """Test silent and logged skips."""
        with tempfile.TemporaryDirectory() as tmpdir:
            root = Path(tmpdir)
            (root / "notes.txt").write_text("x", encoding="utf-8")
            (root / "Makefile").write_text("x", encoding="utf-8")
            write_asset(root / "Hero.uasset")

            with caplog.at_level(logging.INFO):
                summary = index_directory(root)

            assert summary.indexed == [root / "Hero.uasset"]
            assert summary.skipped == {root / "Makefile": "no extension"}
            assert "Makefile: file has no extension" in caplog.text
            assert "Indexing directory" in caplog.text

    def test_failures_do_not_stop_walk(self):
        """Test that a broken file is reported and its siblings indexed."""
        with tempfile.TemporaryDirectory() as tmpdir:
            root = Path(tmpdir)
            (root / "Bad.uasset").write_text("[1, 2]", encoding="utf-8")
            write_asset(root / "Good.uasset")
            write_asset(root / "sub" / "Other.uasset")

            summary = index_directory(root)

            assert list(summary.failed) == [root / "Bad.uasset"]
            assert summary.indexed == [root / "Good.uasset", root / "sub" / "Other.uasset"]
            assert not summary.ok

    def test_failed_file_still_claims_its_directory(self):
        """Test that a same-named directory of a broken file is not walked."""
        with tempfile.TemporaryDirectory() as tmpdir:
            root = Path(tmpdir)
            (root / "Bad.uasset").write_text("[1, 2]", encoding="utf-8")
            write_asset(root / "Bad" / "Inner.uasset")

            summary = index_directory(root)

            assert list(summary.failed) == [root / "Bad.uasset"]
            assert summary.indexed == []
            assert not (root / "Bad" / "Inner").exists()

    def test_incomplete_site_reported(self):
        """Test that a site with missing pages is flagged."""
        with tempfile.TemporaryDirectory() as tmpdir:
            root = Path(tmpdir)
            write_asset(root / "Hero.uasset", {"Exports": [{"ObjectName": "Hero", "X": {"index": 5}}]})

            summary = index_directory(root)

            assert summary.indexed == [root / "Hero.uasset"]
            assert summary.incomplete == {root / "Hero.uasset": 1}

    def test_symlink_loop_indexed_once(self):
        """Test that a symlink back to the root is not followed."""
        with tempfile.TemporaryDirectory() as tmpdir:
            root = Path(tmpdir)
            write_asset(root / "Hero.uasset")
            try:
                os.symlink(".", root / "loop", target_is_directory=True)
            except (OSError, NotImplementedError):
                pytest.skip("symlinks are not available")

            summary = index_directory(root)

            assert summary.indexed == [root / "Hero.uasset"]
            assert summary.ok


class TestIndexPath:
    """Tests for dispatching files and directories."""

    def test_file_and_directory(self):
        """Test both kinds of path share one summary."""
        with tempfile.TemporaryDirectory() as tmpdir:
            root = Path(tmpdir)
            single = write_asset(root / "single" / "One.uasset")
            write_asset(root / "tree" / "Two.uasset")

            summary = index_path(single)
            index_path(root / "tree", summary=summary)

            assert summary.indexed == [single, root / "tree" / "Two.uasset"]

    def test_missing_path(self):
        """Test that a nonexistent path is recorded as failed."""
        with tempfile.TemporaryDirectory() as tmpdir:
            missing = Path(tmpdir) / "nothing"

            summary = index_path(missing)

            assert missing in summary.failed
