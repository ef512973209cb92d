"""Tests for the command line interface."""

import json
import tempfile
from pathlib import Path

import pytest

from cli import main, parse_args


def _write(root: Path, relative: str, content: str = "") -> Path:
    path = root / relative
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(content, encoding="utf-8")
    return path


class TestParseArgs:
    """Tests for argument parsing."""

    def test_defaults(self):
        """Test default option values."""
        parsed = parse_args([])
        assert parsed.directory == "."
        assert parsed.follow_imports is None
        assert parsed.max_depth is None
        assert parsed.output == "output.txt"
        assert parsed.tree is True
        assert parsed.headers is True
        assert parsed.minify == "aggressive"

    def test_minify_flags(self):
        """Test the minify level and opt-out."""
        assert parse_args(["-m", "light"]).minify == "light"
        assert parse_args(["-m"]).minify == "aggressive"
        assert parse_args(["--no-minify"]).minify is None

    def test_multiple_entries(self):
        """Test several entry files."""
        parsed = parse_args(["-f", "a.ts", "b.ts", "--max-depth", "2"])
        assert parsed.follow_imports == ["a.ts", "b.ts"]
        assert parsed.max_depth == 2

    def test_short_ignore_flag(self):
        """Test the -ir spelling."""
        assert parse_args(["-ir", "test"]).ignore_regex == "test"

    def test_negative_depth_rejected(self):
        """Test --max-depth must be non-negative."""
        with pytest.raises(SystemExit):
            parse_args(["--max-depth", "-1"])


class TestFollowMode:
    """Tests for import-following runs."""

    def test_follow_imports_writes_output(self):
        """Test entry and imported files are woven in order."""
        with tempfile.TemporaryDirectory() as tmpdir:
            root = Path(tmpdir)
            entry = _write(root, "main.js", "import { x } from './lib';\nimport 'pkg';\n")
            _write(root, "lib.js", "export const x = 1;\n")
            _write(root, "unused.js", "export const y = 2;\n")
            out = root / "out" / "result.txt"
            out.parent.mkdir()

            code = main(["-f", str(entry), "-o", str(out), "--no-tree", "--no-minify", "-q"])

            assert code == 0
            text = out.read_text(encoding="utf-8")
            assert text.index("File: main.js") < text.index("File: lib.js")
            assert "unused.js" not in text

    def test_max_depth(self):
        """Test --max-depth 0 keeps only the entry."""
        with tempfile.TemporaryDirectory() as tmpdir:
            root = Path(tmpdir)
            entry = _write(root, "main.js", "import { x } from './lib';\n")
            _write(root, "lib.js", "export const x = 1;\n")
            out = root / "result.txt"

            code = main(["-f", str(entry), "--max-depth", "0", "-o", str(out), "--no-tree", "-q"])

            assert code == 0
            assert "lib.js" not in out.read_text(encoding="utf-8")

    def test_progress_printed_per_file(self, capsys):
        """Test each followed file gets a progress line unless quiet."""
        with tempfile.TemporaryDirectory() as tmpdir:
            root = Path(tmpdir)
            entry = _write(root, "main.js", "import { x } from './lib';\n")
            _write(root, "lib.js", "export const x = 1;\n")

            code = main(["-f", str(entry), "-o", str(root / "result.txt"), "--no-tree"])
            err = capsys.readouterr().err

            assert code == 0
            assert "Processing (depth 0): main.js" in err
            assert "Processing (depth 1): lib.js" in err

            main(["-f", str(entry), "-o", str(root / "result.txt"), "--no-tree", "-q"])

            assert "Processing" not in capsys.readouterr().err

    def test_graph_json(self):
        """Test the import graph export."""
        with tempfile.TemporaryDirectory() as tmpdir:
            root = Path(tmpdir)
            entry = _write(root, "main.js", "import { x } from './lib';\nimport React from 'react';\n")
            _write(root, "lib.js", "")
            graph_path = root / "graph.json"

            code = main([
                "-f", str(entry),
                "-o", str(root / "result.txt"),
                "--graph-json", str(graph_path),
                "--no-tree", "-q",
            ])

            assert code == 0
            data = json.loads(graph_path.read_text(encoding="utf-8"))
            assert data["edges"] == [{"source": "main.js", "target": "lib.js"}]
            assert data["external"] == [{"source": "main.js", "reference": "react"}]

    def test_no_valid_entries(self, capsys):
        """Test a run with only missing entries fails."""
        with tempfile.TemporaryDirectory() as tmpdir:
            root = Path(tmpdir)

            code = main(["-f", str(root / "missing.js"), "-o", str(root / "result.txt"), "-q"])

            assert code == 1
            assert "No valid entry files" in capsys.readouterr().err
            assert not (root / "result.txt").exists()

    def test_project_tree_section(self):
        """Test the project tree is appended by default."""
        with tempfile.TemporaryDirectory() as tmpdir:
            root = Path(tmpdir)
            _write(root, "package.json", "{}")
            entry = _write(root, "src/main.js", "console.log(1);\n")
            out = root / "result.txt"

            code = main(["-f", str(entry), "-o", str(out), "-q"])

            assert code == 0
            text = out.read_text(encoding="utf-8")
            assert "Project Structure:" in text
            assert "package.json" in text


class TestDirectoryMode:
    """Tests for directory-scan runs."""

    def test_regex_filter(self):
        """Test only matching files are woven."""
        with tempfile.TemporaryDirectory() as tmpdir:
            root = Path(tmpdir)
            _write(root, "src/app.ts", "const a = 1;\n")
            _write(root, "src/style.css", "body {}\n")
            _write(root, "node_modules/x/index.ts", "ignored\n")
            out = root / "output.txt"

            code = main(["-d", str(root), "-r", r"\.ts$", "-o", str(out), "--no-tree", "-q"])

            assert code == 0
            text = out.read_text(encoding="utf-8")
            assert "File: src/app.ts" in text
            assert "style.css" not in text
            assert "node_modules" not in text

    def test_ignore_regex(self):
        """Test ignored paths are skipped."""
        with tempfile.TemporaryDirectory() as tmpdir:
            root = Path(tmpdir)
            _write(root, "src/app.js", "a\n")
            _write(root, "tests/app.test.js", "b\n")
            out = root / "output.txt"

            code = main(["-d", str(root), "-ir", "^tests", "-o", str(out), "--no-tree", "-q"])

            assert code == 0
            assert "app.test.js" not in out.read_text(encoding="utf-8")

    def test_invalid_regex(self, capsys):
        """Test an invalid pattern is reported."""
        with tempfile.TemporaryDirectory() as tmpdir:
            root = Path(tmpdir)
            _write(root, "a.js", "")

            code = main(["-d", str(root), "-r", "(", "-o", str(root / "o.txt"), "-q"])

            assert code == 1
            assert "Invalid regex" in capsys.readouterr().err

    def test_not_a_directory(self, capsys):
        """Test a missing directory is reported."""
        with tempfile.TemporaryDirectory() as tmpdir:
            code = main(["-d", str(Path(tmpdir) / "nope"), "-q"])

            assert code == 1
            assert "is not a directory" in capsys.readouterr().err

    def test_no_matching_files(self, capsys):
        """Test an empty selection is an error."""
        with tempfile.TemporaryDirectory() as tmpdir:
            root = Path(tmpdir)
            _write(root, "a.js", "")

            code = main(["-d", str(root), "-r", r"\.py$", "-o", str(root / "o.txt"), "-q"])

            assert code == 1
            assert "No files found" in capsys.readouterr().err


class TestConfigOption:
    """Tests for --config."""

    def test_invalid_config(self, capsys):
        """Test a bad config file stops the run."""
        with tempfile.TemporaryDirectory() as tmpdir:
            root = Path(tmpdir)
            config = _write(root, "weaver.yaml", "unknown_key: 1\n")
            entry = _write(root, "main.js", "")

            code = main(["-f", str(entry), "--config", str(config), "-o", str(root / "o.txt"), "-q"])

            assert code == 1
            assert "unknown" in capsys.readouterr().err

    def test_alias_from_config(self):
        """Test a configured alias is used while following imports."""
        with tempfile.TemporaryDirectory() as tmpdir:
            root = Path(tmpdir)
            _write(root, "package.json", "{}")
            config = _write(root, "weaver.yaml", "alias_prefix: '~/'\nalias_target_subdir: lib\n")
            entry = _write(root, "app/main.js", "import store from '~/store';\n")
            _write(root, "lib/store.js", "export default {};\n")
            out = root / "result.txt"

            code = main(["-f", str(entry), "--config", str(config), "-o", str(out), "--no-tree", "-q"])

            assert code == 0
            assert "File: lib/store.js" in out.read_text(encoding="utf-8")
