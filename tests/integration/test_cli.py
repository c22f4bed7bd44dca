"""Integration tests running the treegenius command in a subprocess."""

import json
import subprocess
import sys
from pathlib import Path

import pytest


@pytest.fixture
def temp_project(tmp_path):
    """Create a temporary project directory with test files."""
    base_dir = tmp_path / "demo"
    (base_dir / "src" / "utils").mkdir(parents=True)
    (base_dir / "docs").mkdir()
    (base_dir / "node_modules" / "react").mkdir(parents=True)
    (base_dir / "build").mkdir()

    (base_dir / "src" / "main.py").write_text("def main():\n    print('Hello')\n")
    (base_dir / "src" / "utils" / "helpers.py").write_text("def helper():\n    pass\n")
    (base_dir / "docs" / "README.md").write_text("# Test Project\n")
    (base_dir / "package.json").write_text('{"name": "test"}\n')
    (base_dir / "build" / "output.min.js").write_text("console.log('test')\n")
    (base_dir / "node_modules" / "react" / "index.js").write_text("export default {}\n")
    return base_dir


def run_treegenius(*args: str, settings: Path) -> subprocess.CompletedProcess:
    return subprocess.run(
        [sys.executable, "-m", "treegenius.cli.main", "--settings", str(settings), *args],
        capture_output=True,
        text=True,
        encoding="utf-8",
    )


def test_default_tree(temp_project, tmp_path):
    result = run_treegenius(str(temp_project), settings=tmp_path / "config.json")

    assert result.returncode == 0, result.stderr
    assert result.stdout == (
        "demo\n"
        "├── docs\n"
        "│   └── README.md\n"
        "├── src\n"
        "│   ├── utils\n"
        "│   │   └── helpers.py\n"
        "│   └── main.py\n"
        "└── package.json\n"
    )
    assert "Directories: 3\nFiles: 4\n" in result.stderr


def test_structured_output_file(temp_project, tmp_path):
    output = tmp_path / "tree.json"
    result = run_treegenius(
        "-s", "structured", "--no-default-ignores", "-o", str(output), str(temp_project), settings=tmp_path / "c.json"
    )

    assert result.returncode == 0, result.stderr
    assert result.stdout == ""
    children = json.loads(output.read_text(encoding="utf-8"))["demo"]["children"]
    assert children["node_modules"]["children"]["react"]["children"]["index.js"]["type"] == "file"
    assert "output.min.js" in children["build"]["children"]


def test_missing_directory(tmp_path):
    result = run_treegenius(str(tmp_path / "nope"), settings=tmp_path / "config.json")
    assert result.returncode == 1
    assert "Error: Root path does not exist" in result.stderr


def test_invalid_style_is_usage_error(temp_project, tmp_path):
    result = run_treegenius("-s", "fancy", str(temp_project), settings=tmp_path / "config.json")
    assert result.returncode == 2
    assert "invalid choice" in result.stderr
