"""Tests for the external tool layer: runner, test discovery, lint parsing."""
from __future__ import annotations

import json
import sys
from pathlib import Path

import pytest

from agent_hooks.core.errors import ToolOutputError, ToolTimeout, ToolUnavailable
from agent_hooks.core.types import ToolResult
from agent_hooks.tools import (
    ToolRunner,
    candidate_test_paths,
    find_test_file,
    has_test_suite,
    is_test_module,
    parse_pyright_report,
    parse_ruff_report,
)

# ===================================================================
# Test: ToolRunner
# ===================================================================


class TestToolRunner:
    def test_which_missing_tool(self) -> None:
        runner = ToolRunner()
        with pytest.raises(ToolUnavailable) as exc_info:
            runner.which("agent-hooks-definitely-missing-tool")
        assert exc_info.value.code == "HK-E300"
        assert not runner.is_available("agent-hooks-definitely-missing-tool")

    def test_run_captures_output(self, tmp_path: Path) -> None:
        runner = ToolRunner(cwd=tmp_path)
        result = runner.run_sync(
            [sys.executable, "-c", "import os, sys; print(os.getcwd()); "
             "print('oops', file=sys.stderr); sys.exit(3)"],
            timeout=30,
        )
        assert result.exit_code == 3
        assert Path(result.stdout.strip()).resolve() == tmp_path.resolve()
        assert result.stderr.strip() == "oops"
        assert result.tool == sys.executable

    def test_run_missing_tool(self, tmp_path: Path) -> None:
        runner = ToolRunner(cwd=tmp_path)
        with pytest.raises(ToolUnavailable):
            runner.run_sync(["agent-hooks-definitely-missing-tool"], timeout=5)

    def test_run_timeout(self, tmp_path: Path) -> None:
        runner = ToolRunner(cwd=tmp_path)
        with pytest.raises(ToolTimeout) as exc_info:
            runner.run_sync([sys.executable, "-c", "import time; time.sleep(30)"], timeout=0.5)
        assert exc_info.value.details["timeout_s"] == 0.5

    def test_run_requires_argv(self) -> None:
        with pytest.raises(ValueError):
            ToolRunner().run_sync([], timeout=1)

    def test_result_output_joins_streams(self) -> None:
        result = ToolResult(tool="t", exit_code=1, stdout="out\n", stderr="err\n")
        assert result.output == "out\nerr"
        assert ToolResult(tool="t", exit_code=0, stderr="only").output == "only"


# ===================================================================
# Test: Test discovery
# ===================================================================


class TestDiscovery:
    @pytest.mark.parametrize(
        ("name", "expected"),
        [("test_mod.py", True), ("mod_test.py", True), ("mod.py", False),
         ("testing.py", False), ("test_mod.txt", False)],
    )
    def test_is_test_module(self, name: str, expected: bool) -> None:
        assert is_test_module(Path(name)) is expected

    def test_test_module_maps_to_itself(self, project: Path) -> None:
        path = project / "tests" / "test_mod.py"
        assert find_test_file(path, project) == path

    def test_finds_tests_dir_module(self, project: Path) -> None:
        found = find_test_file(project / "src" / "pkg" / "mod.py", project)
        assert found == Path("tests/test_mod.py")

    def test_relative_source_path(self, project: Path) -> None:
        assert find_test_file(Path("src/pkg/mod.py"), project) == Path("tests/test_mod.py")

    def test_priority_order(self, tmp_path: Path) -> None:
        (tmp_path / "test").mkdir()
        (tmp_path / "test" / "test_util.py").write_text("")
        (tmp_path / "test_util.py").write_text("")
        assert find_test_file(tmp_path / "util.py", tmp_path) == Path("test/test_util.py")

    def test_nested_tests_dir(self, tmp_path: Path) -> None:
        (tmp_path / "tests" / "util").mkdir(parents=True)
        (tmp_path / "tests" / "util" / "test_util.py").write_text("")
        assert find_test_file(tmp_path / "util.py", tmp_path) == Path("tests/util/test_util.py")

    def test_mirrored_path(self, tmp_path: Path) -> None:
        (tmp_path / "tests" / "pkg" / "sub").mkdir(parents=True)
        (tmp_path / "tests" / "pkg" / "sub" / "test_mod.py").write_text("")
        source = tmp_path / "src" / "pkg" / "sub" / "mod.py"
        assert candidate_test_paths(source, tmp_path)[-1] == Path("tests/pkg/sub/test_mod.py")
        assert find_test_file(source, tmp_path) == Path("tests/pkg/sub/test_mod.py")

    def test_no_test_file(self, tmp_path: Path) -> None:
        assert find_test_file(tmp_path / "lonely.py", tmp_path) is None

    def test_has_test_suite(self, tmp_path: Path) -> None:
        assert not has_test_suite(tmp_path)
        (tmp_path / "test").mkdir()
        assert has_test_suite(tmp_path)


# ===================================================================
# Test: Lint report parsing
# ===================================================================

RUFF_REPORT = json.dumps([
    {
        "code": "F401",
        "message": "`os` imported but unused",
        "filename": "/proj/app.py",
        "location": {"row": 1, "column": 8},
    },
    {
        "code": "E711",
        "message": "Comparison to `None` should be `cond is None`",
        "filename": "/proj/app.py",
        "location": {"row": 4, "column": 9},
    },
])

PYRIGHT_REPORT = json.dumps({
    "version": "1.1.380",
    "generalDiagnostics": [
        {
            "file": "/proj/app.py",
            "severity": "error",
            "message": "\"foo\" is not defined",
            "range": {"start": {"line": 2, "character": 4}, "end": {"line": 2, "character": 7}},
            "rule": "reportUndefinedVariable",
        },
        {
            "file": "/proj/app.py",
            "severity": "warning",
            "message": "Import is unused",
            "range": {"start": {"line": 0, "character": 0}, "end": {"line": 0, "character": 5}},
        },
    ],
    "summary": {"filesAnalyzed": 1, "errorCount": 1, "warningCount": 1},
})


class TestLintParsing:
    def test_ruff_report(self) -> None:
        report = parse_ruff_report(RUFF_REPORT)
        assert report.tool == "ruff"
        assert report.error_count == 2
        assert report.diagnostics[0] == "/proj/app.py:1:8: F401 `os` imported but unused"

    def test_ruff_clean(self) -> None:
        assert not parse_ruff_report("[]").has_errors
        assert not parse_ruff_report("").has_errors

    def test_ruff_garbage(self) -> None:
        with pytest.raises(ToolOutputError):
            parse_ruff_report("error: unknown option")

    def test_ruff_wrong_shape(self) -> None:
        with pytest.raises(ToolOutputError):
            parse_ruff_report("{}")

    @pytest.mark.parametrize("stdout", ['["F401"]', "[1]", "[null]"])
    def test_ruff_non_object_entry(self, stdout: str) -> None:
        with pytest.raises(ToolOutputError):
            parse_ruff_report(stdout)

    def test_pyright_report(self) -> None:
        report = parse_pyright_report(PYRIGHT_REPORT)
        assert report.tool == "pyright"
        assert report.error_count == 1
        assert report.diagnostics == [
            '/proj/app.py:3:5: "foo" is not defined (reportUndefinedVariable)'
        ]

    def test_pyright_clean(self) -> None:
        clean = json.dumps({"generalDiagnostics": [], "summary": {"errorCount": 0}})
        assert not parse_pyright_report(clean).has_errors

    def test_pyright_non_object_diagnostic(self) -> None:
        report = json.dumps({"generalDiagnostics": ["oops"], "summary": {"errorCount": 1}})
        with pytest.raises(ToolOutputError):
            parse_pyright_report(report)

    def test_pyright_missing_summary(self) -> None:
        with pytest.raises(ToolOutputError) as exc_info:
            parse_pyright_report("[]")
        assert exc_info.value.code == "HK-E302"
