"""
Unit tests for the walker and the audit runner.

These tests cover:
- Glob expansion, ignore filtering and de-duplication
- Thread count resolution
- Fatal startup errors
- Per-file errors not stopping a run
"""

import pytest
from pathlib import Path
from unittest.mock import patch

from enforcer.core.errors import PathIOError, StartupError
from enforcer.core.processor import FileProcessor
from enforcer.core.runner import RunOptions, resolve_thread_count, run_audit, MAX_AUTO_THREADS
from enforcer.core.walker import collect_paths, endings_to_globs


@pytest.fixture
def project(tmp_path):
    """A small source tree with ignored directories."""
    files = {
        "main.c": "int main(void)\n{\n\treturn 0;\n}\n",
        "util.h": "int util(void);\n",
        "src/lib.c": "int lib(void) { return 1; }  \n",
        ".git/hooks/pre.c": "\t\t\n",
        "build_Debug/gen.c": "\t\n",
        "notes.txt": "not scanned\t\n",
    }
    for name, content in files.items():
        path = tmp_path / name
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(content)
    return tmp_path


class TestCollectPaths:
    """Test collect_paths."""

    def test_ignored_components_are_dropped(self, project):
        paths = collect_paths(project, ["**/*.c"], [".git", "build_*"])

        assert sorted(p.relative_to(project).as_posix() for p in paths) == ["main.c", "src/lib.c"]

    def test_without_ignore(self, project):
        paths = collect_paths(project, ["**/*.c"], [])

        assert len(paths) == 4

    def test_duplicates_are_removed(self, project):
        paths = collect_paths(project, ["**/*.c", "*.c", "**/main.c"], [".git", "build_*"])

        assert len(paths) == 2
        assert len(set(paths)) == len(paths)

    def test_symlink_and_target_are_listed_once(self, project):
        (project / "alias.c").symlink_to(project / "main.c")

        paths = collect_paths(project, ["*.c"], [])

        assert [p.name for p in paths] == ["alias.c"]

    def test_directories_are_skipped(self, project):
        (project / "dir.c").mkdir()

        paths = collect_paths(project, ["*.c"], [])

        assert [p.name for p in paths] == ["main.c"]

    def test_root_components_are_not_filtered(self, tmp_path):
        root = tmp_path / "build_Release"
        root.mkdir()
        (root / "a.c").write_text("a\n")

        assert len(collect_paths(root, ["*.c"], ["build_*"])) == 1

    def test_absolute_pattern_is_a_startup_error(self, project):
        with pytest.raises(StartupError):
            collect_paths(project, [str(project / "*.c")], [])

    def test_endings_to_globs(self):
        assert endings_to_globs(["c", ".h", ""]) == ["**/*.c", "**/*.h"]


class TestResolveThreadCount:
    """Test thread count resolution."""

    def test_explicit(self):
        assert resolve_thread_count(3) == 3

    def test_auto_is_capped(self):
        with patch('enforcer.core.runner.os.cpu_count', return_value=64):
            assert resolve_thread_count(0) == MAX_AUTO_THREADS

    def test_auto_uses_cpu_count(self):
        with patch('enforcer.core.runner.os.cpu_count', return_value=4):
            assert resolve_thread_count(None) == 4

    def test_unknown_cpu_count(self):
        with patch('enforcer.core.runner.os.cpu_count', return_value=None):
            assert resolve_thread_count(0) == 1

    def test_negative(self):
        with pytest.raises(ValueError):
            resolve_thread_count(-1)


class TestRunAudit:
    """Test run_audit."""

    def options(self, root, **kwargs):
        defaults = dict(root=root, patterns=("**/*.c", "**/*.h"), ignore=(".git", "build_*"), threads=2)
        defaults.update(kwargs)
        return RunOptions(**defaults)

    def test_counts(self, project):
        report = run_audit(self.options(project))

        assert report.files_checked == 3
        assert report.files_with_tabs == 1
        assert report.files_with_illegal_characters == 0
        assert report.files_cleaned == 0
        assert report.errors == []

    def test_clean(self, project):
        report = run_audit(self.options(project, clean=True))

        assert report.files_cleaned == 1
        assert (project / "src/lib.c").read_text() == "int lib(void) { return 1; }\n"
        assert (project / ".git/hooks/pre.c").read_text() == "\t\t\n"

    def test_on_result_called_for_every_file(self, project):
        seen = []

        run_audit(self.options(project), on_result=lambda path, result: seen.append(path))

        assert len(seen) == 3

    def test_missing_root(self, tmp_path):
        with pytest.raises(StartupError):
            run_audit(self.options(tmp_path / "missing"))

    def test_root_is_a_file(self, project):
        with pytest.raises(StartupError):
            run_audit(self.options(project / "main.c"))

    def test_no_patterns(self, project):
        with pytest.raises(StartupError):
            run_audit(self.options(project, patterns=()))

    def test_nothing_matched(self, project):
        with pytest.raises(StartupError) as exc_info:
            run_audit(self.options(project, patterns=("**/*.rs",)))

        assert "**/*.rs" in str(exc_info.value)

    def test_read_error_does_not_stop_the_run(self, project):
        original = FileProcessor._read_file

        def flaky_read(processor, path):
            if path.name == "util.h":
                raise PathIOError(path, "Permission denied")
            return original(processor, path)

        with patch.object(FileProcessor, '_read_file', flaky_read):
            report = run_audit(self.options(project))

        assert report.files_checked == 2
        assert report.error_count == 1
        assert report.errors[0][0].name == "util.h"
        assert "Permission denied" in report.errors[0][1]
