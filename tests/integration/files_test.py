"""Integration tests for file discovery and per-file processing."""

from pathlib import Path

import pytest

from styled_fmt.core.files import format_paths, process_file, resolve_files
from styled_fmt.models import FormatOptions

from tests.integration.conftest import FORMATTED_TSX, UNFORMATTED_TSX


def _names(paths: list[Path], root: Path) -> list[str]:
    return [path.relative_to(root.resolve()).as_posix() for path in paths]


class TestResolveFiles:
    def test_default_patterns_skip_ignored_dirs(self, project: Path) -> None:
        assert _names(resolve_files([], root=project), project) == ["src/Button.tsx", "src/base.ts"]

    def test_directory_is_expanded(self, project: Path) -> None:
        assert _names(resolve_files(["src"], root=project), project) == ["src/Button.tsx", "src/base.ts"]

    def test_glob_pattern(self, project: Path) -> None:
        assert _names(resolve_files(["src/*.tsx"], root=project), project) == ["src/Button.tsx"]

    def test_duplicates_are_removed(self, project: Path) -> None:
        found = resolve_files(["src", "src/Button.tsx", "**/*.tsx"], root=project)
        assert _names(found, project) == ["src/Button.tsx", "src/base.ts"]

    def test_explicit_file_in_ignored_dir_is_skipped(self, project: Path) -> None:
        assert resolve_files(["dist/index.ts"], root=project) == []

    def test_no_match(self, project: Path) -> None:
        assert resolve_files(["missing/**/*.ts"], root=project) == []

    def test_defaults_to_cwd(self, project: Path) -> None:
        assert _names(resolve_files(["src"]), project) == ["src/Button.tsx", "src/base.ts"]


class TestProcessFile:
    def test_check_mode_does_not_write(self, project: Path) -> None:
        path = project / "src" / "Button.tsx"
        result = process_file(path, FormatOptions())
        assert result.changed
        assert not result.written
        assert result.formatted == FORMATTED_TSX
        assert path.read_text(encoding="utf-8") == UNFORMATTED_TSX

    def test_fix_mode_writes(self, project: Path) -> None:
        path = project / "src" / "Button.tsx"
        result = process_file(path, FormatOptions(), fix=True)
        assert result.written
        assert path.read_text(encoding="utf-8") == FORMATTED_TSX

    def test_clean_file_is_not_written(self, project: Path) -> None:
        path = project / "src" / "base.ts"
        before = path.stat().st_mtime_ns
        result = process_file(path, FormatOptions(), fix=True)
        assert not result.changed
        assert not result.written
        assert path.stat().st_mtime_ns == before

    def test_unsupported_extension(self, project: Path) -> None:
        result = process_file(project / "style.css", FormatOptions())
        assert result.error is not None
        assert "Unsupported file extension" in result.error
        assert not result.changed

    def test_missing_file(self, project: Path) -> None:
        result = process_file(project / "src" / "Gone.tsx", FormatOptions())
        assert result.error is not None

    def test_undecodable_file(self, project: Path) -> None:
        path = project / "src" / "binary.ts"
        path.write_bytes(b"const a = '\xff\xfe';\n")
        result = process_file(path, FormatOptions(), fix=True)
        assert result.error is not None
        assert path.read_bytes() == b"const a = '\xff\xfe';\n"

    def test_language_follows_extension(self, project: Path) -> None:
        path = project / "src" / "typed.ts"
        path.write_text("const A = styled.div<Props>`color:red;`;\n", encoding="utf-8")
        result = process_file(path, FormatOptions())
        assert result.formatted == "const A = styled.div<Props>`\n  color: red;\n`;\n"


@pytest.mark.asyncio
async def test_format_paths_keeps_order(project: Path) -> None:
    paths = [project / "src" / "base.ts", project / "src" / "Button.tsx", project / "src" / "nope.tsx"]
    results = await format_paths(paths, FormatOptions(indent=4))
    assert [result.path for result in results] == paths
    assert not results[0].changed
    assert results[1].changed
    assert "    color: red;" in results[1].formatted
    assert results[2].error is not None


@pytest.mark.asyncio
async def test_format_paths_fix(project: Path) -> None:
    path = project / "src" / "Button.tsx"
    results = await format_paths([path], FormatOptions(), fix=True)
    assert results[0].written
    assert path.read_text(encoding="utf-8") == FORMATTED_TSX
