import asyncio
import glob
import logging
from collections.abc import Sequence
from pathlib import Path

from styled_fmt.core.languages import detect_language_from_path, is_supported_file
from styled_fmt.core.pipeline import format_source
from styled_fmt.models import FileResult, FormatOptions

logger = logging.getLogger(__name__)

DEFAULT_PATTERNS = ("**/*.ts", "**/*.tsx")
IGNORED_DIRS = frozenset({"node_modules", "dist"})


def _is_ignored(path: Path, root: Path) -> bool:
    try:
        parts = path.relative_to(root).parts
    except ValueError:
        parts = path.parts
    return any(part in IGNORED_DIRS for part in parts)


def _expand(pattern: str, root: Path) -> list[Path]:
    candidate = Path(pattern)
    if not candidate.is_absolute():
        candidate = root / candidate
    if candidate.is_dir():
        return [p for p in candidate.rglob("*") if p.is_file() and is_supported_file(p)]
    if candidate.is_file():
        return [candidate]
    return [Path(p) for p in glob.glob(str(candidate), recursive=True) if Path(p).is_file()]


def resolve_files(patterns: Sequence[str], root: Path | None = None) -> list[Path]:
    """Resolve files, directories and glob patterns into a sorted, de-duplicated path list.

    Anything under ``node_modules`` or ``dist`` is skipped.
    """
    base = (root or Path.cwd()).resolve()
    found: set[Path] = set()
    for pattern in patterns or DEFAULT_PATTERNS:
        for path in _expand(pattern, base):
            resolved = path.resolve()
            if not _is_ignored(resolved, base):
                found.add(resolved)
    return sorted(found)


def process_file(path: Path, options: FormatOptions, fix: bool = False) -> FileResult:
    """Format one file; with ``fix`` write it back when it changed."""
    try:
        language = detect_language_from_path(path)
        original = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError, ValueError) as exc:
        logger.warning("Cannot process %s: %s", path, exc)
        return FileResult(path=path, error=str(exc))

    formatted = format_source(original, options, language=language)
    result = FileResult(path=path, original=original, formatted=formatted)
    if fix and result.changed:
        try:
            path.write_text(formatted, encoding="utf-8")
        except OSError as exc:
            logger.warning("Cannot write %s: %s", path, exc)
            return FileResult(path=path, original=original, formatted=formatted, error=str(exc))
        result.written = True
        logger.info("Rewrote %s", path)
    return result


async def format_paths(paths: Sequence[Path], options: FormatOptions, fix: bool = False) -> list[FileResult]:
    """Run one independent pipeline per file concurrently; results keep ``paths`` order."""
    logger.info("Formatting %d file(s)", len(paths))
    return list(await asyncio.gather(*(asyncio.to_thread(process_file, path, options, fix) for path in paths)))
