"""Apply a set of non-overlapping interval replacements to an immutable text."""

from collections.abc import Iterable

from styled_fmt.core.errors import OverlappingEditsError
from styled_fmt.models import Edit


def validate_edits(text: str, edits: list[Edit]) -> None:
    """Raise ``OverlappingEditsError`` if any edit is out of bounds or overlaps another."""
    for edit in edits:
        if edit.end > len(text):
            raise OverlappingEditsError(f"Edit [{edit.start}, {edit.end}) exceeds text length ({len(text)})")
    reach: Edit | None = None  # earlier edit reaching furthest right
    for edit in sorted(edits, key=lambda e: (e.start, e.end)):
        if reach is not None and reach.overlaps(edit):
            raise OverlappingEditsError(f"Edits [{reach.start}, {reach.end}) and [{edit.start}, {edit.end}) overlap")
        if reach is None or edit.end > reach.end:
            reach = edit


def apply_edits(text: str, edits: Iterable[Edit]) -> str:
    """Return ``text`` with every edit applied.

    Edits are folded right to left by start offset so that offsets still to be
    applied are never shifted by the ones already applied. Insertions sharing an
    offset come out in the order given, ahead of a replacement starting there.
    """
    pending = list(edits)
    validate_edits(text, pending)
    result = text
    ordered = sorted(enumerate(pending), key=lambda item: (item[1].start, item[1].end, item[0]), reverse=True)
    for _, edit in ordered:
        result = result[: edit.start] + edit.replacement + result[edit.end :]
    return result
