"""Unit tests for the document patcher."""

import itertools

import pytest

from styled_fmt.core.errors import OverlappingEditsError
from styled_fmt.core.patch import apply_edits, validate_edits
from styled_fmt.models import Edit


def _edit(start: int, end: int, replacement: str) -> Edit:
    return Edit(start=start, end=end, replacement=replacement)


_EDITS = [_edit(0, 2, "X"), _edit(2, 5, "LONGER"), _edit(5, 10, "")]


@pytest.mark.parametrize("order", list(itertools.permutations(range(3))))
def test_result_does_not_depend_on_edit_order(order: tuple[int, ...]) -> None:
    assert apply_edits("0123456789", [_EDITS[i] for i in order]) == "XLONGER"


def test_no_edits_returns_text() -> None:
    assert apply_edits("abc", []) == "abc"


def test_growing_edit_before_shrinking_edit() -> None:
    text = "a`x`b`yyyyyy`c"
    edits = [_edit(1, 4, "`\n  x\n`"), _edit(5, 13, "`y`")]
    assert apply_edits(text, edits) == "a`\n  x\n`b`y`c"


def test_insertions_at_same_offset_keep_given_order() -> None:
    assert apply_edits("abcdef", [_edit(3, 3, "A"), _edit(3, 3, "B")]) == "abcABdef"


def test_insertion_ahead_of_replacement_at_same_offset() -> None:
    assert apply_edits("abcdef", [_edit(2, 4, "XY"), _edit(2, 2, "_")]) == "ab_XYef"


def test_insertion_at_end_of_replacement() -> None:
    assert apply_edits("abcdef", [_edit(0, 3, "Z"), _edit(3, 3, "-")]) == "Z-def"


def test_edit_at_end_of_text() -> None:
    assert apply_edits("abc", [_edit(3, 3, "!")]) == "abc!"


@pytest.mark.parametrize(
    "edits",
    [
        [_edit(0, 4, "a"), _edit(3, 6, "b")],
        [_edit(0, 6, "a"), _edit(2, 2, "b")],
        [_edit(0, 10, "a"), _edit(3, 3, ""), _edit(5, 7, "b")],
        [_edit(1, 3, "a"), _edit(1, 3, "b")],
    ],
    ids=["partial", "insertion-inside", "contained-after-insertion", "identical"],
)
def test_overlapping_edits_are_rejected(edits: list[Edit]) -> None:
    with pytest.raises(OverlappingEditsError, match="overlap"):
        apply_edits("0123456789", edits)


def test_out_of_bounds_edit_is_rejected() -> None:
    with pytest.raises(OverlappingEditsError, match="exceeds text length"):
        validate_edits("abc", [_edit(2, 4, "")])


def test_overlap_error_is_a_value_error() -> None:
    with pytest.raises(ValueError):
        apply_edits("abcdef", [_edit(0, 3, ""), _edit(2, 4, "")])


def test_adjacent_edits_are_accepted() -> None:
    validate_edits("abcdef", [_edit(0, 3, "x"), _edit(3, 6, "y")])
