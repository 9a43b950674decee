"""Shared fixtures and helpers for tests."""

from collections.abc import Iterator
from pathlib import Path

import pytest
from tree_sitter import Node

from styled_fmt.core.ast import SourceDocument, collect_templates, parse_document
from styled_fmt.models import DEFAULT_TAG_NAMES, TemplateNode

_REPO_ROOT = Path(__file__).parent.parent


# ---------------------------------------------------------------------------
# Auto-marker: tag tests as "unit" or "integration" based on directory
# ---------------------------------------------------------------------------


def pytest_collection_modifyitems(items: list[pytest.Item]) -> None:
    for item in items:
        test_path = Path(str(item.fspath))
        rel = test_path.relative_to(_REPO_ROOT / "tests")
        parts = rel.parts
        if parts and parts[0] == "integration":
            item.add_marker(pytest.mark.integration)
        else:
            item.add_marker(pytest.mark.unit)


# ---------------------------------------------------------------------------
# Shared helpers
# ---------------------------------------------------------------------------


def walk(node: Node) -> Iterator[Node]:
    yield node
    for child in node.children:
        yield from walk(child)


def first_tag(code: str, language: str = "tsx") -> Node:
    """Return the tag expression of the first tagged template in ``code``."""
    document = parse_document(code, language)
    for node in walk(document.root_node):
        arguments = node.child_by_field_name("arguments") if node.type == "call_expression" else None
        if arguments is not None and arguments.type == "template_string":
            tag = node.child_by_field_name("function")
            assert tag is not None
            return tag
    raise AssertionError(f"No tagged template in {code!r}")


def first_template(code: str, language: str = "tsx") -> tuple[TemplateNode, SourceDocument]:
    document = parse_document(code, language)
    templates = list(collect_templates(document, DEFAULT_TAG_NAMES))
    assert templates, f"No styling template in {code!r}"
    return templates[0], document
