import logging
from collections.abc import Collection, Iterator
from typing import cast

from tree_sitter import Node, Tree
from tree_sitter_language_pack import SupportedLanguage, get_parser

from styled_fmt.core.errors import SourceParseError
from styled_fmt.core.languages import normalize_language
from styled_fmt.core.tags import classify_tag
from styled_fmt.models import Span, TemplateNode

logger = logging.getLogger(__name__)


class SourceDocument:
    """Immutable source text plus its syntax tree.

    tree-sitter reports UTF-8 byte offsets; everything handed out of this class
    is a ``str`` index into ``text``.
    """

    def __init__(self, text: str, language: str, tree: Tree) -> None:
        self.text = text
        self.language = language
        self.tree = tree
        self._text_bytes = text.encode("utf-8")
        self._ascii = len(self._text_bytes) == len(text)

    @property
    def root_node(self) -> Node:
        return self.tree.root_node

    def char_offset(self, byte_offset: int) -> int:
        if self._ascii:
            return byte_offset
        return len(self._text_bytes[:byte_offset].decode("utf-8", errors="ignore"))

    def span(self, start_byte: int, end_byte: int) -> Span:
        return Span(start=self.char_offset(start_byte), end=self.char_offset(end_byte))


def _first_error(node: Node) -> Node | None:
    stack = [node]
    while stack:
        current = stack.pop()
        if current.type == "ERROR" or current.is_missing:
            return current
        if current.has_error:
            stack.extend(reversed(current.children))
    return None


def parse_document(text: str, language: str) -> SourceDocument:
    """Parse ``text`` with the grammar for ``language``.

    Raises ``SourceParseError`` when the tree contains any error or missing node.
    """
    resolved = normalize_language(language)
    parser = get_parser(cast(SupportedLanguage, resolved))
    tree = parser.parse(text.encode("utf-8"))
    if tree.root_node.has_error:
        bad = _first_error(tree.root_node) or tree.root_node
        row, column = bad.start_point
        raise SourceParseError(f"Syntax error in {resolved} source at line {row + 1}, column {column + 1}")
    return SourceDocument(text, resolved, tree)


def _expression_span(document: SourceDocument, substitution: Node) -> Span | None:
    parts = [child for child in substitution.named_children if child.type != "comment"]
    if not parts:
        return None
    return document.span(parts[0].start_byte, parts[-1].end_byte)


def _template_node(document: SourceDocument, template: Node, tag: Node, names: Collection[str]) -> TemplateNode | None:
    shape = classify_tag(tag, names)
    if shape is None:
        return None

    quasis: list[Span] = []
    expressions: list[Span | None] = []
    cursor = template.start_byte + 1
    for child in template.children:
        if child.type != "template_substitution":
            continue
        quasis.append(document.span(cursor, child.start_byte))
        expressions.append(_expression_span(document, child))
        cursor = child.end_byte
    quasis.append(document.span(cursor, template.end_byte - 1))

    span = document.span(template.start_byte, template.end_byte)
    return TemplateNode(
        tag_shape=shape,
        start=span.start,
        end=span.end,
        quasis=quasis,
        expressions=expressions,
    )


def collect_templates(document: SourceDocument, names: Collection[str]) -> Iterator[TemplateNode]:
    """Yield every styling template in document order.

    The tree is walked exhaustively, but a recognized template's own literal is
    not descended into: templates nested in its expressions stay part of that
    expression's source text.
    """
    stack = [document.root_node]
    while stack:
        node = stack.pop()
        skip: Node | None = None
        if node.type == "call_expression":
            arguments = node.child_by_field_name("arguments")
            tag = node.child_by_field_name("function")
            if arguments is not None and tag is not None and arguments.type == "template_string":
                template = _template_node(document, arguments, tag, names)
                if template is not None:
                    logger.debug("Found %s template at offset %d", template.tag_shape.value, template.start)
                    skip = arguments
                    yield template
        stack.extend(reversed([child for child in node.children if child != skip]))
