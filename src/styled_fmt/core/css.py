"""CSS printer and the adapter the pipeline calls it through.

``render_css`` re-emits CSS-like text one statement per line with nested
blocks indented, in the shape a PostCSS tree printer produces:

* ``selector {`` / children / ``}`` for rules and block at-rules
* ``prop: value;`` for declarations
* ``/* text */`` for standalone comments

Tokenizing is done by tinycss2; statement grouping follows the SCSS-ish
template dialect (declarations and nested rules may share a block).
"""

import logging
import re
from collections.abc import Collection, Iterator, Sequence
from dataclasses import dataclass, field
from typing import Any

import tinycss2

from styled_fmt.core.errors import CssFormatError
from styled_fmt.models import IndentSpec

logger = logging.getLogger(__name__)

_WHITESPACE_RE = re.compile(r"(\"(?:[^\"\\\n]|\\.)*\"|'(?:[^'\\\n]|\\.)*')|\s+")
_CLOSING = frozenset(")]}")


def indent_unit(indent: IndentSpec) -> str:
    if indent == "tab":
        return "\t"
    if isinstance(indent, bool) or not isinstance(indent, int) or indent < 0:
        raise ValueError(f"Indent must be 'tab' or a non-negative integer, got {indent!r}")
    return " " * indent


@dataclass
class _Statement:
    kind: str  # "comment" | "statement" | "block"
    tokens: list[Any] = field(default_factory=list)
    block: list[Any] | None = None


def _is_newline_gap(node: Any) -> bool:
    return node.type == "whitespace" and "\n" in node.value


def _stands_alone(nodes: Sequence[Any], index: int) -> bool:
    if index + 1 >= len(nodes):
        return True
    following = nodes[index + 1]
    if _is_newline_gap(following) or following.type == "comment":
        return True
    return following.type == "literal" and following.value == ";"


def _comment_spelling(node: Any) -> str:
    return f"/* {node.value.strip()} */"


def _flush(pending: list[Any]) -> Iterator[_Statement]:
    if any(token.type not in ("whitespace", "comment") for token in pending):
        yield _Statement("statement", pending)
        return
    for token in pending:
        if token.type == "comment":
            yield _Statement("comment", [token])


def _statements(nodes: Sequence[Any], line_comments: Collection[str]) -> Iterator[_Statement]:
    pending: list[Any] = []
    for index, node in enumerate(nodes):
        if node.type == "whitespace":
            if pending:
                pending.append(node)
        elif node.type == "comment" and _comment_spelling(node) in line_comments:
            # a `//` comment ends the pending statement
            yield from _flush(pending)
            pending = []
            yield _Statement("comment", [node])
        elif node.type == "comment" and not pending and _stands_alone(nodes, index):
            yield _Statement("comment", [node])
        elif node.type == "literal" and node.value == ";":
            if pending:
                yield _Statement("statement", pending)
            pending = []
        elif node.type == "{} block":
            yield _Statement("block", pending, node.content)
            pending = []
        else:
            pending.append(node)
    yield from _flush(pending)


def _collapse(tokens: Sequence[Any]) -> str:
    text = tinycss2.serialize(tokens)
    return _WHITESPACE_RE.sub(lambda match: match.group(1) or " ", text).strip()


def _render_statement(tokens: list[Any]) -> str:
    significant = [token for token in tokens if token.type not in ("whitespace", "comment")]
    if significant and significant[0].type != "at-keyword":
        for index, token in enumerate(tokens):
            if token.type == "literal" and token.value == ":":
                prop = _collapse(tokens[:index])
                if not prop:
                    break
                value = _collapse(tokens[index + 1 :])
                return f"{prop}: {value};" if value else f"{prop}:;"
    return f"{_collapse(tokens)};"


def _render_block(
    nodes: Sequence[Any], unit: str, depth: int, lines: list[str], line_comments: Collection[str]
) -> None:
    pad = unit * depth
    for statement in _statements(nodes, line_comments):
        if statement.kind == "comment":
            lines.append(f"{pad}{_comment_spelling(statement.tokens[0])}")
        elif statement.kind == "block":
            head = _collapse(statement.tokens)
            lines.append(f"{pad}{head} {{" if head else f"{pad}{{")
            _render_block(statement.block or [], unit, depth + 1, lines, line_comments)
            lines.append(f"{pad}}}")
        else:
            lines.append(f"{pad}{_render_statement(statement.tokens)}")


def _check_tokens(nodes: Sequence[Any]) -> None:
    for node in nodes:
        if node.type == "error":
            raise CssFormatError(f"CSS parse error at line {node.source_line}: {node.message}")
        if node.type == "literal" and node.value in _CLOSING:
            raise CssFormatError(f"Unbalanced '{node.value}' at line {node.source_line}")
        if node.type in ("{} block", "() block", "[] block"):
            _check_tokens(node.content)
        elif node.type == "function":
            _check_tokens(node.arguments)


def render_css(text: str, indent: IndentSpec = 2, line_comments: Collection[str] = frozenset()) -> str:
    """Format CSS-like ``text``; top-level statements carry no indentation.

    ``line_comments`` lists comment spellings that stand for `//` comments.
    Each ends the statement before it and gets a line of its own.

    Raises ``CssFormatError`` on text the tokenizer rejects or on unbalanced braces.
    """
    unit = indent_unit(indent)
    if not text.strip():
        return ""

    nodes = tinycss2.parse_component_value_list(text, skip_comments=False)
    _check_tokens(nodes)
    if tinycss2.serialize(nodes).count("}") != text.count("}"):
        raise CssFormatError("Unclosed '{' block")

    lines: list[str] = []
    _render_block(nodes, unit, 0, lines, line_comments)
    return "\n".join(line for line in lines if line.strip())


def format_css(text: str, indent: IndentSpec = 2, line_comments: Collection[str] = frozenset()) -> str:
    """Adapter around ``render_css`` that never raises.

    On failure the input comes back unchanged, so callers can detect the
    fallback by comparing against what they passed in.
    """
    try:
        return render_css(text, indent, line_comments)
    except Exception as exc:
        logger.warning("CSS formatting failed, keeping text as is: %s", exc)
        return text
