"""Turn a styling template into plain CSS-like text the CSS printer can digest.

Interpolated expressions and comments are swapped for sentinel tokens that
the printer treats as ordinary identifiers or comments. The sentinel maps in
``SanitizedTemplate`` are what ``styled_fmt.core.restore`` uses to undo this.
"""

import itertools
import re
from collections.abc import Iterator

from styled_fmt.core.errors import TemplateSanitizeError
from styled_fmt.models import SanitizedTemplate, TemplateNode

EXPRESSION_MARKER = "__EXPR_"
COMMENT_MARKER = "__COMMENT_"

# Strings and url() bodies are matched first (group 1) and kept as they are.
# A `//` right after `:` is a URL scheme in an unquoted value, not a comment.
_COMMENT_RE = re.compile(
    r"(\"(?:[^\"\\\n]|\\.)*\"|'(?:[^'\\\n]|\\.)*'|url\([^)]*\))|/\*.*?\*/|(?<!:)//[^\n]*",
    re.DOTALL | re.IGNORECASE,
)
_VALUE_CONTEXT_RE = re.compile(r"[A-Za-z:;]")


def expression_token(index: int) -> str:
    return f"{EXPRESSION_MARKER}{index}__"


def value_spelling(token: str) -> str:
    return f"${token}"


def envelope_spelling(token: str) -> str:
    return f"/* {token} */"


def comment_spelling(index: int) -> str:
    return f"/* {COMMENT_MARKER}{index}__ */"


def _choose_spelling(token: str, preceding: str, following: str) -> str:
    if _VALUE_CONTEXT_RE.match(following[:1]) or preceding.rstrip().endswith(":"):
        return value_spelling(token)
    return envelope_spelling(token)


def _replace_comments(text: str, comments: dict[str, str], counter: Iterator[int]) -> str:
    def _swap(match: re.Match[str]) -> str:
        if match.group(1):
            return match.group(0)
        spelling = comment_spelling(next(counter))
        comments[spelling] = match.group(0)
        return spelling

    return _COMMENT_RE.sub(_swap, text)


def sanitize_template(template: TemplateNode, source: str) -> SanitizedTemplate:
    """Encode ``template`` (sliced out of ``source``) as plain text plus sentinel maps."""
    quasis = [source[quasi.start : quasi.end] for quasi in template.quasis]
    for quasi in quasis:
        if EXPRESSION_MARKER in quasi or COMMENT_MARKER in quasi:
            raise TemplateSanitizeError(
                "Template text already contains a sentinel marker; it cannot be encoded safely",
                offset=template.start,
            )

    parts: list[str] = []
    expressions: dict[str, str] = {}
    comments: dict[str, str] = {}
    counter = itertools.count()

    for index, expression in enumerate(template.expressions):
        parts.append(_replace_comments(quasis[index], comments, counter))
        if expression is None:
            raise TemplateSanitizeError(
                f"Interpolated expression #{index} has no source position",
                offset=template.start,
            )
        spelling = _choose_spelling(expression_token(index), quasis[index], quasis[index + 1])
        expressions[spelling] = source[expression.start : expression.end]
        parts.append(spelling)
    parts.append(_replace_comments(quasis[-1], comments, counter))

    return SanitizedTemplate(text="".join(parts), expressions=expressions, comments=comments)
