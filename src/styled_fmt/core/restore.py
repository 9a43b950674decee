import re

from styled_fmt.core.css import indent_unit
from styled_fmt.core.errors import TemplateRestoreError
from styled_fmt.models import IndentSpec, SanitizedTemplate

EMPTY_TEMPLATE = "``"


def _substitute(text: str, mapping: dict[str, str]) -> str:
    # Single pass, so text inserted for one key is never rescanned for another.
    if not mapping:
        return text
    pattern = re.compile("|".join(re.escape(key) for key in sorted(mapping, key=len, reverse=True)))
    return pattern.sub(lambda match: mapping[match.group(0)], text)


def restore_placeholders(text: str, sanitized: SanitizedTemplate) -> str:
    """Undo the sentinel encoding: comments first, then expressions as ``${...}``."""
    text = _substitute(text, sanitized.comments)
    return _substitute(text, {key: f"${{{source}}}" for key, source in sanitized.expressions.items()})


def _check_sentinels(formatted: str, sanitized: SanitizedTemplate) -> None:
    missing = [key for key in (*sanitized.comments, *sanitized.expressions) if key not in formatted]
    if missing:
        raise TemplateRestoreError(f"Formatter output lost sentinel(s): {', '.join(missing)}")


def restore_template(formatted: str, sanitized: SanitizedTemplate, indent: IndentSpec) -> str:
    """Build the final template literal (backticks included) from formatted CSS text."""
    if not formatted.strip():
        if sanitized.expressions or sanitized.comments:
            raise TemplateRestoreError("Formatter output is blank but the template had expressions or comments")
        return EMPTY_TEMPLATE

    _check_sentinels(formatted, sanitized)
    unit = indent_unit(indent)
    lines = [f"{unit}{line}" if line.strip() else "" for line in formatted.split("\n")]
    body = "\n".join(lines)
    return restore_placeholders(f"`\n{body}\n`", sanitized)
