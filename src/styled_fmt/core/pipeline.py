"""Format every styling template in a source file.

source -> parse -> collect templates -> sanitize -> format CSS -> restore
-> edit list -> patch. Any failure at file level returns the source verbatim.
"""

import logging

from styled_fmt.core.ast import SourceDocument, collect_templates, parse_document
from styled_fmt.core.css import render_css
from styled_fmt.core.errors import CssFormatError, StyledFmtError, TemplateError
from styled_fmt.core.languages import resolve_language
from styled_fmt.core.patch import apply_edits
from styled_fmt.core.restore import restore_template
from styled_fmt.core.sanitize import sanitize_template
from styled_fmt.models import Edit, FormatOptions, IndentSpec, TemplateErrorPolicy, TemplateNode

logger = logging.getLogger(__name__)


def format_template(template: TemplateNode, source: str, indent: IndentSpec) -> Edit | None:
    """Return the edit for one template, or ``None`` when it should stay as is.

    Raises ``TemplateError`` subclasses on sanitize/restore failures.
    """
    sanitized = sanitize_template(template, source)
    try:
        formatted = render_css(sanitized.text, indent, sanitized.line_comments)
    except CssFormatError as exc:
        logger.warning("CSS formatting failed for template at offset %d, keeping it as is: %s", template.start, exc)
        return None

    replacement = restore_template(formatted, sanitized, indent)
    if replacement == source[template.start : template.end]:
        return None
    return Edit(start=template.start, end=template.end, replacement=replacement)


def plan_edits(document: SourceDocument, options: FormatOptions) -> list[Edit]:
    edits: list[Edit] = []
    for template in collect_templates(document, options.tag_names):
        try:
            edit = format_template(template, document.text, options.indent)
        except TemplateError as exc:
            if options.error_policy is TemplateErrorPolicy.ABORT_FILE:
                raise
            logger.warning("Skipping template at offset %d: %s", template.start, exc)
            continue
        if edit is not None:
            edits.append(edit)
    return edits


def format_source(source: str, options: FormatOptions | None = None, language: str | None = None) -> str:
    """Return ``source`` with its styling templates formatted.

    Never raises: parse failures, per-template failures under
    ``TemplateErrorPolicy.ABORT_FILE`` and unexpected errors all log and return
    ``source`` unchanged.
    """
    options = options or FormatOptions()
    try:
        document = parse_document(source, resolve_language(language, None))
        edits = plan_edits(document, options)
        if not edits:
            return source
        logger.debug("Applying %d template edit(s)", len(edits))
        return apply_edits(source, edits)
    except StyledFmtError as exc:
        logger.warning("Leaving source unchanged: %s", exc)
    except Exception:
        logger.exception("Unexpected error while formatting; leaving source unchanged")
    return source
