from styled_fmt.core.ast import SourceDocument, collect_templates, parse_document
from styled_fmt.core.css import format_css, render_css
from styled_fmt.core.errors import (
    CssFormatError,
    OverlappingEditsError,
    SourceParseError,
    StyledFmtError,
    TemplateError,
    TemplateRestoreError,
    TemplateSanitizeError,
)
from styled_fmt.core.patch import apply_edits
from styled_fmt.core.pipeline import format_source, format_template, plan_edits
from styled_fmt.core.restore import restore_placeholders, restore_template
from styled_fmt.core.sanitize import sanitize_template
from styled_fmt.core.tags import classify_tag, is_styling_tag

__all__ = [
    "CssFormatError",
    "OverlappingEditsError",
    "SourceDocument",
    "SourceParseError",
    "StyledFmtError",
    "TemplateError",
    "TemplateRestoreError",
    "TemplateSanitizeError",
    "apply_edits",
    "classify_tag",
    "collect_templates",
    "format_css",
    "format_source",
    "format_template",
    "is_styling_tag",
    "parse_document",
    "plan_edits",
    "render_css",
    "restore_placeholders",
    "restore_template",
    "sanitize_template",
]
