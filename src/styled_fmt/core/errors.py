"""Exception taxonomy for the formatting pipeline.

Only the pipeline entry point and the CSS formatter adapter catch these;
everything below them lets them propagate.
"""


class StyledFmtError(Exception):
    """Base class for all formatting failures."""


class SourceParseError(StyledFmtError):
    """Raised when the host source cannot be parsed. Fatal for the whole file."""


class TemplateError(StyledFmtError):
    """Raised when a single template cannot be encoded or decoded."""

    def __init__(self, message: str, offset: int | None = None) -> None:
        super().__init__(message)
        self.offset = offset


class TemplateSanitizeError(TemplateError):
    """Raised when a template's text cannot be turned into plain CSS-like text."""


class TemplateRestoreError(TemplateError):
    """Raised when formatted text cannot be turned back into a template literal."""


class CssFormatError(StyledFmtError):
    """Raised by the CSS printer on text it does not accept."""


class OverlappingEditsError(StyledFmtError, ValueError):
    """Raised when an edit set violates the non-overlap or bounds precondition."""
