from enum import Enum
from pathlib import Path
from typing import Annotated, Literal

from pydantic import BaseModel, ConfigDict, Field, model_validator

IndentSpec = Literal["tab"] | Annotated[int, Field(ge=0)]

DEFAULT_TAG_NAMES = frozenset({"styled", "css"})


class Span(BaseModel):
    model_config = ConfigDict(frozen=True)

    start: int = Field(ge=0)
    end: int = Field(ge=0)

    @model_validator(mode="after")
    def _check_order(self) -> "Span":
        if self.start > self.end:
            raise ValueError(f"Invalid span: start ({self.start}) > end ({self.end})")
        return self


class TagShape(str, Enum):
    """Tag expression shapes a styling template may use."""

    IDENTIFIER = "identifier"  # css`...`
    MEMBER = "member"  # styled.div`...`
    CALL = "call"  # styled(Base)`...`
    CALL_MEMBER = "call_member"  # styled.withConfig({...})`...`


class TemplateNode(BaseModel):
    """A recognized tagged template.

    ``start``/``end`` cover the template literal including its backticks.
    ``expressions[i]`` sits between ``quasis[i]`` and ``quasis[i + 1]``; ``None``
    marks a substitution the parser gave no position for.
    """

    model_config = ConfigDict(frozen=True)

    tag_shape: TagShape
    start: int = Field(ge=0)
    end: int = Field(ge=0)
    quasis: list[Span]
    expressions: list[Span | None]

    @model_validator(mode="after")
    def _check_layout(self) -> "TemplateNode":
        if len(self.quasis) != len(self.expressions) + 1:
            raise ValueError(
                f"Template needs exactly one more quasi than expressions "
                f"(got {len(self.quasis)} quasis, {len(self.expressions)} expressions)"
            )
        offsets = [self.start]
        for index, quasi in enumerate(self.quasis):
            offsets.extend((quasi.start, quasi.end))
            expression = self.expressions[index] if index < len(self.expressions) else None
            if expression is not None:
                offsets.extend((expression.start, expression.end))
        offsets.append(self.end)
        if any(a > b for a, b in zip(offsets, offsets[1:], strict=False)):
            raise ValueError(f"Template offsets are not monotonic: {offsets}")
        return self


class SanitizedTemplate(BaseModel):
    """Plain CSS-like text plus the sentinel maps needed to undo the encoding.

    Map keys are the exact spellings placed in ``text``.
    """

    text: str
    expressions: dict[str, str] = Field(default_factory=dict)
    comments: dict[str, str] = Field(default_factory=dict)

    @property
    def line_comments(self) -> frozenset[str]:
        """Spellings standing in for `//` comments; nothing may follow them on a line."""
        return frozenset(key for key, original in self.comments.items() if original.startswith("//"))


class Edit(BaseModel):
    model_config = ConfigDict(frozen=True)

    start: int = Field(ge=0)
    end: int = Field(ge=0)
    replacement: str

    @model_validator(mode="after")
    def _check_order(self) -> "Edit":
        if self.start > self.end:
            raise ValueError(f"Invalid edit: start ({self.start}) > end ({self.end})")
        return self

    def overlaps(self, other: "Edit") -> bool:
        return self.start < other.end and other.start < self.end


class TemplateErrorPolicy(str, Enum):
    """What a per-template sanitize/restore failure does to the rest of the file."""

    ABORT_FILE = "abort-file"
    SKIP_TEMPLATE = "skip-template"


class FormatOptions(BaseModel):
    model_config = ConfigDict(frozen=True)

    indent: IndentSpec = 2
    tag_names: frozenset[str] = DEFAULT_TAG_NAMES
    error_policy: TemplateErrorPolicy = TemplateErrorPolicy.ABORT_FILE


class FileResult(BaseModel):
    path: Path
    original: str = ""
    formatted: str = ""
    written: bool = False
    error: str | None = None

    @property
    def changed(self) -> bool:
        return self.error is None and self.original != self.formatted
