import os

from styled_fmt.models import DEFAULT_TAG_NAMES, FormatOptions, IndentSpec, TemplateErrorPolicy

DEFAULT_INDENT = 2

INDENT_ENV = "STYLED_FMT_INDENT"
TAGS_ENV = "STYLED_FMT_TAGS"
POLICY_ENV = "STYLED_FMT_ON_TEMPLATE_ERROR"


def parse_indent(value: str) -> IndentSpec:
    """Parse ``tab`` or a non-negative integer count of spaces."""
    normalized = value.strip().lower()
    if normalized == "tab":
        return "tab"
    try:
        spaces = int(normalized)
    except ValueError:
        raise ValueError(f"Indent must be 'tab' or a non-negative integer, got {value!r}") from None
    if spaces < 0:
        raise ValueError(f"Indent must be 'tab' or a non-negative integer, got {value!r}")
    return spaces


def parse_tags(value: str) -> frozenset[str]:
    tags = frozenset(tag.strip() for tag in value.split(",") if tag.strip())
    if not tags:
        raise ValueError(f"No tag names in {value!r}")
    return tags


def parse_policy(value: str) -> TemplateErrorPolicy:
    try:
        return TemplateErrorPolicy(value.strip().lower())
    except ValueError:
        choices = ", ".join(policy.value for policy in TemplateErrorPolicy)
        raise ValueError(f"Unknown template error policy {value!r}. Choose one of: {choices}") from None


def load_options(
    indent: str | None = None,
    tags: list[str] | None = None,
    error_policy: str | None = None,
) -> FormatOptions:
    """Build options from explicit values, falling back to the environment, then defaults."""
    indent_raw = indent if indent is not None else os.getenv(INDENT_ENV)
    tags_raw = ",".join(tags) if tags else os.getenv(TAGS_ENV)
    policy_raw = error_policy if error_policy is not None else os.getenv(POLICY_ENV)

    return FormatOptions(
        indent=parse_indent(indent_raw) if indent_raw else DEFAULT_INDENT,
        tag_names=parse_tags(tags_raw) if tags_raw else DEFAULT_TAG_NAMES,
        error_policy=parse_policy(policy_raw) if policy_raw else TemplateErrorPolicy.ABORT_FILE,
    )
