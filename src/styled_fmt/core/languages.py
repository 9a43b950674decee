from pathlib import Path

DEFAULT_LANGUAGE = "tsx"

_LANGUAGE_ALIASES = {
    "javascript": "javascript",
    "js": "javascript",
    "jsx": "javascript",
    "mjs": "javascript",
    "cjs": "javascript",
    "ts": "typescript",
    "typescript": "typescript",
    "mts": "typescript",
    "cts": "typescript",
    "tsx": "tsx",
}

_EXTENSION_LANGUAGE_MAP = {
    ".js": "javascript",
    ".jsx": "javascript",
    ".mjs": "javascript",
    ".cjs": "javascript",
    ".ts": "typescript",
    ".mts": "typescript",
    ".cts": "typescript",
    ".tsx": "tsx",
}

_SUPPORTED_LANGUAGES = set(_EXTENSION_LANGUAGE_MAP.values())

SUPPORTED_EXTENSIONS: frozenset[str] = frozenset(_EXTENSION_LANGUAGE_MAP)


def normalize_language(language: str) -> str:
    normalized = language.strip().lower()
    resolved = _LANGUAGE_ALIASES.get(normalized, normalized)
    if resolved not in _SUPPORTED_LANGUAGES:
        raise ValueError(f"Unsupported language '{language}'. Supported: {sorted(_SUPPORTED_LANGUAGES)}")
    return resolved


def detect_language_from_path(file_path: Path) -> str:
    suffix = file_path.suffix.lower()
    if suffix in _EXTENSION_LANGUAGE_MAP:
        return _EXTENSION_LANGUAGE_MAP[suffix]
    raise ValueError(f"Unsupported file extension: {suffix}")


def is_supported_file(path: Path) -> bool:
    return path.suffix.lower() in SUPPORTED_EXTENSIONS


def resolve_language(language: str | None, file_path: Path | None) -> str:
    """Pick the grammar: explicit language first, then the file extension, then the default."""
    if language:
        return normalize_language(language)
    if file_path:
        return detect_language_from_path(file_path)
    return DEFAULT_LANGUAGE
