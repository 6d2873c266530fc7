SUPPORTED_LANGUAGES = {
    "en": "English",
    "hi": "Hindi",
    "pa": "Punjabi",
}

DEFAULT_LANGUAGE = "en"


def validate_language(code: str) -> str:
    """Return the normalized language code or raise ValueError."""
    normalized = (code or "").strip().lower()
    if normalized not in SUPPORTED_LANGUAGES:
        supported = ", ".join(sorted(SUPPORTED_LANGUAGES))
        raise ValueError(f"Unsupported language '{code}'. Use one of: {supported}.")
    return normalized


def language_name(code: str | None) -> str:
    """Human readable language name used in AI prompts."""
    if not code:
        return SUPPORTED_LANGUAGES[DEFAULT_LANGUAGE]
    return SUPPORTED_LANGUAGES.get(code.strip().lower(), SUPPORTED_LANGUAGES[DEFAULT_LANGUAGE])
