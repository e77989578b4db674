import re


_TAG_RE = re.compile(r"<.*?>")
_SPECIAL_CHARS_RE = re.compile(r"[<>\"'/]")


def sanitize(value) -> str:
    """Strip markup-like tags and the characters < > " ' / from ``value``.

    None, empty and whitespace-only input all yield an empty string.
    """
    if value is None or not value.strip():
        return ""

    sanitized = _TAG_RE.sub("", value)
    sanitized = _SPECIAL_CHARS_RE.sub("", sanitized)
    return sanitized.strip()
