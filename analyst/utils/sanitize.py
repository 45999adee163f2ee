"""
Sanitizing helpers for storage keys and log output
Keeps bearer tokens and provider keys out of logged error messages
"""

import re

# Patterns to detect and redact sensitive data
SENSITIVE_PATTERNS = [
    (re.compile(r'(sk-[a-zA-Z0-9_\-]{20,})'), 'sk-***REDACTED***'),  # OpenAI-style keys
    (re.compile(r'(AIza[0-9A-Za-z_\-]{30,})'), 'AIza***REDACTED***'),  # Google API keys
    (re.compile(r'(Bearer\s+[a-zA-Z0-9_\-\.]+)'), 'Bearer ***REDACTED***'),  # Bearer tokens
]

_UNSAFE_FILENAME_CHARS = re.compile(r'[^A-Za-z0-9._\- ]')


def sanitize_string(text: str) -> str:
    """
    Remove sensitive patterns from string

    Args:
        text: String that may contain sensitive data

    Returns:
        Sanitized string with patterns redacted
    """
    if not isinstance(text, str):
        return text

    sanitized = text
    for pattern, replacement in SENSITIVE_PATTERNS:
        sanitized = pattern.sub(replacement, sanitized)

    return sanitized


def sanitize_filename(filename: str) -> str:
    """
    Reduce an uploaded filename to a safe storage key component

    Directory parts are dropped and unusual characters replaced with '_'.
    The extension survives so processing can still dispatch on it.
    """
    name = filename.replace("\\", "/").split("/")[-1].strip()
    name = _UNSAFE_FILENAME_CHARS.sub("_", name).replace(" ", "_")
    name = name.lstrip(".")
    return name or "document"
