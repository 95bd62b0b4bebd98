"""Validation of user-supplied names, API keys and directories."""

from __future__ import annotations

import os
import re

# The apostrophe-to-À span is kept as is: it admits digits and punctuation too.
_NAME_RE = re.compile(r"\A[A-Za-z\t\n\f\r '-\u00c0\-\u00d6\u00d8-\u00f6\u00f8-\u00ff]+\Z")
_ILLEGAL_RE = re.compile(r'[/?<>\\:*|"]')
_ALNUM32_RE = re.compile(r"\A[a-zA-Z0-9]{32}\Z")


class ValidationError(ValueError):
    """Raised when user input fails validation."""


def validate_name(name: str) -> str:
    """Return the name with illegal characters removed, or raise ValidationError."""
    if not name:
        raise ValidationError("name is empty")
    sanitized = _ILLEGAL_RE.sub("", name)
    if not _NAME_RE.match(sanitized):
        raise ValidationError("name contains only illegal characters")
    return sanitized


def validate_api_key(api_key: str) -> str:
    if not _ALNUM32_RE.match(api_key):
        raise ValidationError("invalid API key")
    return api_key


def validate_working_directory(directory: str | os.PathLike[str]) -> str | os.PathLike[str]:
    try:
        os.stat(directory)
    except FileNotFoundError as exc:
        raise ValidationError("directory does not exist") from exc
    except OSError:
        pass
    return directory