"""Helpers for wrapping code in fenced blocks and reading it back."""

from __future__ import annotations

import re

_FENCE = "```"

_EXTENSIONS_BY_LANG: dict[str, tuple[str, ...]] = {
    "c": (".c", ".h", ".hpp", ".cc", ".hh"),
    "cpp": (".cpp",),
    "csharp": (".cs",),
    "elixir": (".ex", ".exs", ".ex1"),
    "go": (".go",),
    "java": (".java",),
    "javascript": (".js", ".jsx"),
    "kotlin": (".kt",),
    "objective-c": (".m", ".mm"),
    "php": (".php",),
    "python": (".py",),
    "ruby": (".rb",),
    "rust": (".rs",),
    "swift": (".swift",),
    "typescript": (".ts", ".tsx"),
}

EXT_TO_LANG: dict[str, str] = {
    ext: lang for lang, extensions in _EXTENSIONS_BY_LANG.items() for ext in extensions
}

_CODE_BLOCK = re.compile(_FENCE + r"[a-zA-Z]*\n(.*?)" + _FENCE, re.DOTALL)


class NoCodeBlockError(ValueError):
    """Raised when a response holds no fenced code block."""


def _extension(filename: str) -> str:
    base = re.split(r"[\\/]", filename)[-1]
    _, dot, suffix = base.rpartition(".")
    return dot + suffix if dot else ""


def lang_from_ext(filename: str) -> str:
    """Return the language name for a file's extension, or an empty string."""
    return EXT_TO_LANG.get(_extension(filename), "")


def parse_code(code: str, lang: str) -> str:
    """Wrap ``code`` in a fenced block tagged with ``lang``."""
    return "\n".join((_FENCE + lang, code, _FENCE))


def parse_code_request(req: str, query: str, code: str) -> str:
    """Join the request preamble, the user's message and the code, one per line."""
    return "".join(f"{part}\n" for part in (req, query, code))


def extract_first_code_block(response: str) -> str:
    """Return the body of the first fenced block in ``response``."""
    match = _CODE_BLOCK.search(response)
    if match is None:
        raise NoCodeBlockError("no code block found")
    return match.group(1)