"""Splitting command input into positional argument tokens."""

import logging
import re
from typing import Optional

logger = logging.getLogger(__name__)

_WHITESPACE = re.compile(r"\s*")
_TOKEN = re.compile(r'"([^"]*)"?|(\S+)')
_CAMEL_SEPARATORS = re.compile(r"[\s_.\-]+")


def split_arguments(text: Optional[str], count: int) -> list[Optional[str]]:
    """
    Split ``text`` into exactly ``count`` tokens.

    Tokens are separated by whitespace and a double-quoted run is one token
    (without its quotes). The last token is the rest of the text as typed, so
    free text at the end of a command needs no quoting. Missing tokens are
    None.
    """
    if count <= 0:
        return []

    text = text or ""
    tokens: list[Optional[str]] = []
    position = 0

    while len(tokens) < count - 1:
        position = _WHITESPACE.match(text, position).end()
        if position >= len(text):
            break
        match = _TOKEN.match(text, position)
        quoted, bare = match.groups()
        tokens.append(quoted if quoted is not None else bare)
        position = match.end()

    rest = text[position:].strip()
    if rest:
        tokens.append(_unquote(rest))

    tokens.extend([None] * (count - len(tokens)))
    logger.debug(f"Split {text!r} into {tokens!r}")
    return tokens


def _unquote(text: str) -> str:
    if len(text) >= 2 and text[0] == text[-1] == '"' and '"' not in text[1:-1]:
        return text[1:-1]
    return text


def split_command(line: Optional[str]) -> tuple[Optional[str], str]:
    """Split a line into its command name and the remaining text."""
    parts = str(line or "").strip().split(maxsplit=1)
    if not parts:
        return None, ""
    return parts[0], parts[1] if len(parts) > 1 else ""


def camel_case(key: str) -> str:
    """``user_name`` / ``user-name`` -> ``userName``."""
    words = [word for word in _CAMEL_SEPARATORS.split(key) if word]
    if not words:
        return key

    first = words[0].lower() if words[0].isupper() else words[0][0].lower() + words[0][1:]
    return first + "".join(word[0].upper() + word[1:] for word in words[1:])
