"""Free-text field parsing for the project form."""

from __future__ import annotations

from collections.abc import Iterable

_TRUE_WORDS = frozenset({"true", "yes", "on", "1"})
_FALSE_WORDS = frozenset({"false", "no", "off", "0", ""})


def clean_items(items: Iterable[object]) -> list[str]:
    """Trim every item and drop the empty ones, keeping order and duplicates."""
    cleaned = (str(item).strip() for item in items)
    return [item for item in cleaned if item]


def parse_comma_list(text: str | None) -> list[str]:
    """Split comma-separated text into trimmed, non-empty items.

    Order is preserved and duplicates are kept.

    >>> parse_comma_list("React, Node.js,, ")
    ['React', 'Node.js']
    """
    if not text:
        return []
    return clean_items(text.split(","))


def format_comma_list(items: Iterable[str] | None) -> str:
    """Join items back into the text shown in a comma-list input."""
    return ", ".join(items or [])


def parse_flag(value: bool | str | None) -> bool:
    """Read a checkbox value given as a bool or as text like "yes"/"false".

    Raises:
        ValueError: the text is not a recognised yes/no word
        TypeError: the value is neither a bool nor text
    """
    if value is None:
        return False
    if isinstance(value, bool):
        return value
    if not isinstance(value, str):
        raise TypeError(f"Expected a bool or text, got {type(value).__name__}")
    word = value.strip().lower()
    if word in _TRUE_WORDS:
        return True
    if word in _FALSE_WORDS:
        return False
    raise ValueError(f"Not a yes/no value: {value!r}")
