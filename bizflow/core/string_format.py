"""String Helpers - null-safe checks, padding, and escaped splitting.

Invariants:
    - All functions are PURE and accept None where a string is expected
    - split() returns None (not []) for blank input, matching to_set()
"""

from typing import Iterable

_YES_VALUES = frozenset({"Y", "YES"})


def is_null_or_blank(value: str | None) -> bool:
    return value is None or not value.strip()


def no_null(value: str | None) -> str:
    return "" if value is None else value


def trim_upper(value: str | None) -> str:
    return no_null(value).strip().upper()


def is_true(indicator: str | None) -> bool:
    """Y / YES (any case) or "1"."""
    if indicator is None:
        return False
    return indicator.upper() in _YES_VALUES or indicator == "1"


def pad_number(num: int, length: int) -> str:
    """Left-pad with zeros after any minus sign: pad_number(-5, 3) -> "-05"."""
    text = str(num)
    diff = length - len(text)
    if diff <= 0:
        return text
    if num < 0:
        return "-" + "0" * diff + text[1:]
    return "0" * diff + text


def pad_right(value: str | None, length: int) -> str:
    """Right-pad with spaces to length; longer strings returned unchanged."""
    return no_null(value).ljust(length)


def split(
    src: str | None,
    sep: str,
    *,
    remove_empty: bool = False,
    escape: str | None = None,
) -> list[str] | None:
    """Split on a single-character separator.

    remove_empty drops blank elements and strips the rest. With an escape
    character, escape+sep and escape+escape yield the literal character; any
    other escaped character keeps its escape. A trailing separator yields a
    trailing "" unless remove_empty is set.
    """
    if escape is not None and escape == sep:
        raise ValueError("Delimiter must be different from the escape character")
    if is_null_or_blank(src):
        return None

    parts: list[str] = []
    buf: list[str] = []
    i = 0
    while i < len(src):
        c = src[i]
        if escape is not None and c == escape:
            if i == len(src) - 1:
                buf.append(c)
            else:
                i += 1
                nxt = src[i]
                if nxt in (sep, escape):
                    buf.append(nxt)
                else:
                    buf.append(c + nxt)
        elif c == sep:
            parts.append("".join(buf))
            buf = []
        else:
            buf.append(c)
        i += 1
    parts.append("".join(buf))

    if remove_empty:
        parts = [p.strip() for p in parts if not is_null_or_blank(p)]
    return parts or None


def join(items: Iterable[str] | None, sep: str) -> str:
    if items is None:
        return ""
    return sep.join(items)


def to_set(items: Iterable[str | None] | None) -> set[str] | None:
    """Non-blank elements as a set; None when nothing survives."""
    if items is None:
        return None
    result = {item for item in items if not is_null_or_blank(item)}
    return result or None


def all_visible(src: str) -> bool:
    """True when every character is printable ASCII (32-126)."""
    return all(32 <= ord(c) <= 126 for c in src)
