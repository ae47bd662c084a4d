"""Properties Files - parser and cached loader for Java-style .properties (UTF-8).

Invariants:
    - Each file is read at most once per loader; later loads hit the cache
    - Files are decoded as UTF-8; \\uXXXX escapes are honoured as well
    - A missing file is logged and re-raised, never cached
"""

import logging
import re
from pathlib import Path

logger = logging.getLogger(__name__)

_UNICODE_ESCAPE = re.compile(r"\\u([0-9a-fA-F]{4})")
_SIMPLE_ESCAPES = {"t": "\t", "n": "\n", "r": "\r", "f": "\f"}


def parse_properties(text: str) -> dict[str, str]:
    """Parse key=value / key: value / key value lines into a dict."""
    props: dict[str, str] = {}
    for line in _logical_lines(text):
        key, value = _split_key_value(line)
        props[_unescape(key)] = _unescape(value)
    return props


def _logical_lines(text: str) -> list[str]:
    """Join backslash-continued lines; drop blanks and #/! comments."""
    lines: list[str] = []
    pending = ""
    for raw in text.splitlines():
        line = raw.lstrip()
        if not pending and (not line or line[0] in "#!"):
            continue
        if _ends_with_continuation(line):
            pending += line[:-1]
            continue
        lines.append(pending + line)
        pending = ""
    if pending:
        lines.append(pending)
    return lines


def _ends_with_continuation(line: str) -> bool:
    trailing = len(line) - len(line.rstrip("\\"))
    return trailing % 2 == 1


def _split_key_value(line: str) -> tuple[str, str]:
    i = 0
    while i < len(line):
        c = line[i]
        if c == "\\":
            i += 2
            continue
        if c in "=: \t":
            break
        i += 1
    key = line[:i]
    rest = line[i:].lstrip(" \t")
    if rest[:1] in ("=", ":"):
        rest = rest[1:].lstrip(" \t")
    return key, rest


def _unescape(value: str) -> str:
    value = _UNICODE_ESCAPE.sub(lambda m: chr(int(m.group(1), 16)), value)
    out: list[str] = []
    i = 0
    while i < len(value):
        c = value[i]
        if c == "\\" and i + 1 < len(value):
            nxt = value[i + 1]
            out.append(_SIMPLE_ESCAPES.get(nxt, nxt))
            i += 2
            continue
        out.append(c)
        i += 1
    return "".join(out)


class PropertiesLoader:
    """Loads .properties files and caches them by resolved path."""

    def __init__(self):
        self._cache: dict[Path, dict[str, str]] = {}

    def load(self, path: str | Path) -> dict[str, str]:
        resolved = Path(path).resolve()
        cached = self._cache.get(resolved)
        if cached is not None:
            return cached
        logger.info(
            f"Loading properties file {resolved.name}",
            extra={"properties_file": str(resolved)},
        )
        try:
            text = resolved.read_text(encoding="utf-8")
        except OSError:
            logger.error(
                f"Error loading properties file {resolved}",
                extra={"properties_file": str(resolved)},
            )
            raise
        props = parse_properties(text)
        self._cache[resolved] = props
        return props

    def load_optional(self, path: str | Path) -> dict[str, str] | None:
        """Like load(), but None for a file that does not exist."""
        if not Path(path).is_file():
            return None
        return self.load(path)

    def clear(self) -> None:
        self._cache.clear()
