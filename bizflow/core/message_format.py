"""Message Formatting - pure helpers for localized message templates.

Invariants:
    - All functions are PURE: no IO, no side effects
    - Bundle templates use indexed placeholders ({0}, {1}); config templates use %s
    - Config keys for en-us / en-sg carry no locale suffix
"""

import re
from typing import Sequence

from bizflow.core.domain_types import Locale, ModuleId

_INDEXED_PLACEHOLDER = re.compile(r"\{(\d+)\}")
_PRINTF_SPECIFIER = re.compile(
    r"%(?:\(\w+\))?[-#0 +]*(?:\*|\d+)?(?:\.(?:\*|\d+))?[diouxXeEfFgGcrsa%]"
)

# Locales whose DB-stored messages live under the bare key
_DEFAULT_CONFIG_LOCALES = frozenset({"en-us", "en-sg"})


def format_indexed(template: str, values: Sequence[object] = ()) -> str:
    """Replace {n} with str(values[n]); unknown indexes stay as-is. '' becomes '."""
    def _sub(match: re.Match) -> str:
        index = int(match.group(1))
        if index < len(values):
            return str(values[index])
        return match.group(0)

    return _INDEXED_PLACEHOLDER.sub(_sub, template).replace("''", "'")


def format_printf(template: str, values: Sequence[object] = ()) -> str:
    """printf-style (%s) formatting.

    Values beyond the template's placeholders are ignored. A template with no
    placeholder, or one the values cannot fill, comes back untouched.
    """
    if not values:
        return template
    consumed = sum(
        1 for m in _PRINTF_SPECIFIER.finditer(template) if m.group(0) != "%%"
    )
    try:
        return template % tuple(values)[:consumed]
    except (TypeError, ValueError):
        return template


def bundle_base_name(module: ModuleId) -> str:
    """Module context "pc.billing" -> bundle base name "pc_billing"."""
    return module.replace(".", "_")


def bundle_candidates(module: ModuleId, locale: Locale) -> list[str]:
    """Bundle names to try, most specific locale first."""
    base = bundle_base_name(module)
    return [f"{base}{suffix}" for suffix in locale.bundle_suffixes]


def config_message_key(key: str, locale: Locale) -> str:
    """Config key for a DB-stored message: error.message.<key>[.<lang>-<country>]."""
    if locale.tag in _DEFAULT_CONFIG_LOCALES:
        return f"error.message.{key}"
    return f"error.message.{key}.{locale.tag}"
