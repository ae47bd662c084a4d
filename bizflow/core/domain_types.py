"""Domain Types - rich types for execution contexts and orchestration policies.

Invariants:
    - ModuleId wraps the dotted module context string - never pass bare str in domain logic
    - ExecutionContext and Locale are frozen: read-only for the whole orchestration call
    - Policy enums resolve None to their default at the call boundary (resolve())
    - SubModuleKind predicates are the only input to rollback eligibility

Design Decisions:
    - NewType over dataclass wrappers for identifiers
    - str Enums: values serialize to JSON as-is in error envelopes and log records
"""

from dataclasses import dataclass
from enum import Enum
from typing import Callable, NewType, Sequence


# ─── Identity Types ──────────────────────────────────────────────

ModuleId = NewType("ModuleId", str)     # e.g. "pc.billing"


# ─── Locale ──────────────────────────────────────────────────────

@dataclass(frozen=True)
class Locale:
    """Language + optional country, e.g. Locale("zh", "CN")."""
    language: str
    country: str = ""

    @classmethod
    def parse(cls, value: str) -> "Locale":
        """Accept "zh_CN", "zh-cn", "en" (country upper-cased, language lower-cased)."""
        parts = value.strip().replace("-", "_").split("_")
        language = parts[0].lower()
        country = parts[1].upper() if len(parts) > 1 else ""
        return cls(language, country)

    @property
    def tag(self) -> str:
        """Lower-case "language-country" tag; "en-us", or "en" without a country."""
        if not self.country:
            return self.language.lower()
        return f"{self.language}-{self.country}".lower()

    @property
    def bundle_suffixes(self) -> list[str]:
        """Resource-bundle fallback chain, most specific first."""
        suffixes = []
        if self.country:
            suffixes.append(f"_{self.language}_{self.country}")
        if self.language:
            suffixes.append(f"_{self.language}")
        suffixes.append("")
        return suffixes

    def __str__(self) -> str:
        return f"{self.language}_{self.country}" if self.country else self.language


DEFAULT_LOCALE = Locale("en", "US")


# ─── Enums ───────────────────────────────────────────────────────

class SubModuleKind(str, Enum):
    """Originating sub-module of a call. Only WS and FE qualify for rollback."""
    WEB_SERVICE = "web_service"
    FRONT_END = "front_end"
    BATCH = "batch"
    SCHEDULER = "scheduler"
    INTERFACE = "interface"
    REPORT = "report"

    def is_web_service(self) -> bool:
        return self is SubModuleKind.WEB_SERVICE

    def is_front_end(self) -> bool:
        return self is SubModuleKind.FRONT_END


class TransactionPolicy(str, Enum):
    """Whether a failed batch may mark the ambient transaction rollback-only."""
    NONE = "none"
    SUPPORT = "support"

    @classmethod
    def resolve(cls, policy: "TransactionPolicy | None") -> "TransactionPolicy":
        return cls.NONE if policy is None else policy


class ErrorHandlingPolicy(str, Enum):
    """FAIL_FAST stops at the first failure; GROUP runs all and aggregates."""
    FAIL_FAST = "fail_fast"
    GROUP = "group"

    @classmethod
    def resolve(cls, policy: "ErrorHandlingPolicy | None") -> "ErrorHandlingPolicy":
        return cls.GROUP if policy is None else policy


class ErrorKind(str, Enum):
    """Classification tag carried by every ComponentError."""
    VALIDATION = "validation"
    SYSTEM = "system"


class MessageStorageType(str, Enum):
    """Where localized error message templates live."""
    DB = "DB"
    FILE = "FILE"

    def is_db(self) -> bool:
        return self is MessageStorageType.DB

    def is_file(self) -> bool:
        return self is MessageStorageType.FILE


class MatchingMode(str, Enum):
    """LIKE clause anchoring: HEAD = 'x%', TAIL = '%x', ANY = '%x%'."""
    HEAD = "head"
    TAIL = "tail"
    ANY = "any"


# ─── Execution Context ───────────────────────────────────────────

@dataclass(frozen=True)
class ExecutionContext:
    """Caller identity for one orchestration call."""
    module: ModuleId
    sub_module: SubModuleKind | None = None
    locale: Locale = DEFAULT_LOCALE

    @property
    def rollback_eligible(self) -> bool:
        """True when the call originates from a web-service or front-end sub-module."""
        if self.sub_module is None:
            return False
        return self.sub_module.is_web_service() or self.sub_module.is_front_end()


# ─── Business Functions ──────────────────────────────────────────

BusinessFunction = Callable[[], None]
Group = Sequence[BusinessFunction]
GroupList = Sequence[Group]
