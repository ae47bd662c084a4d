"""Boundary Protocols - contracts between core and shell.

Invariants:
    - Core NEVER imports from shell - dependency arrows point inward only
    - The orchestrator only ever calls TransactionSignal.mark_rollback_only();
      it never begins, commits or rolls back a transaction itself
    - Implementations provided by infrastructure via dependency injection

Design Decisions:
    - Protocol over ABC: structural subtyping, test doubles need no base class
"""

from typing import Protocol

from bizflow.core.domain_types import Locale, ModuleId


class TransactionSignal(Protocol):
    """Write-only handle on the ambient transaction status."""
    def mark_rollback_only(self) -> None: ...


class MessageSource(Protocol):
    """Resolves a localized message template (e.g. from resource bundles)."""
    def get_template(
        self, module: ModuleId, locale: Locale, key: str,
    ) -> str | None: ...


class ConfigSource(Protocol):
    """Per-module key/value configuration (DB-style message storage)."""
    def get_property(self, module: ModuleId, key: str) -> str | None: ...
