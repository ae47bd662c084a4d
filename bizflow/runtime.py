"""Runtime Wiring - builds the library's collaborators from Settings.

Invariants:
    - Settings are read here and in infrastructure factories; core modules take plain values
    - Logging is configured from log_level / log_format only when asked to
    - Batch clause helpers always use settings.sql_batch_size

Design Decisions:
    - One explicit build step for host applications (startup hook, CLI entry)
      instead of module-level singletons
"""

import logging
from dataclasses import dataclass
from typing import Sequence

from bizflow.config import Settings, get_settings
from bizflow.core.boundary_protocols import TransactionSignal
from bizflow.core.error_factory import ErrorFactory
from bizflow.core.sql_fragments import to_batch_in_clauses, to_batch_or_clauses
from bizflow.infrastructure.message_sources import error_factory_from_settings
from bizflow.infrastructure.observability import setup_logging
from bizflow.infrastructure.transaction import TransactionManager
from bizflow.services.orchestrator import BusinessOrchestrator

logger = logging.getLogger(__name__)


@dataclass
class Runtime:
    """Configured collaborators for one host process."""
    settings: Settings
    transactions: TransactionManager
    errors: ErrorFactory

    def orchestrator(
        self, transaction_signal: TransactionSignal | None = None,
    ) -> BusinessOrchestrator:
        return BusinessOrchestrator(transaction_signal)

    def batch_in_clauses(self, column: str, values: Sequence[object]) -> list[str]:
        return to_batch_in_clauses(column, values, self.settings.sql_batch_size)

    def batch_or_clauses(
        self, column: str, numbers: Sequence[int | float],
    ) -> list[str]:
        return to_batch_or_clauses(column, numbers, self.settings.sql_batch_size)

    def shutdown(self) -> None:
        self.transactions.dispose()


def build_runtime(
    settings: Settings | None = None, configure_logging: bool = True,
) -> Runtime:
    settings = settings or get_settings()
    if configure_logging:
        setup_logging(settings.log_level, settings.log_format)
    runtime = Runtime(
        settings=settings,
        transactions=TransactionManager.from_settings(settings),
        errors=error_factory_from_settings(settings),
    )
    logger.info(
        f"bizflow runtime ready (messages: {settings.message_storage.value}, "
        f"sql batch: {settings.sql_batch_size})"
    )
    return runtime
