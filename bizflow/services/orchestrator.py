"""Business Orchestrator - runs business functions under transaction and error policies.

Invariants:
    - Functions and groups run strictly in declaration order, one at a time, no timeouts
    - GROUP: every function runs; classified failures are merged into ONE CompositeError,
      even when only one function failed
    - FAIL_FAST: the first failure propagates raw, never wrapped
    - Unclassified exceptions (not ComponentError) abort at once under either policy
      and are never aggregated
    - Rollback is signalled at most once per execute() call, before the caller sees the
      error, and only for SUPPORT + a web-service or front-end sub-module
    - execute_group never signals rollback and stops at the first failed group
    - An empty batch or group list returns without any side effect

Design Decisions:
    - TransactionSignal injected in the constructor; no global transaction lookup
    - ComponentError is the single classified root: ValidationError and
      SystemFaultError are aggregated alike
"""

import logging

from bizflow.core.boundary_protocols import TransactionSignal
from bizflow.core.domain_types import (
    BusinessFunction,
    ErrorHandlingPolicy,
    ExecutionContext,
    Group,
    TransactionPolicy,
)
from bizflow.core.error_factory import build_composite_error
from bizflow.core.errors import ComponentError
from bizflow.infrastructure.observability import Stopwatch

logger = logging.getLogger(__name__)


class BusinessOrchestrator:
    """Sequences business functions and reports failures as a single error."""

    def __init__(self, transaction_signal: TransactionSignal | None = None):
        self._transaction_signal = transaction_signal

    def execute(
        self,
        ctx: ExecutionContext,
        *funcs: BusinessFunction,
        tran_policy: TransactionPolicy | None = None,
        err_policy: ErrorHandlingPolicy | None = None,
    ) -> None:
        """Run funcs in order. Raises the raw failure (FAIL_FAST) or a CompositeError (GROUP)."""
        tran_policy = TransactionPolicy.resolve(tran_policy)
        err_policy = ErrorHandlingPolicy.resolve(err_policy)
        if not funcs:
            return

        logger.debug(
            f"Executing {len(funcs)} business function(s) ({err_policy.value})",
            extra=self._log_extra(ctx, function_count=len(funcs)),
        )
        try:
            if err_policy is ErrorHandlingPolicy.FAIL_FAST:
                self._run_fail_fast(funcs)
            else:
                self._run_grouped(ctx, funcs)
        except Exception:
            if tran_policy is TransactionPolicy.SUPPORT and ctx.rollback_eligible:
                self._signal_rollback(ctx)
            raise

    def execute_group(self, ctx: ExecutionContext, *groups: Group) -> None:
        """Run groups in order; stop after the first group that fails."""
        if not groups:
            return

        stopwatch = Stopwatch()
        group_failures: list[ComponentError] = []
        for index, group in enumerate(groups):
            try:
                self.execute(
                    ctx, *group,
                    tran_policy=TransactionPolicy.NONE,
                    err_policy=ErrorHandlingPolicy.GROUP,
                )
            except ComponentError as e:
                group_failures.append(e)
                logger.warning(
                    f"Group {index} failed, skipping {len(groups) - index - 1} "
                    f"remaining group(s)",
                    extra=self._log_extra(
                        ctx, group_index=index, error_code=e.code,
                        elapsed_ms=stopwatch.elapsed_ms(),
                    ),
                )
                break

        if group_failures:
            raise build_composite_error(ctx.module, group_failures)

    # ─── Policies ──────────────────────────────────────────────

    @staticmethod
    def _run_fail_fast(funcs: tuple[BusinessFunction, ...]) -> None:
        for func in funcs:
            func()

    def _run_grouped(
        self, ctx: ExecutionContext, funcs: tuple[BusinessFunction, ...],
    ) -> None:
        stopwatch = Stopwatch()
        failures: list[ComponentError] = []
        for func in funcs:
            try:
                func()
            except ComponentError as e:
                failures.append(e)
            except Exception:
                logger.error(
                    "Unclassified failure in business function, aborting batch",
                    exc_info=True,
                    extra=self._log_extra(ctx, function_count=len(funcs)),
                )
                raise

        if failures:
            logger.warning(
                f"{len(failures)} of {len(funcs)} business function(s) failed",
                extra=self._log_extra(
                    ctx,
                    function_count=len(funcs),
                    failure_count=len(failures),
                    elapsed_ms=stopwatch.elapsed_ms(),
                ),
            )
            raise build_composite_error(ctx.module, failures)

    # ─── Transaction signal ────────────────────────────────────

    def _signal_rollback(self, ctx: ExecutionContext) -> None:
        if self._transaction_signal is None:
            logger.warning(
                "Rollback required but no transaction signal configured",
                extra=self._log_extra(ctx),
            )
            return
        self._transaction_signal.mark_rollback_only()
        logger.info(
            "Transaction marked rollback-only", extra=self._log_extra(ctx),
        )

    @staticmethod
    def _log_extra(ctx: ExecutionContext, **fields: object) -> dict:
        extra = {
            "module_id": ctx.module,
            "sub_module": ctx.sub_module.value if ctx.sub_module else None,
        }
        extra.update(fields)
        return extra
