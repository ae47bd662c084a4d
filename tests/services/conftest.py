"""Service test fixtures - execution contexts, a recording rollback signal, call log.

Invariants:
    - Every test gets a fresh call log and signal (no state shared across tests)
    - Business functions are plain closures that record their name before acting
"""

import pytest

from bizflow.core.domain_types import ExecutionContext, Locale, SubModuleKind
from bizflow.services.orchestrator import BusinessOrchestrator

from tests.services.fakes import MODULE, RecordingSignal


@pytest.fixture
def calls() -> list[str]:
    return []


@pytest.fixture
def signal(calls) -> RecordingSignal:
    return RecordingSignal(calls)


@pytest.fixture
def orchestrator(signal) -> BusinessOrchestrator:
    return BusinessOrchestrator(transaction_signal=signal)


@pytest.fixture
def ctx() -> ExecutionContext:
    return ExecutionContext(MODULE, None, Locale("en", "US"))


@pytest.fixture
def ws_ctx() -> ExecutionContext:
    return ExecutionContext(MODULE, SubModuleKind.WEB_SERVICE, Locale("en", "US"))


@pytest.fixture
def fe_ctx() -> ExecutionContext:
    return ExecutionContext(MODULE, SubModuleKind.FRONT_END, Locale("en", "US"))


@pytest.fixture
def ok(calls):
    """Factory: function that records its name and succeeds."""
    def _make(name: str):
        def _run() -> None:
            calls.append(name)
        return _run
    return _make


@pytest.fixture
def fails(calls):
    """Factory: function that records its name and raises the given error."""
    def _make(name: str, error: Exception):
        def _run() -> None:
            calls.append(name)
            raise error
        return _run
    return _make
