"""Services Layer - the business-function orchestrator.

Invariants:
    - Transactions reached only through the injected TransactionSignal protocol
"""
