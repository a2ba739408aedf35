"""Services Layer — command handlers that load aggregates, call core, persist.

Invariants:
    - Handlers depend on repository protocols, never on SQLAlchemy directly
    - Business failures are returned as OperationResult, faults propagate
"""
