"""
Domain errors for stock workflows.

Every error carries a machine-readable ``code``, the HTTP status the API
renders it with, and an optional list of ``details`` strings. NotFound,
InvalidTransition, InsufficientStock and ValidationFailed are raised before
anything is written; TransactionFailure means the transaction was rolled back.
"""
from typing import List, Optional


class StockFlowError(Exception):
    """Base exception for all StockFlow domain errors"""

    code: str = "STOCKFLOW_ERROR"
    status_code: int = 500

    def __init__(self, message: str, details: Optional[List[str]] = None):
        self.message = message
        self.details = list(details or [])
        super().__init__(message)


class NotFound(StockFlowError):
    code = "NOT_FOUND"
    status_code = 404

    def __init__(self, entity: str, entity_id):
        self.entity = entity
        self.entity_id = str(entity_id)
        super().__init__(f"{entity} not found")


class InvalidTransition(StockFlowError):
    """Status does not permit the requested operation"""

    code = "INVALID_TRANSITION"
    status_code = 409


class ConcurrencyConflict(InvalidTransition):
    """The record changed between the precondition check and the update"""

    code = "CONCURRENCY_CONFLICT"


class InsufficientStock(StockFlowError):
    code = "INSUFFICIENT_STOCK"
    status_code = 400


class ValidationFailed(StockFlowError):
    code = "VALIDATION_FAILED"
    status_code = 400


class Conflict(StockFlowError):
    """Request clashes with existing data (duplicate key, record in use)"""

    code = "CONFLICT"
    status_code = 409


class TransactionFailure(StockFlowError):
    code = "TRANSACTION_FAILURE"
    status_code = 500

    def __init__(self, message: str, retryable: bool = False):
        self.retryable = retryable
        if retryable:
            self.status_code = 503
        super().__init__(message)


class LedgerImmutable(StockFlowError):
    """Stock movements are append-only"""

    code = "LEDGER_IMMUTABLE"
    status_code = 500

    def __init__(self, movement_id, operation: str):
        self.movement_id = str(movement_id)
        self.operation = operation
        super().__init__(f"Stock movement {movement_id} cannot be {operation}d")
