"""
Custom exceptions for the split-check engine.

Engine transitions never raise for unmet preconditions; these exceptions
belong to the commit path and the operation reducer.
"""


class SplitError(Exception):
    """Base exception for split-check errors."""
    pass


class SplitIntegrityError(SplitError):
    """Raised when a session is committed while the integrity check fails."""

    def __init__(self, issues, message=None):
        self.issues = list(issues)
        if message is None:
            message = "Split cannot be committed: " + "; ".join(self.issues)
        super().__init__(message)


class UnknownOperationError(SplitError):
    """Raised when the reducer receives an operation it does not know."""

    def __init__(self, operation, message=None):
        self.operation = operation
        if message is None:
            message = f"Unknown split operation '{operation}'"
        super().__init__(message)
