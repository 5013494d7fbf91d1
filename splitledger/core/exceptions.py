"""Ledger exceptions"""


class LedgerError(Exception):
    """Base exception for the ledger core"""

    status_code = 400

    def __init__(self, detail: str):
        super().__init__(detail)
        self.detail = detail


class ValidationError(LedgerError):
    """Split or money input is malformed"""

    status_code = 400


class NotFoundError(LedgerError):
    """Referenced group or fact is absent"""

    status_code = 404


class PermissionDeniedError(LedgerError):
    """Actor is not allowed to advance a settlement"""

    status_code = 403


class InvalidTransitionError(LedgerError):
    """Settlement is not in the state the transition requires"""

    status_code = 409
