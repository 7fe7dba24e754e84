"""
Error taxonomy for contract operations.

Every error aborts the whole call: the transaction is rolled back and the
exception propagates to the submitter. ``status_code`` is what the HTTP
layer reports for the category.
"""


class ContractError(ValueError):
    """Base class for every failure raised by a contract operation."""
    status_code = 400


class AuthorizationError(ContractError):
    """Caller could not prove the required identity."""
    status_code = 403


class InitializationError(ContractError):
    """Double initialization, or state read before initialization."""
    status_code = 409


class InvalidParameterError(ContractError):
    """Amount, period, type or payout outside the configured bounds."""
    status_code = 400


class StateError(ContractError):
    """Operation not valid for the current policy or claim status."""
    status_code = 409


class NotFoundError(StateError):
    status_code = 404


class InsufficientPoolError(ContractError):
    """Premium pool cannot cover a payout, refund or withdrawal."""
    status_code = 409


class FraudCheckError(ContractError):
    """Flagged principal, cooldown not elapsed, or rolling-window limit hit."""
    status_code = 429


class ContractPausedError(ContractError):
    status_code = 503


class TransferError(ContractError):
    """The asset ledger refused to move funds."""
    status_code = 402
