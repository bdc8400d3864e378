"""
This module contains the definitions of all exceptions which may be publicly raised by chainlotto
"""
import json
from typing import Any, NamedTuple, Optional


class ErrorReport(NamedTuple):
    """Serializable summary of a failed contract interaction."""
    message: str
    kind: str
    raw: Any

    def to_dict(self) -> dict:
        return {'message': self.message, 'kind': self.kind, 'raw': self.raw}

    def to_json(self, indent: Optional[int] = 4) -> str:
        return json.dumps(self.to_dict(), indent=indent, default=str)


class ContractClientError(Exception):
    """
    Base class of all errors which are raised when a contract interaction fails.

    The provider payload which caused the failure (if any) is kept in raw.
    """

    def __init__(self, message: str, raw: Any = None):
        super().__init__(message)
        self.message = message
        self.raw = raw

    @property
    def report(self) -> ErrorReport:
        return ErrorReport(self.message, type(self).__name__, self.raw)


class ProviderConnectionError(ContractClientError):
    """Connection to the blockchain node could not be established."""
    pass


class DeploymentError(ContractClientError):
    """Deployment transaction was rejected or the constructor reverted."""
    pass


class AttachError(ContractClientError):
    """Interface of the contract to attach to could not be resolved."""
    pass


class CallRevertedError(ContractClientError):
    """
    Read-only call failed.

    reason contains the revert reason if the contract provided one.
    """

    def __init__(self, message: str, reason: Optional[str] = None, raw: Any = None):
        super().__init__(message, raw)
        self.reason = reason


class SubmissionError(ContractClientError):
    """Provider rejected a transaction before it was broadcast."""
    pass


class TransactionFailedError(ContractClientError):
    """Transaction did not take effect."""

    def __init__(self, message: str, transaction_id: Optional[str] = None, raw: Any = None):
        super().__init__(message, raw)
        self.transaction_id = transaction_id


class TransactionRevertedError(TransactionFailedError):
    """Transaction execution was reverted."""

    def __init__(self, message: str, transaction_id: Optional[str] = None, reason: Optional[str] = None,
                 receipt: Any = None, raw: Any = None):
        super().__init__(message, transaction_id, raw)
        self.reason = reason
        self.receipt = receipt


class TransactionDroppedError(TransactionFailedError):
    """Transaction was not mined within the confirmation timeout."""
    pass


class InterfaceResolutionError(Exception):
    """No abi/bytecode could be found for a contract name."""
    pass


class SolcException(Exception):
    """ Solc reported error """
    pass
