from typing import Optional

from mintcart.models.enums import FailureKind


class CreateProductError(Exception):
    """Base exception for failures of the create-product workflow"""
    kind: FailureKind = FailureKind.UNEXPECTED
    status_code: int = 500
    user_message: str = "Something went wrong while creating the product."

    def __init__(self, message: Optional[str] = None):
        self.message = message or self.user_message
        super().__init__(self.message)


class InvalidAmount(CreateProductError):
    """Raised when a price is not a valid non-negative decimal"""
    kind = FailureKind.INVALID_AMOUNT
    status_code = 422
    user_message = "The price must be a non-negative decimal number."


class StorageUnavailable(CreateProductError):
    """Raised when metadata cannot be published to IPFS"""
    kind = FailureKind.STORAGE_UNAVAILABLE
    status_code = 503
    user_message = "Product metadata could not be uploaded. Please try again."


class TransactionRejected(CreateProductError):
    """Raised when the signer declines to sign the transaction"""
    kind = FailureKind.TRANSACTION_REJECTED
    status_code = 403
    user_message = "The transaction was rejected by the wallet."


class SubmissionFailed(CreateProductError):
    """Raised when the transaction could not be broadcast"""
    kind = FailureKind.SUBMISSION_FAILED
    status_code = 502
    user_message = "The transaction could not be submitted to the network."


class TransactionReverted(CreateProductError):
    """Raised when the chain reports the transaction as failed"""
    kind = FailureKind.TRANSACTION_REVERTED
    status_code = 422
    user_message = "The transaction was reverted on chain."

    def __init__(self, message: Optional[str] = None, tx_hash: Optional[str] = None):
        self.tx_hash = tx_hash
        super().__init__(message)


class ConfirmationTimeout(CreateProductError):
    """Raised when the transaction is not confirmed in time"""
    kind = FailureKind.CONFIRMATION_TIMEOUT
    status_code = 504
    user_message = "The transaction was not confirmed in time. Check your wallet before retrying."

    def __init__(self, message: Optional[str] = None, tx_hash: Optional[str] = None):
        self.tx_hash = tx_hash
        super().__init__(message)


class PersistenceFailed(CreateProductError):
    """Raised when the product record could not be stored"""
    kind = FailureKind.PERSISTENCE_FAILED
    status_code = 502
    user_message = "The product was created on chain but could not be saved."

    def __init__(self, message: Optional[str] = None, status: Optional[int] = None):
        self.status = status
        super().__init__(message)


class WalletNotConnected(Exception):
    """Raised when the workflow is used without a connected wallet"""
    pass


class SubmissionInProgress(Exception):
    """Raised when a submission is started while another is in flight"""
    pass
