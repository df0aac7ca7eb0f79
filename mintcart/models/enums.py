from enum import Enum


class WorkflowState(str, Enum):
    IDLE = "IDLE"
    PUBLISHING_METADATA = "PUBLISHING_METADATA"
    SUBMITTING_TX = "SUBMITTING_TX"
    AWAITING_CONFIRMATION = "AWAITING_CONFIRMATION"
    PERSISTING_RECORD = "PERSISTING_RECORD"
    DONE = "DONE"
    FAILED = "FAILED"


class FailureKind(str, Enum):
    INVALID_AMOUNT = "INVALID_AMOUNT"
    STORAGE_UNAVAILABLE = "STORAGE_UNAVAILABLE"
    TRANSACTION_REJECTED = "TRANSACTION_REJECTED"
    SUBMISSION_FAILED = "SUBMISSION_FAILED"
    TRANSACTION_REVERTED = "TRANSACTION_REVERTED"
    CONFIRMATION_TIMEOUT = "CONFIRMATION_TIMEOUT"
    PERSISTENCE_FAILED = "PERSISTENCE_FAILED"
    UNEXPECTED = "UNEXPECTED"
