from abc import ABC, abstractmethod
from typing import Iterable, Optional

from eth_account import Account
from eth_account.signers.local import LocalAccount
from eth_utils.address import to_checksum_address
from web3.types import TxParams

from mintcart.utils.errors import TransactionRejected
from mintcart.utils.logging import get_logger

logger = get_logger(__name__)


class Signer(ABC):
    """Credential that approves and signs transactions for one address."""

    address: str

    @abstractmethod
    async def sign_transaction(self, tx: TxParams) -> bytes:
        """Return the raw signed transaction, or raise TransactionRejected."""


class LocalAccountSigner(Signer):
    """Signs with a local private key, optionally only for a set of contracts."""

    def __init__(self, account: LocalAccount, allowed_contracts: Optional[Iterable[str]] = None):
        self.account = account
        self.address = account.address
        self.allowed_contracts = (
            {to_checksum_address(a) for a in allowed_contracts}
            if allowed_contracts is not None
            else None
        )

    @classmethod
    def from_key(cls, private_key: str, allowed_contracts: Optional[Iterable[str]] = None) -> "LocalAccountSigner":
        return cls(Account.from_key(private_key), allowed_contracts=allowed_contracts)

    async def sign_transaction(self, tx: TxParams) -> bytes:
        to = tx.get("to")
        if self.allowed_contracts is not None and (
            to is None or to_checksum_address(to) not in self.allowed_contracts
        ):
            logger.warning(f"Signer {self.address} declined transaction to {to}")
            raise TransactionRejected(f"Signer {self.address} declined transaction to {to}")

        signed_tx = self.account.sign_transaction(tx)
        return signed_tx.raw_transaction
