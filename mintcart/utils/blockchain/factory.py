import asyncio
import json

from web3 import AsyncWeb3, Web3
from web3.contract import AsyncContract
from web3.exceptions import TimeExhausted
from web3.logs import DISCARD
from web3.types import TxReceipt
from eth_utils.address import to_checksum_address

from mintcart.config import CONFIRMATIONS, CONFIRMATION_TIMEOUT, CONFIRMATION_POLL_LATENCY
from mintcart.utils.types import ChainId
from mintcart.utils.chains.queries import get_factory_address, get_rpc_by_chain_id
from mintcart.utils.errors import (
    ConfirmationTimeout,
    SubmissionFailed,
    TransactionRejected,
    TransactionReverted,
)
from mintcart.utils.logging import get_logger
from .abis import PRODUCT_FACTORY_ABI
from .signer import Signer
from .types import ProductReceipt

logger = get_logger(__name__)


async def _get_web3_client(chain_id: ChainId) -> AsyncWeb3:
    """Helper function to create Web3 client."""
    rpc_url = get_rpc_by_chain_id(chain_id)
    return AsyncWeb3(AsyncWeb3.AsyncHTTPProvider(rpc_url))


class PendingTransaction:
    """A broadcast factory call that has not been confirmed yet."""

    def __init__(
        self,
        w3: AsyncWeb3,
        tx_hash: bytes,
        factory: "ProductFactory",
        confirmations: int = CONFIRMATIONS,
        timeout: float = CONFIRMATION_TIMEOUT,
        poll_latency: float = CONFIRMATION_POLL_LATENCY,
    ):
        self.w3 = w3
        self.tx_hash = tx_hash
        self.factory = factory
        self.confirmations = max(confirmations, 1)
        self.timeout = timeout
        self.poll_latency = poll_latency

    @property
    def hash(self) -> str:
        return Web3.to_hex(self.tx_hash)

    async def wait(self) -> ProductReceipt:
        """
        Wait until the transaction is mined and buried under the required
        number of confirmations.

        Raises:
            TransactionReverted: If the receipt reports failure
            ConfirmationTimeout: If the receipt or the confirmations do not
                arrive within the timeout
        """
        try:
            receipt = await self.w3.eth.wait_for_transaction_receipt(
                self.tx_hash, timeout=self.timeout, poll_latency=self.poll_latency
            )
        except TimeExhausted as e:
            logger.error(f"No receipt for {self.hash} after {self.timeout}s")
            raise ConfirmationTimeout(
                f"Transaction {self.hash} not mined within {self.timeout}s", tx_hash=self.hash
            ) from e
        except Exception as e:
            logger.error(f"Failed to fetch receipt for {self.hash}: {str(e)}")
            raise ConfirmationTimeout(
                f"Could not confirm transaction {self.hash}: {str(e)}", tx_hash=self.hash
            ) from e

        if receipt["status"] != 1:
            logger.error(f"Transaction {self.hash} reverted in block {receipt['blockNumber']}")
            raise TransactionReverted(f"Transaction {self.hash} reverted", tx_hash=self.hash)

        if self.confirmations > 1:
            await self._wait_for_depth(receipt["blockNumber"])

        return ProductReceipt(
            tx_hash=self.hash,
            block_number=receipt["blockNumber"],
            contract_address=self.factory.product_address(receipt),
        )

    async def _wait_for_depth(self, block_number: int) -> None:
        target = block_number + self.confirmations - 1

        async def _poll():
            while await self.w3.eth.block_number < target:
                await asyncio.sleep(self.poll_latency)

        try:
            await asyncio.wait_for(_poll(), timeout=self.timeout)
        except asyncio.TimeoutError as e:
            logger.error(f"{self.hash} did not reach {self.confirmations} confirmations")
            raise ConfirmationTimeout(
                f"Transaction {self.hash} did not reach {self.confirmations} confirmations",
                tx_hash=self.hash,
            ) from e
        except Exception as e:
            logger.error(f"Failed to poll confirmations for {self.hash}: {str(e)}")
            raise ConfirmationTimeout(
                f"Could not confirm transaction {self.hash}: {str(e)}", tx_hash=self.hash
            ) from e


class ProductFactory:
    """Handle to the product factory contract, scoped to one chain and signer."""

    def __init__(
        self,
        w3: AsyncWeb3,
        contract: AsyncContract,
        signer: Signer,
        confirmations: int = CONFIRMATIONS,
        timeout: float = CONFIRMATION_TIMEOUT,
        poll_latency: float = CONFIRMATION_POLL_LATENCY,
    ):
        self.w3 = w3
        self.contract = contract
        self.signer = signer
        self.confirmations = confirmations
        self.timeout = timeout
        self.poll_latency = poll_latency

    @property
    def address(self) -> str:
        return self.contract.address

    async def create(
        self, token_uri: str, slug: str, owner: str, price: int, supply: int
    ) -> PendingTransaction:
        """
        Build, sign and broadcast a call to the factory's create entry point

        Raises:
            TransactionRejected: If the signer declines
            SubmissionFailed: If the transaction cannot be built or broadcast
        """
        try:
            create_fn = self.contract.functions.create(
                token_uri, slug, to_checksum_address(owner), price, supply
            )
            nonce = await self.w3.eth.get_transaction_count(self.signer.address, "pending")
            tx = await create_fn.build_transaction({"from": self.signer.address, "nonce": nonce})
        except Exception as e:
            logger.error(f"Failed to build create transaction for {slug}: {str(e)}")
            raise SubmissionFailed(f"Could not build transaction: {str(e)}") from e

        try:
            raw_tx = await self.signer.sign_transaction(tx)
        except TransactionRejected:
            raise
        except Exception as e:
            logger.error(f"Signer {self.signer.address} failed for {slug}: {str(e)}")
            raise TransactionRejected(f"Signing failed: {str(e)}") from e

        try:
            tx_hash = await self.w3.eth.send_raw_transaction(raw_tx)
        except Exception as e:
            logger.error(f"Failed to broadcast create transaction for {slug}: {str(e)}")
            raise SubmissionFailed(f"Could not broadcast transaction: {str(e)}") from e

        pending = PendingTransaction(
            self.w3,
            tx_hash,
            self,
            confirmations=self.confirmations,
            timeout=self.timeout,
            poll_latency=self.poll_latency,
        )
        logger.info(f"Submitted create for {slug}: {pending.hash}")
        return pending

    def product_address(self, receipt: TxReceipt) -> str:
        """Product address from the ProductCreated event, or the factory's own address."""
        events = self.contract.events.ProductCreated().process_receipt(receipt, errors=DISCARD)
        for event in events:
            return to_checksum_address(event["args"]["product"])
        return self.address


async def get_product_factory_contract(chain_id: ChainId, signer: Signer) -> ProductFactory:
    """Get the product factory handle for a chain, signing with the given signer."""
    try:
        w3 = await _get_web3_client(chain_id)
        address = get_factory_address(chain_id)
    except ValueError as e:
        logger.error(f"Product factory unavailable on chain {chain_id}: {str(e)}")
        raise SubmissionFailed(str(e)) from e

    contract = w3.eth.contract(
        address=to_checksum_address(address), abi=json.loads(PRODUCT_FACTORY_ABI)
    )
    return ProductFactory(w3, contract, signer)
