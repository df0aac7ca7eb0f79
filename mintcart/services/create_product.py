# services/create_product.py
from dataclasses import dataclass
from typing import Awaitable, Callable, Optional, Protocol

from mintcart.config import DASHBOARD_PATH, STOREFRONT_URL
from mintcart.models.enums import FailureKind, WorkflowState
from mintcart.models.schemas.product import ProductDraft, ProductMetadata, ProductRecord
from mintcart.utils.blockchain.factory import get_product_factory_contract
from mintcart.utils.blockchain.signer import Signer
from mintcart.utils.blockchain.types import ProductReceipt
from mintcart.utils.chains.queries import get_native_decimals
from mintcart.utils.errors import (
    CreateProductError,
    PersistenceFailed,
    SubmissionInProgress,
    WalletNotConnected,
)
from mintcart.utils.units import DEFAULT_DECIMALS, format_units, parse_units
from mintcart.utils.logging import get_logger

from .ipfs import get_token_uri

logger = get_logger(__name__)


class MetadataPublisher(Protocol):
    async def publish(self, metadata: ProductMetadata) -> str: ...


class PendingCreate(Protocol):
    hash: str

    async def wait(self) -> ProductReceipt: ...


class FactoryHandle(Protocol):
    address: str

    async def create(
        self, token_uri: str, slug: str, owner: str, price: int, supply: int
    ) -> PendingCreate: ...


class RecordWriter(Protocol):
    async def create(self, chain_id: int, owner_address: str, record: ProductRecord) -> None: ...


class Navigator(Protocol):
    def navigate(self, path: str) -> None: ...


FactoryProvider = Callable[[int, Signer], Awaitable[FactoryHandle]]


class RedirectNavigator:
    """Remembers where the host application should go next."""

    def __init__(self):
        self.location: Optional[str] = None

    def navigate(self, path: str) -> None:
        self.location = path


@dataclass(frozen=True)
class WalletSession:
    """Connected wallet the workflow acts for. Read-only."""
    chain_id: Optional[int]
    address: Optional[str]
    signer: Optional[Signer]
    display_address: Optional[str] = None

    @property
    def is_connected(self) -> bool:
        return bool(self.address) and self.signer is not None and self.chain_id is not None

    @property
    def display(self) -> str:
        if self.display_address:
            return self.display_address
        return self.address or ""


class CreateProductWorkflow:
    """
    Publishes product metadata, creates the product through the factory
    contract, waits for confirmation, stores the record and navigates to
    the dashboard, strictly in that order.

    Any failure stops the remaining steps. Completed steps are not undone:
    a confirmed transaction stays on chain even if storing the record fails.
    """

    def __init__(
        self,
        session: WalletSession,
        storage: MetadataPublisher,
        records: RecordWriter,
        navigator: Navigator,
        get_factory: FactoryProvider = get_product_factory_contract,
        dashboard_path: str = DASHBOARD_PATH,
        storefront_url: str = STOREFRONT_URL,
    ):
        self.session = session
        self.storage = storage
        self.records = records
        self.navigator = navigator
        self.get_factory = get_factory
        self.dashboard_path = dashboard_path
        self.storefront_url = storefront_url.rstrip("/")

        self.state = WorkflowState.IDLE
        self.failure: Optional[FailureKind] = None
        self.error_message: Optional[str] = None
        self.receipt: Optional[ProductReceipt] = None
        self.record: Optional[ProductRecord] = None
        self._in_flight = False

    @property
    def is_available(self) -> bool:
        """Products can only be created with a connected wallet."""
        return self.session.is_connected

    @property
    def loading(self) -> bool:
        return self._in_flight

    def product_url(self, slug: str) -> str:
        return f"{self.storefront_url}/{self.session.display}/{slug}"

    def reset(self) -> None:
        """Return to a resubmittable state."""
        if self._in_flight:
            raise SubmissionInProgress("Cannot reset while a submission is in flight")
        self.state = WorkflowState.IDLE
        self._clear_outcome()

    def _clear_outcome(self) -> None:
        self.failure = None
        self.error_message = None
        self.receipt = None
        self.record = None

    def _transition(self, state: WorkflowState) -> None:
        logger.info(f"create-product {self.state.value} -> {state.value}")
        self.state = state

    def _decimals(self) -> int:
        try:
            return get_native_decimals(self.session.chain_id)
        except ValueError:
            return DEFAULT_DECIMALS

    async def submit(self, draft: ProductDraft) -> str:
        """
        Run the workflow for a draft and return the path navigated to

        Raises:
            WalletNotConnected: If no wallet is connected (nothing is called)
            SubmissionInProgress: If another submission has not finished
            CreateProductError: The failure of the first step that failed
        """
        if not self.is_available:
            raise WalletNotConnected("Connect a wallet to create a product")
        if self._in_flight:
            raise SubmissionInProgress("A product is already being created")

        self._in_flight = True
        self.state = WorkflowState.IDLE
        self._clear_outcome()
        chain_id = self.session.chain_id
        owner = self.session.address

        try:
            decimals = self._decimals()
            price = parse_units(draft.price, decimals)
            logger.info(
                f"Creating {draft.slug} for {owner} on chain {chain_id}: "
                f"price {format_units(price, decimals)}, supply {draft.supply}"
            )

            self._transition(WorkflowState.PUBLISHING_METADATA)
            cid = await self.storage.publish(draft.metadata())
            token_uri = get_token_uri(cid)

            self._transition(WorkflowState.SUBMITTING_TX)
            factory = await self.get_factory(chain_id, self.session.signer)
            tx = await factory.create(token_uri, draft.slug, owner, price, draft.supply)

            self._transition(WorkflowState.AWAITING_CONFIRMATION)
            self.receipt = await tx.wait()

            self._transition(WorkflowState.PERSISTING_RECORD)
            record = ProductRecord(
                contract=self.receipt.contract_address,
                name=draft.name,
                description=draft.description,
                slug=draft.slug,
                token_uri=token_uri,
                price=draft.price,
                supply=draft.supply,
                sold=0,
            )
            try:
                await self.records.create(chain_id, owner, record)
            except PersistenceFailed:
                logger.error(
                    f"Product {draft.slug} confirmed on chain {chain_id} in {self.receipt.tx_hash} "
                    f"at {self.receipt.contract_address} but its record was not stored"
                )
                raise
            self.record = record

            self._transition(WorkflowState.DONE)
        except CreateProductError as e:
            self._fail(e.kind, e.user_message, e.message)
            raise
        except Exception as e:
            self._fail(FailureKind.UNEXPECTED, CreateProductError.user_message, str(e))
            raise
        finally:
            self._in_flight = False

        self.navigator.navigate(self.dashboard_path)
        return self.dashboard_path

    def _fail(self, kind: FailureKind, user_message: str, detail: str) -> None:
        logger.error(f"create-product failed in {self.state.value}: {kind.value}: {detail}")
        self.state = WorkflowState.FAILED
        self.failure = kind
        self.error_message = user_message
