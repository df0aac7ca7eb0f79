from typing import AsyncIterator

from mintcart.config import SIGNER_PRIVATE_KEY
from mintcart.database.database import get_db
from mintcart.services.create_product import (
    CreateProductWorkflow,
    RedirectNavigator,
    WalletSession,
)
from mintcart.services.ipfs import IpfsService
from mintcart.services.records import ProductRecordClient
from mintcart.utils.blockchain.signer import LocalAccountSigner
from mintcart.utils.chains.queries import get_factory_address
from mintcart.utils.types import ChainId

__all__ = ["get_db", "get_wallet_session", "get_create_product_workflow"]


def _shorten(address: str) -> str:
    return f"{address[:6]}...{address[-4:]}"


def get_wallet_session(chain_id: ChainId) -> WalletSession:
    """Wallet of the service's configured signer; disconnected when none is configured."""
    if not SIGNER_PRIVATE_KEY:
        return WalletSession(chain_id=chain_id, address=None, signer=None)

    try:
        allowed_contracts = [get_factory_address(chain_id)]
    except ValueError:
        allowed_contracts = None

    signer = LocalAccountSigner.from_key(SIGNER_PRIVATE_KEY, allowed_contracts=allowed_contracts)
    return WalletSession(
        chain_id=chain_id,
        address=signer.address,
        signer=signer,
        display_address=_shorten(signer.address),
    )


async def get_create_product_workflow(chain_id: ChainId) -> AsyncIterator[CreateProductWorkflow]:
    session = get_wallet_session(chain_id)
    async with IpfsService() as storage, ProductRecordClient() as records:
        yield CreateProductWorkflow(
            session=session,
            storage=storage,
            records=records,
            navigator=RedirectNavigator(),
        )
