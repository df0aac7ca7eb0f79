from typing import Optional
import asyncio
import aiohttp

from mintcart.config import BACKEND_URL, BACKEND_TIMEOUT
from mintcart.models.schemas.product import ProductRecord
from mintcart.utils.errors import PersistenceFailed
from mintcart.utils.logging import get_logger

logger = get_logger(__name__)


class ProductRecordClient:
    """Writes product records to the storefront backend over REST."""

    def __init__(
        self,
        base_url: str = BACKEND_URL,
        timeout: float = BACKEND_TIMEOUT,
        session: Optional[aiohttp.ClientSession] = None,
    ):
        self.base_url = base_url.rstrip("/")
        self.headers = {"accept": "application/json", "content-type": "application/json"}
        self.timeout = aiohttp.ClientTimeout(total=timeout)
        self.session = session

    async def __aenter__(self):
        """Context manager entry."""
        if not self.session or self.session.closed:
            self.session = aiohttp.ClientSession(headers=self.headers, timeout=self.timeout)
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        """Context manager exit with cleanup."""
        if self.session and not self.session.closed:
            await self.session.close()

    async def create(self, chain_id: int, owner_address: str, record: ProductRecord) -> None:
        """
        POST the record to /api/{chain_id}/{owner_address}/products

        Raises:
            PersistenceFailed: On a non-2xx response or a network error
        """
        if not self.session or self.session.closed:
            self.session = aiohttp.ClientSession(headers=self.headers, timeout=self.timeout)

        url = f"{self.base_url}/api/{int(chain_id)}/{owner_address}/products"
        body = record.model_dump(by_alias=True)

        try:
            async with self.session.post(url, json=body) as response:
                if not 200 <= response.status < 300:
                    detail = await response.text()
                    logger.error(
                        f"Backend rejected product {record.slug} ({response.status}): {detail}"
                    )
                    raise PersistenceFailed(
                        f"Backend responded with {response.status}", status=response.status
                    )
        except (aiohttp.ClientError, asyncio.TimeoutError) as e:
            logger.error(f"Failed to store product {record.slug}: {str(e)}")
            raise PersistenceFailed(f"Backend request failed: {str(e)}") from e

        logger.info(f"Stored product {record.slug} for {owner_address} on chain {int(chain_id)}")
