from typing import Optional
import asyncio
import json
import aiohttp

from mintcart.config import (
    IPFS_API_URL,
    IPFS_GATEWAY_URL,
    IPFS_PROJECT_ID,
    IPFS_PROJECT_SECRET,
    IPFS_TIMEOUT,
)
from mintcart.models.schemas.product import ProductMetadata
from mintcart.utils.errors import StorageUnavailable
from mintcart.utils.logging import get_logger

logger = get_logger(__name__)

IPFS_SCHEME = "ipfs://"


def get_token_uri(cid: str) -> str:
    """Canonical token URI for a content identifier."""
    return f"{IPFS_SCHEME}{cid}"


def get_gateway_url(token_uri: str, gateway_url: str = IPFS_GATEWAY_URL) -> str:
    """HTTP gateway URL for an ipfs:// token URI (or a bare content identifier)."""
    cid = token_uri[len(IPFS_SCHEME):] if token_uri.startswith(IPFS_SCHEME) else token_uri
    return f"{gateway_url.rstrip('/')}/{cid}"


class IpfsService:
    """Publishes product metadata through an IPFS HTTP API node."""

    def __init__(
        self,
        api_url: str = IPFS_API_URL,
        project_id: Optional[str] = IPFS_PROJECT_ID,
        project_secret: Optional[str] = IPFS_PROJECT_SECRET,
        timeout: float = IPFS_TIMEOUT,
        session: Optional[aiohttp.ClientSession] = None,
    ):
        self.api_url = api_url.rstrip("/")
        self.auth = (
            aiohttp.BasicAuth(project_id, project_secret)
            if project_id and project_secret
            else None
        )
        self.timeout = aiohttp.ClientTimeout(total=timeout)
        self.session = session

    async def __aenter__(self):
        """Context manager entry."""
        if not self.session or self.session.closed:
            self.session = aiohttp.ClientSession(auth=self.auth, timeout=self.timeout)
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        """Context manager exit with cleanup."""
        if self.session and not self.session.closed:
            await self.session.close()

    async def publish(self, metadata: ProductMetadata) -> str:
        """
        Upload a metadata document and return its content identifier

        Args:
            metadata: name, slug and description of the product

        Raises:
            StorageUnavailable: If the node errors, times out or returns no hash
        """
        if not self.session or self.session.closed:
            self.session = aiohttp.ClientSession(auth=self.auth, timeout=self.timeout)

        document = json.dumps(metadata.model_dump()).encode()
        form = aiohttp.FormData()
        form.add_field(
            "file", document, filename="metadata.json", content_type="application/json"
        )

        try:
            async with self.session.post(
                f"{self.api_url}/api/v0/add", data=form, params={"pin": "true"}
            ) as response:
                response.raise_for_status()
                data = await response.json(content_type=None)
        except (aiohttp.ClientError, asyncio.TimeoutError, ValueError) as e:
            logger.error(f"Failed to publish metadata for {metadata.slug}: {str(e)}")
            raise StorageUnavailable(f"IPFS publish failed: {str(e)}") from e

        cid = data.get("Hash") if isinstance(data, dict) else None
        if not cid:
            logger.error(f"IPFS response without hash for {metadata.slug}: {data}")
            raise StorageUnavailable("IPFS response did not contain a content identifier")

        logger.info(f"Published metadata for {metadata.slug} as {cid}")
        return cid
