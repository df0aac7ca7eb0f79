"""
Pytest configuration and shared fixtures.
"""

import os

os.environ.setdefault("DATABASE_URL", "sqlite://")

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from mintcart.database.dependencies import get_db
from mintcart.main import app
from mintcart.models.database_models import Base
from mintcart.models.schemas.product import ProductDraft
from mintcart.services.create_product import (
    CreateProductWorkflow,
    RedirectNavigator,
    WalletSession,
)
from mintcart.utils.blockchain.signer import Signer
from mintcart.utils.blockchain.types import ProductReceipt

FACTORY_ADDRESS = "0x5FbDB2315678afecb367f032d93F642f64180aa3"
TX_HASH = "0x" + "ab" * 32


class FakeSigner(Signer):
    def __init__(self, address: str = "0xABC"):
        self.address = address

    async def sign_transaction(self, tx):
        return b"signed"


class FakeStorage:
    def __init__(self, calls, cid="Qm123", error=None):
        self.calls = calls
        self.cid = cid
        self.error = error

    async def publish(self, metadata):
        self.calls.append(("publish", metadata.model_dump()))
        if self.error:
            raise self.error
        return self.cid


class FakePending:
    def __init__(self, calls, receipt, error=None):
        self.calls = calls
        self.receipt = receipt
        self.error = error
        self.hash = receipt.tx_hash

    async def wait(self):
        self.calls.append(("wait",))
        if self.error:
            raise self.error
        return self.receipt


class FakeFactory:
    def __init__(self, calls, address=FACTORY_ADDRESS, error=None, wait_error=None):
        self.calls = calls
        self.address = address
        self.error = error
        self.wait_error = wait_error

    async def create(self, token_uri, slug, owner, price, supply):
        self.calls.append(("create", token_uri, slug, owner, price, supply))
        if self.error:
            raise self.error
        receipt = ProductReceipt(tx_hash=TX_HASH, block_number=7, contract_address=self.address)
        return FakePending(self.calls, receipt, error=self.wait_error)


class FakeRecords:
    def __init__(self, calls, error=None):
        self.calls = calls
        self.error = error

    async def create(self, chain_id, owner_address, record):
        self.calls.append(("post", f"/api/{chain_id}/{owner_address}/products", record.model_dump(by_alias=True)))
        if self.error:
            raise self.error


class RecordingNavigator(RedirectNavigator):
    def __init__(self, calls):
        super().__init__()
        self.calls = calls

    def navigate(self, path):
        self.calls.append(("navigate", path))
        super().navigate(path)


@pytest.fixture
def calls():
    """Ordered log of every collaborator call."""
    return []


@pytest.fixture
def session():
    return WalletSession(chain_id=1, address="0xABC", signer=FakeSigner(), display_address="0xABC")


@pytest.fixture
def factory(calls):
    return FakeFactory(calls)


@pytest.fixture
def make_workflow(calls, session, factory):
    """Build a workflow whose collaborators all log into `calls`."""

    def _make(
        storage=None,
        records=None,
        factory_handle=None,
        wallet=None,
    ):
        handle = factory_handle or factory

        async def get_factory(chain_id, signer):
            calls.append(("get_factory", chain_id, signer.address))
            return handle

        return CreateProductWorkflow(
            session=wallet or session,
            storage=storage or FakeStorage(calls),
            records=records or FakeRecords(calls),
            navigator=RecordingNavigator(calls),
            get_factory=get_factory,
        )

    return _make


@pytest.fixture
def mug_draft():
    return ProductDraft(name="Mug", slug="mug", description="A mug", price="0.05", supply="10")


@pytest.fixture
def db_session():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(engine)
    TestingSession = sessionmaker(autocommit=False, autoflush=False, bind=engine)
    db = TestingSession()
    try:
        yield db
    finally:
        db.close()
        Base.metadata.drop_all(engine)


@pytest.fixture
def client(db_session):
    def _get_db():
        yield db_session

    app.dependency_overrides[get_db] = _get_db
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()
