"""
Unit tests for CreateProductWorkflow.
"""
import asyncio

import pytest

from mintcart.models.enums import FailureKind, WorkflowState
from mintcart.models.schemas.product import ProductDraft
from mintcart.services.create_product import WalletSession
from mintcart.utils.errors import (
    ConfirmationTimeout,
    InvalidAmount,
    PersistenceFailed,
    StorageUnavailable,
    SubmissionFailed,
    SubmissionInProgress,
    TransactionRejected,
    TransactionReverted,
    WalletNotConnected,
)

from conftest import FACTORY_ADDRESS, FakeFactory, FakeRecords, FakeStorage


@pytest.mark.asyncio
class TestCreateProductWorkflow:
    """Tests for the happy path and step ordering."""

    async def test_mug_end_to_end(self, make_workflow, mug_draft, calls):
        workflow = make_workflow()

        redirect = await workflow.submit(mug_draft)

        assert redirect == "/dashboard"
        assert calls == [
            ("publish", {"name": "Mug", "slug": "mug", "description": "A mug"}),
            ("get_factory", 1, "0xABC"),
            ("create", "ipfs://Qm123", "mug", "0xABC", 50000000000000000, 10),
            ("wait",),
            (
                "post",
                "/api/1/0xABC/products",
                {
                    "contract": FACTORY_ADDRESS,
                    "name": "Mug",
                    "description": "A mug",
                    "slug": "mug",
                    "tokenUri": "ipfs://Qm123",
                    "price": "0.05",
                    "supply": 10,
                    "sold": 0,
                },
            ),
            ("navigate", "/dashboard"),
        ]
        assert workflow.state == WorkflowState.DONE
        assert workflow.failure is None
        assert workflow.navigator.location == "/dashboard"
        assert not workflow.loading

    async def test_token_uri_is_derived_from_cid(self, make_workflow, mug_draft, calls):
        workflow = make_workflow(storage=FakeStorage(calls, cid="bafyfoo"))

        await workflow.submit(mug_draft)

        create_call = next(c for c in calls if c[0] == "create")
        assert create_call[1] == "ipfs://bafyfoo"
        assert workflow.record.token_uri == "ipfs://bafyfoo"

    async def test_record_uses_confirmed_contract_address(self, make_workflow, mug_draft, calls):
        product_address = "0x00000000000000000000000000000000000000aa"
        workflow = make_workflow(factory_handle=FakeFactory(calls, address=product_address))

        await workflow.submit(mug_draft)

        assert workflow.receipt.contract_address == product_address
        post = next(c for c in calls if c[0] == "post")
        assert post[2]["contract"] == product_address

    async def test_product_url(self, make_workflow):
        workflow = make_workflow()

        assert workflow.product_url("mug") == "https://mintcart.xyz/0xABC/mug"


@pytest.mark.asyncio
class TestCreateProductFailures:
    """A failing step stops every later step."""

    async def test_invalid_price_fails_before_any_call(self, make_workflow, calls):
        workflow = make_workflow()
        draft = ProductDraft(name="Mug", slug="mug", price="abc", supply=1)

        with pytest.raises(InvalidAmount):
            await workflow.submit(draft)

        assert calls == []
        assert workflow.state == WorkflowState.FAILED
        assert workflow.failure == FailureKind.INVALID_AMOUNT

    @pytest.mark.parametrize("price", ["9" * 5000, str(2 ** 256)])
    async def test_oversized_price_fails_before_any_call(self, make_workflow, calls, price):
        workflow = make_workflow()
        draft = ProductDraft(name="Mug", slug="mug", price=price, supply=1)

        with pytest.raises(InvalidAmount):
            await workflow.submit(draft)

        assert calls == []
        assert workflow.failure == FailureKind.INVALID_AMOUNT

    async def test_storage_failure(self, make_workflow, mug_draft, calls):
        workflow = make_workflow(storage=FakeStorage(calls, error=StorageUnavailable("down")))

        with pytest.raises(StorageUnavailable):
            await workflow.submit(mug_draft)

        assert [c[0] for c in calls] == ["publish"]
        assert workflow.failure == FailureKind.STORAGE_UNAVAILABLE

    @pytest.mark.parametrize("error", [TransactionRejected("no"), SubmissionFailed("node down")])
    async def test_submission_failure_writes_no_record(self, make_workflow, mug_draft, calls, error):
        workflow = make_workflow(factory_handle=FakeFactory(calls, error=error))

        with pytest.raises(type(error)):
            await workflow.submit(mug_draft)

        assert [c[0] for c in calls] == ["publish", "get_factory", "create"]
        assert workflow.failure == error.kind
        assert workflow.navigator.location is None

    @pytest.mark.parametrize(
        "error", [TransactionReverted("reverted"), ConfirmationTimeout("slow")]
    )
    async def test_confirmation_failure_writes_no_record(self, make_workflow, mug_draft, calls, error):
        workflow = make_workflow(factory_handle=FakeFactory(calls, wait_error=error))

        with pytest.raises(type(error)):
            await workflow.submit(mug_draft)

        assert [c[0] for c in calls] == ["publish", "get_factory", "create", "wait"]
        assert workflow.state == WorkflowState.FAILED

    async def test_backend_500_after_confirmation(self, make_workflow, mug_draft, calls):
        records = FakeRecords(calls, error=PersistenceFailed("Backend responded with 500", status=500))
        workflow = make_workflow(records=records)

        with pytest.raises(PersistenceFailed):
            await workflow.submit(mug_draft)

        assert [c[0] for c in calls] == ["publish", "get_factory", "create", "wait", "post"]
        # the transaction stays confirmed, nothing navigates
        assert workflow.receipt is not None
        assert workflow.navigator.location is None
        assert workflow.failure == FailureKind.PERSISTENCE_FAILED
        assert workflow.error_message == PersistenceFailed.user_message

    async def test_failure_is_resubmittable(self, make_workflow, mug_draft, calls):
        storage = FakeStorage(calls, error=StorageUnavailable("down"))
        workflow = make_workflow(storage=storage)

        with pytest.raises(StorageUnavailable):
            await workflow.submit(mug_draft)
        assert not workflow.loading

        storage.error = None
        assert await workflow.submit(mug_draft) == "/dashboard"
        assert workflow.state == WorkflowState.DONE
        assert workflow.failure is None

    async def test_unexpected_error_is_recorded(self, make_workflow, mug_draft, calls):
        workflow = make_workflow(storage=FakeStorage(calls, error=RuntimeError("boom")))

        with pytest.raises(RuntimeError):
            await workflow.submit(mug_draft)

        assert workflow.failure == FailureKind.UNEXPECTED
        assert not workflow.loading

    async def test_reset(self, make_workflow, mug_draft, calls):
        workflow = make_workflow(storage=FakeStorage(calls, error=StorageUnavailable("down")))
        with pytest.raises(StorageUnavailable):
            await workflow.submit(mug_draft)

        workflow.reset()

        assert workflow.state == WorkflowState.IDLE
        assert workflow.failure is None
        assert workflow.error_message is None


@pytest.mark.asyncio
class TestCreateProductGuards:
    async def test_disconnected_wallet_is_not_offered(self, make_workflow, mug_draft, calls):
        workflow = make_workflow(wallet=WalletSession(chain_id=1, address=None, signer=None))

        assert not workflow.is_available
        with pytest.raises(WalletNotConnected):
            await workflow.submit(mug_draft)

        assert calls == []
        assert workflow.state == WorkflowState.IDLE

    async def test_one_submission_at_a_time(self, make_workflow, mug_draft, calls):
        release = asyncio.Event()

        class SlowStorage(FakeStorage):
            async def publish(self, metadata):
                await release.wait()
                return await super().publish(metadata)

        workflow = make_workflow(storage=SlowStorage(calls))
        first = asyncio.create_task(workflow.submit(mug_draft))
        await asyncio.sleep(0)

        assert workflow.loading
        with pytest.raises(SubmissionInProgress):
            await workflow.submit(mug_draft)

        release.set()
        assert await first == "/dashboard"
        assert [c[0] for c in calls].count("publish") == 1
