# routes/create.py
from fastapi import APIRouter, Depends, HTTPException, status
from fastapi.responses import JSONResponse

from mintcart.database.dependencies import get_create_product_workflow
from mintcart.models.enums import FailureKind
from mintcart.models.schemas.product import (
    CreateProductResponse,
    ProductDraft,
    WorkflowErrorResponse,
)
from mintcart.services.create_product import CreateProductWorkflow
from mintcart.services.ipfs import get_gateway_url
from mintcart.utils.errors import CreateProductError, SubmissionInProgress, WalletNotConnected

router = APIRouter(prefix="/api/{chain_id}/products", tags=["create product"])


def _error_response(status_code: int, kind: str, message: str) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content=WorkflowErrorResponse(kind=kind, message=message).model_dump(),
    )


@router.post(
    "/create",
    response_model=CreateProductResponse,
    responses={
        401: {"description": "No wallet connected"},
        403: {"model": WorkflowErrorResponse},
        409: {"description": "A product is already being created"},
        422: {"model": WorkflowErrorResponse},
        500: {"model": WorkflowErrorResponse},
        502: {"model": WorkflowErrorResponse},
        503: {"model": WorkflowErrorResponse},
        504: {"model": WorkflowErrorResponse},
    },
)
async def create_product(
    draft: ProductDraft,
    workflow: CreateProductWorkflow = Depends(get_create_product_workflow),
):
    """Publish metadata, create the product on chain and store its record."""
    if not workflow.is_available:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Connect a wallet to create products",
        )

    try:
        redirect = await workflow.submit(draft)
    except WalletNotConnected as e:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail=str(e))
    except SubmissionInProgress as e:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=str(e))
    except CreateProductError as e:
        return _error_response(e.status_code, e.kind.value, e.user_message)
    except Exception:
        # already logged and recorded by the workflow
        kind = workflow.failure or FailureKind.UNEXPECTED
        return _error_response(
            status.HTTP_500_INTERNAL_SERVER_ERROR,
            kind.value,
            workflow.error_message or CreateProductError.user_message,
        )

    return CreateProductResponse(
        redirect=redirect,
        url=workflow.product_url(draft.slug),
        metadata_url=get_gateway_url(workflow.record.token_uri),
        tx_hash=workflow.receipt.tx_hash,
        product=workflow.record,
    )
