"""Batch manufacturing endpoints."""

from fastapi import APIRouter, Depends, status

from batchcost.api.dependencies import (
    get_batch_traceability_use_case,
    get_create_batch_use_case,
    get_update_batch_use_case,
)
from batchcost.application.dto.requests import CreateBatchRequest, UpdateBatchRequest
from batchcost.application.dto.responses import (
    BatchResponse,
    BatchTraceabilityResponse,
    ErrorResponse,
)
from batchcost.application.use_cases.batch_traceability import BatchTraceabilityUseCase
from batchcost.application.use_cases.record_batch import CreateBatchUseCase, UpdateBatchUseCase

router = APIRouter(prefix="/api/batches", tags=["batches"])


@router.post(
    "",
    response_model=BatchResponse,
    status_code=status.HTTP_201_CREATED,
    responses={400: {"model": ErrorResponse}, 404: {"model": ErrorResponse}},
)
async def create_batch(
    request: CreateBatchRequest,
    use_case: CreateBatchUseCase = Depends(get_create_batch_use_case),
) -> BatchResponse:
    """
    Record a production batch.

    Ingredient consumption (and production, for a finished batch) is
    applied to inventory asynchronously by the batch reactor.
    """
    batch = await use_case.execute(request)
    return use_case.to_response(batch)


@router.patch(
    "/{batch_id}",
    response_model=BatchResponse,
    responses={400: {"model": ErrorResponse}, 404: {"model": ErrorResponse}},
)
async def update_batch(
    batch_id: str,
    request: UpdateBatchRequest,
    use_case: UpdateBatchUseCase = Depends(get_update_batch_use_case),
) -> BatchResponse:
    """Finish a batch or correct its size and bag count."""
    batch = await use_case.execute(batch_id, request)
    return use_case.to_response(batch)


@router.get(
    "/{batch_id}/traceability",
    response_model=BatchTraceabilityResponse,
    responses={404: {"model": ErrorResponse}},
)
async def get_traceability(
    batch_id: str,
    use_case: BatchTraceabilityUseCase = Depends(get_batch_traceability_use_case),
) -> BatchTraceabilityResponse:
    """What the batch consumed, produced and adjusted."""
    trace = await use_case.execute(batch_id)
    return use_case.to_response(trace)
