"""Stock movement endpoints: receipts, sales, wastage and manual adjustment."""

from fastapi import APIRouter, Depends, status

from batchcost.api.dependencies import (
    get_adjust_stock_use_case,
    get_receive_stock_use_case,
    get_record_sale_use_case,
    get_record_wastage_use_case,
)
from batchcost.application.dto.requests import (
    AdjustStockRequest,
    ReceiveStockRequest,
    RecordSaleRequest,
    RecordWastageRequest,
)
from batchcost.application.dto.responses import (
    ErrorResponse,
    ReceiveStockResponse,
    SaleResponse,
    StockChangeResponse,
)
from batchcost.application.use_cases.adjust_stock import AdjustStockUseCase
from batchcost.application.use_cases.receive_stock import ReceiveStockUseCase
from batchcost.application.use_cases.record_sale import RecordSaleUseCase
from batchcost.application.use_cases.record_wastage import RecordWastageUseCase

router = APIRouter(prefix="/api/stock", tags=["stock"])


@router.post(
    "/receive",
    response_model=ReceiveStockResponse,
    status_code=status.HTTP_201_CREATED,
    responses={404: {"model": ErrorResponse}, 422: {"model": ErrorResponse}},
)
async def receive_stock(
    request: ReceiveStockRequest,
    use_case: ReceiveStockUseCase = Depends(get_receive_stock_use_case),
) -> ReceiveStockResponse:
    """Record a supplier delivery and refresh dependent costs."""
    result = await use_case.execute(request)
    return use_case.to_response(result)


@router.post(
    "/wastage",
    response_model=StockChangeResponse,
    status_code=status.HTTP_201_CREATED,
    responses={
        404: {"model": ErrorResponse},
        409: {"model": ErrorResponse},
    },
)
async def record_wastage(
    request: RecordWastageRequest,
    use_case: RecordWastageUseCase = Depends(get_record_wastage_use_case),
) -> StockChangeResponse:
    """Write off final product stock with a balance check."""
    result = await use_case.execute(request)
    return use_case.to_response(result)


@router.post(
    "/adjust",
    response_model=StockChangeResponse,
    responses={
        400: {"model": ErrorResponse},
        404: {"model": ErrorResponse},
    },
)
async def adjust_stock(
    request: AdjustStockRequest,
    use_case: AdjustStockUseCase = Depends(get_adjust_stock_use_case),
) -> StockChangeResponse:
    """Manual stock-take correction."""
    result = await use_case.execute(request)
    return use_case.to_response(result)


@router.post(
    "/sale",
    response_model=SaleResponse,
    status_code=status.HTTP_201_CREATED,
    responses={
        404: {"model": ErrorResponse},
        409: {"model": ErrorResponse},
    },
)
async def record_sale(
    request: RecordSaleRequest,
    use_case: RecordSaleUseCase = Depends(get_record_sale_use_case),
) -> SaleResponse:
    """Take sold final product out of stock; all lines or none."""
    result = await use_case.execute(request)
    return use_case.to_response(result)
