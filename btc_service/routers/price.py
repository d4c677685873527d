"""
行情路由
GET /api/price   - 获取比特币行情（带缓存）
"""

import logging

from fastapi import APIRouter, Depends, status
from fastapi.responses import JSONResponse

from btc_service.layers.acquisition import PriceFetchError
from btc_service.models.price import PriceResponse
from btc_service.models.response import ErrorResponse
from btc_service.services.price_service import PriceService, get_price_service

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["行情"])

PRICE_ERROR_MESSAGE = "Failed to fetch Bitcoin price"


@router.get(
    "/price",
    response_model=PriceResponse,
    responses={500: {"model": ErrorResponse}},
)
async def get_price(svc: PriceService = Depends(get_price_service)):
    """获取比特币行情（USD / EUR / GBP、24h 涨跌幅、市值）"""
    try:
        return await svc.get_price()
    except PriceFetchError:
        logger.exception("行情获取失败")
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content=ErrorResponse(error=PRICE_ERROR_MESSAGE).model_dump(),
        )
