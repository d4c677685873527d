"""
模拟数据路由
GET /api/sentiment   - 市场情绪指数
GET /api/wisdom      - 随机语录
"""

from fastapi import APIRouter

from btc_service.models.response import SentimentReading, WisdomQuote
from btc_service.services.insight_service import get_sentiment, get_wisdom

router = APIRouter(prefix="/api", tags=["模拟数据"])


@router.get("/sentiment", response_model=SentimentReading)
async def sentiment():
    return get_sentiment()


@router.get("/wisdom", response_model=WisdomQuote)
async def wisdom():
    return get_wisdom()
