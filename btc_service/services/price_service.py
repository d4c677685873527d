"""
行情服务
整合数据获取、缓存两层，以 Cache-Aside 方式对外提供比特币行情

并发未命中时，各请求会各自访问上游并覆盖同一缓存键，这里不做防击穿处理。
"""

import logging
from typing import Optional

from pydantic import ValidationError

from btc_service.config import settings
from btc_service.layers.acquisition import AcquisitionLayer, get_acquisition_layer
from btc_service.layers.cache import CacheLayer, get_cache_layer
from btc_service.models.price import PriceResponse, PriceSnapshot

logger = logging.getLogger(__name__)


class PriceService:
    """比特币行情业务服务"""

    def __init__(
        self,
        acquisition: Optional[AcquisitionLayer] = None,
        cache: Optional[CacheLayer] = None,
        cache_key: Optional[str] = None,
        ttl: Optional[int] = None,
    ):
        self._acq = acquisition or get_acquisition_layer()
        self._cache = cache or get_cache_layer()
        self._key = cache_key or settings.PRICE_CACHE_KEY
        self._ttl = ttl or settings.PRICE_CACHE_TTL

    async def get_price(self) -> PriceResponse:
        """
        获取比特币行情

        1. 缓存命中直接返回（cached=True）
        2. 未命中则请求 CoinGecko，写回缓存后返回（cached=False）

        Raises:
            PriceFetchError: 上游请求失败或响应格式异常
        """
        cached = await self._cache.get(self._key)
        if cached is not None:
            try:
                snapshot = PriceSnapshot.model_validate(cached)
                logger.info("📦 Cache hit")
                return PriceResponse.of(snapshot, cached=True)
            except ValidationError as exc:
                logger.warning(f"缓存中的行情数据无效，重新拉取: {exc}")

        logger.info("🌐 Fetching from API")
        snapshot = await self._acq.fetch_price()

        await self._cache.set(snapshot.model_dump(), self._key, ttl=self._ttl)

        return PriceResponse.of(snapshot, cached=False)


# ── 模块级别单例 ──────────────────────────────────────────
_price_service: Optional[PriceService] = None


def get_price_service() -> PriceService:
    global _price_service
    if _price_service is None:
        _price_service = PriceService()
    return _price_service
