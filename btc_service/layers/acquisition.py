"""
Layer 1 – 数据获取层
从 CoinGecko 拉取比特币实时行情，规范化为 PriceSnapshot 后向上层提供。
单次请求，不重试，超时沿用 httpx 客户端默认值。
"""

import logging
from typing import Any, Dict, List, Optional

import httpx

from btc_service.config import settings
from btc_service.models.price import PriceSnapshot
from btc_service.models.response import iso_now

logger = logging.getLogger(__name__)


class PriceFetchError(Exception):
    """上游行情获取失败（网络错误、非 2xx 状态或数据格式异常）"""


class AcquisitionLayer:
    """数据获取层：封装 CoinGecko simple/price 接口"""

    def __init__(
        self,
        url: Optional[str] = None,
        asset_id: Optional[str] = None,
        currencies: Optional[List[str]] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self._url = url or settings.PRICE_API_URL
        self._asset_id = asset_id or settings.PRICE_ASSET_ID
        self._currencies = currencies or settings.PRICE_CURRENCIES
        self._transport = transport

    def _params(self) -> Dict[str, str]:
        return {
            "ids": self._asset_id,
            "vs_currencies": ",".join(self._currencies),
            "include_24hr_change": "true",
            "include_market_cap": "true",
        }

    async def fetch_price(self) -> PriceSnapshot:
        """拉取并规范化一次行情快照"""
        try:
            async with httpx.AsyncClient(transport=self._transport) as client:
                response = await client.get(self._url, params=self._params())
                response.raise_for_status()
                payload = response.json()
        except httpx.HTTPError as exc:
            raise PriceFetchError(f"CoinGecko 请求失败: {exc}") from exc
        except ValueError as exc:
            raise PriceFetchError(f"CoinGecko 返回非 JSON 数据: {exc}") from exc

        return self.normalize(payload)

    def normalize(self, payload: Any) -> PriceSnapshot:
        """
        将 CoinGecko 响应转换为 PriceSnapshot

        响应格式：{"bitcoin": {"usd": .., "eur": .., "gbp": ..,
                              "usd_24h_change": .., "usd_market_cap": ..}}
        """
        try:
            data = payload[self._asset_id]
            return PriceSnapshot(
                usd=data["usd"],
                eur=data["eur"],
                gbp=data["gbp"],
                change_24h=data["usd_24h_change"],
                market_cap=data["usd_market_cap"],
                timestamp=iso_now(),
            )
        except (KeyError, TypeError, ValueError) as exc:
            raise PriceFetchError(f"CoinGecko 响应格式异常: {exc!r}") from exc


# ── 模块级别单例 ──────────────────────────────────────────
_acquisition: Optional[AcquisitionLayer] = None


def get_acquisition_layer() -> AcquisitionLayer:
    global _acquisition
    if _acquisition is None:
        _acquisition = AcquisitionLayer()
    return _acquisition
