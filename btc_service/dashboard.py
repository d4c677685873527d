"""
仪表盘轮询客户端
启动时立即并发拉取 /api/price、/api/sentiment、/api/wisdom 三个接口，之后按固定间隔重复；
每轮成功则整体替换本地状态，失败则保留上一轮的（过期）状态，不做单接口重试。

各轮之间不做互斥：某轮耗时超过间隔时，相邻轮次可能重叠执行。

启动方式:
    python -m btc_service.dashboard
"""

import asyncio
import logging
from datetime import datetime, timezone
from typing import Callable, Optional, Set

import httpx
from pydantic import BaseModel

from btc_service.config import settings
from btc_service.models.price import PriceResponse
from btc_service.models.response import SentimentReading, WisdomQuote

logger = logging.getLogger(__name__)

_PLACEHOLDER = "---"


class DashboardState(BaseModel):
    """一轮完整拉取的结果"""
    price: PriceResponse
    sentiment: SentimentReading
    wisdom: WisdomQuote
    last_update: datetime


# ── 展示辅助函数 ──────────────────────────────────────────

def format_price(value: Optional[float], symbol: str = "$") -> str:
    """千分位、无小数，例如 $67,432"""
    if value is None:
        return _PLACEHOLDER
    return f"{symbol}{value:,.0f}"


def format_market_cap(value: Optional[float]) -> str:
    """以万亿美元显示，例如 $1.33T"""
    if value is None:
        return _PLACEHOLDER
    return f"${value / 1e12:.2f}T"


def sentiment_band(index: Optional[int]) -> str:
    """情绪仪表盘颜色档位"""
    if index is None:
        return "neutral"
    if index < 25:
        return "red"
    if index < 45:
        return "orange"
    if index < 55:
        return "yellow"
    if index < 75:
        return "lime"
    return "green"


class DashboardPoller:
    """定时轮询三个数据接口的仪表盘状态源"""

    def __init__(
        self,
        base_url: Optional[str] = None,
        interval: Optional[float] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
        on_update: Optional[Callable[[DashboardState], None]] = None,
    ):
        self._base_url = base_url or settings.DASHBOARD_API_URL
        self._interval = interval if interval is not None else settings.DASHBOARD_POLL_INTERVAL
        self._transport = transport
        self._on_update = on_update
        self._timer: Optional[asyncio.Task] = None
        self._rounds: Set[asyncio.Task] = set()
        self.state: Optional[DashboardState] = None

    @property
    def running(self) -> bool:
        return self._timer is not None and not self._timer.done()

    async def refresh(self) -> bool:
        """执行一轮拉取，返回是否成功更新了状态"""
        try:
            async with httpx.AsyncClient(
                base_url=self._base_url, transport=self._transport
            ) as client:
                price_res, sentiment_res, wisdom_res = await asyncio.gather(
                    client.get("/api/price"),
                    client.get("/api/sentiment"),
                    client.get("/api/wisdom"),
                )
            for res in (price_res, sentiment_res, wisdom_res):
                res.raise_for_status()
            state = DashboardState(
                price=PriceResponse.model_validate(price_res.json()),
                sentiment=SentimentReading.model_validate(sentiment_res.json()),
                wisdom=WisdomQuote.model_validate(wisdom_res.json()),
                last_update=datetime.now(tz=timezone.utc),
            )
        except (httpx.HTTPError, ValueError) as exc:
            logger.warning(f"仪表盘数据拉取失败，保留上一轮状态: {exc}")
            return False

        self.state = state
        if self._on_update:
            self._on_update(state)
        return True

    def _spawn_round(self) -> None:
        task = asyncio.create_task(self.refresh())
        self._rounds.add(task)
        task.add_done_callback(self._rounds.discard)

    async def run(self) -> None:
        """立即拉取一轮，之后每隔 interval 秒再拉取一轮，直到被取消"""
        try:
            while True:
                self._spawn_round()
                await asyncio.sleep(self._interval)
        finally:
            pending = list(self._rounds)
            for task in pending:
                task.cancel()
            await asyncio.gather(*pending, return_exceptions=True)

    def start(self) -> asyncio.Task:
        if not self.running:
            self._timer = asyncio.create_task(self.run())
        return self._timer

    async def stop(self) -> None:
        """取消定时器及进行中的拉取"""
        if self._timer is None:
            return
        self._timer.cancel()
        try:
            await self._timer
        except asyncio.CancelledError:
            pass
        self._timer = None

    def summary(self) -> str:
        return render(self.state)


def render(state: Optional[DashboardState]) -> str:
    """仪表盘状态的纯文本渲染"""
    if state is None:
        return "Bitcoin Tracker: loading..."

    price = state.price
    arrow = "▲" if price.change_24h >= 0 else "▼"
    sign = "+" if price.change_24h >= 0 else ""
    origin = "From Redis cache" if price.cached else "Fresh from API"
    lines = [
        f"Bitcoin Price  {format_price(price.usd)}  "
        f"{arrow} {sign}{price.change_24h:.2f}% (24h)",
        f"  EUR {format_price(price.eur, '€')}  GBP {format_price(price.gbp, '£')}  "
        f"Market Cap {format_market_cap(price.market_cap)}",
        f"  {origin} · updated {state.last_update.strftime('%H:%M:%S')}",
        f"Market Sentiment  {state.sentiment.sentiment} "
        f"({state.sentiment.index} / 100, {sentiment_band(state.sentiment.index)})",
        f"\"{state.wisdom.rule}\"  ({state.wisdom.source})",
    ]
    return "\n".join(lines)


async def _main() -> None:
    poller = DashboardPoller(on_update=lambda state: logger.info("\n" + render(state)))
    logger.info(
        f"📊 仪表盘轮询 {settings.DASHBOARD_API_URL}，间隔 {settings.DASHBOARD_POLL_INTERVAL}s"
    )
    try:
        await poller.start()
    finally:
        await poller.stop()


if __name__ == "__main__":
    logging.basicConfig(
        level=getattr(logging, settings.LOG_LEVEL.upper(), logging.INFO),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    )
    try:
        asyncio.run(_main())
    except KeyboardInterrupt:
        pass
