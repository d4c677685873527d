"""行情数据模型"""

from pydantic import BaseModel, ConfigDict


class PriceSnapshot(BaseModel):
    """
    某一时刻的比特币行情快照

    构造后不可变；原样序列化写入缓存，并在响应体中附加 cached 标记
    """

    model_config = ConfigDict(frozen=True)

    usd: float
    eur: float
    gbp: float
    change_24h: float
    market_cap: float
    timestamp: str


class PriceResponse(PriceSnapshot):
    """/api/price 响应：快照 + 来源标记"""
    cached: bool

    @classmethod
    def of(cls, snapshot: PriceSnapshot, cached: bool) -> "PriceResponse":
        return cls(**snapshot.model_dump(), cached=cached)
