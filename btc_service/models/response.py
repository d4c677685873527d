"""统一 API 响应模型"""

from datetime import datetime, timezone

from pydantic import BaseModel, Field


def iso_now() -> str:
    """当前 UTC 时间，ISO-8601 毫秒精度，'Z' 结尾"""
    now = datetime.now(tz=timezone.utc)
    return now.isoformat(timespec="milliseconds").replace("+00:00", "Z")


class HealthStatus(BaseModel):
    """健康检查响应"""
    status: str = "healthy"
    redis: str
    timestamp: str = Field(default_factory=iso_now)


class SentimentReading(BaseModel):
    """市场情绪指数（模拟数据）"""
    index: int = Field(ge=0, lt=100)
    sentiment: str
    timestamp: str = Field(default_factory=iso_now)


class WisdomQuote(BaseModel):
    rule: str
    source: str


class ErrorResponse(BaseModel):
    """错误响应：只携带通用提示，不泄露内部细节"""
    error: str
