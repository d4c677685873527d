"""
价格服务配置模块
支持从环境变量读取配置，自动检测 Docker 容器环境并启用服务发现
"""

import os
from functools import lru_cache
from typing import List, Optional

from pydantic import Field, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

# 两种部署形态的默认端口
_CACHED_PORT = 3000
_STANDALONE_PORT = 8888


def _is_docker() -> bool:
    """检测当前是否运行在 Docker 容器内"""
    return (
        os.path.exists("/.dockerenv")
        or os.environ.get("DOCKER_CONTAINER", "").lower() in ("1", "true", "yes")
    )


def _default_redis_url() -> str:
    """Docker 环境使用服务名 'redis'，本地使用 'localhost'"""
    host = "redis" if _is_docker() else "localhost"
    return f"redis://{host}:6379"


class PriceServiceSettings(BaseSettings):
    """价格服务配置"""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # ── 基础配置 ──────────────────────────────────────────
    HOST: str = Field(default="0.0.0.0")
    PORT: Optional[int] = Field(default=None)
    DEBUG: bool = Field(default=False)
    ALLOWED_ORIGINS: List[str] = Field(
        default_factory=lambda: ["*"]
    )

    # 独立模式：不连接 Redis，默认端口 8888
    STANDALONE: bool = Field(default=False)

    # ── Redis 配置（支持服务发现） ─────────────────────────
    REDIS_URL: str = Field(default_factory=_default_redis_url)
    REDIS_ENABLED: bool = Field(default=True)
    REDIS_MAX_CONNECTIONS: int = Field(default=20)

    # ── 行情数据源配置 ─────────────────────────────────────
    PRICE_API_URL: str = Field(default="https://api.coingecko.com/api/v3/simple/price")
    PRICE_ASSET_ID: str = Field(default="bitcoin")
    PRICE_CURRENCIES: List[str] = Field(
        default_factory=lambda: ["usd", "eur", "gbp"]
    )

    # ── 缓存配置 ──────────────────────────────────────────
    PRICE_CACHE_KEY: str = Field(default="btc_price")
    PRICE_CACHE_TTL: int = Field(default=60)       # 行情缓存 TTL（秒）

    # ── 仪表盘轮询配置 ─────────────────────────────────────
    DASHBOARD_API_URL: str = Field(default=f"http://localhost:{_CACHED_PORT}")
    DASHBOARD_POLL_INTERVAL: float = Field(default=30.0)

    # ── 日志配置 ──────────────────────────────────────────
    LOG_LEVEL: str = Field(default="INFO")

    @model_validator(mode="after")
    def _apply_variant_defaults(self) -> "PriceServiceSettings":
        if self.PORT is None:
            self.PORT = _STANDALONE_PORT if self.STANDALONE else _CACHED_PORT
        if self.STANDALONE:
            self.REDIS_ENABLED = False
        return self

    @property
    def VARIANT(self) -> str:
        return "standalone" if self.STANDALONE else "cached"


@lru_cache
def get_settings() -> PriceServiceSettings:
    """获取全局配置（单例）"""
    return PriceServiceSettings()


settings = get_settings()
