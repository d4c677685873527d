"""
缓存连接管理模块
统一管理 Redis（异步）连接；连接失败时服务以无缓存模式降级运行
"""

import logging
from typing import Optional

from redis.asyncio import Redis, ConnectionPool

from btc_service.config import settings

logger = logging.getLogger(__name__)

# ── 全局连接实例 ─────────────────────────────────────────
_redis_client: Optional[Redis] = None
_redis_pool: Optional[ConnectionPool] = None

REDIS_CONNECTED = "connected"
REDIS_DISCONNECTED = "disconnected"
REDIS_DISABLED = "disabled (standalone mode)"


async def init_redis() -> bool:
    """初始化 Redis 异步连接，返回是否成功"""
    global _redis_client, _redis_pool
    if not settings.REDIS_ENABLED:
        logger.info("Redis 未启用，跳过初始化")
        return False
    try:
        _redis_pool = ConnectionPool.from_url(
            settings.REDIS_URL,
            max_connections=settings.REDIS_MAX_CONNECTIONS,
            decode_responses=True,
        )
        _redis_client = Redis(connection_pool=_redis_pool)
        await _redis_client.ping()
        logger.info(f"✅ Redis 连接成功: {settings.REDIS_URL}")
        return True
    except Exception as exc:
        logger.warning(f"⚠️ Redis 不可用，服务将以无缓存模式运行: {exc}")
        if _redis_pool:
            await _redis_pool.disconnect()
        _redis_client = None
        _redis_pool = None
        return False


async def close_connections():
    """关闭 Redis 连接"""
    global _redis_client, _redis_pool
    if _redis_client:
        await _redis_client.aclose()
        _redis_client = None
    if _redis_pool:
        await _redis_pool.disconnect()
        _redis_pool = None
        logger.info("Redis 连接已关闭")


def get_redis() -> Optional[Redis]:
    """获取 Redis 客户端（可能为 None）"""
    return _redis_client


async def check_health() -> str:
    """检查调用时刻的 Redis 连通性"""
    if not settings.REDIS_ENABLED:
        return REDIS_DISABLED
    if _redis_client is None:
        return REDIS_DISCONNECTED
    try:
        await _redis_client.ping()
        return REDIS_CONNECTED
    except Exception as exc:
        logger.warning(f"Redis 健康检查失败: {exc}")
        return REDIS_DISCONNECTED
