"""
Layer 2 – 缓存层
Redis 单后端；过期由 Redis 自身的 TTL 保证，应用层不做新鲜度校验。
Redis 不可用时所有操作静默降级（读视为未命中，写直接跳过）。
"""

import json
import logging
from typing import Any, Callable, Optional

from redis.asyncio import Redis

from btc_service.config import settings
from btc_service.db import get_redis

logger = logging.getLogger(__name__)


def _make_key(namespace: str, *parts: str) -> str:
    """生成规范化缓存键"""
    return ":".join([namespace] + list(parts))


class CacheLayer:
    """Redis 缓存层，连接通过 redis_getter 注入（默认取全局连接）"""

    def __init__(self, redis_getter: Callable[[], Optional[Redis]] = get_redis):
        self._get_redis = redis_getter

    @property
    def available(self) -> bool:
        return self._get_redis() is not None

    async def get(self, namespace: str, *parts: str) -> Optional[Any]:
        key = _make_key(namespace, *parts)
        redis = self._get_redis()
        if redis is None:
            return None
        try:
            raw = await redis.get(key)
        except Exception as exc:
            logger.warning(f"Redis 读取失败，按未命中处理: {exc}")
            return None
        if not raw:
            return None
        try:
            return json.loads(raw)
        except ValueError as exc:
            logger.warning(f"缓存值无法解析，按未命中处理: {key}: {exc}")
            return None

    async def set(
        self,
        value: Any,
        namespace: str,
        *parts: str,
        ttl: int = None,
    ) -> bool:
        """写入缓存；失败只记录日志，不向调用方抛出"""
        if ttl is None:
            ttl = settings.PRICE_CACHE_TTL
        key = _make_key(namespace, *parts)
        redis = self._get_redis()
        if redis is None:
            return False
        try:
            await redis.setex(key, ttl, json.dumps(value, ensure_ascii=False, default=str))
            logger.debug(f"缓存写入（Redis）: {key} ttl={ttl}s")
            return True
        except Exception as exc:
            logger.warning(f"Redis 写入失败: {exc}")
            return False


# ── 模块级别单例 ──────────────────────────────────────────
_cache: Optional[CacheLayer] = None


def get_cache_layer() -> CacheLayer:
    global _cache
    if _cache is None:
        _cache = CacheLayer()
    return _cache
