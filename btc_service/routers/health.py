"""健康检查路由"""

from fastapi import APIRouter

from btc_service.db import check_health
from btc_service.models.response import HealthStatus

router = APIRouter(tags=["健康检查"])


@router.get("/health", response_model=HealthStatus)
async def health():
    """服务健康检查（含调用时刻的 Redis 连通性）"""
    return HealthStatus(redis=await check_health())


@router.get("/healthz")
async def healthz():
    """Kubernetes liveness probe"""
    return {"status": "ok"}


@router.get("/readyz")
async def readyz():
    """Kubernetes readiness probe"""
    return {"ready": True}
