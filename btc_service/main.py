"""
Bitcoin 价格追踪服务
FastAPI 应用程序入口

启动方式:
    uvicorn btc_service.main:app --host 0.0.0.0 --port 3000
    python -m btc_service.main
    STANDALONE=true python -m btc_service.main     # 无 Redis，默认端口 8888
"""

import logging
import time
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from btc_service import __version__
from btc_service.config import settings
from btc_service.db import init_redis, close_connections
from btc_service.routers import health, insight, price

# ── 日志配置 ──────────────────────────────────────────────
logging.basicConfig(
    level=getattr(logging, settings.LOG_LEVEL.upper(), logging.INFO),
    format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)

_ENDPOINTS = [
    ("/health", "Health check"),
    ("/api/price", "Get Bitcoin price"),
    ("/api/sentiment", "Get market sentiment"),
    ("/api/wisdom", "Get Saylor's wisdom"),
]


# ── 生命周期管理 ──────────────────────────────────────────
@asynccontextmanager
async def lifespan(app: FastAPI):
    """应用启动/关闭生命周期钩子"""
    logger.info("=" * 60)
    logger.info(f"🚀 Bitcoin Price API v{__version__} 启动中（{settings.VARIANT} 模式）")
    logger.info(f"   Port      : {settings.PORT}")
    logger.info(f"   Redis     : {settings.REDIS_URL if settings.REDIS_ENABLED else '未启用'}")
    logger.info("📊 Endpoints:")
    for path, label in _ENDPOINTS:
        logger.info(f"   GET {path} - {label}")
    logger.info("=" * 60)

    # 初始化缓存连接（失败不阻断启动，降级运行）
    if await init_redis():
        logger.info("✅ 缓存就绪")
    elif settings.REDIS_ENABLED:
        logger.warning("⚠️ Redis 不可用，行情接口将直连 CoinGecko")

    yield

    logger.info("🔄 价格服务正在关闭...")
    await close_connections()
    logger.info("✅ 价格服务已关闭")


# ── 应用实例 ──────────────────────────────────────────────
app = FastAPI(
    title="Bitcoin Price API",
    description=(
        "比特币行情追踪服务：\n"
        "- 📈 CoinGecko 实时行情（USD / EUR / GBP）\n"
        "- 🗄️ Redis 缓存（60 秒 TTL，可选）\n"
        "- 😱 市场情绪指数（模拟数据）\n"
        "- 📜 Saylor 语录"
    ),
    version=__version__,
    lifespan=lifespan,
    docs_url="/docs",
    redoc_url="/redoc",
)

# ── CORS 中间件 ───────────────────────────────────────────
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.ALLOWED_ORIGINS,
    allow_methods=["*"],
    allow_headers=["*"],
)


# ── 请求计时中间件 ─────────────────────────────────────────
@app.middleware("http")
async def add_process_time(request: Request, call_next):
    start = time.time()
    response = await call_next(request)
    response.headers["X-Process-Time"] = f"{(time.time() - start) * 1000:.1f}ms"
    return response


# ── 全局异常处理 ──────────────────────────────────────────
@app.exception_handler(Exception)
async def global_exception_handler(request: Request, exc: Exception):
    logger.error(f"未处理的异常: {exc}", exc_info=True)
    return JSONResponse(
        status_code=500,
        content={"error": "Internal server error"},
    )


# ── 注册路由 ──────────────────────────────────────────────
app.include_router(health.router)
app.include_router(price.router)
app.include_router(insight.router)


# ── 根路由 ───────────────────────────────────────────────
@app.get("/", include_in_schema=False)
async def root():
    return {
        "service": "Bitcoin Price API",
        "version": __version__,
        "docs": "/docs",
        "health": "/health",
        "endpoints": [path for path, _ in _ENDPOINTS],
    }


# ── 直接运行入口 ──────────────────────────────────────────
if __name__ == "__main__":
    uvicorn.run(
        "btc_service.main:app",
        host=settings.HOST,
        port=settings.PORT,
        reload=settings.DEBUG,
        log_level=settings.LOG_LEVEL.lower(),
    )
