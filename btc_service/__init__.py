"""
Bitcoin 价格追踪服务
轻量 HTTP 门面：拉取 CoinGecko 比特币行情，可选 Redis 缓存，并提供仪表盘所需的模拟数据

架构分层：
  数据获取层 (Acquisition)  → 从 CoinGecko 拉取原始行情并规范化
  缓存层     (Cache)        → Redis 单键缓存（固定 TTL，可选）
  服务层     (Services)     → Cache-Aside 行情读取、情绪指数、语录
  仪表盘     (Dashboard)    → 定时轮询三个数据接口
"""

__version__ = "1.0.0"
