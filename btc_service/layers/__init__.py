"""
数据流分层架构
  Layer 1 – Acquisition  : 数据获取（CoinGecko 行情）
  Layer 2 – Cache        : Redis 单键缓存（固定 TTL）
"""
