"""
情绪指数与语录服务（模拟数据，无外部依赖）
"""

import random
from typing import List, Optional

from btc_service.models.response import SentimentReading, WisdomQuote

SENTIMENT_LABELS: List[str] = [
    "Extreme Fear",
    "Fear",
    "Neutral",
    "Greed",
    "Extreme Greed",
]

# 每档宽度 20：[0,20) [20,40) [40,60) [60,80) [80,100)
_BUCKET_WIDTH = 20

WISDOM_SOURCE = "Michael Saylor's 21 Rules of Bitcoin"

WISDOM_RULES: List[str] = [
    "Those who understand Bitcoin buy Bitcoin. Those who don't, criticize Bitcoin.",
    "Everyone is against Bitcoin before they are for it.",
    "You will never be done learning about Bitcoin.",
    "Bitcoin is powered by chaos.",
    "Bitcoin is the only game in the casino that we can all win.",
    "Bitcoin won't protect you if you don't wear the armor.",
    "Bitcoin is the one thing in the universe you can truly own.",
    "Everyone gets Bitcoin at the price they deserve.",
    "Only buy Bitcoin with the money you can't afford to lose.",
    "Tickets to escape the matrix are priced in Bitcoin.",
    "All your models will be destroyed.",
    "The cure to economic ill is the orange pill.",
    "Be for Bitcoin, not against fiat.",
    "Bitcoin is for everyone.",
    "Think in terms of Bitcoin.",
    "You don't change Bitcoin, it changes you.",
    "Laser eyes protect you from endo lies.",
    "Respect Bitcoin, or it will make a clown out of you.",
    "You do not sell your Bitcoin.",
    "Spread Bitcoin with love.",
]


def bucket_sentiment(index: int) -> str:
    """将 0-99 的指数映射为五档情绪标签"""
    if not 0 <= index < 100:
        raise ValueError(f"情绪指数超出范围 [0,100): {index}")
    return SENTIMENT_LABELS[index // _BUCKET_WIDTH]


def get_sentiment(rng: Optional[random.Random] = None) -> SentimentReading:
    """随机生成一次情绪指数读数"""
    index = (rng or random).randrange(100)
    return SentimentReading(index=index, sentiment=bucket_sentiment(index))


def get_wisdom(rng: Optional[random.Random] = None) -> WisdomQuote:
    """随机挑选一条语录"""
    return WisdomQuote(rule=(rng or random).choice(WISDOM_RULES), source=WISDOM_SOURCE)
