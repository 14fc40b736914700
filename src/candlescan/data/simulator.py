"""
Simulated candle series.

Random-walk OHLC bars for running the engine without a market-data
provider. Each bar opens and closes within half a volatility unit of the
previous close, with wicks extending up to half a unit beyond the body.
"""

import random
import time as _time
from typing import List, Optional, Union

from ..models.market_data import Candle, Instrument, Timeframe


def simulate_candles(
    instrument: Union[Instrument, float],
    timeframe: Timeframe,
    length: int = 200,
    volatility: float = 0.002,
    end_time: Optional[int] = None,
    rng: Optional[random.Random] = None
) -> List[Candle]:
    """
    Generate an oldest-first random-walk candle series.

    Args:
        instrument: Instrument (its base price seeds the walk) or a start price
        timeframe: Bar spacing
        length: Number of bars
        volatility: Per-bar volatility as a fraction of price
        end_time: Open time of the final bar in epoch seconds, defaults to now
        rng: Random source, pass a seeded instance for repeatable series

    Returns:
        Candles with strictly increasing times
    """
    rng = rng or random.Random()
    price = instrument.base_price if isinstance(instrument, Instrument) else float(instrument)
    end_time = int(_time.time()) if end_time is None else end_time
    step = timeframe.seconds

    candles = []
    for i in range(length - 1, -1, -1):
        bar_volatility = price * volatility
        open_price = price + (rng.random() - 0.5) * bar_volatility
        close_price = price + (rng.random() - 0.5) * bar_volatility
        high = max(open_price, close_price) + rng.random() * bar_volatility * 0.5
        low = min(open_price, close_price) - rng.random() * bar_volatility * 0.5

        candles.append(Candle(
            time=end_time - i * step,
            open=open_price,
            high=high,
            low=low,
            close=close_price,
        ))
        price = close_price

    return candles
