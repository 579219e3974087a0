# core/batch.py
"""
Vectorized classification of a whole series.

Produces the same category for every index as the per-index engine, using
NumPy masks resolved with `np.select` (first true condition wins).
"""
from typing import Optional

import numpy as np
import pandas as pd

from triggerbar.core.bars import BarSeries, OHLC_COLS
from triggerbar.core.config import TriggerBarConfig
from triggerbar.core.swings import detect_swing_points
from triggerbar.metrics.atr import compute_atr
from triggerbar.metrics.types import ATRArray, Category, CategoryArray, Prices
from triggerbar.utils.logger import get_logger

log = get_logger("batch")

CATEGORY_NAMES = [c.name for c in Category]


def _ratio_percent(num: np.ndarray, rng: np.ndarray) -> np.ndarray:
    out = np.zeros_like(num)
    np.divide(num, rng, out=out, where=rng > 0)
    return out * 100


def classify_bars(
        open: Prices,
        high: Prices,
        low: Prices,
        close: Prices,
        atr: ATRArray,
        config: TriggerBarConfig
) -> CategoryArray:
    """
    Classify every bar of an OHLC series.

    Args:
        open, high, low, close: 1D price arrays of equal length.
        atr: Volatility per bar; NaN or non-positive marks warm-up.
        config: Classification parameters.

    Returns:
        CategoryArray: int8 `Category` codes, one per bar.

    Raises:
        MalformedBarError: If any bar violates low ≤ open, close ≤ high.
        ValueError: If `atr` length differs from the price arrays.
    """
    bars = BarSeries(open, high, low, close)
    o, h, l, c = bars.open, bars.high, bars.low, bars.close
    vol = np.asarray(atr, dtype=np.float64)
    n = len(bars)
    if vol.shape != (n,):
        raise ValueError(f"ATR length {vol.shape} does not match {n} bars")
    if n == 0:
        return np.array([], dtype=np.int8)

    idx = np.arange(n)
    with np.errstate(invalid='ignore'):
        gate = ((idx >= 1) & (idx >= config.warmup_bars) & (idx >= config.lookback)
                & np.isfinite(vol) & (vol > 0))

    # === DERIVED QUANTITIES ===
    rng = h - l
    is_bullish = c > o
    body_pct = _ratio_percent(np.abs(c - o), rng)
    lower = np.where(is_bullish, o - l, c - l)
    upper = np.where(is_bullish, h - c, h - o)
    lower_dominant = lower > upper
    tail_pct = _ratio_percent(np.where(lower_dominant, lower, upper), rng)

    # === ELEPHANT / TAIL ===
    elephant = np.zeros(n, dtype=bool)
    if config.detect_elephant:
        elephant = (rng >= config.elephant_min_size_atr * vol) & (body_pct >= config.elephant_body_percent_min)

    tail = np.zeros(n, dtype=bool)
    if config.detect_tail:
        tail = (rng >= config.tail_min_size_atr * vol) & (tail_pct >= config.tail_percent_min)

    # === ENGULFING ===
    bull_engulf = np.zeros(n, dtype=bool)
    bear_engulf = np.zeros(n, dtype=bool)
    if config.detect_engulfing:
        a = config.engulf_allowance
        po = np.concatenate([[np.nan], o[:-1]])
        ph = np.concatenate([[np.nan], h[:-1]])
        pl = np.concatenate([[np.nan], l[:-1]])
        pc = np.concatenate([[np.nan], c[:-1]])
        sized = rng >= config.engulfing_min_size_atr * vol
        bull_pair = sized & is_bullish & (pc < po)
        bear_pair = sized & (c < o) & (pc > po)
        if config.engulf_wick:
            bull_engulf = bull_pair & (o < pl + a) & (c > ph - a)
            bear_engulf = bear_pair & (o > ph - a) & (c < pl + a)
        else:
            bull_engulf = bull_pair & (o < pc + a) & (c > po - a)
            bear_engulf = bear_pair & (o > pc - a) & (c < po + a)

    # === SWINGS ===
    swing_high = np.zeros(n, dtype=bool)
    swing_low = np.zeros(n, dtype=bool)
    if config.detect_swing:
        masks = detect_swing_points(h, l, lookback=config.lookback)
        eligible = idx + config.confirmation_bars < n
        swing_high = masks['is_swing_high'] & eligible
        swing_low = masks['is_swing_low'] & eligible

    # === FIRST MATCH WINS ===
    conditions = [
        gate & elephant & is_bullish,
        gate & elephant,
        gate & tail & lower_dominant,
        gate & tail,
        gate & bull_engulf,
        gate & bear_engulf,
        gate & swing_high,
        gate & swing_low,
    ]
    choices = [
        Category.BULLISH_ELEPHANT,
        Category.BEARISH_ELEPHANT,
        Category.BULLISH_TAIL,
        Category.BEARISH_TAIL,
        Category.BULLISH_ENGULFING,
        Category.BEARISH_ENGULFING,
        Category.SWING_HIGH,
        Category.SWING_LOW,
    ]
    codes = np.select(conditions, [int(ch) for ch in choices], default=int(Category.NONE))
    return codes.astype(np.int8)


def classify_frame(
        df: pd.DataFrame,
        config: Optional[TriggerBarConfig] = None,
        atr: Optional[ATRArray] = None
) -> pd.DataFrame:
    """
    Add trigger bar columns to an OHLC DataFrame.

    Args:
        df: DataFrame with open/high/low/close columns.
        config: Classification parameters (defaults if omitted).
        atr: Precomputed volatility per row. When omitted it is computed
            with `config.atr_period` and `config.atr_smoothing`.

    Returns:
        Copy of `df` with columns:
            - 'atr': volatility used per row
            - 'bar_type_code': int8 Category code
            - 'bar_type': categorical Category name
    """
    config = config or TriggerBarConfig()
    missing = set(OHLC_COLS) - set(df.columns)
    if missing:
        raise KeyError(f"Missing required columns: {missing}")

    o, h, l, c = (df[col].to_numpy(dtype=np.float64) for col in OHLC_COLS)
    if atr is None:
        atr = compute_atr(h, l, c, period=config.atr_period, smoothing=config.atr_smoothing)
    else:
        atr = np.asarray(atr, dtype=np.float64)

    codes = classify_bars(o, h, l, c, atr, config)

    result = df.copy()
    result['atr'] = atr
    result['bar_type_code'] = codes
    result['bar_type'] = pd.Categorical.from_codes(codes, categories=CATEGORY_NAMES)

    log.debug("Classified %d rows: %d trigger bars", len(df), int(np.sum(codes != Category.NONE)))
    return result
