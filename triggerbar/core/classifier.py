# core/classifier.py
"""
Single-bar classification: elephant, tail and engulfing rules.

Rules are evaluated in a fixed order and the first match wins, so the
resulting category is always unique. Swing pivots need the surrounding
series and are resolved by the engine after these rules fall through.
"""
from typing import Optional, Tuple

from triggerbar.core.bars import Bar
from triggerbar.core.config import TriggerBarConfig
from triggerbar.metrics.types import Category


def body_percent(bar: Bar) -> float:
    """Body size as a percentage of the bar's range (0 for a zero-range bar)."""
    rng = bar.range
    return bar.body_size / rng * 100 if rng > 0 else 0.0


def tails(bar: Bar) -> Tuple[float, float]:
    """Return (lower_tail, upper_tail) measured from the body."""
    if bar.is_bullish:
        return bar.open - bar.low, bar.high - bar.close
    return bar.close - bar.low, bar.high - bar.open


def tail_ratio(bar: Bar) -> float:
    """Longer tail as a percentage of the bar's range (0 for a zero-range bar)."""
    rng = bar.range
    if rng <= 0:
        return 0.0
    lower, upper = tails(bar)
    return (lower if lower > upper else upper) / rng * 100


def detect_elephant(bar: Bar, volatility: float, config: TriggerBarConfig) -> Optional[Category]:
    if bar.range >= config.elephant_min_size_atr * volatility \
            and body_percent(bar) >= config.elephant_body_percent_min:
        return Category.BULLISH_ELEPHANT if bar.is_bullish else Category.BEARISH_ELEPHANT
    return None


def detect_tail(bar: Bar, volatility: float, config: TriggerBarConfig) -> Optional[Category]:
    if bar.range >= config.tail_min_size_atr * volatility \
            and tail_ratio(bar) >= config.tail_percent_min:
        lower, upper = tails(bar)
        # Equal tails fall to the bearish side
        return Category.BULLISH_TAIL if lower > upper else Category.BEARISH_TAIL
    return None


def detect_engulfing(
        bar: Bar,
        prev: Bar,
        volatility: float,
        config: TriggerBarConfig
) -> Optional[Category]:
    """
    Engulfing rule in body mode (default) or wick mode (`engulf_wick`).

    Body mode: the current body covers the previous body.
    Wick mode: the current body covers the previous full range.
    `config.engulf_allowance` widens the previous bar's reference levels.
    """
    if bar.range < config.engulfing_min_size_atr * volatility:
        return None

    a = config.engulf_allowance
    bullish = bar.close > bar.open and prev.close < prev.open
    bearish = bar.close < bar.open and prev.close > prev.open

    if config.engulf_wick:
        if bullish and bar.open < prev.low + a and bar.close > prev.high - a:
            return Category.BULLISH_ENGULFING
        if bearish and bar.open > prev.high - a and bar.close < prev.low + a:
            return Category.BEARISH_ENGULFING
    else:
        if bullish and bar.open < prev.close + a and bar.close > prev.open - a:
            return Category.BULLISH_ENGULFING
        if bearish and bar.open > prev.close - a and bar.close < prev.open + a:
            return Category.BEARISH_ENGULFING
    return None


def classify_bar(
        current: Bar,
        previous: Bar,
        volatility: float,
        config: TriggerBarConfig
) -> Category:
    """
    Classify one bar against its predecessor and volatility value.

    Parameters
    ----------
    current, previous : Bar
        The bar to classify and the bar immediately before it.
    volatility : float
        Finite, non-negative volatility (ATR) at `current.index`.
    config : TriggerBarConfig

    Returns
    -------
    Category
        Elephant, tail or engulfing category, or `Category.NONE`.
        Swing categories are never returned here.
    """
    if config.detect_elephant:
        category = detect_elephant(current, volatility, config)
        if category is not None:
            return category

    if config.detect_tail:
        category = detect_tail(current, volatility, config)
        if category is not None:
            return category

    if config.detect_engulfing:
        category = detect_engulfing(current, previous, volatility, config)
        if category is not None:
            return category

    return Category.NONE
