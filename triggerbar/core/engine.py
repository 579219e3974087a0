# core/engine.py
"""
Per-index classification over a bar range.

Each index is classified independently from immutable inputs, so a run can
be iterated any number of times (or split across workers) with identical
results. Indices without enough history are reported as Category.NONE.
"""
from typing import Iterator, Optional, Sequence, Union

import numpy as np
import pandas as pd

from triggerbar.core.bars import BarSeries
from triggerbar.core.classifier import classify_bar
from triggerbar.core.config import TriggerBarConfig
from triggerbar.core.swings import has_full_window, is_swing_high, is_swing_low
from triggerbar.metrics.types import Category, CategoryArray, ClassificationResult
from triggerbar.metrics.volatility import VolatilitySeries
from triggerbar.utils.logger import get_logger

log = get_logger("engine")

BarsLike = Union[BarSeries, pd.DataFrame]
VolatilityLike = Union[VolatilitySeries, Sequence[Optional[float]], np.ndarray]


def _as_bar_series(bars: BarsLike) -> BarSeries:
    if isinstance(bars, BarSeries):
        return bars
    if isinstance(bars, pd.DataFrame):
        return BarSeries.from_frame(bars)
    raise TypeError("bars must be a BarSeries or an OHLC DataFrame")


def _as_volatility(volatilities: VolatilityLike) -> VolatilitySeries:
    if isinstance(volatilities, VolatilitySeries):
        return volatilities
    return VolatilitySeries(volatilities)


def swing_eligible(n: int, index: int, config: TriggerBarConfig) -> bool:
    """Full ±lookback window and `confirmation_bars` of lookahead are available."""
    return (has_full_window(n, index, config.lookback)
            and index + config.confirmation_bars < n)


def _classify(
        bars: BarSeries,
        volatilities: VolatilitySeries,
        config: TriggerBarConfig,
        index: int
) -> Category:
    if index < 1 or index < config.warmup_bars or index < config.lookback:
        return Category.NONE

    volatility = volatilities.get(index)
    if volatility is None:
        return Category.NONE

    category = classify_bar(bars[index], bars[index - 1], volatility, config)
    if category is not Category.NONE:
        return category

    if config.detect_swing and swing_eligible(len(bars), index, config):
        if is_swing_high(bars, index, config.lookback):
            return Category.SWING_HIGH
        if is_swing_low(bars, index, config.lookback):
            return Category.SWING_LOW

    return Category.NONE


def _check_lengths(bars: BarSeries, volatilities: VolatilitySeries) -> None:
    if len(volatilities) != len(bars):
        raise ValueError(
            f"Volatility series length {len(volatilities)} does not match {len(bars)} bars"
        )


def classify_index(
        bars: BarsLike,
        volatilities: VolatilityLike,
        config: TriggerBarConfig,
        index: int
) -> Category:
    """Classify a single bar; out-of-range indices raise IndexError."""
    bars = _as_bar_series(bars)
    volatilities = _as_volatility(volatilities)
    _check_lengths(bars, volatilities)
    if not 0 <= index < len(bars):
        raise IndexError(f"Bar index {index} out of range [0, {len(bars)})")
    return _classify(bars, volatilities, config, index)


class ClassificationRun:
    """
    Lazy, restartable sequence of ClassificationResult for [from_index, to_index].

    Nothing is cached; every iteration re-evaluates the inputs.
    """

    __slots__ = ('bars', 'volatilities', 'config', 'from_index', 'to_index')

    def __init__(
            self,
            bars: BarSeries,
            volatilities: VolatilitySeries,
            config: TriggerBarConfig,
            from_index: int,
            to_index: int
    ):
        self.bars = bars
        self.volatilities = volatilities
        self.config = config
        self.from_index = from_index
        self.to_index = to_index

    def __len__(self) -> int:
        return self.to_index - self.from_index + 1

    def __iter__(self) -> Iterator[ClassificationResult]:
        log.debug("Classifying bars %d..%d of %d (lookback=%d, warmup=%d)",
                  self.from_index, self.to_index, len(self.bars),
                  self.config.lookback, self.config.warmup_bars)
        for i in range(self.from_index, self.to_index + 1):
            yield ClassificationResult(i, _classify(self.bars, self.volatilities, self.config, i))

    def categories(self) -> CategoryArray:
        """Category codes for the whole range as an int8 array."""
        return np.fromiter((r.category for r in self), dtype=np.int8, count=len(self))


def classify_range(
        bars: BarsLike,
        volatilities: VolatilityLike,
        config: TriggerBarConfig,
        from_index: int = 0,
        to_index: Optional[int] = None
) -> ClassificationRun:
    """
    Classify every bar in [from_index, to_index] (inclusive).

    Parameters
    ----------
    bars : BarSeries or DataFrame
        Full bar history; bars after `to_index` are read for swing lookahead.
    volatilities : VolatilitySeries or sequence
        One value per bar. NaN, None and non-positive values mean "warm-up".
    config : TriggerBarConfig
    from_index, to_index : int
        Inclusive range; `to_index` defaults to the last bar.

    Returns
    -------
    ClassificationRun
        Exactly `to_index - from_index + 1` results, in index order.

    Raises
    ------
    ValueError
        If the range is outside the series or lengths disagree.
    """
    bars = _as_bar_series(bars)
    volatilities = _as_volatility(volatilities)
    _check_lengths(bars, volatilities)

    if to_index is None:
        to_index = len(bars) - 1
    if not 0 <= from_index <= to_index < len(bars):
        raise ValueError(
            f"Invalid range [{from_index}, {to_index}] for a series of {len(bars)} bars"
        )
    return ClassificationRun(bars, volatilities, config, from_index, to_index)
