# core/swings.py
"""
Swing pivot detection over a fixed ±lookback window.

Naming follows the trigger bar convention: a swing HIGH is confirmed by the
bar's LOW (no neighbour trades below it), a swing LOW by the bar's HIGH
(no neighbour trades above it). Equal neighbours confirm the pivot.
"""
from typing import Dict

import numpy as np
from scipy.ndimage import maximum_filter1d, minimum_filter1d

from triggerbar.core.bars import BarSeries
from triggerbar.metrics.types import Prices, SwingsMask


def has_full_window(n: int, index: int, lookback: int) -> bool:
    """True when `lookback` bars exist on both sides of `index`."""
    return lookback <= index < n - lookback


def _check_window(bars: BarSeries, index: int, lookback: int) -> None:
    if lookback < 1:
        raise ValueError("Precondition violated: lookback must be ≥ 1")
    if not has_full_window(len(bars), index, lookback):
        raise ValueError(
            f"Precondition violated: index {index} has no full ±{lookback} window "
            f"in a series of {len(bars)} bars"
        )


def is_swing_high(bars: BarSeries, index: int, lookback: int) -> bool:
    """
    True iff no bar within ±`lookback` of `index` has a strictly lower low.

    O(lookback). The caller guarantees the full window exists; a partial
    window raises ValueError instead of producing a silent answer.
    """
    _check_window(bars, index, lookback)
    low = bars.low
    current = low[index]
    for k in range(1, lookback + 1):
        if low[index - k] < current or low[index + k] < current:
            return False
    return True


def is_swing_low(bars: BarSeries, index: int, lookback: int) -> bool:
    """True iff no bar within ±`lookback` of `index` has a strictly higher high."""
    _check_window(bars, index, lookback)
    high = bars.high
    current = high[index]
    for k in range(1, lookback + 1):
        if high[index - k] > current or high[index + k] > current:
            return False
    return True


def detect_swing_points(
        high: Prices,
        low: Prices,
        lookback: int = 10
) -> Dict[str, SwingsMask]:
    """
    Evaluate the swing predicates for every index at once.

    Parameters
    ----------
    high : Prices
        1D array of high prices.
    low : Prices
        1D array of low prices.
    lookback : int, default=10
        Number of bars to left/right for validation.

    Returns
    -------
    dict with keys:
        - 'is_swing_high': bool array (lowest low of its window)
        - 'is_swing_low': bool array (highest high of its window)

    Pre-conditions
    --------------
    - `high` and `low` must be 1D, same length, numeric.
    - `lookback` ≥ 1.

    Post-conditions
    ---------------
    - Edge bars (first/last `lookback`) are never swings.
    - `is_swing_high[i] == is_swing_high(bars, i, lookback)` for every
      index with a full window; same for lows.

    Notes
    -----
    - Uses SciPy's rolling min/max filters; a bar equal to its window's
      extreme has no strictly more extreme neighbour, so ties confirm.
    - A bar may satisfy both masks; the engine reports SWING_HIGH first.
    """
    # === PRECONDITIONS: VALIDATE INPUTS ===
    if lookback < 1:
        raise ValueError("Precondition violated: lookback must be ≥ 1")
    high = np.asarray(high)
    low = np.asarray(low)
    if high.shape != low.shape or high.ndim != 1:
        raise ValueError("Precondition violated: inputs must be 1D arrays of same length")
    if not (np.issubdtype(high.dtype, np.number) and np.issubdtype(low.dtype, np.number)):
        raise TypeError("Precondition violated: inputs must be numeric")

    n = len(high)
    if n < 2 * lookback + 1:
        return {'is_swing_high': np.zeros(n, dtype=bool), 'is_swing_low': np.zeros(n, dtype=bool)}

    high = high.astype(np.float64, copy=False)
    low = low.astype(np.float64, copy=False)

    # === WINDOW EXTREMES (VECTORIZED) ===
    window = 2 * lookback + 1
    low_min = minimum_filter1d(low, size=window, mode='nearest')
    high_max = maximum_filter1d(high, size=window, mode='nearest')

    sh = low == low_min
    sl = high == high_max

    # Invalidate edges
    sh[:lookback] = False
    sh[-lookback:] = False
    sl[:lookback] = False
    sl[-lookback:] = False

    return {'is_swing_high': sh, 'is_swing_low': sl}
