# core/bars.py
"""
Immutable OHLC bar containers.

Malformed bars (NaN prices, or open/close outside [low, high]) are rejected
with MalformedBarError; they are never clamped.
"""
from dataclasses import dataclass
from typing import Iterator

import numpy as np
import pandas as pd

from triggerbar.errors import MalformedBarError
from triggerbar.metrics.types import Prices
from triggerbar.utils.logger import get_logger

log = get_logger("bars")

OHLC_COLS = ('open', 'high', 'low', 'close')


@dataclass(frozen=True)
class Bar:
    index: int
    open: float
    high: float
    low: float
    close: float

    def __post_init__(self):
        if not all(np.isfinite(v) for v in (self.open, self.high, self.low, self.close)):
            raise MalformedBarError(f"Bar {self.index} has non-finite prices")
        if not (self.low <= min(self.open, self.close) and max(self.open, self.close) <= self.high):
            raise MalformedBarError(
                f"Bar {self.index} violates low ≤ open, close ≤ high "
                f"(o={self.open}, h={self.high}, l={self.low}, c={self.close})"
            )

    @property
    def body_size(self) -> float:
        return abs(self.close - self.open)

    @property
    def range(self) -> float:
        return self.high - self.low

    @property
    def is_bullish(self) -> bool:
        return self.close > self.open


class BarSeries:
    """
    Random-access, read-only sequence of bars backed by float64 arrays.

    Indexing returns a `Bar` whose `index` is its position in the series.
    """

    __slots__ = ('open', 'high', 'low', 'close')

    def __init__(self, open: Prices, high: Prices, low: Prices, close: Prices):
        arrays = []
        for name, values in zip(OHLC_COLS, (open, high, low, close)):
            arr = np.asarray(values)
            if not np.issubdtype(arr.dtype, np.number):
                raise TypeError(f"'{name}' prices must be numeric")
            if arr.ndim != 1:
                raise ValueError(f"'{name}' prices must be a 1D array")
            arr = arr.astype(np.float64, copy=True)
            arr.setflags(write=False)
            arrays.append(arr)

        if len({len(a) for a in arrays}) != 1:
            raise ValueError("OHLC arrays must have the same length")

        self.open, self.high, self.low, self.close = arrays
        self._validate()

    def _validate(self) -> None:
        finite = (np.isfinite(self.open) & np.isfinite(self.high)
                  & np.isfinite(self.low) & np.isfinite(self.close))
        body_low = np.minimum(self.open, self.close)
        body_high = np.maximum(self.open, self.close)
        bad = ~finite | (self.low > body_low) | (body_high > self.high)
        if np.any(bad):
            idx = np.flatnonzero(bad)
            log.warning("Rejecting %d malformed bar(s), first at index %d", len(idx), idx[0])
            raise MalformedBarError(
                f"Malformed bars at indices {idx[:10].tolist()}: "
                "expected finite prices with low ≤ open, close ≤ high"
            )

    @classmethod
    def from_arrays(cls, open: Prices, high: Prices, low: Prices, close: Prices) -> 'BarSeries':
        return cls(open, high, low, close)

    @classmethod
    def from_frame(cls, df: pd.DataFrame) -> 'BarSeries':
        """Build from a DataFrame with open/high/low/close columns (any index)."""
        missing = set(OHLC_COLS) - set(df.columns)
        if missing:
            raise KeyError(f"Missing required columns: {missing}")
        return cls(*(df[col].to_numpy() for col in OHLC_COLS))

    def __len__(self) -> int:
        return len(self.close)

    def __getitem__(self, index: int) -> Bar:
        if not 0 <= index < len(self):
            raise IndexError(f"Bar index {index} out of range [0, {len(self)})")
        return Bar(
            index=index,
            open=float(self.open[index]),
            high=float(self.high[index]),
            low=float(self.low[index]),
            close=float(self.close[index]),
        )

    def __iter__(self) -> Iterator[Bar]:
        for i in range(len(self)):
            yield self[i]
