# metrics/volatility.py
"""
Read-only per-bar volatility lookup.

The classifier never computes volatility itself; it asks a VolatilitySeries
for the value at an index and treats anything that is not a positive finite
number as "not yet available" (warm-up).
"""
from typing import Optional, Sequence, Union

import numpy as np

from .atr import compute_atr
from .types import ATRArray, Prices


class VolatilitySeries:
    """Immutable lookup of one volatility value per bar index."""

    __slots__ = ('_values',)

    def __init__(self, values: Union[Sequence[Optional[float]], ATRArray]):
        if isinstance(values, np.ndarray):
            arr = values.astype(np.float64, copy=True)
        else:
            arr = np.array([np.nan if v is None else v for v in values], dtype=np.float64)
        if arr.ndim != 1:
            raise ValueError("Volatility values must be a 1D sequence")
        arr.setflags(write=False)
        self._values = arr

    @classmethod
    def from_ohlc(
            cls,
            high: Prices,
            low: Prices,
            close: Prices,
            period: int = 14,
            smoothing: str = 'sma'
    ) -> 'VolatilitySeries':
        """Build the series from an ATR computed over OHLC arrays."""
        return cls(compute_atr(high, low, close, period=period, smoothing=smoothing))

    def __len__(self) -> int:
        return len(self._values)

    @property
    def values(self) -> ATRArray:
        return self._values

    def get(self, index: int) -> Optional[float]:
        """Return the volatility at *index*, or None while unavailable."""
        if not 0 <= index < len(self._values):
            return None
        value = float(self._values[index])
        if not np.isfinite(value) or value <= 0.0:
            return None
        return value

    def is_available(self, index: int) -> bool:
        return self.get(index) is not None
