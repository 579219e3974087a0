from dataclasses import dataclass
from enum import IntEnum

import numpy as np
from typing import TypeAlias
from numpy.typing import NDArray

FloatArray: TypeAlias = NDArray[np.float64]
BoolArray: TypeAlias = NDArray[np.bool_]
IntArray: TypeAlias = NDArray[np.int8]


Prices      = FloatArray
ATRArray    = FloatArray       # VolatilityArray, ATR is volatility in price units

SwingsMask  = BoolArray
CategoryArray = IntArray       # Category codes, one per bar


class Category(IntEnum):
    BEARISH_ELEPHANT = 0
    BULLISH_ELEPHANT = 1
    BEARISH_TAIL = 2
    BULLISH_TAIL = 3
    BEARISH_ENGULFING = 4
    BULLISH_ENGULFING = 5
    SWING_HIGH = 6
    SWING_LOW = 7
    NONE = 8

    @property
    def is_bullish(self) -> bool:
        """Categories marked below the bar (up arrow) by a chart layer."""
        return self in _BULLISH_CATEGORIES


_BULLISH_CATEGORIES = frozenset({
    Category.BULLISH_ELEPHANT,
    Category.BULLISH_TAIL,
    Category.BULLISH_ENGULFING,
    Category.SWING_LOW,
})


@dataclass(frozen=True)
class ClassificationResult:
    index: int
    category: Category
