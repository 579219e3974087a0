"""
Shared test fixtures and configurations.
"""
import numpy as np
import pytest
from typing import Dict, Sequence, Tuple
from dataclasses import dataclass

from triggerbar.core.bars import BarSeries


def make_bars(rows: Sequence[Tuple[float, float, float, float]]) -> BarSeries:
    """Build a BarSeries from (open, high, low, close) tuples."""
    arr = np.array(rows, dtype=np.float64).reshape(-1, 4)
    return BarSeries(arr[:, 0], arr[:, 1], arr[:, 2], arr[:, 3])


def flat_bars(n: int, price: float = 100.0, half_range: float = 0.5) -> BarSeries:
    """Identical small doji-like bars; nothing but swings can fire on them."""
    return make_bars([(price, price + half_range, price - half_range, price)] * n)


@dataclass
class TestData:
    """Container for test data."""
    n: int = 200
    seed: int = 42

    def __post_init__(self):
        self.rng = np.random.default_rng(self.seed)

    @property
    def random_prices(self) -> np.ndarray:
        """Random walk prices."""
        returns = self.rng.normal(0.0, 0.01, self.n)
        return 100 * np.exp(np.cumsum(returns))

    @property
    def ohlc_data(self) -> Dict[str, np.ndarray]:
        """Realistic OHLC data satisfying low ≤ open, close ≤ high."""
        close = self.random_prices
        open_price = np.roll(close, 1) + self.rng.normal(0, 0.3, self.n)
        open_price[0] = close[0]
        high = np.maximum(open_price, close) + np.abs(self.rng.normal(0.4, 0.3, self.n))
        low = np.minimum(open_price, close) - np.abs(self.rng.normal(0.4, 0.3, self.n))
        return {'open': open_price, 'high': high, 'low': low, 'close': close}


# Global test data fixture
@pytest.fixture
def test_data() -> TestData:
    return TestData()


@pytest.fixture
def edge_cases() -> Dict[str, np.ndarray]:
    return {
        'empty': np.array([], dtype=np.float64),
        'single': np.array([100.0]),
        'two_elements': np.array([100.0, 101.0]),
        'all_nan': np.full(10, np.nan),
        'all_same': np.full(10, 100.0),
    }
