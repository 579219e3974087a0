# test_batch.py
import numpy as np
import pandas as pd
import pytest

from triggerbar.core.batch import CATEGORY_NAMES, classify_bars, classify_frame
from triggerbar.core.bars import BarSeries
from triggerbar.core.config import TriggerBarConfig
from triggerbar.core.engine import classify_range
from triggerbar.errors import MalformedBarError
from triggerbar.metrics.atr import compute_atr
from triggerbar.metrics.types import Category


@pytest.mark.parametrize("config", [
    TriggerBarConfig(),
    TriggerBarConfig(lookback=3, elephant_min_size_atr=0.8, tail_percent_min=50.0),
    TriggerBarConfig(lookback=2, engulf_wick=True, engulfing_min_size_atr=0.5),
    TriggerBarConfig(lookback=5, confirmation_bars=8, float_allowance=2.0, tick_size=0.05,
                     engulfing_min_size_atr=0.3, detect_elephant=False, detect_tail=False),
    TriggerBarConfig(detect_swing=False, warmup_bars=0, atr_period=5),
    TriggerBarConfig(lookback=4, engulf_wick=True, float_allowance=3.0, tick_size=0.1,
                     engulfing_min_size_atr=0.3, detect_elephant=False, detect_tail=False),
])
def test_batch_matches_engine(test_data, config):
    data = test_data.ohlc_data
    atr = compute_atr(data['high'], data['low'], data['close'],
                      period=config.atr_period, smoothing=config.atr_smoothing)
    codes = classify_bars(data['open'], data['high'], data['low'], data['close'], atr, config)

    bars = BarSeries(data['open'], data['high'], data['low'], data['close'])
    expected = classify_range(bars, atr, config).categories()

    assert codes.dtype == np.int8
    np.testing.assert_array_equal(codes, expected)


def test_batch_reports_swings_on_random_walk(test_data):
    data = test_data.ohlc_data
    config = TriggerBarConfig(lookback=3)
    atr = compute_atr(data['high'], data['low'], data['close'], period=14, smoothing='sma')
    codes = classify_bars(data['open'], data['high'], data['low'], data['close'], atr, config)
    assert {Category.SWING_HIGH, Category.SWING_LOW} <= set(Category(c) for c in np.unique(codes))


def test_batch_empty_series():
    empty = np.array([], dtype=np.float64)
    codes = classify_bars(empty, empty, empty, empty, empty, TriggerBarConfig())
    assert codes.shape == (0,)


def test_batch_atr_length_mismatch():
    prices = np.array([10.0, 10.0, 10.0])
    with pytest.raises(ValueError, match="does not match"):
        classify_bars(prices, prices + 1, prices - 1, prices, np.ones(2), TriggerBarConfig())


def test_batch_rejects_malformed_bars():
    o = np.array([10.0, 12.5])
    h = np.array([11.0, 12.0])
    l = np.array([9.0, 11.0])
    c = np.array([10.5, 11.5])
    with pytest.raises(MalformedBarError):
        classify_bars(o, h, l, c, np.ones(2), TriggerBarConfig())


class TestClassifyFrame:
    def test_adds_columns(self, test_data):
        df = pd.DataFrame(test_data.ohlc_data,
                          index=pd.date_range("2024-01-01", periods=test_data.n, freq="h"))
        result = classify_frame(df, TriggerBarConfig(lookback=3))

        assert list(df.columns) == ['open', 'high', 'low', 'close']
        assert {'atr', 'bar_type', 'bar_type_code'} <= set(result.columns)
        assert result.index.equals(df.index)
        assert list(result['bar_type'].cat.categories) == CATEGORY_NAMES
        assert np.all(np.isnan(result['atr'].to_numpy()[:13]))
        assert (result['bar_type'].iloc[:14] == 'NONE').all()

    def test_codes_and_names_agree(self, test_data):
        df = pd.DataFrame(test_data.ohlc_data)
        result = classify_frame(df, TriggerBarConfig(lookback=3))
        names = [Category(code).name for code in result['bar_type_code']]
        assert names == list(result['bar_type'].astype(str))

    def test_precomputed_atr(self, test_data):
        df = pd.DataFrame(test_data.ohlc_data)
        atr = np.full(len(df), 0.5)
        result = classify_frame(df, TriggerBarConfig(warmup_bars=0), atr=atr)
        np.testing.assert_array_equal(result['atr'].to_numpy(), atr)

    def test_missing_columns(self):
        df = pd.DataFrame({'open': [1.0], 'high': [2.0], 'low': [0.5]})
        with pytest.raises(KeyError, match="Missing required columns"):
            classify_frame(df)
