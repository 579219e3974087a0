# tests/metrics/test_types.py
import pytest

from triggerbar.metrics.types import Category, ClassificationResult


def test_category_codes_are_stable():
    assert [c.value for c in Category] == list(range(9))
    assert Category.NONE == 8


@pytest.mark.parametrize("category,expected", [
    (Category.BULLISH_ELEPHANT, True),
    (Category.BULLISH_TAIL, True),
    (Category.BULLISH_ENGULFING, True),
    (Category.SWING_LOW, True),
    (Category.BEARISH_ELEPHANT, False),
    (Category.BEARISH_TAIL, False),
    (Category.BEARISH_ENGULFING, False),
    (Category.SWING_HIGH, False),
    (Category.NONE, False),
])
def test_is_bullish(category, expected):
    assert category.is_bullish is expected


def test_result_equality():
    assert ClassificationResult(3, Category.SWING_HIGH) == ClassificationResult(3, Category.SWING_HIGH)
