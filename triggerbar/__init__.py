# __init__.py
"""Trigger bar detection: elephant, tail, engulfing and swing bars normalised by ATR."""

from .core.config import TriggerBarConfig
from .core.bars import Bar, BarSeries
from .core.classifier import classify_bar
from .core.swings import detect_swing_points, is_swing_high, is_swing_low
from .core.engine import ClassificationRun, classify_index, classify_range
from .core.batch import classify_bars, classify_frame
from .metrics import Category, ClassificationResult, VolatilitySeries, compute_atr, compute_true_range
from .errors import TriggerBarError, ConfigurationError, MalformedBarError

__all__ = [
    'TriggerBarConfig',
    'Bar',
    'BarSeries',
    'Category',
    'ClassificationResult',
    'VolatilitySeries',
    'classify_bar',
    'classify_index',
    'classify_range',
    'ClassificationRun',
    'classify_bars',
    'classify_frame',
    'detect_swing_points',
    'is_swing_high',
    'is_swing_low',
    'compute_atr',
    'compute_true_range',
    'TriggerBarError',
    'ConfigurationError',
    'MalformedBarError',
]
