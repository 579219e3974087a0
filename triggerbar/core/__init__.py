from .bars import Bar, BarSeries
from .classifier import classify_bar
from .swings import detect_swing_points, is_swing_high, is_swing_low
from .engine import ClassificationRun, classify_index, classify_range
from .batch import classify_bars, classify_frame
from .config import TriggerBarConfig

__all__ = [
    # Data containers
    "Bar",
    "BarSeries",

    # Classification
    "classify_bar",
    "classify_index",
    "classify_range",
    "ClassificationRun",
    "classify_bars",
    "classify_frame",

    # Swing detection
    "detect_swing_points",
    "is_swing_high",
    "is_swing_low",

    # Configuration
    "TriggerBarConfig",
]
