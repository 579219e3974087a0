# metrics/__init__.py
from .atr import compute_atr, compute_true_range
from .types import Category, ClassificationResult
from .volatility import VolatilitySeries

__all__ = [
    'compute_atr',
    'compute_true_range',
    'Category',
    'ClassificationResult',
    'VolatilitySeries',
]
