# core/config.py
import math
import numbers
from dataclasses import dataclass, fields
from typing import Any, Mapping

from triggerbar.errors import ConfigurationError

ATR_SMOOTHING_MODES = ('sma', 'wilder')


@dataclass(frozen=True)
class TriggerBarConfig:
    """
    Immutable configuration for trigger bar classification.

    Size thresholds are multiples of the bar's volatility value (ATR),
    percentages are expressed in [0, 100].
    """

    # --- RULE TOGGLES ---
    detect_elephant: bool = True
    detect_tail: bool = True
    detect_engulfing: bool = True
    detect_swing: bool = True

    # --- ELEPHANT BARS ---
    elephant_min_size_atr: float = 1.3
    elephant_body_percent_min: float = 70.0

    # --- TAIL BARS ---
    tail_min_size_atr: float = 1.0
    tail_percent_min: float = 75.0

    # --- ENGULFING BARS ---
    engulfing_min_size_atr: float = 1.0
    engulf_wick: bool = False
    float_allowance: float = 0.0     # ticks
    tick_size: float = 1.0

    # --- SWING HIGH/LOW ---
    lookback: int = 10
    confirmation_bars: int = 1

    # --- VOLATILITY ---
    warmup_bars: int = 14
    atr_period: int = 14
    atr_smoothing: str = 'sma'

    def __post_init__(self):
        """Validate configuration."""
        # Size thresholds
        for name in ('elephant_min_size_atr', 'tail_min_size_atr', 'engulfing_min_size_atr'):
            value = getattr(self, name)
            if not math.isfinite(value) or value < 0:
                raise ConfigurationError(f"{name} must be a finite value ≥ 0")

        # Percentages
        for name in ('elephant_body_percent_min', 'tail_percent_min'):
            if not 0.0 <= getattr(self, name) <= 100.0:
                raise ConfigurationError(f"{name} must be between 0 and 100")

        # Engulfing allowance
        if not 0.0 <= self.float_allowance <= 10.0:
            raise ConfigurationError("float_allowance must be between 0 and 10 ticks")
        if not math.isfinite(self.tick_size) or self.tick_size <= 0:
            raise ConfigurationError("tick_size must be > 0")

        # Integer counts
        for name in ('lookback', 'confirmation_bars', 'warmup_bars', 'atr_period'):
            value = getattr(self, name)
            if isinstance(value, bool) or not isinstance(value, numbers.Integral):
                raise ConfigurationError(f"{name} must be an integer")

        # Swing window
        if not 1 <= self.lookback <= 50:
            raise ConfigurationError("lookback must be between 1 and 50")
        if self.confirmation_bars < 1:
            raise ConfigurationError("confirmation_bars must be ≥ 1")

        # Volatility
        if self.warmup_bars < 0:
            raise ConfigurationError("warmup_bars must be ≥ 0")
        if not 1 <= self.atr_period <= 999:
            raise ConfigurationError("atr_period must be between 1 and 999")
        if self.atr_smoothing not in ATR_SMOOTHING_MODES:
            raise ConfigurationError(f"atr_smoothing must be one of {ATR_SMOOTHING_MODES}")

    @property
    def engulf_allowance(self) -> float:
        """Float allowance converted from ticks to price units."""
        return self.float_allowance * self.tick_size

    @classmethod
    def from_mapping(cls, params: Mapping[str, Any]) -> 'TriggerBarConfig':
        """Build a config from plain parameters, rejecting unknown keys."""
        known = {f.name for f in fields(cls)}
        unknown = set(params) - known
        if unknown:
            raise ConfigurationError(f"Unknown configuration keys: {sorted(unknown)}")
        return cls(**params)
