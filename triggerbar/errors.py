# errors.py
"""Exception hierarchy for trigger bar classification."""


class TriggerBarError(Exception):
    """Base class for all errors raised by triggerbar."""


class ConfigurationError(TriggerBarError, ValueError):
    """A configuration value is out of its valid range."""


class MalformedBarError(TriggerBarError, ValueError):
    """A bar violates low <= open, close <= high or holds non-finite prices."""
