"""Adapter error classes.

Planning either returns a complete plan or raises; these are the failures a
caller can see.
"""


class AdapterError(Exception):
    """Base error for the liquidity adapter."""

    pass


class OracleFailure(AdapterError):
    """A curve-math quote or balance query failed.

    Raised by oracles and position sources, propagated by the planner
    unchanged. Planning is aborted and no instructions are returned.
    """

    pass


class InsufficientLiquidity(OracleFailure):
    """The pool cannot serve the requested exit (zero or exhausted balance)."""

    pass


class ConfigError(AdapterError, ValueError):
    """Invalid adapter configuration."""

    pass
