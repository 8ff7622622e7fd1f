"""Pool math error classes.

These map to Balancer V2 revert conditions. The exit oracle converts them to
OracleFailure before they reach the planner.
"""


class PoolMathError(Exception):
    """Base error for stable pool math."""

    pass


class InvalidFeeError(PoolMathError):
    """Swap fee must be in range [0, 1)."""

    pass


class InvalidScalingFactorError(PoolMathError):
    """Scaling factor must be positive."""

    pass


class ZeroBalanceError(PoolMathError):
    """A pool balance is zero, or an exit would drain it."""

    pass


class TokenNotInPool(PoolMathError):
    """The requested exit token is not one of the pool's tokens."""

    pass


class StableInvariantDidNotConverge(PoolMathError):
    """Newton-Raphson iteration for stable invariant D did not converge."""

    pass


class StableGetBalanceDidNotConverge(PoolMathError):
    """Newton-Raphson iteration for stable balance Y did not converge."""

    pass
